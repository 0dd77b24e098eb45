import logging
from apscheduler.schedulers.background import BackgroundScheduler
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)
scheduler = BackgroundScheduler()


def refresh_cached_users(app):
    """Refresh cached submissions for every known handle. Returns (ok, failed)."""
    with app.app_context():
        from app.extensions import db
        from app.models import User
        from app.services.codeforces_service import CodeforcesService, ServiceError

        service = CodeforcesService()
        handles = [user.handle for user in User.query.all()]
        refreshed = 0
        failed = 0
        for handle in handles:
            try:
                written = service.refresh_submissions(handle)
                refreshed += 1
                logger.debug(f"Refreshed {written} submissions for {handle}")
            except ServiceError as e:
                failed += 1
                logger.error(f"Refresh failed for {handle}: {e}")
            except SQLAlchemyError as e:
                db.session.rollback()
                failed += 1
                logger.error(f"Refresh failed for {handle}: {e}")
        logger.info(
            f"Scheduled refresh completed: refreshed={refreshed}, failed={failed}"
        )
        return refreshed, failed


def init_scheduler(app):
    """Initialize and start the scheduler with app context."""
    if not app.config.get('SCHEDULER_ENABLED', False):
        logger.info("Scheduler disabled by config")
        return

    hours = app.config.get('REFRESH_INTERVAL_HOURS', 6)
    scheduler.add_job(
        refresh_cached_users, 'interval', hours=hours,
        id='refresh_submissions', args=[app], replace_existing=True,
    )

    try:
        scheduler.start()
        logger.info("Scheduler started successfully")
    except Exception as e:
        logger.error(f"Scheduler failed to start: {e}")
