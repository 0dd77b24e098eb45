import logging

from flask import Blueprint, jsonify
from flask_login import current_user, login_required

from app.analysis.skill import Tier
from app.services.codeforces_service import CodeforcesService, ServiceError

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__, url_prefix='/api')


@api_bp.errorhandler(ServiceError)
def handle_service_error(e):
    return jsonify({'error': str(e)}), 502


@api_bp.route('/me')
@login_required
def me():
    user_profile = CodeforcesService().get_user_profile(current_user.handle)
    return jsonify(user_profile.to_dict())


@api_bp.route('/profile/<handle>')
def profile(handle):
    user_profile = CodeforcesService().get_user_profile(handle)
    return jsonify(user_profile.to_dict())


@api_bp.route('/weak-areas/<handle>')
def weak_areas(handle):
    areas = CodeforcesService().get_weak_areas(handle)
    return jsonify({
        'handle': handle,
        'weak_areas': [w.to_dict() for w in areas],
    })


@api_bp.route('/recommendations/<handle>')
def recommendations(handle):
    service = CodeforcesService()
    weak_tags = [w.tag for w in service.get_weak_areas(handle)]
    problems = service.get_recommended_problems(handle, weak_tags)
    logger.info(f"Recommendations for {handle}: {len(problems)} problems")
    return jsonify({
        'handle': handle,
        'weak_tags': weak_tags,
        'problems': [p.to_dict() for p in problems],
    })


@api_bp.route('/problems/<skill_level>')
def problems(skill_level):
    if Tier.from_skill_level(skill_level) is None:
        return jsonify({'error': f'Unknown skill level: {skill_level}'}), 404
    items = CodeforcesService.get_local_problems(skill_level.lower())
    return jsonify({
        'skill_level': skill_level.lower(),
        'problems': [p.to_dict() for p in items],
    })


@api_bp.route('/problems/<int:contest_id>/<index>/solved')
def problem_solved(contest_id, index):
    return jsonify({
        'contest_id': contest_id,
        'index': index,
        'solved': CodeforcesService.is_problem_solved(contest_id, index),
    })
