import logging

from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required, login_user, logout_user
from flask_wtf.csrf import generate_csrf

from app.extensions import db
from app.models import User
from app.services.codeforces_service import CodeforcesService, ServiceError

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')


def _requested_handle() -> str:
    data = request.get_json(silent=True) or {}
    return (data.get('handle') or request.form.get('handle') or '').strip()


@auth_bp.route('/csrf-token')
def csrf_token():
    return jsonify({'csrf_token': generate_csrf()})


@auth_bp.route('/login', methods=['POST'])
def login():
    handle = _requested_handle()
    if not handle:
        return jsonify({'error': 'Handle is required'}), 400

    try:
        profile = CodeforcesService().get_user_profile(handle)
    except ServiceError as e:
        logger.info(f"Login failed for {handle}: {e}")
        return jsonify({'error': str(e)}), 502

    user = db.session.get(User, profile.handle)
    if user is None:
        return jsonify({'error': 'Failed to login'}), 500
    login_user(user, remember=True)
    logger.info(f"Login success for {profile.handle}")
    return jsonify({'logged_in': True, 'handle': profile.handle, 'profile': profile.to_dict()})


@auth_bp.route('/logout')
@login_required
def logout():
    handle = current_user.handle
    logout_user()
    logger.info(f"Logout for {handle}")
    return jsonify({'logged_in': False})


@auth_bp.route('/status')
def status():
    if current_user.is_authenticated:
        return jsonify({'logged_in': True, 'handle': current_user.handle})
    return jsonify({'logged_in': False, 'handle': None})
