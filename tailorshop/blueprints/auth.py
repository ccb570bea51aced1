from flask import Blueprint, current_app, jsonify, session

from tailorshop.middleware import get_storage, get_store, is_logged_in, json_body
from tailorshop.services import auth_service

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')


@auth_bp.route('/login', methods=['POST'])
def login():
    """
    Log in with the shop account.

    The login lives in this client's session cookie. ``remember`` makes the
    cookie permanent (PERMANENT_SESSION_LIFETIME) instead of ending with
    the browser session.
    """
    data = json_body()
    remember = bool(data.get('remember'))
    auth_service.login(
        get_store(),
        get_storage(),
        current_app.config,
        data.get('username', ''),
        data.get('password', ''),
        remember=remember,
    )

    session.clear()
    session['authenticated'] = True
    session.permanent = remember
    return jsonify({'status': 'ok', 'isAuthenticated': True})


@auth_bp.route('/logout', methods=['POST'])
def logout():
    auth_service.logout(get_store(), get_storage(), current_app.config)
    session.clear()
    return jsonify({'status': 'ok', 'isAuthenticated': False})


@auth_bp.route('/status', methods=['GET'])
def status():
    return jsonify({'isAuthenticated': is_logged_in()})
