"""
Session endpoints.

Credentials are verified by the external identity provider, which hands
the browser a signed token (HS256 JWT whose ``sub`` is the user id).
/login checks that token and binds the user id to the Flask session.
Signing in with a bare ``user_id`` is only accepted when ALLOW_ID_SIGN_IN
is enabled, which the testing config does.
"""
from flask import Blueprint, current_app, request, session, redirect, url_for, jsonify
import jwt
import logging

from app.rbac.context import get_current_user, get_user_store
from app.rbac.route_access import get_user_home_route

logger = logging.getLogger(__name__)
bp = Blueprint('auth', __name__)


def _bearer_token():
    header = request.headers.get('Authorization', '')
    if header.startswith('Bearer '):
        return header[len('Bearer '):].strip() or None
    return None


def verify_identity_token(token):
    """Return the user id a valid identity token was issued for, or None"""
    secret = current_app.config.get('IDENTITY_TOKEN_SECRET')
    if not secret:
        logger.warning("Identity token received but IDENTITY_TOKEN_SECRET is not configured")
        return None
    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=[current_app.config.get('IDENTITY_TOKEN_ALGORITHM', 'HS256')],
            options={'require': ['sub', 'exp']},
        )
    except jwt.InvalidTokenError as e:
        logger.info(f"Rejected identity token: {str(e)}")
        return None
    return claims['sub']


@bp.route('/login', methods=['GET', 'POST'])
def login():
    if request.method == 'GET':
        return jsonify({'logged_in': get_current_user() is not None})

    data = request.get_json(silent=True) or request.form
    token = data.get('id_token') or _bearer_token()
    if token:
        user_id = verify_identity_token(token)
    elif current_app.config.get('ALLOW_ID_SIGN_IN'):
        user_id = data.get('user_id')
    else:
        user_id = None
    user = get_user_store().get(user_id) if user_id else None

    if user is None or user.suspended:
        logger.info(f"Rejected sign in for user {user_id}")
        return jsonify({'success': False, 'error': 'Invalid credentials'}), 401

    session.clear()
    session['user_id'] = str(user.id)
    session.permanent = True

    home = get_user_home_route(user)
    if request.is_json:
        return jsonify({'success': True, 'redirect_url': home})
    return redirect(home)


@bp.route('/logout', methods=['GET', 'POST'])
def logout():
    session.clear()
    login_url = url_for('auth.login')
    # Handle AJAX requests differently
    if request.headers.get('X-Requested-With') == 'XMLHttpRequest':
        return jsonify({
            'success': True,
            'redirect_url': login_url
        }), 200
    response = redirect(login_url)
    response.headers['Cache-Control'] = 'no-store, no-cache, must-revalidate'
    response.headers['Pragma'] = 'no-cache'
    response.headers['Expires'] = '0'
    return response


@bp.route('/check_session')
def check_session():
    user = get_current_user()
    if user is not None:
        return {'logged_in': True, 'role': user.role.value if user.role else None}
    return {'logged_in': False}, 401
