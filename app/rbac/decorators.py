"""
RBAC decorators and navigation guard for route protection
"""
from functools import wraps
from flask import current_app, jsonify, redirect, request, session
import logging

from app.rbac.context import get_current_user
from app.rbac.permissions import Permissions, has_all_permissions, has_any_permission
from app.rbac.roles import Role
from app.rbac.route_access import can_access_route, get_user_home_route, match_route

logger = logging.getLogger(__name__)


def _wants_json():
    return request.is_json or request.headers.get('Content-Type') == 'application/json'


def _login_response():
    if _wants_json():
        return jsonify({'error': 'Login required'}), 401
    return redirect(current_app.config.get('LOGIN_ROUTE', '/login'))


def _forbidden_response(user, message):
    home = get_user_home_route(user)
    # a home the user cannot reach would redirect forever
    if _wants_json() or not can_access_route(user, home):
        return jsonify({'error': message}), 403
    return redirect(home)


def login_required(f):
    """Decorator to require a signed in, non-suspended user."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if get_current_user() is None:
            logger.info("Unauthorized access attempt - redirecting to login")
            return _login_response()
        return f(*args, **kwargs)
    return decorated_function


def role_required(*required_roles: Role | str):
    """
    Decorator to require one of the given roles for routes.
    Admins pass every role check.

    Example:
        @role_required(Role.INSTRUCTOR, Role.PARTNER_INSTRUCTOR)
        def grading_queue():
            ...
    """
    allowed = {Role.from_string(role) for role in required_roles} - {None}

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user = get_current_user()
            if user is None:
                logger.info("Unauthorized access attempt - redirecting to login")
                return _login_response()

            if user.role == Role.ADMIN or user.role in allowed:
                return f(*args, **kwargs)

            logger.info(f"User {session.get('user_id')} with role {user.role} attempted to access "
                        f"route restricted to {sorted(r.value for r in allowed)}")
            return _forbidden_response(user, 'Insufficient role')
        return decorated_function
    return decorator


def permission_required(*permissions: Permissions | str, require_all: bool = True):
    """
    Decorator to require permissions for routes.

    Args:
        permissions: Permission enums or strings
        require_all: If False, holding any one of them is enough

    Example:
        @permission_required(Permissions.MANAGE_USERS)
        def list_users():
            ...
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user = get_current_user()
            if user is None:
                logger.info("Unauthorized access attempt - redirecting to login")
                return _login_response()

            check = has_all_permissions if require_all else has_any_permission
            if not check(user, permissions):
                logger.info(f"User {session.get('user_id')} with role {user.role} attempted to access "
                            f"route requiring {[str(p) for p in permissions]}")
                return _forbidden_response(user, 'Insufficient permissions')
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def navigation_guard():
    """
    before_request hook checking request.path against the route table.

    Paths not listed in the table are left to the view's own decorators.
    Returns a response to short-circuit the request, or None to continue.
    """
    # CORS preflight carries no session
    if request.method == 'OPTIONS' or match_route(request.path) is None:
        return None

    user = get_current_user()
    if user is None:
        logger.info(f"Unauthenticated request to protected path {request.path}")
        return _login_response()

    if not can_access_route(user, request.path):
        logger.info(f"User {session.get('user_id')} with role {user.role} denied access to {request.path}")
        return _forbidden_response(user, 'Access denied')

    return None
