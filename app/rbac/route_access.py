"""
Route-to-role mapping used by the navigation guard
"""
from types import MappingProxyType

from app.rbac.models import as_user_record
from app.rbac.roles import Role

_ALL_ROLES = frozenset(Role)

# Scanned in order, the first matching prefix decides. Do not reorder.
ROUTE_ACCESS: tuple[tuple[str, frozenset[Role]], ...] = (
    ('/admin', frozenset({Role.ADMIN})),
    ('/instructor', frozenset({Role.INSTRUCTOR, Role.ADMIN})),
    ('/partner-instructor', frozenset({Role.PARTNER_INSTRUCTOR, Role.ADMIN})),
    ('/student', _ALL_ROLES),
    ('/dashboard', _ALL_ROLES),
    ('/courses', _ALL_ROLES),
    ('/analytics', frozenset({Role.INSTRUCTOR, Role.ADMIN})),
    ('/settings', frozenset({Role.ADMIN})),
)

LOGIN_ROUTE = '/login'
FALLBACK_HOME_ROUTE = '/student/dashboard'

HOME_ROUTES = MappingProxyType({
    Role.ADMIN: '/admin/analytics',
    Role.INSTRUCTOR: '/instructor/analytics',
    Role.PARTNER_INSTRUCTOR: '/partner-instructor',
    Role.STUDENT: '/student/analytics',
})


def match_route(path: str):
    """Return the (prefix, roles) entry governing a path, or None if unlisted"""
    if not isinstance(path, str):
        return None
    for prefix, allowed_roles in ROUTE_ACCESS:
        if path.startswith(prefix):
            return prefix, allowed_roles
    return None


def can_access_route(user, path: str) -> bool:
    """
    Check if user can access a specific route.

    Paths that match no entry in ROUTE_ACCESS are open to any user with a
    recognised role.

    Args:
        user: UserRecord, user document mapping or None
        path: Requested path

    Returns:
        True if access is allowed, False otherwise
    """
    record = as_user_record(user)
    if record is None or record.role is None:
        return False
    if not isinstance(path, str):
        return False

    entry = match_route(path)
    if entry is None:
        return True

    _, allowed_roles = entry
    return record.role in allowed_roles


def get_user_home_route(user) -> str:
    """Landing page for a user after sign in"""
    record = as_user_record(user)
    if record is None:
        return LOGIN_ROUTE
    if record.role is None:
        # an unrecognised role string still counts as signed in
        return FALLBACK_HOME_ROUTE if record.role_claim else LOGIN_ROUTE
    return HOME_ROUTES[record.role]
