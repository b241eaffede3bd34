"""
Template helper functions for RBAC
These functions can be used in Jinja2 templates to conditionally show/hide UI elements
"""
from app.rbac.context import get_current_user
from app.rbac.permissions import (
    get_ui_features_for_user,
    has_any_permission,
    has_permission,
    has_role,
)
from app.rbac.roles import get_role_display_name
from app.rbac.route_access import can_access_route


def get_current_user_role() -> str:
    """Get current user's role for templates, '' when signed out"""
    user = get_current_user()
    if user is None or user.role is None:
        return ''
    return user.role.value


def user_has_role(role) -> bool:
    return has_role(get_current_user(), role)


def user_can(permission) -> bool:
    """Check if current user holds a permission"""
    return has_permission(get_current_user(), permission)


def user_can_any(*permissions) -> bool:
    return has_any_permission(get_current_user(), permissions)


def user_can_access(path: str) -> bool:
    """Check if a navigation link should be shown"""
    return can_access_route(get_current_user(), path)


def current_role_display_name() -> str:
    return get_role_display_name(get_current_user_role())


def get_role_based_features() -> dict:
    """
    Get all role-based UI features for the current user.
    Returns a dictionary with feature visibility flags.
    """
    return get_ui_features_for_user(get_current_user())


# Dictionary of all template helpers for easy registration
TEMPLATE_HELPERS = {
    'user_role': get_current_user_role,
    'has_role': user_has_role,
    'can': user_can,
    'can_any': user_can_any,
    'can_access': user_can_access,
    'role_display_name': current_role_display_name,
    'rbac_features': get_role_based_features,
}
