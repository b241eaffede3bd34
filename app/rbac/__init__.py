"""
RBAC (Role-Based Access Control) module for the LMS dashboards

This module provides role-based access control functionality with support for:
- Student: Can browse and enroll in courses, submit assessments, track progress
- Partner Instructor: Mentors assigned students; permissions set per user
- Instructor: Can create and manage courses, assessments and partner instructors
- Admin: Can access everything

The decision functions are pure and fail closed: a missing or unrecognised
role, or malformed permission data, yields False rather than an exception.
"""

from app.rbac.roles import Role, get_role_hierarchy, get_role_display_name, get_role_description
from app.rbac.models import UserRecord, as_user_record
from app.rbac.permissions import (
    Permissions,
    DEFAULT_ROLE_PERMISSIONS,
    PARTNER_INSTRUCTOR_PERMISSIONS,
    get_default_permissions,
    get_default_partner_instructor_overrides,
    validate_partner_instructor_permissions,
    has_role,
    has_permission,
    has_any_permission,
    has_all_permissions,
    get_ui_features_for_user,
)
from app.rbac.route_access import ROUTE_ACCESS, can_access_route, get_user_home_route
from app.rbac.management import is_valid_role_change, can_manage_user

__all__ = [
    'Role',
    'Permissions',
    'UserRecord',
    'as_user_record',
    'DEFAULT_ROLE_PERMISSIONS',
    'PARTNER_INSTRUCTOR_PERMISSIONS',
    'ROUTE_ACCESS',
    'get_default_permissions',
    'get_default_partner_instructor_overrides',
    'validate_partner_instructor_permissions',
    'get_role_hierarchy',
    'get_role_display_name',
    'get_role_description',
    'has_role',
    'has_permission',
    'has_any_permission',
    'has_all_permissions',
    'get_ui_features_for_user',
    'can_access_route',
    'get_user_home_route',
    'is_valid_role_change',
    'can_manage_user',
]
