"""
Permission definitions for RBAC system

Each role has a default set of permissions. Partner instructors usually carry
a per-user override map which replaces their defaults entirely. Admins hold
every permission no matter what.
"""
from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Optional

from app.rbac.models import as_user_record
from app.rbac.roles import Role


class Permissions(str, Enum):
    """Available permissions in the system"""
    # Student permissions
    VIEW_COURSES = "view_courses"
    ENROLL_COURSES = "enroll_courses"
    SUBMIT_ASSESSMENTS = "submit_assessments"
    VIEW_OWN_PROGRESS = "view_own_progress"
    VIEW_OWN_GRADES = "view_own_grades"

    # Partner instructor (mentor) permissions
    VIEW_ASSIGNED_COURSES = "view_assigned_courses"
    VIEW_ASSIGNED_STUDENTS = "view_assigned_students"
    GRADE_ASSIGNED_ASSESSMENTS = "grade_assigned_assessments"
    PROVIDE_FEEDBACK = "provide_feedback"
    SEND_MESSAGES = "send_messages"
    CREATE_ANNOUNCEMENTS = "create_announcements"
    VIEW_COURSE_CONTENT = "view_course_content"

    # Instructor permissions
    CREATE_COURSES = "create_courses"
    EDIT_OWN_COURSES = "edit_own_courses"
    DELETE_OWN_COURSES = "delete_own_courses"
    VIEW_ALL_STUDENTS = "view_all_students"
    VIEW_STUDENT_PROGRESS = "view_student_progress"
    CREATE_ASSESSMENTS = "create_assessments"
    GRADE_ALL_ASSESSMENTS = "grade_all_assessments"
    MANAGE_PARTNER_INSTRUCTORS = "manage_partner_instructors"
    VIEW_COURSE_ANALYTICS = "view_course_analytics"
    MANAGE_ENROLLMENTS = "manage_enrollments"
    UPLOAD_MATERIALS = "upload_materials"
    ASSIGN_PARTNER_INSTRUCTORS = "assign_partner_instructors"

    # Admin permissions
    MANAGE_USERS = "manage_users"
    MANAGE_ROLES = "manage_roles"
    MANAGE_ALL_COURSES = "manage_all_courses"
    MANAGE_ALL_ASSESSMENTS = "manage_all_assessments"
    VIEW_PLATFORM_ANALYTICS = "view_platform_analytics"
    MANAGE_SYSTEM_SETTINGS = "manage_system_settings"
    MANAGE_DEVICE_RESTRICTIONS = "manage_device_restrictions"
    MANAGE_GUEST_ACCOUNTS = "manage_guest_accounts"
    OVERRIDE_RESTRICTIONS = "override_restrictions"
    VIEW_AUDIT_LOGS = "view_audit_logs"

    def __str__(self):
        return self.value

    @classmethod
    def from_string(cls, permission_str) -> Optional['Permissions']:
        """Convert string to Permissions enum, None if unknown"""
        if isinstance(permission_str, cls):
            return permission_str
        if not isinstance(permission_str, str):
            return None
        try:
            return cls(permission_str)
        except ValueError:
            return None


# Default permissions for each role. Enumerated per role on purpose, these
# are not derived from ROLE_HIERARCHY.
DEFAULT_ROLE_PERMISSIONS: Mapping[Role, FrozenSet[Permissions]] = MappingProxyType({
    Role.STUDENT: frozenset({
        Permissions.VIEW_COURSES,
        Permissions.ENROLL_COURSES,
        Permissions.SUBMIT_ASSESSMENTS,
        Permissions.VIEW_OWN_PROGRESS,
        Permissions.VIEW_OWN_GRADES,
    }),

    Role.PARTNER_INSTRUCTOR: frozenset({
        Permissions.VIEW_COURSES,
        Permissions.VIEW_COURSE_CONTENT,
        Permissions.VIEW_ASSIGNED_COURSES,
        Permissions.VIEW_ASSIGNED_STUDENTS,
        Permissions.GRADE_ASSIGNED_ASSESSMENTS,
        Permissions.PROVIDE_FEEDBACK,
        Permissions.SEND_MESSAGES,
        Permissions.CREATE_ANNOUNCEMENTS,
    }),

    Role.INSTRUCTOR: frozenset({
        # Student permissions (without view_own_grades)
        Permissions.VIEW_COURSES,
        Permissions.ENROLL_COURSES,
        Permissions.SUBMIT_ASSESSMENTS,
        Permissions.VIEW_OWN_PROGRESS,

        # Partner instructor permissions (without view_assigned_courses)
        Permissions.VIEW_COURSE_CONTENT,
        Permissions.VIEW_ASSIGNED_STUDENTS,
        Permissions.GRADE_ASSIGNED_ASSESSMENTS,
        Permissions.PROVIDE_FEEDBACK,
        Permissions.SEND_MESSAGES,
        Permissions.CREATE_ANNOUNCEMENTS,

        # Instructor specific
        Permissions.CREATE_COURSES,
        Permissions.EDIT_OWN_COURSES,
        Permissions.DELETE_OWN_COURSES,
        Permissions.VIEW_ALL_STUDENTS,
        Permissions.VIEW_STUDENT_PROGRESS,
        Permissions.CREATE_ASSESSMENTS,
        Permissions.GRADE_ALL_ASSESSMENTS,
        Permissions.MANAGE_PARTNER_INSTRUCTORS,
        Permissions.VIEW_COURSE_ANALYTICS,
        Permissions.MANAGE_ENROLLMENTS,
        Permissions.UPLOAD_MATERIALS,
        Permissions.ASSIGN_PARTNER_INSTRUCTORS,
    }),

    # Admin has all permissions
    Role.ADMIN: frozenset(Permissions),
})

# Permissions an instructor may toggle on a partner instructor
PARTNER_INSTRUCTOR_PERMISSIONS: tuple[Permissions, ...] = (
    Permissions.VIEW_ASSIGNED_COURSES,
    Permissions.VIEW_ASSIGNED_STUDENTS,
    Permissions.GRADE_ASSIGNED_ASSESSMENTS,
    Permissions.PROVIDE_FEEDBACK,
    Permissions.SEND_MESSAGES,
    Permissions.CREATE_ANNOUNCEMENTS,
    Permissions.VIEW_COURSE_CONTENT,
)

PERMISSION_LABELS = MappingProxyType({
    Permissions.VIEW_ASSIGNED_COURSES: "View Assigned Courses",
    Permissions.VIEW_ASSIGNED_STUDENTS: "View Assigned Students",
    Permissions.GRADE_ASSIGNED_ASSESSMENTS: "Grade Assignments",
    Permissions.PROVIDE_FEEDBACK: "Provide Feedback",
    Permissions.SEND_MESSAGES: "Send Messages",
    Permissions.CREATE_ANNOUNCEMENTS: "Create Announcements",
    Permissions.VIEW_COURSE_CONTENT: "View Course Content",
})


def get_default_permissions(role: Role | str) -> FrozenSet[Permissions]:
    """
    Get the default permissions for a given role.

    Args:
        role: Role enum or role string

    Returns:
        Frozen set of permissions, empty for an unrecognised role
    """
    role_enum = Role.from_string(role)
    if role_enum is None:
        return frozenset()
    return DEFAULT_ROLE_PERMISSIONS[role_enum]


def get_default_partner_instructor_overrides() -> dict[str, bool]:
    """Override map given to a user entering the partner instructor role"""
    return {permission.value: True for permission in PARTNER_INSTRUCTOR_PERMISSIONS}


def validate_partner_instructor_permissions(overrides) -> bool:
    """
    Check that an override map only names partner instructor permissions.

    Args:
        overrides: Mapping of permission string to bool

    Returns:
        False if overrides is not a mapping or names any other permission
    """
    if not isinstance(overrides, Mapping):
        return False

    valid = {permission.value for permission in PARTNER_INSTRUCTOR_PERMISSIONS}
    return all(key in valid for key in overrides)


def has_role(user, role: Role | str) -> bool:
    """Check if user has exactly this role (no hierarchy)"""
    record = as_user_record(user)
    if record is None or record.role is None:
        return False
    return record.role == Role.from_string(role)


def has_permission(user, permission: Permissions | str) -> bool:
    """
    Check if a user holds a specific permission.

    Args:
        user: UserRecord, user document mapping or None
        permission: Permission enum or permission string

    Returns:
        True if the user holds the permission, False otherwise
    """
    record = as_user_record(user)
    if record is None or record.role is None:
        return False

    # Admins have all permissions
    if record.role == Role.ADMIN:
        return True

    permission_enum = Permissions.from_string(permission)
    if permission_enum is None:
        return False

    # An override map replaces the role defaults, it is not merged
    if record.permission_overrides is not None:
        return record.permission_overrides.get(permission_enum.value) is True

    return permission_enum in DEFAULT_ROLE_PERMISSIONS[record.role]


def has_any_permission(user, permissions: Iterable[Permissions | str]) -> bool:
    """True if the user holds at least one of the permissions"""
    return any(has_permission(user, permission) for permission in permissions)


def has_all_permissions(user, permissions: Iterable[Permissions | str]) -> bool:
    """True if the user holds every permission; True for an empty list"""
    return all(has_permission(user, permission) for permission in permissions)


def get_permissions_for_user(user) -> FrozenSet[Permissions]:
    """Effective permission set of a user after overrides are applied"""
    return frozenset(p for p in Permissions if has_permission(user, p))


def get_ui_features_for_user(user) -> dict[str, bool]:
    """
    Get UI features visibility for a user.
    This is used to determine what UI elements to show/hide.

    Args:
        user: UserRecord, user document mapping or None

    Returns:
        Dictionary mapping feature names to visibility boolean
    """
    perms = get_permissions_for_user(user)

    return {
        'browse_courses': Permissions.VIEW_COURSES in perms,
        'my_progress': Permissions.VIEW_OWN_PROGRESS in perms,
        'assigned_students': Permissions.VIEW_ASSIGNED_STUDENTS in perms,
        'grade_assessments': (
            Permissions.GRADE_ASSIGNED_ASSESSMENTS in perms
            or Permissions.GRADE_ALL_ASSESSMENTS in perms
        ),
        'announcements': Permissions.CREATE_ANNOUNCEMENTS in perms,
        'create_courses': Permissions.CREATE_COURSES in perms,
        'manage_partner_instructors': Permissions.MANAGE_PARTNER_INSTRUCTORS in perms,
        'course_analytics': Permissions.VIEW_COURSE_ANALYTICS in perms,
        'manage_users': Permissions.MANAGE_USERS in perms,
        'platform_analytics': Permissions.VIEW_PLATFORM_ANALYTICS in perms,
        'system_settings': Permissions.MANAGE_SYSTEM_SETTINGS in perms,
    }
