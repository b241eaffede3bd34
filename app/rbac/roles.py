"""
Role definitions for RBAC system
"""
from enum import Enum
from types import MappingProxyType
from typing import Optional


class Role(str, Enum):
    """User roles in the system"""
    STUDENT = "student"
    PARTNER_INSTRUCTOR = "partner_instructor"
    INSTRUCTOR = "instructor"
    ADMIN = "admin"

    def __str__(self):
        return self.value

    @classmethod
    def from_string(cls, role_str) -> Optional['Role']:
        """
        Convert string to Role enum.

        Matching is exact: 'Admin' or ' admin' is not a role. Returns None
        for anything unrecognised so callers can deny.
        """
        if isinstance(role_str, cls):
            return role_str
        if not isinstance(role_str, str):
            return None
        for role in cls:
            if role.value == role_str:
                return role
        return None

    @classmethod
    def is_valid(cls, role_str) -> bool:
        """Check if a string is a valid role"""
        return cls.from_string(role_str) is not None

    @classmethod
    def get_all(cls) -> list[str]:
        """Get all role values as strings"""
        return [role.value for role in cls]


# Roles each role has authority over. Only used for management checks,
# permission defaults live in app.rbac.permissions.
ROLE_HIERARCHY = MappingProxyType({
    Role.ADMIN: (Role.ADMIN, Role.INSTRUCTOR, Role.PARTNER_INSTRUCTOR, Role.STUDENT),
    Role.INSTRUCTOR: (Role.INSTRUCTOR, Role.PARTNER_INSTRUCTOR, Role.STUDENT),
    Role.PARTNER_INSTRUCTOR: (Role.PARTNER_INSTRUCTOR, Role.STUDENT),
    Role.STUDENT: (Role.STUDENT,),
})

ROLE_DISPLAY_NAMES = MappingProxyType({
    Role.STUDENT: 'Student',
    Role.PARTNER_INSTRUCTOR: 'Partner Instructor',
    Role.INSTRUCTOR: 'Instructor',
    Role.ADMIN: 'Admin',
})

ROLE_DESCRIPTIONS = MappingProxyType({
    Role.STUDENT: 'Can view enrolled courses, submit assignments, and track progress',
    Role.PARTNER_INSTRUCTOR: 'Can view assigned students, grade assignments, and provide feedback',
    Role.INSTRUCTOR: 'Can create and manage courses, assignments, and partner instructors',
    Role.ADMIN: 'Has full system access and can manage all users and settings',
})


def get_role_hierarchy(role: Role | str) -> tuple[Role, ...]:
    """
    Get the roles that a role has authority over, itself included.

    Args:
        role: Role enum or role string

    Returns:
        Tuple of roles, empty for an unknown role
    """
    role_enum = Role.from_string(role)
    if role_enum is None:
        return ()
    return ROLE_HIERARCHY[role_enum]


def get_role_display_name(role: Role | str) -> str:
    """Human readable name for a role; unknown roles are echoed back"""
    role_enum = Role.from_string(role)
    if role_enum is None:
        return role if isinstance(role, str) else ''
    return ROLE_DISPLAY_NAMES[role_enum]


def get_role_description(role: Role | str) -> str:
    role_enum = Role.from_string(role)
    if role_enum is None:
        return ''
    return ROLE_DESCRIPTIONS[role_enum]
