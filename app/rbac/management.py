"""
Role change and user management rules
"""
from app.rbac.models import as_user_record
from app.rbac.roles import Role


def is_valid_role_change(from_role: Role | str, to_role: Role | str) -> bool:
    """
    Check if a role change is allowed through the regular admin workflow.

    Granting admin and changing an admin's role are both refused here,
    those go through a separate privileged flow. Whether the caller may
    change roles at all is checked by the caller.

    Args:
        from_role: Current role
        to_role: Target role

    Returns:
        True if the change is allowed, False otherwise
    """
    from_enum = Role.from_string(from_role)
    to_enum = Role.from_string(to_role)
    if from_enum is None or to_enum is None:
        return False

    if to_enum == Role.ADMIN:
        return False

    if from_enum == Role.ADMIN:
        return False

    return True


def can_manage_user(acting_user, target_user) -> bool:
    """
    Check if a user can manage (edit, suspend, delete) another user.

    Partner instructors pass for any student. Whether the student is
    actually assigned to them is not known here and must be checked by
    the data access layer.

    Args:
        acting_user: User performing the action
        target_user: User being acted on

    Returns:
        True if acting_user has authority over target_user
    """
    actor = as_user_record(acting_user)
    target = as_user_record(target_user)
    if actor is None or target is None:
        return False

    # Admins can manage everyone
    if actor.role == Role.ADMIN:
        return True

    if actor.role == Role.INSTRUCTOR:
        return target.role in (Role.PARTNER_INSTRUCTOR, Role.STUDENT)

    if actor.role == Role.PARTNER_INSTRUCTOR:
        return target.role == Role.STUDENT

    return False
