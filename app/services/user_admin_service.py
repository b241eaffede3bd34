"""
Admin workflow for changing roles, permissions and account status.

Every mutation is checked against the RBAC rules before it reaches the
store. Refusals are raised as AccessControlError subclasses.
"""
import logging
from typing import Optional

from app.rbac.management import can_manage_user, is_valid_role_change
from app.rbac.models import UserRecord
from app.rbac.permissions import (
    Permissions,
    get_default_partner_instructor_overrides,
    has_permission,
    validate_partner_instructor_permissions,
)
from app.rbac.roles import Role
from app.utils.errors import (
    AccessControlError,
    InvalidPermissionsError,
    InvalidRoleChangeError,
    PermissionDeniedError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


class UserAdminService:
    """Applies user management actions on behalf of an acting user"""

    def __init__(self, store):
        self.store = store

    def _get_target(self, user_id) -> UserRecord:
        target = self.store.get(user_id)
        if target is None:
            raise UserNotFoundError(f"User {user_id} not found")
        return target

    @staticmethod
    def _require_other_user(actor: UserRecord, user_id):
        if actor is None:
            raise PermissionDeniedError("Login required", status_code=401)
        if actor.id is not None and str(actor.id) == str(user_id):
            raise PermissionDeniedError("You cannot perform this action on your own account")

    def list_users(self, actor: UserRecord, role: Optional[Role | str] = None) -> list[UserRecord]:
        """Users the actor is allowed to manage, optionally filtered by role"""
        if role is not None and Role.from_string(role) is None:
            raise AccessControlError(f"Unknown role: {role}")
        records = self.store.list(Role.from_string(role) if role is not None else None)
        return [record for record in records if can_manage_user(actor, record)]

    def change_role(self, actor: UserRecord, user_id, new_role: Role | str) -> UserRecord:
        """
        Change a user's role.

        Only admins may change roles. Leaving the partner instructor role
        drops the user's permission overrides, entering it assigns the
        default partner instructor overrides.
        """
        if actor is None or actor.role != Role.ADMIN:
            logger.warning(f"Non-admin user {getattr(actor, 'id', None)} attempted to change role of {user_id}")
            raise PermissionDeniedError("Admin access required")

        self._require_other_user(actor, user_id)
        target = self._get_target(user_id)

        if not is_valid_role_change(target.role, new_role):
            logger.warning(f"Rejected role change for user {user_id}: {target.role} -> {new_role}")
            raise InvalidRoleChangeError(f"Cannot change role from {target.role} to {new_role}")

        to_role = Role.from_string(new_role)
        updates = {'role': to_role}
        if to_role == Role.PARTNER_INSTRUCTOR and target.role != Role.PARTNER_INSTRUCTOR:
            updates['permission_overrides'] = get_default_partner_instructor_overrides()
        elif to_role != Role.PARTNER_INSTRUCTOR:
            updates['permission_overrides'] = None

        updated = self.store.save(target.model_copy(update=updates))
        logger.info(f"User {user_id} role changed from {target.role} to {to_role} by {actor.id}")
        return updated

    def update_permissions(self, actor: UserRecord, user_id, overrides) -> UserRecord:
        """
        Replace a partner instructor's permission overrides.

        The actor needs manage_partner_instructors and authority over the
        target. Only partner instructor permissions may appear in the map.
        """
        if not has_permission(actor, Permissions.MANAGE_PARTNER_INSTRUCTORS):
            raise PermissionDeniedError("Insufficient permissions")

        target = self._get_target(user_id)
        if not can_manage_user(actor, target):
            raise PermissionDeniedError("You cannot manage this user")
        if target.role != Role.PARTNER_INSTRUCTOR:
            raise InvalidPermissionsError("Permissions can only be set for partner instructors")
        if not validate_partner_instructor_permissions(overrides):
            raise InvalidPermissionsError("Invalid partner instructor permissions")

        cleaned = {str(key): value is True for key, value in overrides.items()}
        updated = self.store.save(target.model_copy(update={'permission_overrides': cleaned}))
        logger.info(f"Permissions of user {user_id} updated by {actor.id}")
        return updated

    def set_suspended(self, actor: UserRecord, user_id, suspended: bool) -> UserRecord:
        """Suspend or reinstate a user the actor has authority over"""
        self._require_other_user(actor, user_id)
        target = self._get_target(user_id)
        if not can_manage_user(actor, target):
            raise PermissionDeniedError("You cannot manage this user")

        updated = self.store.save(target.model_copy(update={'suspended': bool(suspended)}))
        logger.info(f"User {user_id} {'suspended' if suspended else 'reinstated'} by {actor.id}")
        return updated

    def delete_user(self, actor: UserRecord, user_id) -> None:
        """Delete a user the actor has authority over"""
        self._require_other_user(actor, user_id)
        target = self._get_target(user_id)
        if not can_manage_user(actor, target):
            raise PermissionDeniedError("You cannot manage this user")

        self.store.delete(user_id)
        logger.info(f"User {user_id} deleted by {actor.id}")
