"""
Admin routes for user management
Role changes, permission overrides, suspension and deletion.
Access to /admin is restricted to admins by the navigation guard.
"""
from flask import Blueprint, request, jsonify
import logging

from app.rbac.context import get_current_user, get_user_store
from app.rbac.decorators import login_required, permission_required
from app.rbac.permissions import Permissions, get_permissions_for_user
from app.rbac.roles import get_role_display_name
from app.services.user_admin_service import UserAdminService
from app.utils.errors import UserNotFoundError

logger = logging.getLogger(__name__)
bp = Blueprint('admin', __name__, url_prefix='/admin')


def serialize_user(record):
    """JSON shape of a user record for the dashboards"""
    return {
        'id': record.id,
        'email': record.email,
        'role': record.role.value if record.role else None,
        'role_display_name': get_role_display_name(record.role) if record.role else '',
        'permission_overrides': record.permission_overrides,
        'effective_permissions': sorted(p.value for p in get_permissions_for_user(record)),
        'suspended': record.suspended,
    }


def _service():
    return UserAdminService(get_user_store())


# ==================== USER MANAGEMENT ====================

@bp.route('/users', methods=['GET'])
@login_required
@permission_required(Permissions.MANAGE_USERS)
def list_users():
    """List all users, optionally filtered by role"""
    role_filter = request.args.get('role', 'all')
    role = None if role_filter == 'all' else role_filter

    users = _service().list_users(get_current_user(), role)
    return jsonify({
        'success': True,
        'users': [serialize_user(user) for user in users],
        'total': len(users),
    })


@bp.route('/users/<user_id>', methods=['GET'])
@login_required
@permission_required(Permissions.MANAGE_USERS)
def get_user(user_id):
    """Get a single user by ID"""
    user = get_user_store().get(user_id)
    if user is None:
        raise UserNotFoundError(f"User {user_id} not found")
    return jsonify({'success': True, 'user': serialize_user(user)})


@bp.route('/users/<user_id>/role', methods=['PUT'])
@login_required
@permission_required(Permissions.MANAGE_ROLES)
def change_role(user_id):
    """Change a user's role"""
    data = request.get_json(silent=True) or {}
    user = _service().change_role(get_current_user(), user_id, data.get('role'))
    return jsonify({
        'success': True,
        'message': 'Role updated successfully',
        'user': serialize_user(user),
    })


@bp.route('/users/<user_id>/permissions', methods=['PUT'])
@login_required
@permission_required(Permissions.MANAGE_USERS)
def update_permissions(user_id):
    """Replace a partner instructor's permission overrides"""
    data = request.get_json(silent=True) or {}
    user = _service().update_permissions(get_current_user(), user_id, data.get('permissions'))
    return jsonify({
        'success': True,
        'message': 'Permissions updated successfully',
        'user': serialize_user(user),
    })


@bp.route('/users/<user_id>/suspend', methods=['POST'])
@login_required
@permission_required(Permissions.MANAGE_USERS)
def toggle_suspend(user_id):
    """Suspend or reinstate a user"""
    data = request.get_json(silent=True) or {}
    user = _service().set_suspended(get_current_user(), user_id, data.get('suspended', True) is True)
    return jsonify({
        'success': True,
        'message': 'User suspended' if user.suspended else 'User reinstated',
        'user': serialize_user(user),
    })


@bp.route('/users/<user_id>', methods=['DELETE'])
@login_required
@permission_required(Permissions.MANAGE_USERS)
def delete_user(user_id):
    """Delete user account"""
    _service().delete_user(get_current_user(), user_id)
    return jsonify({
        'success': True,
        'message': 'User deleted successfully',
    })
