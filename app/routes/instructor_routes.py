"""
Instructor routes for managing partner instructors (mentors)
"""
from flask import Blueprint, request, jsonify
import logging

from app.rbac.context import get_current_user, get_user_store
from app.rbac.decorators import login_required, permission_required
from app.rbac.permissions import PARTNER_INSTRUCTOR_PERMISSIONS, PERMISSION_LABELS, Permissions
from app.rbac.roles import Role
from app.routes.admin_routes import serialize_user
from app.services.user_admin_service import UserAdminService

logger = logging.getLogger(__name__)
bp = Blueprint('instructor', __name__, url_prefix='/instructor')


@bp.route('/partner-instructors', methods=['GET'])
@login_required
@permission_required(Permissions.MANAGE_PARTNER_INSTRUCTORS)
def list_partner_instructors():
    """List partner instructors and the permissions that can be toggled"""
    service = UserAdminService(get_user_store())
    mentors = service.list_users(get_current_user(), Role.PARTNER_INSTRUCTOR)
    return jsonify({
        'success': True,
        'partner_instructors': [serialize_user(mentor) for mentor in mentors],
        'available_permissions': [
            {'key': permission.value, 'label': PERMISSION_LABELS[permission]}
            for permission in PARTNER_INSTRUCTOR_PERMISSIONS
        ],
    })


@bp.route('/partner-instructors/<user_id>/permissions', methods=['PUT'])
@login_required
@permission_required(Permissions.MANAGE_PARTNER_INSTRUCTORS)
def update_partner_permissions(user_id):
    """Replace a partner instructor's permission overrides"""
    data = request.get_json(silent=True) or {}
    service = UserAdminService(get_user_store())
    mentor = service.update_permissions(get_current_user(), user_id, data.get('permissions'))
    return jsonify({
        'success': True,
        'message': 'Permissions updated successfully',
        'partner_instructor': serialize_user(mentor),
    })


@bp.route('/students', methods=['GET'])
@login_required
@permission_required(Permissions.VIEW_ALL_STUDENTS)
def list_students():
    service = UserAdminService(get_user_store())
    students = service.list_users(get_current_user(), Role.STUDENT)
    return jsonify({
        'success': True,
        'students': [serialize_user(student) for student in students],
    })
