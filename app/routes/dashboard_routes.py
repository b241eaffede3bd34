"""
Role dashboards. Page rendering lives in the front end, these endpoints
return what a dashboard needs to decide which controls to show.
"""
from flask import Blueprint, jsonify, redirect
import logging

from app.rbac.context import get_current_user
from app.rbac.decorators import login_required
from app.rbac.permissions import get_ui_features_for_user
from app.rbac.roles import get_role_description, get_role_display_name
from app.rbac.route_access import get_user_home_route

logger = logging.getLogger(__name__)
bp = Blueprint('dashboard', __name__)


def _dashboard(name, section=None):
    user = get_current_user()
    return jsonify({
        'success': True,
        'dashboard': name,
        'section': section,
        'user': {
            'id': user.id,
            'email': user.email,
            'role': user.role.value if user.role else None,
            'role_display_name': get_role_display_name(user.role) if user.role else '',
            'role_description': get_role_description(user.role) if user.role else '',
        },
        'features': get_ui_features_for_user(user),
        'home': get_user_home_route(user),
    })


@bp.route('/')
def index():
    """Send the user to their role's landing page"""
    return redirect(get_user_home_route(get_current_user()))


@bp.route('/dashboard')
@login_required
def dashboard():
    return _dashboard('dashboard')


@bp.route('/student')
@bp.route('/student/<path:section>')
@login_required
def student_dashboard(section=None):
    return _dashboard('student', section)


@bp.route('/partner-instructor')
@bp.route('/partner-instructor/<path:section>')
@login_required
def partner_instructor_dashboard(section=None):
    return _dashboard('partner_instructor', section)


@bp.route('/instructor')
@bp.route('/instructor/analytics')
@login_required
def instructor_dashboard():
    return _dashboard('instructor', 'analytics')


@bp.route('/admin')
@bp.route('/admin/analytics')
@login_required
def admin_dashboard():
    return _dashboard('admin', 'analytics')


@bp.route('/courses')
@bp.route('/courses/<course_id>')
@login_required
def courses(course_id=None):
    return _dashboard('courses', course_id)


@bp.route('/analytics')
@login_required
def analytics():
    return _dashboard('analytics')


@bp.route('/settings')
@login_required
def settings():
    return _dashboard('settings')
