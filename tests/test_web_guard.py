"""
Navigation guard, decorators and template helper tests through the Flask app
"""
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from flask import Blueprint, render_template_string

from app import create_app
from app.config import Config
from app.rbac.decorators import permission_required, role_required
from app.rbac.permissions import Permissions
from app.rbac.roles import Role


class TestNavigationGuard:

    def test_signed_out_json_gets_401(self, client):
        response = client.get('/admin/users', headers={'Content-Type': 'application/json'})
        assert response.status_code == 401
        assert response.get_json() == {'error': 'Login required'}

    def test_signed_out_browser_is_redirected_to_login(self, client):
        response = client.get('/student')
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/login')

    def test_student_blocked_from_admin(self, login_as):
        client = login_as('student-1')
        response = client.get('/admin/users', headers={'Content-Type': 'application/json'})
        assert response.status_code == 403

    def test_student_redirected_home(self, login_as):
        client = login_as('student-1')
        response = client.get('/instructor')
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/student/analytics')

    def test_student_dashboard(self, login_as):
        client = login_as('student-1')
        response = client.get('/student/courses')
        assert response.status_code == 200
        body = response.get_json()
        assert body['dashboard'] == 'student'
        assert body['section'] == 'courses'
        assert body['user']['role'] == 'student'
        assert body['features']['browse_courses'] is True

    def test_courses_open_to_students(self, login_as):
        assert login_as('student-1').get('/courses/123').status_code == 200

    def test_analytics_limited_to_instructors(self, login_as):
        assert login_as('student-1').get(
            '/analytics', headers={'Content-Type': 'application/json'}).status_code == 403
        assert login_as('instructor-1').get('/analytics').status_code == 200

    def test_settings_admin_only(self, login_as):
        assert login_as('instructor-1').get(
            '/settings', headers={'Content-Type': 'application/json'}).status_code == 403
        assert login_as('admin-1').get('/settings').status_code == 200

    def test_partner_instructor_dashboard(self, login_as):
        client = login_as('mentor-1')
        assert client.get('/partner-instructor').status_code == 200
        assert client.get('/instructor', headers={'Content-Type': 'application/json'}).status_code == 403

    def test_unknown_role_is_denied_protected_paths(self, login_as):
        client = login_as('ghost-1')
        response = client.get('/dashboard', headers={'Content-Type': 'application/json'})
        assert response.status_code == 403

    def test_unknown_role_browser_gets_403_not_a_redirect_loop(self, login_as):
        response = login_as('ghost-1').get('/dashboard')
        assert response.status_code == 403

    def test_missing_user_treated_as_signed_out(self, login_as):
        client = login_as('deleted-user')
        response = client.get('/dashboard', headers={'Content-Type': 'application/json'})
        assert response.status_code == 401

    def test_suspended_user_treated_as_signed_out(self, login_as, store):
        store.save(store.get('student-2').model_copy(update={'suspended': True}))
        client = login_as('student-2')
        response = client.get('/dashboard', headers={'Content-Type': 'application/json'})
        assert response.status_code == 401

    def test_index_redirects_to_home(self, login_as, client):
        assert client.get('/').headers['Location'].endswith('/login')
        response = login_as('instructor-1').get('/')
        assert response.headers['Location'].endswith('/instructor/analytics')


class TestSession:

    def test_login_and_logout(self, client):
        response = client.post('/login', json={'user_id': 'admin-1'})
        assert response.status_code == 200
        assert response.get_json()['redirect_url'] == '/admin/analytics'
        assert client.get('/check_session').get_json()['role'] == 'admin'

        client.get('/logout')
        assert client.get('/check_session').status_code == 401

    def test_login_unknown_user(self, client):
        assert client.post('/login', json={'user_id': 'nobody'}).status_code == 401

    def test_login_unknown_role_lands_on_student_dashboard(self, client):
        response = client.post('/login', json={'user_id': 'ghost-1'})
        assert response.status_code == 200
        assert response.get_json()['redirect_url'] == '/student/dashboard'

    def test_login_suspended_user(self, client, store):
        store.save(store.get('student-1').model_copy(update={'suspended': True}))
        assert client.post('/login', json={'user_id': 'student-1'}).status_code == 401


IDP_SECRET = 'identity-provider-signing-secret-0001'


class DefaultSignInConfig(Config):
    LOG_TO_FILE = False
    SEED_USERS_FILE = ''
    IDENTITY_TOKEN_SECRET = IDP_SECRET


def _identity_token(sub, secret=IDP_SECRET, expires_in=timedelta(minutes=5)):
    return jwt.encode(
        {'sub': sub, 'exp': datetime.now(timezone.utc) + expires_in}, secret, algorithm='HS256')


class TestIdentitySignIn:

    @pytest.fixture
    def client(self):
        # default config, including the bootstrap admin account
        return create_app(DefaultSignInConfig).test_client()

    def test_id_sign_in_disabled_by_default(self):
        assert Config.ALLOW_ID_SIGN_IN is False

    def test_bare_user_id_is_rejected(self, client):
        response = client.post('/login', json={'user_id': 'admin'})
        assert response.status_code == 401
        assert client.get('/admin/users', headers={'Content-Type': 'application/json'}).status_code == 401

    def test_valid_token_signs_in(self, client):
        response = client.post('/login', json={'id_token': _identity_token('admin')})
        assert response.status_code == 200
        assert response.get_json()['redirect_url'] == '/admin/analytics'
        assert client.get('/admin/users', headers={'Content-Type': 'application/json'}).status_code == 200

    def test_bearer_header_signs_in(self, client):
        response = client.post('/login', headers={'Authorization': f"Bearer {_identity_token('admin')}"})
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/admin/analytics')

    @pytest.mark.parametrize('token', [
        _identity_token('admin', secret='another-provider-signing-secret-0002'),
        _identity_token('admin', expires_in=timedelta(minutes=-5)),
        jwt.encode({'sub': 'admin'}, IDP_SECRET, algorithm='HS256'),
        'not-a-token',
    ])
    def test_invalid_tokens_are_rejected(self, client, token):
        assert client.post('/login', json={'id_token': token}).status_code == 401
        assert client.get('/check_session').status_code == 401

    def test_token_for_unknown_user(self, client):
        assert client.post('/login', json={'id_token': _identity_token('nobody')}).status_code == 401

    def test_tokens_rejected_without_secret(self):
        class NoSecretConfig(DefaultSignInConfig):
            IDENTITY_TOKEN_SECRET = ''
        client = create_app(NoSecretConfig).test_client()
        assert client.post('/login', json={'id_token': _identity_token('admin')}).status_code == 401


class TestDecorators:

    def _register(self, app):
        bp = Blueprint('probe', __name__)

        @bp.route('/probe/grading')
        @role_required(Role.INSTRUCTOR, Role.PARTNER_INSTRUCTOR)
        def grading():
            return 'ok'

        @bp.route('/probe/feedback')
        @permission_required(Permissions.PROVIDE_FEEDBACK, Permissions.SEND_MESSAGES)
        def feedback():
            return 'ok'

        @bp.route('/probe/any')
        @permission_required(Permissions.VIEW_ASSIGNED_STUDENTS, Permissions.CREATE_COURSES,
                             require_all=False)
        def any_of():
            return 'ok'

        @bp.route('/probe/template')
        def template():
            return render_template_string(
                "{{ user_role() }}|{{ can('create_courses') }}|{{ can_access('/admin') }}"
                "|{{ role_display_name() }}|{{ has_role('instructor') }}")

        app.register_blueprint(bp)

    def test_role_required(self, app, login_as):
        self._register(app)
        json_headers = {'Content-Type': 'application/json'}
        assert login_as('mentor-1').get('/probe/grading').status_code == 200
        assert login_as('admin-1').get('/probe/grading').status_code == 200
        assert login_as('student-1').get('/probe/grading', headers=json_headers).status_code == 403

    def test_permission_required_uses_overrides(self, app, login_as):
        self._register(app)
        json_headers = {'Content-Type': 'application/json'}
        # mentor-1 overrides do not include provide_feedback
        assert login_as('mentor-1').get('/probe/feedback', headers=json_headers).status_code == 403
        assert login_as('instructor-1').get('/probe/feedback').status_code == 200
        assert login_as('mentor-1').get('/probe/any').status_code == 200
        assert login_as('student-1').get('/probe/any', headers=json_headers).status_code == 403

    def test_template_helpers(self, app, login_as):
        self._register(app)
        body = login_as('instructor-1').get('/probe/template').get_data(as_text=True)
        assert body == 'instructor|True|False|Instructor|True'

    def test_template_helpers_signed_out(self, app, client):
        self._register(app)
        body = client.get('/probe/template').get_data(as_text=True)
        assert body == '|False|False||False'
