"""
Shared fixtures: an app built with the testing config and an in-memory
user store holding one user per role.
"""
import pytest

from app import create_app
from app.config import TestingConfig
from app.rbac.context import InMemoryUserStore

SEED_USERS = {
    'admin-1': {'email': 'admin@example.com', 'role': 'admin'},
    'admin-2': {'email': 'second-admin@example.com', 'role': 'admin'},
    'instructor-1': {'email': 'instructor@example.com', 'role': 'instructor'},
    'mentor-1': {
        'email': 'mentor@example.com',
        'role': 'partner_instructor',
        'permissions': {
            'view_assigned_courses': True,
            'view_assigned_students': True,
            'grade_assigned_assessments': False,
        },
    },
    'student-1': {'email': 'student@example.com', 'role': 'student'},
    'student-2': {'email': 'student2@example.com', 'role': 'student'},
    'ghost-1': {'email': 'ghost@example.com', 'role': 'mentor'},
}


@pytest.fixture
def store():
    return InMemoryUserStore(SEED_USERS)


@pytest.fixture
def app(store):
    return create_app(TestingConfig, user_store=store)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(client):
    """Bind a user id to the test client's session"""
    def _login(user_id):
        with client.session_transaction() as sess:
            sess['user_id'] = user_id
        return client
    return _login
