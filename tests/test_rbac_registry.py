"""
Role and permission registry tests
"""
import pytest

from app.rbac.permissions import (
    DEFAULT_ROLE_PERMISSIONS,
    PARTNER_INSTRUCTOR_PERMISSIONS,
    PERMISSION_LABELS,
    Permissions,
    get_default_partner_instructor_overrides,
    get_default_permissions,
    validate_partner_instructor_permissions,
)
from app.rbac.roles import (
    ROLE_HIERARCHY,
    Role,
    get_role_description,
    get_role_display_name,
    get_role_hierarchy,
)


class TestRoles:

    def test_role_values(self):
        assert Role.get_all() == ['student', 'partner_instructor', 'instructor', 'admin']

    @pytest.mark.parametrize('value', ['Admin', ' admin', 'ADMIN', 'mentor', '', None, 42, ['admin']])
    def test_from_string_rejects_unknown(self, value):
        assert Role.from_string(value) is None
        assert Role.is_valid(value) is False

    def test_from_string_accepts_enum_and_value(self):
        assert Role.from_string('partner_instructor') is Role.PARTNER_INSTRUCTOR
        assert Role.from_string(Role.ADMIN) is Role.ADMIN

    def test_hierarchy(self):
        assert get_role_hierarchy('admin') == (
            Role.ADMIN, Role.INSTRUCTOR, Role.PARTNER_INSTRUCTOR, Role.STUDENT)
        assert get_role_hierarchy(Role.INSTRUCTOR) == (
            Role.INSTRUCTOR, Role.PARTNER_INSTRUCTOR, Role.STUDENT)
        assert get_role_hierarchy('partner_instructor') == (Role.PARTNER_INSTRUCTOR, Role.STUDENT)
        assert get_role_hierarchy('student') == (Role.STUDENT,)
        assert get_role_hierarchy('bogus') == ()

    def test_display_names_and_descriptions(self):
        assert get_role_display_name('partner_instructor') == 'Partner Instructor'
        assert get_role_display_name('bogus') == 'bogus'
        assert get_role_description('admin').startswith('Has full system access')
        assert get_role_description('bogus') == ''


class TestDefaultPermissions:

    def test_permission_count(self):
        assert len(Permissions) == 34

    def test_student_defaults(self):
        assert get_default_permissions('student') == {
            Permissions.VIEW_COURSES,
            Permissions.ENROLL_COURSES,
            Permissions.SUBMIT_ASSESSMENTS,
            Permissions.VIEW_OWN_PROGRESS,
            Permissions.VIEW_OWN_GRADES,
        }

    def test_partner_instructor_defaults(self):
        assert get_default_permissions(Role.PARTNER_INSTRUCTOR) == {
            Permissions.VIEW_COURSES,
            Permissions.VIEW_COURSE_CONTENT,
            Permissions.VIEW_ASSIGNED_COURSES,
            Permissions.VIEW_ASSIGNED_STUDENTS,
            Permissions.GRADE_ASSIGNED_ASSESSMENTS,
            Permissions.PROVIDE_FEEDBACK,
            Permissions.SEND_MESSAGES,
            Permissions.CREATE_ANNOUNCEMENTS,
        }

    def test_instructor_defaults_are_enumerated_not_inherited(self):
        instructor = get_default_permissions('instructor')
        assert len(instructor) == 22
        # enumerated table leaves these out even though lower roles have them
        assert Permissions.VIEW_OWN_GRADES not in instructor
        assert Permissions.VIEW_ASSIGNED_COURSES not in instructor
        assert Permissions.ASSIGN_PARTNER_INSTRUCTORS in instructor
        assert Permissions.MANAGE_USERS not in instructor

    def test_admin_has_everything(self):
        assert get_default_permissions('admin') == frozenset(Permissions)

    @pytest.mark.parametrize('role', ['bogus', '', None, 'Admin'])
    def test_unknown_role_gets_nothing(self, role):
        assert get_default_permissions(role) == frozenset()

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_ROLE_PERMISSIONS[Role.STUDENT] = frozenset()
        with pytest.raises(TypeError):
            ROLE_HIERARCHY[Role.STUDENT] = ()
        with pytest.raises(AttributeError):
            DEFAULT_ROLE_PERMISSIONS[Role.STUDENT].add(Permissions.MANAGE_USERS)

    def test_hierarchy_and_defaults_snapshot(self):
        """
        The two tables are maintained separately. Record where they
        currently disagree so a change to either one shows up here.
        """
        gaps = {}
        for role in Role:
            if role is Role.ADMIN:
                continue
            own = get_default_permissions(role)
            for lower in get_role_hierarchy(role)[1:]:
                missing = get_default_permissions(lower) - own
                if missing:
                    gaps[(role, lower)] = missing

        assert gaps == {
            (Role.PARTNER_INSTRUCTOR, Role.STUDENT): {
                Permissions.ENROLL_COURSES,
                Permissions.SUBMIT_ASSESSMENTS,
                Permissions.VIEW_OWN_PROGRESS,
                Permissions.VIEW_OWN_GRADES,
            },
            (Role.INSTRUCTOR, Role.PARTNER_INSTRUCTOR): {Permissions.VIEW_ASSIGNED_COURSES},
            (Role.INSTRUCTOR, Role.STUDENT): {Permissions.VIEW_OWN_GRADES},
        }

    def test_admin_is_superset_of_every_role(self):
        for role in Role:
            assert get_default_permissions(role) <= get_default_permissions(Role.ADMIN)


class TestPartnerInstructorOverrides:

    def test_default_overrides(self):
        overrides = get_default_partner_instructor_overrides()
        assert overrides == {permission.value: True for permission in PARTNER_INSTRUCTOR_PERMISSIONS}
        assert len(overrides) == 7

    def test_default_overrides_are_fresh_copies(self):
        first = get_default_partner_instructor_overrides()
        first['send_messages'] = False
        assert get_default_partner_instructor_overrides()['send_messages'] is True

    def test_every_assignable_permission_has_a_label(self):
        assert set(PERMISSION_LABELS) == set(PARTNER_INSTRUCTOR_PERMISSIONS)

    def test_validate(self):
        assert validate_partner_instructor_permissions({'provide_feedback': True}) is True
        assert validate_partner_instructor_permissions({}) is True
        assert validate_partner_instructor_permissions({'manage_users': True}) is False
        assert validate_partner_instructor_permissions({'not_a_permission': False}) is False
        assert validate_partner_instructor_permissions(None) is False
        assert validate_partner_instructor_permissions(['provide_feedback']) is False
