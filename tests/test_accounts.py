"""
Tests for accounts: user model, authentication backend, validators and
account services.
"""

from django.contrib.auth import authenticate
from django.core.exceptions import ValidationError
from django.http import Http404
from django.test import TestCase

from apps.accounts import services
from apps.accounts.models import User
from apps.accounts.validators import ComplexityValidator
from apps.core.exceptions import ConflictError

from .helpers import PASSWORD, make_admin, make_report, make_task, make_user


class UserModelTests(TestCase):

    def test_create_user_normalizes_email(self):
        user = User.objects.create_user(email='Mixed@Example.COM', password=PASSWORD, name='Mia')

        self.assertEqual(user.email, 'mixed@example.com')
        self.assertEqual(user.role, User.Role.USER)
        self.assertFalse(user.is_admin())

    def test_create_superuser_is_admin(self):
        user = User.objects.create_superuser(email='root@example.com', password=PASSWORD, name='Root')

        self.assertTrue(user.is_admin())
        self.assertTrue(user.is_staff)

    def test_email_required(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(email='', password=PASSWORD, name='Nobody')


class EmailAuthBackendTests(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.user = make_user('alice@example.com', name='Alice')

    def test_case_insensitive_email(self):
        self.assertEqual(authenticate(email='ALICE@example.com', password=PASSWORD), self.user)

    def test_wrong_password(self):
        self.assertIsNone(authenticate(email='alice@example.com', password='Wrong1234'))

    def test_unknown_email(self):
        self.assertIsNone(authenticate(email='nobody@example.com', password=PASSWORD))

    def test_inactive_user_rejected(self):
        self.user.is_active = False
        self.user.save()

        self.assertIsNone(authenticate(email='alice@example.com', password=PASSWORD))


class ComplexityValidatorTests(TestCase):

    def test_requirements(self):
        validator = ComplexityValidator()
        validator.validate('Abcdef1')

        for password in ('abcdef1', 'ABCDEF1', 'Abcdefg'):
            with self.subTest(password=password):
                with self.assertRaises(ValidationError):
                    validator.validate(password)


class RegisterTests(TestCase):

    def payload(self, **overrides):
        data = {'name': 'Alice Smith', 'email': 'Alice@Example.com', 'password': PASSWORD}
        data.update(overrides)
        return data

    def test_register(self):
        user = services.register_user(self.payload())

        self.assertEqual(user.email, 'alice@example.com')
        self.assertEqual(user.role, User.Role.USER)
        self.assertTrue(user.check_password(PASSWORD))

    def test_role_cannot_be_chosen(self):
        user = services.register_user(self.payload(role='admin'))

        self.assertEqual(user.role, User.Role.USER)

    def test_duplicate_email_conflicts(self):
        services.register_user(self.payload())

        with self.assertRaises(ConflictError):
            services.register_user(self.payload(email='ALICE@example.com'))

    def test_invalid_payload(self):
        with self.assertRaises(ValidationError) as ctx:
            services.register_user({'name': 'A', 'email': 'not-an-email', 'password': 'short'})

        self.assertEqual(set(ctx.exception.message_dict), {'name', 'email', 'password'})

    def test_weak_password(self):
        with self.assertRaises(ValidationError) as ctx:
            services.register_user(self.payload(password='alllowercase1'))

        self.assertIn('password', ctx.exception.message_dict)


class ProfileTests(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.alice = make_user('alice@example.com', name='Alice')
        cls.bob = make_user('bob@example.com', name='Bob')

    def test_update_name_only(self):
        user = services.update_profile(self.alice, {'name': 'Alice Cooper'})

        self.assertEqual(user.name, 'Alice Cooper')
        self.assertEqual(user.email, 'alice@example.com')

    def test_email_taken(self):
        with self.assertRaises(ConflictError):
            services.update_profile(self.alice, {'email': 'BOB@example.com'})

    def test_keep_own_email(self):
        user = services.update_profile(self.alice, {'email': 'alice@example.com'})

        self.assertEqual(user.email, 'alice@example.com')

    def test_change_password(self):
        services.change_password(self.alice, {'current_password': PASSWORD, 'new_password': 'Green8Meadow'})

        self.alice.refresh_from_db()
        self.assertTrue(self.alice.check_password('Green8Meadow'))

    def test_change_password_wrong_current(self):
        with self.assertRaises(ValidationError) as ctx:
            services.change_password(self.alice, {'current_password': 'Nope1234', 'new_password': 'Green8Meadow'})

        self.assertIn('current_password', ctx.exception.message_dict)

    def test_change_password_weak_new(self):
        with self.assertRaises(ValidationError) as ctx:
            services.change_password(self.alice, {'current_password': PASSWORD, 'new_password': 'green'})

        self.assertIn('new_password', ctx.exception.message_dict)


class AdminUserManagementTests(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.admin = make_admin()
        cls.alice = make_user('alice@example.com', name='Alice')
        cls.bob = make_user('bob@example.com', name='Bob', is_active=False)

    def test_list_users_filters(self):
        self.assertEqual(services.list_users({})['totalCount'], 3)
        self.assertEqual(services.list_users({'role': 'admin'})['totalCount'], 1)
        self.assertEqual(services.list_users({'is_active': 'false'})['items'], [self.bob])
        self.assertEqual(services.list_users({'search': 'ALI'})['items'], [self.alice])

    def test_list_users_sorting(self):
        result = services.list_users({'sort_by': 'name', 'sort_order': 'asc'})

        self.assertEqual([user.name for user in result['items']], ['Ada Admin', 'Alice', 'Bob'])

    def test_get_user(self):
        self.assertEqual(services.get_user(self.alice.pk), self.alice)
        with self.assertRaises(Http404):
            services.get_user(999999)

    def test_update_user(self):
        user = services.update_user(self.admin, self.alice.pk, {'role': 'admin', 'is_active': False})

        self.assertEqual(user.role, User.Role.ADMIN)
        self.assertFalse(user.is_active)

    def test_update_user_email_conflict(self):
        with self.assertRaises(ConflictError):
            services.update_user(self.admin, self.alice.pk, {'email': 'bob@example.com'})

    def test_update_user_invalid_role(self):
        with self.assertRaises(ValidationError):
            services.update_user(self.admin, self.alice.pk, {'role': 'owner'})

    def test_delete_user(self):
        services.delete_user(self.admin, self.bob.pk)

        self.assertFalse(User.objects.filter(pk=self.bob.pk).exists())

    def test_cannot_delete_self(self):
        with self.assertRaises(ValidationError):
            services.delete_user(self.admin, self.admin.pk)

    def test_referenced_user_conflicts(self):
        make_task(self.alice, self.admin)

        with self.assertRaises(ConflictError):
            services.delete_user(self.admin, self.alice.pk)

    def test_report_author_conflicts(self):
        make_report(self.bob)

        with self.assertRaises(ConflictError):
            services.delete_user(self.admin, self.bob.pk)
