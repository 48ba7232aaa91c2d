"""
Tests for the authorization decision table.
"""

from django.contrib.auth.models import AnonymousUser
from django.core.exceptions import PermissionDenied
from django.test import TestCase

from apps.core import permissions
from apps.core.permissions import (
    COMMENT, CREATE, DELETE, READ, REPORT, TASK, UPDATE,
    can, check_permission, get_relationship, strip_restricted_fields,
)

from .helpers import make_admin, make_report, make_task, make_user


class RelationshipTests(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.admin = make_admin()
        cls.alice = make_user('alice@example.com', name='Alice')
        cls.bob = make_user('bob@example.com', name='Bob')
        cls.task = make_task(cls.alice, cls.admin)
        cls.private_report = make_report(cls.alice)
        cls.public_report = make_report(cls.alice, title='Public one', is_public=True)

    def test_admin_wins(self):
        self.assertEqual(get_relationship(self.admin, TASK, self.task), permissions.ADMIN)
        self.assertEqual(get_relationship(self.admin, REPORT, self.private_report), permissions.ADMIN)

    def test_task_relationships(self):
        self.assertEqual(get_relationship(self.alice, TASK, self.task), permissions.ASSIGNEE)
        self.assertEqual(get_relationship(self.bob, TASK, self.task), permissions.MEMBER)

    def test_report_relationships(self):
        self.assertEqual(get_relationship(self.alice, REPORT, self.private_report), permissions.AUTHOR)
        self.assertEqual(get_relationship(self.bob, REPORT, self.public_report), permissions.PUBLIC)
        self.assertEqual(get_relationship(self.bob, REPORT, self.private_report), permissions.MEMBER)

    def test_no_record_is_member(self):
        self.assertEqual(get_relationship(self.bob, REPORT), permissions.MEMBER)


class DecisionTableTests(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.admin = make_admin()
        cls.alice = make_user('alice@example.com', name='Alice')
        cls.bob = make_user('bob@example.com', name='Bob')
        cls.task = make_task(cls.alice, cls.admin)
        cls.private_report = make_report(cls.alice)
        cls.public_report = make_report(cls.alice, title='Public one', is_public=True)

    def test_task_rules(self):
        for operation in (READ, CREATE, UPDATE, DELETE, COMMENT):
            self.assertTrue(can(self.admin, TASK, operation, self.task))

        self.assertTrue(can(self.alice, TASK, READ, self.task))
        self.assertTrue(can(self.alice, TASK, UPDATE, self.task))
        self.assertTrue(can(self.alice, TASK, COMMENT, self.task))
        self.assertFalse(can(self.alice, TASK, DELETE, self.task))
        self.assertFalse(can(self.alice, TASK, CREATE))

        for operation in (READ, UPDATE, DELETE, COMMENT):
            self.assertFalse(can(self.bob, TASK, operation, self.task))

    def test_report_rules(self):
        for operation in (READ, UPDATE, DELETE, COMMENT):
            self.assertTrue(can(self.alice, REPORT, operation, self.private_report))
            self.assertTrue(can(self.admin, REPORT, operation, self.private_report))
            self.assertFalse(can(self.bob, REPORT, operation, self.private_report))

        self.assertTrue(can(self.bob, REPORT, READ, self.public_report))
        self.assertTrue(can(self.bob, REPORT, COMMENT, self.public_report))
        self.assertFalse(can(self.bob, REPORT, UPDATE, self.public_report))
        self.assertFalse(can(self.bob, REPORT, DELETE, self.public_report))

        self.assertTrue(can(self.bob, REPORT, CREATE))

    def test_anonymous_is_denied(self):
        self.assertFalse(can(AnonymousUser(), REPORT, READ, self.public_report))

    def test_check_permission_raises(self):
        with self.assertRaisesMessage(PermissionDenied, 'Only administrators can create tasks.'):
            check_permission(self.alice, TASK, CREATE)


class FieldStrippingTests(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.admin = make_admin()
        cls.alice = make_user('alice@example.com', name='Alice')
        cls.task = make_task(cls.alice, cls.admin)
        cls.report = make_report(cls.alice)

    def test_assignee_cannot_touch_assignment_or_priority(self):
        data = {'status': 'in_progress', 'priority': 'urgent', 'assigned_to': 99, 'assigned_by': 98}

        self.assertEqual(
            strip_restricted_fields(self.alice, TASK, self.task, data),
            {'status': 'in_progress'},
        )

    def test_author_cannot_approve(self):
        data = {'title': 'x', 'status': 'approved', 'approved_by': 1, 'approved_at': '2024-01-01'}

        self.assertEqual(strip_restricted_fields(self.alice, REPORT, self.report, data), {'title': 'x'})

    def test_admin_keeps_everything(self):
        data = {'status': 'approved', 'priority': 'low'}

        self.assertEqual(strip_restricted_fields(self.admin, REPORT, self.report, data), data)
        self.assertEqual(strip_restricted_fields(self.admin, TASK, self.task, data), data)
