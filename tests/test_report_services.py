"""
Tests for the report service layer.
"""

from datetime import datetime, timezone as dt_timezone

from django.core.exceptions import PermissionDenied, ValidationError
from django.http import Http404
from django.test import TestCase

from apps.reports import services
from apps.reports.models import Comment, Report

from .helpers import make_admin, make_report, make_task, make_user


class CreateReportTests(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.admin = make_admin()
        cls.alice = make_user('alice@example.com', name='Alice')
        cls.bob = make_user('bob@example.com', name='Bob')
        cls.alice_task = make_task(cls.alice, cls.admin)

    def test_author_is_caller_and_defaults_apply(self):
        report = services.create_report(self.alice, {'title': 'Day 1', 'content': 'Did things'})

        self.assertEqual(report.author, self.alice)
        self.assertEqual(report.status, Report.Status.DRAFT)
        self.assertEqual(report.category, Report.Category.DAILY)
        self.assertFalse(report.is_public)
        self.assertEqual(report.tags, [])
        self.assertIsNotNone(report.date)

    def test_required_fields(self):
        with self.assertRaises(ValidationError) as ctx:
            services.create_report(self.alice, {'title': '', 'tags': ['x' * 21]})

        self.assertEqual(set(ctx.exception.message_dict), {'title', 'content', 'tags'})

    def test_non_admin_cannot_create_approved(self):
        report = services.create_report(self.alice, {
            'title': 'Day 1',
            'content': 'Did things',
            'status': 'approved',
            'approved_by': self.alice.pk,
            'approved_at': '2024-01-01T00:00:00Z',
        })

        self.assertEqual(report.status, Report.Status.DRAFT)
        self.assertIsNone(report.approved_by)
        self.assertIsNone(report.approved_at)

    def test_non_admin_may_submit(self):
        report = services.create_report(self.alice, {'title': 'Day 1', 'content': 'x', 'status': 'submitted'})

        self.assertEqual(report.status, Report.Status.SUBMITTED)

    def test_admin_creating_approved_report_is_stamped(self):
        report = services.create_report(self.admin, {'title': 'Done', 'content': 'x', 'status': 'approved'})

        self.assertIsNotNone(report.approved_at)
        self.assertEqual(report.approved_by, self.admin)

    def test_link_own_task(self):
        report = services.create_report(self.alice, {'title': 'T', 'content': 'x', 'task': self.alice_task.pk})

        self.assertEqual(report.task, self.alice_task)

    def test_link_someone_elses_task_is_forbidden(self):
        with self.assertRaises(PermissionDenied):
            services.create_report(self.bob, {'title': 'T', 'content': 'x', 'task': self.alice_task.pk})

        self.assertFalse(Report.objects.exists())

    def test_admin_may_link_any_task(self):
        report = services.create_report(self.admin, {'title': 'T', 'content': 'x', 'task': self.alice_task.pk})

        self.assertEqual(report.task, self.alice_task)

    def test_link_missing_or_inactive_task(self):
        inactive = make_task(self.alice, self.admin, is_active=False)

        for task_id in (999999, inactive.pk):
            with self.subTest(task_id=task_id):
                with self.assertRaises(Http404):
                    services.create_report(self.alice, {'title': 'T', 'content': 'x', 'task': task_id})


class UpdateReportTests(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.admin = make_admin()
        cls.alice = make_user('alice@example.com', name='Alice')
        cls.bob = make_user('bob@example.com', name='Bob')

    def setUp(self):
        self.report = make_report(self.alice)

    def test_author_status_change_is_stripped(self):
        report = services.update_report(self.alice, self.report.pk, {'status': 'approved', 'title': 'x'})

        self.assertEqual(report.title, 'x')
        self.assertEqual(report.status, Report.Status.DRAFT)
        self.assertIsNone(report.approved_at)

    def test_admin_approval_stamps_once(self):
        report = services.update_report(self.admin, self.report.pk, {'status': 'approved'})
        approved_at = report.approved_at

        self.assertIsNotNone(approved_at)
        self.assertEqual(report.approved_by, self.admin)

        other_admin = make_admin(email='second@example.com', name='Second Admin')
        services.update_report(other_admin, self.report.pk, {'status': 'rejected'})
        report = services.update_report(other_admin, self.report.pk, {'status': 'approved'})

        self.assertEqual(report.approved_at, approved_at)
        self.assertEqual(report.approved_by, self.admin)

    def test_named_approver_is_kept(self):
        other_admin = make_admin(email='second@example.com', name='Second Admin')

        report = services.update_report(
            self.admin, self.report.pk,
            {'status': 'approved', 'approved_by': other_admin.pk},
        )

        self.assertEqual(report.approved_by, other_admin)

    def test_non_author_cannot_update_public_report(self):
        self.report.is_public = True
        self.report.save()

        with self.assertRaises(PermissionDenied):
            services.update_report(self.bob, self.report.pk, {'title': 'mine now'})

    def test_relink_task_is_checked(self):
        bobs_task = make_task(self.bob, self.admin)

        with self.assertRaises(PermissionDenied):
            services.update_report(self.alice, self.report.pk, {'task': bobs_task.pk})

    def test_unlink_task(self):
        task = make_task(self.alice, self.admin)
        self.report.task = task
        self.report.save()

        report = services.update_report(self.alice, self.report.pk, {'task': None})

        self.assertIsNone(report.task)


class ReportAccessTests(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.admin = make_admin()
        cls.alice = make_user('alice@example.com', name='Alice')
        cls.bob = make_user('bob@example.com', name='Bob')
        cls.private = make_report(cls.alice, title='Private')
        cls.public = make_report(cls.alice, title='Public', is_public=True)

    def test_private_report_forbidden_for_others(self):
        with self.assertRaises(PermissionDenied):
            services.get_report(self.bob, self.private.pk)

    def test_public_report_readable_and_commentable(self):
        self.assertEqual(services.get_report(self.bob, self.public.pk), self.public)

        comment = services.add_comment(self.bob, self.public.pk, {'content': 'Nice work'})
        self.assertEqual(comment.user, self.bob)
        self.assertEqual(comment.report, self.public)

    def test_comment_on_private_report_forbidden(self):
        with self.assertRaises(PermissionDenied):
            services.add_comment(self.bob, self.private.pk, {'content': 'hi'})

    def test_unknown_report(self):
        with self.assertRaises(Http404):
            services.get_report(self.alice, 999999)

    def test_delete_is_hard_and_takes_comments(self):
        report = make_report(self.alice, title='Temp')
        services.add_comment(self.alice, report.pk, {'content': 'note'})

        services.delete_report(self.alice, report.pk)

        self.assertFalse(Report.objects.filter(pk=report.pk).exists())
        self.assertFalse(Comment.objects.filter(report_id=report.pk).exists())

    def test_only_author_or_admin_deletes(self):
        with self.assertRaises(PermissionDenied):
            services.delete_report(self.bob, self.public.pk)

        services.delete_report(self.admin, self.public.pk)
        self.assertFalse(Report.objects.filter(pk=self.public.pk).exists())


class ListReportsTests(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.admin = make_admin()
        cls.alice = make_user('alice@example.com', name='Alice')
        cls.bob = make_user('bob@example.com', name='Bob')

        def at(day):
            return datetime(2024, 3, day, 9, 0, tzinfo=dt_timezone.utc)

        make_report(cls.alice, title='Alpha', date=at(1), tags=['backend'])
        make_report(cls.alice, title='Bravo', date=at(5), is_public=True, status='submitted')
        make_report(cls.bob, title='Charlie', date=at(10))
        make_report(cls.bob, title='Delta', date=at(15), is_public=True, category='weekly')

    def titles(self, result):
        return [report.title for report in result['items']]

    def test_scope_is_own_or_public(self):
        result = services.list_reports(self.alice, {})

        self.assertEqual(self.titles(result), ['Delta', 'Bravo', 'Alpha'])
        for report in result['items']:
            self.assertTrue(report.author_id == self.alice.pk or report.is_public)

    def test_author_filter_ignored_for_users(self):
        result = services.list_reports(self.alice, {'author': str(self.bob.pk)})

        self.assertEqual(result['totalCount'], 3)

    def test_admin_sees_all_and_filters_by_author(self):
        self.assertEqual(services.list_reports(self.admin, {})['totalCount'], 4)

        result = services.list_reports(self.admin, {'author': str(self.bob.pk)})
        self.assertEqual(self.titles(result), ['Delta', 'Charlie'])

    def test_date_range(self):
        result = services.list_reports(self.admin, {'start_date': '2024-03-04', 'end_date': '2024-03-11'})

        self.assertEqual(self.titles(result), ['Charlie', 'Bravo'])

    def test_search_stays_inside_scope(self):
        self.assertEqual(self.titles(services.list_reports(self.bob, {'search': 'alpha'})), [])
        self.assertEqual(self.titles(services.list_reports(self.alice, {'search': 'BACKEND'})), ['Alpha'])

    def test_equality_filters(self):
        self.assertEqual(self.titles(services.list_reports(self.alice, {'status': 'submitted'})), ['Bravo'])
        self.assertEqual(self.titles(services.list_reports(self.alice, {'category': 'weekly'})), ['Delta'])

        with self.assertRaises(ValidationError):
            services.list_reports(self.alice, {'category': 'yearly'})

    def test_sort_by_title(self):
        result = services.list_reports(self.admin, {'sort_by': 'title', 'sort_order': 'asc'})

        self.assertEqual(self.titles(result), ['Alpha', 'Bravo', 'Charlie', 'Delta'])

    def test_list_user_reports(self):
        result = services.list_user_reports(self.bob, self.bob.pk, {})
        self.assertEqual(self.titles(result), ['Delta', 'Charlie'])

        result = services.list_user_reports(self.admin, self.alice.pk, {'sort_order': 'asc'})
        self.assertEqual(self.titles(result), ['Alpha', 'Bravo'])

        with self.assertRaises(PermissionDenied):
            services.list_user_reports(self.alice, self.bob.pk, {})


class ReportTagTests(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.alice = make_user('alice@example.com', name='Alice')
        make_report(cls.alice, title='Plain')
        make_report(cls.alice, title='Tagged', tags=['ab', 'cd'])
        make_report(cls.alice, title='Accent', tags=['café'])

    def search(self, value):
        result = services.list_reports(self.alice, {'search': value, 'sort_by': 'title', 'sort_order': 'asc'})
        return [report.title for report in result['items']]

    def test_search_matches_single_tags(self):
        self.assertEqual(self.search('CD'), ['Tagged'])
        self.assertEqual(self.search('café'), ['Accent'])

    def test_search_does_not_match_list_syntax(self):
        self.assertEqual(self.search('['), [])
        self.assertEqual(self.search('b", "c'), [])

    def test_update_replaces_tags(self):
        report = make_report(self.alice, title='Temp', tags=['old'])

        report = services.update_report(self.alice, report.pk, {'tags': ['new', 'new', 'other']})

        self.assertEqual(report.tags, ['new', 'other'])
