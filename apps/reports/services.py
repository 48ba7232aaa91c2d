"""
Service layer for reports app.

Services:
- list_reports: Scoped, filtered, sorted and paginated report list
- get_report: Single report with comments
- create_report: File a report, optionally linked to an own task
- update_report: Update report fields, stamping approval once
- delete_report: Hard delete (comments go with it)
- add_comment: Append a comment to a report
- list_user_reports: One author's reports (admin or the author)
"""

import logging

from django.core.exceptions import PermissionDenied
from django.db import transaction
from django.http import Http404
from django.utils import timezone

from apps.core.filters import validate_form
from apps.core.forms import CommentForm
from apps.core.pagination import paginate
from apps.core.permissions import (
    COMMENT, CREATE, DELETE, READ, REPORT, UPDATE,
    check_permission, is_admin, strip_restricted_fields,
)
from apps.tasks.models import Task

from .filters import build_report_list_query, report_queryset
from .forms import ReportForm
from .models import Comment, Report

logger = logging.getLogger(__name__)

# Only admins may set these when creating a report
APPROVAL_FIELDS = ('approved_by', 'approved_at')


def _report_detail_queryset():
    return report_queryset().prefetch_related('comments__user')


def _load_report(user, pk, operation, queryset=None):
    """
    Fetch a report and authorize the operation on it.

    Raises:
        Http404: unknown report
        PermissionDenied: operation not allowed for this caller
    """
    queryset = queryset if queryset is not None else Report.objects.all()
    try:
        report = queryset.get(pk=pk)
    except Report.DoesNotExist:
        raise Http404('Report not found')

    check_permission(user, REPORT, operation, report)
    return report


def _resolve_task(user, task_id):
    """
    Look up the task a report is linked to.

    Raises:
        Http404: no active task with this id
        PermissionDenied: a non-admin linking a task not assigned to them
    """
    if task_id is None:
        return None

    task = Task.objects.filter(pk=task_id, is_active=True).first()
    if task is None:
        raise Http404('Task not found')

    if not is_admin(user) and task.assigned_to_id != user.pk:
        raise PermissionDenied('You can only link reports to tasks assigned to you.')
    return task


def _author_create_payload(data):
    """
    Drop what a non-admin author may not set on a new report:
    the approval fields, and any status other than draft/submitted.
    """
    data = {key: value for key, value in data.items() if key not in APPROVAL_FIELDS}
    if data.get('status') not in (None, *Report.AUTHOR_STATUSES):
        data.pop('status')
    return data


def _stamp_approval(report, approver=None):
    """
    Record approval the first time a report is approved.

    Both stamps are conditional updates, so a concurrent approval can't
    overwrite them. approved_by is only filled in when nobody was named.
    """
    Report.objects.filter(
        pk=report.pk,
        status=Report.Status.APPROVED,
        approved_at__isnull=True,
    ).update(approved_at=timezone.now())

    if approver is not None:
        Report.objects.filter(
            pk=report.pk,
            status=Report.Status.APPROVED,
            approved_by__isnull=True,
        ).update(approved_by=approver)


def list_reports(user, params):
    """
    Report list for the caller.

    Admins see every report; other users their own plus public ones.

    Returns:
        dict with items, totalCount, page, limit and pageCount
    """
    return paginate(build_report_list_query(user, params))


def get_report(user, pk):
    return _load_report(user, pk, READ, queryset=_report_detail_queryset())


def create_report(user, data):
    """
    File a new report authored by the caller.

    Args:
        user: Author
        data: dict with title, content and optional date, task, status,
            category, tags, is_public (admins also approved_by/approved_at)

    Returns:
        Created Report instance

    Raises:
        ValidationError: invalid payload
        Http404: linked task missing or inactive
        PermissionDenied: linked task not assigned to a non-admin caller
    """
    check_permission(user, REPORT, CREATE)

    if not is_admin(user):
        data = _author_create_payload(data)

    form = ReportForm(data)
    cleaned = validate_form(form)
    task = _resolve_task(user, cleaned.get('task'))

    with transaction.atomic():
        report = form.save(commit=False)
        report.author = user
        report.task = task
        report.save()
        report.set_tags(cleaned['tags'])
        if report.status == Report.Status.APPROVED:
            _stamp_approval(report, approver=user)

    logger.info(f'Report {report.pk} created by {user.pk}')
    return _report_detail_queryset().get(pk=report.pk)


def update_report(user, pk, data):
    """
    Update a report.

    Authors may not change status, approved_by or approved_at; those keys
    are dropped from the payload, the rest still applies.

    Raises:
        Http404: unknown report, or newly linked task missing/inactive
        PermissionDenied: caller is neither admin nor author, or links a
            task not assigned to them
        ValidationError: invalid values
    """
    with transaction.atomic():
        report = _load_report(user, pk, UPDATE, queryset=Report.objects.select_for_update())
        was_approved = report.approved_at is not None
        data = strip_restricted_fields(user, REPORT, report, data)

        form = ReportForm(data, instance=report, partial=True)
        cleaned = validate_form(form)
        report = form.save(commit=False)
        if 'task' in cleaned:
            report.task = _resolve_task(user, cleaned['task'])
        report.save()
        if 'tags' in cleaned:
            report.set_tags(cleaned['tags'])

        if report.status == Report.Status.APPROVED:
            _stamp_approval(report, approver=user if is_admin(user) else None)
            if not was_approved:
                logger.info(f'Report {report.pk} approved by {user.pk}')

    return _report_detail_queryset().get(pk=report.pk)


def delete_report(user, pk):
    """
    Hard delete a report and its comments.

    Raises:
        Http404: unknown report
        PermissionDenied: caller is neither admin nor author
    """
    report = _load_report(user, pk, DELETE)
    report.delete()
    logger.info(f'Report {pk} deleted by {user.pk}')


def add_comment(user, pk, data):
    """
    Append a comment to a report.

    Returns:
        Created Comment instance

    Raises:
        Http404: unknown report
        PermissionDenied: private report of someone else
        ValidationError: empty or over-long content
    """
    report = _load_report(user, pk, COMMENT)
    cleaned = validate_form(CommentForm(data))

    comment = Comment.objects.create(report=report, user=user, content=cleaned['content'])
    return comment


def list_user_reports(user, user_id, params):
    """
    Every report written by one user.

    Raises:
        PermissionDenied: caller is neither admin nor that user
    """
    if not is_admin(user) and user.pk != user_id:
        raise PermissionDenied('Not authorized to view these reports.')

    queryset = report_queryset().filter(author_id=user_id)
    return paginate(build_report_list_query(user, params, queryset=queryset))
