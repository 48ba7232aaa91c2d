"""
Service layer for tasks app.

All business logic for task operations is centralized here.
Views pass the authenticated user plus a snake_case payload or params
dict; services return Task/Comment instances or list-result dicts.

Services:
- list_tasks: Scoped, filtered, sorted and paginated task list
- get_task: Single task with comments
- create_task: Create new task (admin only)
- update_task: Update task fields, stamping completed_date once
- delete_task: Soft delete (is_active=False)
- add_comment: Append a comment to a task
- search_tasks: Search own open tasks
- get_my_tasks: Own active tasks, most urgent first
- get_task_stats: Counts by status/priority plus overdue count
"""

import logging

from django.db import transaction
from django.db.models import Count, Q
from django.http import Http404
from django.utils import timezone

from apps.core.filters import parse_limit, validate_form
from apps.core.forms import CommentForm
from apps.core.pagination import paginate
from apps.core.permissions import (
    COMMENT, CREATE, DELETE, READ, TASK, UPDATE,
    check_permission, is_admin, strip_restricted_fields,
)

from .filters import build_task_list_query, urgency_ordering, visible_tasks, with_priority_order
from .forms import TaskForm, TaskSearchForm
from .models import Comment, Task

logger = logging.getLogger(__name__)

SEARCH_DEFAULT_LIMIT = 20
MY_TASKS_DEFAULT_LIMIT = 50


def _task_detail_queryset():
    return Task.objects.select_related('assigned_to', 'assigned_by').prefetch_related('tag_set', 'comments__user')


def _load_task(user, pk, operation, queryset=None):
    """
    Fetch a task and authorize the operation on it.

    Soft-deleted tasks only exist for admins.

    Raises:
        Http404: unknown task, or inactive task for a non-admin
        PermissionDenied: operation not allowed for this caller
    """
    queryset = queryset if queryset is not None else Task.objects.all()
    try:
        task = queryset.get(pk=pk)
    except Task.DoesNotExist:
        raise Http404('Task not found')

    if not task.is_active and not is_admin(user):
        raise Http404('Task not found')

    check_permission(user, TASK, operation, task)
    return task


def _stamp_completed_date(task):
    """
    Set completed_date the first time a task is completed.

    Conditional update, so concurrent completions can't overwrite it.
    """
    Task.objects.filter(
        pk=task.pk,
        status=Task.Status.COMPLETED,
        completed_date__isnull=True,
    ).update(completed_date=timezone.now())


def list_tasks(user, params):
    """
    Task list for the caller.

    Admins see every active task, other users only tasks assigned to them.

    Returns:
        dict with items, totalCount, page, limit and pageCount
    """
    return paginate(build_task_list_query(user, params))


def get_task(user, pk):
    return _load_task(user, pk, READ, queryset=_task_detail_queryset())


def create_task(user, data):
    """
    Create a task assigned by the calling admin.

    Args:
        user: Admin creating the task (becomes assigned_by)
        data: dict with title, description, assigned_to, due_date and
            optional status, priority, category, tags, start_date,
            estimated_hours, actual_hours

    Returns:
        Created Task instance

    Raises:
        PermissionDenied: caller is not an admin (checked before validation)
        ValidationError: invalid payload or unknown/inactive assignee
    """
    check_permission(user, TASK, CREATE)

    form = TaskForm(data)
    validate_form(form)

    with transaction.atomic():
        task = form.save(commit=False)
        task.assigned_by = user
        task.save()
        task.set_tags(form.cleaned_data['tags'])
        if task.status == Task.Status.COMPLETED:
            _stamp_completed_date(task)

    logger.info(f'Task {task.pk} created by {user.pk}, assigned to {task.assigned_to_id}')
    return _task_detail_queryset().get(pk=task.pk)


def update_task(user, pk, data):
    """
    Update a task.

    The assignee may not change assigned_to, assigned_by or priority;
    those keys are dropped from the payload, the rest still applies.
    Admins may also hand the task over to another admin (assigned_by).

    Raises:
        Http404: unknown task (or inactive for non-admins)
        PermissionDenied: caller is neither admin nor assignee
        ValidationError: invalid values
    """
    with transaction.atomic():
        task = _load_task(user, pk, UPDATE, queryset=Task.objects.select_for_update())
        data = strip_restricted_fields(user, TASK, task, data)

        form = TaskForm(data, instance=task, partial=True)
        validate_form(form)
        task = form.save()
        if 'tags' in form.cleaned_data:
            task.set_tags(form.cleaned_data['tags'])

        if task.status == Task.Status.COMPLETED:
            _stamp_completed_date(task)

    logger.debug(f'Task {task.pk} updated by {user.pk}: {sorted(form.cleaned_data)}')
    return _task_detail_queryset().get(pk=task.pk)


def delete_task(user, pk):
    """
    Soft delete: only is_active changes. Deleting twice is harmless.

    Raises:
        Http404: unknown task
        PermissionDenied: caller is not an admin
    """
    task = _load_task(user, pk, DELETE)
    Task.objects.filter(pk=task.pk).update(is_active=False)
    logger.info(f'Task {task.pk} deactivated by {user.pk}')


def add_comment(user, pk, data):
    """
    Append a comment to a task.

    Returns:
        Created Comment instance

    Raises:
        Http404: unknown task (or inactive for non-admins)
        PermissionDenied: caller may not comment on this task
        ValidationError: empty or over-long content
    """
    task = _load_task(user, pk, COMMENT)
    cleaned = validate_form(CommentForm(data))

    comment = Comment.objects.create(task=task, user=user, content=cleaned['content'])
    return comment


def search_tasks(user, query, statuses=None, limit=None):
    """
    Search the caller's own active tasks by title or description.

    Args:
        query: Search text, at least 2 characters after trimming
        statuses: list or comma separated string (default pending,
            in_progress)
        limit: max results (default 20, max 100)

    Returns:
        list of Task, soonest due first then highest priority
    """
    cleaned = validate_form(TaskSearchForm({'q': query, 'status': statuses}))
    limit = parse_limit(limit, default=SEARCH_DEFAULT_LIMIT)
    query = cleaned['q']

    queryset = with_priority_order(
        Task.objects.filter(
            is_active=True,
            assigned_to=user,
            status__in=cleaned['status'],
        ).filter(
            Q(title__icontains=query) |
            Q(description__icontains=query)
        ).select_related('assigned_to', 'assigned_by').prefetch_related('tag_set')
    )
    return list(queryset.order_by(*urgency_ordering())[:limit])


def get_my_tasks(user, limit=None):
    """Own active tasks of any status, most urgent first (default 50)."""
    limit = parse_limit(limit, default=MY_TASKS_DEFAULT_LIMIT)
    queryset = with_priority_order(
        Task.objects.filter(is_active=True, assigned_to=user)
        .select_related('assigned_to', 'assigned_by')
        .prefetch_related('tag_set')
    )
    return list(queryset.order_by(*urgency_ordering())[:limit])


def get_task_stats(user):
    """
    Statistics over the tasks the caller can list.

    Returns:
        dict with total, by_status and by_priority (every choice present,
        zero-filled) and overdue_count (not completed or cancelled, due
        date in the past)
    """
    queryset = visible_tasks(user)

    by_status = dict.fromkeys(Task.Status.values, 0)
    for row in queryset.order_by().values('status').annotate(count=Count('id')):
        by_status[row['status']] = row['count']

    by_priority = dict.fromkeys(Task.Priority.values, 0)
    for row in queryset.order_by().values('priority').annotate(count=Count('id')):
        by_priority[row['priority']] = row['count']

    overdue_count = queryset.exclude(
        status__in=[Task.Status.COMPLETED, Task.Status.CANCELLED]
    ).filter(due_date__lt=timezone.now()).count()

    return {
        'total': sum(by_status.values()),
        'by_status': by_status,
        'by_priority': by_priority,
        'overdue_count': overdue_count,
    }
