"""
Views for tasks app.

Includes:
- Task list and create
- Task detail, update and soft delete
- Comments
- Search, my tasks and statistics
"""

from django.views.decorators.http import require_GET, require_http_methods, require_POST

from apps.core.http import (
    api_login_required, json_list, json_success, parse_json_body, underscore_keys,
)

from . import services
from .serializers import serialize_task, serialize_task_stats
from apps.core.serializers import serialize_comment


# =============================================================================
# Collection Views
# =============================================================================

@require_http_methods(['GET', 'POST'])
@api_login_required
def task_list(request):
    """
    GET: tasks visible to the caller (filters, sorting, pagination).
    POST: create a task (admin only).
    """
    if request.method == 'POST':
        task = services.create_task(request.user, parse_json_body(request))
        return json_success(
            data=serialize_task(task, include_comments=True),
            message='Task created successfully',
            status=201,
        )

    result = services.list_tasks(request.user, underscore_keys(request.GET))
    return json_list(result, serialize_task)


@require_GET
@api_login_required
def task_search(request):
    tasks = services.search_tasks(
        request.user,
        request.GET.get('q', ''),
        statuses=request.GET.getlist('status') or None,
        limit=request.GET.get('limit'),
    )
    return json_success(data=[serialize_task(task) for task in tasks], count=len(tasks))


@require_GET
@api_login_required
def my_tasks(request):
    tasks = services.get_my_tasks(request.user, limit=request.GET.get('limit'))
    return json_success(data=[serialize_task(task) for task in tasks], count=len(tasks))


@require_GET
@api_login_required
def task_stats(request):
    stats = services.get_task_stats(request.user)
    return json_success(data=serialize_task_stats(stats))


# =============================================================================
# Single Task Views
# =============================================================================

@require_http_methods(['GET', 'PUT', 'PATCH', 'DELETE'])
@api_login_required
def task_detail(request, pk):
    if request.method == 'GET':
        task = services.get_task(request.user, pk)
        return json_success(data=serialize_task(task, include_comments=True))

    if request.method == 'DELETE':
        services.delete_task(request.user, pk)
        return json_success(message='Task deleted successfully')

    task = services.update_task(request.user, pk, parse_json_body(request))
    return json_success(
        data=serialize_task(task, include_comments=True),
        message='Task updated successfully',
    )


@require_POST
@api_login_required
def add_comment_view(request, pk):
    comment = services.add_comment(request.user, pk, parse_json_body(request))
    return json_success(
        data=serialize_comment(comment),
        message='Comment added successfully',
        status=201,
    )
