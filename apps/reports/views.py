"""
Views for reports app.

Includes:
- Report list and create
- Report detail, update and delete
- Comments
- Reports of a single user
"""

from django.views.decorators.http import require_GET, require_http_methods, require_POST

from apps.core.http import (
    api_login_required, json_list, json_success, parse_json_body, underscore_keys,
)
from apps.core.serializers import serialize_comment

from . import services
from .serializers import serialize_report


@require_http_methods(['GET', 'POST'])
@api_login_required
def report_list(request):
    """
    GET: reports visible to the caller (filters, sorting, pagination).
    POST: file a new report.
    """
    if request.method == 'POST':
        report = services.create_report(request.user, parse_json_body(request))
        return json_success(
            data=serialize_report(report, include_comments=True),
            message='Report created successfully',
            status=201,
        )

    result = services.list_reports(request.user, underscore_keys(request.GET))
    return json_list(result, serialize_report)


@require_GET
@api_login_required
def user_reports(request, user_id):
    result = services.list_user_reports(request.user, user_id, underscore_keys(request.GET))
    return json_list(result, serialize_report)


@require_http_methods(['GET', 'PUT', 'PATCH', 'DELETE'])
@api_login_required
def report_detail(request, pk):
    if request.method == 'GET':
        report = services.get_report(request.user, pk)
        return json_success(data=serialize_report(report, include_comments=True))

    if request.method == 'DELETE':
        services.delete_report(request.user, pk)
        return json_success(message='Report deleted successfully')

    report = services.update_report(request.user, pk, parse_json_body(request))
    return json_success(
        data=serialize_report(report, include_comments=True),
        message='Report updated successfully',
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
