"""
JSON projections of reports.
"""

from apps.accounts.serializers import user_summary
from apps.core.serializers import isoformat, serialize_comment
from apps.tasks.serializers import task_summary


def serialize_report(report, include_comments=False):
    data = {
        'id': report.pk,
        'title': report.title,
        'content': report.content,
        'date': isoformat(report.date),
        'author': user_summary(report.author),
        'task': task_summary(report.task),
        'status': report.status,
        'category': report.category,
        'tags': report.tags,
        'approvedBy': user_summary(report.approved_by),
        'approvedAt': isoformat(report.approved_at),
        'isPublic': report.is_public,
        'createdAt': isoformat(report.created_at),
        'updatedAt': isoformat(report.updated_at),
    }
    if include_comments:
        data['comments'] = [serialize_comment(comment) for comment in report.comments.all()]
    return data
