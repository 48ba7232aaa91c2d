"""
JSON projections of tasks.
"""

from apps.accounts.serializers import user_summary
from apps.core.serializers import isoformat, serialize_comment


def task_summary(task):
    """Short task reference embedded in reports."""
    if task is None:
        return None
    return {
        'id': task.pk,
        'title': task.title,
        'status': task.status,
        'priority': task.priority,
        'dueDate': isoformat(task.due_date),
    }


def serialize_task(task, include_comments=False):
    data = {
        'id': task.pk,
        'title': task.title,
        'description': task.description,
        'assignedTo': user_summary(task.assigned_to),
        'assignedBy': user_summary(task.assigned_by),
        'status': task.status,
        'priority': task.priority,
        'category': task.category,
        'dueDate': isoformat(task.due_date),
        'startDate': isoformat(task.start_date),
        'completedDate': isoformat(task.completed_date),
        'tags': task.tags,
        'isActive': task.is_active,
        'estimatedHours': task.estimated_hours,
        'actualHours': task.actual_hours,
        'isOverdue': task.is_overdue,
        'daysUntilDue': task.days_until_due,
        'createdAt': isoformat(task.created_at),
        'updatedAt': isoformat(task.updated_at),
    }
    if include_comments:
        data['comments'] = [serialize_comment(comment) for comment in task.comments.all()]
    return data


def serialize_task_stats(stats):
    return {
        'total': stats['total'],
        'byStatus': stats['by_status'],
        'byPriority': stats['by_priority'],
        'overdueCount': stats['overdue_count'],
    }
