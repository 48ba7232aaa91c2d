"""
Serialization helpers shared by the app serializers.
"""

from apps.accounts.serializers import user_summary


def isoformat(value):
    """ISO-8601 string for a date/datetime, None passes through."""
    return value.isoformat() if value is not None else None


def serialize_comment(comment):
    """Comment with its author resolved to {id, name, email}."""
    return {
        'id': comment.pk,
        'user': user_summary(comment.user),
        'content': comment.content,
        'createdAt': isoformat(comment.created_at),
    }
