"""
JSON projections of users.
"""


def user_summary(user):
    """Display projection used wherever a user is referenced."""
    if user is None:
        return None
    return {
        'id': user.pk,
        'name': user.name,
        'email': user.email,
    }


def serialize_user(user):
    """Full user record (never includes the password hash)."""
    return {
        'id': user.pk,
        'name': user.name,
        'email': user.email,
        'role': user.role,
        'isActive': user.is_active,
        'lastLogin': user.last_login.isoformat() if user.last_login else None,
        'createdAt': user.created_at.isoformat() if user.created_at else None,
        'updatedAt': user.updated_at.isoformat() if user.updated_at else None,
    }
