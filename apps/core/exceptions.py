"""
Error types shared across apps.

Validation, not-found and permission failures use Django's own exceptions
(ValidationError, Http404, PermissionDenied). Only conflicts need a type
of their own.
"""


class ConflictError(Exception):
    """Request clashes with existing state, e.g. a duplicate email."""

    def __init__(self, message='Resource conflict'):
        super().__init__(message)
        self.message = message
