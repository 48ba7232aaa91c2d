"""
Error translation for the JSON API.

Services raise Django's ValidationError / Http404 / PermissionDenied or
ConflictError; this middleware turns them into JSON responses for any
request under settings.API_PATH_PREFIX. Anything else is logged and
reported as a generic server error without internal detail.
"""

import logging

from django.conf import settings
from django.core.exceptions import PermissionDenied, ValidationError
from django.http import Http404

from .exceptions import ConflictError
from .http import camelize_errors, json_error

logger = logging.getLogger(__name__)


class ApiErrorMiddleware:
    """Map typed failures raised by API views to JSON error bodies."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        prefix = getattr(settings, 'API_PATH_PREFIX', '/api/')
        if not request.path.startswith(prefix):
            return None

        if isinstance(exception, ValidationError):
            return json_error('Validation failed', status=400, errors=camelize_errors(exception))

        if isinstance(exception, Http404):
            return json_error(str(exception) or 'Not found', status=404)

        if isinstance(exception, PermissionDenied):
            return json_error(str(exception) or 'Forbidden', status=403)

        if isinstance(exception, ConflictError):
            return json_error(exception.message, status=409)

        logger.exception(f'Unhandled error on {request.method} {request.path}')
        return json_error('Server error', status=500)
