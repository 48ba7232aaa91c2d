"""
JSON request/response helpers for API views.

The wire format is camelCase (dueDate, isPublic); services and forms work
with snake_case names. Views translate at the boundary with these helpers.
"""

import json
import re
from functools import wraps

from django.core.exceptions import PermissionDenied, ValidationError
from django.http import JsonResponse

from .pagination import calculate_pagination
from .permissions import is_admin


_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')


def to_snake_case(name):
    """dueDate -> due_date"""
    return _CAMEL_BOUNDARY.sub('_', name).lower()


def to_camel_case(name):
    """due_date -> dueDate. Names starting with an underscore are kept."""
    if name.startswith('_'):
        return name
    head, *rest = name.split('_')
    return head + ''.join(part.title() for part in rest)


def underscore_keys(data):
    """Return a plain dict with snake_case keys (works for QueryDict too)."""
    return {to_snake_case(key): data.get(key) for key in data}


def camelize_errors(error):
    """Field errors of a ValidationError keyed by camelCase field names."""
    if hasattr(error, 'error_dict'):
        return {to_camel_case(field): messages for field, messages in error.message_dict.items()}
    return {'__all__': error.messages}


def parse_json_body(request):
    """
    Decode a JSON object request body into a snake_case dict.

    Raises:
        ValidationError: body is not valid JSON or not an object
    """
    if not request.body:
        return {}
    try:
        payload = json.loads(request.body)
    except ValueError:
        raise ValidationError('Request body must be valid JSON.')
    if not isinstance(payload, dict):
        raise ValidationError('Request body must be a JSON object.')
    return underscore_keys(payload)


def json_success(data=None, message=None, status=200, **extra):
    """Build the standard {"success": true, ...} response."""
    body = {'success': True}
    if message:
        body['message'] = message
    body.update(extra)
    if data is not None:
        body['data'] = data
    return JsonResponse(body, status=status)


def json_error(message, status, errors=None):
    """Build the standard {"success": false, ...} response."""
    body = {'success': False, 'message': message}
    if errors:
        body['errors'] = errors
    return JsonResponse(body, status=status)


def json_list(result, serialize):
    """
    Build a list response from a paginate() result.

    Carries the items under data plus totalCount, page, limit, pageCount
    and the full pagination block.
    """
    return json_success(
        data=[serialize(item) for item in result['items']],
        totalCount=result['totalCount'],
        page=result['page'],
        limit=result['limit'],
        pageCount=result['pageCount'],
        pagination=calculate_pagination(result['page'], result['limit'], result['totalCount']),
    )


# =============================================================================
# View Decorators
# =============================================================================

def api_login_required(view_func):
    """
    Require an authenticated session.

    Unlike django's login_required this answers 401 JSON instead of
    redirecting to a login page.
    """
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return json_error('Authentication required', status=401)
        return view_func(request, *args, **kwargs)
    return wrapper


def admin_required(view_func):
    """Require an authenticated admin (403 for other users)."""
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not is_admin(request.user):
            raise PermissionDenied('Admin access required.')
        return view_func(request, *args, **kwargs)
    return api_login_required(wrapper)
