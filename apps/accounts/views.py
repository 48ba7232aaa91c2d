"""
Views for accounts app.

Includes:
- Authentication views (register, login, logout, current user)
- Profile and password change
- User management views (admin only)
"""

import logging

from django.contrib.auth import authenticate, login, logout, update_session_auth_hash
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from apps.core.filters import validate_form
from apps.core.http import (
    admin_required, api_login_required, json_error, json_list, json_success,
    parse_json_body, underscore_keys,
)

from . import services
from .forms import LoginForm
from .serializers import serialize_user

logger = logging.getLogger(__name__)


# =============================================================================
# Authentication Views
# =============================================================================

@require_POST
def register_view(request):
    """Create an account and start a session for it."""
    user = services.register_user(parse_json_body(request))
    login(request, user, backend='apps.accounts.backends.EmailAuthBackend')
    return json_success(
        data=serialize_user(user),
        message='User registered successfully',
        status=201,
    )


@require_POST
def login_view(request):
    """
    Email + password login.
    Inactive accounts and wrong credentials both answer 401.
    """
    cleaned = validate_form(LoginForm(parse_json_body(request)))
    user = authenticate(request, email=cleaned['email'], password=cleaned['password'])

    if user is None:
        logger.info(f'Failed login attempt for {cleaned["email"]}')
        return json_error('Invalid credentials', status=401)

    login(request, user)
    return json_success(data=serialize_user(user), message='Login successful')


@require_POST
@api_login_required
def logout_view(request):
    logout(request)
    return json_success(message='Logged out successfully')


@require_GET
@api_login_required
def current_user_view(request):
    return json_success(data=serialize_user(request.user))


@require_http_methods(['PUT', 'PATCH'])
@api_login_required
def profile_view(request):
    user = services.update_profile(request.user, parse_json_body(request))
    return json_success(data=serialize_user(user), message='Profile updated successfully')


@require_http_methods(['PUT', 'POST'])
@api_login_required
def password_change_view(request):
    user = services.change_password(request.user, parse_json_body(request))
    # Keep the current session valid after the hash changes
    update_session_auth_hash(request, user)
    return json_success(message='Password changed successfully')


# =============================================================================
# User Management Views (Admin only)
# =============================================================================

@require_GET
@admin_required
def user_list_view(request):
    result = services.list_users(underscore_keys(request.GET))
    return json_list(result, serialize_user)


@require_http_methods(['GET', 'PUT', 'PATCH', 'DELETE'])
@admin_required
def user_detail_view(request, pk):
    if request.method == 'GET':
        return json_success(data=serialize_user(services.get_user(pk)))

    if request.method == 'DELETE':
        services.delete_user(request.user, pk)
        return json_success(message='User deleted successfully')

    user = services.update_user(request.user, pk, parse_json_body(request))
    return json_success(data=serialize_user(user), message='User updated successfully')
