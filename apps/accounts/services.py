"""
Service layer for accounts app.

Centralized business logic for:
- Registration
- Profile and password changes
- Admin user management (list, get, update, delete)
"""

import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import ProtectedError
from django.shortcuts import get_object_or_404

from apps.core.exceptions import ConflictError
from apps.core.filters import apply_filterset, build_list_query, validate_form
from apps.core.pagination import paginate

from .filters import USER_SORT_FIELDS, UserFilter
from .forms import (
    AdminUserUpdateForm, PasswordChangeForm, ProfileForm, RegisterForm,
)

logger = logging.getLogger(__name__)

User = get_user_model()

DUPLICATE_EMAIL_MESSAGE = 'User already exists with this email'


def _ensure_email_available(email, exclude_pk=None):
    """Raise ConflictError if another account already uses this email."""
    queryset = User.objects.filter(email__iexact=email)
    if exclude_pk is not None:
        queryset = queryset.exclude(pk=exclude_pk)
    if queryset.exists():
        raise ConflictError(DUPLICATE_EMAIL_MESSAGE)


def _save_user(user, update_fields=None):
    """Save, turning a lost race on the email unique index into a conflict."""
    try:
        with transaction.atomic():
            user.save(update_fields=update_fields)
    except IntegrityError:
        raise ConflictError(DUPLICATE_EMAIL_MESSAGE)


def register_user(data):
    """
    Create a new account with the user role.

    Args:
        data: dict with name, email and password

    Returns:
        Created User instance

    Raises:
        ValidationError: invalid name/email or weak password
        ConflictError: email already registered
    """
    cleaned = validate_form(RegisterForm(data))
    _ensure_email_available(cleaned['email'])

    user = User(
        name=cleaned['name'].strip(),
        email=cleaned['email'],
        role=User.Role.USER,
    )
    user.set_password(cleaned['password'])
    _save_user(user)

    logger.info(f'User registered: {user.email} (id={user.pk})')
    return user


def update_profile(user, data):
    """
    Update the caller's own name and/or email.

    Raises:
        ValidationError: invalid values
        ConflictError: email taken by another account
    """
    cleaned = validate_form(ProfileForm(data, partial=True))

    if 'email' in cleaned:
        _ensure_email_available(cleaned['email'], exclude_pk=user.pk)

    for field, value in cleaned.items():
        setattr(user, field, value.strip() if field == 'name' else value)

    if cleaned:
        _save_user(user, update_fields=[*cleaned, 'updated_at'])
    return user


def change_password(user, data):
    """
    Change the caller's password after checking the current one.

    Raises:
        ValidationError: wrong current password or new password rejected
            by the password validators
    """
    cleaned = validate_form(PasswordChangeForm(user, data))
    user.set_password(cleaned['new_password'])
    user.save(update_fields=['password', 'updated_at'])

    logger.info(f'Password changed for user {user.pk}')
    return user


# =============================================================================
# Admin user management
# =============================================================================

def list_users(params):
    """
    Paginated user list for admins.

    Args:
        params: dict with role, is_active, search, sort_by, sort_order,
            page and limit (all optional)

    Returns:
        dict with items, totalCount, page, limit and pageCount
    """
    queryset = apply_filterset(UserFilter(params, queryset=User.objects.all()))
    list_query = build_list_query(
        queryset,
        params,
        sort_fields=USER_SORT_FIELDS,
        default_sort='created_at',
    )
    return paginate(list_query)


def get_user(pk):
    return get_object_or_404(User, pk=pk)


def update_user(admin, pk, data):
    """
    Update name, email, role and/or active flag of any account.

    Raises:
        Http404: unknown user
        ValidationError: invalid values
        ConflictError: email taken by another account
    """
    user = get_object_or_404(User, pk=pk)
    cleaned = validate_form(AdminUserUpdateForm(data, partial=True))

    if 'email' in cleaned:
        _ensure_email_available(cleaned['email'], exclude_pk=user.pk)

    for field, value in cleaned.items():
        setattr(user, field, value.strip() if field == 'name' else value)

    if cleaned:
        _save_user(user, update_fields=[*cleaned, 'updated_at'])
        logger.info(f'User {user.pk} updated by admin {admin.pk}: {sorted(cleaned)}')
    return user


def delete_user(admin, pk):
    """
    Hard delete an account.

    Raises:
        Http404: unknown user
        ValidationError: admin tried to delete their own account
        ConflictError: user still owns tasks, reports or comments
    """
    user = get_object_or_404(User, pk=pk)

    if user.pk == admin.pk:
        raise ValidationError('You cannot delete your own account.')

    try:
        user.delete()
    except ProtectedError:
        raise ConflictError(
            'User is still referenced by tasks, reports or comments. '
            'Deactivate the account instead.'
        )

    logger.info(f'User {pk} deleted by admin {admin.pk}')
