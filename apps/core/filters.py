"""
Shared pieces of the list query builder.

Each app builds its own scoped queryset and django-filter FilterSet; the
sort/page parameters and the final ListQuery are common to all of them.
"""

from django import forms
from django.conf import settings
from django.core.exceptions import ValidationError

from .http import to_snake_case


SORT_ORDER_CHOICES = [
    ('asc', 'Ascending'),
    ('desc', 'Descending'),
]


class ListQuery:
    """
    A list request ready for the database: the scoped and filtered
    queryset, its ordering, and the requested page window.
    """

    def __init__(self, queryset, ordering, page, limit):
        self.queryset = queryset
        self.ordering = tuple(ordering)
        self.page = page
        self.limit = limit

    @property
    def skip(self):
        return (self.page - 1) * self.limit

    def __repr__(self):
        return (
            f'<ListQuery ordering={self.ordering} page={self.page} '
            f'limit={self.limit}>'
        )


class ListParamsForm(forms.Form):
    """Validate page, limit, sort_by and sort_order query parameters."""

    page = forms.IntegerField(required=False, min_value=1)
    sort_by = forms.ChoiceField(required=False)
    sort_order = forms.ChoiceField(required=False, choices=SORT_ORDER_CHOICES)

    def __init__(self, data=None, *, sort_fields=(), **kwargs):
        super().__init__(data, **kwargs)
        self.fields['limit'] = forms.IntegerField(
            required=False,
            min_value=1,
            max_value=settings.API_MAX_PAGE_SIZE,
        )
        self.fields['sort_by'].choices = [(name, name) for name in sort_fields]


def validate_form(form):
    """Return cleaned_data or raise ValidationError with field errors."""
    if not form.is_valid():
        raise ValidationError(form.errors.as_data())
    return form.cleaned_data


def apply_filterset(filterset):
    """Return the filtered queryset, rejecting invalid filter values."""
    if not filterset.is_valid():
        raise ValidationError(filterset.errors.as_data())
    return filterset.qs


def build_list_query(queryset, params, sort_fields, default_sort):
    """
    Combine a filtered queryset with validated sort and page parameters.

    Args:
        queryset: Already scoped and filtered queryset
        params: Mapping of query parameters (snake_case keys)
        sort_fields: Mapping of allowed sort_by values to model fields
        default_sort: sort_by value used when none is given

    Returns:
        ListQuery

    Raises:
        ValidationError: unknown sort field, bad sort order, or page/limit
            out of range
    """
    params = dict(params or {})
    if params.get('sort_by'):
        # sortBy=dueDate on the wire
        params['sort_by'] = to_snake_case(params['sort_by'])
    cleaned = validate_form(ListParamsForm(params, sort_fields=list(sort_fields)))

    page = cleaned.get('page') or 1
    limit = cleaned.get('limit') or settings.API_PAGE_SIZE
    sort_by = cleaned.get('sort_by') or default_sort
    sort_order = cleaned.get('sort_order') or 'desc'

    prefix = '-' if sort_order == 'desc' else ''
    ordering = (f'{prefix}{sort_fields[sort_by]}', f'{prefix}pk')

    return ListQuery(queryset, ordering, page, limit)


def parse_limit(value, default, maximum=None):
    """
    Validate a bare limit parameter (search and my-tasks endpoints).

    Raises:
        ValidationError: not an integer or outside 1..maximum
    """
    maximum = maximum or settings.API_MAX_PAGE_SIZE
    if value in (None, ''):
        return default
    field = forms.IntegerField(min_value=1, max_value=maximum)
    try:
        return field.clean(value)
    except ValidationError as e:
        raise ValidationError({'limit': e.messages})
