"""
Report filters using django-filter.

Provides the list query pieces for report endpoints:
- Visibility scope (admins see everything, users their own + public)
- Status / category filters
- Author filter (admin only)
- Date range (start_date / end_date)
- Search (title, content, tags)
"""

import django_filters
from django.db.models import Exists, OuterRef, Q

from apps.core.filters import apply_filterset, build_list_query
from apps.core.permissions import is_admin

from .models import Report, Tag


REPORT_SORT_FIELDS = {
    'date': 'date',
    'title': 'title',
    'status': 'status',
    'created_at': 'created_at',
}


def report_queryset():
    return Report.objects.select_related('author', 'task', 'approved_by').prefetch_related('tag_set')


def visible_reports(user):
    """Reports the user may list: everything for admins, else own or public."""
    queryset = report_queryset()
    if not is_admin(user):
        queryset = queryset.filter(Q(author=user) | Q(is_public=True))
    return queryset


class ReportFilter(django_filters.FilterSet):
    """
    Report filter for list views.

    Usage in services:
        filterset = ReportFilter(params, queryset=visible_reports(user), user=user)
        reports = apply_filterset(filterset)
    """

    search = django_filters.CharFilter(method='filter_search')
    status = django_filters.ChoiceFilter(choices=Report.Status.choices)
    category = django_filters.ChoiceFilter(choices=Report.Category.choices)

    # Date range on the report date, either bound may be left out
    start_date = django_filters.DateTimeFilter(field_name='date', lookup_expr='gte')
    end_date = django_filters.DateTimeFilter(field_name='date', lookup_expr='lte')

    # Admin only, removed for other users in __init__
    author = django_filters.NumberFilter(field_name='author_id')

    class Meta:
        model = Report
        fields = ['status', 'category']

    def __init__(self, data=None, queryset=None, *, user=None, **kwargs):
        super().__init__(data, queryset, **kwargs)
        self.user = user

        if not is_admin(user):
            self.filters.pop('author', None)

    def filter_search(self, queryset, name, value):
        """
        Search across title, content and tags.
        Case-insensitive partial matching; a tag matches only on its own
        name.
        """
        value = value.strip()
        if not value:
            return queryset

        return queryset.filter(
            Q(title__icontains=value) |
            Q(content__icontains=value) |
            Exists(Tag.objects.filter(report=OuterRef('pk'), name__icontains=value))
        )


def build_report_list_query(user, params, queryset=None):
    """
    Filter, sort and page a report listing.

    Args:
        user: Caller (decides scope and admin-only filters)
        params: snake_case query parameters
        queryset: Scope to start from (default: visible_reports(user))

    Returns:
        ListQuery

    Raises:
        ValidationError: bad filter, sort or page values
    """
    if queryset is None:
        queryset = visible_reports(user)
    queryset = apply_filterset(ReportFilter(params, queryset=queryset, user=user))
    return build_list_query(
        queryset,
        params,
        sort_fields=REPORT_SORT_FIELDS,
        default_sort='date',
    )
