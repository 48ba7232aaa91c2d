"""
Task filters using django-filter.

Provides the list query pieces for task endpoints:
- Visibility scope (admins see every active task, users their own)
- Status / priority / category filters
- Assigned to / assigned by filters (admin only)
- Search (title, description, tags)
- Priority ordering by rank
"""

import django_filters
from django.db.models import Case, Exists, IntegerField, OuterRef, Q, Value, When

from apps.core.filters import apply_filterset, build_list_query
from apps.core.permissions import is_admin

from .models import Tag, Task


TASK_SORT_FIELDS = {
    'title': 'title',
    'status': 'status',
    'priority': 'priority_order',
    'due_date': 'due_date',
    'created_at': 'created_at',
    'updated_at': 'updated_at',
}

DEFAULT_SEARCH_STATUSES = [Task.Status.PENDING, Task.Status.IN_PROGRESS]


def visible_tasks(user):
    """
    Active tasks the user may list.

    Soft-deleted tasks never show up in listings, not even for admins.
    """
    queryset = Task.objects.filter(is_active=True).select_related('assigned_to', 'assigned_by')
    if not is_admin(user):
        queryset = queryset.filter(assigned_to=user)
    return queryset


def with_priority_order(queryset):
    """Annotate priority_order: low=1 ... urgent=4."""
    priority_order = Case(
        *[When(priority=priority, then=Value(rank)) for priority, rank in Task.PRIORITY_RANK.items()],
        default=Value(0),
        output_field=IntegerField()
    )
    return queryset.annotate(priority_order=priority_order)


def urgency_ordering():
    """Soonest due first, higher priority first on the same due date."""
    return ('due_date', '-priority_order', 'pk')


class TaskFilter(django_filters.FilterSet):
    """
    Task filter for list views.

    Usage in services:
        filterset = TaskFilter(params, queryset=visible_tasks(user), user=user)
        tasks = apply_filterset(filterset)
    """

    search = django_filters.CharFilter(method='filter_search')
    status = django_filters.ChoiceFilter(choices=Task.Status.choices)
    priority = django_filters.ChoiceFilter(choices=Task.Priority.choices)
    category = django_filters.ChoiceFilter(choices=Task.Category.choices)

    # Admin only, removed for other users in __init__
    assigned_to = django_filters.NumberFilter(field_name='assigned_to_id')
    assigned_by = django_filters.NumberFilter(field_name='assigned_by_id')

    ADMIN_ONLY_FILTERS = ('assigned_to', 'assigned_by')

    class Meta:
        model = Task
        fields = ['status', 'priority', 'category']

    def __init__(self, data=None, queryset=None, *, user=None, **kwargs):
        super().__init__(data, queryset, **kwargs)
        self.user = user

        # Other users can only ever see their own tasks
        if not is_admin(user):
            for name in self.ADMIN_ONLY_FILTERS:
                self.filters.pop(name, None)

    def filter_search(self, queryset, name, value):
        """
        Search across title, description and tags.
        Case-insensitive partial matching; a tag matches only on its own
        name.
        """
        value = value.strip()
        if not value:
            return queryset

        return queryset.filter(
            Q(title__icontains=value) |
            Q(description__icontains=value) |
            Exists(Tag.objects.filter(task=OuterRef('pk'), name__icontains=value))
        )


def build_task_list_query(user, params):
    """
    Scope, filter, sort and page a task listing.

    Returns:
        ListQuery

    Raises:
        ValidationError: bad filter, sort or page values
    """
    queryset = with_priority_order(visible_tasks(user)).prefetch_related('tag_set')
    queryset = apply_filterset(TaskFilter(params, queryset=queryset, user=user))
    return build_list_query(
        queryset,
        params,
        sort_fields=TASK_SORT_FIELDS,
        default_sort='created_at',
    )
