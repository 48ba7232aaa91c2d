"""
User filters using django-filter.

Admin user listing:
- Role filter
- Active flag
- Search (name, email)
"""

import django_filters
from django.db.models import Q

from .models import User


USER_SORT_FIELDS = {
    'name': 'name',
    'email': 'email',
    'role': 'role',
    'created_at': 'created_at',
}


class UserFilter(django_filters.FilterSet):
    """
    Usage in services:
        filterset = UserFilter(params, queryset=User.objects.all())
        users = filterset.qs
    """

    search = django_filters.CharFilter(method='filter_search')
    role = django_filters.ChoiceFilter(choices=User.Role.choices)
    is_active = django_filters.BooleanFilter()

    class Meta:
        model = User
        fields = ['role', 'is_active']

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(name__icontains=value) |
            Q(email__icontains=value)
        )
