"""
Forms for tasks app.

Includes:
- TaskForm: Create and edit tasks (partial updates validate only the
  fields sent)
- TaskSearchForm: Query and status list for task search
"""

from django import forms
from django.core.exceptions import ValidationError

from apps.accounts.models import User
from apps.core.forms import PartialFormMixin, TagListField

from .filters import DEFAULT_SEARCH_STATUSES
from .models import Task


class TaskForm(PartialFormMixin, forms.ModelForm):
    """
    Form for creating and editing tasks.

    assigned_to must be an existing, active user. assigned_by is only
    editable on existing tasks and must be an active admin; new tasks
    take the creating admin. Fields with a model default (status,
    priority, category, start_date) may be left out on create.
    """

    OPTIONAL_WITH_DEFAULT = ('status', 'priority', 'category', 'start_date')

    tags = TagListField(max_tag_length=30)

    class Meta:
        model = Task
        fields = [
            'title', 'description', 'assigned_to', 'assigned_by', 'status',
            'priority', 'category', 'due_date', 'start_date',
            'estimated_hours', 'actual_hours',
        ]
        error_messages = {
            'title': {
                'required': 'Task title is required.',
                'max_length': 'Title cannot be more than 200 characters.',
            },
            'description': {
                'required': 'Task description is required.',
                'max_length': 'Description cannot be more than 1000 characters.',
            },
            'assigned_to': {
                'required': 'Task must be assigned to a user.',
                'invalid_choice': 'Assigned user does not exist or is inactive.',
            },
            'assigned_by': {
                'required': 'Assigning admin is required.',
                'invalid_choice': 'Assigning user does not exist or is not an active admin.',
            },
            'due_date': {
                'required': 'Due date is required.',
            },
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        if 'assigned_to' in self.fields:
            self.fields['assigned_to'].queryset = User.objects.filter(is_active=True)

        if self.instance.pk is None:
            self.fields.pop('assigned_by', None)
        elif 'assigned_by' in self.fields:
            self.fields['assigned_by'].queryset = User.objects.filter(
                is_active=True, role=User.Role.ADMIN,
            )

        for name in self.OPTIONAL_WITH_DEFAULT:
            if name in self.fields:
                self.fields[name].required = False


class TaskSearchForm(forms.Form):
    """Search query plus the statuses to look in."""

    q = forms.CharField(
        min_length=2,
        error_messages={
            'required': 'Search query must be at least 2 characters.',
            'min_length': 'Search query must be at least 2 characters.',
        },
    )
    status = forms.CharField(required=False)

    def clean_status(self):
        """Accept a list or a comma separated string; default pending + in progress."""
        raw = self.data.get('status')
        if isinstance(raw, (list, tuple)):
            parts = raw
        elif raw:
            parts = [raw]
        else:
            parts = []

        statuses = []
        for part in parts:
            for status in str(part).split(','):
                status = status.strip()
                if status and status not in statuses:
                    statuses.append(status)

        if not statuses:
            return list(DEFAULT_SEARCH_STATUSES)

        invalid = [status for status in statuses if status not in Task.Status.values]
        if invalid:
            raise ValidationError(
                'Invalid status: %(statuses)s',
                code='invalid_choice',
                params={'statuses': ', '.join(invalid)},
            )
        return statuses
