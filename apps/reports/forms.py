"""
Forms for reports app.

Includes:
- ReportForm: Create and edit reports (partial updates validate only the
  fields sent)
"""

from django import forms

from apps.core.forms import PartialFormMixin, TagListField

from .models import Report


class ReportForm(PartialFormMixin, forms.ModelForm):
    """
    Form for creating and editing reports.

    task is taken as a plain id; the service resolves it and checks the
    caller may link it.
    """

    OPTIONAL_WITH_DEFAULT = ('date', 'status', 'category')

    task = forms.IntegerField(required=False, min_value=1)
    tags = TagListField(max_tag_length=20)

    class Meta:
        model = Report
        fields = [
            'title', 'content', 'date', 'status', 'category',
            'is_public', 'approved_by', 'approved_at',
        ]
        error_messages = {
            'title': {
                'required': 'Report title is required.',
                'max_length': 'Title cannot be more than 100 characters.',
            },
            'content': {
                'required': 'Report content is required.',
                'max_length': 'Content cannot be more than 2000 characters.',
            },
            'approved_by': {
                'invalid_choice': 'Approver does not exist.',
            },
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        for name in self.OPTIONAL_WITH_DEFAULT:
            if name in self.fields:
                self.fields[name].required = False
