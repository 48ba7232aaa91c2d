"""
Form building blocks shared by the payload forms of every app.
"""

from django import forms
from django.core.exceptions import ValidationError


class PartialFormMixin:
    """
    Allow a form to validate only the fields present in the payload.

    With partial=True every field missing from the data is dropped from
    the form, so an update touches exactly what the caller sent.
    """

    def __init__(self, *args, partial=False, **kwargs):
        super().__init__(*args, **kwargs)
        self.partial = partial
        if partial:
            for name in list(self.fields):
                if name not in self.data:
                    del self.fields[name]


class TagListField(forms.Field):
    """
    A list of short strings.

    Accepts a JSON list (or a comma separated string), trims every tag,
    rejects empty or over-long tags and drops duplicates keeping the
    first occurrence.
    """

    default_error_messages = {
        'invalid_list': 'Enter a list of tags.',
        'invalid_tag': 'Each tag must be a string.',
        'empty_tag': 'Tags cannot be empty.',
        'tag_too_long': 'Tag cannot be more than %(max_length)s characters.',
    }

    def __init__(self, *, max_tag_length, **kwargs):
        self.max_tag_length = max_tag_length
        kwargs.setdefault('required', False)
        super().__init__(**kwargs)

    def to_python(self, value):
        if value in self.empty_values:
            return []
        if isinstance(value, str):
            value = value.split(',')
        if not isinstance(value, (list, tuple)):
            raise ValidationError(self.error_messages['invalid_list'], code='invalid_list')

        tags = []
        for item in value:
            if not isinstance(item, str):
                raise ValidationError(self.error_messages['invalid_tag'], code='invalid_tag')
            tag = item.strip()
            if not tag:
                raise ValidationError(self.error_messages['empty_tag'], code='empty_tag')
            if len(tag) > self.max_tag_length:
                raise ValidationError(
                    self.error_messages['tag_too_long'],
                    code='tag_too_long',
                    params={'max_length': self.max_tag_length},
                )
            if tag not in tags:
                tags.append(tag)
        return tags


class CommentForm(forms.Form):
    """Comment payload for tasks and reports."""

    content = forms.CharField(
        max_length=500,
        error_messages={
            'required': 'Comment content is required.',
            'max_length': 'Comment cannot be more than 500 characters.',
        },
    )
