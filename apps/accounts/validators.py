"""
Custom password validators for dailyreport.

Requirements:
- Minimum length (Django's MinimumLengthValidator, PASSWORD_MIN_LENGTH)
- At least 1 uppercase letter
- At least 1 lowercase letter
- At least 1 number
"""

import re
from django.core.exceptions import ValidationError
from django.utils.translation import gettext as _


class ComplexityValidator:
    """
    Validate that the password meets complexity requirements:
    - At least one uppercase letter
    - At least one lowercase letter
    - At least one digit
    """

    def __init__(self):
        self.requirements = [
            (r'[A-Z]', _('Password must contain at least one uppercase letter.')),
            (r'[a-z]', _('Password must contain at least one lowercase letter.')),
            (r'\d', _('Password must contain at least one number.')),
        ]

    def validate(self, password, user=None):
        errors = []
        for pattern, message in self.requirements:
            if not re.search(pattern, password):
                errors.append(ValidationError(message, code='password_complexity'))

        if errors:
            raise ValidationError(errors)

    def get_help_text(self):
        return _(
            "Your password must contain at least one uppercase letter, "
            "one lowercase letter and one number."
        )
