"""
Forms for accounts app.

Payload validation for:
- RegisterForm: self-service sign up
- LoginForm: email + password
- ProfileForm: name/email changes by the user themselves
- PasswordChangeForm: current password check + Django validators
- AdminUserUpdateForm: admin edits of any account
"""

from django import forms
from django.contrib.auth import get_user_model, password_validation
from django.core.exceptions import ValidationError

from apps.core.forms import PartialFormMixin

User = get_user_model()


class NameField(forms.CharField):
    def __init__(self, **kwargs):
        kwargs.setdefault('min_length', 2)
        kwargs.setdefault('max_length', 50)
        kwargs.setdefault('error_messages', {
            'required': 'Name is required.',
            'min_length': 'Name must be between 2 and 50 characters.',
            'max_length': 'Name must be between 2 and 50 characters.',
        })
        super().__init__(**kwargs)


class LowercaseEmailField(forms.EmailField):
    def to_python(self, value):
        return super().to_python(value).lower()


class RegisterForm(forms.Form):
    """Sign-up payload: name, email, password."""

    name = NameField()
    email = LowercaseEmailField(max_length=254)
    password = forms.CharField(strip=False)

    def clean(self):
        cleaned_data = super().clean()
        password = cleaned_data.get('password')

        if password:
            candidate = User(
                name=cleaned_data.get('name', ''),
                email=cleaned_data.get('email', ''),
            )
            try:
                password_validation.validate_password(password, candidate)
            except ValidationError as e:
                self.add_error('password', e)

        return cleaned_data


class LoginForm(forms.Form):
    email = LowercaseEmailField(max_length=254)
    password = forms.CharField(strip=False)


class ProfileForm(PartialFormMixin, forms.Form):
    """Fields a user may change on their own account."""

    name = NameField()
    email = LowercaseEmailField(max_length=254)


class PasswordChangeForm(forms.Form):
    """
    Password change requiring the current password.

    The new password runs through AUTH_PASSWORD_VALIDATORS.
    """

    current_password = forms.CharField(strip=False)
    new_password = forms.CharField(strip=False)

    def __init__(self, user, *args, **kwargs):
        self.user = user
        super().__init__(*args, **kwargs)

    def clean_current_password(self):
        current_password = self.cleaned_data['current_password']
        if not self.user.check_password(current_password):
            raise ValidationError(
                'Your current password was entered incorrectly.',
                code='password_incorrect',
            )
        return current_password

    def clean_new_password(self):
        new_password = self.cleaned_data['new_password']
        password_validation.validate_password(new_password, self.user)
        return new_password

    def clean(self):
        cleaned_data = super().clean()
        current_password = cleaned_data.get('current_password')
        new_password = cleaned_data.get('new_password')

        if current_password and new_password and current_password == new_password:
            self.add_error(
                'new_password',
                ValidationError(
                    'New password must be different from the current password.',
                    code='password_unchanged',
                ),
            )

        return cleaned_data


class AdminUserUpdateForm(PartialFormMixin, forms.Form):
    """Fields an admin may change on any account."""

    name = NameField()
    email = LowercaseEmailField(max_length=254)
    role = forms.ChoiceField(choices=User.Role.choices)
    is_active = forms.BooleanField(required=False)
