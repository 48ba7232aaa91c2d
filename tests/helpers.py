"""
Shared fixtures for the test suite.
"""

from datetime import timedelta

from django.utils import timezone

from apps.accounts.models import User
from apps.reports.models import Report
from apps.tasks.models import Task

PASSWORD = 'Blue7Harbor'


def make_user(email, name='Test User', role=User.Role.USER, password=PASSWORD, **extra):
    return User.objects.create_user(email=email, password=password, name=name, role=role, **extra)


def make_admin(email='admin@example.com', name='Ada Admin'):
    return make_user(email, name=name, role=User.Role.ADMIN)


def make_task(assigned_to, assigned_by, title='Write docs', due_in_days=3, tags=(), **fields):
    fields.setdefault('description', 'Document the public API')
    fields.setdefault('due_date', timezone.now() + timedelta(days=due_in_days))
    task = Task.objects.create(
        title=title,
        assigned_to=assigned_to,
        assigned_by=assigned_by,
        **fields,
    )
    task.set_tags(tags)
    return task


def make_report(author, title='Monday report', tags=(), **fields):
    fields.setdefault('content', 'Fixed the login bug')
    report = Report.objects.create(title=title, author=author, **fields)
    report.set_tags(tags)
    return report
