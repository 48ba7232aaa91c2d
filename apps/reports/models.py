"""
Report models.

Models:
- Report: Work report filed by a user, optionally linked to a task
- Comment: Report comments (append-only)
- Tag: Report labels, one row per tag
"""

from django.conf import settings
from django.db import models
from django.utils import timezone


class Report(models.Model):
    """
    Daily/weekly/monthly work report.

    Private to its author (and admins) unless is_public is set.
    approved_at is stamped once, the first time status becomes approved.
    Deleting a report removes it and its comments.
    """

    class Status(models.TextChoices):
        DRAFT = 'draft', 'Draft'
        SUBMITTED = 'submitted', 'Submitted'
        APPROVED = 'approved', 'Approved'
        REJECTED = 'rejected', 'Rejected'

    class Category(models.TextChoices):
        DAILY = 'daily', 'Daily'
        WEEKLY = 'weekly', 'Weekly'
        MONTHLY = 'monthly', 'Monthly'
        PROJECT = 'project', 'Project'
        OTHER = 'other', 'Other'

    # Statuses a non-admin author may pick when creating a report
    AUTHOR_STATUSES = (Status.DRAFT, Status.SUBMITTED)

    title = models.CharField(max_length=100)
    content = models.TextField(max_length=2000)
    date = models.DateTimeField(default=timezone.now, db_index=True)

    # Relationships
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='reports',
    )
    task = models.ForeignKey(
        'tasks.Task',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reports',
        help_text='Optional task this report is about'
    )

    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.DRAFT,
        db_index=True,
    )
    category = models.CharField(
        max_length=10,
        choices=Category.choices,
        default=Category.DAILY,
        db_index=True,
    )
    # Approval
    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='approved_reports',
    )
    approved_at = models.DateTimeField(null=True, blank=True)

    is_public = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'report'
        verbose_name_plural = 'reports'
        ordering = ['-date']
        indexes = [
            models.Index(fields=['author', 'date'], name='reports_author_date_idx'),
            models.Index(fields=['is_public', 'date'], name='reports_public_date_idx'),
        ]

    def __str__(self):
        return f"{self.title} ({self.date:%Y-%m-%d})"

    @property
    def tags(self):
        return [tag.name for tag in self.tag_set.all()]

    def set_tags(self, names):
        """Replace every tag of this report."""
        self.tag_set.all().delete()
        Tag.objects.bulk_create([Tag(report=self, name=name) for name in names])


class Comment(models.Model):
    """
    Report comment model.

    One row per comment, appended with a single INSERT.
    """

    report = models.ForeignKey(
        Report,
        on_delete=models.CASCADE,
        related_name='comments',
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='report_comments',
    )
    content = models.CharField(max_length=500)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'comment'
        verbose_name_plural = 'comments'
        ordering = ['created_at', 'id']

    def __str__(self):
        return f"Comment by {self.user} on {self.report}"


class Tag(models.Model):
    """Single report label."""

    report = models.ForeignKey(
        Report,
        on_delete=models.CASCADE,
        related_name='tag_set',
    )
    name = models.CharField(max_length=20)

    class Meta:
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(fields=['report', 'name'], name='reports_tag_unique'),
        ]

    def __str__(self):
        return self.name
