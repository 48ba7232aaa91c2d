"""
Task management models.

Models:
- Task: Work item assigned by an admin to a user, soft deleted via is_active
- Comment: Task comments (append-only)
- Tag: Task labels, one row per tag
"""

import math

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class Task(models.Model):
    """
    Main Task model.

    Created by an admin (assigned_by) for a user (assigned_to).
    completed_date is stamped once, the first time status becomes
    completed. Deleting a task only clears is_active.
    """

    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        IN_PROGRESS = 'in_progress', 'In Progress'
        COMPLETED = 'completed', 'Completed'
        CANCELLED = 'cancelled', 'Cancelled'

    class Priority(models.TextChoices):
        LOW = 'low', 'Low'
        MEDIUM = 'medium', 'Medium'
        HIGH = 'high', 'High'
        URGENT = 'urgent', 'Urgent'

    class Category(models.TextChoices):
        DEVELOPMENT = 'development', 'Development'
        DESIGN = 'design', 'Design'
        TESTING = 'testing', 'Testing'
        DOCUMENTATION = 'documentation', 'Documentation'
        MEETING = 'meeting', 'Meeting'
        OTHER = 'other', 'Other'

    # Low to high; used to sort by priority rank instead of alphabetically
    PRIORITY_RANK = {
        Priority.LOW: 1,
        Priority.MEDIUM: 2,
        Priority.HIGH: 3,
        Priority.URGENT: 4,
    }

    # Core fields
    title = models.CharField(max_length=200)
    description = models.TextField(max_length=1000)

    # Relationships
    assigned_to = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='assigned_tasks',
        help_text='User responsible for completing this task'
    )
    assigned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='created_tasks',
        help_text='Admin who created this task'
    )

    # Task classification
    status = models.CharField(
        max_length=15,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )
    priority = models.CharField(
        max_length=10,
        choices=Priority.choices,
        default=Priority.MEDIUM,
        db_index=True,
    )
    category = models.CharField(
        max_length=15,
        choices=Category.choices,
        default=Category.OTHER,
        db_index=True,
    )
    # Dates
    due_date = models.DateTimeField(db_index=True)
    start_date = models.DateTimeField(default=timezone.now)
    completed_date = models.DateTimeField(null=True, blank=True)

    # Effort
    estimated_hours = models.FloatField(
        null=True,
        blank=True,
        validators=[MinValueValidator(0, 'Estimated hours cannot be negative.')],
    )
    actual_hours = models.FloatField(
        null=True,
        blank=True,
        validators=[MinValueValidator(0, 'Actual hours cannot be negative.')],
    )

    is_active = models.BooleanField(default=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'task'
        verbose_name_plural = 'tasks'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['assigned_to', 'status'], name='tasks_assignee_status_idx'),
            models.Index(fields=['assigned_by'], name='tasks_assigned_by_idx'),
            models.Index(fields=['is_active', 'due_date'], name='tasks_active_due_idx'),
        ]

    def __str__(self):
        return self.title

    # ==========================================================================
    # Derived Properties
    # ==========================================================================

    @property
    def is_overdue(self):
        """Past due date and not completed."""
        if not self.due_date:
            return False
        return self.status != self.Status.COMPLETED and self.due_date < timezone.now()

    @property
    def days_until_due(self):
        """Whole days until the due date, rounded up (negative when overdue)."""
        if not self.due_date:
            return None
        delta = self.due_date - timezone.now()
        return math.ceil(delta.total_seconds() / 86400)

    # ==========================================================================
    # Tags
    # ==========================================================================

    @property
    def tags(self):
        """Tag names in the order they were given."""
        return [tag.name for tag in self.tag_set.all()]

    def set_tags(self, names):
        """Replace every tag of this task."""
        self.tag_set.all().delete()
        Tag.objects.bulk_create([Tag(task=self, name=name) for name in names])


class Comment(models.Model):
    """
    Task comment model.

    One row per comment, appended with a single INSERT. Comments are
    listed chronologically.
    """

    task = models.ForeignKey(
        Task,
        on_delete=models.CASCADE,
        related_name='comments',
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='task_comments',
    )
    content = models.CharField(max_length=500)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'comment'
        verbose_name_plural = 'comments'
        ordering = ['created_at', 'id']

    def __str__(self):
        return f"Comment by {self.user} on {self.task}"


class Tag(models.Model):
    """Single task label. Searches match each tag on its own."""

    task = models.ForeignKey(
        Task,
        on_delete=models.CASCADE,
        related_name='tag_set',
    )
    name = models.CharField(max_length=30)

    class Meta:
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(fields=['task', 'name'], name='tasks_tag_unique'),
        ]

    def __str__(self):
        return self.name
