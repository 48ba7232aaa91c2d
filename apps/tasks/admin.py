"""
Admin configuration for tasks app.
"""

from django.contrib import admin
from django.utils.html import format_html
from .models import Task, Comment, Tag


class CommentInline(admin.TabularInline):
    """Inline admin for comments on task detail."""
    model = Comment
    extra = 0
    readonly_fields = ('user', 'content', 'created_at')
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


class TagInline(admin.TabularInline):
    model = Tag
    extra = 0


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    """Admin for Task model."""

    list_display = (
        'title', 'assigned_to', 'assigned_by', 'status_display',
        'priority_display', 'category', 'due_date', 'is_active',
        'is_overdue_display', 'created_at'
    )
    list_filter = ('status', 'priority', 'category', 'is_active', 'created_at', 'due_date')
    search_fields = ('title', 'description')
    ordering = ('-created_at',)
    date_hierarchy = 'created_at'

    readonly_fields = ('created_at', 'updated_at', 'completed_date')

    fieldsets = (
        (None, {
            'fields': ('title', 'description', 'category')
        }),
        ('Assignment', {
            'fields': ('assigned_to', 'assigned_by')
        }),
        ('Status & Priority', {
            'fields': ('status', 'priority', 'is_active')
        }),
        ('Schedule', {
            'fields': ('start_date', 'due_date', 'completed_date', 'estimated_hours', 'actual_hours')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    inlines = [TagInline, CommentInline]

    def get_queryset(self, request):
        """Optimize with select_related."""
        return super().get_queryset(request).select_related('assigned_to', 'assigned_by')

    def status_display(self, obj):
        """Display status with color coding."""
        colors = {
            'pending': '#FFA500',      # Orange
            'in_progress': '#3498db',  # Blue
            'completed': '#27ae60',    # Green
            'cancelled': '#95a5a6',    # Gray
        }
        color = colors.get(obj.status, '#000')
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color, obj.get_status_display()
        )
    status_display.short_description = 'Status'
    status_display.admin_order_field = 'status'

    def priority_display(self, obj):
        """Display priority with color coding."""
        colors = {
            'low': '#95a5a6',
            'medium': '#3498db',
            'high': '#e67e22',
            'urgent': '#e74c3c',
        }
        color = colors.get(obj.priority, '#000')
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color, obj.get_priority_display()
        )
    priority_display.short_description = 'Priority'
    priority_display.admin_order_field = 'priority'

    def is_overdue_display(self, obj):
        if obj.is_overdue:
            return format_html('<span style="color: red;">{}</span>', 'OVERDUE')
        return ''
    is_overdue_display.short_description = 'Overdue'


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    """Admin for task comments."""

    list_display = ('task', 'user', 'content_preview', 'created_at')
    list_filter = ('created_at',)
    search_fields = ('content', 'task__title')
    ordering = ('-created_at',)

    readonly_fields = ('task', 'user', 'created_at')

    def content_preview(self, obj):
        """Show truncated content."""
        return obj.content[:50] + '...' if len(obj.content) > 50 else obj.content
    content_preview.short_description = 'Content'
