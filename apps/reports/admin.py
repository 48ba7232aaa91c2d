"""
Admin configuration for reports app.
"""

from django.contrib import admin
from django.utils.html import format_html
from .models import Report, Comment, Tag


class CommentInline(admin.TabularInline):
    """Inline admin for comments on report detail."""
    model = Comment
    extra = 0
    readonly_fields = ('user', 'content', 'created_at')
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


class TagInline(admin.TabularInline):
    model = Tag
    extra = 0


@admin.register(Report)
class ReportAdmin(admin.ModelAdmin):
    """Admin for Report model."""

    list_display = ('title', 'author', 'date', 'status_display', 'category', 'is_public', 'task')
    list_filter = ('status', 'category', 'is_public', 'date')
    search_fields = ('title', 'content', 'author__email', 'author__name')
    ordering = ('-date',)
    date_hierarchy = 'date'

    readonly_fields = ('created_at', 'updated_at', 'approved_at')

    fieldsets = (
        (None, {
            'fields': ('title', 'content', 'date', 'category')
        }),
        ('Ownership', {
            'fields': ('author', 'task', 'is_public')
        }),
        ('Approval', {
            'fields': ('status', 'approved_by', 'approved_at')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    inlines = [TagInline, CommentInline]

    def get_queryset(self, request):
        """Optimize with select_related."""
        return super().get_queryset(request).select_related('author', 'task', 'approved_by')

    def status_display(self, obj):
        """Display status with color coding."""
        colors = {
            'draft': '#95a5a6',      # Gray
            'submitted': '#3498db',  # Blue
            'approved': '#27ae60',   # Green
            'rejected': '#e74c3c',   # Red
        }
        color = colors.get(obj.status, '#000')
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color, obj.get_status_display()
        )
    status_display.short_description = 'Status'
    status_display.admin_order_field = 'status'
