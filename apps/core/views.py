"""
Service-level endpoints: health check and API index.
"""

from django.conf import settings
from django.utils import timezone
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_GET

from .http import json_success


@require_GET
def health_check(request):
    """Liveness probe."""
    return json_success(
        message='Server is running',
        timestamp=timezone.now().isoformat(),
        debug=settings.DEBUG,
    )


@require_GET
@ensure_csrf_cookie
def api_index(request):
    """List the available endpoints."""
    return json_success(
        message='Daily Report System API',
        endpoints={
            'auth': {
                'POST /api/auth/register/': 'Register new user',
                'POST /api/auth/login/': 'Login user',
                'POST /api/auth/logout/': 'Logout user',
                'GET /api/auth/current/': 'Get current user',
                'PUT /api/auth/profile/': 'Update user profile',
                'PUT /api/auth/password/': 'Change password',
            },
            'users': {
                'GET /api/users/': 'Get all users (Admin only)',
                'GET /api/users/<id>/': 'Get user by ID (Admin only)',
                'PUT /api/users/<id>/': 'Update user (Admin only)',
                'DELETE /api/users/<id>/': 'Delete user (Admin only)',
            },
            'tasks': {
                'GET /api/tasks/': 'Get all tasks (Admin) or assigned tasks (User)',
                'POST /api/tasks/': 'Create new task (Admin only)',
                'GET /api/tasks/<id>/': 'Get single task',
                'PUT /api/tasks/<id>/': 'Update task',
                'DELETE /api/tasks/<id>/': 'Delete task (Admin only)',
                'GET /api/tasks/search/': 'Search own open tasks',
                'GET /api/tasks/my-tasks/': 'Get own active tasks',
                'GET /api/tasks/stats/': 'Get task statistics',
                'POST /api/tasks/<id>/comments/': 'Add comment to task',
            },
            'reports': {
                'GET /api/reports/': 'Get reports (with filtering & pagination)',
                'POST /api/reports/': 'Create new report',
                'GET /api/reports/<id>/': 'Get specific report',
                'PUT /api/reports/<id>/': 'Update report',
                'DELETE /api/reports/<id>/': 'Delete report',
                'POST /api/reports/<id>/comments/': 'Add comment to report',
                'GET /api/reports/user/<userId>/': 'Get reports by user',
            },
        },
    )
