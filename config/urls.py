"""
URL configuration for the dailyreport project.
"""

from django.contrib import admin
from django.urls import path, include
from django.conf import settings

from apps.core.views import health_check, api_index

urlpatterns = [
    path('admin/', admin.site.urls),
    path('health/', health_check, name='health'),
    path('api/', api_index, name='api_index'),

    # App URLs
    path('api/', include('apps.accounts.urls', namespace='accounts')),
    path('api/tasks/', include('apps.tasks.urls', namespace='tasks')),
    path('api/reports/', include('apps.reports.urls', namespace='reports')),
]

if settings.DEBUG and 'debug_toolbar' in settings.INSTALLED_APPS:
    import debug_toolbar
    urlpatterns = [
        path('__debug__/', include(debug_toolbar.urls)),
    ] + urlpatterns

# Admin site customization
admin.site.site_header = 'Daily Report Administration'
admin.site.site_title = 'Daily Report Admin'
admin.site.index_title = 'Welcome to Daily Report Admin'
