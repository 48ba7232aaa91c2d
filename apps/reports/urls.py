"""
URL configuration for reports app.
"""

from django.urls import path
from . import views

app_name = 'reports'

urlpatterns = [
    path('', views.report_list, name='report_list'),
    path('user/<int:user_id>/', views.user_reports, name='user_reports'),
    path('<int:pk>/', views.report_detail, name='report_detail'),
    path('<int:pk>/comments/', views.add_comment_view, name='add_comment'),
]
