"""
URL configuration for accounts app.

Includes:
- Authentication URLs (register, login, logout, current user)
- Profile and password URLs
- User management URLs (admin only)
"""

from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    # Authentication
    path('auth/register/', views.register_view, name='register'),
    path('auth/login/', views.login_view, name='login'),
    path('auth/logout/', views.logout_view, name='logout'),
    path('auth/current/', views.current_user_view, name='current_user'),

    # Profile
    path('auth/profile/', views.profile_view, name='profile'),
    path('auth/password/', views.password_change_view, name='password_change'),

    # User Management (Admin only)
    path('users/', views.user_list_view, name='user_list'),
    path('users/<int:pk>/', views.user_detail_view, name='user_detail'),
]
