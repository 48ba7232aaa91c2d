"""
URL configuration for tasks app.
"""

from django.urls import path
from . import views

app_name = 'tasks'

urlpatterns = [
    path('', views.task_list, name='task_list'),
    path('stats/', views.task_stats, name='task_stats'),
    path('search/', views.task_search, name='task_search'),
    path('my-tasks/', views.my_tasks, name='my_tasks'),
    path('<int:pk>/', views.task_detail, name='task_detail'),
    path('<int:pk>/comments/', views.add_comment_view, name='add_comment'),
]
