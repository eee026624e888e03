"""
API v1 URL Configuration.

All API endpoints for version 1.
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views.project import ProjectViewSet
from .views.dashboard import DashboardViewSet

router = DefaultRouter()

# Projects
router.register(r'projects', ProjectViewSet, basename='project')

# Dashboard
router.register(r'dashboard', DashboardViewSet, basename='dashboard')

app_name = 'api_v1'

urlpatterns = [
    path('', include(router.urls)),
]
