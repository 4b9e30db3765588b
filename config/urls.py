"""
config/urls.py - Root URL Configuration
"""

from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    # Admin site
    path('admin/', admin.site.urls),

    # App-specific API routes
    path('api/', include('apps.urls')),

    # DRF browsable API authentication
    path('api-auth/', include('rest_framework.urls')),
]
