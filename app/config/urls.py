"""
URL configuration for the Django application.

The `urlpatterns` list routes URLs to views. This is the root URL configuration
that includes all app-specific routes.

URL Structure:
    /                              - ReDoc API documentation
    /admin/                        - Django admin interface
    /health/                       - Health check endpoint (for load balancers, Docker)
    /schema/                       - OpenAPI schema (YAML)
    /api/v1/auth/                  - Authentication endpoints
        token/                     - Obtain JWT pair
        token/refresh/             - Refresh access token
        me/                        - Current user
    /api/v1/chat/                  - Chat endpoints
        chats/                     - Chat list / open chat with partner
        chats/{id}/messages/       - History page / send message
        messages/{id}/             - Edit (PATCH) / delete for everyone (DELETE)
        messages/{id}/react/       - Toggle reaction
        messages/{id}/view/        - Mark one-view message viewed
        messages/{id}/view-status/ - One-view status
        messages/{id}/hide/        - Delete for me
    /api/v1/locations/             - Location sharing
        me/                        - Update own location
        partner/{user_id}/         - Partner's location
        both/{user_id}/            - Own and partner's location
    /api/v1/notifications/         - Notification inbox
    /api/v1/media/                 - Shared media library
        items/                     - List / record shared files
        items/{id}/                - Delete item
        stats/                     - Library statistics

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    path("auth/", include("authentication.urls")),
    path("chat/", include("chat.urls")),
    path("locations/", include("locations.urls")),
    path("notifications/", include("notifications.urls")),
    path("media/", include("media.urls")),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "BondMate Admin"
admin.site.site_title = "BondMate Admin Portal"
admin.site.index_title = "Welcome to the BondMate Admin Portal"
