"""
URL configuration for chat API.

URL Structure:
    Chats:
        /chats/                          GET, POST
        /chats/{id}/                     GET
        /chats/{id}/messages/            GET, POST

    Messages:
        /messages/{id}/                  PATCH, DELETE
        /messages/{id}/react/            POST
        /messages/{id}/view/             POST
        /messages/{id}/view-status/      GET
        /messages/{id}/hide/             POST

All URLs are prefixed with /api/v1/chat/ in the main URL configuration.
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from chat.views import ChatViewSet, MessageViewSet

router = DefaultRouter()
router.register(r"chats", ChatViewSet, basename="chat")
router.register(r"messages", MessageViewSet, basename="message")

app_name = "chat"

urlpatterns = [
    path("", include(router.urls)),
]
