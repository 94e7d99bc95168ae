"""
URL configuration for media app.

Media - Library:
    GET /items/                - List items owned by or shared with me
    POST /items/               - Record a file shared with a partner
    DELETE /items/{item_id}/   - Delete an item (owner only)
    GET /stats/                - Library statistics
"""

from django.urls import path

from media.views import MediaItemDetailView, MediaItemListView, MediaStatsView

app_name = "media"

urlpatterns = [
    path("items/", MediaItemListView.as_view(), name="item-list"),
    path("items/<str:item_id>/", MediaItemDetailView.as_view(), name="item-detail"),
    path("stats/", MediaStatsView.as_view(), name="stats"),
]
