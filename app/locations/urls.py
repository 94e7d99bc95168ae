"""
URL configuration for locations API.

Routes:
    /me/                   - Update my location (PUT)
    /partner/{user_id}/    - Partner's location (GET)
    /both/{user_id}/       - My and partner's locations (GET)
"""

from django.urls import path

from locations.views import BothLocationsView, MyLocationView, PartnerLocationView

app_name = "locations"

urlpatterns = [
    path("me/", MyLocationView.as_view(), name="me"),
    path("partner/<str:user_id>/", PartnerLocationView.as_view(), name="partner"),
    path("both/<str:user_id>/", BothLocationsView.as_view(), name="both"),
]
