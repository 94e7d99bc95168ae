"""
Views for location API.

Endpoints:
    PUT /api/v1/locations/me/ - Report the user's position
    GET /api/v1/locations/partner/{user_id}/ - Partner's last position
    GET /api/v1/locations/both/{user_id}/ - User's and partner's positions
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from drf_spectacular.utils import OpenApiResponse, extend_schema

from locations.serializers import (
    BothLocationsSerializer,
    LocationSerializer,
    LocationUpdateSerializer,
    PartnerLocationSerializer,
)
from locations.services import LocationService

User = get_user_model()


def _get_partner(user_id):
    return User.objects.filter(pk=user_id).first()


def _partner_not_found() -> Response:
    return Response(
        {"error": "Partner not found", "error_code": "PARTNER_NOT_FOUND"},
        status=status.HTTP_404_NOT_FOUND,
    )


def _forbidden(result) -> Response:
    return Response(
        {"error": result.error, "error_code": result.error_code},
        status=status.HTTP_403_FORBIDDEN,
    )


class MyLocationView(APIView):
    """Report the authenticated user's position."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="update_my_location",
        summary="Update my location",
        request=LocationUpdateSerializer,
        responses={
            200: LocationSerializer,
            400: OpenApiResponse(description="Invalid coordinates"),
        },
        tags=["Locations"],
    )
    def put(self, request):
        serializer = LocationUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = LocationService.update_location(request.user, **serializer.validated_data)
        if not result.success:
            return Response(result.to_response(), status=status.HTTP_400_BAD_REQUEST)

        return Response(LocationSerializer(result.data).data)


class PartnerLocationView(APIView):
    """
    Read a partner's last position.

    Response:
        200 OK: {"partner_id", "partner_name", "location"} (location may be null)
        403 Forbidden: User is not a partner
        404 Not Found: User doesn't exist
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="get_partner_location",
        summary="Get partner location",
        responses={
            200: PartnerLocationSerializer,
            403: OpenApiResponse(description="Not your partner"),
            404: OpenApiResponse(description="Partner not found"),
        },
        tags=["Locations"],
    )
    def get(self, request, user_id):
        partner = _get_partner(user_id)
        if partner is None:
            return _partner_not_found()

        result = LocationService.get_partner_location(request.user, partner)
        if not result.success:
            return _forbidden(result)

        return Response(PartnerLocationSerializer(result.data).data)


class BothLocationsView(APIView):
    """Read the user's and a partner's positions together."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="get_both_locations",
        summary="Get my and partner location",
        responses={
            200: BothLocationsSerializer,
            403: OpenApiResponse(description="Not your partner"),
            404: OpenApiResponse(description="Partner not found"),
        },
        tags=["Locations"],
    )
    def get(self, request, user_id):
        partner = _get_partner(user_id)
        if partner is None:
            return _partner_not_found()

        result = LocationService.get_both_locations(request.user, partner)
        if not result.success:
            return _forbidden(result)

        return Response(BothLocationsSerializer(result.data).data)
