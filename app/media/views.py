"""
Views for the shared media library.

Endpoints:
    GET /api/v1/media/items/ - List library items (?partner_id= to filter)
    POST /api/v1/media/items/ - Record a shared file
    DELETE /api/v1/media/items/{item_id}/ - Delete an item (owner only)
    GET /api/v1/media/stats/ - Library statistics (?partner_id= to filter)
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
)

from media.models import MediaItem
from media.serializers import (
    MediaItemCreateSerializer,
    MediaItemSerializer,
    MediaStatsSerializer,
)
from media.services import MediaService

User = get_user_model()

PARTNER_FILTER = OpenApiParameter(
    name="partner_id",
    type=str,
    location=OpenApiParameter.QUERY,
    description="Only include items exchanged with this partner",
    required=False,
)

FORBIDDEN_CODES = {"NOT_OWNER", "NOT_PARTNER"}


def _error_response(result) -> Response:
    status_code = (
        status.HTTP_403_FORBIDDEN
        if result.error_code in FORBIDDEN_CODES
        else status.HTTP_400_BAD_REQUEST
    )
    return Response(
        {"error": result.error, "error_code": result.error_code},
        status=status_code,
    )


def _partner_from_query(request):
    """Resolve ?partner_id= to a user. Returns (partner, error_response)."""
    partner_id = request.query_params.get("partner_id")
    if not partner_id:
        return None, None
    partner = User.objects.filter(pk=partner_id).first()
    if partner is None:
        return None, Response(
            {"error": "Partner not found", "error_code": "PARTNER_NOT_FOUND"},
            status=status.HTTP_404_NOT_FOUND,
        )
    return partner, None


class MediaItemListView(APIView):
    """
    List or create shared media items.

    Authentication:
        Requires valid JWT token.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="list_media_items",
        summary="List media items",
        parameters=[PARTNER_FILTER],
        responses={200: MediaItemSerializer(many=True)},  # paginated
        tags=["Media - Library"],
    )
    def get(self, request):
        """List items owned by or shared with the user, newest first."""
        partner, error = _partner_from_query(request)
        if error:
            return error

        items = MediaService.list_items(request.user, partner=partner)

        paginator = PageNumberPagination()
        page = paginator.paginate_queryset(items, request)
        serializer = MediaItemSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    @extend_schema(
        operation_id="create_media_item",
        summary="Share a file with a partner",
        request=MediaItemCreateSerializer,
        responses={
            201: MediaItemSerializer,
            400: OpenApiResponse(description="Invalid metadata"),
            403: OpenApiResponse(description="Not your partner"),
            404: OpenApiResponse(description="Partner not found"),
        },
        tags=["Media - Library"],
    )
    def post(self, request):
        """Record a file shared with a partner."""
        serializer = MediaItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        partner = User.objects.filter(pk=data["partner_id"]).first()
        if partner is None:
            return Response(
                {"error": "Partner not found", "error_code": "PARTNER_NOT_FOUND"},
                status=status.HTTP_404_NOT_FOUND,
            )

        result = MediaService.create_item(
            owner=request.user,
            partner=partner,
            file_name=data["file_name"],
            file_url=data["file_url"],
            file_size=data["file_size"],
            mime_type=data["mime_type"],
        )
        if not result.success:
            return _error_response(result)

        return Response(
            MediaItemSerializer(result.data).data,
            status=status.HTTP_201_CREATED,
        )


class MediaItemDetailView(APIView):
    """
    Delete a shared media item.

    DELETE /api/v1/media/items/{item_id}/
        Soft deletes the item. Only the owner may delete.

    Response:
        204 No Content: Deleted
        403 Forbidden: Not the owner
        404 Not Found: Item doesn't exist or is not in the user's library
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="delete_media_item",
        summary="Delete media item",
        responses={
            204: OpenApiResponse(description="Deleted"),
            403: OpenApiResponse(description="Not the owner"),
            404: OpenApiResponse(description="Item not found"),
        },
        tags=["Media - Library"],
    )
    def delete(self, request, item_id):
        """Soft delete a media item."""
        try:
            item = MediaService.list_items(request.user).get(pk=item_id)
        except MediaItem.DoesNotExist:
            return Response(
                {"error": "File not found", "error_code": "NOT_FOUND"},
                status=status.HTTP_404_NOT_FOUND,
            )

        result = MediaService.delete_item(item, request.user)
        if not result.success:
            return _error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)


class MediaStatsView(APIView):
    """Library statistics for the authenticated user."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="get_media_stats",
        summary="Get media statistics",
        parameters=[PARTNER_FILTER],
        responses={200: MediaStatsSerializer},
        tags=["Media - Library"],
    )
    def get(self, request):
        partner, error = _partner_from_query(request)
        if error:
            return error

        result = MediaService.get_stats(request.user, partner=partner)
        return Response(MediaStatsSerializer(result.data).data)
