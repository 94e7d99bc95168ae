"""
Views for authentication.

Token issuance and refresh are SimpleJWT's own views (see urls.py); this
module only exposes the current user.
"""

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.serializers import UserSerializer


class CurrentUserView(APIView):
    """
    Return the authenticated user.

    GET /api/v1/auth/me/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="get_current_user",
        summary="Get current user",
        responses={200: UserSerializer},
        tags=["Authentication"],
    )
    def get(self, request):
        return Response(UserSerializer(request.user).data)
