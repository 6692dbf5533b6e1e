# backend/businesses/views.py
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny
from rest_framework.parsers import JSONParser
from rest_framework import status
from drf_spectacular.utils import extend_schema
import logging

from .serializers import (
    BusinessIntakeSerializer, BusinessEditSerializer, BusinessEditorSerializer, BusinessPublicSerializer,
)
from .schemas import intake_schema, public_page_schema, edit_get_schema, edit_update_schema
from .presentation import build_public_page, success_redirect
from . import services

logger = logging.getLogger(__name__)

ACCESS_DENIED_MESSAGE = "Invalid edit token or business not found"


class BusinessIntakeView(APIView):
    """
    API for creating a business page from the intake form.
    No account is needed: the response carries the edit token that
    authorizes every later change.
    """
    permission_classes = [AllowAny]
    parser_classes = [JSONParser]

    @extend_schema(**intake_schema)
    def post(self, request):
        serializer = BusinessIntakeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        business = serializer.save()

        return Response({
            "slug": business.slug,
            "edit_token": business.edit_token,
            "redirect": success_redirect(business.slug, business.edit_token),
            "business": BusinessEditorSerializer(business).data,
        }, status=status.HTTP_201_CREATED)


class BusinessPublicView(APIView):
    """Public page data for a slug. No token required."""
    permission_classes = [AllowAny]

    @extend_schema(**public_page_schema)
    def get(self, request, slug):
        business = services.get_by_slug(slug)
        if not business:
            return Response({"error": "Business not found"}, status=status.HTTP_404_NOT_FOUND)

        payload = build_public_page(
            business,
            BusinessPublicSerializer(business).data,
            success=request.query_params.get("success") == "true",
            edit_token=request.query_params.get("edit"),
        )
        return Response(payload)


class BusinessEditView(APIView):
    """
    API for the editor.
    GET: Load the full record when slug and token match.
    PUT/PATCH: Overwrite content and theming. Auto-saves send a `version`
    and are rejected with 409 when older than the stored one.
    """
    permission_classes = [AllowAny]
    parser_classes = [JSONParser]

    def _get_business(self, request, slug):
        """Returns (business, error_response)."""
        token = request.query_params.get("token")
        if not token:
            return None, Response({"error": "Edit token is required"}, status=status.HTTP_400_BAD_REQUEST)

        business = services.get_for_edit(slug, token)
        if not business:
            logger.warning(f"Edit access denied for '{slug}'")
            return None, Response({"error": ACCESS_DENIED_MESSAGE}, status=status.HTTP_403_FORBIDDEN)
        return business, None

    @extend_schema(**edit_get_schema)
    def get(self, request, slug):
        business, error_response = self._get_business(request, slug)
        if error_response:
            return error_response
        return Response(BusinessEditorSerializer(business).data)

    @extend_schema(**edit_update_schema)
    def put(self, request, slug):
        return self._update_business(request, slug)

    @extend_schema(**edit_update_schema)
    def patch(self, request, slug):
        return self._update_business(request, slug, partial=True)

    def _update_business(self, request, slug, partial=False):
        """Helper method for update operations."""
        business, error_response = self._get_business(request, slug)
        if error_response:
            return error_response

        serializer = BusinessEditSerializer(business, data=request.data, partial=partial)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = dict(serializer.validated_data)
        version = data.pop("version", None)
        try:
            business = services.update_business(slug, request.query_params["token"], data, version=version)
        except services.BusinessAccessDenied:
            return Response({"error": ACCESS_DENIED_MESSAGE}, status=status.HTTP_403_FORBIDDEN)
        except services.StaleVersionError as e:
            return Response(
                {"error": "A newer version of this page has already been saved", "version": e.current},
                status=status.HTTP_409_CONFLICT,
            )

        return Response(BusinessEditorSerializer(business).data)
