# businesses/schemas.py
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, OpenApiResponse, OpenApiTypes, inline_serializer
from rest_framework import serializers

from .serializers import BusinessIntakeSerializer, BusinessEditSerializer, BusinessEditorSerializer

error_response = inline_serializer(
    name="BusinessError",
    fields={"error": serializers.CharField()},
)

token_parameter = OpenApiParameter(
    name="token",
    type=OpenApiTypes.STR,
    location=OpenApiParameter.QUERY,
    required=True,
    description="Edit token issued when the business was created",
)

# Intake schema
intake_schema = {
    "operation_id": "Create Business",
    "description": """
    Create a business page from the intake form.

    The business name is turned into a unique slug (`tonys-barbershop`, then
    `tonys-barbershop-1`, ...) and a random edit token is generated. The
    WhatsApp number is stored as digits only. Services without both a name and
    a price are dropped; at least one service (or link) must remain.

    The edit token is the only credential for changing the page. It is returned
    once here, inside the `redirect` target, and never shown on the public page.
    """,
    "request": BusinessIntakeSerializer,
    "responses": {
        201: inline_serializer(
            name="BusinessCreated",
            fields={
                "slug": serializers.CharField(),
                "edit_token": serializers.CharField(),
                "redirect": serializers.CharField(help_text="/<slug>?success=true&edit=<token>"),
                "business": BusinessEditorSerializer(),
            },
        ),
        400: OpenApiResponse(description="Validation errors keyed by field"),
    },
    "examples": [
        OpenApiExample(
            "Cafe with one service",
            value={
                "name": "Joe's Cafe",
                "whatsapp": "+1 (234) 567-8901",
                "instagram": "@joescafe",
                "services": [{"name": "Coffee", "price": "$3"}],
            },
            request_only=True,
        )
    ],
}

# Public page schema
public_page_schema = {
    "operation_id": "Get Public Page",
    "description": """
    Public page data for a business, with the theme already resolved into
    style objects and a stylesheet.

    `success=true` turns on the one-time "page is live" banner. `edit=<token>`
    is echoed back as `edit_url` so the owner can jump to the editor; it is not
    verified here.
    `public_url` is the page's shareable address.
    """,
    "parameters": [
        OpenApiParameter(name="success", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
        OpenApiParameter(name="edit", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=False),
    ],
    "responses": {
        200: OpenApiResponse(description="Business, visible links, contact actions, banner and presentation"),
        404: error_response,
    },
}

edit_get_schema = {
    "operation_id": "Get Business For Editing",
    "description": "Full business record, including theme, links and current version. Requires a matching edit token.",
    "parameters": [token_parameter],
    "responses": {
        200: BusinessEditorSerializer,
        400: error_response,
        403: error_response,
    },
}

edit_update_schema = {
    "operation_id": "Update Business",
    "description": """
    Overwrite the business content and theming. Slug and edit token cannot change.

    Auto-saves include `version`, which must increase with every edit in a
    session. A save whose version is older than the stored one is rejected with
    409 so a slow request can never overwrite newer edits. Saves without a
    version always apply.
    """,
    "parameters": [token_parameter],
    "request": BusinessEditSerializer,
    "responses": {
        200: BusinessEditorSerializer,
        400: OpenApiResponse(description="Validation errors keyed by field"),
        403: error_response,
        409: inline_serializer(
            name="StaleVersion",
            fields={"error": serializers.CharField(), "version": serializers.IntegerField()},
        ),
    },
}
