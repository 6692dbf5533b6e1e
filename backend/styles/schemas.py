# styles/schemas.py
from drf_spectacular.utils import OpenApiExample, OpenApiResponse, inline_serializer
from rest_framework import serializers

from .serializers import StylePreviewSerializer, CustomCSSSerializer

theme_catalog_schema = {
    "operation_id": "List Theme Presets",
    "description": "Theme presets, each with its full theme values and resolved presentation, plus the custom CSS templates.",
    "responses": {200: OpenApiResponse(description="Presets and CSS templates")},
}

filter_catalog_schema = {
    "operation_id": "List Filter Presets",
    "description": "Slider ranges for every image filter and the named filter presets with their composed `filter` value.",
    "responses": {200: OpenApiResponse(description="Ranges and presets")},
}

shadow_catalog_schema = {
    "operation_id": "List Shadow Presets",
    "description": "Named multi-layer shadow presets with their composed `box-shadow` value.",
    "responses": {200: OpenApiResponse(description="Shadow presets")},
}

pattern_catalog_schema = {
    "operation_id": "List Background Patterns",
    "description": "Background pattern catalog, default options, option ranges, blend modes and the keyframes animated patterns use.",
    "responses": {200: OpenApiResponse(description="Pattern catalog")},
}

preview_schema = {
    "operation_id": "Preview Theme",
    "description": """
    Resolve a theme into structured style objects and a stylesheet without saving.

    `shadow_layers` replaces the theme's `custom_shadow` with the composed
    layers (first layer on top). `pattern` replaces `background_pattern` with
    the generated declarations; an empty id clears it. The composed layers are
    echoed back in `shadow_layers` with their ids filled in.
    """,
    "request": StylePreviewSerializer,
    "responses": {
        200: inline_serializer(
            name="StylePreview",
            fields={
                "theme": serializers.DictField(),
                "shadow_layers": serializers.ListField(child=serializers.DictField()),
                "presentation": serializers.DictField(),
            },
        ),
        400: OpenApiResponse(description="Validation errors keyed by field"),
    },
    "examples": [
        OpenApiExample(
            "Dark theme with dots",
            value={
                "theme": {"style": "dark", "primary_color": "#818cf8", "button_style": "pill"},
                "shadow_layers": [{"x": 0, "y": 4, "blur": 6, "spread": 0, "color": "#000000", "opacity": 15}],
                "pattern": {"id": "dots", "options": {"size": 3, "spacing": 24}},
            },
            request_only=True,
        )
    ],
}

custom_css_schema = {
    "operation_id": "Validate Custom CSS",
    "description": "Parse custom CSS and report errors. Markup that could end the page's style element and unclosed blocks are always rejected. Valid CSS is returned pretty-printed in `formatted`.",
    "request": CustomCSSSerializer,
    "responses": {
        200: inline_serializer(
            name="CustomCSSValidation",
            fields={
                "is_valid": serializers.BooleanField(),
                "errors": serializers.ListField(child=serializers.CharField()),
                "formatted": serializers.CharField(allow_null=True),
            },
        ),
    },
}
