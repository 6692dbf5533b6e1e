# backend/styles/views.py
from dataclasses import asdict

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny
from rest_framework.parsers import JSONParser
from drf_spectacular.utils import extend_schema

from utils.custom_css import CSS_TEMPLATES, validate_custom_css, format_css
from utils.filters import FILTER_PRESETS, FILTER_RANGES, DROP_SHADOW_RANGES, apply_filter_preset, compose_filter
from utils.patterns import PATTERNS, PATTERN_KEYFRAMES, BLEND_MODES, OPTION_RANGES, PatternOptions, render_pattern
from utils.shadows import SHADOW_PRESETS, ShadowLayer, ShadowStack, compose_box_shadow
from utils.themes import THEME_PRESETS, Theme, apply_theme_preset, resolve_presentation
from .serializers import StylePreviewSerializer, CustomCSSSerializer
from .schemas import (
    theme_catalog_schema, filter_catalog_schema, shadow_catalog_schema, pattern_catalog_schema,
    preview_schema, custom_css_schema,
)


class ThemeCatalogView(APIView):
    """Theme presets with the presentation each one resolves to."""
    permission_classes = [AllowAny]

    @extend_schema(**theme_catalog_schema)
    def get(self, request):
        presets = []
        for name in THEME_PRESETS:
            theme = apply_theme_preset(name)
            presets.append({
                "name": name,
                "theme": theme.to_dict(),
                "presentation": resolve_presentation(theme),
            })
        return Response({"presets": presets, "css_templates": CSS_TEMPLATES})


class FilterCatalogView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(**filter_catalog_schema)
    def get(self, request):
        presets = []
        for name in FILTER_PRESETS:
            settings = apply_filter_preset(name)
            presets.append({"name": name, "settings": settings.to_dict(), "filter": compose_filter(settings)})
        return Response({
            "ranges": {**FILTER_RANGES, "drop_shadow": DROP_SHADOW_RANGES},
            "presets": presets,
        })


class ShadowCatalogView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(**shadow_catalog_schema)
    def get(self, request):
        presets = [
            {"name": name, "layers": layers, "box_shadow": compose_box_shadow(ShadowLayer(**layer) for layer in layers)}
            for name, layers in SHADOW_PRESETS.items()
        ]
        return Response({"presets": presets})


class PatternCatalogView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(**pattern_catalog_schema)
    def get(self, request):
        patterns = [
            {"id": pattern.id, "name": pattern.name, "type": pattern.type, "preview": pattern.preview}
            for pattern in PATTERNS.values()
        ]
        return Response({
            "patterns": patterns,
            "default_options": asdict(PatternOptions()),
            "ranges": OPTION_RANGES,
            "blend_modes": BLEND_MODES,
            "keyframes": PATTERN_KEYFRAMES,
        })


class StylePreviewView(APIView):
    """
    Resolve a theme into page styles without saving anything.
    Shadow layers and a pattern selection are composed into the theme first,
    the same way the editor does it.
    """
    permission_classes = [AllowAny]
    parser_classes = [JSONParser]

    @extend_schema(**preview_schema)
    def post(self, request):
        serializer = StylePreviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        theme = Theme.from_dict(data["theme"])
        shadows = None
        if data.get("shadow_layers"):
            shadows = ShadowStack.from_list(data["shadow_layers"])
            theme.custom_shadow = shadows.css
        if "pattern" in data:
            pattern = data["pattern"]
            options = PatternOptions.from_dict(pattern.get("options"))
            theme.background_pattern = render_pattern(pattern["id"], options, seed=pattern.get("seed"))

        return Response({
            "theme": theme.to_dict(),
            "shadow_layers": shadows.to_list() if shadows else [],
            "presentation": resolve_presentation(theme),
        })


class CustomCSSValidateView(APIView):
    """Report whether custom CSS would be accepted. Invalid CSS is a normal 200 answer, not an error."""
    permission_classes = [AllowAny]
    parser_classes = [JSONParser]

    @extend_schema(**custom_css_schema)
    def post(self, request):
        serializer = CustomCSSSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        css = serializer.validated_data["css"]
        result = validate_custom_css(css)
        return Response({
            "is_valid": result.is_valid,
            "errors": result.errors,
            "formatted": format_css(css) if result.is_valid else None,
        })
