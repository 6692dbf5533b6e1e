# backend/styles/serializers.py
from rest_framework import serializers

from businesses.serializers import HEX_COLOR_PATTERN, ThemeSerializer
from utils.patterns import PATTERNS, BLEND_MODES, OPTION_RANGES


class ShadowLayerSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=32, required=False, allow_blank=True)
    x = serializers.FloatField(min_value=-50, max_value=50, default=0)
    y = serializers.FloatField(min_value=-50, max_value=50, default=0)
    blur = serializers.FloatField(min_value=0, max_value=100, default=0)
    spread = serializers.FloatField(min_value=-50, max_value=50, default=0)
    color = serializers.RegexField(HEX_COLOR_PATTERN, default="#000000")
    opacity = serializers.FloatField(min_value=0, max_value=100, default=0)
    inset = serializers.BooleanField(default=False)


class PatternOptionsSerializer(serializers.Serializer):
    primary_color = serializers.RegexField(HEX_COLOR_PATTERN, default="#6366f1")
    secondary_color = serializers.RegexField(HEX_COLOR_PATTERN, default="#8b5cf6")
    size = serializers.FloatField(min_value=OPTION_RANGES["size"][0], max_value=OPTION_RANGES["size"][1], default=2)
    opacity = serializers.FloatField(
        min_value=OPTION_RANGES["opacity"][0], max_value=OPTION_RANGES["opacity"][1], default=30
    )
    rotation = serializers.FloatField(
        min_value=OPTION_RANGES["rotation"][0], max_value=OPTION_RANGES["rotation"][1], default=0
    )
    spacing = serializers.FloatField(
        min_value=OPTION_RANGES["spacing"][0], max_value=OPTION_RANGES["spacing"][1], default=20
    )
    blend_mode = serializers.ChoiceField(choices=BLEND_MODES, default="normal")
    animation = serializers.BooleanField(default=False)


class PatternSelectionSerializer(serializers.Serializer):
    id = serializers.ChoiceField(choices=list(PATTERNS), allow_blank=True)
    options = PatternOptionsSerializer(required=False)
    seed = serializers.IntegerField(required=False, allow_null=True, default=None)


class StylePreviewSerializer(serializers.Serializer):
    """Theme plus optional editor state that is turned into theme values before resolving."""
    theme = ThemeSerializer()
    shadow_layers = ShadowLayerSerializer(many=True, required=False)
    pattern = PatternSelectionSerializer(required=False)


class CustomCSSSerializer(serializers.Serializer):
    css = serializers.CharField(allow_blank=True, trim_whitespace=False)
