# backend/businesses/serializers.py
import uuid

from rest_framework import serializers

from config.constants import (
    BUSINESS_TYPES, LINK_TYPES, SERVICES_STYLES, DEFAULT_SERVICES_STYLE,
    PARTICLE_EFFECTS, BIO_MAX_LENGTH, BUSINESS_NAME_MAX_LENGTH,
)
from utils.custom_css import validate_custom_css, validate_declarations
from utils.filters import FILTER_RANGES, DROP_SHADOW_RANGES
from utils.identifiers import validate_whatsapp, format_whatsapp
from utils.themes import (
    STYLES, BUTTON_STYLES, FONTS, THEME_PRESETS, DEFAULT_THEME_PRESET, Theme, apply_theme_preset,
    is_background_value,
)
from .models import Business, default_profile_data, default_layout_data
from . import services

HEX_COLOR_PATTERN = r"^#[0-9a-fA-F]{6}$"


class ServiceSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100, allow_blank=True)
    price = serializers.CharField(max_length=50, allow_blank=True)
    image = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)


class CustomLinkSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=64, required=False, allow_blank=True)
    title = serializers.CharField(max_length=100)
    url = serializers.CharField(max_length=500)
    type = serializers.ChoiceField(choices=LINK_TYPES, default="url")
    icon = serializers.CharField(max_length=32, required=False, default="default")
    visible = serializers.BooleanField(default=True)

    def validate(self, data):
        """Links created without an id get one."""
        if not data.get("id"):
            data["id"] = uuid.uuid4().hex[:8]
        return data


class ProfileSerializer(serializers.Serializer):
    avatar = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True, default=None)
    bio = serializers.CharField(max_length=BIO_MAX_LENGTH, required=False, allow_blank=True, allow_null=True, default=None)
    cover_image = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True, default=None)
    business_type = serializers.ChoiceField(
        choices=[item["key"] for item in BUSINESS_TYPES], required=False, allow_null=True, default=None
    )


class LayoutSerializer(serializers.Serializer):
    show_services = serializers.BooleanField(default=True)
    services_style = serializers.ChoiceField(choices=SERVICES_STYLES, default=DEFAULT_SERVICES_STYLE)
    link_order = serializers.ListField(child=serializers.CharField(max_length=64), required=False, default=list)


def _range_field(bounds, default):
    low, high = bounds
    return serializers.FloatField(min_value=low, max_value=high, default=default)


class DropShadowSerializer(serializers.Serializer):
    x = _range_field(DROP_SHADOW_RANGES["x"], 0)
    y = _range_field(DROP_SHADOW_RANGES["y"], 0)
    blur = _range_field(DROP_SHADOW_RANGES["blur"], 0)
    color = serializers.RegexField(HEX_COLOR_PATTERN, default="#000000")


class FilterSettingsSerializer(serializers.Serializer):
    """Slider values are range-checked here; the filter composer itself trusts its input."""
    blur = _range_field(FILTER_RANGES["blur"], 0)
    brightness = _range_field(FILTER_RANGES["brightness"], 100)
    contrast = _range_field(FILTER_RANGES["contrast"], 100)
    saturate = _range_field(FILTER_RANGES["saturate"], 100)
    hue_rotate = _range_field(FILTER_RANGES["hue_rotate"], 0)
    grayscale = _range_field(FILTER_RANGES["grayscale"], 0)
    sepia = _range_field(FILTER_RANGES["sepia"], 0)
    invert = _range_field(FILTER_RANGES["invert"], 0)
    opacity = _range_field(FILTER_RANGES["opacity"], 100)
    drop_shadow = DropShadowSerializer(required=False)


class ThemeSerializer(serializers.Serializer):
    style = serializers.ChoiceField(choices=STYLES, default="minimal")
    primary_color = serializers.RegexField(HEX_COLOR_PATTERN, default="#6366f1")
    background_color = serializers.CharField(max_length=200, default="#ffffff")  # hex or gradient reference
    text_color = serializers.RegexField(HEX_COLOR_PATTERN, default="#1e293b")
    button_style = serializers.ChoiceField(choices=BUTTON_STYLES, default="rounded")
    font = serializers.ChoiceField(choices=FONTS, default="inter")
    animations = serializers.BooleanField(default=True)
    hover_effects = serializers.BooleanField(default=True)
    custom_css = serializers.CharField(required=False, allow_blank=True, default="", trim_whitespace=False)
    background_pattern = serializers.CharField(required=False, allow_blank=True, default="")
    custom_shadow = serializers.CharField(max_length=1000, required=False, allow_blank=True, default="")
    particle_effect = serializers.ChoiceField(choices=PARTICLE_EFFECTS, required=False, allow_blank=True, default="")
    filters = FilterSettingsSerializer(required=False, allow_null=True, default=None)

    def validate_custom_css(self, value):
        result = validate_custom_css(value)
        if not result.is_valid:
            raise serializers.ValidationError(result.errors)
        return value

    def validate_background_color(self, value):
        if not is_background_value(value):
            raise serializers.ValidationError(
                "Use a hex color like #ffffff or a gradient such as 'from-amber-400 to-rose-500'."
            )
        return value

    def validate_background_pattern(self, value):
        result = validate_declarations(value)
        if not result.is_valid:
            raise serializers.ValidationError(result.errors)
        return value

    def validate_custom_shadow(self, value):
        if not value:
            return value
        result = validate_declarations(f"box-shadow: {value}")
        if not result.is_valid or ";" in value:
            raise serializers.ValidationError("Shadow must be a single box-shadow value.")
        return value


class BusinessFieldsMixin:
    """Validation rules shared by the intake form and the edit form."""

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Business name is required")
        return value

    def validate_whatsapp(self, value):
        if not value.strip():
            raise serializers.ValidationError("WhatsApp number is required")
        if not validate_whatsapp(value):
            raise serializers.ValidationError("Please enter a valid WhatsApp number")
        return format_whatsapp(value)

    def validate_instagram(self, value):
        value = (value or "").strip()
        return value or None

    def validate_services(self, value):
        """Only services with both a name and a price are kept."""
        return [
            {key: val.strip() if isinstance(val, str) else val for key, val in service.items() if val not in (None, "")}
            for service in value
            if service.get("name", "").strip() and service.get("price", "").strip()
        ]

    def validate_links(self, value):
        ids = [link["id"] for link in value]
        if len(ids) != len(set(ids)):
            raise serializers.ValidationError("Link ids must be unique.")
        return value


class BusinessIntakeSerializer(BusinessFieldsMixin, serializers.Serializer):
    """Creation form: basic details, at least one priced service, optional links and theme preset."""
    name = serializers.CharField(max_length=BUSINESS_NAME_MAX_LENGTH, allow_blank=True)
    whatsapp = serializers.CharField(max_length=32, allow_blank=True)
    instagram = serializers.CharField(max_length=64, required=False, allow_blank=True, allow_null=True)
    services = ServiceSerializer(many=True, required=False, default=list)
    links = CustomLinkSerializer(many=True, required=False, default=list)
    business_type = serializers.ChoiceField(
        choices=[item["key"] for item in BUSINESS_TYPES], required=False, allow_null=True, default=None
    )
    theme_preset = serializers.ChoiceField(choices=list(THEME_PRESETS), default=DEFAULT_THEME_PRESET)

    def validate(self, data):
        if not data.get("services") and not data.get("links"):
            raise serializers.ValidationError({"services": ["At least one service is required"]})
        return data

    def create(self, validated_data):
        theme = apply_theme_preset(validated_data["theme_preset"])
        return services.create_business(
            name=validated_data["name"],
            whatsapp=validated_data["whatsapp"],
            instagram=validated_data.get("instagram"),
            services=validated_data.get("services", []),
            links=validated_data.get("links", []),
            profile={**default_profile_data(), "business_type": validated_data.get("business_type")},
            theme=theme.to_dict(),
        )


class BusinessEditSerializer(BusinessFieldsMixin, serializers.Serializer):
    """Edit form and auto-save payload. Slug and edit token are not writable."""
    name = serializers.CharField(max_length=BUSINESS_NAME_MAX_LENGTH, allow_blank=True)
    whatsapp = serializers.CharField(max_length=32, allow_blank=True)
    instagram = serializers.CharField(max_length=64, required=False, allow_blank=True, allow_null=True)
    services = ServiceSerializer(many=True)
    theme = ThemeSerializer(required=False)
    profile = ProfileSerializer(required=False)
    links = CustomLinkSerializer(many=True, required=False)
    layout = LayoutSerializer(required=False)
    version = serializers.IntegerField(min_value=0, required=False)

    def validate_theme(self, value):
        # Stored themes are always complete documents
        return Theme.from_dict(value).to_dict()

    def validate_profile(self, value):
        return {**default_profile_data(), **value}

    def validate_layout(self, value):
        return {**default_layout_data(), **value}

    def validate(self, data):
        if "services" in data and not data["services"]:
            if "links" in data:
                links = data["links"]
            else:
                links = self.instance.links if self.instance else []
            if not links:
                raise serializers.ValidationError({"services": ["At least one service is required"]})
        return data


class BusinessEditorSerializer(serializers.ModelSerializer):
    """Full record returned to the token holder."""

    class Meta:
        model = Business
        fields = [
            "slug", "name", "whatsapp", "instagram", "services", "edit_token",
            "theme", "profile", "links", "layout", "version", "created_at", "updated_at",
        ]
        read_only_fields = fields


class BusinessPublicSerializer(serializers.ModelSerializer):
    """Public view of a business. Never includes the edit token."""

    class Meta:
        model = Business
        fields = ["slug", "name", "whatsapp", "instagram", "services", "profile", "layout", "created_at"]
        read_only_fields = fields
