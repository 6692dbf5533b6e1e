# backend/businesses/editor.py
"""
Editing session for one business page.

The session owns the in-memory copy of the page, applies edits through the
style composers so a preview is always available, and persists on a debounce:
every edit bumps a monotonic version and pushes the single save deadline back
by the idle window. Callers drive time by calling ``tick()`` from their event
loop or timer; nothing here starts threads.
"""
import copy
import time
import uuid
import logging

from django.conf import settings

from config.constants import BIO_MAX_LENGTH, LINK_TYPES, SERVICES_STYLES
from utils.custom_css import validate_custom_css
from utils.filters import FilterSettings, apply_filter_preset, clamp_filters
from utils.patterns import PatternOptions, render_pattern
from utils.shadows import ShadowStack
from utils.colors import is_hex_color
from utils.themes import Theme, apply_theme_preset, enhance_theme, is_background_value, resolve_presentation
from .models import default_profile_data, default_layout_data
from . import services

logger = logging.getLogger(__name__)

CONTENT_FIELDS = ("name", "whatsapp", "instagram", "services")


def store_saver(slug, token):
    """Save callable that writes through the record store."""
    def save(payload, version):
        services.update_business(slug, token, payload, version=version)
    return save


def _check_link_type(link_type):
    if link_type not in LINK_TYPES:
        raise ValueError(f"Unknown link type: {link_type}")


class EditorSession:
    def __init__(self, business_data, save, clock=time.monotonic, idle_seconds=None):
        self.save = save
        self.clock = clock
        self.idle_seconds = idle_seconds if idle_seconds is not None else settings.TAPBOOK["AUTOSAVE_IDLE_SECONDS"]

        self.slug = business_data.get("slug")
        self.content = {key: copy.deepcopy(business_data.get(key)) for key in CONTENT_FIELDS}
        self.theme = Theme.from_dict(business_data.get("theme"))
        self.profile = {**default_profile_data(), **(business_data.get("profile") or {})}
        self.links = copy.deepcopy(business_data.get("links") or [])
        self.layout = {**default_layout_data(), **(business_data.get("layout") or {})}

        self.shadows = ShadowStack()
        self.pattern_id = None
        self.pattern_options = PatternOptions()
        self.draft_css = self.theme.custom_css

        self.version = business_data.get("version") or 0
        self.saved_version = self.version
        self.deadline = None

    @classmethod
    def for_business(cls, business, **kwargs):
        data = {
            "slug": business.slug,
            "name": business.name,
            "whatsapp": business.whatsapp,
            "instagram": business.instagram,
            "services": business.services,
            "theme": business.theme,
            "profile": business.profile,
            "links": business.links,
            "layout": business.layout,
            "version": business.version,
        }
        return cls(data, store_saver(business.slug, business.edit_token), **kwargs)

    # Debounce and persistence

    @property
    def dirty(self):
        return self.version > self.saved_version

    def _touch(self):
        self.version += 1
        self.deadline = self.clock() + self.idle_seconds

    def payload(self):
        return {
            **copy.deepcopy(self.content),
            "theme": self.theme.to_dict(),
            "profile": dict(self.profile),
            "links": copy.deepcopy(self.links),
            "layout": dict(self.layout),
        }

    def tick(self):
        """Save if the idle window has elapsed since the last edit. Returns True when a save ran."""
        if self.deadline is None or self.clock() < self.deadline:
            return False
        return self._persist()

    def flush(self):
        """Save now if there are unsaved edits."""
        if not self.dirty:
            return False
        return self._persist()

    def _persist(self):
        version = self.version
        try:
            self.save(self.payload(), version)
        except services.StaleVersionError as e:
            # A newer version is already stored; not retried
            logger.warning(f"Auto-save for '{self.slug}' superseded: {e}")
            self.deadline = None
            return False
        except Exception:
            logger.exception(f"Auto-save for '{self.slug}' failed, retrying next window")
            self.deadline = self.clock() + self.idle_seconds
            return False

        self.saved_version = version
        self.deadline = None
        return True

    def preview(self):
        return resolve_presentation(self.theme)

    # Content

    def update_content(self, **changes):
        unknown = set(changes) - set(CONTENT_FIELDS)
        if unknown:
            raise ValueError(f"Unknown content fields: {', '.join(sorted(unknown))}")
        self.content.update(copy.deepcopy(changes))
        self._touch()

    def update_profile(self, **changes):
        if changes.get("bio"):
            changes["bio"] = changes["bio"][:BIO_MAX_LENGTH]
        self.profile.update(changes)
        self._touch()

    def update_layout(self, **changes):
        style = changes.get("services_style")
        if style is not None and style not in SERVICES_STYLES:
            raise ValueError(f"Unknown services style: {style}")
        self.layout.update(changes)
        self._touch()

    # Theme

    def _set_theme_field(self, name, value):
        data = self.theme.to_dict()
        data[name] = value
        self.theme = Theme.from_dict(data)

    def update_theme(self, **changes):
        """
        Change plain theme fields. Custom CSS, filters, shadow and pattern have their own operations.

        A gradient theme left with a flat background gets a primary-to-complementary
        gradient reference.
        """
        reserved = {"custom_css", "filters", "custom_shadow", "background_pattern"} & set(changes)
        if reserved:
            raise ValueError(f"Use the dedicated operation for: {', '.join(sorted(reserved))}")
        for name in ("primary_color", "text_color"):
            if name in changes and not is_hex_color(changes[name]):
                raise ValueError(f"Invalid color for {name}: {changes[name]!r}")
        if "background_color" in changes and not is_background_value(changes["background_color"]):
            raise ValueError(f"Invalid background: {changes['background_color']!r}")
        data = self.theme.to_dict()
        data.update(changes)
        self.theme = enhance_theme(Theme.from_dict(data))
        self._touch()

    def apply_theme_preset(self, name):
        """Replace the whole theme with a preset."""
        self.theme = apply_theme_preset(name)
        self.draft_css = ""
        self.shadows.reset()
        self.pattern_id = None
        self._touch()

    def set_filters(self, filters):
        self.theme.filters = clamp_filters(filters)
        self._touch()

    def apply_filter_preset(self, name):
        self.theme.filters = apply_filter_preset(name)
        self._touch()

    def reset_filters(self):
        self.theme.filters = FilterSettings()
        self._touch()

    def set_custom_css(self, css_text):
        """
        Validate and apply custom CSS.

        Invalid CSS is kept as the editor draft only; the last valid value stays
        in the theme and is what gets saved.
        """
        self.draft_css = css_text
        result = validate_custom_css(css_text)
        if result.is_valid:
            self._set_theme_field("custom_css", css_text)
            self._touch()
        return result

    # Shadow layers

    def _apply_shadow(self):
        self._set_theme_field("custom_shadow", self.shadows.css)
        self._touch()

    def add_shadow_layer(self):
        layer = self.shadows.add_layer()
        self._apply_shadow()
        return layer

    def duplicate_shadow_layer(self, layer_id):
        layer = self.shadows.duplicate_layer(layer_id)
        self._apply_shadow()
        return layer

    def remove_shadow_layer(self, layer_id):
        removed = self.shadows.remove_layer(layer_id)
        if removed:
            self._apply_shadow()
        return removed

    def update_shadow_layer(self, layer_id, **changes):
        layer = self.shadows.update_layer(layer_id, **changes)
        self._apply_shadow()
        return layer

    def apply_shadow_preset(self, name):
        self.shadows.apply_preset(name)
        self._apply_shadow()

    def reset_shadows(self):
        self.shadows.reset()
        self._set_theme_field("custom_shadow", "")
        self._touch()

    # Background pattern

    def _apply_pattern(self):
        self._set_theme_field("background_pattern", render_pattern(self.pattern_id, self.pattern_options))
        self._touch()

    def select_pattern(self, pattern_id, options=None):
        render_pattern(pattern_id, self.pattern_options)  # raises KeyError for unknown ids
        self.pattern_id = pattern_id
        if options is not None:
            self.pattern_options = options.clamped()
        self._apply_pattern()

    def update_pattern_options(self, **changes):
        data = self.pattern_options.to_dict()
        data.update(changes)
        self.pattern_options = PatternOptions.from_dict(data).clamped()
        if self.pattern_id:
            self._apply_pattern()

    def clear_pattern(self):
        self.pattern_id = None
        self._apply_pattern()

    # Links

    def _link_index(self, link_id):
        for index, link in enumerate(self.links):
            if link["id"] == link_id:
                return index
        raise KeyError(link_id)

    def add_link(self, title, url, type="url", icon="default", visible=True):
        _check_link_type(type)
        link = {
            "id": uuid.uuid4().hex[:8],
            "title": title,
            "url": url,
            "type": type,
            "icon": icon,
            "visible": visible,
        }
        self.links.append(link)
        self._touch()
        return link

    def update_link(self, link_id, **changes):
        if "type" in changes:
            _check_link_type(changes["type"])
        changes.pop("id", None)
        self.links[self._link_index(link_id)].update(changes)
        self._touch()

    def remove_link(self, link_id):
        del self.links[self._link_index(link_id)]
        self._touch()

    def toggle_link(self, link_id):
        link = self.links[self._link_index(link_id)]
        link["visible"] = not link.get("visible", True)
        self._touch()

    def move_link(self, link_id, new_index):
        """Move a link to a new position; the list order is the display order."""
        link = self.links.pop(self._link_index(link_id))
        new_index = max(0, min(new_index, len(self.links)))
        self.links.insert(new_index, link)
        self.layout["link_order"] = [item["id"] for item in self.links]
        self._touch()
