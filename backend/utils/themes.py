# utils/themes.py
"""
Theme resolution: turns a Theme value into the style objects and stylesheet the
public page and the live preview render with.

Resolvers return ordered ``{css-property: value}`` dicts. Unknown enum values
never raise; they resolve to the default path (flat white background, sans
font, rounded buttons).
"""
import re
import logging
from dataclasses import dataclass, asdict, fields, replace

from .colors import is_hex_color, hex_to_rgba, complementary_color, with_alpha_suffix
from .css import to_rule
from .custom_css import validate_custom_css, validate_declarations
from .filters import FILTER_RANGES, DROP_SHADOW_RANGES, FilterSettings, compose_filter
from .patterns import PATTERN_KEYFRAMES, keyframes_for_declarations

logger = logging.getLogger(__name__)

STYLES = ["minimal", "dark", "gradient", "glass", "neon", "pastel"]
BUTTON_STYLES = ["rounded", "pill", "square", "brutal", "ghost"]
FONTS = ["inter", "outfit", "space-mono", "playfair", "caveat"]

DEFAULT_BACKGROUND = "#ffffff"
DEFAULT_BUTTON_STYLE = "rounded"
DEFAULT_FONT = "inter"

FONT_FAMILIES = {
    "inter": "Inter, system-ui, -apple-system, sans-serif",
    "outfit": "Outfit, system-ui, -apple-system, sans-serif",
    "space-mono": "Space Mono, Monaco, Consolas, monospace",
    "playfair": "Playfair Display, Georgia, serif",
    "caveat": "Caveat, cursive, system-ui",
}

FONT_CLASSES = {
    "inter": "sans",
    "outfit": "sans",
    "space-mono": "mono",
    "playfair": "serif",
    "caveat": "sans",
}

BUTTON_RADII = {
    "rounded": "0.5rem",
    "pill": "9999px",
    "square": "0",
    "brutal": "0",
    "ghost": "0.5rem",
}

SHADOW_LG = "0 10px 15px -3px rgba(0, 0, 0, 0.1), 0 4px 6px -4px rgba(0, 0, 0, 0.1)"
SHADOW_XL = "0 20px 25px -5px rgba(0, 0, 0, 0.1), 0 8px 10px -6px rgba(0, 0, 0, 0.1)"

# Palette entries referenced by the shipped gradient presets
PALETTE = {
    "amber-400": "#fbbf24",
    "orange-500": "#f97316",
    "rose-500": "#f43f5e",
    "sky-400": "#38bdf8",
    "cyan-500": "#06b6d4",
    "blue-600": "#2563eb",
    "violet-400": "#a78bfa",
    "purple-400": "#c084fc",
    "indigo-400": "#818cf8",
    "emerald-400": "#34d399",
    "green-500": "#22c55e",
    "teal-600": "#0d9488",
    "pink-400": "#f472b6",
    "red-500": "#ef4444",
    "gray-900": "#111827",
    "purple-900": "#581c87",
    "violet-900": "#4c1d95",
    "slate-900": "#0f172a",
    "white": "#ffffff",
    "black": "#000000",
}

DARK_BACKGROUND = PALETTE["slate-900"]
NEON_BACKGROUND = (
    f"linear-gradient(to bottom right, {PALETTE['gray-900']}, {PALETTE['purple-900']}, {PALETTE['violet-900']})"
)

_STOP_RE = re.compile(r"^(from|via|to)-(\[#[0-9a-fA-F]{6}\]|[a-z]+(?:-\d{2,3})?)(?:/(\d{1,3}))?$")


@dataclass
class Theme:
    style: str = "minimal"
    primary_color: str = "#6366f1"
    background_color: str = "#ffffff"
    text_color: str = "#1e293b"
    button_style: str = "rounded"
    font: str = "inter"
    animations: bool = True
    hover_effects: bool = True
    custom_css: str = ""
    background_pattern: str = ""
    custom_shadow: str = ""
    particle_effect: str = ""
    filters: FilterSettings = None

    def to_dict(self):
        data = asdict(self)
        data["filters"] = self.filters.to_dict() if self.filters else None
        return data

    @classmethod
    def from_dict(cls, data):
        """Build a Theme from stored JSON, ignoring keys it does not know."""
        data = data or {}
        names = {f.name for f in fields(cls)} - {"filters"}
        values = {key: value for key, value in data.items() if key in names and value is not None}
        filters = data.get("filters")
        return cls(filters=FilterSettings.from_dict(filters) if filters else None, **values)


THEME_PRESETS = {
    "modern": dict(style="minimal", primary_color="#6366f1", background_color="#ffffff",
                   text_color="#1e293b", button_style="rounded", font="inter"),
    "midnight": dict(style="dark", primary_color="#818cf8", background_color="#0f172a",
                     text_color="#f1f5f9", button_style="rounded", font="inter"),
    "sunset": dict(style="gradient", primary_color="#f59e0b",
                   background_color="from-amber-400 via-orange-500 to-rose-500",
                   text_color="#ffffff", button_style="pill", font="outfit"),
    "ocean": dict(style="gradient", primary_color="#0891b2",
                  background_color="from-sky-400 via-cyan-500 to-blue-600",
                  text_color="#ffffff", button_style="pill", font="inter"),
    "glass": dict(style="glass", primary_color="#8b5cf6",
                  background_color="from-violet-400/20 via-purple-400/20 to-indigo-400/20",
                  text_color="#1e293b", button_style="rounded", font="inter"),
    "neon": dict(style="neon", primary_color="#c084fc", background_color="#0f0f23",
                 text_color="#f1f5f9", button_style="rounded", font="space-mono"),
    "forest": dict(style="gradient", primary_color="#10b981",
                   background_color="from-emerald-400 via-green-500 to-teal-600",
                   text_color="#ffffff", button_style="pill", font="outfit"),
    "rose": dict(style="gradient", primary_color="#ec4899",
                 background_color="from-pink-400 via-rose-500 to-red-500",
                 text_color="#ffffff", button_style="pill", font="caveat"),
}

DEFAULT_THEME_PRESET = "modern"


def apply_theme_preset(name):
    """
    Return a fresh Theme for a preset. Selecting a preset replaces the whole
    theme; nothing from the previous theme is carried over.

    Raises:
        KeyError: If the preset does not exist
    """
    return Theme(**THEME_PRESETS[name])


def default_theme():
    return apply_theme_preset(DEFAULT_THEME_PRESET)


def is_background_value(value):
    """A 6-digit hex color, or a gradient reference made only of from-/via-/to- stops."""
    if is_hex_color(value):
        return True
    if not isinstance(value, str) or not value.split():
        return False
    return all(_STOP_RE.match(token) for token in value.split())


def parse_gradient_stops(reference):
    """
    Parse a gradient reference like ``"from-amber-400 via-orange-500 to-rose-500"``
    into CSS color stops. Returns an empty list when nothing usable is found.
    """
    if not isinstance(reference, str):
        return []
    stops = {"from": None, "via": None, "to": None}
    for token in reference.split():
        match = _STOP_RE.match(token)
        if not match:
            continue
        position, color, alpha = match.groups()
        if color.startswith("["):
            hex_color = color[1:-1]
        else:
            hex_color = PALETTE.get(color)
        if not hex_color:
            continue
        stops[position] = hex_to_rgba(hex_color, int(alpha) / 100) if alpha else hex_color
    return [stop for stop in (stops["from"], stops["via"], stops["to"]) if stop]


def enhance_theme(theme):
    """Give a gradient theme with a flat hex background a primary-to-complementary gradient."""
    primary = theme.primary_color
    if theme.style != "gradient" or parse_gradient_stops(theme.background_color) or not is_hex_color(primary):
        return theme
    primary = primary if primary.startswith("#") else f"#{primary}"
    data = theme.to_dict()
    data["background_color"] = f"from-[{primary}] to-[{complementary_color(primary)}]"
    return Theme.from_dict(data)


def _gradient_background(theme):
    stops = parse_gradient_stops(theme.background_color)
    if len(stops) < 2:
        base = theme.background_color if is_hex_color(theme.background_color) else theme.primary_color
        if not is_hex_color(base):
            return DEFAULT_BACKGROUND
        stops = [base, complementary_color(base)]
    return f"linear-gradient(to bottom right, {', '.join(stops)})"


def resolve_background(theme):
    style = {"position": "relative", "overflow": "hidden"}
    if theme.style in ("minimal", "pastel"):
        color = theme.background_color if is_hex_color(theme.background_color) else DEFAULT_BACKGROUND
        style["background"] = color
    elif theme.style == "dark":
        style["background"] = DARK_BACKGROUND
    elif theme.style == "gradient":
        style["background"] = _gradient_background(theme)
    elif theme.style == "glass":
        style["background"] = _gradient_background(theme)
        style["backdrop-filter"] = "blur(24px)"
    elif theme.style == "neon":
        style["background"] = NEON_BACKGROUND
    else:
        style["background"] = DEFAULT_BACKGROUND
    return style


def resolve_font(font):
    if font not in FONT_FAMILIES:
        font = DEFAULT_FONT
    style = {"family_class": FONT_CLASSES[font], "font-family": FONT_FAMILIES[font]}
    if font == "outfit":
        style["letter-spacing"] = "0.025em"
    return style


def resolve_text(theme):
    style = {"color": theme.text_color}
    if theme.style == "neon":
        style["text-shadow"] = f"0 0 10px {theme.text_color}"
        style["font-family"] = FONT_FAMILIES["space-mono"]
    return style


def resolve_button(theme):
    """
    Resolve the link/booking button look.

    Returns ``{"base": {...}, "hover": {...}}``. Brutal and ghost buttons keep
    their fixed look on every page style; other shapes take the page style's
    color treatment.
    """
    shape = theme.button_style if theme.button_style in BUTTON_RADII else DEFAULT_BUTTON_STYLE
    primary = theme.primary_color
    base = {
        "border-radius": BUTTON_RADII[shape],
        "transition": "all 300ms ease",
    }
    hover = {"transform": "scale(1.05)"}

    if shape == "brutal":
        base.update({
            "background": primary,
            "color": "#ffffff",
            "border": "4px solid #000000",
            "box-shadow": "4px 4px 0px 0px #000000",
        })
        hover.update({
            "transform": "translate(0.25rem, 0.25rem)",
            "box-shadow": "2px 2px 0px 0px #000000",
        })
        return {"base": base, "hover": hover}

    if shape == "ghost":
        base.update({
            "background": "transparent",
            "color": primary,
            "border": f"2px solid {primary}",
        })
        hover.update({"background": primary, "color": "#ffffff"})
        return {"base": base, "hover": hover}

    if theme.style == "neon":
        base.update({
            "background": "transparent",
            "color": primary,
            "border": f"2px solid {primary}",
            "box-shadow": SHADOW_LG,
        })
        hover.update({
            "background": primary,
            "color": "#0f172a",
            "box-shadow": f"0 0 30px {with_alpha_suffix(primary, '60')}",
        })
    elif theme.style == "glass":
        base.update({
            "background": "rgba(255, 255, 255, 0.2)",
            "backdrop-filter": "blur(24px)",
            "border": "1px solid rgba(255, 255, 255, 0.4)",
            "color": "#1e293b",
            "box-shadow": SHADOW_LG,
        })
        hover.update({"background": "rgba(255, 255, 255, 0.3)", "box-shadow": SHADOW_XL})
    elif theme.style == "gradient":
        base.update({
            "background": f"linear-gradient(to right, {primary}, {with_alpha_suffix(primary, 'cc')})",
            "color": "#ffffff",
            "box-shadow": SHADOW_LG,
        })
        hover.update({"box-shadow": f"0 20px 25px -5px {with_alpha_suffix(primary, '40')}"})
    elif theme.style == "dark":
        base.update({"background": primary, "color": "#ffffff", "box-shadow": SHADOW_LG})
        hover.update({
            "background": with_alpha_suffix(primary, "e6"),
            "box-shadow": f"0 20px 25px -5px {with_alpha_suffix(primary, '40')}",
        })
    else:
        base.update({"background": primary, "color": "#ffffff", "box-shadow": SHADOW_LG})
        hover.update({"background": with_alpha_suffix(primary, "e6"), "box-shadow": SHADOW_XL})
    return {"base": base, "hover": hover}


def resolve_filter(theme):
    if not theme.filters or theme.filters.is_identity:
        return ""
    return compose_filter(theme.filters)


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _filters_are_renderable(filters):
    shadow = filters.drop_shadow
    return (
        all(_is_number(getattr(filters, name)) for name in FILTER_RANGES)
        and all(_is_number(getattr(shadow, name)) for name in DROP_SHADOW_RANGES)
        and is_hex_color(shadow.color)
    )


def sanitize_theme(theme):
    """
    Return a theme whose values are safe to write into a stylesheet.

    Colors that are not hex fall back to the defaults, shadow and pattern
    values that do not parse as plain declarations are dropped, and filters
    with non-numeric sliders or a non-hex shadow color are cleared. Custom CSS
    is checked separately by ``build_stylesheet``.
    """
    default = Theme()
    changes = {}
    for name in ("primary_color", "text_color"):
        if not is_hex_color(getattr(theme, name)):
            changes[name] = getattr(default, name)
    if not is_background_value(theme.background_color):
        changes["background_color"] = default.background_color
    shadow = theme.custom_shadow
    if shadow and (";" in shadow or not validate_declarations(f"box-shadow: {shadow}").is_valid):
        changes["custom_shadow"] = ""
    if theme.background_pattern and not validate_declarations(theme.background_pattern).is_valid:
        changes["background_pattern"] = ""
    if theme.filters and not _filters_are_renderable(theme.filters):
        changes["filters"] = None

    if not changes:
        return theme
    logger.warning(f"Dropping theme values that cannot be rendered: {', '.join(sorted(changes))}")
    return replace(theme, **changes)


def build_stylesheet(theme):
    """
    Compose the page stylesheet for a theme.

    Rules are emitted for the page, text, buttons, cards and the pattern
    overlay, followed by any keyframes the pattern needs. The theme's custom
    CSS is appended last, and only when it validates.
    """
    theme = sanitize_theme(theme)
    font = resolve_font(theme.font)
    page = dict(resolve_background(theme))
    page["font-family"] = font["font-family"]
    if "letter-spacing" in font:
        page["letter-spacing"] = font["letter-spacing"]
    page["filter"] = resolve_filter(theme)

    button = resolve_button(theme)
    rules = [
        to_rule(".tapbook-page", page),
        to_rule(".tapbook-text", resolve_text(theme)),
        to_rule(".tapbook-button", button["base"]),
        to_rule(".tapbook-button:hover", button["hover"] if theme.hover_effects else {}),
        to_rule(".tapbook-card", {"box-shadow": theme.custom_shadow}),
    ]
    if theme.background_pattern:
        rules.append(f".tapbook-pattern {{ {theme.background_pattern.strip()} }}")
        rules.extend(PATTERN_KEYFRAMES[name] for name in keyframes_for_declarations(theme.background_pattern))

    if theme.custom_css:
        result = validate_custom_css(theme.custom_css)
        if result.is_valid:
            rules.append(theme.custom_css.strip())
        else:
            logger.warning(f"Skipping invalid custom CSS: {result.errors[:1]}")

    return "\n".join(rule for rule in rules if rule)


def resolve_presentation(theme):
    """Everything the page needs to render a theme, resolved in one pass."""
    theme = sanitize_theme(theme)
    return {
        "background": resolve_background(theme),
        "text": resolve_text(theme),
        "button": resolve_button(theme),
        "font": resolve_font(theme.font),
        "filter": resolve_filter(theme),
        "box_shadow": theme.custom_shadow or "",
        "pattern": theme.background_pattern or "",
        "particle_effect": theme.particle_effect or None,
        "animations": theme.animations,
        "stylesheet": build_stylesheet(theme),
    }
