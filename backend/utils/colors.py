# utils/colors.py
import re

from .css import css_number

HEX_COLOR_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def is_hex_color(value):
    return isinstance(value, str) and bool(HEX_COLOR_RE.match(value))


def hex_to_rgb(hex_color):
    """Return an ``(r, g, b)`` tuple, or None when the value is not a 6-digit hex color."""
    if not isinstance(hex_color, str):
        return None
    match = HEX_COLOR_RE.match(hex_color)
    if not match:
        return None
    return tuple(int(part, 16) for part in match.groups())


def hex_to_rgba(hex_color, alpha):
    """Combine a hex color and an alpha into ``rgba(r, g, b, a)``; unparseable colors become black."""
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        rgb = (0, 0, 0)
    r, g, b = rgb
    return f"rgba({r}, {g}, {b}, {css_number(alpha)})"


def complementary_color(hex_color):
    """Invert each channel of a hex color. Invalid input is returned unchanged."""
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return hex_color
    return "#" + "".join(f"{255 - channel:02x}" for channel in rgb)


def with_alpha_suffix(hex_color, alpha_hex):
    """Append a two-digit alpha to a 6-digit hex color (``#6366f1`` + ``66``)."""
    if not is_hex_color(hex_color):
        return hex_color
    color = hex_color if hex_color.startswith("#") else f"#{hex_color}"
    return f"{color}{alpha_hex}"
