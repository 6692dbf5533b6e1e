# utils/filters.py
"""
CSS filter composition for the page-wide "photo filter" effect.

A FilterSettings value holds nine slider positions plus an optional drop
shadow. ``compose_filter`` turns it into a single CSS ``filter`` value with the
functions always in the same order, so moving one slider never reorders the
rest of the string.
"""
from dataclasses import dataclass, field, asdict, replace

from .css import css_number

# Slider domains (min, max). The editing side clamps into these, the composer does not.
FILTER_RANGES = {
    "blur": (0, 20),
    "brightness": (0, 200),
    "contrast": (0, 200),
    "saturate": (0, 200),
    "hue_rotate": (-180, 180),
    "grayscale": (0, 100),
    "sepia": (0, 100),
    "invert": (0, 100),
    "opacity": (0, 100),
}

DROP_SHADOW_RANGES = {
    "x": (-20, 20),
    "y": (-20, 20),
    "blur": (0, 30),
}

# (field, css function, unit) in output order
FILTER_FUNCTIONS = [
    ("blur", "blur", "px"),
    ("brightness", "brightness", "%"),
    ("contrast", "contrast", "%"),
    ("saturate", "saturate", "%"),
    ("hue_rotate", "hue-rotate", "deg"),
    ("grayscale", "grayscale", "%"),
    ("sepia", "sepia", "%"),
    ("invert", "invert", "%"),
    ("opacity", "opacity", "%"),
]


@dataclass
class DropShadow:
    x: float = 0
    y: float = 0
    blur: float = 0
    color: str = "#000000"

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        default = cls()
        return cls(
            x=data.get("x", default.x),
            y=data.get("y", default.y),
            blur=data.get("blur", default.blur),
            color=data.get("color", default.color),
        )


@dataclass
class FilterSettings:
    blur: float = 0
    brightness: float = 100
    contrast: float = 100
    saturate: float = 100
    hue_rotate: float = 0
    grayscale: float = 0
    sepia: float = 0
    invert: float = 0
    opacity: float = 100
    drop_shadow: DropShadow = field(default_factory=DropShadow)

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, data):
        """Build settings from stored JSON; missing keys keep their identity defaults."""
        data = data or {}
        values = {name: data[name] for name in FILTER_RANGES if data.get(name) is not None}
        return cls(drop_shadow=DropShadow.from_dict(data.get("drop_shadow")), **values)

    @property
    def is_identity(self):
        return self == FilterSettings()


def compose_filter(settings):
    """
    Compose the CSS ``filter`` value.

    The nine functions are always emitted in fixed order; ``drop-shadow(...)``
    is appended only when its blur radius is greater than zero.
    """
    terms = [
        f"{function}({css_number(getattr(settings, name))}{unit})"
        for name, function, unit in FILTER_FUNCTIONS
    ]
    shadow = settings.drop_shadow
    if shadow.blur > 0:
        terms.append(
            f"drop-shadow({css_number(shadow.x)}px {css_number(shadow.y)}px "
            f"{css_number(shadow.blur)}px {shadow.color})"
        )
    return " ".join(terms)


def _clamp(value, bounds):
    low, high = bounds
    return max(low, min(high, value))


def clamp_filters(settings):
    """Return a copy with every slider pulled into its documented domain."""
    values = {name: _clamp(getattr(settings, name), bounds) for name, bounds in FILTER_RANGES.items()}
    shadow = settings.drop_shadow
    values["drop_shadow"] = replace(
        shadow,
        **{name: _clamp(getattr(shadow, name), bounds) for name, bounds in DROP_SHADOW_RANGES.items()},
    )
    return replace(settings, **values)


FILTER_PRESETS = {
    "None": {},
    "Vintage": {"sepia": 80, "contrast": 120, "brightness": 110},
    "B&W": {"grayscale": 100, "contrast": 110},
    "Vibrant": {"saturate": 150, "contrast": 120, "brightness": 105},
    "Cool": {"hue_rotate": 180, "saturate": 120},
    "Warm": {"hue_rotate": -30, "saturate": 130, "brightness": 105},
    "Dream": {"blur": 1, "brightness": 115, "saturate": 130, "opacity": 90},
    "Matrix": {"hue_rotate": 120, "contrast": 130, "brightness": 80},
}


def apply_filter_preset(name):
    """
    Return the preset's settings. Presets replace the current settings outright,
    they are never merged into them.

    Raises:
        KeyError: If no preset has that name
    """
    return FilterSettings(**FILTER_PRESETS[name])
