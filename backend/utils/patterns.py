# utils/patterns.py
"""
Decorative background patterns.

Every pattern in the catalog is an independent generator that turns a
PatternOptions value into an ordered set of CSS declarations (background
image and size plus opacity, transform and blend mode). The texture family
rasterizes pixel data into a data URI instead of using pure gradients.
"""
from dataclasses import dataclass, asdict

from .colors import with_alpha_suffix
from .css import css_number, to_declarations
from .textures import generate_noise_texture

BLEND_MODES = [
    "normal", "multiply", "screen", "overlay", "soft-light",
    "hard-light", "color-dodge", "color-burn", "darken", "lighten",
]

OPTION_RANGES = {
    "size": (1, 20),
    "opacity": (5, 100),
    "rotation": (-180, 180),
    "spacing": (10, 100),
}

PATTERN_KEYFRAMES = {
    "wave-float": (
        "@keyframes wave-float { "
        "0%, 100% { transform: translateY(0px); } "
        "50% { transform: translateY(-10px); } }"
    ),
    "organic-morph": (
        "@keyframes organic-morph { "
        "0%, 100% { transform: scale(1) rotate(0deg); } "
        "33% { transform: scale(1.05) rotate(120deg); } "
        "66% { transform: scale(0.95) rotate(240deg); } }"
    ),
}


@dataclass
class PatternOptions:
    primary_color: str = "#6366f1"
    secondary_color: str = "#8b5cf6"
    size: float = 2
    opacity: float = 30
    rotation: float = 0
    spacing: float = 20
    blend_mode: str = "normal"
    animation: bool = False

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        known = {key: value for key, value in data.items() if key in cls.__dataclass_fields__ and value is not None}
        return cls(**known)

    def clamped(self):
        values = self.to_dict()
        for name, (low, high) in OPTION_RANGES.items():
            values[name] = max(low, min(high, values[name]))
        if values["blend_mode"] not in BLEND_MODES:
            values["blend_mode"] = "normal"
        return PatternOptions(**values)


def _n(value):
    return css_number(value)


def _finish(style, options, rotate=True, animation=None):
    """Attach the declarations every pattern shares."""
    style["opacity"] = _n(options.opacity / 100)
    if rotate:
        style["transform"] = f"rotate({_n(options.rotation)}deg)"
    style["mix-blend-mode"] = options.blend_mode
    if animation and options.animation:
        style["animation"] = animation
    return style


def _dots(o):
    return _finish({
        "background-image": (
            f"radial-gradient(circle at {_n(o.spacing)}px {_n(o.spacing)}px, "
            f"{o.primary_color} {_n(o.size)}px, transparent {_n(o.size)}px)"
        ),
        "background-size": f"{_n(o.spacing * 2)}px {_n(o.spacing * 2)}px",
    }, o)


def _grid(o):
    return _finish({
        "background-image": (
            f"linear-gradient({o.primary_color} {_n(o.size)}px, transparent {_n(o.size)}px), "
            f"linear-gradient(90deg, {o.primary_color} {_n(o.size)}px, transparent {_n(o.size)}px)"
        ),
        "background-size": f"{_n(o.spacing)}px {_n(o.spacing)}px",
    }, o)


def _diagonal(o):
    # rotation drives the stripe angle instead of a transform
    return _finish({
        "background-image": (
            f"repeating-linear-gradient({_n(o.rotation)}deg, {o.primary_color}, "
            f"{o.primary_color} {_n(o.size)}px, transparent {_n(o.size)}px, transparent {_n(o.spacing)}px)"
        ),
    }, o, rotate=False)


def _checkerboard(o):
    p, s = o.primary_color, o.secondary_color
    return _finish({
        "background-image": (
            f"conic-gradient({p} 90deg, {s} 90deg, {s} 180deg, {p} 180deg, {p} 270deg, {s} 270deg)"
        ),
        "background-size": f"{_n(o.spacing)}px {_n(o.spacing)}px",
    }, o)


def _triangles(o):
    p = o.primary_color
    half = _n(o.spacing / 2)
    return _finish({
        "background-image": ", ".join(
            f"linear-gradient({angle}deg, {p} 25%, transparent 25%)" for angle in (135, 225, 45, 315)
        ),
        "background-size": f"{_n(o.spacing)}px {_n(o.spacing)}px",
        "background-position": f"0 0, {half}px 0, {half}px {half}px, 0px {half}px",
    }, o)


def _waves(o):
    return _finish({
        "background-image": (
            f"radial-gradient(ellipse {_n(o.spacing)}px {_n(o.size)}px at 0 0, {o.primary_color}, transparent), "
            f"radial-gradient(ellipse {_n(o.spacing)}px {_n(o.size)}px at {_n(o.spacing / 2)}px {_n(o.size)}px, "
            f"{o.secondary_color}, transparent)"
        ),
        "background-size": f"{_n(o.spacing)}px {_n(o.size * 2)}px",
    }, o, animation="wave-float 6s ease-in-out infinite")


def _hexagons(o):
    return _finish({
        "background-image": (
            f"radial-gradient(circle at 25% 25%, {o.primary_color} 2px, transparent 2px), "
            f"radial-gradient(circle at 75% 75%, {o.secondary_color} 2px, transparent 2px)"
        ),
        "background-size": f"{_n(o.spacing)}px {_n(o.spacing)}px",
    }, o)


def _organic_shapes(o):
    size = o.size
    return _finish({
        "background-image": (
            f"radial-gradient(ellipse {_n(size)}px {_n(size * 1.5)}px at 20% 30%, {o.primary_color}, transparent), "
            f"radial-gradient(ellipse {_n(size * 0.8)}px {_n(size)}px at 80% 70%, {o.secondary_color}, transparent), "
            f"radial-gradient(ellipse {_n(size * 1.2)}px {_n(size * 0.7)}px at 50% 90%, "
            f"{with_alpha_suffix(o.primary_color, '66')}, transparent)"
        ),
        "background-size": f"{_n(o.spacing)}px {_n(o.spacing)}px",
    }, o, animation="organic-morph 20s ease-in-out infinite")


def _noise(o, seed=None):
    return _finish({
        "background-image": f'url("{generate_noise_texture(o.spacing, o.opacity, seed=seed)}")',
        "background-size": f"{_n(o.spacing)}px {_n(o.spacing)}px",
    }, o, rotate=False)


def _paper(o):
    return _finish({
        "background-image": (
            f"radial-gradient(circle at 1px 1px, {with_alpha_suffix(o.primary_color, '33')} 1px, transparent 0), "
            f"radial-gradient(circle at 2px 2px, {with_alpha_suffix(o.secondary_color, '22')} 1px, transparent 0)"
        ),
        "background-size": f"{_n(o.spacing)}px {_n(o.spacing)}px",
    }, o, rotate=False)


@dataclass(frozen=True)
class BackgroundPattern:
    id: str
    name: str
    type: str  # geometric, organic, texture
    preview: str
    generate: object
    keyframes: str = ""


PATTERNS = {
    pattern.id: pattern
    for pattern in [
        BackgroundPattern("dots", "Polka Dots", "geometric",
                          "radial-gradient(circle at 20px 20px, #6366f1 2px, transparent 2px)", _dots),
        BackgroundPattern("grid", "Grid Lines", "geometric",
                          "linear-gradient(#6366f1 1px, transparent 1px), linear-gradient(90deg, #6366f1 1px, transparent 1px)",
                          _grid),
        BackgroundPattern("diagonal", "Diagonal Lines", "geometric",
                          "repeating-linear-gradient(45deg, #6366f1, #6366f1 2px, transparent 2px, transparent 20px)",
                          _diagonal),
        BackgroundPattern("checkerboard", "Checkerboard", "geometric",
                          "conic-gradient(#6366f1 90deg, transparent 90deg)", _checkerboard),
        BackgroundPattern("triangles", "Triangle Pattern", "geometric",
                          "linear-gradient(135deg, #6366f1 25%, transparent 25%)", _triangles),
        BackgroundPattern("waves", "Wave Pattern", "organic",
                          "radial-gradient(ellipse at top, #6366f1, transparent)", _waves, "wave-float"),
        BackgroundPattern("hexagons", "Hexagon Grid", "geometric",
                          "radial-gradient(circle at 50% 50%, #6366f1, transparent)", _hexagons),
        BackgroundPattern("organic-shapes", "Organic Shapes", "organic",
                          "radial-gradient(ellipse, #6366f1, transparent)", _organic_shapes, "organic-morph"),
        BackgroundPattern("noise", "Noise Texture", "texture",
                          "radial-gradient(circle at 1px 1px, rgba(0,0,0,.15) 1px, transparent 0)", _noise),
        BackgroundPattern("paper", "Paper Texture", "texture",
                          "radial-gradient(circle at 1px 1px, rgba(255,255,255,.15) 1px, transparent 0)", _paper),
    ]
}


def generate_pattern(pattern_id, options=None, seed=None):
    """
    Generate the declarations for one catalog pattern.

    Args:
        pattern_id (str): Catalog id, e.g. ``"dots"``
        options (PatternOptions, optional): Defaults when omitted
        seed (int, optional): Only used by the noise texture

    Returns:
        dict: Ordered CSS property -> value mapping

    Raises:
        KeyError: If the pattern id is not in the catalog
    """
    pattern = PATTERNS[pattern_id]
    options = options or PatternOptions()
    if pattern.id == "noise":
        return pattern.generate(options, seed=seed)
    return pattern.generate(options)


def render_pattern(pattern_id, options=None, seed=None):
    """Declaration text for a pattern; an empty or missing id clears the pattern to ``""``."""
    if not pattern_id:
        return ""
    return to_declarations(generate_pattern(pattern_id, options, seed=seed))


def required_keyframes(pattern_id, options=None):
    """Keyframe names the consuming stylesheet must define for this pattern."""
    pattern = PATTERNS.get(pattern_id)
    options = options or PatternOptions()
    if not pattern or not pattern.keyframes or not options.animation:
        return []
    return [pattern.keyframes]


def keyframes_for_declarations(declarations):
    """Find keyframes referenced by a stored, precomputed pattern declaration string."""
    return [name for name in PATTERN_KEYFRAMES if f"animation: {name} " in (declarations or "")]
