# utils/shadows.py
import uuid
import logging
from dataclasses import dataclass, asdict, replace

from .colors import hex_to_rgba
from .css import css_number

logger = logging.getLogger(__name__)


def _new_layer_id():
    return uuid.uuid4().hex[:8]


@dataclass
class ShadowLayer:
    id: str = ""
    x: float = 0
    y: float = 0
    blur: float = 0
    spread: float = 0
    color: str = "#000000"
    opacity: float = 0
    inset: bool = False

    def __post_init__(self):
        if not self.id:
            self.id = _new_layer_id()

    def to_css(self):
        prefix = "inset " if self.inset else ""
        rgba = hex_to_rgba(self.color, self.opacity / 100)
        return (
            f"{prefix}{css_number(self.x)}px {css_number(self.y)}px "
            f"{css_number(self.blur)}px {css_number(self.spread)}px {rgba}"
        )

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, data):
        fields = {key: data[key] for key in ("id", "x", "y", "blur", "spread", "color", "opacity", "inset") if key in data}
        return cls(**fields)


def compose_box_shadow(layers):
    """Join layers into one ``box-shadow`` value. The first layer renders on top."""
    return ", ".join(layer.to_css() for layer in layers)


def _preset(*layers):
    return [dict(zip(("x", "y", "blur", "spread", "color", "opacity", "inset"), layer)) for layer in layers]


SHADOW_PRESETS = {
    "Subtle": _preset((0, 1, 3, 0, "#000000", 12, False), (0, 1, 2, 0, "#000000", 24, False)),
    "Soft": _preset((0, 4, 6, 0, "#000000", 7, False), (0, 1, 3, 0, "#000000", 6, False)),
    "Medium": _preset((0, 10, 25, 0, "#000000", 15, False), (0, 5, 10, 0, "#000000", 5, False)),
    "Large": _preset((0, 20, 40, 0, "#000000", 10, False), (0, 8, 16, 0, "#000000", 6, False)),
    "Colored": _preset((0, 10, 25, 0, "#6366f1", 30, False), (0, 5, 10, 0, "#8b5cf6", 20, False)),
    "Neon": _preset((0, 0, 20, 0, "#6366f1", 80, False), (0, 0, 40, 0, "#8b5cf6", 40, False)),
    "Inset": _preset((0, 2, 4, 0, "#000000", 10, True), (0, 1, 2, 0, "#000000", 6, True)),
    "3D": _preset(
        (0, 1, 0, 0, "#ffffff", 40, False),
        (0, 2, 4, 0, "#000000", 30, False),
        (0, 1, 0, 0, "#ffffff", 40, True),
    ),
}


class ShadowStack:
    """
    Ordered, never-empty list of shadow layers being edited.

    The resting state is a single zero-valued, fully transparent layer, which
    renders as no visible shadow.
    """

    def __init__(self, layers=None):
        self.layers = list(layers) if layers else [ShadowLayer()]

    @property
    def css(self):
        return compose_box_shadow(self.layers)

    def _index(self, layer_id):
        for index, layer in enumerate(self.layers):
            if layer.id == layer_id:
                return index
        raise KeyError(layer_id)

    def add_layer(self):
        layer = ShadowLayer(x=0, y=2, blur=4, spread=0, color="#000000", opacity=10)
        self.layers.append(layer)
        return layer

    def duplicate_layer(self, layer_id):
        """Append a copy of a layer shifted by +2px on both axes."""
        source = self.layers[self._index(layer_id)]
        copy = replace(source, id=_new_layer_id(), x=source.x + 2, y=source.y + 2)
        self.layers.append(copy)
        return copy

    def remove_layer(self, layer_id):
        """Remove a layer. Refuses (returns False) when it is the last one left."""
        if len(self.layers) <= 1:
            logger.debug("Refusing to remove the last shadow layer")
            return False
        del self.layers[self._index(layer_id)]
        return True

    def update_layer(self, layer_id, **changes):
        index = self._index(layer_id)
        changes.pop("id", None)
        self.layers[index] = replace(self.layers[index], **changes)
        return self.layers[index]

    def apply_preset(self, name):
        """Replace every layer with the named preset. Raises KeyError for unknown names."""
        self.layers = [ShadowLayer(**layer) for layer in SHADOW_PRESETS[name]]

    def reset(self):
        self.layers = [ShadowLayer()]

    def to_list(self):
        return [layer.to_dict() for layer in self.layers]

    @classmethod
    def from_list(cls, items):
        return cls([ShadowLayer.from_dict(item) for item in items or []])
