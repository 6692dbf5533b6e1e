# utils/css.py
"""Small helpers shared by the style composers for turning values into CSS text."""


def css_number(value):
    """
    Format a number the way it should appear in a CSS value.

    Whole floats drop their fractional part (``4.0`` -> ``"4"``) so composed
    strings match what a browser-side slider would have produced.
    """
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_declarations(style):
    """Render an ordered style dict as ``"prop: value; prop: value;"``."""
    return " ".join(f"{prop}: {value};" for prop, value in style.items() if value not in (None, ""))


def to_rule(selector, style):
    """Render a selector block, or an empty string when there is nothing to declare."""
    declarations = to_declarations(style)
    if not declarations:
        return ""
    return f"{selector} {{ {declarations} }}"
