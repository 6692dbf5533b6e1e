# utils/custom_css.py
import re
import logging
from dataclasses import dataclass, field

import tinycss2

logger = logging.getLogger(__name__)

# Custom CSS is rendered verbatim inside a <style> element on the public page
MARKUP_BREAKOUT_RE = re.compile(r"<\s*/\s*style|<!--|<\s*script", re.IGNORECASE)

# At-rules whose block holds further rules rather than declarations
RULE_LIST_AT_RULES = {"media", "supports", "document", "layer", "container", "keyframes", "-webkit-keyframes"}


@dataclass
class CSSValidationResult:
    is_valid: bool
    errors: list = field(default_factory=list)


def _error(node):
    return f"Line {node.source_line}, column {node.source_column}: {node.message}"


def _check_declarations(tokens, errors):
    for item in tinycss2.parse_declaration_list(tokens, skip_comments=True, skip_whitespace=True):
        if item.type == "error":
            errors.append(_error(item))
        elif item.type == "declaration" and not tinycss2.serialize(item.value).strip():
            errors.append(f"Line {item.source_line}, column {item.source_column}: Empty value for '{item.name}'")


def _check_rules(nodes, errors):
    for node in nodes:
        if node.type == "error":
            errors.append(_error(node))
        elif node.type == "qualified-rule":
            if not tinycss2.serialize(node.prelude).strip():
                errors.append(f"Line {node.source_line}, column {node.source_column}: Missing selector")
            _check_declarations(node.content, errors)
        elif node.type == "at-rule" and node.content is not None:
            if node.lower_at_keyword in RULE_LIST_AT_RULES:
                _check_rules(tinycss2.parse_rule_list(node.content, skip_comments=True, skip_whitespace=True), errors)
            else:
                _check_declarations(node.content, errors)


def _top_level_closers(text):
    return sum(
        1 for token in tinycss2.parse_component_value_list(text)
        if token.type == "literal" and token.value == "}"
    )


def has_unclosed_block(css_text):
    """
    True when a block, bracket or comment is still open at the end of the text.

    tinycss2 closes open blocks at EOF silently. An extra closing brace
    appended to balanced input stays a top-level token; with an open block it
    is absorbed instead.
    """
    return _top_level_closers(css_text + "\n}") == _top_level_closers(css_text)


def validate_custom_css(css_text):
    """
    Check user supplied CSS before it is applied or saved.

    The stylesheet is parsed with tinycss2; parse errors, empty selectors or
    declaration values, and any sequence that could close the surrounding
    ``<style>`` element are reported. Empty input is valid.

    Returns:
        CSSValidationResult: ``is_valid`` plus human readable error messages
    """
    if not css_text or not css_text.strip():
        return CSSValidationResult(is_valid=True)

    errors = []
    if MARKUP_BREAKOUT_RE.search(css_text):
        errors.append("Markup such as </style>, <script> or <!-- is not allowed in custom CSS")
    if has_unclosed_block(css_text):
        errors.append("Unclosed block at end of CSS: every '{' needs a matching '}'")

    _check_rules(tinycss2.parse_stylesheet(css_text, skip_comments=True, skip_whitespace=True), errors)

    if errors:
        logger.debug(f"Custom CSS rejected with {len(errors)} error(s)")
    return CSSValidationResult(is_valid=not errors, errors=errors)


def validate_declarations(text):
    """Validate a bare declaration list such as a precomputed background pattern."""
    if not text or not text.strip():
        return CSSValidationResult(is_valid=True)
    errors = []
    if MARKUP_BREAKOUT_RE.search(text):
        errors.append("Markup such as </style>, <script> or <!-- is not allowed")
    if "{" in text or "}" in text:
        errors.append("Braces are not allowed in a declaration list")
    _check_declarations(text, errors)
    return CSSValidationResult(is_valid=not errors, errors=errors)


def format_css(css_text):
    """Rough pretty-printer: one declaration per line, nested blocks indented by two spaces."""
    formatted = css_text.replace("{", " {\n").replace("}", "\n}\n").replace(";", ";\n")
    lines, depth = [], 0
    for line in formatted.splitlines():
        line = " ".join(line.split())
        if not line:
            continue
        if line.startswith("}"):
            depth = max(depth - 1, 0)
        lines.append("  " * depth + line)
        if line.endswith("{"):
            depth += 1
    return "\n".join(lines)


CSS_TEMPLATES = {
    "Glassmorphism": {
        "description": "Frosted glass effect",
        "css": """/* Glassmorphism Effect */
.custom-glass {
  background: rgba(255, 255, 255, 0.25);
  box-shadow: 0 8px 32px 0 rgba(31, 38, 135, 0.37);
  backdrop-filter: blur(4px);
  -webkit-backdrop-filter: blur(4px);
  border-radius: 10px;
  border: 1px solid rgba(255, 255, 255, 0.18);
}""",
    },
    "Neon Glow": {
        "description": "Cyberpunk neon effect",
        "css": """/* Neon Glow Effect */
.custom-neon {
  color: #fff;
  text-shadow: 0 0 5px #fff, 0 0 10px #fff, 0 0 15px #0073e6, 0 0 20px #0073e6;
  box-shadow: 0 0 5px #fff, 0 0 10px #fff, 0 0 15px #0073e6, 0 0 20px #0073e6;
  animation: flicker 1.5s infinite alternate;
}
@keyframes flicker {
  0%, 100% { opacity: 1; }
  50% { opacity: 0.8; }
}""",
    },
    "Floating Animation": {
        "description": "Gentle floating motion",
        "css": """/* Floating Animation */
.custom-float {
  animation: float 6s ease-in-out infinite;
}
@keyframes float {
  0% { transform: translateY(0px); }
  50% { transform: translateY(-20px); }
  100% { transform: translateY(0px); }
}""",
    },
    "Text Effects": {
        "description": "Gradient text with depth",
        "css": """/* Advanced Text Effects */
.custom-text-gradient {
  background: linear-gradient(45deg, #667eea, #764ba2, #f093fb);
  background-size: 300% 300%;
  -webkit-background-clip: text;
  -webkit-text-fill-color: transparent;
  animation: gradient-shift 4s ease infinite;
}
@keyframes gradient-shift {
  0%, 100% { background-position: 0% 50%; }
  50% { background-position: 100% 50%; }
}""",
    },
}


def append_template(css_text, name):
    """Append a named template to existing CSS. Raises KeyError for unknown templates."""
    template = CSS_TEMPLATES[name]["css"]
    if not css_text:
        return template
    return f"{css_text}\n\n{template}"
