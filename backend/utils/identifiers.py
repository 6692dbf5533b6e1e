# utils/identifiers.py
import re
import secrets
import logging
from urllib.parse import quote

from config.constants import WHATSAPP_MIN_DIGITS, WHATSAPP_MAX_DIGITS

logger = logging.getLogger(__name__)

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")
_NON_DIGIT = re.compile(r"\D")
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"

FALLBACK_SLUG_BASE = "business"


def create_slug(name):
    """
    Turn a business name into a URL-safe slug.

    Lowercases, collapses every run of non-alphanumeric characters into a single
    hyphen and trims hyphens from both ends. An input with no letters or digits
    yields an empty slug.
    """
    return _NON_ALNUM_RUN.sub("-", (name or "").lower()).strip("-")


def _slug_exists(slug):
    from businesses.models import Business

    return Business.objects.filter(slug=slug).exists()


def generate_unique_slug(base_name, exists=None):
    """
    Find the first free slug for ``base_name``: ``base``, then ``base-1``, ``base-2``, ...

    Args:
        base_name (str): Business name to derive the slug from
        exists (Callable[[str], bool], optional): Store lookup, defaults to the businesses table

    Returns:
        str: A slug with no existing record at lookup time
    """
    exists = exists or _slug_exists
    base = create_slug(base_name) or FALLBACK_SLUG_BASE
    slug = base
    counter = 1

    while exists(slug):
        slug = f"{base}-{counter}"
        counter += 1

    if counter > 1:
        logger.info(f"Slug '{base}' taken, using '{slug}'")
    return slug


def _base36_fragment():
    value = secrets.randbits(64)
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))[:13]


def generate_edit_token():
    """
    Generate the edit token for a new business.

    Two random base-36 fragments glued together. The token is a bearer secret:
    whoever holds the link can edit the page. It is never rotated or expired.
    """
    return _base36_fragment() + _base36_fragment()


def format_whatsapp(number):
    """Canonical WhatsApp number: digits only."""
    return _NON_DIGIT.sub("", number or "")


def validate_whatsapp(number):
    digits = format_whatsapp(number)
    return WHATSAPP_MIN_DIGITS <= len(digits) <= WHATSAPP_MAX_DIGITS


def whatsapp_booking_url(number, service_name):
    message = f"Hi, I want to book {service_name}"
    return f"https://wa.me/{format_whatsapp(number)}?text={quote(message, safe='')}"


def whatsapp_chat_url(number, business_name):
    message = f"Hi! I'm interested in your services at {business_name}"
    return f"https://wa.me/{format_whatsapp(number)}?text={quote(message, safe='')}"


def phone_href(number):
    return f"tel:{format_whatsapp(number)}"


def instagram_url(handle):
    if not handle:
        return None
    handle = handle.strip()
    if handle.startswith("@"):
        handle = handle[1:]
    return f"https://instagram.com/{handle}"
