# backend/businesses/presentation.py
from django.conf import settings

from config.constants import LINK_ICON_GLYPHS, DEFAULT_LINK_GLYPH
from utils.identifiers import (
    whatsapp_booking_url, whatsapp_chat_url, phone_href, instagram_url, format_whatsapp,
)
from utils.themes import Theme, resolve_presentation


def link_href(link):
    """Turn a stored link into the href the page uses for it."""
    url = (link.get("url") or "").strip()
    link_type = link.get("type", "url")
    if link_type == "email" and not url.startswith("mailto:"):
        return f"mailto:{url}"
    if link_type == "phone" and not url.startswith("tel:"):
        return f"tel:{format_whatsapp(url) or url}"
    if url and "://" not in url and not url.startswith(("mailto:", "tel:")):
        return f"https://{url}"
    return url


def visible_links(links):
    """Visible links in display order, each with its resolved href and glyph."""
    return [
        {
            **link,
            "href": link_href(link),
            "glyph": LINK_ICON_GLYPHS.get(link.get("icon"), DEFAULT_LINK_GLYPH),
        }
        for link in links or []
        if link.get("visible", True)
    ]


def contact_actions(business):
    return {
        "whatsapp": whatsapp_chat_url(business.whatsapp, business.name),
        "call": phone_href(business.whatsapp),
        "instagram": instagram_url(business.instagram),
        "book": {
            service["name"]: whatsapp_booking_url(business.whatsapp, service["name"])
            for service in business.services or []
            if service.get("name")
        },
    }


def edit_url(slug, token):
    return f"{settings.TAPBOOK['PUBLIC_BASE_URL']}/{slug}/edit?token={token}"


def public_page_url(slug):
    return f"{settings.TAPBOOK['PUBLIC_BASE_URL']}/{slug}"


def success_redirect(slug, token):
    return f"/{slug}?success=true&edit={token}"


def build_public_page(business, public_data, success=False, edit_token=None):
    """
    Assemble the public page payload: record, visible links, contact actions,
    the one-time success banner and the resolved theme.

    ``edit_token`` is whatever the visitor passed in the ``edit`` query
    parameter; it is echoed back into the edit link without being checked.
    """
    return {
        "business": public_data,
        "links": visible_links(business.links),
        "actions": contact_actions(business),
        "banner": {
            "show_success": success,
            "message": settings.TAPBOOK["SUCCESS_BANNER_MESSAGE"] if success else None,
        },
        "public_url": public_page_url(business.slug),
        "edit_url": edit_url(business.slug, edit_token) if edit_token else None,
        "presentation": resolve_presentation(Theme.from_dict(business.theme)),
    }
