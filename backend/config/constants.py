# config/constants.py

# Business categories offered by the create wizard
BUSINESS_TYPES = [
    {"key": "barber", "label": "Barbershop"},
    {"key": "salon", "label": "Beauty Salon"},
    {"key": "restaurant", "label": "Restaurant"},
    {"key": "cafe", "label": "Cafe"},
    {"key": "trainer", "label": "Personal Trainer"},
    {"key": "retail", "label": "Retail Shop"},
    {"key": "other", "label": "Other"},
]

# Platforms a business can link from its page, with the URL prefix used to turn a handle into a link
PLATFORMS = [
    {"key": "instagram", "label": "Instagram", "url_prefix": "https://instagram.com/", "link_type": "social"},
    {"key": "facebook", "label": "Facebook", "url_prefix": "https://facebook.com/", "link_type": "social"},
    {"key": "tiktok", "label": "TikTok", "url_prefix": "https://tiktok.com/@", "link_type": "social"},
    {"key": "twitter", "label": "Twitter", "url_prefix": "https://twitter.com/", "link_type": "social"},
    {"key": "youtube", "label": "YouTube", "url_prefix": "https://youtube.com/@", "link_type": "social"},
    {"key": "linkedin", "label": "LinkedIn", "url_prefix": "https://linkedin.com/in/", "link_type": "social"},
    {"key": "website", "label": "Website", "url_prefix": "", "link_type": "url"},
    {"key": "email", "label": "Email", "url_prefix": "", "link_type": "email"},
]

LINK_TYPES = ["url", "email", "phone", "payment", "social"]

# Link icon tag -> glyph name rendered by the page
LINK_ICON_GLYPHS = {
    "instagram": "instagram",
    "facebook": "facebook",
    "twitter": "twitter",
    "youtube": "youtube",
    "linkedin": "linkedin",
    "tiktok": "music",
}
DEFAULT_LINK_GLYPH = "globe"

SERVICES_STYLES = ["cards", "list", "grid", "minimal"]
DEFAULT_SERVICES_STYLE = "cards"

PARTICLE_EFFECTS = ["snow", "bubbles", "stars", "fireflies", "geometric", "matrix"]

BIO_MAX_LENGTH = 160
BUSINESS_NAME_MAX_LENGTH = 100
WHATSAPP_MIN_DIGITS = 10
WHATSAPP_MAX_DIGITS = 15
