# backend/businesses/models.py
from django.db import models

from config.constants import BUSINESS_NAME_MAX_LENGTH, DEFAULT_SERVICES_STYLE
from utils.themes import default_theme


def default_theme_data():
    return default_theme().to_dict()


def default_profile_data():
    return {"avatar": None, "bio": None, "cover_image": None, "business_type": None}


def default_layout_data():
    return {"show_services": True, "services_style": DEFAULT_SERVICES_STYLE, "link_order": []}


class Business(models.Model):
    """
    A business page. The slug is the public key, the edit token is the only
    credential for changing it. Theme, profile, links and layout are stored as
    JSON documents and always overwritten as a whole.
    """
    slug = models.SlugField(max_length=120, unique=True)  # Immutable after creation
    name = models.CharField(max_length=BUSINESS_NAME_MAX_LENGTH)
    whatsapp = models.CharField(max_length=15)  # Digits only
    instagram = models.CharField(max_length=64, blank=True, null=True)
    services = models.JSONField(default=list, blank=True)  # [{name, price, image?}]
    edit_token = models.CharField(max_length=64, db_index=True)

    theme = models.JSONField(default=default_theme_data)
    profile = models.JSONField(default=default_profile_data)
    links = models.JSONField(default=list, blank=True)
    layout = models.JSONField(default=default_layout_data)

    version = models.PositiveIntegerField(default=0)  # Last applied editor version
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.name or self.slug
