# backend/businesses/services.py
"""Record store access for businesses: select by slug, insert, update by slug + edit token."""
import secrets
import logging

from django.db import IntegrityError, transaction
from django.utils import timezone

from utils.identifiers import generate_unique_slug, generate_edit_token
from .models import Business

logger = logging.getLogger(__name__)

# Fields an edit may overwrite. Slug and edit token are never writable.
EDITABLE_FIELDS = ["name", "whatsapp", "instagram", "services", "theme", "profile", "links", "layout"]


class BusinessAccessDenied(Exception):
    """Slug unknown or edit token does not match."""


class StaleVersionError(Exception):
    """An auto-save arrived with a version older than the one already stored."""

    def __init__(self, incoming, current):
        super().__init__(f"Version {incoming} is older than stored version {current}")
        self.incoming = incoming
        self.current = current


def get_by_slug(slug):
    return Business.objects.filter(slug=slug).first()


def get_for_edit(slug, token):
    """Return the business only when the token matches, otherwise None."""
    if not token:
        return None
    business = get_by_slug(slug)
    if business is None or not secrets.compare_digest(business.edit_token, str(token)):
        return None
    return business


def create_business(**fields):
    """
    Insert a new business with a freshly generated slug and edit token.

    The slug check and the insert are not atomic; if another request claims the
    same slug in between, the unique constraint fails and generation is retried once.
    """
    edit_token = generate_edit_token()
    for attempt in range(2):
        slug = generate_unique_slug(fields["name"])
        try:
            with transaction.atomic():
                business = Business.objects.create(slug=slug, edit_token=edit_token, **fields)
        except IntegrityError:
            if attempt:
                raise
            logger.warning(f"Slug '{slug}' was claimed concurrently, retrying")
            continue
        logger.info(f"Business created: {business.slug}")
        return business


def update_business(slug, token, data, version=None):
    """
    Overwrite the editable fields of a business.

    Args:
        slug (str): Business slug
        token (str): Edit token presented by the caller
        data (Dict): Validated field values, only EDITABLE_FIELDS are applied
        version (int, optional): Editor version; when given the write only
            applies if it is not older than the stored version

    Returns:
        Business: The refreshed record

    Raises:
        BusinessAccessDenied: Unknown slug or wrong token
        StaleVersionError: Version older than the stored one
    """
    business = get_for_edit(slug, token)
    if business is None:
        logger.warning(f"Rejected edit for '{slug}': invalid token or unknown slug")
        raise BusinessAccessDenied(slug)

    changes = {key: value for key, value in data.items() if key in EDITABLE_FIELDS}
    changes["updated_at"] = timezone.now()

    queryset = Business.objects.filter(pk=business.pk, edit_token=business.edit_token)
    if version is not None:
        queryset = queryset.filter(version__lte=version)
        changes["version"] = version

    if not queryset.update(**changes):
        if version is None:
            raise BusinessAccessDenied(slug)
        business.refresh_from_db(fields=["version"])
        logger.warning(f"Stale save for '{slug}': version {version} < {business.version}")
        raise StaleVersionError(version, business.version)

    business.refresh_from_db()
    logger.info(f"Business updated: {slug} (version {business.version})")
    return business
