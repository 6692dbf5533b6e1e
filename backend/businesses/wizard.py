# backend/businesses/wizard.py
"""Three-step create wizard: basic info, platform choice, then handles for each platform."""
import uuid
from enum import Enum

from config.constants import BUSINESS_TYPES, PLATFORMS

PLATFORMS_BY_KEY = {platform["key"]: platform for platform in PLATFORMS}
BUSINESS_TYPE_KEYS = {item["key"] for item in BUSINESS_TYPES}


class WizardStep(Enum):
    BASIC_INFO = 1
    PLATFORMS = 2
    HANDLES = 3


STEP_ORDER = [WizardStep.BASIC_INFO, WizardStep.PLATFORMS, WizardStep.HANDLES]


class WizardValidationError(Exception):
    def __init__(self, messages):
        super().__init__("; ".join(messages))
        self.messages = messages


class CreateWizard:
    def __init__(self):
        self.step = WizardStep.BASIC_INFO
        self.name = ""
        self.business_type = None
        self.platforms = []
        self.handles = {}

    def errors(self):
        """Validation messages for the current step."""
        messages = []
        if self.step == WizardStep.BASIC_INFO:
            if not self.name.strip():
                messages.append("Business name is required")
            if self.business_type not in BUSINESS_TYPE_KEYS:
                messages.append("Please choose a business type")
        elif self.step == WizardStep.PLATFORMS:
            if not self.platforms:
                messages.append("Choose at least one platform")
            unknown = [key for key in self.platforms if key not in PLATFORMS_BY_KEY]
            if unknown:
                messages.append(f"Unknown platforms: {', '.join(unknown)}")
        return messages

    def next(self):
        """Advance one step. Returns False when already on the last step."""
        messages = self.errors()
        if messages:
            raise WizardValidationError(messages)
        index = STEP_ORDER.index(self.step)
        if index == len(STEP_ORDER) - 1:
            return False
        self.step = STEP_ORDER[index + 1]
        return True

    def back(self):
        index = STEP_ORDER.index(self.step)
        if index == 0:
            return False
        self.step = STEP_ORDER[index - 1]
        return True

    def toggle_platform(self, key):
        if key not in PLATFORMS_BY_KEY:
            raise KeyError(key)
        if key in self.platforms:
            self.platforms.remove(key)
            self.handles.pop(key, None)
        else:
            self.platforms.append(key)

    def set_handle(self, key, handle):
        if key not in self.platforms:
            raise KeyError(key)
        self.handles[key] = handle

    def build_links(self):
        """Links for every chosen platform that has a handle, in the order the platforms were picked."""
        links = []
        for key in self.platforms:
            handle = (self.handles.get(key) or "").strip().lstrip("@")
            if not handle:
                continue
            platform = PLATFORMS_BY_KEY[key]
            url = handle if "://" in handle else f"{platform['url_prefix']}{handle}"
            links.append({
                "id": uuid.uuid4().hex[:8],
                "title": platform["label"],
                "url": url,
                "type": platform["link_type"],
                "icon": key,
                "visible": True,
            })
        return links

    def to_intake_payload(self, whatsapp, services=None):
        """Request body for the intake endpoint."""
        payload = {
            "name": self.name.strip(),
            "business_type": self.business_type,
            "whatsapp": whatsapp,
            "services": services or [],
            "links": self.build_links(),
        }
        instagram = (self.handles.get("instagram") or "").strip()
        if instagram:
            payload["instagram"] = instagram
        return payload
