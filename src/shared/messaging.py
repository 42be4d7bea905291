"""Outbound messaging links (WhatsApp click-to-chat)."""

import os
import re
from urllib.parse import quote

WHATSAPP_BASE_URL = "https://wa.me"
DEFAULT_STORE_PHONE = "1234567890"


def store_phone() -> str:
    return os.getenv("STOREFRONT_WHATSAPP_NUMBER", DEFAULT_STORE_PHONE)


def build_whatsapp_link(phone: str, lines: list[str]) -> str:
    """Return a ``wa.me`` link that opens a chat with ``phone`` prefilled with ``lines``."""
    digits = re.sub(r"\D", "", phone)
    if not digits:
        raise ValueError("Phone number must contain digits")
    text = "\n".join(lines)
    return f"{WHATSAPP_BASE_URL}/{digits}?text={quote(text, safe='')}"
