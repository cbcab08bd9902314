"""Extração e validação de e-mail a partir de eventos PostHog."""
from __future__ import annotations

import re
from typing import Any, Optional

from core.schemas.event_schema import InboundEvent

# local-part @ (bracketed IPv4 | dotted domain)
_EMAIL_RE = re.compile(
    r'(([^<>()\[\]\\.,;:\s@"]+(\.[^<>()\[\]\\.,;:\s@"]+)*)|(".+"))'
    r"@"
    r"((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\])|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))",
    re.IGNORECASE,
)


def is_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    return _EMAIL_RE.fullmatch(value) is not None


def email_domain(email: str) -> str:
    return email.rsplit("@", 1)[-1].lower()


def get_email_from_event(event: InboundEvent) -> Optional[str]:
    """
    Primeiro e-mail válido, em ordem de prioridade:
    distinct_id → $set.email → properties.email
    """
    candidates = (
        event.distinct_id,
        event.set_properties.get("email"),
        event.properties.get("email"),
    )
    for candidate in candidates:
        if is_email(candidate):
            return candidate
    return None
