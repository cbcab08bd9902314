"""
PostHog → HubSpot property mapping.

Static dictionary first, then the ``source:target`` pairs from
``additionalPropertyMappings`` (these may overwrite static results).
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import structlog

log = structlog.get_logger(__name__)

# várias grafias PostHog → um campo HubSpot
HUBSPOT_PROPS_MAP: Dict[str, str] = {
    "companyName":     "company",
    "company_name":    "company",
    "company":         "company",
    "lastName":        "lastname",
    "last_name":       "lastname",
    "lastname":        "lastname",
    "firstName":       "firstname",
    "first_name":      "firstname",
    "firstname":       "firstname",
    "phone_number":    "phone",
    "phoneNumber":     "phone",
    "phone":           "phone",
    "website":         "website",
    "domain":          "website",
    "company_website": "website",
    "companyWebsite":  "website",
}

# source names that mean "this event's send time"
SEND_TIME_SOURCES = frozenset({"sent_at", "created_at"})


def parse_additional_mappings(raw: Optional[str]) -> List[Tuple[str, str]]:
    """``"a:b, c:d"`` → ``[("a", "b"), ("c", "d")]``; malformed pairs are dropped."""
    pairs: List[Tuple[str, str]] = []
    if not raw:
        return pairs
    for chunk in raw.split(","):
        source, _, target = chunk.strip().partition(":")
        source, target = source.strip(), target.strip()
        if source and target:
            pairs.append((source, target))
        elif chunk.strip():
            log.warning("Ignoring malformed property mapping", mapping=chunk.strip())
    return pairs


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            return None
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt.astimezone(timezone.utc)


def to_utc_midnight_ms(value: Union[str, datetime, None]) -> Optional[int]:
    """HubSpot date properties expect epoch-ms at 00:00 UTC."""
    dt = parse_timestamp(value)
    if dt is None:
        return None
    midnight = dt.replace(hour=0, minute=0, second=0, microsecond=0)
    return int(midnight.timestamp()) * 1000


def map_properties(
    properties: Mapping[str, Any],
    additional_mappings: Optional[str] = None,
    event_send_time: Union[str, datetime, None] = None,
) -> Dict[str, Any]:
    mapped: Dict[str, Any] = {}

    for key, value in properties.items():
        target = HUBSPOT_PROPS_MAP.get(key)
        if target:
            mapped[target] = value

    for source, target in parse_additional_mappings(additional_mappings):
        if source in SEND_TIME_SOURCES:
            ms = to_utc_midnight_ms(event_send_time)
            if ms is None:
                log.warning("Event send time missing or unparseable", source=source, send_time=event_send_time)
                continue
            mapped[target] = ms
        elif source in properties:
            mapped[target] = properties[source]

    return mapped
