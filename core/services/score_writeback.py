from __future__ import annotations

import re
from typing import Any, Optional

import structlog

from infrastructure.clients import PostHogAPIClient
from infrastructure.observability import metrics

log = structlog.get_logger(__name__)

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


def parse_score(value: Any) -> Optional[int]:
    """
    Integer-prefix parsing of the CRM score: ``"42"`` → 42, ``"12.7"`` → 12,
    ``"7abc"`` → 7. Anything without a leading integer gives ``None``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return int(value)
        except (OverflowError, ValueError):
            return None
    match = _LEADING_INT_RE.match(str(value))
    return int(match.group(1)) if match else None


class ScoreWriteback:
    """Copies the HubSpot score onto every PostHog person sharing the e-mail."""

    def __init__(self, analytics: PostHogAPIClient):
        self.analytics = analytics
        self.log = log.bind(service="ScoreWriteback")

    def update_score(self, email: str, score: Any) -> bool:
        parsed = parse_score(score)
        if parsed is None:
            self.log.warning("HubSpot score is not numeric", email=email, score=score)

        updated = False
        for person in self.analytics.find_persons_by_email(email):
            distinct_ids = person.get("distinct_ids") or []
            if not person.get("id") or not distinct_ids:
                continue

            accepted = self.analytics.capture(
                "hubspot score updated",
                distinct_ids[0],
                {"hubspot_score": score, "$set": {"hubspot_score": parsed}},
            )
            if not accepted:
                self.log.warning("Score update rejected by PostHog", email=email, distinct_id=distinct_ids[0])
                continue
            self.log.info("Updated person score", email=email, score=parsed)
            updated = True

        metrics.score_writeback_total.labels(outcome="updated" if updated else "skipped").inc()
        return updated
