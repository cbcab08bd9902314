from __future__ import annotations

from datetime import date
from typing import Optional

import structlog

from core.ports import CheckpointStorePort

log = structlog.get_logger(__name__)

# ──────────────────────────────────────────────────────────────
#  Chaves no checkpoint store
#
#  • next_hubspot_<entity>_url → link da próxima página (sem credenciais)
#  • last_job_complete_day     → dia UTC (YYYY-MM-DD) da última passada
#                                completa de contatos
#  • hubspot_<kind>_seen:<id>  → deal/company já projetado no PostHog
# ──────────────────────────────────────────────────────────────
NEXT_BATCH_KEYS = {
    "contacts":  "next_hubspot_contacts_url",
    "deals":     "next_hubspot_deals_url",
    "companies": "next_hubspot_companies_url",
}
SYNC_LAST_COMPLETED_DATE_KEY = "last_job_complete_day"
SEEN_KEY_PREFIXES = {
    "deals":     "hubspot_deal_seen:",
    "companies": "hubspot_company_seen:",
}


class SyncState:
    """Typed view over the raw checkpoint store."""

    def __init__(self, store: CheckpointStorePort):
        self.store = store

    # ───────────── cursor
    def get_cursor(self, entity: str) -> Optional[str]:
        value = self.store.get(NEXT_BATCH_KEYS[entity])
        return value if isinstance(value, str) and value else None

    def save_cursor(self, entity: str, cursor: Optional[str]) -> None:
        if cursor:
            self.store.set(NEXT_BATCH_KEYS[entity], cursor)
        else:
            self.store.delete(NEXT_BATCH_KEYS[entity])

    # ───────────── completion date
    def get_last_completed_date(self) -> Optional[date]:
        raw = self.store.get(SYNC_LAST_COMPLETED_DATE_KEY)
        if not raw:
            return None
        try:
            return date.fromisoformat(str(raw))
        except ValueError:
            log.warning("Ignoring unparseable completion date", value=raw)
            return None

    def save_last_completed_date(self, day: date) -> None:
        self.store.set(SYNC_LAST_COMPLETED_DATE_KEY, day.isoformat())

    # ───────────── seen markers
    def _seen_key(self, entity: str, record_id: str) -> str:
        return f"{SEEN_KEY_PREFIXES[entity]}{record_id}"

    def is_seen(self, entity: str, record_id: str) -> bool:
        return bool(self.store.get(self._seen_key(entity, record_id)))

    def mark_seen(self, entity: str, record_id: str) -> None:
        self.store.set(self._seen_key(entity, record_id), True)

    # ───────────── maintenance
    def clear(self) -> None:
        """Forces the next run to start a fresh full pass. Seen markers stay."""
        for key in NEXT_BATCH_KEYS.values():
            self.store.delete(key)
        self.store.delete(SYNC_LAST_COMPLETED_DATE_KEY)
        log.info("Sync checkpoints cleared", keys=[*NEXT_BATCH_KEYS.values(), SYNC_LAST_COMPLETED_DATE_KEY])
