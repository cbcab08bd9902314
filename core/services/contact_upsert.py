"""
Create-or-update of a HubSpot contact.

    create ─┬─ 2xx ─────────────────────────→ created
            ├─ 409 "Existing ID: N" → PATCH N ─┬─ 2xx → updated
            │                                  └─ else → failed
            └─ anything else ────────────────→ failed
"""
from __future__ import annotations

import re
from typing import Any, Dict, Optional

import structlog

from core.exceptions import ConflictError, UpstreamError
from core.schemas.sync_result_schema import UpsertResult
from infrastructure.clients import HubspotAPIClient
from infrastructure.clients.api.base_client import safe_json, status_ok
from infrastructure.observability import metrics

log = structlog.get_logger(__name__)

EXISTING_ID_RE = re.compile(r"Existing ID: ([0-9]+)")


def extract_existing_id(message: Optional[str]) -> Optional[str]:
    match = EXISTING_ID_RE.search(message or "")
    return match.group(1) if match else None


class ContactUpsert:
    def __init__(self, client: HubspotAPIClient):
        self.client = client
        self.log = log.bind(service="ContactUpsert")

    def _create(self, properties: Dict[str, Any]) -> tuple[int, str]:
        response = self.client.call("contacts.create", properties=properties)
        body = safe_json(response)
        if status_ok(response) and body.get("status") != "error":
            return response.status_code, str(body.get("id") or "")

        message = str(body.get("message") or "")
        if response.status_code == 409:
            existing_id = extract_existing_id(message)
            if existing_id:
                raise ConflictError(existing_id, message)
        raise UpstreamError(response.status_code, message)

    def _update(self, contact_id: str, properties: Dict[str, Any]) -> None:
        response = self.client.call("contacts.update", contact_id=contact_id, properties=properties)
        body = safe_json(response)
        if not status_ok(response) or body.get("status") == "error":
            raise UpstreamError(response.status_code, str(body.get("message") or ""))

    def upsert(self, email: str, properties: Dict[str, Any]) -> UpsertResult:
        payload = {**properties, "email": email}
        try:
            status_code, contact_id = self._create(payload)
        except ConflictError as conflict:
            self.log.info(
                "Contact already exists, updating instead",
                email=email,
                existing_id=conflict.existing_id,
            )
            return self._update_existing(email, conflict.existing_id, payload)
        except UpstreamError as exc:
            self.log.warning(
                "Unable to add contact to HubSpot",
                email=email,
                status_code=exc.status_code,
                error_message=exc.message,
            )
            metrics.contact_upsert_total.labels(outcome="failed").inc()
            return UpsertResult(email=email, outcome="failed", status_code=exc.status_code, message=exc.message)

        self.log.info("Created HubSpot contact", email=email, contact_id=contact_id)
        metrics.contact_upsert_total.labels(outcome="created").inc()
        return UpsertResult(email=email, outcome="created", status_code=status_code, contact_id=contact_id or None)

    def _update_existing(self, email: str, contact_id: str, payload: Dict[str, Any]) -> UpsertResult:
        try:
            self._update(contact_id, payload)
        except UpstreamError as exc:
            self.log.warning(
                "Unable to update contact in HubSpot",
                email=email,
                contact_id=contact_id,
                status_code=exc.status_code,
                error_message=exc.message,
            )
            metrics.contact_upsert_total.labels(outcome="failed").inc()
            return UpsertResult(
                email=email,
                outcome="failed",
                status_code=exc.status_code,
                message=exc.message,
                contact_id=contact_id,
            )

        self.log.info("Updated HubSpot contact", email=email, contact_id=contact_id)
        metrics.contact_upsert_total.labels(outcome="updated").inc()
        return UpsertResult(email=email, outcome="updated", contact_id=contact_id)
