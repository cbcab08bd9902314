from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Union

import requests
import structlog

from core.exceptions import ConfigurationError, SyncError, TransportError
from core.ports import CheckpointStorePort
from core.schemas.config_schema import SyncConfig
from core.schemas.event_schema import InboundEvent
from core.schemas.sync_result_schema import IntervalReport, PageResult, UpsertResult
from core.services.contact_upsert import ContactUpsert
from core.services.context import SyncContext
from core.services.property_mapper import map_properties
from core.services.score_writeback import ScoreWriteback
from core.utils.email_utils import email_domain, get_email_from_event
from infrastructure.clients.api.base_client import status_ok
from orchestration.common.sync_state import SyncState
from orchestration.common.synchronizer import ENTITY_SPECS, HubspotEntitySynchronizer, utc_today

log = structlog.get_logger(__name__)


class SyncService:
    """Per-event handler, per-interval handler and maintenance job."""

    # independent entities; the order only keeps the logs readable
    ENTITY_ORDER = ("companies", "deals", "contacts")

    def __init__(self, ctx: SyncContext):
        self.ctx = ctx
        self.upserter = ContactUpsert(ctx.hubspot)
        self.scores = ScoreWriteback(ctx.analytics)
        self.log = log.bind(service="SyncService")

    # ───────────────────── setup
    @classmethod
    def setup(
        cls,
        config: SyncConfig,
        store: CheckpointStorePort,
        session: Optional[requests.Session] = None,
    ) -> "SyncService":
        service = cls(SyncContext.build(config, store, session=session))
        service.health_check()
        return service

    def health_check(self) -> None:
        try:
            response = self.ctx.hubspot.call("contacts.probe")
        except TransportError as exc:
            raise ConfigurationError(f"Unable to connect to HubSpot: {exc}", retry=True) from exc

        if not status_ok(response):
            self.log.error("HubSpot health check failed", status_code=response.status_code)
            raise ConfigurationError(
                "Unable to connect to HubSpot. Please make sure your API key is correct."
            )
        self.log.info("HubSpot connection verified")

    # ───────────────────── per event
    def on_event(self, event: Union[InboundEvent, Dict[str, Any]]) -> Optional[UpsertResult]:
        if not isinstance(event, InboundEvent):
            event = InboundEvent.model_validate(event)

        config = self.ctx.config
        if event.event not in config.triggering_event_set:
            return None

        email = get_email_from_event(event)
        if not email:
            self.log.debug("No valid e-mail on triggering event", event=event.event)
            return None

        if email_domain(email) in config.ignored_domain_set:
            return None

        properties = map_properties(
            event.merged_properties(),
            config.additional_property_mappings,
            event.send_time,
        )
        return self.upserter.upsert(email, properties)

    # ───────────────────── per interval
    def run_interval(self, today: Optional[date] = None) -> IntervalReport:
        today = today or utc_today()
        report = IntervalReport()

        for name in self.ENTITY_ORDER:
            synchronizer = HubspotEntitySynchronizer(ENTITY_SPECS[name], self.ctx)
            try:
                report.pages[name] = synchronizer.run_page(today=today)
            except SyncError as exc:
                self.log.error("Entity sync failed - continuing with the next one", entity=name, error=str(exc))
                report.pages[name] = PageResult(entity=name, error=str(exc))

        for contact in report.pages["contacts"].contacts:
            if contact.email and contact.score not in (None, ""):
                try:
                    if self.scores.update_score(contact.email, contact.score):
                        report.updated += 1
                    else:
                        report.skipped += 1
                except SyncError as exc:
                    self.log.error("Error updating HubSpot score - skipping", email=contact.email, error=str(exc))
                    report.errors += 1
            report.processed += 1

        self.log.info(
            f"Successfully updated HubSpot scores for {report.updated} records",
            updated=report.updated,
            skipped=report.skipped,
            processed=report.processed,
            errors=report.errors,
        )
        return report

    # ───────────────────── maintenance
    def clear_storage(self) -> None:
        SyncState(self.ctx.store).clear()
