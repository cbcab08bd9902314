# ──────────────────────────────────────────────────────────────
#  orchestration/common/synchronizer.py
#  HubSpot → PostHog, uma página por execução:
#    cursor salvo → retoma; sem cursor → nova passada (ou skip diário)
#    + seen-markers p/ deals/companies, + sinais de lote/passada
# ──────────────────────────────────────────────────────────────
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

import structlog
from pydantic import ValidationError

from core.exceptions import SyncError, TransportError, UpstreamError
from core.schemas.hubspot_schema import HubspotObject, LoadedContact, next_page_link
from core.schemas.sync_result_schema import PageResult
from core.services.context import SyncContext
from infrastructure.clients import strip_credentials
from infrastructure.clients.api.base_client import safe_json, status_ok
from infrastructure.observability import metrics
from orchestration.common.sync_state import SyncState

log = structlog.get_logger(__name__)

# ═════════════════════ Entidades ═════════════════════
@dataclass(frozen=True)
class EntitySpec:
    name:            str
    route:           str
    properties:      Tuple[str, ...]
    associations:    Tuple[str, ...] = ()
    group_type_attr: Optional[str] = None    # config attr; None → sempre ativo
    tracks_completion: bool = False          # skip diário (só contatos)
    name_property:   Optional[str] = None    # promovido p/ "name"


CONTACTS = EntitySpec(
    name="contacts",
    route="contacts.list",
    properties=(
        "email", "hubspotscore", "company", "firstname", "lastname", "phone",
        "address", "city", "state", "zip", "country", "website", "jobtitle",
        "lifecyclestage",
    ),
    associations=("companies",),
    tracks_completion=True,
)
DEALS = EntitySpec(
    name="deals",
    route="deals.list",
    properties=(
        "dealname", "amount", "dealstage", "pipeline", "closedate", "createdate",
        "hs_lastmodifieddate",
    ),
    associations=("companies",),
    group_type_attr="deals_group_type",
    name_property="dealname",
)
COMPANIES = EntitySpec(
    name="companies",
    route="companies.list",
    properties=(
        "name", "domain", "industry", "phone", "city", "state", "country",
        "website", "numberofemployees", "annualrevenue",
    ),
    group_type_attr="companies_group_type",
)
ENTITY_SPECS: Dict[str, EntitySpec] = {s.name: s for s in (COMPANIES, DEALS, CONTACTS)}

# HubSpot property → PostHog person property
CONTACT_PROFILE_ATTRS: Dict[str, str] = {
    "company":        "hubspot_company",
    "firstname":      "hubspot_first_name",
    "lastname":       "hubspot_last_name",
    "phone":          "hubspot_phone",
    "address":        "hubspot_address",
    "city":           "hubspot_city",
    "state":          "hubspot_state",
    "zip":            "hubspot_zip",
    "country":        "hubspot_country",
    "website":        "hubspot_website",
    "jobtitle":       "hubspot_job_title",
    "lifecyclestage": "hubspot_lifecycle_stage",
}


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


@dataclass
class _PageState:
    records:  List[HubspotObject] = field(default_factory=list)
    contacts: List[LoadedContact] = field(default_factory=list)
    emitted:  int = 0
    failed:   int = 0
    seen_skipped: int = 0


# ═════════════════════ Classe principal ════════════════════
class HubspotEntitySynchronizer:
    """
    Sincroniza UMA página de um tipo de entidade HubSpot → PostHog.

    • Retoma do cursor salvo; sem cursor inicia passada nova
    • Erro de página (status/corpo) é logado, resultado parcial segue
    • Falha ao projetar um registro é contada; a página continua
    • Cursor só avança (ou é limpo) após uma página bem-sucedida
    """

    def __init__(self, spec: EntitySpec, ctx: SyncContext) -> None:
        self.spec  = spec
        self.ctx   = ctx
        self.state = SyncState(ctx.store)
        self.log   = log.bind(entity=spec.name)

    # ─────────── config gates ───────────
    @property
    def group_type(self) -> Optional[str]:
        if self.spec.group_type_attr is None:
            return None
        return getattr(self.ctx.config, self.spec.group_type_attr)

    def is_enabled(self) -> bool:
        return self.spec.group_type_attr is None or bool(self.group_type)

    # ─────────── 1. request ───────────
    def _next_request(self, today: date) -> Optional[Tuple[Optional[str], Optional[Dict[str, Any]]]]:
        """(url, params) da próxima página, ou None se não há nada a fazer hoje."""
        cursor = self.state.get_cursor(self.spec.name)
        if cursor:
            self.log.debug("Resuming from stored cursor", cursor=cursor)
            return cursor, None

        if self.spec.tracks_completion and self.ctx.config.is_production:
            if self.state.get_last_completed_date() == today:
                self.log.info("Not syncing - full pass already completed today", day=today.isoformat())
                return None

        params = self.ctx.hubspot.list_params(list(self.spec.properties), list(self.spec.associations))
        return None, params

    # ─────────── 2. projeção por registro ───────────
    def _emit(self, ok: bool, page: _PageState) -> None:
        if ok:
            page.emitted += 1

    def _project_contact(self, record: HubspotObject, page: _PageState) -> None:
        props = record.properties
        email = props.get("email")
        page.contacts.append(LoadedContact(email=email, score=props.get("hubspotscore"), properties=props))
        if not email:
            return

        attrs = {
            target: props[source]
            for source, target in CONTACT_PROFILE_ATTRS.items()
            if props.get(source) not in (None, "")
        }
        attrs["hubspot_contact_id"] = record.id
        self._emit(self.ctx.analytics.set_person_properties(email, attrs), page)

        companies_group_type = self.ctx.config.companies_group_type
        if companies_group_type:
            for company_id in record.associated_ids("companies"):
                self._emit(
                    self.ctx.analytics.capture(
                        "hubspot contact company associated",
                        email,
                        {"$groups": {companies_group_type: company_id}},
                    ),
                    page,
                )

    def _already_seen(self, record: HubspotObject, page: _PageState) -> bool:
        if self.state.is_seen(self.spec.name, record.id):
            page.seen_skipped += 1
            metrics.sync_seen_skipped_total.labels(entity=self.spec.name).inc()
            return True
        return False

    def _project_group(self, record: HubspotObject, page: _PageState) -> None:
        if self._already_seen(record, page):
            return

        props = dict(record.properties)
        if self.spec.name_property and self.spec.name_property in props:
            props["name"] = props.pop(self.spec.name_property)
        if not self.ctx.analytics.group_identify(self.group_type, record.id, props):
            # not marked: announced again on a later pass
            self.log.warning("Group identify rejected by PostHog", record_id=record.id)
            return
        page.emitted += 1
        self.state.mark_seen(self.spec.name, record.id)

        if self.spec is DEALS:
            self._link_deal_to_companies(record, page)

    def _link_deal_to_companies(self, record: HubspotObject, page: _PageState) -> None:
        companies_group_type = self.ctx.config.companies_group_type
        for company_id in record.associated_ids("companies"):
            groups = {self.group_type: record.id}
            if companies_group_type:
                groups[companies_group_type] = company_id
            self._emit(
                self.ctx.analytics.capture(
                    "hubspot deal company associated",
                    f"hubspot_deal_{record.id}",
                    {"$groups": groups, "hubspot_company_id": company_id},
                ),
                page,
            )

    def _project(self, record: HubspotObject, page: _PageState) -> None:
        try:
            if self.spec is CONTACTS:
                self._project_contact(record, page)
            else:
                self._project_group(record, page)
        except SyncError as exc:
            page.failed += 1
            metrics.sync_record_failures_total.labels(entity=self.spec.name).inc()
            self.log.error("Unable to project HubSpot record - skipping", record_id=record.id, error=str(exc))

    # ─────────── 3. helpers ───────────
    def _validate_results(self, raw: Any) -> List[HubspotObject]:
        valid: List[HubspotObject] = []
        for item in raw if isinstance(raw, list) else []:
            try:
                valid.append(HubspotObject.model_validate(item))
            except ValidationError as exc:
                self.log.warning("Skipping invalid HubSpot record", error=str(exc))
        return valid

    def _signal_progress(self, completed: bool, page: _PageState) -> None:
        name = self.spec.name
        event = f"hubspot {name} sync all {name} completed" if completed else f"hubspot {name} sync batch completed"
        try:
            self.ctx.analytics.capture(event, "hubspot-sync", {"records": len(page.records), "emitted": page.emitted})
        except SyncError as exc:
            self.log.warning("Unable to emit sync progress signal", signal=event, error=str(exc))

    # ─────────── 4. execução ───────────
    def run_page(self, today: Optional[date] = None) -> PageResult:
        label = self.spec.name
        today = today or utc_today()

        if not self.is_enabled():
            self.log.info("Not syncing - group type not configured")
            metrics.sync_pages_total.labels(entity=label, outcome="disabled").inc()
            return PageResult(entity=label, skipped=True)

        request = self._next_request(today)
        if request is None:
            metrics.sync_pages_total.labels(entity=label, outcome="skipped").inc()
            return PageResult(entity=label, skipped=True)
        url, params = request

        try:
            response = self.ctx.hubspot.call(self.spec.route, url=url, params=params)
        except TransportError as exc:
            self.log.error("Unable to reach HubSpot, cursor kept for next run", error=str(exc))
            metrics.sync_pages_total.labels(entity=label, outcome="transport_error").inc()
            return PageResult(entity=label, error=str(exc))

        body = safe_json(response)
        error: Optional[str] = None
        if not status_ok(response) or body.get("status") == "error":
            upstream = UpstreamError(response.status_code, str(body.get("message") or ""))
            self.log.error(f"Unable to get {label} from HubSpot", status_code=upstream.status_code, error_message=upstream.message)
            error = str(upstream)

        page = _PageState(records=self._validate_results(body.get("results")))
        for record in page.records:
            self._project(record, page)
        metrics.sync_records_processed_total.labels(entity=label).inc(len(page.records))
        self.log.info(f"Loaded {len(page.records)} {label} from HubSpot", emitted=page.emitted, seen_skipped=page.seen_skipped, failed=page.failed)

        result = PageResult(
            entity=label,
            records=len(page.records),
            emitted=page.emitted,
            seen_skipped=page.seen_skipped,
            failed=page.failed,
            error=error,
            contacts=page.contacts,
        )

        if error is not None:
            # cursor intacto: a mesma página é tentada de novo no próximo tick
            metrics.sync_pages_total.labels(entity=label, outcome="upstream_error").inc()
            return result

        next_link = next_page_link(body)
        if next_link:
            self.state.save_cursor(label, strip_credentials(next_link))
        else:
            self.state.save_cursor(label, None)
            if self.spec.tracks_completion:
                self.state.save_last_completed_date(today)
            result.completed = True

        self._signal_progress(result.completed, page)
        metrics.sync_pages_total.labels(entity=label, outcome="completed" if result.completed else "batch").inc()
        return result
