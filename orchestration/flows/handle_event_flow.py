"""Prefect 2 – evento PostHog disparador ➜ contato HubSpot (create/update)"""
from __future__ import annotations

import time
from typing import Any, Dict, Optional

from prefect import flow, get_run_logger

from infrastructure.observability import metrics
from orchestration.common import utils


@flow(name="HubSpot Event Handler")
def hubspot_event_flow(event: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    log   = get_run_logger()
    label = "EventHandler"
    start = time.time()

    metrics.sync_flow_runs_total.labels(flow=label).inc()

    try:
        result = utils.build_service().on_event(event)
        if result is None:
            log.info("event %s ignored", event.get("event"))
            return None
        log.info("contact %s → %s", result.email, result.outcome)
        return result.model_dump()

    except Exception:
        metrics.sync_flow_failures_total.labels(flow=label).inc()
        log.exception("Event handler flow failed")
        raise

    finally:
        utils.finish_flow_metrics(label, start, log)
