"""Prefect 2 – página HubSpot (companies, deals, contacts) ➜ PostHog + scores"""
from __future__ import annotations

import time
from typing import Any, Dict

from prefect import flow, get_run_logger

from infrastructure.observability import metrics
from orchestration.common import utils


@flow(name="HubSpot Interval Sync")
def hubspot_interval_sync_flow() -> Dict[str, Any]:
    log   = get_run_logger()
    label = "IntervalSync"
    start = time.time()

    metrics.sync_flow_runs_total.labels(flow=label).inc()

    try:
        service = utils.build_service()
        report  = service.run_interval()

        for name, page in report.pages.items():
            log.info(
                "%s → records=%s emitted=%s seen_skipped=%s completed=%s skipped=%s error=%s",
                name, page.records, page.emitted, page.seen_skipped,
                page.completed, page.skipped, page.error,
            )
        log.info(
            "✔ scores – updated=%s skipped=%s processed=%s errors=%s",
            report.updated, report.skipped, report.processed, report.errors,
        )
        return report.model_dump(exclude={"pages": {"__all__": {"contacts"}}})

    except Exception:
        metrics.sync_flow_failures_total.labels(flow=label).inc()
        log.exception("Interval sync flow failed")
        raise

    finally:
        utils.finish_flow_metrics(label, start, log)
