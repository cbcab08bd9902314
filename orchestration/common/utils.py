# -*- coding: utf-8 -*-
"""
Helpers compartilhados pelos flows HubSpot ↔ PostHog.

• construção do checkpoint store / SyncService a partir das settings
• métricas de finalização de flow (+ Pushgateway, se configurado)
"""
from __future__ import annotations

import time

from prometheus_client import REGISTRY, push_to_gateway

from core.schemas.config_schema import SyncConfig
from infrastructure.config.settings import settings
from infrastructure.observability import metrics
from infrastructure.redis import RedisCheckpointStore
from orchestration.common.sync_service import SyncService


def build_store() -> RedisCheckpointStore:
    return RedisCheckpointStore(connection_string=settings.REDIS_URL)


def build_service() -> SyncService:
    """Config validada + health check; ConfigurationError aborta o flow."""
    return SyncService.setup(SyncConfig.from_settings(settings), store=build_store())


def finish_flow_metrics(flow_name: str, start_ts: float, logger) -> None:
    duration = time.time() - start_ts
    metrics.sync_flow_duration_seconds.labels(flow=flow_name).observe(duration)
    logger.info("%s finished in %.2fs", flow_name, duration)

    # flows rodam em processos efêmeros: o scrape do worker não os enxerga
    if settings.PUSHGATEWAY_ADDRESS:
        try:
            push_to_gateway(settings.PUSHGATEWAY_ADDRESS, job="hubspot_posthog_sync", registry=REGISTRY)
        except OSError as exc:
            logger.warning("Pushgateway unavailable: %s", exc)
