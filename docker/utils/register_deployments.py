#!/usr/bin/env python3
"""Registra todos os deployments HubSpot ↔ PostHog no Prefect."""
import structlog

from infrastructure.observability import configure_logging

configure_logging()
log = structlog.get_logger(__name__)

if __name__ == "__main__":
    try:
        import orchestration.plugins  # noqa: F401  (deploy na importação)
    except ImportError as e:
        log.error("Falha ao importar 'orchestration.plugins'", error=str(e))
        raise
    log.info("✅ Deployments registrados: interval sync, event handler, clear storage.")
    log.info("🔧 Certifique-se de que o worker Prefect está escutando o work pool correto.")
