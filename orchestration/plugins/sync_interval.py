from datetime import timedelta

from infrastructure.config.settings import settings
from orchestration.flows.sync_interval_flow import hubspot_interval_sync_flow
from orchestration.plugins.deploy_common import IMAGE_NAME, JOB_VARIABLES

# um tick por intervalo; o host não sobrepõe execuções do mesmo job
hubspot_interval_sync_flow.deploy(
    name="HubSpot Interval Sync",
    description="Uma página de companies/deals/contacts do HubSpot ➜ PostHog + scores.",
    tags=["hubspot", "posthog", "sync"],
    work_pool_name=settings.PREFECT_WORK_POOL_NAME,
    image=IMAGE_NAME,
    push=False,
    interval=timedelta(seconds=settings.SYNC_INTERVAL_SECONDS),
    job_variables=JOB_VARIABLES,
)
