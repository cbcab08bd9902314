from infrastructure.config.settings import settings
from orchestration.flows.handle_event_flow import hubspot_event_flow
from orchestration.plugins.deploy_common import IMAGE_NAME, JOB_VARIABLES

# disparado por evento (run_deployment com parameters={"event": {...}})
hubspot_event_flow.deploy(
    name="HubSpot Event Handler",
    description="Cria/atualiza contato HubSpot a partir de um evento PostHog disparador.",
    tags=["hubspot", "posthog", "contacts"],
    work_pool_name=settings.PREFECT_WORK_POOL_NAME,
    image=IMAGE_NAME,
    push=False,
    job_variables=JOB_VARIABLES,
)
