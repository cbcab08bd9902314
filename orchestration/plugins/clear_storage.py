from infrastructure.config.settings import settings
from orchestration.flows.clear_storage_flow import hubspot_clear_storage_flow
from orchestration.plugins.deploy_common import IMAGE_NAME, JOB_VARIABLES

hubspot_clear_storage_flow.deploy(
    name="HubSpot Clear Storage",
    description="Limpa cursores e data de conclusão; a próxima execução recomeça do zero.",
    tags=["hubspot", "maintenance"],
    work_pool_name=settings.PREFECT_WORK_POOL_NAME,
    image=IMAGE_NAME,
    push=False,
    job_variables=JOB_VARIABLES,
)
