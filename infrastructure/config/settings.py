# infrastructure/config/settings.py – env vars + .env (load_dotenv)
from dotenv import load_dotenv
import os

# Load environment variables from .env file if present
load_dotenv()

class Settings:
    """Configurações da aplicação (env vars)."""
    # HubSpot
    HUBSPOT_API_KEY        = os.getenv("HUBSPOT_API_KEY")
    HUBSPOT_ACCESS_TOKEN   = os.getenv("HUBSPOT_ACCESS_TOKEN")

    # PostHog
    POSTHOG_URL            = os.getenv("POSTHOG_URL", "https://app.posthog.com")
    POSTHOG_API_TOKEN      = os.getenv("POSTHOG_API_TOKEN")
    POSTHOG_PROJECT_TOKEN  = os.getenv("POSTHOG_PROJECT_TOKEN")

    # Sync behaviour
    TRIGGERING_EVENTS      = os.getenv("TRIGGERING_EVENTS")
    IGNORED_EMAILS         = os.getenv("IGNORED_EMAILS")
    ADDITIONAL_PROPERTY_MAPPINGS = os.getenv("ADDITIONAL_PROPERTY_MAPPINGS")
    COMPANIES_GROUP_TYPE   = os.getenv("COMPANIES_GROUP_TYPE")
    DEALS_GROUP_TYPE       = os.getenv("DEALS_GROUP_TYPE")
    SYNC_MODE              = os.getenv("SYNC_MODE", "production")
    SYNC_INTERVAL_SECONDS  = int(os.getenv("SYNC_INTERVAL_SECONDS", "60"))

    # Redis (checkpoints)
    REDIS_URL              = os.getenv("REDIS_URL", "redis://localhost:6379/0")

    # Prefect / Docker
    IMAGE_NAME             = os.getenv("IMAGE_NAME")
    PREFECT_WORK_POOL_NAME = os.getenv("PREFECT_WORK_POOL_NAME")
    PREFECT_API_URL        = os.getenv("PREFECT_API_URL")
    DEFAULT_DOCKER_NETWORK_NAME = os.getenv("DEFAULT_DOCKER_NETWORK_NAME")

    # Host ports (defaults provided)
    HOST_METRICS_PORT      = int(os.getenv("HOST_METRICS_PORT", "8082"))

    # Outros
    PUSHGATEWAY_ADDRESS    = os.getenv("PUSHGATEWAY_ADDRESS")

settings = Settings()
