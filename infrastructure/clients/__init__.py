from .hubspot_api_client import HubspotAPIClient, strip_credentials
from .posthog_api_client import PostHogAPIClient

__all__ = ["HubspotAPIClient", "PostHogAPIClient", "strip_credentials"]
