from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests

from core.ports import CheckpointStorePort
from core.schemas.config_schema import SyncConfig
from infrastructure.clients import HubspotAPIClient, PostHogAPIClient


@dataclass
class SyncContext:
    """Everything one invocation needs, built once from configuration."""

    config:    SyncConfig
    hubspot:   HubspotAPIClient
    analytics: PostHogAPIClient
    store:     CheckpointStorePort

    @classmethod
    def build(
        cls,
        config: SyncConfig,
        store: CheckpointStorePort,
        session: Optional[requests.Session] = None,
    ) -> "SyncContext":
        return cls(
            config=config,
            hubspot=HubspotAPIClient(
                api_key=config.hubspot_api_key,
                access_token=config.hubspot_access_token,
                session=session,
            ),
            analytics=PostHogAPIClient(
                host=config.post_hog_url,
                project_token=config.post_hog_project_token,
                api_token=config.post_hog_api_token,
                session=session,
            ),
            store=store,
        )
