from __future__ import annotations

from typing import FrozenSet, Optional

from pydantic import ValidationError, model_validator

from core.exceptions import ConfigurationError
from core.utils.schema_utils import CamelModel

DEFAULT_POSTHOG_URL = "https://app.posthog.com"


def split_csv(raw: Optional[str]) -> list[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


class SyncConfig(CamelModel):
    """
    Opções reconhecidas pelo sync, com os nomes camelCase originais
    (``hubspotApiKey``, ``triggeringEvents``...) como alias.
    """

    hubspot_api_key:        Optional[str] = None
    hubspot_access_token:   Optional[str] = None

    post_hog_url:           str = DEFAULT_POSTHOG_URL
    post_hog_api_token:     Optional[str] = None
    post_hog_project_token: Optional[str] = None

    triggering_event:       Optional[str] = None
    triggering_events:      Optional[str] = None
    ignored_emails:         Optional[str] = None
    additional_property_mappings: Optional[str] = None

    companies_group_type:   Optional[str] = None
    deals_group_type:       Optional[str] = None

    sync_mode:              str = "production"

    @model_validator(mode="after")
    def _normalize(self):
        for name in ("companies_group_type", "deals_group_type", "hubspot_api_key", "hubspot_access_token"):
            value = getattr(self, name)
            if isinstance(value, str) and not value.strip():
                setattr(self, name, None)
        self.post_hog_url = (self.post_hog_url or DEFAULT_POSTHOG_URL).rstrip("/")
        return self

    # ───────────────────── derived
    @property
    def triggering_event_set(self) -> FrozenSet[str]:
        events = split_csv(self.triggering_events)
        if self.triggering_event and self.triggering_event.strip():
            events.append(self.triggering_event.strip())
        return frozenset(events)

    @property
    def ignored_domain_set(self) -> FrozenSet[str]:
        return frozenset(d.lower() for d in split_csv(self.ignored_emails))

    @property
    def is_production(self) -> bool:
        return (self.sync_mode or "").strip().lower() == "production"

    # ───────────────────── builders
    @classmethod
    def load(cls, options: dict) -> "SyncConfig":
        """Valida o dict de opções; sem credencial HubSpot não há sync."""
        try:
            config = cls.model_validate(options)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid configuration: {exc}") from exc
        if not (config.hubspot_api_key or config.hubspot_access_token):
            raise ConfigurationError("Missing HubSpot credential: set hubspotApiKey or hubspotAccessToken.")
        return config

    @classmethod
    def from_settings(cls, settings) -> "SyncConfig":
        return cls.load(
            {
                "hubspotApiKey":              settings.HUBSPOT_API_KEY,
                "hubspotAccessToken":         settings.HUBSPOT_ACCESS_TOKEN,
                "postHogUrl":                 settings.POSTHOG_URL,
                "postHogApiToken":            settings.POSTHOG_API_TOKEN,
                "postHogProjectToken":        settings.POSTHOG_PROJECT_TOKEN,
                "triggeringEvents":           settings.TRIGGERING_EVENTS,
                "ignoredEmails":              settings.IGNORED_EMAILS,
                "additionalPropertyMappings": settings.ADDITIONAL_PROPERTY_MAPPINGS,
                "companiesGroupType":         settings.COMPANIES_GROUP_TYPE,
                "dealsGroupType":             settings.DEALS_GROUP_TYPE,
                "syncMode":                   settings.SYNC_MODE,
            }
        )
