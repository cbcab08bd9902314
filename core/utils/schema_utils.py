from typing import Any
from pydantic import BaseModel, field_validator


def to_camel(s: str) -> str:
    """Converte snake_case para camelCase (hubspot_api_key → hubspotApiKey)."""
    head, *tail = s.split("_")
    return head + "".join(part.title() for part in tail)


class HSBaseModel(BaseModel):
    """
    BaseModel padrão para payloads HubSpot / PostHog:
    - Aceita tanto o nome do campo quanto o alias.
    - Permite campos extras (a API devolve bem mais do que modelamos).
    """

    model_config = {
        "populate_by_name": True,
        "extra": "allow",
    }


class CamelModel(HSBaseModel):
    """Opções de configuração chegam em camelCase (``triggeringEvents``)."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore",
    }


def coerce_id(v: Any) -> Any:
    """HubSpot returns ids as strings, fixtures and older payloads as ints."""
    if v is None or isinstance(v, str):
        return v
    return str(v)


class HasStrId(HSBaseModel):
    id: str

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v):
        return coerce_id(v)
