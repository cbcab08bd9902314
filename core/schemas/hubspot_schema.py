from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from core.utils.schema_utils import HSBaseModel, HasStrId, coerce_id


class HubspotObject(HasStrId):
    """Registro CRM v3 (contact, deal ou company)."""

    properties:   Dict[str, Any] = Field(default_factory=dict)
    associations: Dict[str, Any] = Field(default_factory=dict)
    archived:     Optional[bool] = False

    @field_validator("properties", "associations", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return v if isinstance(v, dict) else {}

    def associated_ids(self, kind: str = "companies") -> List[str]:
        block = self.associations.get(kind) or {}
        ids = []
        for ref in block.get("results") or []:
            if isinstance(ref, dict) and ref.get("id") is not None:
                ids.append(coerce_id(ref["id"]))
        return ids


class LoadedContact(HSBaseModel):
    """Contato carregado numa página; vive só durante a execução."""

    email:      Optional[str] = None
    score:      Optional[Any] = None
    properties: Dict[str, Any] = Field(default_factory=dict)


def next_page_link(body: Dict[str, Any]) -> Optional[str]:
    paging = body.get("paging") if isinstance(body, dict) else None
    if not isinstance(paging, dict):
        return None
    nxt = paging.get("next")
    if not isinstance(nxt, dict):
        return None
    return nxt.get("link") or None
