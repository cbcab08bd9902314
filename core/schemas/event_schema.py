from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import Field, field_validator

from core.utils.schema_utils import HSBaseModel


class InboundEvent(HSBaseModel):
    """
    Evento PostHog recebido pelo handler por-evento.
    ``$set`` e ``properties`` são opcionais e podem vir nulos.
    """

    event: str
    distinct_id: Optional[str] = None
    timestamp: Optional[str] = None
    sent_at: Optional[str] = None

    set_properties: Dict[str, Any] = Field(default_factory=dict, alias="$set")
    properties:     Dict[str, Any] = Field(default_factory=dict)

    @field_validator("set_properties", "properties", mode="before")
    @classmethod
    def _mapping_or_empty(cls, v):
        return v if isinstance(v, dict) else {}

    @field_validator("distinct_id", mode="before")
    @classmethod
    def _distinct_id_as_str(cls, v):
        return None if v is None else str(v)

    @property
    def send_time(self) -> Optional[str]:
        return self.timestamp or self.sent_at

    def merged_properties(self) -> Dict[str, Any]:
        """``$set`` first, then ``properties`` (later keys win)."""
        return {**self.set_properties, **self.properties}
