from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from core.schemas.hubspot_schema import LoadedContact

UpsertOutcome = Literal["created", "updated", "failed"]


class UpsertResult(BaseModel):
    email:       str
    outcome:     UpsertOutcome
    status_code: Optional[int] = None
    message:     str = ""
    contact_id:  Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome != "failed"


class PageResult(BaseModel):
    """Resultado de uma página de um tipo de entidade."""

    entity:       str
    records:      int = 0
    emitted:      int = 0
    seen_skipped: int = 0
    failed:       int = 0
    completed:    bool = False
    skipped:      bool = False
    error:        Optional[str] = None
    contacts:     List[LoadedContact] = Field(default_factory=list)


class IntervalReport(BaseModel):
    pages:     Dict[str, PageResult] = Field(default_factory=dict)
    updated:   int = 0
    skipped:   int = 0
    processed: int = 0
    errors:    int = 0
