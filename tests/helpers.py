"""Fakes shared by the test modules."""
from __future__ import annotations

from typing import Any, Dict, Optional
from unittest.mock import MagicMock

from infrastructure.clients import PostHogAPIClient


class FakeStore:
    """In-memory stand-in for RedisCheckpointStore."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self.data: Dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Optional[Any]:
        return self.data.get(key)

    def set(self, key: str, value: Any, ex_seconds: Optional[int] = None) -> None:
        if value is None:
            self.delete(key)
        else:
            self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None):
        self.status_code = status_code
        self._body = body

    def json(self):
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body


def page(results, next_link: Optional[str] = None, status_code: int = 200) -> FakeResponse:
    body: Dict[str, Any] = {"results": results}
    if next_link:
        body["paging"] = {"next": {"after": "x", "link": next_link}}
    return FakeResponse(status_code, body)


def make_analytics() -> MagicMock:
    analytics = MagicMock(spec=PostHogAPIClient)
    analytics.capture.return_value = True
    analytics.set_person_properties.return_value = True
    analytics.group_identify.return_value = True
    analytics.find_persons_by_email.return_value = []
    return analytics
