"""Error kinds raised across the HubSpot ↔ PostHog sync."""
from __future__ import annotations

from typing import Optional


class SyncError(Exception):
    """Base class for every error raised by the sync."""


class TransportError(SyncError):
    """Network-level failure that survived the single retry."""

    def __init__(self, method: str, url: str):
        self.method = method.upper()
        self.url = url
        super().__init__(f"{self.method} request to {url} failed.")


class UpstreamError(SyncError):
    """Non-2xx status or error-shaped body returned by an upstream API."""

    def __init__(self, status_code: Optional[int], message: str = ""):
        self.status_code = status_code
        self.message = message
        super().__init__(f"Status Code: {status_code}. Error message: {message}")


class ConflictError(UpstreamError):
    """HTTP 409 on contact creation; carries the id of the existing record."""

    def __init__(self, existing_id: str, message: str = ""):
        self.existing_id = existing_id
        super().__init__(409, message)


class ConfigurationError(SyncError):
    """
    Fatal setup problem (missing credentials, failed health check).

    ``retry`` tells the host whether initialization may succeed if tried
    again later (e.g. the CRM was unreachable, not misconfigured).
    """

    def __init__(self, message: str, retry: bool = False):
        self.retry = retry
        super().__init__(message)
