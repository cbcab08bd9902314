from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests
import structlog

from core.exceptions import UpstreamError
from infrastructure.clients.api.base_client import BaseAPIClient, safe_json, status_ok

log = structlog.get_logger(__name__)


class PostHogAPIClient:
    """Ingestion (``/capture/``) + persons lookup on a PostHog instance."""

    def __init__(
        self,
        host: str,
        project_token: Optional[str] = None,
        api_token: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self.host = host.rstrip("/")
        self.project_token = project_token
        self.api_token = api_token
        self.http_client = BaseAPIClient(session=session, name="PostHog")
        self.log = log.bind(client="PostHogAPIClient", host=self.host)

    # ───────────────────── ingestion
    def capture(self, event: str, distinct_id: str, properties: Optional[Dict[str, Any]] = None) -> bool:
        payload = {
            "api_key": self.project_token,
            "event": event,
            "distinct_id": str(distinct_id),
            "properties": properties or {},
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        response = self.http_client.request("POST", f"{self.host}/capture/", json=payload)
        if not status_ok(response):
            self.log.warning("capture rejected", event=event, status_code=response.status_code)
            return False
        return True

    def set_person_properties(self, distinct_id: str, props: Dict[str, Any]) -> bool:
        return self.capture("$set", distinct_id, {"$set": props})

    def group_identify(self, group_type: str, group_key: str, props: Dict[str, Any]) -> bool:
        return self.capture(
            "$groupidentify",
            f"{group_type}_{group_key}",
            {"$group_type": group_type, "$group_key": str(group_key), "$group_set": props},
        )

    # ───────────────────── persons API
    def find_persons_by_email(self, email: str) -> List[Dict[str, Any]]:
        headers = {"Authorization": f"Bearer {self.api_token}"} if self.api_token else None
        response = self.http_client.request(
            "GET",
            f"{self.host}/api/projects/@current/persons",
            params={"email": email},
            headers=headers,
        )
        body = safe_json(response)
        if not status_ok(response):
            raise UpstreamError(response.status_code, str(body.get("detail") or body.get("message") or ""))
        results = body.get("results")
        return results if isinstance(results, list) else []
