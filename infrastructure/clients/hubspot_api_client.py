from typing import Any, Dict, List, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import requests
import structlog

from core.exceptions import ConfigurationError
from infrastructure.clients.api.base_client import BaseAPIClient
from infrastructure.clients.api.route_registry import route_registry
import infrastructure.clients.api.routes  # noqa: F401  (registers the routes)

log = structlog.get_logger(__name__)

API_KEY_PARAM = "hapikey"


def strip_credentials(url: str) -> str:
    """Remove credenciais da query de um link de paginação antes de persistir."""
    parts = urlsplit(url)
    pairs = parse_qsl(parts.query, keep_blank_values=True)
    if not any(k == API_KEY_PARAM for k, _ in pairs):
        return url
    query = [(k, v) for k, v in pairs if k != API_KEY_PARAM]
    return urlunsplit(parts._replace(query=urlencode(query, safe=",")))


class HubspotAPIClient:
    """
    CRM v3 client. Credentials are attached per request (bearer header for
    private-app tokens, ``hapikey`` query param for legacy keys), so neither
    stored cursors nor a session shared with other clients carry them.
    """

    BASE_URL = "https://api.hubapi.com"
    DEFAULT_PAGE_SIZE = 100

    def __init__(
        self,
        api_key: Optional[str] = None,
        access_token: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        if not (api_key or access_token):
            log.error("HubSpot credential missing.")
            raise ConfigurationError("Missing HubSpot API key or access token.")

        self.api_key = api_key
        self.access_token = access_token
        self.http_client = BaseAPIClient(session=session, name="HubSpot")
        self.routes = route_registry

        log.info("HubspotAPIClient initialized", auth="bearer" if access_token else "hapikey")

    def _auth_params(self, params: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if self.access_token:
            return params
        return {**(params or {}), API_KEY_PARAM: self.api_key}

    def _auth_headers(self) -> Optional[Dict[str, str]]:
        if self.access_token:
            return {"Authorization": f"Bearer {self.access_token}"}
        return None

    def request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> requests.Response:
        return self.http_client.request(
            method,
            url,
            params=self._auth_params(params),
            json=json,
            headers=self._auth_headers(),
        )

    def call(self, endpoint: str, **kwargs) -> requests.Response:
        """Builds the registered route and sends it with the route's own verb."""
        route_info = self.routes.get_route_info(endpoint)
        built = route_info.build_fn(self, **kwargs)
        return self.request(route_info.method, built.url, params=built.params, json=built.json)

    def list_params(self, properties: List[str], associations: List[str]) -> Dict[str, Any]:
        """Query string da primeira página de uma passada completa."""
        params: Dict[str, Any] = {
            "limit": self.DEFAULT_PAGE_SIZE,
            "paginateAssociations": "false",
            "archived": "false",
            "properties": ",".join(properties),
        }
        if associations:
            params["associations"] = ",".join(associations)
        return params

    def available_routes(self) -> List[str]:
        return list(self.routes.all_routes().keys())
