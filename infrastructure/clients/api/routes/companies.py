from typing import Any, Dict, Optional

from infrastructure.clients.api.route_registry import RouteRequest, route_registry

COMPANIES_PATH = "/crm/v3/objects/companies"


@route_registry.register(endpoint="companies.list", method="GET")
def list_companies(client, params: Optional[Dict[str, Any]] = None, url: Optional[str] = None) -> RouteRequest:
    return RouteRequest(url or f"{client.BASE_URL}{COMPANIES_PATH}", params=params)
