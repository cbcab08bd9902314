from typing import Any, Dict, Optional

from infrastructure.clients.api.route_registry import RouteRequest, route_registry

DEALS_PATH = "/crm/v3/objects/deals"


@route_registry.register(endpoint="deals.list", method="GET")
def list_deals(client, params: Optional[Dict[str, Any]] = None, url: Optional[str] = None) -> RouteRequest:
    """Uma página de negócios (deals)."""
    return RouteRequest(url or f"{client.BASE_URL}{DEALS_PATH}", params=params)
