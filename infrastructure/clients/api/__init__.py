from .base_client import BaseAPIClient, safe_json, status_ok
from .route_registry import RouteInfo, RouteRequest, route_registry

__all__ = ["BaseAPIClient", "safe_json", "status_ok", "RouteInfo", "RouteRequest", "route_registry"]
