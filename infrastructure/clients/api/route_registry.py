from dataclasses import dataclass
from typing import Any, Callable, Dict, NamedTuple, Optional

ALLOWED_METHODS = frozenset({"GET", "POST", "PATCH"})


class RouteRequest(NamedTuple):
    """What a route builder hands back; the client sends it with the route's verb."""

    url:    str
    params: Optional[Dict[str, Any]] = None
    json:   Any = None


@dataclass(frozen=True)
class RouteInfo:
    endpoint: str
    method:   str
    build_fn: Callable[..., RouteRequest]


class RouteRegistry:
    """Named CRM endpoints (``contacts.list``, ``deals.list``...)."""

    def __init__(self):
        self.routes: Dict[str, RouteInfo] = {}

    def register(self, endpoint: str, method: str = "GET"):
        method = method.upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(f"Route {endpoint}: unsupported method {method}.")

        def decorator(build_fn: Callable[..., RouteRequest]):
            if endpoint in self.routes:
                raise ValueError(f"Route {endpoint} registered twice.")
            self.routes[endpoint] = RouteInfo(endpoint, method, build_fn)
            return build_fn
        return decorator

    def get_route_info(self, endpoint: str) -> RouteInfo:
        if endpoint not in self.routes:
            raise ValueError(f"Endpoint {endpoint} not registered in the RouteRegistry.")
        return self.routes[endpoint]

    def all_routes(self) -> Dict[str, RouteInfo]:
        return self.routes


route_registry = RouteRegistry()
