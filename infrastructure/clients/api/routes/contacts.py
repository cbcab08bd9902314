from typing import Any, Dict, Optional

from infrastructure.clients.api.route_registry import RouteRequest, route_registry

CONTACTS_PATH = "/crm/v3/objects/contacts"


@route_registry.register(endpoint="contacts.list", method="GET")
def list_contacts(client, params: Optional[Dict[str, Any]] = None, url: Optional[str] = None) -> RouteRequest:
    """Uma página de contatos; ``url`` (cursor) tem precedência sobre ``params``."""
    return RouteRequest(url or f"{client.BASE_URL}{CONTACTS_PATH}", params=params)


@route_registry.register(endpoint="contacts.probe", method="GET")
def probe_contacts(client) -> RouteRequest:
    """Request mínimo usado como health check na inicialização."""
    params = {"limit": 1, "paginateAssociations": "false", "archived": "false"}
    return RouteRequest(f"{client.BASE_URL}{CONTACTS_PATH}", params=params)


@route_registry.register(endpoint="contacts.create", method="POST")
def create_contact(client, properties: Dict[str, Any]) -> RouteRequest:
    return RouteRequest(f"{client.BASE_URL}{CONTACTS_PATH}", json={"properties": properties})


@route_registry.register(endpoint="contacts.update", method="PATCH")
def update_contact(client, contact_id: str, properties: Dict[str, Any]) -> RouteRequest:
    return RouteRequest(f"{client.BASE_URL}{CONTACTS_PATH}/{contact_id}", json={"properties": properties})
