import pytest

from core.schemas.config_schema import SyncConfig
from core.services.context import SyncContext
from infrastructure.clients import HubspotAPIClient
from infrastructure.clients.api.route_registry import RouteRegistry, RouteRequest, route_registry
from tests.helpers import FakeResponse, FakeStore

CONTACTS_URL = "https://api.hubapi.com/crm/v3/objects/contacts"


def test_routes_are_sent_with_their_registered_verb(session):
    client = HubspotAPIClient(access_token="pat-token", session=session)
    session.request.return_value = FakeResponse(200, {})

    client.call("contacts.list", params={"limit": 1})
    client.call("contacts.create", properties={"email": "a@b.com"})
    client.call("contacts.update", contact_id="42", properties={"email": "a@b.com"})

    sent = [(c.args[0], c.args[1]) for c in session.request.call_args_list]
    assert sent == [
        ("GET", CONTACTS_URL),
        ("POST", CONTACTS_URL),
        ("PATCH", f"{CONTACTS_URL}/42"),
    ]


def test_bearer_token_is_sent_per_request_not_on_session(session):
    client = HubspotAPIClient(access_token="pat-token", session=session)
    session.request.return_value = FakeResponse(200, {})

    client.call("contacts.probe")

    assert "Authorization" not in session.headers
    assert session.request.call_args.kwargs["headers"] == {"Authorization": "Bearer pat-token"}


def test_api_key_goes_in_query_without_header(session):
    client = HubspotAPIClient(api_key="secret", session=session)
    session.request.return_value = FakeResponse(200, {})

    client.call("deals.list", url="https://api.hubapi.com/crm/v3/objects/deals?after=5")

    kwargs = session.request.call_args.kwargs
    assert kwargs["params"] == {"hapikey": "secret"}
    assert "headers" not in kwargs


def test_shared_session_does_not_leak_crm_token_to_analytics(session):
    config = SyncConfig.load({"hubspotAccessToken": "pat-token", "postHogProjectToken": "phc"})
    ctx = SyncContext.build(config, FakeStore(), session=session)
    session.request.return_value = FakeResponse(200, {})

    ctx.hubspot.call("contacts.probe")
    ctx.analytics.capture("signup", "d1")

    posthog_call = session.request.call_args_list[1]
    assert posthog_call.args[1] == "https://app.posthog.com/capture/"
    assert "headers" not in posthog_call.kwargs
    assert "Authorization" not in session.headers


def test_registry_rejects_unknown_verbs_and_duplicates():
    registry = RouteRegistry()

    with pytest.raises(ValueError):
        registry.register("contacts.delete", method="DELETE")

    @registry.register("things.list", method="get")
    def list_things(client):
        return RouteRequest("https://example.test/things")

    assert registry.get_route_info("things.list").method == "GET"
    with pytest.raises(ValueError):
        registry.register("things.list")(list_things)
    with pytest.raises(ValueError):
        registry.get_route_info("missing.route")


def test_all_crm_routes_registered():
    assert set(route_registry.all_routes()) == {
        "contacts.list", "contacts.probe", "contacts.create", "contacts.update",
        "deals.list", "companies.list",
    }
