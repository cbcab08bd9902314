import pytest

from core.exceptions import UpstreamError
from infrastructure.clients import PostHogAPIClient
from tests.helpers import FakeResponse

HOST = "https://eu.posthog.com"


@pytest.fixture
def client(session):
    return PostHogAPIClient(host=f"{HOST}/", project_token="phc_project", api_token="phx_personal", session=session)


def _sent(session):
    args, kwargs = session.request.call_args
    return args[0], args[1], kwargs


def test_capture_posts_project_token_and_identity(client, session):
    session.request.return_value = FakeResponse(200, {"status": 1})

    assert client.capture("signup", 42, {"plan": "pro"}) is True

    method, url, kwargs = _sent(session)
    assert (method, url) == ("POST", f"{HOST}/capture/")
    payload = kwargs["json"]
    assert payload["api_key"] == "phc_project"
    assert payload["event"] == "signup"
    assert payload["distinct_id"] == "42"
    assert payload["properties"] == {"plan": "pro"}
    assert payload["timestamp"]
    assert "headers" not in kwargs


def test_rejected_capture_returns_false(client, session):
    session.request.return_value = FakeResponse(400, {"type": "validation_error"})

    assert client.capture("signup", "d1") is False


def test_set_person_properties_wraps_in_set(client, session):
    session.request.return_value = FakeResponse(200, {})

    client.set_person_properties("jane@acme.com", {"hubspot_company": "Acme"})

    payload = _sent(session)[2]["json"]
    assert payload["event"] == "$set"
    assert payload["distinct_id"] == "jane@acme.com"
    assert payload["properties"] == {"$set": {"hubspot_company": "Acme"}}


def test_group_identify_shape(client, session):
    session.request.return_value = FakeResponse(200, {})

    client.group_identify("company", 99, {"name": "Acme"})

    payload = _sent(session)[2]["json"]
    assert payload["event"] == "$groupidentify"
    assert payload["distinct_id"] == "company_99"
    assert payload["properties"] == {
        "$group_type": "company",
        "$group_key": "99",
        "$group_set": {"name": "Acme"},
    }


def test_find_persons_uses_personal_token(client, session):
    persons = [{"id": "p1", "distinct_ids": ["d1"]}]
    session.request.return_value = FakeResponse(200, {"results": persons})

    assert client.find_persons_by_email("jane@acme.com") == persons

    method, url, kwargs = _sent(session)
    assert (method, url) == ("GET", f"{HOST}/api/projects/@current/persons")
    assert kwargs["params"] == {"email": "jane@acme.com"}
    assert kwargs["headers"] == {"Authorization": "Bearer phx_personal"}


def test_find_persons_tolerates_missing_results(client, session):
    session.request.return_value = FakeResponse(200, {})

    assert client.find_persons_by_email("jane@acme.com") == []


def test_find_persons_error_status_raises(client, session):
    session.request.return_value = FakeResponse(403, {"detail": "Permission denied"})

    with pytest.raises(UpstreamError) as info:
        client.find_persons_by_email("jane@acme.com")
    assert info.value.status_code == 403
    assert info.value.message == "Permission denied"
