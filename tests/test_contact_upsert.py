import pytest

from core.services.contact_upsert import ContactUpsert, extract_existing_id
from infrastructure.clients import HubspotAPIClient
from tests.helpers import FakeResponse

CONTACTS_URL = "https://api.hubapi.com/crm/v3/objects/contacts"


@pytest.fixture
def upserter(session):
    return ContactUpsert(HubspotAPIClient(access_token="pat-token", session=session))


def _calls(session):
    return [(c.args[0], c.args[1], c.kwargs.get("json")) for c in session.request.call_args_list]


def test_create_success(upserter, session):
    session.request.side_effect = [FakeResponse(201, {"id": "7"})]

    result = upserter.upsert("jane@acme.com", {"company": "Acme"})

    assert result.outcome == "created"
    assert result.contact_id == "7"
    assert _calls(session) == [
        ("POST", CONTACTS_URL, {"properties": {"company": "Acme", "email": "jane@acme.com"}}),
    ]


def test_conflict_updates_existing_record_exactly_once(upserter, session):
    session.request.side_effect = [
        FakeResponse(409, {"status": "error", "message": "Contact already exists. Existing ID: 42"}),
        FakeResponse(200, {"id": "42"}),
    ]

    result = upserter.upsert("jane@acme.com", {"firstname": "Jane"})

    assert result.outcome == "updated"
    assert result.contact_id == "42"
    calls = _calls(session)
    assert [c[0] for c in calls] == ["POST", "PATCH"]
    assert calls[1][1] == f"{CONTACTS_URL}/42"
    assert calls[1][2] == {"properties": {"firstname": "Jane", "email": "jane@acme.com"}}


def test_failed_update_is_reported_without_further_retry(upserter, session):
    session.request.side_effect = [
        FakeResponse(409, {"message": "Existing ID: 42"}),
        FakeResponse(400, {"status": "error", "message": "Property values were not valid"}),
    ]

    result = upserter.upsert("jane@acme.com", {})

    assert result.outcome == "failed"
    assert result.status_code == 400
    assert result.contact_id == "42"
    assert session.request.call_count == 2


@pytest.mark.parametrize(
    "response",
    [
        FakeResponse(400, {"status": "error", "message": "bad"}),
        FakeResponse(200, {"status": "error", "message": "error marker in body"}),
        FakeResponse(409, {"status": "error", "message": "conflict without id"}),
        FakeResponse(500, None),
    ],
)
def test_other_failures_do_not_update(upserter, session, response):
    session.request.side_effect = [response]

    result = upserter.upsert("jane@acme.com", {})

    assert result.outcome == "failed"
    assert result.status_code == response.status_code
    assert session.request.call_count == 1


def test_email_always_overrides_mapped_email(upserter, session):
    session.request.side_effect = [FakeResponse(201, {"id": "1"})]

    upserter.upsert("jane@acme.com", {"email": "stale@acme.com"})

    assert session.request.call_args.kwargs["json"] == {"properties": {"email": "jane@acme.com"}}


def test_extract_existing_id():
    assert extract_existing_id("Contact already exists. Existing ID: 901") == "901"
    assert extract_existing_id("no id here") is None
    assert extract_existing_id(None) is None
