from unittest.mock import MagicMock

import pytest
import requests

from core.exceptions import TransportError
from infrastructure.clients.api.base_client import BaseAPIClient, safe_json, status_ok
from tests.helpers import FakeResponse

URL = "https://api.hubapi.com/crm/v3/objects/contacts"


def _client(side_effect):
    session = MagicMock()
    session.headers = {}
    session.request.side_effect = side_effect
    return BaseAPIClient(session=session, name="Test"), session


def test_single_transport_failure_is_retried_once():
    ok = FakeResponse(200, {"results": []})
    client, session = _client([requests.exceptions.ConnectionError("reset"), ok])

    assert client.request("GET", URL) is ok
    assert session.request.call_count == 2


def test_timeout_counts_as_transport_failure():
    ok = FakeResponse(200, {})
    client, session = _client([requests.exceptions.Timeout("slow"), ok])

    assert client.request("GET", URL) is ok
    assert session.request.call_count == 2


def test_second_failure_raises_transport_error():
    client, session = _client(requests.exceptions.ConnectionError("down"))

    with pytest.raises(TransportError) as info:
        client.request("post", URL, json={"properties": {}})

    assert session.request.call_count == 2
    assert info.value.method == "POST"
    assert info.value.url == URL


@pytest.mark.parametrize("status", [400, 409, 500, 503])
def test_http_error_status_is_returned_not_retried(status):
    failing = FakeResponse(status, {"status": "error"})
    client, session = _client([failing])

    assert client.request("GET", URL) is failing
    assert session.request.call_count == 1


def test_request_forwards_only_given_arguments():
    client, session = _client([FakeResponse(200, {})])
    client.request("GET", URL, params={"limit": 1})

    args, kwargs = session.request.call_args
    assert args == ("GET", URL)
    assert kwargs == {"timeout": BaseAPIClient.DEFAULT_TIMEOUT, "params": {"limit": 1}}


def test_status_ok_and_safe_json():
    assert status_ok(FakeResponse(204)) is True
    assert status_ok(FakeResponse(302)) is False
    assert safe_json(FakeResponse(200, None)) == {}
    assert safe_json(FakeResponse(200, ["not", "a", "dict"])) == {}


def test_malformed_url_is_not_reported_as_transport_failure():
    client, session = _client(requests.exceptions.MissingSchema("no scheme"))

    with pytest.raises(requests.exceptions.MissingSchema):
        client.request("GET", "api.hubapi.com/crm/v3/objects/contacts")
    assert session.request.call_count == 1
