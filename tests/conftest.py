from unittest.mock import MagicMock

import pytest

from core.schemas.config_schema import SyncConfig
from core.services.context import SyncContext
from infrastructure.clients import HubspotAPIClient
from tests.helpers import FakeStore, make_analytics


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def session() -> MagicMock:
    s = MagicMock()
    s.headers = {}
    return s


@pytest.fixture
def ctx_factory(session, store):
    """SyncContext over the fake session/store; options use the camelCase names."""

    def _build(**options) -> SyncContext:
        config = SyncConfig.load({"hubspotAccessToken": "pat-token", **options})
        return SyncContext(
            config=config,
            hubspot=HubspotAPIClient(
                api_key=config.hubspot_api_key,
                access_token=config.hubspot_access_token,
                session=session,
            ),
            analytics=make_analytics(),
            store=store,
        )

    return _build
