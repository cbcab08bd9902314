import pytest

from core.exceptions import ConfigurationError
from core.schemas.config_schema import SyncConfig, split_csv


def test_split_csv_trims_and_drops_blanks():
    assert split_csv(" a, b ,,c ") == ["a", "b", "c"]
    assert split_csv(None) == []


def test_missing_credentials_is_fatal():
    with pytest.raises(ConfigurationError) as info:
        SyncConfig.load({"triggeringEvents": "signup"})
    assert info.value.retry is False


def test_blank_credentials_count_as_missing():
    with pytest.raises(ConfigurationError):
        SyncConfig.load({"hubspotApiKey": "  ", "hubspotAccessToken": ""})


def test_defaults_and_normalization():
    config = SyncConfig.load(
        {
            "hubspotAccessToken": "pat",
            "postHogUrl": "https://eu.posthog.com/",
            "companiesGroupType": "",
            "ignoredEmails": "Acme.com, test.io",
        }
    )

    assert config.post_hog_url == "https://eu.posthog.com"
    assert config.companies_group_type is None
    assert config.is_production
    assert config.ignored_domain_set == {"acme.com", "test.io"}
    assert config.triggering_event_set == frozenset()


def test_triggering_events_merge_both_options():
    config = SyncConfig.load({"hubspotApiKey": "k", "triggeringEvents": "a, b", "triggeringEvent": "c"})

    assert config.triggering_event_set == {"a", "b", "c"}


def test_non_production_mode():
    assert not SyncConfig.load({"hubspotApiKey": "k", "syncMode": "development"}).is_production
