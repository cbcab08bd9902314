from datetime import datetime, timezone

from core.services.property_mapper import (
    map_properties,
    parse_additional_mappings,
    to_utc_midnight_ms,
)

JAN_15_MIDNIGHT_MS = int(datetime(2024, 1, 15, tzinfo=timezone.utc).timestamp()) * 1000


def test_static_dictionary():
    assert map_properties({"company_name": "Acme"}) == {"company": "Acme"}


def test_unknown_keys_are_dropped():
    assert map_properties({"plan": "pro", "firstName": "Jane"}) == {"firstname": "Jane"}


def test_send_time_mapping_truncates_to_utc_midnight():
    mapped = map_properties({}, "sent_at:my_date", "2024-01-15T10:30:00Z")
    assert mapped == {"my_date": JAN_15_MIDNIGHT_MS}
    assert mapped["my_date"] == 1705276800000


def test_created_at_is_also_a_send_time_sentinel():
    mapped = map_properties({"created_at": "ignored"}, "created_at:first_seen", "2024-01-15T23:59:59+00:00")
    assert mapped == {"first_seen": JAN_15_MIDNIGHT_MS}


def test_offset_timestamps_are_converted_to_utc_first():
    # 2024-01-15T22:00-05:00 is already Jan 16 in UTC
    assert to_utc_midnight_ms("2024-01-15T22:00:00-05:00") == JAN_15_MIDNIGHT_MS + 86_400_000


def test_dynamic_mapping_copies_literal_values():
    mapped = map_properties({"plan": "pro"}, "plan:hs_plan,missing:hs_missing")
    assert mapped == {"hs_plan": "pro"}


def test_dynamic_mapping_overwrites_static_result():
    mapped = map_properties({"company_name": "Acme", "org": "Other"}, "org:company")
    assert mapped == {"company": "Other"}


def test_malformed_pairs_are_ignored():
    assert parse_additional_mappings("foo:, :bar,baz,a:b") == [("a", "b")]
    assert parse_additional_mappings(None) == []


def test_unparseable_send_time_skips_target():
    assert map_properties({}, "sent_at:my_date", "not-a-date") == {}
    assert map_properties({}, "sent_at:my_date", None) == {}
