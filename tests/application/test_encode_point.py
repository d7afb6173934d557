from __future__ import annotations

from datetime import datetime, timezone

import pytest

from lib_log_influx.application.use_cases.encode_point import PointEncoder, render_message
from lib_log_influx.domain.levels import LogLevel
from lib_log_influx.domain.points import FIELD_KEYS, TAG_KEYS

TS = datetime(2025, 9, 23, 12, 30, 15, tzinfo=timezone.utc)


@pytest.fixture
def encoder() -> PointEncoder:
    return PointEncoder(app_name="billing", host="web-7", proc_id="4242")


def test_message_concatenates_arguments_without_separators() -> None:
    assert render_message(["user ", "alice", " retried ", 3, " times"]) == "user alice retried 3 times"
    assert render_message([1, 2, None]) == "12None"


@pytest.mark.parametrize("level", list(LogLevel))
def test_encoded_point_carries_level_tables(encoder: PointEncoder, level: LogLevel) -> None:
    point = encoder.encode(level, ["hello"], None, TS)

    assert point.tags["severity"] == level.keyword
    assert point.fields["severity_code"] == level.code


def test_point_wire_shape(encoder: PointEncoder) -> None:
    point = encoder.encode(LogLevel.INFO, ["payment ", "accepted"], {"order": 17, "user": "alice"}, TS)

    assert point.measurement == "syslog"
    assert tuple(sorted(point.tags)) == tuple(sorted(TAG_KEYS))
    assert dict(point.tags) == {
        "appname": "billing",
        "host": "web-7",
        "hostname": "web-7",
        "facility": "user",
        "severity": "info",
    }
    assert set(point.fields) == set(FIELD_KEYS) | {"fields.order", "fields.user"}
    assert point.fields["facility_code"] == 1
    assert point.fields["procid"] == "4242"
    assert point.fields["version"] == 1
    assert point.fields["timestamp"] == "2025-09-23T12:30:15Z"
    assert point.fields["message"] == "payment accepted"
    assert point.fields["fields.order"] == 17
    assert point.timestamp == TS


def test_one_prefixed_field_per_structured_key(encoder: PointEncoder) -> None:
    fields = {"a": 1, "b": "two", "message": "shadow", "severity_code": 99}
    point = encoder.encode(LogLevel.ERROR, ["real"], fields, TS)

    assert point.structured_fields() == fields
    assert point.fields["message"] == "real"
    assert point.fields["severity_code"] == 3


def test_unknown_level_falls_back_to_undefined_lookup(encoder: PointEncoder) -> None:
    point = encoder.encode("verbose", ["x"], None, TS)  # type: ignore[arg-type]

    assert dict(point.tags) == {}
    assert point.fields["severity_code"] is None


def test_custom_measurement() -> None:
    encoder = PointEncoder(app_name="a", host="h", proc_id="1", measurement="app_logs")
    assert encoder.encode(LogLevel.INFO, [], None, TS).measurement == "app_logs"
