from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from lib_log_influx.domain.points import LogPoint, format_rfc3339


def _point(**overrides) -> LogPoint:
    payload = {
        "measurement": "syslog",
        "tags": {"severity": "info"},
        "fields": {"message": "hello", "fields.user": "alice"},
        "timestamp": datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc),
    }
    payload.update(overrides)
    return LogPoint(**payload)


def test_timestamp_is_normalised_to_utc() -> None:
    local = datetime(2025, 9, 23, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    point = _point(timestamp=local)
    assert point.timestamp == datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc)
    assert point.timestamp.tzinfo is timezone.utc


def test_naive_timestamp_is_rejected() -> None:
    with pytest.raises(ValueError, match="timezone-aware"):
        _point(timestamp=datetime(2025, 9, 23, 12, 0))


def test_tags_and_fields_are_read_only_copies() -> None:
    tags = {"severity": "info"}
    point = _point(tags=tags)
    tags["severity"] = "err"

    assert point.tags["severity"] == "info"
    with pytest.raises(TypeError):
        point.fields["message"] = "changed"  # type: ignore[index]


def test_structured_fields_strip_prefix() -> None:
    assert _point().structured_fields() == {"user": "alice"}
    assert _point().message == "hello"


def test_format_rfc3339_drops_fractional_seconds() -> None:
    ts = datetime(2025, 1, 2, 3, 4, 5, 678000, tzinfo=timezone(timedelta(hours=-5)))
    assert format_rfc3339(ts) == "2025-01-02T08:04:05Z"
