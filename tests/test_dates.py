from datetime import datetime, timezone

from app.core.dates import format_date, is_same_month, parse_date, time_ago

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


def test_parse_iso_and_rfc1123():
    iso = parse_date("2026-03-05")
    rfc = parse_date("Thu, 05 Mar 2026 00:00:00 GMT")
    assert iso == rfc
    assert iso.tzinfo is not None


def test_parse_invalid_returns_none():
    assert parse_date("no es fecha") is None
    assert parse_date("") is None
    assert format_date("no es fecha") == ""


def test_format_date():
    assert format_date("2026-03-05T10:20:00") == "05/03/2026"


def test_time_ago():
    assert time_ago("2026-03-07T12:00:00Z", NOW) == "Hace 3 días"
    assert time_ago("2026-03-09T11:00:00Z", NOW) == "Hace 1 día"
    assert time_ago("2026-03-10T09:30:00Z", NOW) == "Hace 2 h"
    assert time_ago("2026-03-10T11:55:00Z", NOW) == "Hace 5 min"
    assert time_ago("2026-03-10T12:00:00Z", NOW) == "Hace un momento"


def test_time_ago_without_date_or_in_future():
    assert time_ago(None, NOW) == "Recientemente"
    assert time_ago("2026-04-01", NOW) == "Recientemente"


def test_is_same_month():
    assert is_same_month("2026-03-01", NOW)
    assert not is_same_month("2026-02-28", NOW)
    assert not is_same_month(None, NOW)
