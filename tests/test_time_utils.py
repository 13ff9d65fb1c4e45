from datetime import date, datetime, timezone

from rims.time_utils import end_of_day_iso, epoch_ms_to_iso, parse_iso, start_of_day_iso, to_iso


def test_to_iso_uses_milliseconds_and_z():
    value = datetime(2024, 1, 2, 3, 4, 5, 678901, tzinfo=timezone.utc)
    assert to_iso(value) == "2024-01-02T03:04:05.678Z"
    assert to_iso(datetime(2024, 1, 2)) == "2024-01-02T00:00:00.000Z"


def test_parse_iso_accepts_z_suffix():
    assert parse_iso("2024-01-02T03:04:05.000Z") == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def test_day_bounds():
    assert start_of_day_iso(date(2024, 3, 1)) == "2024-03-01T00:00:00.000Z"
    assert start_of_day_iso("2024-03-01") == "2024-03-01T00:00:00.000Z"
    assert end_of_day_iso(date(2024, 3, 1)) == "2024-03-01T23:59:59.999Z"
    assert end_of_day_iso("2024-03-01T08:00:00.000Z") == "2024-03-01T23:59:59.999Z"


def test_epoch_ms():
    assert epoch_ms_to_iso(0) == "1970-01-01T00:00:00.000Z"
    assert epoch_ms_to_iso(1700000000123) == "2023-11-14T22:13:20.123Z"
