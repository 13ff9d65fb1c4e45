from datetime import date, datetime, time, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a trailing Z.

    Stored timestamps all use this shape so that string comparison in SQL
    matches chronological order.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utcnow_iso() -> str:
    return to_iso(utcnow())


def parse_iso(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _as_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_iso(value).date() if "T" in value else date.fromisoformat(value)


def start_of_day_iso(value: date | datetime | str) -> str:
    if isinstance(value, datetime):
        return to_iso(value)
    if isinstance(value, str) and "T" in value:
        return to_iso(parse_iso(value))
    return to_iso(datetime.combine(_as_date(value), time.min, tzinfo=timezone.utc))


def end_of_day_iso(value: date | datetime | str) -> str:
    """Last millisecond of the given day (23:59:59.999 UTC)."""
    return to_iso(datetime.combine(_as_date(value), time(23, 59, 59, 999000), tzinfo=timezone.utc))


def epoch_ms_to_iso(value: float) -> str:
    return to_iso(datetime.fromtimestamp(value / 1000, tz=timezone.utc))
