from datetime import datetime, UTC


def _utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(UTC)


def _as_local(value: datetime) -> datetime:
    """Return a timezone-aware datetime in the local time zone.

    Naive datetimes are taken to already be local wall-clock time.
    """
    return value.astimezone()
