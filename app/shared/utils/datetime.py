"""UTC clock helpers. Stored timestamps (created_at, deleted_at) are always aware UTC."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Default clock of the task lifecycle; stamps deleted_at on trash."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Normalize a column value read back from the database.

    Naive values are taken to be UTC (some drivers drop the offset); aware
    values are converted. None passes through for nullable columns.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
