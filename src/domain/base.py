from datetime import UTC, datetime


def utcnow() -> datetime:
    """Naive UTC timestamp, the form the database columns store."""
    return datetime.now(UTC).replace(tzinfo=None)


def as_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to the naive UTC form used for storage."""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)
