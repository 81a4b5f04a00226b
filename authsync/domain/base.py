from datetime import UTC, datetime


def utcnow() -> datetime:
    """Naive UTC now; stored timestamps are naive UTC so SQLite round-trips compare cleanly."""
    return datetime.now(UTC).replace(tzinfo=None)
