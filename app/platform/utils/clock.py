from datetime import datetime, timezone


def utcnow() -> datetime:
    """Naive UTC "now", matching the naive ``DateTime`` columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_timestamp(value: datetime) -> float:
    """POSIX timestamp of a naive UTC datetime (``datetime.timestamp`` would assume local time)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()
