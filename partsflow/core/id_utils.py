from datetime import datetime, timezone

import shortuuid


def generate_shortuuid() -> str:
    return shortuuid.uuid()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on round-trip; stored values are always UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
