from datetime import UTC, datetime
from typing import Callable

# Timestamps are stored as naive UTC; SQLite drops tzinfo on round-trip.
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)
