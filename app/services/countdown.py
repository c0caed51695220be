from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


@dataclass(frozen=True)
class TimeRemaining:
    days: int
    hours: int
    minutes: int
    seconds: int


ZERO = TimeRemaining(days=0, hours=0, minutes=0, seconds=0)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive datetimes (datetime-local form inputs, SQLite reads) are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def remaining(now: datetime, target: datetime) -> TimeRemaining:
    """Whole days/hours/minutes/seconds left until ``target``; zero once it has passed."""
    total = int((as_utc(target) - as_utc(now)).total_seconds())
    if total <= 0:
        return ZERO
    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    return TimeRemaining(days=days, hours=hours, minutes=minutes, seconds=seconds)
