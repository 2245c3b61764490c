from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo


@dataclass(frozen=True)
class TimeWindow:
    """One local calendar day as a half-open UTC interval [start, end)."""

    report_date: date
    start: datetime
    end: datetime

    def contains(self, ts: Optional[datetime]) -> bool:
        if ts is None:
            return False
        # BSON datetimes come back naive; treat as UTC
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        return self.start <= ts < self.end

    def mongo_range(self) -> dict:
        # pymongo stores naive datetimes as UTC
        return {
            "$gte": self.start.replace(tzinfo=None),
            "$lt": self.end.replace(tzinfo=None),
        }

    @property
    def naive_start(self) -> datetime:
        return self.start.replace(tzinfo=None)


def _local_midnight_utc(day: date, tz: ZoneInfo) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz).astimezone(timezone.utc)


def resolve_window(
    days_ago: int, tz: ZoneInfo, now: Optional[datetime] = None
) -> TimeWindow:
    if days_ago < 0:
        raise ValueError("days_ago must be >= 0")

    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    target = now.astimezone(tz).date() - timedelta(days=days_ago)
    return TimeWindow(
        report_date=target,
        start=_local_midnight_utc(target, tz),
        end=_local_midnight_utc(target + timedelta(days=1), tz),
    )
