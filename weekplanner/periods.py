from __future__ import annotations
from datetime import datetime, timedelta, time, date, tzinfo
from typing import Optional, Tuple, Union

DateLike = Union[date, datetime]


def local_tz() -> tzinfo:
    return datetime.now().astimezone().tzinfo  # type: ignore


def now_local() -> datetime:
    return datetime.now(local_tz())


def to_local(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=local_tz())
    return dt.astimezone(local_tz())


def start_of_week(d: DateLike) -> datetime:
    """Monday 00:00 local of the week containing d. Sunday belongs to the previous Monday."""
    if isinstance(d, datetime):
        dt = to_local(d)
        day = dt.date()
        tz = dt.tzinfo
    else:
        day = d
        tz = local_tz()
    monday = day - timedelta(days=day.weekday())  # Mon=0 ... Sun=6
    return datetime.combine(monday, time(0, 0), tzinfo=tz)


def week_range(week_start: datetime) -> Tuple[datetime, datetime]:
    """(Monday, Sunday) of the week starting at week_start."""
    return week_start, week_start + timedelta(days=6)


def format_date(d: DateLike) -> str:
    if isinstance(d, datetime):
        d = to_local(d)
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def parse_date(s: Optional[str]) -> Optional[date]:
    if not s:
        return None
    try:
        return date.fromisoformat(s)
    except (TypeError, ValueError):
        return None


def parse_hhmm(s: Optional[str]) -> Optional[time]:
    if not s:
        return None
    try:
        hh, mm = s.split(":")
        return time(int(hh), int(mm))
    except (AttributeError, TypeError, ValueError):
        return None


def minutes_since_midnight(s: Optional[str]) -> int:
    # absent or malformed input counts as midnight
    t = parse_hhmm(s)
    if t is None:
        return 0
    return t.hour * 60 + t.minute


def as_local_instant(day: date, t: time) -> datetime:
    return datetime.combine(day, t, tzinfo=local_tz())
