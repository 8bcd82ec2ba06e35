from __future__ import annotations
import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Tuple

from .periods import DateLike, start_of_week, week_range, to_local


def _as_date(d: DateLike) -> date:
    if isinstance(d, datetime):
        return to_local(d).date()
    return d


@dataclass
class WeekCursor:
    """
    Which week the grid shows and which month the mini-calendar shows.

    The two are allowed to diverge: browsing months only moves calendar_date,
    and the grid follows only when a day is selected.
    """
    week_start: datetime  # Monday 00:00 local
    calendar_date: date

    @classmethod
    def from_reference(cls, ref: DateLike) -> "WeekCursor":
        ws = start_of_week(ref)
        return cls(week_start=ws, calendar_date=ws.date())

    def go_to_today(self, now: datetime) -> None:
        self.week_start = start_of_week(now)
        self.calendar_date = _as_date(now)

    def select_date(self, d: DateLike) -> None:
        self.week_start = start_of_week(d)

    def shift_month(self, delta: int) -> None:
        # pinned to the 1st so Jan 31 + 1 month is February, not March
        months = self.calendar_date.year * 12 + (self.calendar_date.month - 1) + delta
        year, month0 = divmod(months, 12)
        self.calendar_date = date(year, month0 + 1, 1)

    def week_range(self) -> Tuple[datetime, datetime]:
        return week_range(self.week_start)

    def month_context(self) -> Tuple[int, int]:
        return self.calendar_date.year, self.calendar_date.month

    def week_days(self) -> List[date]:
        first = self.week_start.date()
        return [first + timedelta(days=i) for i in range(7)]

    def is_active_week(self, d: DateLike) -> bool:
        return start_of_week(d).date() == self.week_start.date()


def month_grid(year: int, month: int) -> Tuple[int, List[date]]:
    """
    Mini-calendar layout: (leading blank cells, days of the month).

    Columns run Sunday first, so a month starting on Sunday has no blanks.
    """
    first = date(year, month, 1)
    blanks = (first.weekday() + 1) % 7
    days_in_month = calendar.monthrange(year, month)[1]
    return blanks, [date(year, month, d) for d in range(1, days_in_month + 1)]
