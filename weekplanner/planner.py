from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple

from .cursor import WeekCursor, month_grid
from .holidays import holiday_for
from .layout import compute_layout, type_color
from .models import Layout, Task, TaskType
from .periods import DateLike, format_date, now_local, parse_date
from .repository import Repository

logger = logging.getLogger(__name__)

STATUS_FILTERS = ("all", "completed", "pending")


class ValidationError(ValueError):
    """Form input rejected before anything is saved. The message is user-facing."""


@dataclass(frozen=True)
class TaskForm:
    title: str
    date: str
    start_time: str
    end_time: str
    description: str = ""
    location: str = ""
    task_type: TaskType = TaskType.EVENT
    has_meet: bool = False


@dataclass(frozen=True)
class PlacedTask:
    task: Task
    layout: Layout
    color: Optional[str]


@dataclass(frozen=True)
class DayColumn:
    date: date
    label: str  # e.g. "MON"
    is_today: bool
    holiday: Optional[str]
    events: List[PlacedTask]


@dataclass(frozen=True)
class MiniCalendarDay:
    date: date
    is_today: bool
    holiday: Optional[str]
    in_active_week: bool


@dataclass(frozen=True)
class MonthView:
    year: int
    month: int
    title: str  # e.g. "March 2026"
    leading_blanks: int
    days: List[MiniCalendarDay]


def _filter_status(tasks: List[Task], status: str) -> List[Task]:
    if status == "completed":
        return [t for t in tasks if t.completed]
    if status == "pending":
        return [t for t in tasks if not t.completed]
    return tasks


def validate_form(form: TaskForm) -> None:
    if not form.title.strip():
        raise ValidationError("Please add a title")
    if parse_date(form.date) is None:
        raise ValidationError("Please pick a valid date")
    # both zero-padded HH:MM, so string order is time order
    if form.start_time >= form.end_time:
        raise ValidationError("End time must be after start time")


class Planner:
    """
    Single owner of the week cursor and entry point for the presentation layer.

    Cursor changes are saved to the repository immediately so that a new
    Planner built on the same repository comes back to the same week.
    """

    def __init__(self, repo: Repository, now: Optional[datetime] = None):
        self.repo = repo
        saved = repo.load_week_start()
        self.cursor = WeekCursor.from_reference(saved if saved is not None else (now or now_local()))

    # ---------- Tasks ----------
    def list_tasks_for_date(self, d: DateLike | str, status: str = "all") -> List[Task]:
        key = d if isinstance(d, str) else format_date(d)
        tasks = [t for t in self.repo.list_tasks() if t.date == key]
        return _filter_status(tasks, status)

    def upsert_task(self, task: Task) -> None:
        self.repo.upsert_task(task)

    def delete_task(self, task_id: int) -> None:
        self.repo.delete_task(task_id)

    def toggle_completed(self, task_id: int) -> None:
        self.repo.toggle_completed(task_id)

    def set_completed(self, task_id: int, completed: bool) -> None:
        self.repo.set_completed(task_id, completed)

    def next_task_id(self) -> int:
        candidate = int(time.time() * 1000)
        existing = [t.id for t in self.repo.list_tasks()]
        if existing and candidate <= max(existing):
            candidate = max(existing) + 1
        return candidate

    def save_task(self, form: TaskForm, edit_id: Optional[int] = None) -> Optional[Task]:
        validate_form(form)
        fields = dict(
            title=form.title.strip(),
            date=form.date,
            start_time=form.start_time,
            end_time=form.end_time,
            description=form.description,
            location=form.location,
            task_type=form.task_type,
            has_meet=form.has_meet,
        )

        if edit_id is None:
            task = Task(id=self.next_task_id(), completed=False, **fields)
        else:
            current = self.repo.get_task(edit_id)
            if current is None:
                logger.debug("save_task: task %s no longer exists", edit_id)
                return None
            task = replace(current, **fields)

        self.repo.upsert_task(task)
        logger.info("Saved task %s on %s", task.id, task.date)
        return task

    def new_task_defaults(self, now: Optional[datetime] = None) -> TaskForm:
        """Create-form prefill: today, from the next whole hour for one hour."""
        now = now or now_local()
        start = now.replace(minute=0, second=0, microsecond=0) + timedelta(hours=1)
        end = start + timedelta(hours=1)
        return TaskForm(
            title="",
            date=format_date(now),
            start_time=f"{start.hour:02d}:{start.minute:02d}",
            end_time=f"{end.hour:02d}:{end.minute:02d}",
        )

    # ---------- Layout ----------
    def compute_layout(self, task: Task) -> Layout:
        settings = self.repo.get_settings()
        return compute_layout(task, settings.hour_height, settings.min_duration_minutes)

    # ---------- Cursor ----------
    def current_week_range(self) -> Tuple[datetime, datetime]:
        return self.cursor.week_range()

    def current_month_context(self) -> Tuple[int, int]:
        return self.cursor.month_context()

    def go_to_today(self, now: Optional[datetime] = None) -> None:
        self.cursor.go_to_today(now or now_local())
        self.repo.save_week_start(self.cursor.week_start)

    def select_date(self, d: DateLike | str) -> None:
        if isinstance(d, str):
            d = date.fromisoformat(d)
        self.cursor.select_date(d)
        self.repo.save_week_start(self.cursor.week_start)

    def shift_displayed_month(self, delta: int) -> None:
        self.cursor.shift_month(delta)

    def week_range_label(self) -> str:
        start, end = self.current_week_range()
        return f"{start:%b} {start.day} - {end:%b} {end.day}, {end.year}"

    # ---------- Views ----------
    def week_view(self, status: str = "all", today: Optional[date] = None) -> List[DayColumn]:
        if status not in STATUS_FILTERS:
            raise ValueError(f"unknown status filter: {status}")
        today = today or now_local().date()
        tasks = self.repo.list_tasks()

        columns: List[DayColumn] = []
        for day in self.cursor.week_days():
            key = format_date(day)
            day_tasks = _filter_status([t for t in tasks if t.date == key], status)
            columns.append(
                DayColumn(
                    date=day,
                    label=f"{day:%a}".upper(),
                    is_today=(day == today),
                    holiday=holiday_for(key),
                    events=[PlacedTask(t, self.compute_layout(t), type_color(t)) for t in day_tasks],
                )
            )
        return columns

    def mini_calendar(self, today: Optional[date] = None) -> MonthView:
        today = today or now_local().date()
        year, month = self.current_month_context()
        blanks, days = month_grid(year, month)
        return MonthView(
            year=year,
            month=month,
            title=f"{date(year, month, 1):%B %Y}",
            leading_blanks=blanks,
            days=[
                MiniCalendarDay(
                    date=d,
                    is_today=(d == today),
                    holiday=holiday_for(d),
                    in_active_week=self.cursor.is_active_week(d),
                )
                for d in days
            ],
        )
