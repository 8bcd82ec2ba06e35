from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TaskType(str, Enum):
    EVENT = "event"
    TASK = "task"
    APPOINTMENT = "appointment"


@dataclass(frozen=True)
class Task:
    id: int
    title: str
    date: str  # YYYY-MM-DD in local time
    start_time: Optional[str] = None  # HH:MM
    end_time: Optional[str] = None  # HH:MM
    description: str = ""
    location: str = ""
    task_type: TaskType = TaskType.EVENT
    completed: bool = False
    has_meet: bool = False

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "description": self.description,
            "location": self.location,
            "type": self.task_type.value,
            "completed": self.completed,
            "hasMeet": self.has_meet,
        }

    @classmethod
    def from_record(cls, r: dict) -> "Task":
        """Build a task from a stored record. Raises KeyError/ValueError/TypeError if unusable."""
        try:
            ttype = TaskType(r.get("type") or TaskType.EVENT.value)
        except ValueError:
            ttype = TaskType.EVENT
        date = r["date"]
        if not isinstance(date, str) or not date:
            raise ValueError("task record without date")
        return cls(
            id=int(r["id"]),
            title=str(r.get("title") or ""),
            date=date,
            start_time=r.get("startTime") or None,
            end_time=r.get("endTime") or None,
            description=r.get("description") or "",
            location=r.get("location") or "",
            task_type=ttype,
            completed=r.get("completed") is True,
            has_meet=r.get("hasMeet") is True,
        )


@dataclass(frozen=True)
class Layout:
    top: float
    height: float


@dataclass(frozen=True)
class Notification:
    task_id: int
    title: str
    body: str
    icon: str


@dataclass(frozen=True)
class AppSettings:
    hour_height: int  # grid units per hour, must match the row renderer
    min_duration_minutes: int  # visual floor for event height
    reminder_lead_minutes: int  # notify when start is this close
    reminder_interval_seconds: int
    notifications_enabled: bool
