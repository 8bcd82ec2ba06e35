from __future__ import annotations
from typing import List, Optional

from .models import Layout, Task, TaskType
from .periods import minutes_since_midnight

HOUR_HEIGHT = 50  # must match the grid row height, 1:1
MIN_DURATION_MINUTES = 30

TYPE_COLORS = {
    TaskType.EVENT: "#5474b4",
    TaskType.TASK: "#34a853",
    TaskType.APPOINTMENT: "#ea4335",
}


def compute_layout(
    task: Task,
    hour_height: float = HOUR_HEIGHT,
    min_duration: int = MIN_DURATION_MINUTES,
) -> Layout:
    """
    Vertical position and height of a task on a 24h grid.

    Missing times default to 00:00-01:00. Durations shorter than min_duration
    (including negative ones) are drawn at min_duration; the task itself is
    not changed. Overlapping tasks are not offset from each other.
    """
    start = minutes_since_midnight(task.start_time or "00:00")
    end = minutes_since_midnight(task.end_time or "01:00")
    duration = max(end - start, min_duration)
    return Layout(
        top=(start / 60) * hour_height,
        height=(duration / 60) * hour_height,
    )


def type_color(task: Task) -> Optional[str]:
    # completed tasks use the neutral "completed" style
    if task.completed:
        return None
    return TYPE_COLORS.get(task.task_type, TYPE_COLORS[TaskType.EVENT])


def hour_label(hour: int) -> str:
    if hour == 0:
        return "12 AM"
    if hour < 12:
        return f"{hour} AM"
    if hour == 12:
        return "12 PM"
    return f"{hour - 12} PM"


def hour_labels() -> List[str]:
    return [hour_label(h) for h in range(24)]
