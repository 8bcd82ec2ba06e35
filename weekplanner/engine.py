from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import AbstractSet, FrozenSet, Iterable, List, Optional

from .models import Notification, Task
from .periods import as_local_instant, parse_date, parse_hhmm, to_local

logger = logging.getLogger(__name__)

REMINDER_LEAD_MINUTES = 15
NOTIFICATION_ICON = "https://cdn-icons-png.flaticon.com/512/2693/2693507.png"


@dataclass(frozen=True)
class ReminderScan:
    notifications: List[Notification]
    ledger: FrozenSet[int]
    changed: bool  # ledger grew; only then does it need saving


def event_start(task: Task) -> Optional[datetime]:
    day = parse_date(task.date)
    start = parse_hhmm(task.start_time)
    if day is None or start is None:
        return None
    return as_local_instant(day, start)


def build_notification(task: Task) -> Notification:
    body = f"Starts at {task.start_time}."
    if task.location:
        body += f" at {task.location}"
    return Notification(
        task_id=task.id,
        title=f"Upcoming Event: {task.title}",
        body=body,
        icon=NOTIFICATION_ICON,
    )


def scan_reminders(
    tasks: Iterable[Task],
    now: datetime,
    ledger: AbstractSet[int],
    lead_minutes: int = REMINDER_LEAD_MINUTES,
) -> ReminderScan:
    """
    Decide which tasks to remind about right now.

    A task is due for a reminder when it has a date and a start time, is not
    completed, has not been reminded about yet, and starts within
    (0, lead_minutes] minutes from now. Pure: no I/O, no clock.
    """
    now = to_local(now)  # naive means local wall-clock time
    notified = set(ledger)
    out: List[Notification] = []

    for t in tasks:
        if not t.date or not t.start_time:
            continue
        if t.completed:
            continue
        if t.id in notified:
            continue

        start = event_start(t)
        if start is None:
            logger.debug("Task %s has an unparsable date/time, not reminding", t.id)
            continue

        diff_minutes = (start - now).total_seconds() / 60
        if 0 < diff_minutes <= lead_minutes:
            out.append(build_notification(t))
            notified.add(t.id)

    return ReminderScan(notifications=out, ledger=frozenset(notified), changed=bool(out))
