from __future__ import annotations
import json
import logging
import sqlite3
from dataclasses import replace
from datetime import datetime
from typing import Any, FrozenSet, Iterable, List, Optional

from .models import Task, AppSettings

logger = logging.getLogger(__name__)

TASKS_KEY = "weeklyTasks"
WEEK_START_KEY = "currentWeekStart"
NOTIFIED_KEY = "notifiedEvents"


class Repository:
    """
    Session-scoped state behind a typed interface.

    Every mutation loads the whole task snapshot, changes one entry and saves
    the whole snapshot back. Corrupt stored values are never raised to callers:
    they read as an empty collection or a missing value.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    # ---------- Settings ----------
    def get_settings(self) -> AppSettings:
        return AppSettings(
            hour_height=self._int_setting("hour_height", 50),
            min_duration_minutes=self._int_setting("min_duration_minutes", 30),
            reminder_lead_minutes=self._int_setting("reminder_lead_minutes", 15),
            reminder_interval_seconds=self._int_setting("reminder_interval_seconds", 60),
            notifications_enabled=self._get_setting("notifications_enabled", "1") == "1",
        )

    def set_notifications_enabled(self, enabled: bool) -> None:
        self._set_setting("notifications_enabled", "1" if enabled else "0")

    def set_hour_height(self, units: int) -> None:
        self._set_setting("hour_height", str(units))

    def set_reminder_lead_minutes(self, minutes: int) -> None:
        self._set_setting("reminder_lead_minutes", str(minutes))

    def _int_setting(self, key: str, default: int) -> int:
        raw = self._get_setting(key, str(default))
        try:
            return int(raw)
        except ValueError:
            logger.warning("Ignoring malformed setting %s=%r", key, raw)
            return default

    def _get_setting(self, key: str, default: str) -> str:
        row = self.conn.execute("SELECT value FROM settings WHERE key=?", (key,)).fetchone()
        return row["value"] if row else default

    def _set_setting(self, key: str, value: str) -> None:
        self.conn.execute(
            "INSERT INTO settings(key,value) VALUES(?,?) "
            "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
            (key, value),
        )
        self.conn.commit()

    # ---------- Raw session values ----------
    def _get_value(self, key: str) -> Optional[str]:
        row = self.conn.execute("SELECT value FROM session_state WHERE key=?", (key,)).fetchone()
        return row["value"] if row else None

    def _set_value(self, key: str, value: str) -> None:
        self.conn.execute(
            "INSERT INTO session_state(key,value) VALUES(?,?) "
            "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
            (key, value),
        )
        self.conn.commit()

    def _load_json_list(self, key: str) -> List[Any]:
        raw = self._get_value(key)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Corrupt %s in session state, treating as empty", key)
            return []
        if not isinstance(data, list):
            logger.warning("Expected a list for %s, got %s", key, type(data).__name__)
            return []
        return data

    # ---------- Tasks ----------
    def list_tasks(self) -> List[Task]:
        out: List[Task] = []
        for r in self._load_json_list(TASKS_KEY):
            if not isinstance(r, dict):
                logger.warning("Skipping non-object task record: %r", r)
                continue
            try:
                out.append(Task.from_record(r))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed task record %r: %s", r, e)
        return out

    def save_tasks(self, tasks: Iterable[Task]) -> None:
        self._set_value(TASKS_KEY, json.dumps([t.to_record() for t in tasks]))

    def get_task(self, task_id: int) -> Optional[Task]:
        for t in self.list_tasks():
            if t.id == task_id:
                return t
        return None

    def upsert_task(self, task: Task) -> None:
        tasks = self.list_tasks()
        for i, t in enumerate(tasks):
            if t.id == task.id:
                tasks[i] = task
                break
        else:
            tasks.append(task)
        self.save_tasks(tasks)

    def delete_task(self, task_id: int) -> None:
        tasks = self.list_tasks()
        kept = [t for t in tasks if t.id != task_id]
        if len(kept) == len(tasks):
            logger.debug("delete_task: no task with id %s", task_id)
            return
        self.save_tasks(kept)

    def set_completed(self, task_id: int, completed: bool) -> None:
        self._update_task(task_id, lambda t: replace(t, completed=completed))

    def toggle_completed(self, task_id: int) -> None:
        self._update_task(task_id, lambda t: replace(t, completed=not t.completed))

    def _update_task(self, task_id: int, change) -> None:
        tasks = self.list_tasks()
        for i, t in enumerate(tasks):
            if t.id == task_id:
                tasks[i] = change(t)
                self.save_tasks(tasks)
                return
        logger.debug("No task with id %s, nothing to update", task_id)

    # ---------- Week cursor ----------
    def load_week_start(self) -> Optional[datetime]:
        raw = self._get_value(WEEK_START_KEY)
        if raw is None:
            return None
        try:
            return datetime.fromisoformat(raw)
        except ValueError:
            logger.warning("Corrupt %s in session state: %r", WEEK_START_KEY, raw)
            return None

    def save_week_start(self, week_start: datetime) -> None:
        self._set_value(WEEK_START_KEY, week_start.isoformat())

    # ---------- Notification ledger ----------
    def load_notified(self) -> FrozenSet[int]:
        out = set()
        for x in self._load_json_list(NOTIFIED_KEY):
            try:
                out.add(int(x))
            except (TypeError, ValueError):
                logger.warning("Skipping malformed ledger entry %r", x)
        return frozenset(out)

    def save_notified(self, ledger: Iterable[int]) -> None:
        self._set_value(NOTIFIED_KEY, json.dumps(sorted(ledger)))
