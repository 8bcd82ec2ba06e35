from datetime import datetime
from typing import List

import pytest
from PySide6.QtCore import QCoreApplication

from weekplanner.models import Notification, Task
from weekplanner.scheduler import Scheduler

from .conftest import dt_local


class FakeNotifier:
    """Records reminders instead of showing them."""

    def __init__(self, granted: bool = True) -> None:
        self.granted = granted
        self.shown: List[Notification] = []

    def permission_granted(self) -> bool:
        return self.granted

    def remind(self, n: Notification) -> None:
        self.shown.append(n)


@pytest.fixture(scope="session")
def qapp():
    return QCoreApplication.instance() or QCoreApplication([])


@pytest.fixture()
def task(repo):
    t = Task(id=1, title="Standup", date="2026-01-26", start_time="10:00", end_time="10:15")
    repo.upsert_task(t)
    return t


def test_tick_notifies_once_and_persists_ledger(qapp, repo, task):
    notifier = FakeNotifier()
    sched = Scheduler(repo, notifier)
    emitted = []
    sched.reminder_due.connect(lambda n: emitted.append(n))

    sched.tick(dt_local(2026, 1, 26, 9, 50))
    assert [n.task_id for n in notifier.shown] == [task.id]
    assert [n.task_id for n in emitted] == [task.id]
    assert repo.load_notified() == frozenset({task.id})

    sched.tick(dt_local(2026, 1, 26, 9, 55))
    assert len(notifier.shown) == 1


def test_ledger_survives_new_scheduler(qapp, repo, task):
    Scheduler(repo, FakeNotifier()).tick(dt_local(2026, 1, 26, 9, 50))

    notifier = FakeNotifier()
    Scheduler(repo, notifier).tick(dt_local(2026, 1, 26, 9, 52))
    assert notifier.shown == []


def test_no_permission_disables_tick(qapp, repo, task):
    notifier = FakeNotifier(granted=False)
    Scheduler(repo, notifier).tick(dt_local(2026, 1, 26, 9, 50))
    assert notifier.shown == []
    assert repo.load_notified() == frozenset()


def test_noop_tick_does_not_write_ledger(qapp, repo, task):
    Scheduler(repo, FakeNotifier()).tick(dt_local(2026, 1, 26, 8, 0))
    assert repo._get_value("notifiedEvents") is None


def test_completed_task_is_not_reminded(qapp, repo, task):
    repo.set_completed(task.id, True)
    notifier = FakeNotifier()
    Scheduler(repo, notifier).tick(dt_local(2026, 1, 26, 9, 50))
    assert notifier.shown == []


def test_timer_interval_follows_settings(qapp, repo):
    sched = Scheduler(repo, FakeNotifier())
    assert sched.timer.interval() == 60_000


def test_tick_accepts_naive_local_time(qapp, repo, task):
    notifier = FakeNotifier()
    Scheduler(repo, notifier).tick(datetime(2026, 1, 26, 9, 50))
    assert [n.task_id for n in notifier.shown] == [task.id]
