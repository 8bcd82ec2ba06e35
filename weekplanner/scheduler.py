from __future__ import annotations
import logging
from datetime import datetime
from typing import Optional
from PySide6.QtCore import QObject, QTimer, Signal

from .engine import scan_reminders
from .repository import Repository
from .periods import now_local

logger = logging.getLogger(__name__)


class Scheduler(QObject):
    reminder_due = Signal(object)  # Notification

    def __init__(self, repo: Repository, notifier, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.repo = repo
        self.notifier = notifier
        self.timer = QTimer(self)
        self.timer.setInterval(repo.get_settings().reminder_interval_seconds * 1000)
        self.timer.timeout.connect(self.tick)

    def start(self) -> None:
        # Runs for the lifetime of the app; there is no stop.
        self.timer.start()

    def tick(self, now: Optional[datetime] = None) -> None:
        if not self.notifier.permission_granted():
            logger.debug("Notifications unavailable or not permitted, skipping reminder tick")
            return

        now = now or now_local()
        settings = self.repo.get_settings()
        scan = scan_reminders(
            self.repo.list_tasks(),
            now,
            self.repo.load_notified(),
            lead_minutes=settings.reminder_lead_minutes,
        )

        for n in scan.notifications:
            logger.info("Reminder for task %s: %s", n.task_id, n.title)
            self.notifier.remind(n)
            self.reminder_due.emit(n)

        if scan.changed:
            self.repo.save_notified(scan.ledger)
