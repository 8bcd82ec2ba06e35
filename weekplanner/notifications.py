from __future__ import annotations
from typing import Optional
from PySide6.QtWidgets import QSystemTrayIcon

from .models import Notification
from .repository import Repository


class Notifier:
    def __init__(self, tray: QSystemTrayIcon, repo: Optional[Repository] = None):
        self.tray = tray
        self.repo = repo

    def is_available(self) -> bool:
        return QSystemTrayIcon.isSystemTrayAvailable() and QSystemTrayIcon.supportsMessages()

    def permission_granted(self) -> bool:
        if not self.is_available():
            return False
        if self.repo is None:
            return True
        return self.repo.get_settings().notifications_enabled

    def remind(self, n: Notification) -> None:
        # The icon URL is for web-style payloads; the tray shows its own icon.
        self.tray.showMessage(n.title, n.body, QSystemTrayIcon.MessageIcon.Information, 10_000)
