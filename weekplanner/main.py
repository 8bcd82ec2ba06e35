from __future__ import annotations
import logging
import sys
import signal

from PySide6.QtWidgets import QApplication, QSystemTrayIcon, QMenu
from PySide6.QtGui import QIcon, QAction
from PySide6.QtCore import QTimer

from .db import connect, migrate
from .logging_setup import setup_logging
from .models import Notification
from .notifications import Notifier
from .planner import Planner
from .repository import Repository
from .scheduler import Scheduler

logger = logging.getLogger(__name__)


def calendar_icon() -> QIcon:
    return QIcon.fromTheme("x-office-calendar")


def main() -> int:
    setup_logging()

    app = QApplication(sys.argv)
    app.setWindowIcon(calendar_icon())
    app.setQuitOnLastWindowClosed(False)

    # Qt's event loop eats SIGINT unless we pump it. This makes Ctrl-C behave.
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    _sig_timer = QTimer()
    _sig_timer.start(250)
    _sig_timer.timeout.connect(lambda: None)

    conn = connect()
    migrate(conn)
    repo = Repository(conn)
    planner = Planner(repo)

    tray = QSystemTrayIcon()
    tray.setIcon(calendar_icon())
    _update_tooltip(tray, planner)

    menu = QMenu()

    act_today = QAction("Today")
    act_today.triggered.connect(lambda: _go_to_today(tray, planner))
    menu.addAction(act_today)

    menu.addSeparator()

    def quit_cleanly():
        # Ensure tray icon disappears immediately; avoids some Qt shutdown warnings.
        tray.hide()
        app.quit()

    act_quit = QAction("Quit")
    act_quit.triggered.connect(quit_cleanly)
    menu.addAction(act_quit)

    tray.setContextMenu(menu)

    notifier = Notifier(tray, repo)
    if not notifier.is_available():
        logger.info("System tray notifications unavailable, reminders disabled")

    scheduler = Scheduler(repo, notifier)
    scheduler.reminder_due.connect(lambda n: _on_reminder(n, tray, planner))
    scheduler.start()

    tray.show()
    return app.exec()


def _update_tooltip(tray: QSystemTrayIcon, planner: Planner) -> None:
    tray.setToolTip(f"Weekly Planner: {planner.week_range_label()}")


def _go_to_today(tray: QSystemTrayIcon, planner: Planner) -> None:
    planner.go_to_today()
    _update_tooltip(tray, planner)


def _on_reminder(n: Notification, tray: QSystemTrayIcon, planner: Planner) -> None:
    tray.setToolTip(f"Weekly Planner: {planner.week_range_label()}\nLast reminder: {n.title}")


if __name__ == "__main__":
    sys.exit(main())
