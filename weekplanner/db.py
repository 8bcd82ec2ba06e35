from __future__ import annotations
import logging
import sqlite3

logger = logging.getLogger(__name__)

# Bump when the layout of session_state values changes.
SCHEMA_VERSION = 1

# In-memory by default: the database lives exactly as long as the process.
SESSION_DB = ":memory:"


def connect(path: str = SESSION_DB) -> sqlite3.Connection:
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    return conn


def migrate(conn: sqlite3.Connection) -> None:
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS meta (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS settings (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS session_state (
            key TEXT PRIMARY KEY, -- weeklyTasks, currentWeekStart, notifiedEvents
            value TEXT NOT NULL -- JSON or ISO string
        );
        """
    )

    row = conn.execute("SELECT value FROM meta WHERE key='schema_version'").fetchone()
    if row is None:
        conn.execute("INSERT INTO meta(key,value) VALUES('schema_version',?)", (str(SCHEMA_VERSION),))
    elif row["value"] != str(SCHEMA_VERSION):
        # Session state from another layout is not worth converting.
        logger.warning("Schema version %s != %s, clearing session state", row["value"], SCHEMA_VERSION)
        conn.execute("DELETE FROM session_state")
        conn.execute("UPDATE meta SET value=? WHERE key='schema_version'", (str(SCHEMA_VERSION),))

    defaults = {
        "hour_height": "50",
        "min_duration_minutes": "30",
        "reminder_lead_minutes": "15",
        "reminder_interval_seconds": "60",
        "notifications_enabled": "1",
    }
    for key, value in defaults.items():
        conn.execute("INSERT OR IGNORE INTO settings(key,value) VALUES(?,?)", (key, value))

    conn.commit()
