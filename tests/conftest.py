from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

import weekplanner.periods as periods
from weekplanner.db import connect, migrate
from weekplanner.repository import Repository


TZ = ZoneInfo("Asia/Kolkata")


def dt_local(y, m, d, hh=0, mm=0, ss=0):
    return datetime(y, m, d, hh, mm, ss, tzinfo=TZ)


@pytest.fixture(autouse=True)
def local_tz(monkeypatch):
    """Pin local wall-clock time so date math does not depend on the machine."""
    monkeypatch.setattr(periods, "local_tz", lambda: TZ)
    return TZ


@pytest.fixture()
def conn():
    c = connect()
    migrate(c)
    yield c
    c.close()


@pytest.fixture()
def repo(conn):
    return Repository(conn)
