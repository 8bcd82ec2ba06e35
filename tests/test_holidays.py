from datetime import date

from weekplanner.holidays import holiday_for

from .conftest import dt_local


def test_lookup_by_string_date_and_datetime():
    assert holiday_for("2026-08-15") == "Independence Day"
    assert holiday_for(date(2026, 1, 26)) == "Republic Day"
    assert holiday_for(dt_local(2026, 12, 25, 18, 0)) == "Christmas"


def test_ordinary_day_has_no_holiday():
    assert holiday_for("2026-08-14") is None
