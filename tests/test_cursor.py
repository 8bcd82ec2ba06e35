from datetime import date

from weekplanner.cursor import WeekCursor, month_grid

from .conftest import dt_local


def test_from_reference_syncs_month_to_week():
    c = WeekCursor.from_reference(dt_local(2026, 3, 1, 10, 0))  # Sunday
    assert c.week_start == dt_local(2026, 2, 23)
    assert c.month_context() == (2026, 2)


def test_select_date_moves_week_only():
    c = WeekCursor.from_reference(date(2026, 1, 14))
    c.shift_month(+2)
    c.select_date(date(2026, 3, 10))

    assert c.week_start == dt_local(2026, 3, 9)
    assert c.month_context() == (2026, 3)

    c.shift_month(+1)
    c.select_date(date(2026, 1, 1))
    assert c.week_start == dt_local(2025, 12, 29)
    assert c.month_context() == (2026, 4)


def test_shift_month_never_touches_week():
    c = WeekCursor.from_reference(date(2026, 1, 31))
    before = c.week_start
    c.shift_month(+1)
    assert c.month_context() == (2026, 2)
    c.shift_month(-3)
    assert c.month_context() == (2025, 11)
    assert c.week_start == before


def test_shift_month_crosses_year_forward():
    c = WeekCursor(week_start=dt_local(2026, 12, 7), calendar_date=date(2026, 12, 31))
    c.shift_month(+1)
    assert c.month_context() == (2027, 1)


def test_go_to_today_resets_both():
    c = WeekCursor.from_reference(date(2026, 1, 5))
    c.shift_month(+5)
    c.go_to_today(dt_local(2026, 10, 19, 14, 0))
    assert c.week_start == dt_local(2026, 10, 19)
    assert c.calendar_date == date(2026, 10, 19)


def test_week_days_and_membership():
    c = WeekCursor.from_reference(date(2026, 8, 12))
    days = c.week_days()
    assert days[0] == date(2026, 8, 10)
    assert days[-1] == date(2026, 8, 16)
    assert c.is_active_week(date(2026, 8, 16))
    assert not c.is_active_week(date(2026, 8, 17))
    assert c.week_range() == (dt_local(2026, 8, 10), dt_local(2026, 8, 16))


def test_month_grid_sunday_first_blanks():
    blanks, days = month_grid(2026, 3)  # March 1 2026 is a Sunday
    assert blanks == 0
    assert len(days) == 31

    blanks, days = month_grid(2026, 2)  # Feb 1 2026 is a Sunday too
    assert blanks == 0
    assert len(days) == 28

    blanks, _ = month_grid(2026, 1)  # Thursday
    assert blanks == 4

    blanks, _ = month_grid(2026, 8)  # Saturday
    assert blanks == 6
