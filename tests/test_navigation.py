from datetime import date

from agenda.services.navigation import NavigationState

TODAY = date(2024, 6, 5)


def test_starts_on_current_week_and_month():
    nav = NavigationState.today(TODAY)
    assert nav.week == date(2024, 6, 3)
    assert nav.report_month == date(2024, 6, 1)
    assert nav.is_current_week(TODAY)
    assert nav.is_current_month(TODAY)


def test_values_are_normalised():
    nav = NavigationState(week=date(2024, 6, 9), report_month=date(2024, 6, 30))
    assert nav.week == date(2024, 6, 3)
    assert nav.report_month == date(2024, 6, 1)


def test_week_moves():
    nav = NavigationState.today(TODAY).next_week().next_week()
    assert nav.week == date(2024, 6, 17)
    assert not nav.is_current_week(TODAY)
    assert nav.previous_week().week == date(2024, 6, 10)
    assert nav.current_week(TODAY).is_current_week(TODAY)


def test_month_moves_cross_years():
    nav = NavigationState(week=TODAY, report_month=date(2024, 12, 31))
    assert nav.next_month().report_month == date(2025, 1, 1)
    assert nav.previous_month().report_month == date(2024, 11, 1)
    assert nav.current_month(TODAY).is_current_month(TODAY)


def test_moves_return_new_values():
    nav = NavigationState.today(TODAY)
    nav.next_week()
    nav.next_month()
    assert nav.week == date(2024, 6, 3)
    assert nav.report_month == date(2024, 6, 1)
