from dataclasses import dataclass, replace
from datetime import date

from agenda.services.calendar_service import month_start, shift_months, shift_weeks, week_start


@dataclass(frozen=True)
class NavigationState:
    """Which week the agenda shows and which month the report shows."""

    week: date
    report_month: date

    @classmethod
    def today(cls, today: date | None = None) -> "NavigationState":
        today = today or date.today()
        return cls(week=week_start(today), report_month=month_start(today))

    def __post_init__(self) -> None:
        object.__setattr__(self, "week", week_start(self.week))
        object.__setattr__(self, "report_month", month_start(self.report_month))

    def previous_week(self) -> "NavigationState":
        return replace(self, week=shift_weeks(self.week, -1))

    def next_week(self) -> "NavigationState":
        return replace(self, week=shift_weeks(self.week, 1))

    def current_week(self, today: date | None = None) -> "NavigationState":
        return replace(self, week=today or date.today())

    def is_current_week(self, today: date | None = None) -> bool:
        return self.week == week_start(today or date.today())

    def previous_month(self) -> "NavigationState":
        return replace(self, report_month=shift_months(self.report_month, -1))

    def next_month(self) -> "NavigationState":
        return replace(self, report_month=shift_months(self.report_month, 1))

    def current_month(self, today: date | None = None) -> "NavigationState":
        return replace(self, report_month=today or date.today())

    def is_current_month(self, today: date | None = None) -> bool:
        return self.report_month == month_start(today or date.today())
