from datetime import date, datetime, timedelta

WEEKDAY_LABELS = ("Lunedì", "Martedì", "Mercoledì", "Giovedì", "Venerdì", "Sabato", "Domenica")


def parse_date(value: date | datetime | str) -> date:
    """Local calendar date of a date, datetime or YYYY-MM-DD string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def format_date(value: date | datetime) -> str:
    """Zero-padded YYYY-MM-DD from the wall-clock fields (no UTC conversion)."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def week_start(value: date | datetime | str) -> date:
    """Monday of the week containing value. Sunday closes the week, it never opens one."""
    d = parse_date(value)
    return d - timedelta(days=d.weekday())


def week_end(value: date | datetime | str) -> date:
    return week_start(value) + timedelta(days=6)


def week_days(value: date | datetime | str) -> list[date]:
    start = week_start(value)
    return [start + timedelta(days=i) for i in range(7)]


def shift_weeks(value: date | datetime | str, weeks: int) -> date:
    return parse_date(value) + timedelta(weeks=weeks)


def month_start(value: date | datetime | str) -> date:
    return parse_date(value).replace(day=1)


def shift_months(value: date | datetime | str, months: int) -> date:
    """First day of the month `months` away from value's month."""
    d = parse_date(value)
    index = d.year * 12 + (d.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def time_to_minutes(value: str) -> int:
    """HH:MM -> minutes since midnight."""
    hours, minutes = value.split(":")
    h, m = int(hours), int(minutes)
    if not (0 <= h < 24 and 0 <= m < 60) and (h, m) != (24, 0):
        raise ValueError(f"Invalid time of day: {value!r}")
    return h * 60 + m


def minutes_to_time(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def duration_hours(start_time: str, end_time: str) -> float:
    """Length of [start_time, end_time) in fractional hours."""
    return (time_to_minutes(end_time) - time_to_minutes(start_time)) / 60
