"""Italian national holidays: fixed dates plus Easter and Easter Monday."""

from datetime import date, datetime, timedelta

from agenda.services.calendar_service import parse_date

EASTER = "Pasqua"
EASTER_MONDAY = "Lunedì dell'Angelo"

FIXED_HOLIDAYS: dict[tuple[int, int], str] = {
    (1, 1): "Capodanno",
    (1, 6): "Epifania",
    (4, 25): "Festa della Liberazione",
    (5, 1): "Festa del Lavoro",
    (6, 2): "Festa della Repubblica",
    (8, 15): "Ferragosto",
    (11, 1): "Ognissanti",
    (12, 8): "Immacolata Concezione",
    (12, 25): "Natale",
    (12, 26): "Santo Stefano",
}


def easter_sunday(year: int) -> date:
    """Gregorian Easter Sunday (Meeus/Jones/Butcher)."""
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return date(year, month, day + 1)


def holiday_name(value: date | datetime | str) -> str | None:
    d = parse_date(value)
    fixed = FIXED_HOLIDAYS.get((d.month, d.day))
    if fixed:
        return fixed
    easter = easter_sunday(d.year)
    if d == easter:
        return EASTER
    if d == easter + timedelta(days=1):
        return EASTER_MONDAY
    return None
