"""Draw date validation (``dd-mm-yyyy`` or ``dd-mm-yy``)."""

from __future__ import annotations

DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    return year % 400 == 0 or (year % 4 == 0 and year % 100 != 0)


def expand_year(year: int) -> int:
    """Two-digit years: 70..99 -> 19xx, 00..69 -> 20xx."""

    if year < 100:
        return year + 1900 if year >= 70 else year + 2000
    return year


def is_valid_draw_date(text: str) -> bool:
    """Return True when ``text`` is a real calendar date in the draw format."""

    if not isinstance(text, str) or len(text) not in (8, 10):
        return False
    if text[2] != "-" or text[5] != "-":
        return False

    day_raw, month_raw, year_raw = text[:2], text[3:5], text[6:]
    if not (day_raw.isdigit() and month_raw.isdigit() and year_raw.isdigit()):
        return False

    day, month = int(day_raw), int(month_raw)
    year = expand_year(int(year_raw))

    if not 1 <= month <= 12:
        return False

    days = DAYS_IN_MONTH[month - 1]
    if month == 2 and is_leap_year(year):
        days += 1
    return 1 <= day <= days
