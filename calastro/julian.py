"""Julian date conversion for the Julian-Gregorian calendar.

Dates on or after 1582 October 15 use the Gregorian calendar, earlier dates
use the proleptic Julian calendar. Years follow astronomical numbering, so
year 0 is 1 BC and year -4712 is 4713 BC.
"""

from __future__ import annotations

import math
from typing import NamedTuple, Tuple

import erfa

__all__ = [
    "CalendarError",
    "CalendarFields",
    "julian_date",
    "fields_to_julian",
    "calendar_date",
    "modified_julian_date",
    "julian_from_modified",
    "is_gregorian",
    "is_leap_year",
    "days_in_month",
    "days_in_year",
    "day_of_week",
    "day_of_year",
    "doy_to_ymd",
    "day_start",
    "millisecond_of_day",
    "decimal_day",
    "decimal_hour",
]

MIN_YEAR = -4712
GREGORIAN_START: Tuple[int, int, int] = (1582, 10, 15)
FIRST_GREGORIAN_DAY = 2299161  # Julian day number of 1582-10-15.
MS_PER_DAY = 86_400_000
MS_PER_HOUR = 3_600_000

_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


class CalendarError(ValueError):
    """Raised when a calendar computation receives an unsupported argument."""


class CalendarFields(NamedTuple):
    """Broken-down calendar date and time of day."""

    year: int
    month: int = 1
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0


def is_gregorian(year: int, month: int, day: int) -> bool:
    """Return ``True`` if the date falls on or after the Gregorian reform."""

    return (year, month, day) >= GREGORIAN_START


def millisecond_of_day(hour: int, minute: int, second: int, millisecond: int) -> int:
    return millisecond + 1000 * second + 60_000 * minute + MS_PER_HOUR * hour


def decimal_day(hour: int = 0, minute: int = 0, second: int = 0, millisecond: int = 0) -> float:
    """Return the fraction of a day elapsed since midnight."""

    return millisecond_of_day(hour, minute, second, millisecond) / MS_PER_DAY


def decimal_hour(hour: int = 0, minute: int = 0, second: int = 0, millisecond: int = 0) -> float:
    """Return the hours elapsed since midnight."""

    return millisecond_of_day(hour, minute, second, millisecond) / MS_PER_HOUR


def julian_date(
    year: int,
    month: int = 1,
    day: int = 1,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    millisecond: int = 0,
) -> float:
    """Convert a calendar date and time of day into a Julian date.

    Parameters
    ----------
    year, month, day:
        Calendar date. The Julian calendar is used through 1582-10-04 and
        the Gregorian calendar from 1582-10-15 on.
    hour, minute, second, millisecond:
        Time of day.

    Returns
    -------
    float
        Days elapsed since noon of 4713 BC January 1.

    Notes
    -----
    The arguments are not validated; out-of-range values simply extend the
    day count (see :func:`calastro.validate.validate`).
    """

    y, m = (year - 1, month + 12) if month <= 2 else (year, month)
    correction = 0
    if is_gregorian(year, month, day):
        century = math.floor(y / 100)
        correction = 2 - century + math.floor(century / 4)
    day_number = (
        math.floor(365.25 * (y + 4716))
        + math.floor(30.6001 * (m + 1))
        + day
        + correction
        - 1524.5
    )
    return day_number + decimal_day(hour, minute, second, millisecond)


def fields_to_julian(fields: CalendarFields) -> float:
    return julian_date(*fields)


def calendar_date(jd: float) -> CalendarFields:
    """Convert a Julian date back into calendar fields.

    The time of day is rounded to the nearest millisecond; a rounding that
    reaches midnight carries into the following day.
    """

    day_number = math.floor(jd + 0.5)
    ms = round((jd + 0.5 - day_number) * MS_PER_DAY)
    if ms >= MS_PER_DAY:
        day_number += 1
        ms -= MS_PER_DAY

    if day_number >= FIRST_GREGORIAN_DAY:
        alpha = math.floor((day_number - 1867216.25) / 36524.25)
        a = day_number + 1 + alpha - math.floor(alpha / 4)
    else:
        a = day_number
    b = a + 1524
    c = math.floor((b - 122.1) / 365.25)
    d = math.floor(365.25 * c)
    e = math.floor((b - d) / 30.6001)

    day = b - d - math.floor(30.6001 * e)
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715

    hour, ms = divmod(ms, MS_PER_HOUR)
    minute, ms = divmod(ms, 60_000)
    second, millisecond = divmod(ms, 1000)
    return CalendarFields(year, month, day, hour, minute, second, millisecond)


def modified_julian_date(jd: float) -> float:
    """Return the Modified Julian date (epoch 1858 November 17, 00:00)."""

    return jd - erfa.DJM0


def julian_from_modified(mjd: float) -> float:
    return mjd + erfa.DJM0


def is_leap_year(year: int) -> bool:
    """Leap-year test using the Julian rule through 1582 and the Gregorian rule after."""

    if year <= 1582:
        return year % 4 == 0
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in *month*, or 0 if the month is out of range.

    October 1582 has 21 days because of the reform.
    """

    if not 1 <= month <= 12:
        return 0
    if (year, month) == GREGORIAN_START[:2]:
        return 21
    if month == 2 and is_leap_year(year):
        return 29
    return _MONTH_DAYS[month - 1]


def days_in_year(year: int) -> int:
    if year == 1582:
        return 355
    return 366 if is_leap_year(year) else 365


def day_of_week(jd: float) -> int:
    """Return the day of the week for *jd*, 0 for Sunday through 6 for Saturday."""

    return int(math.floor(jd + 1.5) % 7)


def day_start(jd: float) -> float:
    """Return the Julian date of the midnight that begins the day holding *jd*."""

    return math.floor(jd + 0.5) - 0.5


def day_of_year(year: int, month: int, day: int) -> int:
    """Return the ordinal day within the year, 1 for January 1.

    Days dropped by the 1582 reform are not counted, so 1582-10-15 is day 278.
    """

    return int(round(julian_date(year, month, day) - julian_date(year, 1, 1))) + 1


def doy_to_ymd(year: int, doy: int) -> Tuple[int, int, int]:
    """Inverse of :func:`day_of_year`."""

    if not 1 <= doy <= days_in_year(year):
        raise CalendarError(f"Day of year {doy} is out of range for {year}")
    fields = calendar_date(julian_date(year, 1, 1) + doy - 1)
    return fields.year, fields.month, fields.day
