"""Arithmetic on Julian dates and day/hour/minute/second conversions."""

from __future__ import annotations

from typing import Tuple

import erfa

from .julian import MS_PER_DAY

__all__ = [
    "add_days",
    "add_hours",
    "add_minutes",
    "add_seconds",
    "add_milliseconds",
    "days_since",
    "days_until",
    "hours_since",
    "hours_until",
    "decimal_days_to_dhms",
    "decimal_hours_to_dhms",
    "decimal_minutes_to_dhms",
    "decimal_seconds_to_dhms",
    "dhms_to_days",
    "dhms_to_hours",
    "dhms_to_minutes",
    "dhms_to_seconds",
    "dhms_to_milliseconds",
]

HOURS_PER_DAY = 24.0
MINUTES_PER_DAY = 1440.0
SECONDS_PER_DAY = erfa.DAYSEC


def add_days(jd: float, days: float) -> float:
    return jd + days


def add_hours(jd: float, hours: float) -> float:
    return jd + hours / HOURS_PER_DAY


def add_minutes(jd: float, minutes: float) -> float:
    return jd + minutes / MINUTES_PER_DAY


def add_seconds(jd: float, seconds: float) -> float:
    return jd + seconds / SECONDS_PER_DAY


def add_milliseconds(jd: float, milliseconds: int) -> float:
    return jd + int(milliseconds) / MS_PER_DAY


def days_since(jd: float, other: float) -> float:
    """Days from *other* to *jd*; positive when *jd* is later."""

    return jd - other


def days_until(jd: float, other: float) -> float:
    """Days from *jd* to *other*; positive when *other* is later."""

    return other - jd


def hours_since(jd: float, other: float) -> float:
    return HOURS_PER_DAY * days_since(jd, other)


def hours_until(jd: float, other: float) -> float:
    return HOURS_PER_DAY * days_until(jd, other)


def decimal_days_to_dhms(days: float) -> Tuple[int, int, int, int, int]:
    """Split a day count into days, hours, minutes, seconds and milliseconds.

    Negative spans return every component negated.
    """

    sign = -1 if days < 0 else 1
    total = round(abs(days) * MS_PER_DAY)
    whole_days, total = divmod(total, MS_PER_DAY)
    hours, total = divmod(total, 3_600_000)
    minutes, total = divmod(total, 60_000)
    seconds, milliseconds = divmod(total, 1000)
    return tuple(sign * part for part in (whole_days, hours, minutes, seconds, milliseconds))  # type: ignore[return-value]


def decimal_hours_to_dhms(hours: float) -> Tuple[int, int, int, int, int]:
    return decimal_days_to_dhms(hours / HOURS_PER_DAY)


def decimal_minutes_to_dhms(minutes: float) -> Tuple[int, int, int, int, int]:
    return decimal_days_to_dhms(minutes / MINUTES_PER_DAY)


def decimal_seconds_to_dhms(seconds: float) -> Tuple[int, int, int, int, int]:
    return decimal_days_to_dhms(seconds / SECONDS_PER_DAY)


def dhms_to_days(
    days: float = 0,
    hours: float = 0,
    minutes: float = 0,
    seconds: float = 0,
    milliseconds: float = 0,
) -> float:
    return (
        days
        + hours / HOURS_PER_DAY
        + minutes / MINUTES_PER_DAY
        + seconds / SECONDS_PER_DAY
        + milliseconds / MS_PER_DAY
    )


def dhms_to_hours(
    days: float = 0,
    hours: float = 0,
    minutes: float = 0,
    seconds: float = 0,
    milliseconds: float = 0,
) -> float:
    return HOURS_PER_DAY * dhms_to_days(days, hours, minutes, seconds, milliseconds)


def dhms_to_minutes(
    days: float = 0,
    hours: float = 0,
    minutes: float = 0,
    seconds: float = 0,
    milliseconds: float = 0,
) -> float:
    return MINUTES_PER_DAY * dhms_to_days(days, hours, minutes, seconds, milliseconds)


def dhms_to_seconds(
    days: float = 0,
    hours: float = 0,
    minutes: float = 0,
    seconds: float = 0,
    milliseconds: float = 0,
) -> float:
    return SECONDS_PER_DAY * dhms_to_days(days, hours, minutes, seconds, milliseconds)


def dhms_to_milliseconds(
    days: float = 0,
    hours: float = 0,
    minutes: float = 0,
    seconds: float = 0,
    milliseconds: float = 0,
) -> float:
    """Total milliseconds; exact for integral components."""

    return 1000 * (SECONDS_PER_DAY * days + 3600 * hours + 60 * minutes + seconds) + milliseconds
