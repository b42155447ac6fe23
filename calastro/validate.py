"""Validation of calendar fields against the Julian-Gregorian calendar."""

from __future__ import annotations

from typing import Union

from .julian import MIN_YEAR, CalendarFields, days_in_month
from .models import ResultFlag

__all__ = ["validate_date", "validate_time", "validate"]

Number = Union[int, float]


def _whole(value: Number) -> bool:
    return float(value).is_integer()


def validate_date(year: Number, month: Number, day: Number) -> ResultFlag:
    """Check a calendar date, reporting the first invalid field.

    Fields are checked in the order year, month, day. October 5 through 14
    of 1582 never existed and are reported as :attr:`ResultFlag.INVALID_DAY`.
    """

    if not _whole(year) or year < MIN_YEAR:
        return ResultFlag.INVALID_YEAR
    if not _whole(month) or not 1 <= month <= 12:
        return ResultFlag.INVALID_MONTH
    if not _whole(day) or day < 1:
        return ResultFlag.INVALID_DAY
    year, month, day = int(year), int(month), int(day)
    if (year, month) == (1582, 10):
        if 5 <= day <= 14 or day > 31:
            return ResultFlag.INVALID_DAY
    elif day > days_in_month(year, month):
        return ResultFlag.INVALID_DAY
    return ResultFlag.VALID


def validate_time(hour: Number, minute: Number, second: Number, millisecond: Number) -> ResultFlag:
    """Check a time of day in the order hour, minute, second, millisecond."""

    if not _whole(hour) or not 0 <= hour <= 23:
        return ResultFlag.INVALID_HOUR
    if not _whole(minute) or not 0 <= minute <= 59:
        return ResultFlag.INVALID_MINUTE
    if not _whole(second) or not 0 <= second <= 59:
        return ResultFlag.INVALID_SECOND
    if not _whole(millisecond) or not 0 <= millisecond <= 999:
        return ResultFlag.INVALID_MILLISECOND
    return ResultFlag.VALID


def validate(fields: CalendarFields) -> ResultFlag:
    """Validate all seven fields; the first failure in field order wins."""

    flag = validate_date(fields.year, fields.month, fields.day)
    if flag is not ResultFlag.VALID:
        return flag
    return validate_time(fields.hour, fields.minute, fields.second, fields.millisecond)
