"""Mutable date-time aggregate tying the calendar and the event solvers together."""

from __future__ import annotations

import json
import logging
from typing import Optional, Tuple

from . import arithmetic, lunar
from .astro import solve_rise_set
from .config import SolverSettings, TimeSource, system_clock
from .easter import easter_day
from .julian import (
    CalendarError,
    CalendarFields,
    calendar_date,
    day_of_week,
    day_of_year,
    days_in_month,
    days_in_year,
    decimal_day,
    decimal_hour,
    fields_to_julian,
    is_gregorian,
    is_leap_year,
    julian_date,
    millisecond_of_day,
    modified_julian_date,
)
from .models import DateTimeSnapshot, Event, ResultFlag
from .position import GeodeticPosition
from .seasons import solstice_local
from .solar import solar_radiation, sun_position
from .validate import validate

__all__ = ["DateTime"]

LOGGER = logging.getLogger(__name__)

_MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_DAY_ABBREVIATIONS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
_INVALID_DATE_FLAGS = frozenset({ResultFlag.INVALID_YEAR, ResultFlag.INVALID_MONTH, ResultFlag.INVALID_DAY})


class DateTime:
    """A Julian-Gregorian date and time with event solvers.

    The Julian date is the source of truth; calendar fields are derived from
    it on demand. Fields set directly by the caller are kept as given, so an
    invalid date such as 1582-10-10 is reported through :attr:`flag` rather
    than silently normalised.

    Every mutator records the operation in :attr:`event`, the outcome in
    :attr:`flag`, and returns ``flag.usable``. After a rise/set solve that
    does not occur (never rises, always dark, ...) the Julian date and fields
    keep their previous values and must not be relied upon.
    """

    def __init__(
        self,
        year: int,
        month: int = 1,
        day: int = 1,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        millisecond: int = 0,
        *,
        settings: Optional[SolverSettings] = None,
    ) -> None:
        self._settings = settings
        self._jd = 0.0
        self._fields: Optional[CalendarFields] = None
        self._event = Event.USER
        self._flag = ResultFlag.VALID
        self.set(year, month, day, hour, minute, second, millisecond)

    @classmethod
    def from_julian(cls, jd: float, *, settings: Optional[SolverSettings] = None) -> "DateTime":
        instance = cls(*calendar_date(jd), settings=settings)
        instance.set_julian_date(jd)
        return instance

    @classmethod
    def from_system(
        cls,
        time_source: Optional[TimeSource] = None,
        *,
        settings: Optional[SolverSettings] = None,
    ) -> "DateTime":
        """Create a date-time from *time_source* (the UTC system clock by default)."""

        instance = cls(2000, settings=settings)
        instance.set_system(time_source)
        return instance

    # Internal state transitions -------------------------------------------------

    def _move(self, jd: float, event: Event, flag: ResultFlag = ResultFlag.VALID) -> bool:
        self._jd = jd
        self._fields = None
        self._event = event
        check = validate(self.fields)
        self._flag = flag if check is ResultFlag.VALID else check
        return self._flag.usable

    # Setters -------------------------------------------------------------------

    def set(
        self,
        year: int,
        month: int = 1,
        day: int = 1,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        millisecond: int = 0,
    ) -> bool:
        """Set every field; returns ``True`` if the date-time is valid."""

        fields = CalendarFields(year, month, day, hour, minute, second, millisecond)
        self._flag = validate(fields)
        self._fields = fields
        self._jd = fields_to_julian(fields)
        self._event = Event.USER
        if not self._flag.usable:
            LOGGER.debug(json.dumps({"event": "datetime_invalid", "fields": list(fields), "flag": self._flag.value}))
        return self._flag.usable

    def set_date(self, year: int, month: int, day: int) -> bool:
        current = self.fields
        return self.set(year, month, day, current.hour, current.minute, current.second, current.millisecond)

    def set_time(self, hour: int, minute: int = 0, second: int = 0, millisecond: int = 0) -> bool:
        current = self.fields
        return self.set(current.year, current.month, current.day, hour, minute, second, millisecond)

    def replace(self, **changes: int) -> bool:
        """Change the named fields in place, keeping the rest."""

        return self.set(*self.fields._replace(**changes))

    def set_julian_date(self, jd: float) -> bool:
        return self._move(jd, Event.USER)

    def set_system(self, time_source: Optional[TimeSource] = None) -> bool:
        now = (time_source or system_clock)()
        self.set(now.year, now.month, now.day, now.hour, now.minute, now.second, now.microsecond // 1000)
        self._event = Event.SYSTEM
        return self._flag.usable

    # Accessors -------------------------------------------------------------------

    @property
    def julian_date(self) -> float:
        return self._jd

    @property
    def modified_julian_date(self) -> float:
        return modified_julian_date(self._jd)

    @property
    def fields(self) -> CalendarFields:
        if self._fields is None:
            self._fields = calendar_date(self._jd)
        return self._fields

    @property
    def year(self) -> int:
        return self.fields.year

    @property
    def month(self) -> int:
        return self.fields.month

    @property
    def day(self) -> int:
        return self.fields.day

    @property
    def hour(self) -> int:
        return self.fields.hour

    @property
    def minute(self) -> int:
        return self.fields.minute

    @property
    def second(self) -> int:
        return self.fields.second

    @property
    def millisecond(self) -> int:
        return self.fields.millisecond

    @property
    def event(self) -> Event:
        return self._event

    @property
    def flag(self) -> ResultFlag:
        return self._flag

    @property
    def is_usable(self) -> bool:
        return self._flag.usable

    @property
    def day_of_week(self) -> int:
        """0 for Sunday through 6 for Saturday."""

        return day_of_week(self._jd)

    @property
    def day_of_year(self) -> int:
        derived = calendar_date(self._jd)
        return day_of_year(derived.year, derived.month, derived.day)

    @property
    def days_in_month(self) -> int:
        return days_in_month(self.fields.year, self.fields.month)

    @property
    def days_in_year(self) -> int:
        return days_in_year(self.fields.year)

    @property
    def is_leap_year(self) -> bool:
        return is_leap_year(self.fields.year)

    @property
    def is_gregorian(self) -> bool:
        return is_gregorian(self.fields.year, self.fields.month, self.fields.day)

    @property
    def millisecond_of_day(self) -> int:
        return millisecond_of_day(*self.fields[3:])

    @property
    def decimal_day(self) -> float:
        return decimal_day(*self.fields[3:])

    @property
    def decimal_hour(self) -> float:
        return decimal_hour(*self.fields[3:])

    # Arithmetic ------------------------------------------------------------------

    def add_days(self, days: float) -> bool:
        return self._move(arithmetic.add_days(self._jd, days), Event.USER)

    def add_hours(self, hours: float) -> bool:
        return self._move(arithmetic.add_hours(self._jd, hours), Event.USER)

    def add_minutes(self, minutes: float) -> bool:
        return self._move(arithmetic.add_minutes(self._jd, minutes), Event.USER)

    def add_seconds(self, seconds: float) -> bool:
        return self._move(arithmetic.add_seconds(self._jd, seconds), Event.USER)

    def add_milliseconds(self, milliseconds: int) -> bool:
        return self._move(arithmetic.add_milliseconds(self._jd, milliseconds), Event.USER)

    def days_since(self, other: "DateTime") -> float:
        """Days from *other* to this date-time."""

        return arithmetic.days_since(self._jd, other.julian_date)

    def days_until(self, other: "DateTime") -> float:
        """Days from this date-time to *other*."""

        return arithmetic.days_until(self._jd, other.julian_date)

    def hours_since(self, other: "DateTime") -> float:
        return arithmetic.hours_since(self._jd, other.julian_date)

    def hours_until(self, other: "DateTime") -> float:
        return arithmetic.hours_until(self._jd, other.julian_date)

    # Rise, set and twilight ------------------------------------------------------

    def rise_set(self, event: Event, position: GeodeticPosition) -> bool:
        """Move to *event* on the current local day at *position*.

        Raises :class:`~calastro.julian.CalendarError` if *event* is not a
        rise, set or twilight event.
        """

        result = solve_rise_set(event, self._jd, position, self._settings)
        if result.flag is not ResultFlag.OCCURS:
            self._event = event
            self._flag = result.flag
            return False
        return self._move(result.julian_date, event, ResultFlag.OCCURS)

    def sunrise(self, position: GeodeticPosition) -> bool:
        return self.rise_set(Event.SUNRISE, position)

    def sunset(self, position: GeodeticPosition) -> bool:
        return self.rise_set(Event.SUNSET, position)

    def moonrise(self, position: GeodeticPosition) -> bool:
        return self.rise_set(Event.MOONRISE, position)

    def moonset(self, position: GeodeticPosition) -> bool:
        return self.rise_set(Event.MOONSET, position)

    def civil_dawn(self, position: GeodeticPosition) -> bool:
        return self.rise_set(Event.CIVIL_DAWN, position)

    def civil_dusk(self, position: GeodeticPosition) -> bool:
        return self.rise_set(Event.CIVIL_DUSK, position)

    def nautical_dawn(self, position: GeodeticPosition) -> bool:
        return self.rise_set(Event.NAUTICAL_DAWN, position)

    def nautical_dusk(self, position: GeodeticPosition) -> bool:
        return self.rise_set(Event.NAUTICAL_DUSK, position)

    def astronomical_dawn(self, position: GeodeticPosition) -> bool:
        return self.rise_set(Event.ASTRONOMICAL_DAWN, position)

    def astronomical_dusk(self, position: GeodeticPosition) -> bool:
        return self.rise_set(Event.ASTRONOMICAL_DUSK, position)

    # Seasons, lunations and Easter -----------------------------------------------

    def _year_or_current(self, year: Optional[int]) -> int:
        return self.fields.year if year is None else year

    def _season(self, event: Event, year: Optional[int], position: GeodeticPosition) -> bool:
        return self._move(solstice_local(event, self._year_or_current(year), position), event)

    def spring_equinox(self, position: GeodeticPosition, year: Optional[int] = None) -> bool:
        return self._season(Event.SPRING_EQUINOX, year, position)

    def summer_solstice(self, position: GeodeticPosition, year: Optional[int] = None) -> bool:
        return self._season(Event.SUMMER_SOLSTICE, year, position)

    def fall_equinox(self, position: GeodeticPosition, year: Optional[int] = None) -> bool:
        return self._season(Event.FALL_EQUINOX, year, position)

    def winter_solstice(self, position: GeodeticPosition, year: Optional[int] = None) -> bool:
        return self._season(Event.WINTER_SOLSTICE, year, position)

    def new_moon(self, year: int, lunation: int, position: GeodeticPosition) -> bool:
        """Move to new moon *lunation* of *year* (1 is the first of the year).

        Lunation 0 is the last new moon of the previous year; the stored
        date then simply lies in that year.
        """

        return self._move(lunar.new_moon(year, lunation, position), Event.NEW_MOON)

    def new_moon_before(self, year: int, position: GeodeticPosition) -> bool:
        return self._move(lunar.new_moon_before(year, position), Event.NEW_MOON)

    def full_moon(self, year: int, lunation: int, position: GeodeticPosition) -> bool:
        return self._move(lunar.full_moon(year, lunation, position), Event.FULL_MOON)

    def easter(self, year: Optional[int] = None) -> bool:
        """Move to noon of Easter Sunday.

        Years before 1583 leave the date untouched and set
        :attr:`ResultFlag.INVALID_YEAR`.
        """

        year = self._year_or_current(year)
        try:
            month, day = easter_day(year)
        except CalendarError:
            self._event = Event.EASTER
            self._flag = ResultFlag.INVALID_YEAR
            return False
        return self._move(julian_date(year, month, day, 12), Event.EASTER)

    # Sun position --------------------------------------------------------------

    def sun_position(self, position: GeodeticPosition) -> Tuple[float, float]:
        """Sun ``(altitude, azimuth)`` in degrees at this local date-time."""

        return sun_position(self._jd, position)

    def solar_radiation(self, position: GeodeticPosition, **terrain: float) -> float:
        return solar_radiation(self._jd, position, **terrain)

    # Presentation and copying ----------------------------------------------------

    def describe(self) -> str:
        """One-line diagnostic summary of the date-time, event and flag."""

        year, month, day, hour, minute, second, millisecond = self.fields
        month_name = _MONTH_ABBREVIATIONS[month - 1] if month in range(1, 13) else "???"
        if self._flag in _INVALID_DATE_FLAGS:
            # The JD no longer matches the raw fields.
            weekday, day_of_year = "???", "???"
        else:
            weekday, day_of_year = _DAY_ABBREVIATIONS[self.day_of_week], "%03d" % self.day_of_year
        return "%s is %s %s %02d, %04d (%s) at %02d:%02d:%02d.%03d %s [jd %1.9f]" % (
            self._event.value,
            weekday,
            month_name,
            day,
            year,
            day_of_year,
            hour,
            minute,
            second,
            millisecond,
            self._flag.value,
            self._jd,
        )

    def snapshot(self) -> DateTimeSnapshot:
        return DateTimeSnapshot(
            julian_date=self._jd,
            modified_julian_date=self.modified_julian_date,
            **self.fields._asdict(),
            day_of_week=self.day_of_week,
            day_of_year=self.day_of_year,
            event=self._event,
            flag=self._flag,
            usable=self._flag.usable,
        )

    def copy(self) -> "DateTime":
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)
        return clone

    __copy__ = copy

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return (self._jd, self.fields, self._event, self._flag) == (
            other._jd,
            other.fields,
            other._event,
            other._flag,
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return (
            f"DateTime({', '.join(str(value) for value in self.fields)}, "
            f"event={self._event.name}, flag={self._flag.name})"
        )
