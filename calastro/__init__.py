"""Julian-Gregorian calendar engine with sun, moon, season and Easter solvers."""

from .astro import RiseSetResult, compute_sun_times, solve_rise_set
from .calendar_time import DateTime
from .config import SettingsError, SolverSettings, get_settings, load_settings
from .easter import easter_day
from .julian import CalendarError, CalendarFields, calendar_date, julian_date
from .lunar import full_moon, new_moon, new_moon_before
from .models import DateTimeSnapshot, Event, PositionParams, ResultFlag
from .position import GeodeticPosition, degrees_to_dms, dms_to_degrees
from .seasons import Season, solstice_gmt, solstice_local
from .solar import solar_angle, solar_radiation, sun_position
from .validate import validate, validate_date, validate_time

__all__ = [
    "CalendarError",
    "CalendarFields",
    "DateTime",
    "DateTimeSnapshot",
    "Event",
    "GeodeticPosition",
    "PositionParams",
    "ResultFlag",
    "RiseSetResult",
    "Season",
    "SettingsError",
    "SolverSettings",
    "calendar_date",
    "compute_sun_times",
    "degrees_to_dms",
    "dms_to_degrees",
    "easter_day",
    "full_moon",
    "get_settings",
    "julian_date",
    "load_settings",
    "new_moon",
    "new_moon_before",
    "solar_angle",
    "solar_radiation",
    "solstice_gmt",
    "solstice_local",
    "solve_rise_set",
    "sun_position",
    "validate",
    "validate_date",
    "validate_time",
]

__version__ = "1.0.0"
