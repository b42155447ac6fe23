"""Rise, set and twilight times of the sun and moon."""

from __future__ import annotations

import json
import logging
import math
from typing import Dict, NamedTuple, Optional, Tuple

from .config import SolverSettings, get_settings
from .ephemeris import julian_centuries, local_mean_sidereal_time, mini_moon, mini_sun
from .julian import CalendarError, day_start
from .models import Event, ResultFlag
from .position import GeodeticPosition

__all__ = [
    "RiseSetResult",
    "RISE_SET_EVENTS",
    "TWILIGHT_ANGLES",
    "ZENITH_ANGLES",
    "compute_sun_times",
    "solve_rise_set",
]

LOGGER = logging.getLogger(__name__)

# Altitude of the sun's centre, in degrees, at each kind of sunrise/sunset.
TWILIGHT_ANGLES: Dict[str, float] = {
    "official": -50.0 / 60.0,
    "civil": -6.0,
    "nautical": -12.0,
    "astronomical": -18.0,
}

TWILIGHT_EVENTS: Dict[str, Tuple[Event, Event]] = {
    "official": (Event.SUNRISE, Event.SUNSET),
    "civil": (Event.CIVIL_DAWN, Event.CIVIL_DUSK),
    "nautical": (Event.NAUTICAL_DAWN, Event.NAUTICAL_DUSK),
    "astronomical": (Event.ASTRONOMICAL_DAWN, Event.ASTRONOMICAL_DUSK),
}

ZENITH_ANGLES: Dict[Event, float] = {
    event: 90.0 - TWILIGHT_ANGLES[name]
    for name, events in TWILIGHT_EVENTS.items()
    for event in events
}
ZENITH_ANGLES[Event.MOONRISE] = 90.0
ZENITH_ANGLES[Event.MOONSET] = 90.0

RISE_SET_EVENTS = frozenset(ZENITH_ANGLES)

_RISING = frozenset(
    {
        Event.SUNRISE,
        Event.MOONRISE,
        Event.CIVIL_DAWN,
        Event.NAUTICAL_DAWN,
        Event.ASTRONOMICAL_DAWN,
    }
)
_LUNAR = frozenset({Event.MOONRISE, Event.MOONSET})

SIDEREAL_RATE = 1.0027379093  # Sidereal hours per solar hour.
SOLAR_DAY_HOURS = 24.0
LUNAR_DAY_HOURS = 24.8412


class RiseSetResult(NamedTuple):
    """Outcome of a rise/set solve.

    ``hours`` and ``julian_date`` are only set when ``flag`` is
    :attr:`ResultFlag.OCCURS`; both are local time.
    """

    flag: ResultFlag
    hours: Optional[float] = None
    julian_date: Optional[float] = None


def _coordinates(event: Event, jd_ut: float) -> Tuple[float, float]:
    t = julian_centuries(jd_ut)
    return mini_moon(t) if event in _LUNAR else mini_sun(t)


def _cos_hour_angle(zenith: float, latitude: float, declination: float) -> float:
    phi = math.radians(latitude)
    delta = math.radians(declination)
    numerator = math.cos(math.radians(zenith)) - math.sin(phi) * math.sin(delta)
    denominator = math.cos(phi) * math.cos(delta)
    if abs(denominator) < 1e-12:
        # At a pole the body either stays above or below the zenith angle all day.
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def _polar_flag(event: Event, cos_h: float) -> ResultFlag:
    if cos_h < -1.0:
        return ResultFlag.ALWAYS_LIGHT
    if event is Event.MOONRISE:
        return ResultFlag.NEVER_RISES
    if event is Event.MOONSET:
        return ResultFlag.NEVER_SETS
    return ResultFlag.ALWAYS_DARK


def _refine(
    event: Event,
    ut_midnight: float,
    hours: float,
    position: GeodeticPosition,
    settings: SolverSettings,
) -> Tuple[Optional[ResultFlag], float]:
    """Iterate the hour-angle estimate starting from *hours* after local midnight.

    Returns a polar flag if the body never reaches the zenith angle at some
    estimate, otherwise ``None`` and the refined local hour.
    """

    zenith = ZENITH_ANGLES[event]
    for _ in range(settings.max_iterations):
        jd_ut = ut_midnight + hours / 24.0
        right_ascension, declination = _coordinates(event, jd_ut)
        cos_h = _cos_hour_angle(zenith, position.latitude, declination)
        if not -1.0 <= cos_h <= 1.0:
            return _polar_flag(event, cos_h), hours
        hour_angle = math.degrees(math.acos(cos_h)) / 15.0
        if event in _RISING:
            target = right_ascension - hour_angle
        else:
            target = right_ascension + hour_angle
        sidereal = local_mean_sidereal_time(jd_ut, position.longitude)
        step = ((target - sidereal + 12.0) % 24.0 - 12.0) / SIDEREAL_RATE
        hours += step
        if abs(step) < settings.tolerance_hours:
            return None, hours
    LOGGER.warning(
        json.dumps(
            {
                "event": "rise_set_not_converged",
                "kind": event.value,
                "hours": hours,
                "iterations": settings.max_iterations,
            }
        )
    )
    return None, hours


def solve_rise_set(
    event: Event,
    jd: float,
    position: GeodeticPosition,
    settings: Optional[SolverSettings] = None,
) -> RiseSetResult:
    """Find the local time of a rise, set or twilight event.

    Parameters
    ----------
    event:
        One of :data:`RISE_SET_EVENTS`.
    jd:
        Any local Julian date within the day of interest.
    position:
        Observer location and UTC offset.
    settings:
        Iteration limits; defaults to :func:`calastro.config.get_settings`.

    Returns
    -------
    RiseSetResult
        ``OCCURS`` with the local decimal hour and Julian date, or one of
        ``NEVER_RISES``, ``NEVER_SETS``, ``ALWAYS_LIGHT`` and ``ALWAYS_DARK``.

    Raises
    ------
    CalendarError
        If *event* is not a rise, set or twilight event.

    Notes
    -----
    A body that stays above its zenith angle all day is ``ALWAYS_LIGHT``
    for every kind. One that stays below it is ``ALWAYS_DARK`` for the sun
    and twilight kinds, but ``NEVER_RISES`` or ``NEVER_SETS`` for the moon,
    so the flag still names the event that failed. Callers that want the
    moon-below-horizon case as ``ALWAYS_DARK`` should map both moon flags
    to it.
    """

    if event not in RISE_SET_EVENTS:
        raise CalendarError(f"Unsupported rise/set event: {event}")
    settings = settings or get_settings()

    local_midnight = day_start(jd)
    ut_midnight = local_midnight - position.utc_offset / 24.0
    body_day = LUNAR_DAY_HOURS if event in _LUNAR else SOLAR_DAY_HOURS

    flag, hours = _refine(event, ut_midnight, 12.0, position, settings)
    if flag is None and not 0.0 <= hours < 24.0:
        retry = hours + body_day if hours < 0.0 else hours - body_day
        flag, hours = _refine(event, ut_midnight, retry, position, settings)
    if flag is None and not 0.0 <= hours < 24.0:
        flag = ResultFlag.NEVER_RISES if event in _RISING else ResultFlag.NEVER_SETS

    if flag is not None:
        LOGGER.debug(json.dumps({"event": "rise_set_solved", "kind": event.value, "flag": flag.value}))
        return RiseSetResult(flag)

    LOGGER.debug(
        json.dumps(
            {"event": "rise_set_solved", "kind": event.value, "flag": ResultFlag.OCCURS.value, "hours": hours}
        )
    )
    return RiseSetResult(ResultFlag.OCCURS, hours, local_midnight + hours / 24.0)


def compute_sun_times(
    jd: float,
    position: GeodeticPosition,
    twilight: str = "official",
    settings: Optional[SolverSettings] = None,
) -> Dict[str, object]:
    """Compute sunrise and sunset (or dawn and dusk) for a local day.

    Parameters
    ----------
    jd:
        Local Julian date within the day of interest.
    position:
        Observer location.
    twilight:
        Key of :data:`TWILIGHT_ANGLES`.

    Returns
    -------
    dict
        Dictionary containing ``sunrise``, ``sunset`` (local Julian dates or
        ``None``) and ``status`` (``ok``, ``polar_day`` or ``polar_night``).
    """

    try:
        rising, setting = TWILIGHT_EVENTS[twilight]
    except KeyError as exc:
        raise CalendarError(f"Unsupported twilight selector: {twilight}") from exc

    rise = solve_rise_set(rising, jd, position, settings)
    fall = solve_rise_set(setting, jd, position, settings)
    flags = {rise.flag, fall.flag}

    if rise.julian_date is not None or fall.julian_date is not None:
        status = "ok"
    elif ResultFlag.ALWAYS_LIGHT in flags:
        status = "polar_day"
    elif ResultFlag.ALWAYS_DARK in flags:
        status = "polar_night"
    else:  # pragma: no cover - only reachable with offsets far from the meridian.
        status = "indeterminate"

    return {"sunrise": rise.julian_date, "sunset": fall.julian_date, "status": status}
