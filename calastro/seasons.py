"""Instants of the equinoxes and solstices.

Uses the mean-instant polynomials and periodic correction terms of Meeus,
*Astronomical Algorithms* (1998), chapter 27. Dynamical time is used as
universal time; the difference is about a minute in the present era.
"""

from __future__ import annotations

import json
import logging
from enum import Enum

import erfa
import numpy as np

from .julian import CalendarError
from .models import Event
from .position import GeodeticPosition

__all__ = ["Season", "SEASON_EVENTS", "solstice_gmt", "solstice_local"]

LOGGER = logging.getLogger(__name__)


class Season(str, Enum):
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"
    WINTER = "winter"


SEASON_EVENTS = {
    Season.SPRING: Event.SPRING_EQUINOX,
    Season.SUMMER: Event.SUMMER_SOLSTICE,
    Season.FALL: Event.FALL_EQUINOX,
    Season.WINTER: Event.WINTER_SOLSTICE,
}
_EVENT_SEASONS = {event: season for season, event in SEASON_EVENTS.items()}

# Table 27.A, years -1000 to +1000; polynomial in year / 1000.
_MEAN_BEFORE_1000 = {
    Season.SPRING: (1721139.29189, 365242.13740, 0.06134, 0.00111, -0.00071),
    Season.SUMMER: (1721233.25401, 365241.72562, -0.05323, 0.00907, -0.00025),
    Season.FALL: (1721325.70455, 365242.49558, -0.11677, -0.00297, 0.00074),
    Season.WINTER: (1721414.39987, 365242.88257, -0.00769, -0.00933, -0.00006),
}

# Table 27.B, years +1000 to +3000; polynomial in (year - 2000) / 1000.
_MEAN_AFTER_1000 = {
    Season.SPRING: (2451623.80984, 365242.37404, 0.05169, -0.00411, -0.00057),
    Season.SUMMER: (2451716.56767, 365241.62603, 0.00325, 0.00888, -0.00030),
    Season.FALL: (2451810.21715, 365242.01767, -0.11575, 0.00337, 0.00078),
    Season.WINTER: (2451900.05952, 365242.74049, -0.06223, -0.00823, 0.00032),
}

# Table 27.C: amplitude, phase (degrees), rate (degrees per century).
_PERIODIC_TERMS = np.array(
    [
        (485, 324.96, 1934.136),
        (203, 337.23, 32964.467),
        (199, 342.08, 20.186),
        (182, 27.85, 445267.112),
        (156, 73.14, 45036.886),
        (136, 171.52, 22518.443),
        (77, 222.54, 65928.934),
        (74, 296.72, 3034.906),
        (70, 243.58, 9037.513),
        (58, 119.81, 33718.147),
        (52, 297.17, 150.678),
        (50, 21.02, 2281.226),
        (45, 247.54, 29929.562),
        (44, 325.15, 31555.956),
        (29, 60.93, 4443.417),
        (18, 155.12, 67555.328),
        (17, 288.79, 4562.452),
        (16, 198.04, 62894.029),
        (14, 199.76, 31436.921),
        (12, 95.39, 14577.848),
        (12, 287.11, 31931.756),
        (12, 320.81, 34777.259),
        (9, 227.73, 1222.114),
        (8, 15.45, 16859.074),
    ],
    dtype=float,
)


def _season(value) -> Season:
    if isinstance(value, Event):
        try:
            return _EVENT_SEASONS[value]
        except KeyError as exc:
            raise CalendarError(f"Not a seasonal event: {value}") from exc
    try:
        return Season(value)
    except ValueError as exc:
        raise CalendarError(f"Unsupported season: {value}") from exc


def solstice_gmt(season, year: int) -> float:
    """Return the Julian date (GMT) of an equinox or solstice.

    Parameters
    ----------
    season:
        A :class:`Season`, its string value, or the matching seasonal
        :class:`~calastro.models.Event`.
    year:
        Calendar year of the event.
    """

    season = _season(season)
    if year < 1000:
        coefficients = _MEAN_BEFORE_1000[season]
        y = year / 1000.0
    else:
        coefficients = _MEAN_AFTER_1000[season]
        y = (year - 2000) / 1000.0

    mean = float(np.polynomial.polynomial.polyval(y, coefficients))
    t = (mean - erfa.DJ00) / erfa.DJC
    w = np.radians(35999.373 * t - 2.47)
    delta_lambda = 1.0 + 0.0334 * np.cos(w) + 0.0007 * np.cos(2.0 * w)
    amplitude, phase, rate = _PERIODIC_TERMS.T
    correction = float(np.sum(amplitude * np.cos(np.radians(phase + rate * t))))
    return mean + 0.00001 * correction / float(delta_lambda)


def solstice_local(season, year: int, position: GeodeticPosition) -> float:
    """Local Julian date of an equinox or solstice at *position*."""

    jd = solstice_gmt(season, year) + position.utc_offset / 24.0
    LOGGER.debug(json.dumps({"event": "season_solved", "season": _season(season).value, "year": year, "jd": jd}))
    return jd
