"""New and full moon instants.

Mean lunations come from the mean Moon-Sun elongation; each estimate is
improved twice with the periodic perturbations of the lunar and solar
longitudes (Montenbruck & Pfleger).
"""

from __future__ import annotations

import json
import logging
import math

import erfa

from .ephemeris import (
    ARCSEC_PER_REVOLUTION,
    TWO_PI,
    fractional_part,
    julian_centuries,
    lunar_longitude_perturbation,
    mean_lunar_arguments,
)
from .julian import julian_date
from .position import GeodeticPosition

__all__ = [
    "improve_moon",
    "new_moon_by_index",
    "first_lunation_index",
    "new_moon_gmt",
    "new_moon",
    "new_moon_before",
    "full_moon_gmt",
    "full_moon",
]

LOGGER = logging.getLogger(__name__)

ELONGATION_EPOCH = 0.827361  # Mean elongation at J2000, revolutions.
ELONGATION_RATE = 1236.853086  # Lunations per Julian century.


def improve_moon(t: float) -> float:
    """Correct an approximate new-moon time *t* (Julian centuries since J2000)."""

    arguments = mean_lunar_arguments(t)
    solar_anomaly = arguments[1]
    elongation = TWO_PI * (fractional_part(0.5 + ELONGATION_EPOCH + ELONGATION_RATE * t) - 0.5)
    lunar = lunar_longitude_perturbation(arguments)
    solar = 6893.0 * math.sin(solar_anomaly) + 72.0 * math.sin(2.0 * solar_anomaly)
    dlambda = elongation / TWO_PI + (lunar - solar) / ARCSEC_PER_REVOLUTION
    return t - dlambda / ELONGATION_RATE


def new_moon_by_index(index: int) -> float:
    """Julian date (GMT) of the new moon with absolute lunation *index*.

    Index 0 is the new moon of 2000 January 6.
    """

    t = (index - ELONGATION_EPOCH) / ELONGATION_RATE
    t = improve_moon(improve_moon(t))
    return erfa.DJC * t + erfa.DJ00


def first_lunation_index(year: int, utc_offset: float = 0.0) -> int:
    """Absolute index of the first new moon at or after local January 1, 00:00."""

    start = julian_date(year, 1, 1) - utc_offset / 24.0
    index = math.ceil(ELONGATION_RATE * julian_centuries(start) + ELONGATION_EPOCH)
    while new_moon_by_index(index) < start:
        index += 1
    while new_moon_by_index(index - 1) >= start:
        index -= 1
    return index


def new_moon_gmt(year: int, lunation: int, utc_offset: float = 0.0) -> float:
    """Julian date (GMT) of a new moon counted from the start of *year*.

    Parameters
    ----------
    year:
        Calendar year.
    lunation:
        1 for the first new moon at or after local January 1, 00:00, 2 for
        the next and so on. 0 is the last new moon before the year begins.
    utc_offset:
        Hours added to GMT for local time; fixes where the year begins.
    """

    index = first_lunation_index(year, utc_offset) + lunation - 1
    jd = new_moon_by_index(index)
    LOGGER.debug(json.dumps({"event": "new_moon_solved", "year": year, "lunation": lunation, "jd": jd}))
    return jd


def full_moon_gmt(year: int, lunation: int, utc_offset: float = 0.0) -> float:
    """Julian date (GMT) of the full moon following new moon *lunation*.

    Taken as the midpoint between that new moon and the next one.
    """

    index = first_lunation_index(year, utc_offset) + lunation - 1
    return 0.5 * (new_moon_by_index(index) + new_moon_by_index(index + 1))


def new_moon(year: int, lunation: int, position: GeodeticPosition) -> float:
    return new_moon_gmt(year, lunation, position.utc_offset) + position.utc_offset / 24.0


def new_moon_before(year: int, position: GeodeticPosition) -> float:
    """Local Julian date of the last new moon before *year* begins at *position*."""

    return new_moon(year, 0, position)


def full_moon(year: int, lunation: int, position: GeodeticPosition) -> float:
    return full_moon_gmt(year, lunation, position.utc_offset) + position.utc_offset / 24.0
