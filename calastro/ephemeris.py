"""Low-precision solar and lunar coordinates.

The series follow Montenbruck & Pfleger, *Astronomy on the Personal
Computer*, and are good to about one arc minute, which is ample for
rise, set and twilight times.
"""

from __future__ import annotations

import math
from typing import Tuple

import erfa
import numpy as np

__all__ = [
    "julian_centuries",
    "fractional_part",
    "mean_lunar_arguments",
    "lunar_longitude_perturbation",
    "mini_sun",
    "mini_moon",
    "local_mean_sidereal_time",
]

TWO_PI = 2.0 * math.pi
ARCSEC_PER_RADIAN = 206264.8062
ARCSEC_PER_REVOLUTION = 1296e3
COS_OBLIQUITY = 0.91748
SIN_OBLIQUITY = 0.39778

# Amplitude (arcsec) followed by multipliers of the lunar mean anomaly, solar
# mean anomaly, mean elongation and argument of latitude.
_LONGITUDE_TERMS = np.array(
    [
        (22640.0, 1, 0, 0, 0),
        (-4586.0, 1, 0, -2, 0),
        (2370.0, 0, 0, 2, 0),
        (769.0, 2, 0, 0, 0),
        (-668.0, 0, 1, 0, 0),
        (-412.0, 0, 0, 0, 2),
        (-212.0, 2, 0, -2, 0),
        (-206.0, 1, 1, -2, 0),
        (192.0, 1, 0, 2, 0),
        (-165.0, 0, 1, -2, 0),
        (-125.0, 0, 0, 1, 0),
        (-110.0, 1, 1, 0, 0),
        (148.0, 1, -1, 0, 0),
        (-55.0, 0, 0, -2, 2),
    ],
    dtype=float,
)

_LATITUDE_TERMS = np.array(
    [
        (-526.0, 0, 0, -2, 1),
        (44.0, 1, 0, -2, 1),
        (-31.0, -1, 0, -2, 1),
        (-23.0, 0, 1, -2, 1),
        (11.0, 0, -1, -2, 1),
        (-25.0, -2, 0, 0, 1),
        (21.0, -1, 0, 0, 1),
    ],
    dtype=float,
)


def julian_centuries(jd: float) -> float:
    """Julian centuries elapsed since J2000.0."""

    return (jd - erfa.DJ00) / erfa.DJC


def fractional_part(value: float) -> float:
    return value - math.floor(value)


def mean_lunar_arguments(t: float) -> np.ndarray:
    """Return the lunar and solar mean anomalies, mean elongation and argument of latitude (radians)."""

    return TWO_PI * np.array(
        [
            fractional_part(0.374897 + 1325.552410 * t),
            fractional_part(0.993133 + 99.997361 * t),
            fractional_part(0.827361 + 1236.853086 * t),
            fractional_part(0.259086 + 1342.227825 * t),
        ]
    )


def _series(terms: np.ndarray, arguments: np.ndarray) -> float:
    return float(terms[:, 0] @ np.sin(terms[:, 1:] @ arguments))


def lunar_longitude_perturbation(arguments: np.ndarray) -> float:
    """Periodic perturbation of the lunar longitude in arc seconds."""

    return _series(_LONGITUDE_TERMS, arguments)


def _equatorial(longitude: float, latitude: float) -> Tuple[float, float]:
    cos_lat = math.cos(latitude)
    x = cos_lat * math.cos(longitude)
    v = cos_lat * math.sin(longitude)
    w = math.sin(latitude)
    y = COS_OBLIQUITY * v - SIN_OBLIQUITY * w
    z = SIN_OBLIQUITY * v + COS_OBLIQUITY * w
    rho = math.sqrt(1.0 - z * z)
    declination = math.degrees(math.atan(z / rho))
    right_ascension = (24.0 / math.pi) * math.atan(y / (x + rho))
    if right_ascension < 0:
        right_ascension += 24.0
    return right_ascension, declination


def mini_sun(t: float) -> Tuple[float, float]:
    """Return the sun's right ascension (hours) and declination (degrees).

    Parameters
    ----------
    t:
        Julian centuries since J2000.0 (see :func:`julian_centuries`).
    """

    anomaly = TWO_PI * fractional_part(0.993133 + 99.997361 * t)
    perturbation = 6893.0 * math.sin(anomaly) + 72.0 * math.sin(2.0 * anomaly)
    longitude = TWO_PI * fractional_part(
        0.7859453 + anomaly / TWO_PI + (6191.2 * t + perturbation) / ARCSEC_PER_REVOLUTION
    )
    return _equatorial(longitude, 0.0)


def mini_moon(t: float) -> Tuple[float, float]:
    """Return the moon's right ascension (hours) and declination (degrees)."""

    mean_longitude = fractional_part(0.606433 + 1336.855225 * t)
    arguments = mean_lunar_arguments(t)
    _, solar_anomaly, _, latitude_arg = arguments

    dl = lunar_longitude_perturbation(arguments)
    s = latitude_arg + (dl + 412.0 * math.sin(2.0 * latitude_arg) + 541.0 * math.sin(solar_anomaly)) / ARCSEC_PER_RADIAN
    n = _series(_LATITUDE_TERMS, arguments)

    longitude = TWO_PI * fractional_part(mean_longitude + dl / ARCSEC_PER_REVOLUTION)
    latitude = (18520.0 * math.sin(s) + n) / ARCSEC_PER_RADIAN
    return _equatorial(longitude, latitude)


def local_mean_sidereal_time(jd_ut: float, longitude_west: float) -> float:
    """Local mean sidereal time in hours for a UT Julian date and west-positive longitude."""

    whole = math.floor(jd_ut)
    gmst = math.degrees(float(erfa.gmst82(whole, jd_ut - whole))) / 15.0
    return (gmst - longitude_west / 15.0) % 24.0
