"""Sun position in the sky and the solar radiation reaching a slope."""

from __future__ import annotations

import math
from typing import Tuple

from .ephemeris import julian_centuries, local_mean_sidereal_time, mini_sun
from .position import GeodeticPosition

__all__ = ["sun_position", "solar_angle", "solar_radiation"]


def sun_position(jd: float, position: GeodeticPosition) -> Tuple[float, float]:
    """Return the sun's altitude and azimuth in degrees.

    Parameters
    ----------
    jd:
        Local Julian date.
    position:
        Observer location.

    Returns
    -------
    tuple[float, float]
        Altitude above the horizon and azimuth clockwise from north.
    """

    jd_ut = jd - position.utc_offset / 24.0
    right_ascension, declination = mini_sun(julian_centuries(jd_ut))
    hour_angle = math.radians(15.0 * (local_mean_sidereal_time(jd_ut, position.longitude) - right_ascension))
    phi = math.radians(position.latitude)
    delta = math.radians(declination)

    sin_alt = math.sin(phi) * math.sin(delta) + math.cos(phi) * math.cos(delta) * math.cos(hour_angle)
    altitude = math.degrees(math.asin(max(-1.0, min(1.0, sin_alt))))
    # atan2 gives the azimuth from south, westward.
    south_azimuth = math.atan2(
        math.sin(hour_angle),
        math.cos(hour_angle) * math.sin(phi) - math.tan(delta) * math.cos(phi),
    )
    azimuth = (math.degrees(south_azimuth) + 180.0) % 360.0
    return altitude, azimuth


def solar_angle(slope: float, aspect: float, altitude: float, azimuth: float) -> float:
    """Angle in degrees between the sun's rays and a terrain slope.

    90 means the sun is normal to the slope and negative values mean the
    slope is self-shaded. *aspect* is the downslope direction clockwise
    from north.
    """

    slope_rad = math.radians(90.0 - slope)
    altitude_rad = math.radians(altitude)
    sin_angle = math.sin(altitude_rad) * math.sin(slope_rad) + math.cos(altitude_rad) * math.cos(
        slope_rad
    ) * math.cos(math.radians(azimuth - aspect))
    return math.degrees(math.asin(max(-1.0, min(1.0, sin_angle))))


def solar_radiation(
    jd: float,
    position: GeodeticPosition,
    slope: float = 0.0,
    aspect: float = 0.0,
    elevation_ft: float = 0.0,
    atm_transparency: float = 0.75,
    cloud_transmittance: float = 1.0,
    canopy_transmittance: float = 1.0,
) -> float:
    """Fraction [0, 1] of the solar constant arriving at the ground (MTCLIM).

    Parameters
    ----------
    jd:
        Local Julian date.
    position:
        Observer location.
    slope, aspect:
        Terrain slope and downslope direction in degrees.
    elevation_ft:
        Site elevation in feet.
    atm_transparency:
        0.80 for an exceptionally clear atmosphere, 0.75 average clear
        forest, 0.70 moderate haze, 0.60 dense haze.
    cloud_transmittance, canopy_transmittance:
        Transmittance factors in [0, 1].

    Notes
    -----
    Diffuse and reflected radiation are ignored, so the result is zero
    whenever the sun is down or the slope is shaded.
    """

    altitude, azimuth = sun_position(jd, position)
    if altitude <= 0.0:
        return 0.0
    angle = solar_angle(slope, aspect, altitude, azimuth)
    if angle < 0.0:
        return 0.0
    air_mass = math.exp(-0.0001467 * elevation_ft) / math.sin(math.radians(altitude))
    return (
        atm_transparency**air_mass
        * cloud_transmittance
        * canopy_transmittance
        * math.sin(math.radians(angle))
    )
