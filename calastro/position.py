"""Observer location on the Earth's surface."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .models import PositionParams

__all__ = ["GeodeticPosition", "dms_to_degrees", "degrees_to_dms"]


def dms_to_degrees(degrees: float, minutes: float = 0.0, seconds: float = 0.0) -> float:
    return degrees + minutes / 60.0 + seconds / 3600.0


def degrees_to_dms(value: float) -> Tuple[int, int, int]:
    """Split the magnitude of *value* into whole degrees, minutes and rounded seconds."""

    value = abs(value)
    degrees = int(value)
    remainder = (value - degrees) * 60.0
    minutes = int(remainder)
    seconds = round((remainder - minutes) * 60.0)
    if seconds == 60:
        seconds = 0
        minutes += 1
    if minutes == 60:
        minutes = 0
        degrees += 1
    return degrees, minutes, seconds


@dataclass(frozen=True)
class GeodeticPosition:
    """Longitude, latitude and fixed UTC offset of an observer.

    ``longitude`` is positive *west* of Greenwich. ``utc_offset`` is the
    number of hours added to GMT to obtain local time (Missoula in summer
    is ``-6``).
    """

    longitude: float
    latitude: float
    utc_offset: float = 0.0
    location_name: Optional[str] = None
    zone_name: Optional[str] = None

    @classmethod
    def from_params(cls, params: PositionParams) -> "GeodeticPosition":
        return cls(
            longitude=params.longitude,
            latitude=params.latitude,
            utc_offset=params.utc_offset,
            location_name=params.location_name,
            zone_name=params.zone_name,
        )

    @classmethod
    def from_east_longitude(
        cls,
        longitude_east: float,
        latitude: float,
        utc_offset: float = 0.0,
        **names: Optional[str],
    ) -> "GeodeticPosition":
        """Build a position from an east-positive longitude."""

        return cls(-longitude_east, latitude, utc_offset, **names)

    @property
    def east_longitude(self) -> float:
        return -self.longitude
