"""Enumerations and pydantic models shared across the calendar engine."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ["Event", "ResultFlag", "PositionParams", "DateTimeSnapshot"]


class Event(str, Enum):
    """Operation that last produced a date-time."""

    USER = "User Time"
    SYSTEM = "System Time"
    SUNRISE = "Sun Rise"
    SUNSET = "Sun Set"
    MOONRISE = "Moon Rise"
    MOONSET = "Moon Set"
    CIVIL_DAWN = "Civil Dawn"
    CIVIL_DUSK = "Civil Dusk"
    NAUTICAL_DAWN = "Nautical Dawn"
    NAUTICAL_DUSK = "Nautical Dusk"
    ASTRONOMICAL_DAWN = "Astronomical Dawn"
    ASTRONOMICAL_DUSK = "Astronomical Dusk"
    SPRING_EQUINOX = "Spring Equinox"
    SUMMER_SOLSTICE = "Summer Solstice"
    FALL_EQUINOX = "Fall Equinox"
    WINTER_SOLSTICE = "Winter Solstice"
    NEW_MOON = "New Moon"
    FULL_MOON = "Full Moon"
    EASTER = "Easter"


class ResultFlag(str, Enum):
    """Outcome of the most recent validation or event solve."""

    VALID = "Valid DateTime"
    INVALID_YEAR = "Invalid Year"
    INVALID_MONTH = "Invalid Month"
    INVALID_DAY = "Invalid Day"
    INVALID_HOUR = "Invalid Hour"
    INVALID_MINUTE = "Invalid Minute"
    INVALID_SECOND = "Invalid Second"
    INVALID_MILLISECOND = "Invalid Millisecond"
    OCCURS = "Occurs"
    NEVER_RISES = "Never Rises"
    NEVER_SETS = "Never Sets"
    ALWAYS_LIGHT = "Always Light"
    ALWAYS_DARK = "Always Dark"

    @property
    def usable(self) -> bool:
        """``True`` when the date-time fields can be trusted."""

        return self in (ResultFlag.VALID, ResultFlag.OCCURS)


class PositionParams(BaseModel):
    """Validated input for building a :class:`~calastro.position.GeodeticPosition`."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    longitude: float = Field(
        ..., alias="lon", ge=-180.0, le=180.0, description="Longitude in degrees, west positive"
    )
    latitude: float = Field(
        ..., alias="lat", ge=-90.0, le=90.0, description="Latitude in degrees, north positive"
    )
    utc_offset: float = Field(
        0.0,
        alias="offset_hours",
        ge=-24.0,
        le=24.0,
        description="Hours added to GMT to obtain local time",
    )
    location_name: Optional[str] = Field(None, alias="name", description="Place name")
    zone_name: Optional[str] = Field(None, alias="zone", description="Time zone label")

    @field_validator("location_name", "zone_name")
    def strip_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        return value or None


class DateTimeSnapshot(BaseModel):
    """Immutable view of a :class:`~calastro.calendar_time.DateTime`."""

    model_config = ConfigDict(frozen=True)

    julian_date: float = Field(..., description="Julian date")
    modified_julian_date: float = Field(..., description="Julian date minus 2400000.5")
    year: Union[int, float]
    month: Union[int, float]
    day: Union[int, float]
    hour: Union[int, float]
    minute: Union[int, float]
    second: Union[int, float]
    millisecond: Union[int, float]
    day_of_week: int = Field(..., ge=0, le=6, description="0 for Sunday")
    day_of_year: int
    event: Event
    flag: ResultFlag
    usable: bool
