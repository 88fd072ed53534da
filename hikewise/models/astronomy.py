"""Sun and moon models derived from local ephemeris calculations."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SunTimes(BaseModel):
    """Local time-of-day strings (HH:MM) for today's solar events.

    A value is None when the event does not occur, e.g. during polar day or
    polar night. The underlying UTC instants are always ordered sunrise,
    golden-hour end, sunset, but the strings are rendered in one fixed display
    timezone, so for coordinates far from it they can wrap past midnight and
    compare out of order.
    """

    sunrise: Optional[str] = Field(default=None, description="Local sunrise time")
    sunset: Optional[str] = Field(default=None, description="Local sunset time")
    golden_hour: Optional[str] = Field(
        default=None, description="End of the morning golden hour"
    )


class MoonPhaseName(str, Enum):
    """Eight-way classification of the lunar cycle."""

    NEW_MOON = "new moon"
    WAXING_CRESCENT = "waxing crescent"
    FIRST_QUARTER = "first quarter"
    WAXING_GIBBOUS = "waxing gibbous"
    FULL_MOON = "full moon"
    WANING_GIBBOUS = "waning gibbous"
    LAST_QUARTER = "last quarter"
    WANING_CRESCENT = "waning crescent"


class MoonPhase(BaseModel):
    """Current lunar phase and illuminated fraction."""

    phase_name: MoonPhaseName = Field(..., description="Named phase of the moon")
    illumination: float = Field(
        ..., ge=0, le=1, description="Illuminated fraction rounded to 2 decimals"
    )


__all__ = ["MoonPhase", "MoonPhaseName", "SunTimes"]
