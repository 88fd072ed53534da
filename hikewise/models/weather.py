"""Weather, air-quality and rain forecast models."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

AQI_UNAVAILABLE = "unavailable"


class WeatherSnapshot(BaseModel):
    """Current conditions merged from the forecast and air-quality providers."""

    model_config = ConfigDict(frozen=True)

    temperature: float = Field(..., description="Air temperature at 2 m in Celsius")
    precipitation: float = Field(..., description="Current precipitation in millimeters")
    cloud_cover: float = Field(..., description="Cloud cover percentage")
    uv_index: float = Field(..., description="UV index")
    aqi: Optional[float] = Field(
        default=None,
        description="Latest European AQI reading; None when the series had no values",
    )

    @property
    def aqi_available(self) -> bool:
        return self.aqi is not None

    @field_validator("aqi", mode="before")
    @classmethod
    def parse_aqi_sentinel(cls, value):
        return None if value == AQI_UNAVAILABLE else value

    @field_serializer("aqi", when_used="json")
    def serialize_aqi(self, value: Optional[float]) -> Union[float, str]:
        return AQI_UNAVAILABLE if value is None else value


class RainPrediction(str, Enum):
    """Short-horizon rain outlook buckets."""

    LOW = "low chance"
    MODERATE = "moderate chance"
    HIGH = "high chance"
    UNAVAILABLE = "data unavailable"


class HourlyRain(BaseModel):
    """One hourly slot of the rain forecast window."""

    duration_label: str = Field(..., description="Relative offset, e.g. '2 hours from now'")
    probability: Optional[float] = Field(
        default=None, description="Precipitation probability in percent"
    )
    precip_mm: Optional[float] = Field(
        default=None, description="Expected precipitation in millimeters"
    )


class RainForecast(BaseModel):
    """Summary of the next few hours of precipitation."""

    max_probability: Optional[float] = Field(
        default=None, description="Highest precipitation probability in the window"
    )
    avg_rain_mm: Optional[float] = Field(
        default=None, description="Mean precipitation per hour over the window"
    )
    prediction: RainPrediction = Field(..., description="Rain outlook bucket")
    hourly_forecast: list[HourlyRain] = Field(
        default_factory=list, description="Hourly slots, nearest first"
    )


__all__ = [
    "AQI_UNAVAILABLE",
    "HourlyRain",
    "RainForecast",
    "RainPrediction",
    "WeatherSnapshot",
]
