"""Pydantic models for the Hikewise backend."""

from .astronomy import MoonPhase, MoonPhaseName, SunTimes
from .auth import AuthResponse, LoginRequest, RegisterRequest
from .conditions import AggregateResult, HikingIndex, HikingRecommendation
from .location import Coordinate, CoordinateRequest
from .weather import (
    AQI_UNAVAILABLE,
    HourlyRain,
    RainForecast,
    RainPrediction,
    WeatherSnapshot,
)

__all__ = [
    "AQI_UNAVAILABLE",
    "AggregateResult",
    "AuthResponse",
    "Coordinate",
    "CoordinateRequest",
    "HikingIndex",
    "HikingRecommendation",
    "HourlyRain",
    "LoginRequest",
    "MoonPhase",
    "MoonPhaseName",
    "RainForecast",
    "RainPrediction",
    "RegisterRequest",
    "SunTimes",
    "WeatherSnapshot",
]
