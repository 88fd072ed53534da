"""Pure derivations: sun/moon ephemeris and weather-based indices."""

from .astronomy import (
    SolarEvents,
    classify_moon_phase,
    moon_illumination,
    moon_phase,
    solar_events,
    sun_times,
)
from .indices import classify_rain, hiking_index, recommend, summarize_rain_forecast

__all__ = [
    "SolarEvents",
    "classify_moon_phase",
    "classify_rain",
    "hiking_index",
    "moon_illumination",
    "moon_phase",
    "recommend",
    "solar_events",
    "summarize_rain_forecast",
    "sun_times",
]
