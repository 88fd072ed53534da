"""Derived hiking index and the composite aggregation result."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from hikewise.models.astronomy import MoonPhase, SunTimes
from hikewise.models.weather import WeatherSnapshot


class HikingRecommendation(str, Enum):
    """Recommendation buckets for the hiking index, best first."""

    EXCELLENT = "excellent"
    FAIR = "fair, watch weather"
    NOT_ADVISED = "not advised, suboptimal"
    NOT_RECOMMENDED = "not recommended today"


class HikingIndex(BaseModel):
    """Bounded suitability score derived from a weather snapshot."""

    score: float = Field(..., ge=0, le=10, description="Score from 0 to 10, one decimal")
    recommendation: HikingRecommendation = Field(
        ..., description="Recommendation text for the score"
    )


class AggregateResult(BaseModel):
    """Everything known about a coordinate at request time."""

    model_config = ConfigDict(frozen=True)

    weather: WeatherSnapshot
    sun: SunTimes
    moon: MoonPhase
    indices: HikingIndex


__all__ = ["AggregateResult", "HikingIndex", "HikingRecommendation"]
