"""Pure scoring and classification rules over normalized weather readings."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from hikewise.models.conditions import HikingIndex, HikingRecommendation
from hikewise.models.weather import HourlyRain, RainForecast, RainPrediction, WeatherSnapshot

logger = logging.getLogger("hikewise.domain.indices")

MAX_SCORE = 10.0
MIN_SCORE = 0.0

HOT_THRESHOLD_C = 33
HOT_PENALTY = 3
COLD_THRESHOLD_C = 18
COLD_PENALTY = 2
PRECIPITATION_THRESHOLD_MM = 1
PRECIPITATION_PENALTY = 4
UV_THRESHOLD = 8
UV_PENALTY = 2
AQI_THRESHOLD = 100
AQI_PENALTY = 3
CLOUD_THRESHOLD_PCT = 80
CLOUD_PENALTY = 1

# (lower bound inclusive, recommendation), evaluated high to low
RECOMMENDATION_BINS: tuple[tuple[float, HikingRecommendation], ...] = (
    (8, HikingRecommendation.EXCELLENT),
    (5, HikingRecommendation.FAIR),
    (3, HikingRecommendation.NOT_ADVISED),
)

LOW_RAIN_BELOW = 20
MODERATE_RAIN_BELOW = 60
DEFAULT_RAIN_HORIZON = 6


def recommend(score: float) -> HikingRecommendation:
    """Map a clamped score to its recommendation bucket."""

    for lower_bound, recommendation in RECOMMENDATION_BINS:
        if score >= lower_bound:
            return recommendation
    return HikingRecommendation.NOT_RECOMMENDED


def hiking_index(weather: WeatherSnapshot) -> HikingIndex:
    """Score hiking conditions from 0 to 10 by applying fixed penalties."""

    score = MAX_SCORE

    if weather.temperature > HOT_THRESHOLD_C:
        score -= HOT_PENALTY
    elif weather.temperature < COLD_THRESHOLD_C:
        score -= COLD_PENALTY

    if weather.precipitation > PRECIPITATION_THRESHOLD_MM:
        score -= PRECIPITATION_PENALTY
    if weather.uv_index > UV_THRESHOLD:
        score -= UV_PENALTY
    # Unavailable AQI never counts against the score
    if weather.aqi is not None and weather.aqi > AQI_THRESHOLD:
        score -= AQI_PENALTY
    if weather.cloud_cover > CLOUD_THRESHOLD_PCT:
        score -= CLOUD_PENALTY

    score = round(min(max(score, MIN_SCORE), MAX_SCORE), 1)
    return HikingIndex(score=score, recommendation=recommend(score))


def classify_rain(probability: float) -> RainPrediction:
    """Bucket a precipitation probability (percent) into a rain outlook."""

    if probability < LOW_RAIN_BELOW:
        return RainPrediction.LOW
    if probability < MODERATE_RAIN_BELOW:
        return RainPrediction.MODERATE
    return RainPrediction.HIGH


def _hour_label(offset: int) -> str:
    return f"{offset} hour from now" if offset == 1 else f"{offset} hours from now"


def summarize_rain_forecast(
    probabilities: Sequence[Optional[float]],
    precipitation: Sequence[Optional[float]],
    horizon: int = DEFAULT_RAIN_HORIZON,
) -> RainForecast:
    """Summarize the first ``horizon`` hourly slots of a rain series.

    The average is taken over the precipitation values actually present in
    the window, so a short series is not diluted by missing slots. An empty
    or all-null probability series yields the ``UNAVAILABLE`` shape.
    """

    window = list(probabilities[:horizon])
    defined_probabilities = [float(p) for p in window if p is not None]
    if not defined_probabilities:
        logger.info("Rain probability series is empty; forecast unavailable")
        return RainForecast(prediction=RainPrediction.UNAVAILABLE)

    amounts = list(precipitation[:horizon])
    defined_amounts = [float(a) for a in amounts if a is not None]
    avg_rain_mm = (
        round(sum(defined_amounts) / len(defined_amounts), 2) if defined_amounts else None
    )

    hourly = [
        HourlyRain(
            duration_label=_hour_label(index + 1),
            probability=probability,
            precip_mm=amounts[index] if index < len(amounts) else None,
        )
        for index, probability in enumerate(window)
    ]

    max_probability = max(defined_probabilities)
    return RainForecast(
        max_probability=max_probability,
        avg_rain_mm=avg_rain_mm,
        prediction=classify_rain(max_probability),
        hourly_forecast=hourly,
    )


__all__ = [
    "classify_rain",
    "hiking_index",
    "recommend",
    "summarize_rain_forecast",
]
