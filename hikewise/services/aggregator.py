"""Compose weather, ephemeris and derived indices for a coordinate."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Callable, Optional

from hikewise.config import settings
from hikewise.domain.astronomy import moon_phase, sun_times
from hikewise.domain.indices import hiking_index
from hikewise.ingestors import OpenMeteoClient, gather_all_or_nothing
from hikewise.models.astronomy import SunTimes
from hikewise.models.conditions import AggregateResult
from hikewise.models.location import Coordinate
from hikewise.models.weather import RainForecast

logger = logging.getLogger("hikewise.services.aggregator")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Aggregator:
    """Orchestrates concurrent upstream fetches and local derivations."""

    def __init__(
        self,
        client: Optional[OpenMeteoClient] = None,
        *,
        clock: Callable[[], datetime] = _utcnow,
        display_timezone: str | None = None,
    ) -> None:
        self.client = client or OpenMeteoClient()
        self.clock = clock
        self.display_timezone = display_timezone or settings.display_timezone

    async def _sun_times(self, coord: Coordinate, now: datetime) -> SunTimes:
        return sun_times(coord, now, self.display_timezone)

    async def aggregate(self, coord: Coordinate) -> AggregateResult:
        """Build the composite record; any upstream failure fails the whole call."""

        now = self.clock()
        weather, sun = await gather_all_or_nothing(
            self.client.fetch_weather(coord),
            self._sun_times(coord, now),
        )
        moon = moon_phase(now)
        indices = hiking_index(weather)

        logger.info(
            "Aggregated conditions: lat=%.4f lon=%.4f score=%s moon=%s",
            coord.latitude,
            coord.longitude,
            indices.score,
            moon.phase_name.value,
        )
        return AggregateResult(weather=weather, sun=sun, moon=moon, indices=indices)

    async def rain_forecast(self, coord: Coordinate) -> RainForecast:
        """Independent short-horizon rain summary; does not join the aggregate."""

        forecast = await self.client.fetch_rain_forecast(coord)
        logger.info(
            "Rain forecast computed: lat=%.4f lon=%.4f prediction=%s",
            coord.latitude,
            coord.longitude,
            forecast.prediction.value,
        )
        return forecast


_default_aggregator = Aggregator()


def get_aggregator() -> Aggregator:
    """Return the process-wide aggregator (overridable in FastAPI dependencies)."""

    return _default_aggregator


async def aggregate(coord: Coordinate) -> AggregateResult:
    """Convenience wrapper using the default aggregator."""

    return await _default_aggregator.aggregate(coord)


async def rain_forecast(coord: Coordinate) -> RainForecast:
    """Convenience wrapper using the default aggregator."""

    return await _default_aggregator.rain_forecast(coord)


__all__ = ["Aggregator", "aggregate", "get_aggregator", "rain_forecast"]
