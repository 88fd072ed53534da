"""Forecast and air-quality ingestion using Open-Meteo."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from hikewise.config import settings
from hikewise.domain.indices import summarize_rain_forecast
from hikewise.errors import UpstreamError
from hikewise.ingestors.fanout import gather_all_or_nothing
from hikewise.models.location import Coordinate
from hikewise.models.weather import RainForecast, WeatherSnapshot

logger = logging.getLogger("hikewise.ingestors.open_meteo")

FORECAST_PROVIDER = "forecast"
AIR_QUALITY_PROVIDER = "air_quality"

CURRENT_FIELDS = "temperature_2m,precipitation,cloud_cover,uv_index"


def _last_defined(values: list | None) -> Optional[float]:
    """Return the last non-null entry of an hourly series, or None."""

    for value in reversed(values or []):
        if value is not None:
            return float(value)
    return None


class OpenMeteoClient:
    """Fetch current conditions, air quality and hourly rain from Open-Meteo."""

    def __init__(
        self,
        *,
        forecast_url: str | None = None,
        air_quality_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.forecast_url = forecast_url or settings.forecast_base_url
        self.air_quality_url = air_quality_url or settings.air_quality_base_url
        self.timeout = timeout or settings.upstream_timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def _get_json(
        self, client: httpx.AsyncClient, provider: str, url: str, params: dict[str, Any]
    ) -> dict[str, Any]:
        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.error("%s request timed out: %s", provider, exc)
            raise UpstreamError(
                "Upstream request timed out", provider=provider, endpoint=url
            ) from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "%s provider returned error: status=%s body=%s",
                provider,
                exc.response.status_code,
                exc.response.text,
            )
            raise UpstreamError(
                f"Upstream returned HTTP {exc.response.status_code}",
                provider=provider,
                endpoint=url,
            ) from exc
        except httpx.RequestError as exc:
            logger.error("%s request failed: %s", provider, exc)
            raise UpstreamError(
                "Upstream request failed", provider=provider, endpoint=url
            ) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            logger.error("Failed to parse %s JSON response: %s", provider, exc)
            raise UpstreamError(
                "Upstream returned invalid JSON", provider=provider, endpoint=url
            ) from exc

        if not isinstance(payload, dict):
            raise UpstreamError(
                "Upstream returned an unexpected body", provider=provider, endpoint=url
            )
        return payload

    async def fetch_weather(self, coord: Coordinate) -> WeatherSnapshot:
        """Merge current readings with the latest defined AQI value.

        Both requests run concurrently; if either fails the whole fetch fails
        and no partial snapshot is produced.
        """

        weather_params = {
            "latitude": coord.latitude,
            "longitude": coord.longitude,
            "current": CURRENT_FIELDS,
            "timezone": "auto",
        }
        aqi_params = {
            "latitude": coord.latitude,
            "longitude": coord.longitude,
            "hourly": "european_aqi",
            "timezone": "auto",
        }

        async with self._client() as client:
            weather_payload, aqi_payload = await gather_all_or_nothing(
                self._get_json(client, FORECAST_PROVIDER, self.forecast_url, weather_params),
                self._get_json(client, AIR_QUALITY_PROVIDER, self.air_quality_url, aqi_params),
            )

        current = weather_payload.get("current")
        if not isinstance(current, dict):
            logger.error("Forecast response is missing the 'current' section")
            raise UpstreamError(
                "Forecast response has no current readings",
                provider=FORECAST_PROVIDER,
                endpoint=self.forecast_url,
            )

        try:
            hourly = aqi_payload.get("hourly") or {}
            aqi = _last_defined(hourly.get("european_aqi"))
        except (AttributeError, TypeError, ValueError) as exc:
            logger.error("Air quality series is malformed: %s", exc)
            raise UpstreamError(
                "Air quality response has malformed hourly readings",
                provider=AIR_QUALITY_PROVIDER,
                endpoint=self.air_quality_url,
            ) from exc
        if aqi is None:
            logger.info(
                "No AQI values for %.4f,%.4f; marking unavailable",
                coord.latitude,
                coord.longitude,
            )

        try:
            snapshot = WeatherSnapshot(
                temperature=current.get("temperature_2m"),
                precipitation=current.get("precipitation"),
                cloud_cover=current.get("cloud_cover"),
                uv_index=current.get("uv_index"),
                aqi=aqi,
            )
        except ValidationError as exc:
            logger.error("Forecast current readings are incomplete: %s", exc)
            raise UpstreamError(
                "Forecast response has incomplete current readings",
                provider=FORECAST_PROVIDER,
                endpoint=self.forecast_url,
            ) from exc

        logger.debug("Weather snapshot ingested: %s", snapshot)
        return snapshot

    async def fetch_rain_forecast(self, coord: Coordinate) -> RainForecast:
        """Summarize precipitation for the next few hours."""

        params = {
            "latitude": coord.latitude,
            "longitude": coord.longitude,
            "hourly": "precipitation_probability,precipitation",
            "forecast_hours": settings.rain_forecast_hours,
            "timezone": settings.display_timezone,
        }

        async with self._client() as client:
            payload = await self._get_json(client, FORECAST_PROVIDER, self.forecast_url, params)

        try:
            hourly = payload.get("hourly") or {}
            forecast = summarize_rain_forecast(
                hourly.get("precipitation_probability") or [],
                hourly.get("precipitation") or [],
                horizon=settings.rain_forecast_hours,
            )
        except (AttributeError, TypeError, ValueError) as exc:
            logger.error("Rain forecast series is malformed: %s", exc)
            raise UpstreamError(
                "Forecast response has malformed hourly readings",
                provider=FORECAST_PROVIDER,
                endpoint=self.forecast_url,
            ) from exc
        logger.debug("Rain forecast ingested: %s", forecast)
        return forecast


__all__ = ["OpenMeteoClient", "FORECAST_PROVIDER", "AIR_QUALITY_PROVIDER"]
