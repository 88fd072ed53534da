import asyncio

import httpx
import pytest

from hikewise.errors import UpstreamError
from hikewise.ingestors.open_meteo import (
    AIR_QUALITY_PROVIDER,
    FORECAST_PROVIDER,
    OpenMeteoClient,
)
from hikewise.models.location import Coordinate
from hikewise.models.weather import RainPrediction

FORECAST_URL = "http://forecast.test/v1/forecast"
AQI_URL = "http://aqi.test/v1/air-quality"
COORD = Coordinate(latitude=-7.454, longitude=110.44)

CURRENT_PAYLOAD = {
    "current": {
        "time": "2024-06-01T12:00",
        "temperature_2m": 21.4,
        "precipitation": 0.2,
        "cloud_cover": 64,
        "uv_index": 6.5,
    }
}


def _client(handler) -> OpenMeteoClient:
    return OpenMeteoClient(
        forecast_url=FORECAST_URL,
        air_quality_url=AQI_URL,
        transport=httpx.MockTransport(handler),
    )


def _router(aqi_series, forecast_status=200, aqi_status=200):
    def handler(request: httpx.Request):
        if request.url.host == "forecast.test":
            assert request.url.params["latitude"] == "-7.454"
            assert "temperature_2m" in request.url.params["current"]
            if forecast_status != 200:
                return httpx.Response(forecast_status, text="forecast down")
            return httpx.Response(200, json=CURRENT_PAYLOAD)
        assert request.url.params["hourly"] == "european_aqi"
        if aqi_status != 200:
            return httpx.Response(aqi_status, text="aqi down")
        return httpx.Response(200, json={"hourly": {"european_aqi": aqi_series}})

    return handler


@pytest.mark.anyio
async def test_fetch_weather_merges_latest_defined_aqi():
    client = _client(_router([31, 42, 57, None, None]))

    snapshot = await client.fetch_weather(COORD)

    assert snapshot.temperature == 21.4
    assert snapshot.precipitation == 0.2
    assert snapshot.cloud_cover == 64
    assert snapshot.uv_index == 6.5
    assert snapshot.aqi == 57


@pytest.mark.anyio
@pytest.mark.parametrize("series", [[], [None, None]])
async def test_fetch_weather_marks_missing_aqi_unavailable(series):
    client = _client(_router(series))

    snapshot = await client.fetch_weather(COORD)

    assert snapshot.aqi is None
    assert snapshot.model_dump(mode="json")["aqi"] == "unavailable"


@pytest.mark.anyio
async def test_fetch_weather_tolerates_missing_hourly_section():
    def handler(request: httpx.Request):
        if request.url.host == "forecast.test":
            return httpx.Response(200, json=CURRENT_PAYLOAD)
        return httpx.Response(200, json={"latitude": -7.5})

    snapshot = await _client(handler).fetch_weather(COORD)

    assert snapshot.aqi is None


@pytest.mark.anyio
async def test_fetch_weather_fails_when_air_quality_fails():
    client = _client(_router([10], aqi_status=503))

    with pytest.raises(UpstreamError) as exc_info:
        await client.fetch_weather(COORD)

    assert exc_info.value.provider == AIR_QUALITY_PROVIDER
    assert exc_info.value.endpoint == AQI_URL


@pytest.mark.anyio
async def test_fetch_weather_fails_when_forecast_fails():
    client = _client(_router([10], forecast_status=500))

    with pytest.raises(UpstreamError) as exc_info:
        await client.fetch_weather(COORD)

    assert exc_info.value.provider == FORECAST_PROVIDER


@pytest.mark.anyio
async def test_fetch_weather_rejects_body_without_current_readings():
    def handler(request: httpx.Request):
        if request.url.host == "forecast.test":
            return httpx.Response(200, json={"current": {"temperature_2m": None}})
        return httpx.Response(200, json={"hourly": {"european_aqi": [1]}})

    with pytest.raises(UpstreamError):
        await _client(handler).fetch_weather(COORD)


@pytest.mark.anyio
async def test_fetch_weather_rejects_invalid_json():
    def handler(request: httpx.Request):
        return httpx.Response(200, text="<html>not json</html>")

    with pytest.raises(UpstreamError):
        await _client(handler).fetch_weather(COORD)


@pytest.mark.anyio
async def test_fetch_weather_rejects_non_numeric_aqi():
    client = _client(_router([10, "n/a"]))

    with pytest.raises(UpstreamError) as exc_info:
        await client.fetch_weather(COORD)

    assert exc_info.value.provider == AIR_QUALITY_PROVIDER
    assert exc_info.value.endpoint == AQI_URL


@pytest.mark.anyio
async def test_fetch_weather_rejects_malformed_hourly_section():
    def handler(request: httpx.Request):
        if request.url.host == "forecast.test":
            return httpx.Response(200, json=CURRENT_PAYLOAD)
        return httpx.Response(200, json={"hourly": ["european_aqi"]})

    with pytest.raises(UpstreamError) as exc_info:
        await _client(handler).fetch_weather(COORD)

    assert exc_info.value.provider == AIR_QUALITY_PROVIDER


@pytest.mark.anyio
async def test_fetch_weather_cancels_sibling_on_failure():
    aqi_started = asyncio.Event()
    aqi_cancelled = asyncio.Event()

    async def handler(request: httpx.Request):
        if request.url.host == "aqi.test":
            aqi_started.set()
            try:
                await asyncio.sleep(30)
            except asyncio.CancelledError:
                aqi_cancelled.set()
                raise
            return httpx.Response(200, json={"hourly": {"european_aqi": [1]}})
        await aqi_started.wait()
        return httpx.Response(502, text="bad gateway")

    with pytest.raises(UpstreamError) as exc_info:
        await _client(handler).fetch_weather(COORD)

    assert exc_info.value.provider == FORECAST_PROVIDER
    assert aqi_cancelled.is_set()


@pytest.mark.anyio
async def test_fetch_weather_handles_timeout():
    def handler(request: httpx.Request):
        raise httpx.ReadTimeout("timeout", request=request)

    with pytest.raises(UpstreamError) as exc_info:
        await _client(handler).fetch_weather(COORD)

    assert "timed out" in str(exc_info.value)


@pytest.mark.anyio
async def test_fetch_weather_handles_connection_error():
    def handler(request: httpx.Request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(UpstreamError):
        await _client(handler).fetch_weather(COORD)


@pytest.mark.anyio
async def test_fetch_rain_forecast_requests_six_hours():
    payload = {
        "hourly": {
            "time": [f"2024-06-01T{hour:02d}:00" for hour in range(12, 18)],
            "precipitation_probability": [5, 10, 35, 45, 20, 15],
            "precipitation": [0.0, 0.0, 0.3, 0.9, 0.0, 0.0],
        }
    }

    def handler(request: httpx.Request):
        assert request.url.host == "forecast.test"
        assert request.url.params["forecast_hours"] == "6"
        assert request.url.params["timezone"] == "Asia/Jakarta"
        assert request.url.params["hourly"] == "precipitation_probability,precipitation"
        return httpx.Response(200, json=payload)

    forecast = await _client(handler).fetch_rain_forecast(COORD)

    assert forecast.max_probability == 45
    assert forecast.avg_rain_mm == 0.2
    assert forecast.prediction == RainPrediction.MODERATE
    assert len(forecast.hourly_forecast) == 6
    assert forecast.hourly_forecast[3].duration_label == "4 hours from now"


@pytest.mark.anyio
async def test_fetch_rain_forecast_degrades_on_empty_series():
    def handler(request: httpx.Request):
        return httpx.Response(
            200, json={"hourly": {"time": [], "precipitation_probability": [], "precipitation": []}}
        )

    forecast = await _client(handler).fetch_rain_forecast(COORD)

    assert forecast.prediction == RainPrediction.UNAVAILABLE
    assert forecast.max_probability is None
    assert forecast.avg_rain_mm is None
    assert forecast.hourly_forecast == []


@pytest.mark.anyio
async def test_fetch_rain_forecast_surfaces_http_error():
    def handler(request: httpx.Request):
        return httpx.Response(500, text="boom")

    with pytest.raises(UpstreamError) as exc_info:
        await _client(handler).fetch_rain_forecast(COORD)

    assert exc_info.value.provider == FORECAST_PROVIDER


@pytest.mark.anyio
async def test_fetch_rain_forecast_rejects_non_numeric_probability():
    def handler(request: httpx.Request):
        return httpx.Response(
            200,
            json={
                "hourly": {
                    "precipitation_probability": [5, "heavy", 40],
                    "precipitation": [0.0, 0.1, 0.4],
                }
            },
        )

    with pytest.raises(UpstreamError) as exc_info:
        await _client(handler).fetch_rain_forecast(COORD)

    assert exc_info.value.provider == FORECAST_PROVIDER
    assert exc_info.value.endpoint == FORECAST_URL
