"""Consolidated conditions and rain forecast endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from hikewise.errors import InputError, UpstreamError
from hikewise.models import AggregateResult, Coordinate, CoordinateRequest, RainForecast
from hikewise.services.aggregator import Aggregator, get_aggregator

router = APIRouter(tags=["weather"])

logger = logging.getLogger("hikewise.api.weather")


def _input_error(exc: InputError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"code": "invalid_coordinate", "message": str(exc)},
    )


def _upstream_error(exc: UpstreamError) -> HTTPException:
    logger.warning("Upstream failure from %s: %s", exc.provider, exc.args[0])
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail={
            "code": "upstream_error",
            "provider": exc.provider,
            "message": exc.args[0],
        },
    )


def _parse(lat, lon) -> Coordinate:
    try:
        return Coordinate.parse(lat, lon)
    except InputError as exc:
        raise _input_error(exc) from exc


async def _aggregate(coord: Coordinate, aggregator: Aggregator) -> AggregateResult:
    try:
        return await aggregator.aggregate(coord)
    except UpstreamError as exc:
        raise _upstream_error(exc) from exc


async def _rain_forecast(coord: Coordinate, aggregator: Aggregator) -> RainForecast:
    try:
        return await aggregator.rain_forecast(coord)
    except UpstreamError as exc:
        raise _upstream_error(exc) from exc


@router.get(
    "/weather/{lat}/{lon}",
    response_model=AggregateResult,
    summary="Get consolidated conditions for a coordinate",
)
async def get_weather(
    lat: str, lon: str, aggregator: Aggregator = Depends(get_aggregator)
) -> AggregateResult:
    """Weather, air quality, sun, moon and the hiking index in one response."""

    return await _aggregate(_parse(lat, lon), aggregator)


@router.post(
    "/weather",
    response_model=AggregateResult,
    summary="Get consolidated conditions for a coordinate in the body",
)
async def post_weather(
    request: CoordinateRequest, aggregator: Aggregator = Depends(get_aggregator)
) -> AggregateResult:
    return await _aggregate(_parse(request.lat, request.lon), aggregator)


@router.get(
    "/rain-forecast/{lat}/{lon}",
    response_model=RainForecast,
    summary="Get the short-horizon rain outlook for a coordinate",
)
async def get_rain_forecast(
    lat: str, lon: str, aggregator: Aggregator = Depends(get_aggregator)
) -> RainForecast:
    """Hourly precipitation chances for the next few hours."""

    return await _rain_forecast(_parse(lat, lon), aggregator)


@router.post(
    "/rain-forecast",
    response_model=RainForecast,
    summary="Get the short-horizon rain outlook for a coordinate in the body",
)
async def post_rain_forecast(
    request: CoordinateRequest, aggregator: Aggregator = Depends(get_aggregator)
) -> RainForecast:
    return await _rain_forecast(_parse(request.lat, request.lon), aggregator)
