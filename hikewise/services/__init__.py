"""Service-layer orchestration for the Hikewise backend."""

from .aggregator import Aggregator, aggregate, get_aggregator, rain_forecast

__all__ = ["Aggregator", "aggregate", "get_aggregator", "rain_forecast"]
