"""Upstream data ingestors for Hikewise."""

from .fanout import gather_all_or_nothing
from .open_meteo import AIR_QUALITY_PROVIDER, FORECAST_PROVIDER, OpenMeteoClient

__all__ = [
    "AIR_QUALITY_PROVIDER",
    "FORECAST_PROVIDER",
    "OpenMeteoClient",
    "gather_all_or_nothing",
]
