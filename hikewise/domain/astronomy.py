"""Sun and moon ephemeris computed with PyEphem.

Solar events use the sun's centre against a fixed horizon with refraction
disabled: -0:50 for sunrise/sunset and +6 degrees for the end of the morning
golden hour. The lunar phase is the moon's ecliptic elongation from the sun as
a fraction of a full turn, so 0 is new and 0.5 is full.

Every function here is pure: the instant is always passed in explicitly.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import NamedTuple, Optional
from zoneinfo import ZoneInfo

import ephem

from hikewise.models.astronomy import MoonPhase, MoonPhaseName, SunTimes
from hikewise.models.location import Coordinate

SUNRISE_HORIZON = "-0:50"
GOLDEN_HOUR_HORIZON = "6"

TIME_FORMAT = "%H:%M"

# (upper bound exclusive, phase); anything above 0.97 wraps back to a new moon
PHASE_BINS: tuple[tuple[float, MoonPhaseName], ...] = (
    (0.03, MoonPhaseName.NEW_MOON),
    (0.25, MoonPhaseName.WAXING_CRESCENT),
    (0.27, MoonPhaseName.FIRST_QUARTER),
    (0.50, MoonPhaseName.WAXING_GIBBOUS),
    (0.53, MoonPhaseName.FULL_MOON),
    (0.75, MoonPhaseName.WANING_GIBBOUS),
    (0.77, MoonPhaseName.LAST_QUARTER),
)
NEW_MOON_AFTER = 0.97


class SolarEvents(NamedTuple):
    """UTC instants of today's solar events; None when the sun never crosses."""

    sunrise: Optional[datetime]
    golden_hour_end: Optional[datetime]
    sunset: Optional[datetime]


def _to_ephem_date(moment: datetime) -> ephem.Date:
    # ephem reads datetime fields as UTC and ignores tzinfo
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc).replace(tzinfo=None)
    return ephem.Date(moment)


def _to_utc(value: ephem.Date) -> datetime:
    return value.datetime().replace(tzinfo=timezone.utc)


def _observer(coord: Coordinate, date: ephem.Date, horizon: str) -> ephem.Observer:
    observer = ephem.Observer()
    observer.lat = str(coord.latitude)
    observer.lon = str(coord.longitude)
    observer.elevation = 0
    observer.pressure = 0
    observer.horizon = horizon
    observer.date = date
    return observer


def _nearest_transit(coord: Coordinate, date: ephem.Date) -> ephem.Date:
    """Solar noon of the day ``date`` falls in, measured from local transit."""

    observer = _observer(coord, date, SUNRISE_HORIZON)
    sun = ephem.Sun()
    upcoming = observer.next_transit(sun)
    previous = observer.previous_transit(sun)
    return upcoming if upcoming - date < date - previous else previous


def _crossing(coord: Coordinate, noon: ephem.Date, horizon: str, rising: bool) -> Optional[datetime]:
    observer = _observer(coord, noon, horizon)
    sun = ephem.Sun()
    try:
        if rising:
            event = observer.previous_rising(sun, use_center=True)
        else:
            event = observer.next_setting(sun, use_center=True)
    except ephem.CircumpolarError:
        # Polar day or polar night
        return None
    return _to_utc(event)


def solar_events(coord: Coordinate, now: datetime) -> SolarEvents:
    """Compute sunrise, morning golden-hour end and sunset around ``now``."""

    noon = _nearest_transit(coord, _to_ephem_date(now))
    return SolarEvents(
        sunrise=_crossing(coord, noon, SUNRISE_HORIZON, rising=True),
        golden_hour_end=_crossing(coord, noon, GOLDEN_HOUR_HORIZON, rising=True),
        sunset=_crossing(coord, noon, SUNRISE_HORIZON, rising=False),
    )


def _format_local(moment: Optional[datetime], tz: ZoneInfo) -> Optional[str]:
    if moment is None:
        return None
    return moment.astimezone(tz).strftime(TIME_FORMAT)


def sun_times(coord: Coordinate, now: datetime, tz_name: str) -> SunTimes:
    """Format today's solar events as local times in ``tz_name``.

    The display timezone is fixed by configuration and does not follow the
    coordinate.
    """

    tz = ZoneInfo(tz_name)
    events = solar_events(coord, now)
    return SunTimes(
        sunrise=_format_local(events.sunrise, tz),
        sunset=_format_local(events.sunset, tz),
        golden_hour=_format_local(events.golden_hour_end, tz),
    )


def moon_illumination(now: datetime) -> tuple[float, float]:
    """Return (illuminated fraction, phase) where phase 0 is new and 0.5 is full."""

    date = _to_ephem_date(now)
    moon = ephem.Moon(date)
    sun = ephem.Sun(date)

    elongation = float(ephem.Ecliptic(moon).lon) - float(ephem.Ecliptic(sun).lon)
    phase = (elongation % (2 * math.pi)) / (2 * math.pi)
    return float(moon.moon_phase), phase


def classify_moon_phase(phase: float) -> MoonPhaseName:
    """Name a continuous phase value in [0, 1]."""

    if phase > NEW_MOON_AFTER:
        return MoonPhaseName.NEW_MOON
    for upper_bound, name in PHASE_BINS:
        if phase < upper_bound:
            return name
    return MoonPhaseName.WANING_CRESCENT


def moon_phase(now: datetime) -> MoonPhase:
    """Current lunar phase; independent of the observer's location."""

    fraction, phase = moon_illumination(now)
    return MoonPhase(
        phase_name=classify_moon_phase(phase),
        illumination=round(fraction, 2),
    )


__all__ = [
    "SolarEvents",
    "classify_moon_phase",
    "moon_illumination",
    "moon_phase",
    "solar_events",
    "sun_times",
]
