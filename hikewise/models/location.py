"""Geographic coordinate model and request payloads carrying one."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from hikewise.errors import InputError


class Coordinate(BaseModel):
    """A validated latitude/longitude pair in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")

    @classmethod
    def parse(cls, lat: Any, lon: Any) -> "Coordinate":
        """Build a coordinate from caller-supplied strings or numbers.

        Raises ``InputError`` when either value is missing, is not numeric or
        falls outside the valid range.
        """

        if lat is None or lon is None or str(lat).strip() == "" or str(lon).strip() == "":
            raise InputError("Missing lat/lon")
        try:
            latitude = float(str(lat).strip())
            longitude = float(str(lon).strip())
        except ValueError as exc:
            raise InputError(f"Invalid coordinate: lat={lat!r} lon={lon!r}") from exc

        try:
            return cls(latitude=latitude, longitude=longitude)
        except ValidationError as exc:
            raise InputError(
                f"Coordinate out of range: lat={latitude} lon={longitude}"
            ) from exc


class CoordinateRequest(BaseModel):
    """Body form of a coordinate lookup; values may arrive as strings."""

    lat: Optional[Any] = Field(default=None, description="Latitude in decimal degrees")
    lon: Optional[Any] = Field(default=None, description="Longitude in decimal degrees")

    def to_coordinate(self) -> Coordinate:
        return Coordinate.parse(self.lat, self.lon)


__all__ = ["Coordinate", "CoordinateRequest"]
