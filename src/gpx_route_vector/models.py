"""Pydantic domain models for GPX track data."""

import math
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import MalformedFieldError


class Sample(BaseModel):
    """One track point. Lat/lon are always finite and in range."""

    lat: float = Field(ge=-90, le=90, allow_inf_nan=False)
    lon: float = Field(ge=-180, le=180, allow_inf_nan=False)
    elevation: Optional[float] = None
    time: Optional[datetime] = None


def sample_from_raw(lat, lon, elevation=None, time=None) -> Sample:
    """Build a Sample from raw attribute values.

    Raises MalformedFieldError when lat/lon cannot be used. An unusable
    elevation is dropped rather than failing the point.
    """
    try:
        lat_f = float(lat)
        lon_f = float(lon)
    except (TypeError, ValueError) as e:
        raise MalformedFieldError(f"lat={lat!r}, lon={lon!r}: {e}") from e

    if elevation is not None:
        try:
            elevation = float(elevation)
        except (TypeError, ValueError):
            elevation = None
        if elevation is not None and not math.isfinite(elevation):
            elevation = None

    try:
        return Sample(lat=lat_f, lon=lon_f, elevation=elevation, time=time)
    except ValidationError as e:
        raise MalformedFieldError(
            f"lat={lat!r}, lon={lon!r}: {e.error_count()} validation error(s)"
        ) from e


class GeometryBounds(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    @property
    def lat_range(self) -> float:
        return self.max_lat - self.min_lat

    @property
    def lon_range(self) -> float:
        return self.max_lon - self.min_lon

    @property
    def is_degenerate(self) -> bool:
        """True for single-point tracks and tracks along one parallel or meridian."""
        return self.lat_range == 0 or self.lon_range == 0


class Track(BaseModel):
    """Ordered, non-empty sequence of samples in recording order."""

    points: list[Sample] = Field(min_length=1)

    def bounds(self) -> GeometryBounds:
        lats = [p.lat for p in self.points]
        lons = [p.lon for p in self.points]
        return GeometryBounds(
            min_lat=min(lats),
            max_lat=max(lats),
            min_lon=min(lons),
            max_lon=max(lons),
        )

    def has_timestamps(self) -> bool:
        return any(p.time is not None for p in self.points)

    def __len__(self) -> int:
        return len(self.points)
