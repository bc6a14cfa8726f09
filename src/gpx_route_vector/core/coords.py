"""Geographic to canvas coordinate transforms."""

from typing import Iterable, Union

import numpy as np

from .models import PathCommand, PathDescription
from ..models import GeometryBounds, Sample, Track

UNIT_SQUARE_SIZE = 1000.0


def compute_bounds(points: Union[Track, Iterable[Sample]]) -> GeometryBounds:
    """Lat/lon extent of a track or any iterable of samples."""
    if isinstance(points, Track):
        return points.bounds()
    pts = list(points)
    if not pts:
        raise ValueError("Cannot compute bounds of an empty point list")
    return Track(points=pts).bounds()


def fit_dimensions(bounds: GeometryBounds, base_size: float) -> tuple[float, float]:
    """Canvas (width, height) that preserves the track's lat/lon aspect ratio.

    The longer axis gets base_size and the shorter one scales with it.
    A single-point track gets a square of base_size.
    """
    lat_range = bounds.lat_range
    lon_range = bounds.lon_range

    if lon_range > lat_range:
        return base_size, base_size * (lat_range / lon_range)
    if lat_range > 0:
        return base_size * (lon_range / lat_range), base_size
    return base_size, base_size


class GeoToCanvasTransform:
    """Transforms geographic coordinates (lat/lon) to canvas coordinates.

    Canvas coordinate system:
    - origin at the top-left corner
    - X: east-west (longitude), west edge at X=0
    - Y: north-south (latitude), north edge at Y=0

    An axis with zero range (all samples on one parallel or meridian)
    maps to the middle of the canvas.
    """

    def __init__(self, bounds: GeometryBounds, width: float, height: float):
        self.bounds = bounds
        self.width = float(width)
        self.height = float(height)

    def geo_to_canvas(self, lat: float, lon: float) -> tuple[float, float]:
        """Convert lat/lon to canvas X, Y."""
        x, y = self.geo_to_canvas_array(np.array([lat]), np.array([lon]))
        return float(x[0]), float(y[0])

    def geo_to_canvas_array(
        self, lats: np.ndarray, lons: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        """Convert arrays of lat/lon to canvas X, Y, clamped to the canvas."""
        b = self.bounds
        lon_range = b.lon_range
        lat_range = b.lat_range

        if lon_range == 0:
            x = np.full(lons.shape, self.width / 2)
        else:
            x = (lons - b.min_lon) / lon_range * self.width
        if lat_range == 0:
            y = np.full(lats.shape, self.height / 2)
        else:
            y = (b.max_lat - lats) / lat_range * self.height

        # absorb floating-point overshoot at the bounds
        return np.clip(x, 0, self.width), np.clip(y, 0, self.height)

    def to_path(self, track: Track) -> PathDescription:
        lats = np.array([p.lat for p in track.points], dtype=float)
        lons = np.array([p.lon for p in track.points], dtype=float)
        xs, ys = self.geo_to_canvas_array(lats, lons)

        commands = [
            PathCommand(kind="M" if i == 0 else "L", x=float(x), y=float(y))
            for i, (x, y) in enumerate(zip(xs, ys))
        ]
        return PathDescription(commands=commands, width=self.width, height=self.height)


def project(track: Track, width: float, height: float) -> PathDescription:
    """Project a track into a width x height canvas.

    One command per sample, in recording order: a MoveTo for the first
    sample and a LineTo for every other one. Pair with fit_dimensions to
    keep the track's aspect ratio.
    """
    return GeoToCanvasTransform(track.bounds(), width, height).to_path(track)


def project_to_unit_square(track: Track, size: float = UNIT_SQUARE_SIZE) -> PathDescription:
    """Stretch a track over a fixed size x size square, ignoring aspect ratio.

    Unlike project, the canvas does not depend on the data: both axes are
    normalized independently to 0..size.
    """
    return GeoToCanvasTransform(track.bounds(), size, size).to_path(track)
