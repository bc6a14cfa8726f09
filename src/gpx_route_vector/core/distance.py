"""Great-circle distance between track samples."""

import logging
import math

from ..models import Sample, Track

logger = logging.getLogger(__name__)

# Mean Earth radius (IUGG), metres
EARTH_RADIUS_M = 6_371_008.8

# Consecutive points further apart than this are treated as GPS drift.
# Tunable per call through max_jump_m.
MAX_JUMP_M = 200.0


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in metres between two lat/lon pairs (degrees)."""
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2 +
        math.cos(lat1_rad) * math.cos(lat2_rad) *
        math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def distance(a: Sample, b: Sample, max_jump_m: float = MAX_JUMP_M) -> float:
    """Distance in metres from a to b, or 0 if the jump looks like GPS drift.

    The samples themselves are never rejected here; only the pair's
    contribution to cumulative distance is zeroed.
    """
    d = haversine_m(a.lat, a.lon, b.lat, b.lon)
    if d > max_jump_m:
        logger.warning("Abnormal distance %.2fm between samples, likely GPS drift", d)
        return 0.0
    return d


def segment_distances(track: Track, max_jump_m: float = MAX_JUMP_M) -> list[float]:
    """Per-pair distances for consecutive samples; length is len(track) - 1."""
    pts = track.points
    return [distance(pts[i - 1], pts[i], max_jump_m) for i in range(1, len(pts))]
