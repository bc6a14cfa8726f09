"""Track summary statistics: distance, duration, pace."""

from .distance import MAX_JUMP_M, segment_distances
from .models import TrackStatistics
from ..models import Track


def _duration_s(track: Track) -> float:
    times = [p.time for p in track.points if p.time is not None]
    if len(times) < 2:
        return 0.0
    try:
        elapsed = (times[-1] - times[0]).total_seconds()
    except TypeError:
        # naive and aware timestamps mixed in one file
        return 0.0
    return max(0.0, elapsed)


def summarize(track: Track, max_jump_m: float = MAX_JUMP_M) -> TrackStatistics:
    """Aggregate a track into total distance, elapsed duration and pace.

    Duration spans the first and last timestamped samples in recording order.
    Missing timestamps or zero distance degrade to zeros rather than raising.
    """
    total = sum(segment_distances(track, max_jump_m))
    duration = _duration_s(track)
    pace = (duration / 60) / (total / 1000) if total > 0 else 0.0
    return TrackStatistics(
        total_distance_m=total,
        duration_s=duration,
        pace_min_per_km=pace,
    )
