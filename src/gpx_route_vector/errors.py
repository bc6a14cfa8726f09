"""Error taxonomy for the track-to-geometry pipeline."""


class RouteVectorError(Exception):
    """Base class for all gpx-route-vector errors."""


class ParseError(RouteVectorError):
    """Input is empty, unrecognized, syntactically broken, or has no valid points."""


class NoDataError(RouteVectorError):
    """A route was requested but no parsed track has been stored."""


class MalformedFieldError(RouteVectorError):
    """A single track point has an unusable lat/lon. Recovered by skipping the point."""
