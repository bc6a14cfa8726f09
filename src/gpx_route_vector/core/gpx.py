"""GPX track parsing.

Two strategies with different fidelity:

- ``parse_gpx_document`` walks the XML tree and keeps elevation and
  timestamps (parsed the way gpxpy parses GPX times).
- ``parse_gpx_text`` scans raw text for ``<trkpt lat=".." lon="..">``
  records and keeps coordinates only. It tolerates truncated or
  otherwise unparseable documents.
"""

import logging
import re
import xml.etree.ElementTree as ET
from typing import Literal

import gpxpy.gpx
import gpxpy.gpxfield

from ..errors import MalformedFieldError, ParseError
from ..models import Sample, Track, sample_from_raw

logger = logging.getLogger(__name__)

ParseMode = Literal["structured", "pattern"]

_GPX_ROOT_RE = re.compile(r"<gpx\b", re.IGNORECASE)
_TRKPT_RE = re.compile(r'<trkpt\s+lat="([^"]+)"\s+lon="([^"]+)">([\s\S]*?)</trkpt>')


def _require_text(source) -> str:
    if source is None or source == "":
        raise ParseError("File content is empty")
    if not isinstance(source, str):
        raise ParseError("File content format error")
    if not source.strip():
        raise ParseError("File content is empty")
    return source


def _to_track(samples: list[Sample], found: int) -> Track:
    if not samples:
        if found == 0:
            raise ParseError("No track points found")
        raise ParseError(f"No valid track points found ({found} skipped)")
    if len(samples) < found:
        logger.info("Kept %d of %d track points", len(samples), found)
    return Track(points=samples)


def _local_name(tag) -> str:
    """Tag name without its XML namespace."""
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _child_text(element, name: str):
    for child in element:
        if _local_name(child.tag) == name:
            return (child.text or "").strip() or None
    return None


def _point_time(raw: str | None, index: int):
    if raw is None:
        return None
    try:
        return gpxpy.gpxfield.parse_time(raw)
    except (gpxpy.gpx.GPXException, ValueError) as e:
        logger.warning("Ignoring unparseable time on track point %d: %s", index, e)
        return None


def parse_gpx_document(source: str) -> Track:
    """Parse a GPX document tree and extract its track points in document order.

    Coordinates are read from each ``<trkpt>``'s raw attributes so that one
    bad point is skipped instead of failing the document. Raises ParseError
    if the content is not a GPX document, the XML is broken, or no usable
    track points remain.
    """
    text = _require_text(source)
    if not _GPX_ROOT_RE.search(text):
        raise ParseError("Not a valid GPX file")

    try:
        root = ET.fromstring(text.lstrip("\ufeff").strip())
    except ET.ParseError as e:
        raise ParseError(f"XML parse error: {e}") from e
    if _local_name(root.tag).lower() != "gpx":
        raise ParseError("Not a valid GPX file")

    samples = []
    found = 0
    for element in root.iter():
        if _local_name(element.tag) != "trkpt":
            continue
        index = found
        found += 1
        try:
            samples.append(sample_from_raw(
                element.get("lat"),
                element.get("lon"),
                elevation=_child_text(element, "ele"),
                time=_point_time(_child_text(element, "time"), index),
            ))
        except MalformedFieldError as e:
            logger.warning("Skipping invalid track point %d: %s", index, e)

    logger.debug("Structured parse found %d track points", found)
    return _to_track(samples, found)


def parse_gpx_text(source: str) -> Track:
    """Extract track points from raw GPX text by pattern matching.

    Elevation and time are not extracted. Raises ParseError if no
    ``<trkpt>`` record matches or none of the matches has usable coordinates.
    """
    text = _require_text(source)

    samples = []
    found = 0
    for match in _TRKPT_RE.finditer(text):
        found += 1
        try:
            samples.append(sample_from_raw(match.group(1), match.group(2)))
        except MalformedFieldError as e:
            logger.warning("Skipping invalid coordinate point: %s", e)

    logger.debug("Pattern parse found %d track points", found)
    return _to_track(samples, found)


class TrackParser:
    """Parse GPX content into a Track with one of the two strategies."""

    _strategies = {
        "structured": parse_gpx_document,
        "pattern": parse_gpx_text,
    }

    def __init__(self, mode: ParseMode = "structured"):
        if mode not in self._strategies:
            raise ValueError(f"Unknown parse mode {mode!r}")
        self.mode = mode

    def parse(self, source: str) -> Track:
        return self._strategies[self.mode](source)


def parse_gpx_file(filepath: str, mode: ParseMode = "structured") -> Track:
    """Read a GPX file from disk and parse it."""
    with open(filepath, "r", encoding="utf-8") as f:
        content = f.read()
    return TrackParser(mode).parse(content)
