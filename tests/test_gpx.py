"""Tests for GPX parsing in structured and pattern modes."""
import logging
from datetime import datetime, timezone

import pytest

TWO_POINTS = (
    '<trkpt lat="40.0" lon="-105.0"></trkpt>'
    '<trkpt lat="40.001" lon="-105.001"></trkpt>'
)


def _gpx(trkpts: str) -> str:
    return (
        '<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">\n'
        "  <trk><name>Morning Run</name><trkseg>\n"
        f"{trkpts}\n"
        "  </trkseg></trk>\n"
        "</gpx>\n"
    )


TIMED = _gpx(
    '<trkpt lat="40.0" lon="-105.0"><ele>1600.0</ele><time>2024-05-01T07:00:00Z</time></trkpt>\n'
    '<trkpt lat="40.0005" lon="-105.0"><ele>1601.5</ele><time>2024-05-01T07:01:00Z</time></trkpt>\n'
    '<trkpt lat="40.001" lon="-105.0"><ele>1603.0</ele><time>2024-05-01T07:02:00Z</time></trkpt>'
)


class TestParseGpxDocument:
    def test_extracts_points_in_order(self):
        from gpx_route_vector.core.gpx import parse_gpx_document
        track = parse_gpx_document(TIMED)
        assert len(track) == 3
        assert [p.lat for p in track.points] == [40.0, 40.0005, 40.001]

    def test_extracts_elevation_and_time(self):
        from gpx_route_vector.core.gpx import parse_gpx_document
        track = parse_gpx_document(TIMED)
        first = track.points[0]
        assert first.elevation == 1600.0
        assert first.time == datetime(2024, 5, 1, 7, 0, tzinfo=timezone.utc)

    def test_missing_ele_and_time_are_none(self):
        from gpx_route_vector.core.gpx import parse_gpx_document
        track = parse_gpx_document(_gpx(TWO_POINTS))
        assert all(p.elevation is None and p.time is None for p in track.points)

    def test_missing_root_marker(self):
        from gpx_route_vector.core.gpx import parse_gpx_document
        from gpx_route_vector.errors import ParseError
        with pytest.raises(ParseError, match="Not a valid GPX"):
            parse_gpx_document(TWO_POINTS)

    def test_syntax_error(self):
        from gpx_route_vector.core.gpx import parse_gpx_document
        from gpx_route_vector.errors import ParseError
        with pytest.raises(ParseError):
            parse_gpx_document('<gpx version="1.1"><trk><trkseg><trkpt lat="1"')

    def test_no_track_points(self):
        from gpx_route_vector.core.gpx import parse_gpx_document
        from gpx_route_vector.errors import ParseError
        with pytest.raises(ParseError, match="No track points"):
            parse_gpx_document(_gpx(""))

    def test_non_finite_point_is_skipped(self, caplog):
        from gpx_route_vector.core.gpx import parse_gpx_document
        content = _gpx(
            '<trkpt lat="40.0" lon="-105.0"></trkpt>\n'
            '<trkpt lat="nan" lon="-105.0"></trkpt>\n'
            '<trkpt lat="40.001" lon="-105.001"></trkpt>'
        )
        with caplog.at_level(logging.WARNING, logger="gpx_route_vector.core.gpx"):
            track = parse_gpx_document(content)
        assert len(track) == 2
        assert any("Skipping invalid track point" in r.message for r in caplog.records)

    def test_non_numeric_point_is_skipped(self, caplog):
        from gpx_route_vector.core.gpx import parse_gpx_document
        content = _gpx(
            '<trkpt lat="40.0" lon="-105.0"><time>2024-05-01T07:00:00Z</time></trkpt>\n'
            '<trkpt lat="abc" lon="-105.0"><time>2024-05-01T07:00:30Z</time></trkpt>\n'
            '<trkpt lon="-105.0"></trkpt>\n'
            '<trkpt lat="40.001" lon="-105.001"><time>2024-05-01T07:01:00Z</time></trkpt>'
        )
        with caplog.at_level(logging.WARNING, logger="gpx_route_vector.core.gpx"):
            track = parse_gpx_document(content)
        assert [p.lat for p in track.points] == [40.0, 40.001]
        assert track.points[1].time == datetime(2024, 5, 1, 7, 1, tzinfo=timezone.utc)
        skipped = [r for r in caplog.records if "Skipping invalid track point" in r.message]
        assert len(skipped) == 2

    def test_bad_time_keeps_point(self):
        from gpx_route_vector.core.gpx import parse_gpx_document
        track = parse_gpx_document(_gpx(
            '<trkpt lat="40.0" lon="-105.0"><time>garbage</time></trkpt>'
        ))
        assert len(track) == 1
        assert track.points[0].time is None

    def test_xml_declaration_and_no_namespace(self):
        from gpx_route_vector.core.gpx import parse_gpx_document
        content = (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<gpx version="1.1"><trk><trkseg>'
            '<trkpt lat="1.0" lon="2.0"><ele>12.5</ele></trkpt>'
            '</trkseg></trk></gpx>'
        )
        track = parse_gpx_document(content)
        assert track.points[0].elevation == 12.5

    def test_root_must_be_gpx(self):
        from gpx_route_vector.core.gpx import parse_gpx_document
        from gpx_route_vector.errors import ParseError
        with pytest.raises(ParseError, match="Not a valid GPX"):
            parse_gpx_document('<kml><!-- <gpx> --><trkpt lat="1" lon="2"/></kml>')

    def test_all_points_invalid(self):
        from gpx_route_vector.core.gpx import parse_gpx_document
        from gpx_route_vector.errors import ParseError
        with pytest.raises(ParseError, match="No valid track points"):
            parse_gpx_document(_gpx('<trkpt lat="nan" lon="1.0"></trkpt>'))


class TestParseGpxText:
    def test_two_point_record(self):
        from gpx_route_vector.core.gpx import parse_gpx_text
        track = parse_gpx_text(TWO_POINTS)
        assert len(track) == 2
        assert (track.points[1].lat, track.points[1].lon) == (40.001, -105.001)

    def test_does_not_extract_time_or_elevation(self):
        from gpx_route_vector.core.gpx import parse_gpx_text
        track = parse_gpx_text(TIMED)
        assert len(track) == 3
        assert all(p.time is None and p.elevation is None for p in track.points)

    def test_tolerates_truncated_document(self):
        from gpx_route_vector.core.gpx import parse_gpx_text
        track = parse_gpx_text(TIMED[:TIMED.index("</trkseg>")] + "<trkpt lat=")
        assert len(track) == 3

    def test_non_numeric_point_is_skipped(self, caplog):
        from gpx_route_vector.core.gpx import parse_gpx_text
        content = (
            '<trkpt lat="abc" lon="-105.0"></trkpt>'
            '<trkpt lat="40.0" lon="-105.0"></trkpt>'
            '<trkpt lat="95.0" lon="-105.0"></trkpt>'
        )
        with caplog.at_level(logging.WARNING, logger="gpx_route_vector.core.gpx"):
            track = parse_gpx_text(content)
        assert len(track) == 1
        skipped = [r for r in caplog.records if "Skipping invalid coordinate" in r.message]
        assert len(skipped) == 2

    def test_no_matching_records(self):
        from gpx_route_vector.core.gpx import parse_gpx_text
        from gpx_route_vector.errors import ParseError
        with pytest.raises(ParseError, match="No track points"):
            parse_gpx_text(_gpx(""))

    def test_all_matches_invalid(self):
        from gpx_route_vector.core.gpx import parse_gpx_text
        from gpx_route_vector.errors import ParseError
        with pytest.raises(ParseError, match="No valid track points"):
            parse_gpx_text('<trkpt lat="x" lon="y"></trkpt>')

    @pytest.mark.parametrize("content", [None, "", "   \n"])
    def test_empty_content(self, content):
        from gpx_route_vector.core.gpx import parse_gpx_text
        from gpx_route_vector.errors import ParseError
        with pytest.raises(ParseError, match="empty"):
            parse_gpx_text(content)

    def test_non_string_content(self):
        from gpx_route_vector.core.gpx import parse_gpx_text
        from gpx_route_vector.errors import ParseError
        with pytest.raises(ParseError, match="format"):
            parse_gpx_text(b'<trkpt lat="1" lon="2"></trkpt>')


class TestTrackParser:
    def test_modes_differ_in_fidelity(self):
        from gpx_route_vector.core.gpx import TrackParser
        structured = TrackParser("structured").parse(TIMED)
        pattern = TrackParser("pattern").parse(TIMED)
        assert len(structured) == len(pattern)
        assert structured.has_timestamps() is True
        assert pattern.has_timestamps() is False

    def test_pattern_mode_does_not_need_root_marker(self):
        from gpx_route_vector.core.gpx import TrackParser
        assert len(TrackParser("pattern").parse(TWO_POINTS)) == 2

    def test_unknown_mode(self):
        from gpx_route_vector.core.gpx import TrackParser
        with pytest.raises(ValueError):
            TrackParser("smart")

    def test_parse_gpx_file(self, tmp_path):
        from gpx_route_vector.core.gpx import parse_gpx_file
        path = tmp_path / "run.gpx"
        path.write_text(TIMED, encoding="utf-8")
        assert len(parse_gpx_file(str(path))) == 3
        assert len(parse_gpx_file(str(path), mode="pattern")) == 3
