"""Test module for svgpathdata.arc

The tests are run using pytest.
Center parameterization and curve points are cross-checked against svgpathtools.
"""

import logging
import math

import numpy as np
import pytest
import svgpathtools

from svgpathdata.arc import ArcNormalizer, normalize_arcs
from svgpathdata.common import QUARTER_ARC_KAPPA
from svgpathdata.geom import Point
from svgpathdata.parser import parse
from svgpathdata.segment import Arc, CubicCurve, Line, SubPath


def cubic_point(start, cubic, t):
    """Evaluate a cubic Bezier curve at parameter t."""
    points = np.array([start.as_tuple(), *(p.as_tuple() for p in cubic.control_points), cubic.to_point.as_tuple()])
    weights = np.array([(1 - t) ** 3, 3 * t * (1 - t) ** 2, 3 * t**2 * (1 - t), t**3])
    return weights @ points


###############################################################################
# segment_count
###############################################################################


class TestSegmentCount:
    """Number of cubic curves used per arc sweep."""

    @pytest.mark.parametrize(
        "delta_theta, expected",
        [
            (0.1, 1),
            (math.pi / 2, 1),
            (math.pi / 2 + 1e-9, 1),
            (math.pi / 2 + 1e-3, 2),
            (-math.pi, 2),
            (3 * math.pi / 2, 3),
            (2 * math.pi - 1e-3, 4),
        ],
    )
    def test_segment_count(self, delta_theta, expected):
        """At most 90 degrees per cubic; sweeps hardly above a quarter are not split."""
        assert ArcNormalizer.segment_count(delta_theta) == expected


###############################################################################
# to_cubics
###############################################################################


class TestToCubics:
    """Approximation of single arcs."""

    def test_small_arc_is_one_cubic(self):
        """An arc sweeping less than 90 degrees becomes exactly one cubic curve."""
        cubics = ArcNormalizer.to_cubics(Point(0, 0), Arc(100, 100, 0, False, False, Point(50, 0)))
        assert len(cubics) == 1
        assert isinstance(cubics[0], CubicCurve)
        assert cubics[0].to_point == Point(50, 0)

    @pytest.mark.parametrize(
        "arc",
        [
            Arc(0, 10, 0, False, True, Point(5, 5)),
            Arc(10, 0, 0, False, True, Point(5, 5)),
            Arc(10, 10, 0, True, True, Point(0, 0)),
        ],
    )
    def test_degenerate_arc_is_line(self, arc):
        """Zero radius or zero chord give a straight line to the same end point."""
        assert ArcNormalizer.to_cubics(Point(0, 0), arc) == [Line(arc.to_point)]
        assert ArcNormalizer.parameterize(Point(0, 0), arc) is None

    def test_semicircle(self):
        """A half circle is split into two quarters using the quarter circle constant."""
        cubics = ArcNormalizer.to_cubics(Point(0, 0), Arc(50, 50, 0, False, True, Point(100, 0)))
        assert len(cubics) == 2
        assert cubics[0].to_point.x == pytest.approx(50.0)
        assert cubics[0].to_point.y == pytest.approx(-50.0)
        assert cubics[0].control_point1.x == pytest.approx(0.0, abs=1e-9)
        assert cubics[0].control_point1.y == pytest.approx(-50.0 * QUARTER_ARC_KAPPA)
        assert cubics[1].to_point == Point(100, 0)

    def test_three_quarter_circle(self):
        """A 270 degree arc needs three cubic curves."""
        cubics = ArcNormalizer.to_cubics(Point(50, 0), Arc(50, 50, 0, True, True, Point(0, 50)))
        assert len(cubics) == 3
        assert cubics[-1].to_point == Point(0, 50)

    def test_radii_scaled_up(self):
        """Radii too small to span the chord are scaled until they do."""
        params = ArcNormalizer.parameterize(Point(0, 0), Arc(1, 1, 0, False, True, Point(10, 0)))
        assert params.radius_x == pytest.approx(5.0)
        assert params.radius_y == pytest.approx(5.0)
        assert params.center.x == pytest.approx(5.0)
        assert params.center.y == pytest.approx(0.0, abs=1e-9)

        cubics = ArcNormalizer.to_cubics(Point(0, 0), Arc(1, 1, 0, False, True, Point(10, 0)))
        assert len(cubics) == 2
        assert cubics[0].to_point.x == pytest.approx(5.0)
        assert cubics[0].to_point.y == pytest.approx(-5.0)

    def test_negative_radii(self):
        """The sign of the radii is ignored."""
        negative = ArcNormalizer.to_cubics(Point(0, 0), Arc(-50, -30, 10, True, False, Point(40, 20)))
        positive = ArcNormalizer.to_cubics(Point(0, 0), Arc(50, 30, 10, True, False, Point(40, 20)))
        assert negative == positive

    def test_end_point_is_exact(self):
        """The last cubic ends exactly at the arc's end point."""
        end = Point(0.1 + 0.2, 1 / 3)
        cubics = ArcNormalizer.to_cubics(Point(7.7, -3.3), Arc(3, 2, 33, True, False, end))
        assert cubics[-1].to_point == end

    @pytest.mark.parametrize(
        "arc",
        [
            Arc(1e200, 1e200, 0, False, True, Point(10, 0)),
            Arc(1e-200, 1e-200, 0, False, True, Point(10, 0)),
            Arc(1, 1, 0, False, True, Point(2e-170, 0)),
            Arc(1e300, 1e-300, 45, True, False, Point(1e300, -1e300)),
            Arc(1e-320, 1e-320, 0, True, True, Point(1e-321, 0)),
        ],
    )
    def test_extreme_magnitudes(self, arc):
        """Radii and chords far apart in magnitude still give finite segments ending at the arc's end."""
        segments = ArcNormalizer.to_cubics(Point(0, 0), arc)
        assert segments
        assert segments[-1].to_point == arc.to_point
        for segment in segments:
            assert all(point.is_finite() for point in (*segment.control_points, segment.to_point))

    def test_extreme_arc_in_document(self):
        """Huge radii parse and normalize without error."""
        (sub_path,) = parse("M0,0 A1e200 1e200 0 0 1 10,0")
        segments = list(normalize_arcs(sub_path).segments)
        assert segments[-1].to_point == Point(10, 0)

    def test_parameterization_is_finite(self):
        """A returned parameterization never holds infinity or NaN."""
        params = ArcNormalizer.parameterize(Point(0, 0), Arc(1e-200, 1e-200, 0, False, True, Point(10, 0)))
        assert params.is_finite()
        assert params.radius_x == pytest.approx(5.0)

    def test_debug_log(self, caplog):
        """The number of cubic curves per arc is logged at debug level."""
        caplog.set_level(logging.DEBUG, logger="svgpathdata.arc")
        ArcNormalizer.to_cubics(Point(0, 0), Arc(50, 50, 0, False, True, Point(100, 0)))
        assert "arc sweep 3.141593 rad split into 2 cubic(s)" in caplog.text


###############################################################################
# Cross-check with svgpathtools
###############################################################################

ORACLE_CASES = [
    (Point(0, 0), Arc(100, 100, 0, False, False, Point(50, 0))),
    (Point(10, 60), Arc(60, 45, -30, False, True, Point(90, 60))),
    (Point(0, 0), Arc(40, 40, 0, True, False, Point(60, 20))),
    (Point(0, 0), Arc(30, 20, 45, True, True, Point(20, -10))),
    (Point(-5, 3), Arc(12, 40, 110, False, False, Point(8, 30))),
]


class TestArcOracle:
    """Compare against the arc implementation of svgpathtools."""

    @staticmethod
    def oracle(start, arc):
        return svgpathtools.Arc(
            start=complex(*start.as_tuple()),
            radius=complex(arc.radius_x, arc.radius_y),
            rotation=arc.rotation_degrees,
            large_arc=arc.large_arc_flag,
            sweep=arc.sweep_flag,
            end=complex(*arc.to_point.as_tuple()),
        )

    @pytest.mark.parametrize("start, arc", ORACLE_CASES)
    def test_center_parameterization(self, start, arc):
        """Center and signed sweep agree with svgpathtools."""
        expected = self.oracle(start, arc)
        params = ArcNormalizer.parameterize(start, arc)
        assert abs(complex(*params.center.as_tuple()) - expected.center) < 1e-6
        assert params.radius_x == pytest.approx(expected.radius.real)
        assert params.radius_y == pytest.approx(expected.radius.imag)
        assert math.degrees(params.delta_theta) == pytest.approx(expected.delta)

    @pytest.mark.parametrize("start, arc", ORACLE_CASES)
    def test_cubics_follow_the_arc(self, start, arc):
        """The midpoint of every cubic lies on the arc."""
        expected = self.oracle(start, arc)
        cubics = ArcNormalizer.to_cubics(start, arc)
        tolerance = 1e-3 * max(expected.radius.real, expected.radius.imag)
        current = start
        for i, cubic in enumerate(cubics):
            midpoint = cubic_point(current, cubic, 0.5)
            on_arc = expected.point((i + 0.5) / len(cubics))
            assert abs(complex(*midpoint) - on_arc) < tolerance
            current = cubic.to_point
        assert current == arc.to_point

    @pytest.mark.parametrize("start, arc", ORACLE_CASES)
    def test_start_tangent(self, start, arc):
        """The first cubic leaves the start point in the direction of the arc."""
        expected = self.oracle(start, arc)
        first = ArcNormalizer.to_cubics(start, arc)[0]
        handle = complex(first.control_point1.x - start.x, first.control_point1.y - start.y)
        tangent = expected.derivative(0)
        assert abs((handle * tangent.conjugate()).imag) < 1e-6 * abs(handle) * abs(tangent)
        assert (handle * tangent.conjugate()).real > 0


###############################################################################
# normalize_arcs
###############################################################################


class TestNormalizeArcs:
    """Arc normalization of whole subpaths."""

    def test_normalize_subpath(self):
        """Arcs are replaced, other segments and the closed flag are kept."""
        (sub_path,) = parse("M0,0 L10,0 A5,5 0 0 1 20,0 Z", keep_text=True)
        normalized = normalize_arcs(sub_path).materialized()
        assert normalized.start_point == Point(0, 0)
        assert normalized.closed
        assert normalized.cached_text is None
        assert normalized.segments[0] == Line(Point(10, 0))
        assert [type(segment) for segment in normalized.segments[1:]] == [CubicCurve, CubicCurve]
        assert normalized.segments[1].to_point.x == pytest.approx(15.0)
        assert normalized.segments[1].to_point.y == pytest.approx(-5.0)
        assert normalized.end_point() == Point(20, 0)

    def test_arc_free_subpath_is_unchanged(self):
        """Subpaths without arcs keep their segments."""
        sub_path = SubPath(Point(1, 1), (Line(Point(2, 2)), CubicCurve(Point(3, 3), Point(4, 4), Point(5, 5))))
        assert normalize_arcs(sub_path).materialized() == sub_path

    def test_consecutive_arcs_start_at_previous_end(self):
        """Each arc starts at the end point of the segment before it."""
        sub_path = SubPath(
            Point(0, 0),
            (Arc(50, 50, 0, False, True, Point(100, 0)), Arc(50, 50, 0, False, True, Point(0, 0))),
        )
        segments = list(normalize_arcs(sub_path).segments)
        assert len(segments) == 4
        assert segments[1].to_point == Point(100, 0)
        assert segments[2].to_point.x == pytest.approx(50.0)
        assert segments[2].to_point.y == pytest.approx(50.0)
        assert segments[3].to_point == Point(0, 0)
