"""Conversion of elliptical arcs into cubic Bezier curves.

Uses the endpoint to center parameterization of the SVG implementation notes
(https://www.w3.org/TR/SVG/implnote.html#ArcConversionEndpointToCenter) and
approximates every sub-arc of at most 90 degrees by one cubic curve.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Iterable, Iterator, List, Optional

import numpy as np

from svgpathdata.common import ARC_SWEEP_EPSILON, QUARTER_ARC_KAPPA
from svgpathdata.geom import GeomMath, Point
from svgpathdata.segment import Arc, CubicCurve, LazySegments, Line, Segment, SubPath

logger = logging.getLogger(__name__)

_HALF_PI = 0.5 * math.pi
_TWO_PI = 2.0 * math.pi


###############################################################################
# ArcParameterization
###############################################################################


@dataclass(frozen=True)
class ArcParameterization:
    """
    Center parameterization of an elliptical arc.

    Attributes:
        center (Point): Center of the ellipse.
        radius_x (float): Radius along the rotated x-axis, corrected to reach both end points.
        radius_y (float): Radius along the rotated y-axis, corrected to reach both end points.
        rotation (float): Rotation of the ellipse's x-axis in radians.
        theta1 (float): Start angle in radians (on the unit circle before scaling and rotation).
        delta_theta (float): Signed sweep in radians, positive if the sweep flag is set.
    """

    center: Point
    radius_x: float
    radius_y: float
    rotation: float
    theta1: float
    delta_theta: float

    def is_finite(self) -> bool:
        """True if no value over- or underflowed into infinity or NaN."""
        values = (self.radius_x, self.radius_y, self.theta1, self.delta_theta)
        return self.center.is_finite() and all(math.isfinite(value) for value in values)


###############################################################################
# ArcNormalizer
###############################################################################


class ArcNormalizer:
    """Class to provide static methods replacing arcs by cubic Bezier curves."""

    @staticmethod
    def parameterize(start_point: Point, arc: Arc) -> Optional[ArcParameterization]:
        """
        Compute center, corrected radii and angles of an arc starting at _start_point_.

        Args:
            start_point (Point): current point before the arc
            arc (Arc): the arc segment

        Returns:
            Optional[ArcParameterization]: None for degenerate arcs, i.e. a zero radius,
                a zero chord, or values leaving the float range (radii or chord extremely
                large or small relative to each other); those are drawn as a straight line.
        """
        radius_x = abs(arc.radius_x)
        radius_y = abs(arc.radius_y)
        if radius_x == 0.0 or radius_y == 0.0:
            return None

        end_point = arc.to_point
        rotation = math.radians(arc.rotation_degrees)
        half_chord = np.array([(start_point.x - end_point.x) / 2.0, (start_point.y - end_point.y) / 2.0])
        with np.errstate(over="ignore", invalid="ignore"):
            x1p, y1p = GeomMath.rotation_matrix(-rotation) @ half_chord
        if x1p == 0.0 and y1p == 0.0:
            return None

        # half chord in units of the radii; squares of these would over- or underflow
        x_rel = float(x1p) / radius_x
        y_rel = float(y1p) / radius_y
        chord_rel = math.hypot(x_rel, y_rel)
        if chord_rel == 0.0:
            return None
        if chord_rel > 1.0:
            # scale up radii which are too small to reach the end points
            radius_x *= chord_rel
            radius_y *= chord_rel
            x_rel /= chord_rel
            y_rel /= chord_rel
            chord_rel = 1.0

        root = math.sqrt(max(1.0 - chord_rel * chord_rel, 0.0)) / chord_rel
        if arc.large_arc_flag == arc.sweep_flag:
            root = -root
        cxp = radius_x * (root * y_rel)
        cyp = -radius_y * (root * x_rel)

        with np.errstate(over="ignore", invalid="ignore"):
            center_x, center_y = GeomMath.rotation_matrix(rotation) @ np.array([cxp, cyp])
        center = Point(
            float(center_x) + (start_point.x + end_point.x) / 2.0,
            float(center_y) + (start_point.y + end_point.y) / 2.0,
        )

        theta1 = math.atan2(y_rel + root * x_rel, x_rel - root * y_rel)
        theta2 = math.atan2(-y_rel + root * x_rel, -x_rel - root * y_rel)
        delta_theta = theta2 - theta1
        if arc.sweep_flag and delta_theta < 0.0:
            delta_theta += _TWO_PI
        elif not arc.sweep_flag and delta_theta > 0.0:
            delta_theta -= _TWO_PI

        params = ArcParameterization(center, radius_x, radius_y, rotation, theta1, delta_theta)
        if delta_theta == 0.0 or not params.is_finite():
            logger.debug("arc to %s not representable, drawn as line", end_point)
            return None
        return params

    @staticmethod
    def segment_count(delta_theta: float) -> int:
        """Smallest number of equal sub-arcs of at most 90 degrees for the given sweep.

        Sweeps within ARC_SWEEP_EPSILON of a multiple of 90 degrees are rounded down to it.
        """
        quarters = abs(delta_theta) / _HALF_PI
        nearest = round(quarters)
        if nearest >= 1 and abs(abs(delta_theta) - nearest * _HALF_PI) < ARC_SWEEP_EPSILON:
            return int(nearest)
        return max(1, math.ceil(quarters))

    @staticmethod
    def to_cubics(start_point: Point, arc: Arc) -> List[Segment]:
        """
        Approximate the arc by cubic curves, each spanning at most 90 degrees.

        The result starts implicitly at _start_point_ and ends exactly at arc.to_point.
        Sub-arcs whose sweep is within ARC_SWEEP_EPSILON of 90 degrees use the exact
        quarter circle handle QUARTER_ARC_KAPPA instead of 4/3*tan(step/4).

        Args:
            start_point (Point): current point before the arc
            arc (Arc): the arc segment

        Returns:
            List[Segment]: the CubicCurves, or a single Line for a degenerate arc
        """
        params = ArcNormalizer.parameterize(start_point, arc)
        if params is None:
            return [Line(arc.to_point)]

        count = ArcNormalizer.segment_count(params.delta_theta)
        step = params.delta_theta / count
        if abs(abs(step) - _HALF_PI) < ARC_SWEEP_EPSILON:
            handle = math.copysign(QUARTER_ARC_KAPPA, step)
        else:
            handle = 4.0 / 3.0 * math.tan(step / 4.0)
        logger.debug("arc sweep %.6f rad split into %d cubic(s)", params.delta_theta, count)

        thetas = params.theta1 + step * np.arange(count + 1, dtype=np.float64)
        cos_t = np.cos(thetas)
        sin_t = np.sin(thetas)
        # control points and end points on the unit circle, shape (2, count)
        control1 = np.vstack((cos_t[:-1] - handle * sin_t[:-1], sin_t[:-1] + handle * cos_t[:-1]))
        control2 = np.vstack((cos_t[1:] + handle * sin_t[1:], sin_t[1:] - handle * cos_t[1:]))
        ends = np.vstack((cos_t[1:], sin_t[1:]))

        # map from the unit circle onto the rotated ellipse
        ellipse = GeomMath.rotation_matrix(params.rotation) @ np.diag([params.radius_x, params.radius_y])
        offset = np.array([[params.center.x], [params.center.y]])
        with np.errstate(over="ignore", invalid="ignore"):
            control1 = ellipse @ control1 + offset
            control2 = ellipse @ control2 + offset
            ends = ellipse @ ends + offset
        if not (np.isfinite(control1).all() and np.isfinite(control2).all() and np.isfinite(ends).all()):
            logger.debug("arc to %s exceeds the float range, drawn as line", arc.to_point)
            return [Line(arc.to_point)]

        cubics: List[Segment] = []
        for i in range(count):
            to_point = arc.to_point if i == count - 1 else Point(float(ends[0, i]), float(ends[1, i]))
            cubics.append(
                CubicCurve(
                    Point(float(control1[0, i]), float(control1[1, i])),
                    Point(float(control2[0, i]), float(control2[1, i])),
                    to_point,
                )
            )
        return cubics

    @staticmethod
    def normalize_segments(start_point: Point, segments: Iterable[Segment]) -> Iterator[Segment]:
        """Lazily yield _segments_ with every Arc replaced by cubic curves (or a line)."""
        current = start_point
        for segment in segments:
            if isinstance(segment, Arc):
                yield from ArcNormalizer.to_cubics(current, segment)
            else:
                yield segment
            current = segment.to_point


def normalize_arcs(sub_path: SubPath) -> SubPath:
    """Return a SubPath tracing the same shape without any Arc segment."""
    return replace(
        sub_path,
        segments=LazySegments(
            lambda: ArcNormalizer.normalize_segments(sub_path.start_point, sub_path.segments), "arcs normalized"
        ),
        cached_text=None,
    )
