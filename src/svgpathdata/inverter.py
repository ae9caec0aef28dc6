"""Reversal of the drawing direction of subpaths."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List

from svgpathdata.geom import Point
from svgpathdata.segment import Arc, CubicCurve, Line, QuadraticCurve, Segment, SubPath

logger = logging.getLogger(__name__)


class SubPathInverter:
    """Class to provide static methods reversing the traversal direction of subpaths."""

    @staticmethod
    def reverse_segment(segment: Segment, to_point: Point) -> Segment:
        """
        Return _segment_ traversed backwards, ending at _to_point_ (its original start).

        For curves the control points are reordered to preserve the exact geometry;
        for arcs the sweep flag is negated.

        Raises:
            TypeError: if _segment_ is not one of the four segment types
        """
        if isinstance(segment, Line):
            return Line(to_point)
        if isinstance(segment, QuadraticCurve):
            return QuadraticCurve(segment.control_point, to_point)
        if isinstance(segment, CubicCurve):
            return CubicCurve(segment.control_point2, segment.control_point1, to_point)
        if isinstance(segment, Arc):
            return replace(segment, sweep_flag=not segment.sweep_flag, to_point=to_point)
        raise TypeError(f"Not a path segment: {segment!r}")

    @staticmethod
    def invert(sub_path: SubPath) -> SubPath:
        """
        Return a SubPath tracing the same shape in the opposite direction.

        The new start point is the original end point. For closed subpaths the
        implicit closing line is materialized before reversing, and a trailing line
        back onto the new start point is dropped again afterwards.

        Args:
            sub_path (SubPath): the subpath to reverse

        Returns:
            SubPath: the reversed subpath with a tuple of segments
        """
        segments: List[Segment] = list(sub_path.segments)
        if not segments:
            return SubPath(sub_path.start_point, (), sub_path.closed)

        if sub_path.closed and segments[-1].to_point != sub_path.start_point:
            logger.debug("materializing closing line to %s", sub_path.start_point)
            segments.append(Line(sub_path.start_point))

        # start point of each segment: end point of its predecessor
        start_points = [sub_path.start_point] + [segment.to_point for segment in segments[:-1]]
        reversed_segments = [
            SubPathInverter.reverse_segment(segment, start_point)
            for segment, start_point in zip(reversed(segments), reversed(start_points))
        ]
        new_start_point = segments[-1].to_point

        last = reversed_segments[-1]
        if sub_path.closed and isinstance(last, Line) and last.to_point == new_start_point:
            reversed_segments.pop()

        return SubPath(new_start_point, tuple(reversed_segments), sub_path.closed)


def invert(sub_path: SubPath) -> SubPath:
    """Return _sub_path_ with reversed drawing direction."""
    return SubPathInverter.invert(sub_path)
