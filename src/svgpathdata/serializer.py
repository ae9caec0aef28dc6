"""Serialization of subpaths into canonical SVG path-data text.

Only the absolute commands M, L, Q, C, A and Z are written. Numbers are separated
by a single space, the two coordinates of a point are joined by a comma.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from svgpathdata.common import DEFAULT_SEPARATOR, format_number
from svgpathdata.geom import Point
from svgpathdata.segment import Arc, CubicCurve, Line, QuadraticCurve, Segment, SubPath

logger = logging.getLogger(__name__)


class SvgPathDataSerializer:
    """Class to provide static methods turning segments and subpaths into path-data text."""

    @staticmethod
    def point_to_string(point: Point) -> str:
        """Return "x,y" of the given point."""
        return f"{format_number(point.x)},{format_number(point.y)}"

    @staticmethod
    def segment_to_string(segment: Segment) -> str:
        """
        Return the canonical absolute command of a single segment.

        Args:
            segment (Segment): Line, QuadraticCurve, CubicCurve or Arc

        Returns:
            str: e.g. "L100,100" or "A100 100 0 0 1 50,0"

        Raises:
            TypeError: if _segment_ is not one of the four segment types
        """
        pts = SvgPathDataSerializer.point_to_string
        if isinstance(segment, Line):
            return f"L{pts(segment.to_point)}"
        if isinstance(segment, QuadraticCurve):
            return f"Q{pts(segment.control_point)} {pts(segment.to_point)}"
        if isinstance(segment, CubicCurve):
            return f"C{pts(segment.control_point1)} {pts(segment.control_point2)} {pts(segment.to_point)}"
        if isinstance(segment, Arc):
            return (
                f"A{format_number(segment.radius_x)} {format_number(segment.radius_y)}"
                f" {format_number(segment.rotation_degrees)}"
                f" {int(bool(segment.large_arc_flag))} {int(bool(segment.sweep_flag))}"
                f" {pts(segment.to_point)}"
            )
        raise TypeError(f"Not a path segment: {segment!r}")

    @staticmethod
    def serialize_subpath(sub_path: SubPath) -> Iterator[str]:
        """Lazily yield the fragments of a single subpath."""
        if sub_path.cached_text is not None:
            yield sub_path.cached_text
            return
        yield f"M{SvgPathDataSerializer.point_to_string(sub_path.start_point)}"
        for segment in sub_path.segments:
            yield SvgPathDataSerializer.segment_to_string(segment)
        if sub_path.closed:
            yield "Z"

    @staticmethod
    def serialize(sub_paths: Iterable[SubPath]) -> Iterator[str]:
        """
        Lazily yield text fragments for a sequence of subpaths.

        The concatenation of the fragments is valid path data. A subpath carrying
        cached_text is written verbatim without looking at its segments.

        Args:
            sub_paths (Iterable[SubPath]): the subpaths in document order

        Yields:
            str: fragments, one per move, segment and close directive
        """
        for sub_path in sub_paths:
            logger.debug("serializing subpath at %s", sub_path.start_point)
            yield from SvgPathDataSerializer.serialize_subpath(sub_path)


def serialize(sub_paths: Iterable[SubPath]) -> Iterator[str]:
    """Lazily yield the path-data text fragments of the given subpaths."""
    return SvgPathDataSerializer.serialize(sub_paths)


def serialize_to_string(sub_paths: Iterable[SubPath], separator: str = DEFAULT_SEPARATOR) -> str:
    """Serialize the given subpaths into one path-data string, fragments joined by _separator_."""
    return separator.join(serialize(sub_paths))
