"""Segment and subpath value types of the path-data model.

A path segment is one of exactly four variants (Line, QuadraticCurve, CubicCurve, Arc).
Segments carry no start point: the start is the running current point of the
owning SubPath, i.e. the previous segment's ``to_point`` or the subpath's
``start_point`` for the first segment.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, ClassVar, Iterable, Iterator, Optional, Tuple, Union

from svgpathdata.common import SegmentCmds
from svgpathdata.geom import Point

###############################################################################
# Segments
###############################################################################


@dataclass(frozen=True)
class Line:
    """Straight line from the current point to _to_point_."""

    command: ClassVar[SegmentCmds] = "L"

    to_point: Point

    @property
    def control_points(self) -> Tuple[()]:
        """Lines have no control points."""
        return ()


@dataclass(frozen=True)
class QuadraticCurve:
    """Quadratic Bezier curve with one control point."""

    command: ClassVar[SegmentCmds] = "Q"

    control_point: Point
    to_point: Point

    @property
    def control_points(self) -> Tuple[Point]:
        """The single control point as 1-tuple."""
        return (self.control_point,)


@dataclass(frozen=True)
class CubicCurve:
    """Cubic Bezier curve with two control points."""

    command: ClassVar[SegmentCmds] = "C"

    control_point1: Point
    control_point2: Point
    to_point: Point

    @property
    def control_points(self) -> Tuple[Point, Point]:
        """Both control points in traversal order."""
        return (self.control_point1, self.control_point2)


@dataclass(frozen=True)
class Arc:
    """
    Elliptical arc from the current point to _to_point_.

    Attributes:
        radius_x (float): Radius along the (rotated) x-axis of the ellipse.
        radius_y (float): Radius along the (rotated) y-axis of the ellipse.
        rotation_degrees (float): Rotation of the ellipse's x-axis in degrees.
        large_arc_flag (bool): Choose the arc sweeping more than 180 degrees.
        sweep_flag (bool): Choose the arc drawn in "positive-angle" direction.
        to_point (Point): End point of the arc.
    """

    command: ClassVar[SegmentCmds] = "A"

    radius_x: float
    radius_y: float
    rotation_degrees: float
    large_arc_flag: bool
    sweep_flag: bool
    to_point: Point

    @property
    def control_points(self) -> Tuple[()]:
        """Arcs are not defined by control points."""
        return ()


Segment = Union[Line, QuadraticCurve, CubicCurve, Arc]
"""Type alias for the closed set of segment variants."""


class LazySegments:
    """Re-iterable segment sequence; every iteration starts a fresh iterator from _factory_."""

    def __init__(self, factory: Callable[[], Iterable[Segment]], description: str = ""):
        self._factory = factory
        self._description = description

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._factory())

    def __repr__(self):
        return f"LazySegments({self._description})"


###############################################################################
# SubPath
###############################################################################


@dataclass(frozen=True)
class SubPath:
    """One contiguous traversal starting at a move directive.

    _segments_ may be any re-iterable of segments; the parser supplies a lazy object
    which parses the subpath's commands each time it is iterated. Use materialized()
    to obtain a copy holding a tuple (e.g. for comparisons).

    Attributes:
        start_point: Point the subpath starts at (target of the move directive).
        segments: The segments in traversal order.
        closed: If True a final implicit line returns to start_point (close directive).
        cached_text: Known serialization, written verbatim by the serializer.
    """

    start_point: Point
    segments: Iterable[Segment] = ()
    closed: bool = False
    cached_text: Optional[str] = field(default=None, compare=False)

    def materialized(self) -> SubPath:
        """Return a copy with all segments parsed into a tuple."""
        if isinstance(self.segments, tuple):
            return self
        return replace(self, segments=tuple(self.segments))

    def end_point(self) -> Point:
        """The current point after the last segment (start point if there are no segments)."""
        point = self.start_point
        for segment in self.segments:
            point = segment.to_point
        return point
