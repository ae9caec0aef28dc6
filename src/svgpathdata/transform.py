"""Point-wise transformation of subpaths."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Iterable, Iterator, Sequence, Union

from svgpathdata.errors import ArcTransformError
from svgpathdata.geom import GeomMath, Point
from svgpathdata.segment import Arc, CubicCurve, LazySegments, Line, QuadraticCurve, Segment, SubPath

PointMapper = Callable[[Point], Point]


def transform_segment(segment: Segment, point_mapper: PointMapper) -> Segment:
    """
    Apply _point_mapper_ to the control points and the end point of _segment_.

    Raises:
        ArcTransformError: for Arc segments, which cannot be mapped point by point
        TypeError: if _segment_ is not one of the four segment types
    """
    if isinstance(segment, Line):
        return Line(point_mapper(segment.to_point))
    if isinstance(segment, QuadraticCurve):
        return QuadraticCurve(point_mapper(segment.control_point), point_mapper(segment.to_point))
    if isinstance(segment, CubicCurve):
        return CubicCurve(
            point_mapper(segment.control_point1),
            point_mapper(segment.control_point2),
            point_mapper(segment.to_point),
        )
    if isinstance(segment, Arc):
        raise ArcTransformError(f"Cannot transform arc to {segment.to_point}; normalize arcs first")
    raise TypeError(f"Not a path segment: {segment!r}")


def _transform_segments(segments: Iterable[Segment], point_mapper: PointMapper) -> Iterator[Segment]:
    for segment in segments:
        yield transform_segment(segment, point_mapper)


def transform_points(sub_path: SubPath, point_mapper: PointMapper) -> SubPath:
    """
    Return _sub_path_ with _point_mapper_ applied to every point.

    The segments are transformed lazily, so an ArcTransformError surfaces when the
    result's segments are iterated.

    Args:
        sub_path (SubPath): subpath without Arc segments (see arc.normalize_arcs)
        point_mapper (Callable[[Point], Point]): the mapping applied to each point

    Returns:
        SubPath: the transformed subpath
    """
    return replace(
        sub_path,
        start_point=point_mapper(sub_path.start_point),
        segments=LazySegments(lambda: _transform_segments(sub_path.segments, point_mapper), "transformed"),
        cached_text=None,
    )


def affine_mapper(affine_trafo: Sequence[Union[int, float]]) -> PointMapper:
    """Point mapper for the affine transformation [a00, a01, a10, a11, b0, b1]."""
    matrix = GeomMath.affine_matrix(affine_trafo)
    return lambda point: GeomMath.apply_matrix(matrix, point)
