"""Handling points and point-wise geometry"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray


###############################################################################
# Point
###############################################################################
@dataclass(frozen=True)
class Point:
    """
    Immutable 2D point, compared by value.

    Attributes:
        x (float): The x-coordinate.
        y (float): The y-coordinate.
    """

    x: float
    y: float

    def reflect(self, center: Point) -> Point:
        """Reflect this point through _center_, i.e. return center*2 - self."""
        return Point(center.x * 2 - self.x, center.y * 2 - self.y)

    def translate(self, dx: float, dy: float) -> Point:
        """Return this point moved by (dx, dy)."""
        return Point(self.x + dx, self.y + dy)

    def is_finite(self) -> bool:
        """True if both coordinates are neither NaN nor infinite."""
        return math.isfinite(self.x) and math.isfinite(self.y)

    def as_tuple(self) -> Tuple[float, float]:
        """The point as Tuple (x, y)."""
        return self.x, self.y

    def __str__(self):
        return f"Point({self.x}, {self.y})"


ORIGIN = Point(0.0, 0.0)


###############################################################################
# GeomMath
###############################################################################
class GeomMath:
    """Class to provide various static methods related to geometry handling."""

    @staticmethod
    def affine_matrix(affine_trafo: Sequence[Union[int, float]]) -> NDArray[np.float64]:
        """
        Build the homogeneous 3x3 matrix of the given affine transformation.

        The given _affine_trafo_ is a list of 6 floats, performing an affine transformation.
        The transformation is defined as:
            | x' | = | a00 a01 b0 |   | x |
            | y' | = | a10 a11 b1 | * | y |
            | 1  | = |  0   0  1  |   | 1 |
        with
            affine_trafo = [a00, a01, a10, a11, b0, b1]
        See also shapely - Affine Transformations

        Args:
            affine_trafo (Tuple/List[float]): Affine transformation - [a00, a01, a10, a11, b0, b1]

        Returns:
            NDArray[np.float64]: the 3x3 matrix
        """
        if len(affine_trafo) != 6:
            raise ValueError(f"Affine transformation needs 6 values, got {len(affine_trafo)}")
        a00, a01, a10, a11, b0, b1 = affine_trafo
        return np.array([[a00, a01, b0], [a10, a11, b1], [0.0, 0.0, 1.0]], dtype=np.float64)

    @staticmethod
    def transform_point(affine_trafo: Sequence[Union[int, float]], point: Point) -> Point:
        """
        Perform an affine transformation [a00, a01, a10, a11, b0, b1] on the given point.

        Args:
            affine_trafo (Tuple/List[float]): Affine transformation - [a00, a01, a10, a11, b0, b1]
            point (Point): 2D point

        Returns:
            Point: the transformed point
        """
        return GeomMath.apply_matrix(GeomMath.affine_matrix(affine_trafo), point)

    @staticmethod
    def apply_matrix(matrix: NDArray[np.float64], point: Point) -> Point:
        """Apply a homogeneous 3x3 matrix (see affine_matrix) to the given point."""
        x_new, y_new, _ = matrix @ np.array([point.x, point.y, 1.0])
        return Point(float(x_new), float(y_new))

    @staticmethod
    def rotation_matrix(angle_rad: float) -> NDArray[np.float64]:
        """Return the 2x2 rotation matrix for the given angle in radians."""
        cos_a = math.cos(angle_rad)
        sin_a = math.sin(angle_rad)
        return np.array([[cos_a, -sin_a], [sin_a, cos_a]], dtype=np.float64)


def main():
    """Main"""


if __name__ == "__main__":
    main()
