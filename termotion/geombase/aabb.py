"""AABB - axis-aligned bounding box in 3D space.

The empty box has min_point = +inf and max_point = -inf, so it is the
neutral element of merge().
"""

import numpy


class AABB:
    """Axis-Aligned Bounding Box in 3D space."""

    __slots__ = ('min_point', 'max_point')

    def __init__(self, min_point: numpy.ndarray, max_point: numpy.ndarray):
        self.min_point = numpy.asarray(min_point, dtype=float)
        self.max_point = numpy.asarray(max_point, dtype=float)

    @staticmethod
    def empty() -> "AABB":
        """Box containing nothing."""
        return AABB(numpy.full(3, numpy.inf), numpy.full(3, -numpy.inf))

    @staticmethod
    def from_points(points: numpy.ndarray) -> "AABB":
        """Create an AABB that encompasses a set of points."""
        points = numpy.asarray(points, dtype=float)
        if len(points) == 0:
            return AABB.empty()
        min_point = numpy.min(points[:, :3], axis=0)
        max_point = numpy.max(points[:, :3], axis=0)
        return AABB(min_point, max_point)

    def copy(self) -> "AABB":
        return AABB(self.min_point.copy(), self.max_point.copy())

    def is_empty(self) -> bool:
        return bool(numpy.any(self.min_point > self.max_point))

    def merge(self, other: "AABB") -> "AABB":
        """Merge this AABB with another AABB and return the resulting AABB."""
        new_min = numpy.minimum(self.min_point, other.min_point)
        new_max = numpy.maximum(self.max_point, other.max_point)
        return AABB(new_min, new_max)

    def contains_point(self, point: numpy.ndarray, eps: float = 0.0) -> bool:
        return bool(numpy.all(point >= self.min_point - eps) and numpy.all(point <= self.max_point + eps))

    def contains(self, other: "AABB", eps: float = 0.0) -> bool:
        """True if other lies entirely inside this box. An empty box is contained everywhere."""
        if other.is_empty():
            return True
        return self.contains_point(other.min_point, eps) and self.contains_point(other.max_point, eps)

    def center(self) -> numpy.ndarray:
        return (self.min_point + self.max_point) * 0.5

    def size(self) -> numpy.ndarray:
        return self.max_point - self.min_point

    def get_corners(self) -> numpy.ndarray:
        """Get the 8 corners of the AABB as an (8, 3) array."""
        return self.get_corners_homogeneous()[:, :3]

    def get_corners_homogeneous(self) -> numpy.ndarray:
        """Get the 8 corners of the AABB in homogeneous coordinates."""
        corners = numpy.array([
            [self.min_point[0], self.min_point[1], self.min_point[2], 1.0],
            [self.min_point[0], self.min_point[1], self.max_point[2], 1.0],
            [self.min_point[0], self.max_point[1], self.min_point[2], 1.0],
            [self.min_point[0], self.max_point[1], self.max_point[2], 1.0],
            [self.max_point[0], self.min_point[1], self.min_point[2], 1.0],
            [self.max_point[0], self.min_point[1], self.max_point[2], 1.0],
            [self.max_point[0], self.max_point[1], self.min_point[2], 1.0],
            [self.max_point[0], self.max_point[1], self.max_point[2], 1.0],
        ])
        return corners

    def approx_equal(self, other: "AABB", eps: float = 1e-9) -> bool:
        return bool(numpy.allclose(self.min_point, other.min_point, atol=eps)
                    and numpy.allclose(self.max_point, other.max_point, atol=eps))

    def __eq__(self, other):
        if not isinstance(other, AABB):
            return NotImplemented
        return bool(numpy.array_equal(self.min_point, other.min_point)
                    and numpy.array_equal(self.max_point, other.max_point))

    __hash__ = None

    def __repr__(self):
        return f"AABB(min_point={self.min_point}, max_point={self.max_point})"
