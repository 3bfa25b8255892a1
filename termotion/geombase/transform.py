"""Transform3 - affine 3D transform stored as a 4x4 matrix together with its inverse.

Unlike a translation/rotation/scale triple, a product of matrices stays exact
under non-uniform scale combined with rotation (shear appears in the chain),
so animated hierarchies are composed in matrix form.

Composition:
    (parent * child).transform_point(p) == parent.transform_point(child.transform_point(p))
"""

import math
import numpy

from termotion.util import qrotation_matrix, qnormalize
from .aabb import AABB


class Transform3:
    """Affine transform with a lazily computed (or explicitly provided) inverse."""

    __slots__ = ('_mat', '_inv')

    def __init__(self, mat: numpy.ndarray = None, inv: numpy.ndarray = None):
        if mat is None:
            mat = numpy.eye(4)
        mat = numpy.asarray(mat, dtype=float)
        if mat.shape != (4, 4):
            raise ValueError("Transform3 matrix must have shape (4, 4)")
        self._mat = mat
        self._inv = None if inv is None else numpy.asarray(inv, dtype=float)

    @staticmethod
    def identity() -> 'Transform3':
        return Transform3(numpy.eye(4), numpy.eye(4))

    @staticmethod
    def from_trs(
        translation: numpy.ndarray = None,
        rotation: numpy.ndarray = None,
        scale: numpy.ndarray = None
    ) -> 'Transform3':
        """Build Translation * Rotation * Scale.

        Inverse is S^-1 R^T T^-1, computed analytically when the scale is non-zero.
        """
        lin = numpy.zeros(3) if translation is None else numpy.asarray(translation, dtype=float)
        ang = numpy.array([0.0, 0.0, 0.0, 1.0]) if rotation is None else qnormalize(numpy.asarray(rotation, dtype=float))
        scl = numpy.ones(3) if scale is None else numpy.broadcast_to(numpy.asarray(scale, dtype=float), (3,))

        R = qrotation_matrix(ang)
        mat = numpy.eye(4)
        mat[:3, :3] = R @ numpy.diag(scl)
        mat[:3, 3] = lin

        if numpy.any(scl == 0.0):
            return Transform3(mat)

        inv_rs = numpy.diag(1.0 / scl) @ R.T
        inv = numpy.eye(4)
        inv[:3, :3] = inv_rs
        inv[:3, 3] = -(inv_rs @ lin)
        return Transform3(mat, inv)

    @staticmethod
    def translation(x: float, y: float, z: float) -> 'Transform3':
        return Transform3.from_trs(translation=numpy.array([x, y, z], dtype=float))

    @staticmethod
    def scaling(sx: float, sy: float = None, sz: float = None) -> 'Transform3':
        """Scale-only transform. If only sx is given, uniform scale is applied."""
        if sy is None:
            sy = sx
        if sz is None:
            sz = sx
        return Transform3.from_trs(scale=numpy.array([sx, sy, sz], dtype=float))

    @staticmethod
    def rotation(axis: numpy.ndarray, angle: float) -> 'Transform3':
        """Rotation around a given axis by a given angle."""
        axis = numpy.asarray(axis, dtype=float)
        axis = axis / numpy.linalg.norm(axis)
        s = math.sin(angle / 2)
        c = math.cos(angle / 2)
        q = numpy.array([axis[0] * s, axis[1] * s, axis[2] * s, c])
        return Transform3.from_trs(rotation=q)

    def as_matrix(self) -> numpy.ndarray:
        return self._mat.copy()

    def inverse_matrix(self) -> numpy.ndarray:
        if self._inv is None:
            try:
                self._inv = numpy.linalg.inv(self._mat)
            except numpy.linalg.LinAlgError as e:
                raise ValueError("Transform3 is singular and has no inverse") from e
        return self._inv.copy()

    def inverse(self) -> 'Transform3':
        inv = self.inverse_matrix()
        return Transform3(inv, self._mat.copy())

    def transform_point(self, point: numpy.ndarray) -> numpy.ndarray:
        point = numpy.asarray(point, dtype=float)
        return self._mat[:3, :3] @ point + self._mat[:3, 3]

    def transform_vector(self, vector: numpy.ndarray) -> numpy.ndarray:
        """Transform a direction (translation ignored)."""
        return self._mat[:3, :3] @ numpy.asarray(vector, dtype=float)

    def transform_aabb(self, aabb: AABB) -> AABB:
        """Bounds of the transformed box corners."""
        if aabb.is_empty():
            return AABB.empty()
        corners = aabb.get_corners_homogeneous()
        transformed_corners = numpy.dot(self._mat[:3, :], corners.T).T
        return AABB.from_points(transformed_corners)

    def __mul__(self, other):
        """Compose with another Transform3, or apply to an AABB."""
        if isinstance(other, AABB):
            return self.transform_aabb(other)
        if not isinstance(other, Transform3):
            return NotImplemented
        mat = self._mat @ other._mat
        inv = None
        if self._inv is not None and other._inv is not None:
            inv = other._inv @ self._inv
        return Transform3(mat, inv)

    def __matmul__(self, other):
        return self * other

    def approx_equal(self, other: 'Transform3', eps: float = 1e-9) -> bool:
        return bool(numpy.allclose(self._mat, other._mat, atol=eps))

    def __eq__(self, other):
        if not isinstance(other, Transform3):
            return NotImplemented
        return bool(numpy.array_equal(self._mat, other._mat))

    __hash__ = None

    def __repr__(self):
        return f"Transform3({self._mat.tolist()})"
