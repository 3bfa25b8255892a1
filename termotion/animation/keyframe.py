from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Union

import numpy as np
from scipy.spatial.transform import Rotation

from termotion import log
from termotion.geombase import Transform3
from termotion.util import qdot

# Packed control value layout: translation(3) | rotation(4) | scale(3)
VECTOR_SIZE = 10


def _identity_quat() -> np.ndarray:
    return np.array([0.0, 0.0, 0.0, 1.0])


@dataclass(eq=False)
class Keyframe:
    """
    Pose of an object at the moment `time`.

    translation: np.array shape (3,)
    rotation:    np.array shape (4,) (unit quaternion x, y, z, w)
    scale:       np.array shape (3,) (a scalar is broadcast to all axes)
    """
    time: float
    translation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=_identity_quat)
    scale: Union[np.ndarray, float] = field(default_factory=lambda: np.ones(3))

    def __post_init__(self):
        self.time = float(self.time)

        self.translation = np.array(self.translation, dtype=float)
        if self.translation.shape != (3,):
            raise ValueError("translation must have shape (3,)")

        self.rotation = np.array(self.rotation, dtype=float)
        if self.rotation.shape != (4,):
            raise ValueError("rotation (quaternion) must have shape (4,)")

        scale = np.array(self.scale, dtype=float)
        if scale.shape == ():
            scale = np.full(3, float(scale))
        if scale.shape != (3,):
            raise ValueError("scale must be a scalar or have shape (3,)")
        self.scale = scale

    def __lt__(self, other: "Keyframe") -> bool:
        return self.time < other.time

    def copy(self) -> "Keyframe":
        return Keyframe(self.time, self.translation.copy(), self.rotation.copy(), self.scale.copy())

    def transform(self) -> Transform3:
        """Materialize the pose as Translation * Rotation * Scale."""
        return Transform3.from_trs(self.translation, self.rotation, self.scale)

    def as_vector(self) -> np.ndarray:
        return np.concatenate([self.translation, self.rotation, self.scale])

    @staticmethod
    def from_vector(time: float, v: np.ndarray) -> "Keyframe":
        v = np.asarray(v, dtype=float)
        if v.shape != (VECTOR_SIZE,):
            raise ValueError(f"packed keyframe must have shape ({VECTOR_SIZE},)")
        return Keyframe(time, v[0:3], v[3:7], v[7:10])

    @staticmethod
    def from_transform(time: float, transform: Union[Transform3, np.ndarray]) -> "Keyframe":
        """
        Decompose an affine transform into translation, rotation and scale.

        Shear cannot be represented and is projected onto the nearest rotation.
        A mirroring transform is stored as a negative x scale.
        """
        if isinstance(transform, Transform3):
            mat = transform.as_matrix()
        else:
            mat = np.asarray(transform, dtype=float)
        if mat.shape != (4, 4):
            raise ValueError("transform matrix must have shape (4, 4)")

        lin = mat[:3, 3].copy()
        m = mat[:3, :3]
        scale = np.linalg.norm(m, axis=0)
        if np.linalg.det(m) < 0.0:
            scale[0] = -scale[0]
        safe = np.where(scale == 0.0, 1.0, scale)
        rot = Rotation.from_matrix(m / safe).as_quat()
        return Keyframe(time, lin, rot, scale)

    def __repr__(self):
        return (f"Keyframe(time={self.time}, translation={self.translation}, "
                f"rotation={self.rotation}, scale={self.scale})")


def normalize_keyframes(keyframes: Iterable[Keyframe]) -> List[Keyframe]:
    """
    Sort keyframes by time and make every adjacent pair of rotations take the short arc.

    The input keyframes are copied; the caller's objects are left untouched.
    """
    result = sorted((k.copy() for k in keyframes), key=lambda k: k.time)
    if not result:
        raise ValueError("at least one keyframe is required")

    flips = 0
    for i in range(1, len(result)):
        # q and -q are the same rotation; compare against the already corrected predecessor
        if qdot(result[i - 1].rotation, result[i].rotation) < 0.0:
            result[i].rotation = -result[i].rotation
            flips += 1

    log.debug(f"normalized {len(result)} keyframes, {flips} rotation flips")
    return result


def knot_vector(times: Sequence[float], degree: int = 1) -> np.ndarray:
    """
    Clamped knot vector for a curve through control points at `times`.

    One point: the time repeated degree + 2 times.
    Several points: first and last time repeated degree + 1 times, the interior
    knots averaged over `degree` consecutive times (plain interior times for degree 1).
    """
    times = [float(t) for t in times]
    if not times:
        raise ValueError("knot vector needs at least one time")
    if len(times) == 1:
        return np.full(degree + 2, times[0])

    n = len(times)
    interior = [sum(times[j:j + degree]) / degree for j in range(1, n - degree)]
    return np.array([times[0]] * (degree + 1) + interior + [times[-1]] * (degree + 1))
