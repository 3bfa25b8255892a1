"""KeyframeCurve - B-spline through packed keyframe control values.

Thin adapter over scipy.interpolate.BSpline. Every control keyframe is packed
into a 10-component vector (translation, rotation, scale), the spline is
evaluated component-wise and the result is unpacked back into a Keyframe
with a re-normalized rotation.
"""

from __future__ import annotations

from typing import Iterator, Sequence, Tuple

import numpy as np
from scipy.interpolate import BSpline

from termotion.util import qnormalize
from .keyframe import Keyframe


class KeyframeCurve:
    """Immutable curve over keyframes. Times outside the knot domain are clamped."""

    __slots__ = ('_degree', '_points', '_knots', '_spline')

    def __init__(self, degree: int, control_points: Sequence[Keyframe], knots: Sequence[float]):
        if degree < 0:
            raise ValueError("curve degree must be non-negative")
        if len(control_points) == 0:
            raise ValueError("curve needs at least one control point")

        self._degree = int(degree)
        self._points = tuple(k.copy() for k in control_points)
        self._knots = np.array(knots, dtype=float)
        self._knots.setflags(write=False)

        if len(self._points) == 1:
            self._spline = None
            return

        expected = len(self._points) + self._degree + 1
        if len(self._knots) != expected:
            raise ValueError(
                f"knot vector of length {len(self._knots)} does not match "
                f"{len(self._points)} control points of degree {self._degree} (expected {expected})")
        if np.any(np.diff(self._knots) < 0.0):
            raise ValueError("knot vector must be non-decreasing")

        start, end = self.domain
        if start == end:
            # zero-length domain, scipy rejects such knot vectors
            self._spline = None
            return

        coeffs = np.stack([k.as_vector() for k in self._points])
        self._spline = BSpline(self._knots, coeffs, self._degree, extrapolate=False)

    @property
    def degree(self) -> int:
        return self._degree

    @property
    def knots(self) -> np.ndarray:
        return self._knots.copy()

    @property
    def is_degenerate(self) -> bool:
        """A single control point: the curve is constant."""
        return len(self._points) == 1

    @property
    def domain(self) -> Tuple[float, float]:
        if len(self._points) == 1:
            t = self._points[0].time
            return (t, t)
        k = self._degree
        return (float(self._knots[k]), float(self._knots[-k - 1]))

    def __len__(self) -> int:
        return len(self._points)

    def control_points(self) -> Iterator[Keyframe]:
        return (k.copy() for k in self._points)

    def point_at(self, t: float) -> Keyframe:
        if len(self._points) == 1:
            k = self._points[0].copy()
            k.time = float(t)
            return k

        start, end = self.domain
        if self._spline is None or float(t) >= end:
            # at and past the end the curve holds the last key, even when several keys share the end time
            k = self._points[-1].copy()
            k.time = float(t)
            return k
        u = max(float(t), start)
        v = self._spline(u)
        v[3:7] = qnormalize(v[3:7])
        return Keyframe.from_vector(t, v)

    def __repr__(self):
        return f"KeyframeCurve(degree={self._degree}, points={len(self._points)}, knots={self._knots.tolist()})"
