"""AnimatedTransform - transform that blends between keyframes over time.

Holds a chain of animated levels in hierarchical order: index 0 is the object's
own animation, index 1 its parent's, and so on. Each level is a KeyframeCurve.
A level with a single keyframe is static but is still stored as a curve, so
the evaluation loop treats all levels uniformly.
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from termotion import log
from termotion.geombase import AABB, Transform3
from termotion.util import lerp
from .curve import KeyframeCurve
from .keyframe import Keyframe, knot_vector, normalize_keyframes

# Number of time samples used to bound a moving box
BOUNDS_SAMPLES = 128

# Degree of the curve built by with_keyframes (piecewise linear)
CURVE_DEGREE = 1


class AnimatedTransform:
    """Chain of keyframe curves evaluated leaf first."""

    __slots__ = ('_levels',)

    def __init__(self, levels: Iterable[KeyframeCurve] = ()):
        self._levels: Tuple[KeyframeCurve, ...] = tuple(levels)

    @staticmethod
    def with_keyframes(keyframes: Iterable[Keyframe]) -> "AnimatedTransform":
        """Create a one-level animated transform blending between the passed keyframes."""
        keyframes = normalize_keyframes(keyframes)
        knots = knot_vector([k.time for k in keyframes], CURVE_DEGREE)
        log.debug(f"animated level: {len(keyframes)} keyframes, knots {knots.tolist()}")
        return AnimatedTransform((KeyframeCurve(CURVE_DEGREE, keyframes, knots),))

    @staticmethod
    def unanimated(transform: Transform3) -> "AnimatedTransform":
        """A single static level holding `transform`."""
        return AnimatedTransform.with_keyframes([Keyframe.from_transform(0.0, transform)])

    @property
    def levels(self) -> Tuple[KeyframeCurve, ...]:
        return self._levels

    def __len__(self) -> int:
        return len(self._levels)

    def transform(self, time: float) -> Transform3:
        """
        Compute the transformation at some time point.

        Each level is evaluated at `time` and applied on top of the levels
        below it, so the object's own animation is applied first.
        """
        transform = Transform3.identity()
        for curve in self._levels:
            if curve.is_degenerate:
                level = next(curve.control_points()).transform()
            else:
                level = curve.point_at(time).transform()
            transform = level * transform
        return transform

    def animation_bounds(self, box: AABB, start: float, end: float, samples: int = BOUNDS_SAMPLES) -> AABB:
        """Bounds of `box` moving through the animation on [start, end], found by sampling time."""
        if not self.is_animated():
            return self.transform(start) * box

        if samples < 2:
            raise ValueError("animation bounds need at least 2 samples")
        log.debug(f"sampling animation bounds on [{start}, {end}] with {samples} samples")
        result = AABB.empty()
        for i in range(samples):
            time = lerp(i / (samples - 1), start, end)
            result = result.merge(self.transform(time) * box)
        return result

    def is_animated(self) -> bool:
        """True only when there are levels and every level has more than one keyframe."""
        if not self._levels:
            return False
        return all(len(curve) > 1 for curve in self._levels)

    def time_range(self) -> Optional[Tuple[float, float]]:
        """Union of the time domains of the non-static levels, or None if all are static."""
        domains = [curve.domain for curve in self._levels if not curve.is_degenerate]
        if not domains:
            return None
        return (min(d[0] for d in domains), max(d[1] for d in domains))

    def __mul__(self, other):
        """
        Compose animated transforms: `parent * child`.

        The result holds the child's levels followed by the parent's, so
        (parent * child).transform(t) == parent.transform(t) * child.transform(t).
        """
        if not isinstance(other, AnimatedTransform):
            return NotImplemented
        return AnimatedTransform(other._levels + self._levels)

    def __repr__(self):
        return f"AnimatedTransform(levels={[len(curve) for curve in self._levels]})"
