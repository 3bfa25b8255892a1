from .keyframe import Keyframe, normalize_keyframes, knot_vector
from .curve import KeyframeCurve
from .animated_transform import AnimatedTransform, BOUNDS_SAMPLES

__all__ = [
    "Keyframe",
    "KeyframeCurve",
    "AnimatedTransform",
    "BOUNDS_SAMPLES",
    "normalize_keyframes",
    "knot_vector",
]
