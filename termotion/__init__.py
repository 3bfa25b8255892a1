"""
Termotion - анимированные аффинные преобразования для рендеринга с размытием движения.

Основные модули:
- geombase - базовые геометрические классы (Transform3, AABB)
- animation - ключевые кадры, кривые и иерархические анимированные преобразования
"""

from .geombase import AABB, Transform3
from .animation import AnimatedTransform, Keyframe, KeyframeCurve

__version__ = '0.1.0'

__all__ = [
    # Geombase
    'AABB',
    'Transform3',
    # Animation
    'AnimatedTransform',
    'Keyframe',
    'KeyframeCurve',
]
