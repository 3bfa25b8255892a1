"""
Базовые геометрические классы (Geometric Base).

- Transform3 - аффинное преобразование (матрица 4x4 и её обратная)
- AABB - ограничивающий параллелепипед, выровненный по осям
"""

from .aabb import AABB
from .transform import Transform3

__all__ = [
    'AABB',
    'Transform3',
]
