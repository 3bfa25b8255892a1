import numpy


def qdot(q1: numpy.ndarray, q2: numpy.ndarray) -> float:
    """4D dot product. Negative means q1 and q2 lie in opposite hemispheres."""
    return float(numpy.dot(q1, q2))


def qnormalize(q: numpy.ndarray) -> numpy.ndarray:
    norm = numpy.linalg.norm(q)
    if norm == 0.0:
        return numpy.array([0.0, 0.0, 0.0, 1.0])
    return q / norm


def qrotation_matrix(q: numpy.ndarray) -> numpy.ndarray:
    """3x3 rotation matrix of a unit quaternion (x, y, z, w)."""
    x, y, z, w = q
    return numpy.array([
        [1 - 2*(y**2 + z**2), 2*(x*y - z*w), 2*(x*z + y*w)],
        [2*(x*y + z*w), 1 - 2*(x**2 + z**2), 2*(y*z - x*w)],
        [2*(x*z - y*w), 2*(y*z + x*w), 1 - 2*(x**2 + y**2)]
    ])


def lerp(t: float, a, b):
    """Linear interpolation: a at t=0, b at t=1."""
    return (1.0 - t) * a + t * b
