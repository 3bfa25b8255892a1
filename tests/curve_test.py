"""Tests for KeyframeCurve - the spline evaluator over keyframes."""

import numpy as np
import pytest

from termotion.animation import Keyframe, KeyframeCurve, knot_vector


def linear_curve(times, xs):
    keys = [Keyframe(t, translation=[x, 0.0, 0.0]) for t, x in zip(times, xs)]
    return KeyframeCurve(1, keys, knot_vector(times))


class TestKeyframeCurve:
    def test_no_points(self):
        with pytest.raises(ValueError):
            KeyframeCurve(1, [], [0.0, 0.0, 0.0])

    def test_knot_mismatch(self):
        keys = [Keyframe(0.0), Keyframe(1.0)]
        with pytest.raises(ValueError):
            KeyframeCurve(1, keys, [0.0, 1.0, 1.0])

    def test_decreasing_knots(self):
        keys = [Keyframe(0.0), Keyframe(1.0)]
        with pytest.raises(ValueError):
            KeyframeCurve(1, keys, [1.0, 1.0, 0.0, 0.0])

    def test_degenerate(self):
        curve = KeyframeCurve(1, [Keyframe(3.0, translation=[1.0, 2.0, 3.0])], [3.0, 3.0, 3.0])
        assert curve.is_degenerate
        assert len(curve) == 1
        assert curve.domain == (3.0, 3.0)
        p = curve.point_at(-8.0)
        np.testing.assert_array_equal(p.translation, [1.0, 2.0, 3.0])
        assert p.time == -8.0

    def test_linear_interpolation(self):
        curve = linear_curve([0.0, 2.0, 4.0], [0.0, 4.0, 0.0])
        assert not curve.is_degenerate
        assert curve.domain == (0.0, 4.0)
        assert curve.point_at(1.0).translation[0] == pytest.approx(2.0)
        assert curve.point_at(2.0).translation[0] == pytest.approx(4.0)
        assert curve.point_at(3.0).translation[0] == pytest.approx(2.0)

    def test_clamped_outside_domain(self):
        curve = linear_curve([0.0, 1.0], [1.0, 3.0])
        assert curve.point_at(-1.0).translation[0] == pytest.approx(1.0)
        assert curve.point_at(5.0).translation[0] == pytest.approx(3.0)

    def test_rotation_renormalized(self):
        q = np.array([0.0, 0.0, 1.0, 0.0])
        keys = [Keyframe(0.0), Keyframe(1.0, rotation=q)]
        curve = KeyframeCurve(1, keys, knot_vector([0.0, 1.0]))
        r = curve.point_at(0.5).rotation
        assert np.linalg.norm(r) == pytest.approx(1.0)

    def test_all_keys_share_time(self):
        curve = linear_curve([1.0, 1.0], [5.0, 7.0])
        assert curve.point_at(1.0).translation[0] == pytest.approx(7.0)

    def test_control_points_are_copies(self):
        curve = linear_curve([0.0, 1.0], [1.0, 3.0])
        first = next(curve.control_points())
        first.translation[0] = 100.0
        assert next(curve.control_points()).translation[0] == 1.0

    def test_knots_read_only_copy(self):
        curve = linear_curve([0.0, 1.0], [1.0, 3.0])
        knots = curve.knots
        knots[0] = -5.0
        np.testing.assert_array_equal(curve.knots, [0.0, 0.0, 1.0, 1.0])

    def test_last_keys_share_time(self):
        curve = linear_curve([0.0, 1.0, 1.0], [0.0, 5.0, 10.0])
        np.testing.assert_array_equal(curve.knots, [0.0, 0.0, 1.0, 1.0, 1.0])
        end = curve.point_at(1.0)
        assert end.translation[0] == pytest.approx(10.0)
        np.testing.assert_array_equal(end.scale, [1.0, 1.0, 1.0])
        assert curve.point_at(3.0).translation[0] == pytest.approx(10.0)
        assert curve.point_at(0.5).translation[0] == pytest.approx(2.5)
