"""
Tests for spring.py.
"""

from __future__ import annotations

import math

import pytest

from bezier import Point2D
from spring import C_MAX, C_MIN, K_MAX, K_MIN, SpringSimulator, SpringState


def _mag(v) -> float:
    return math.hypot(v[0], v[1])


class TestInitialize:
    """Test initialize."""

    def test_anchor_is_copy_of_position(self, simulator, reference_points):
        for i in (1, 2):
            s = simulator.state(i)
            assert s.anchor == reference_points[i]
            assert s.velocity == Point2D(0.0, 0.0)

    def test_fixed_points_untracked(self, simulator):
        assert simulator.state(0) is None
        assert simulator.state(3) is None

    def test_reinitialize_resets_memory(self, simulator, reference_points):
        simulator.inject_force(1, 0.0, 0.0, reference_points)
        simulator.step(reference_points)
        simulator.initialize(reference_points)
        s = simulator.state(1)
        assert s.velocity == Point2D(0.0, 0.0)
        assert s.anchor == reference_points[1]

    def test_state_is_a_copy(self, simulator):
        s = simulator.state(1)
        s.velocity = Point2D(99.0, 99.0)
        assert simulator.state(1).velocity == Point2D(0.0, 0.0)


class TestStep:
    """Test the spring-damper integration."""

    def test_at_rest_stays_at_rest(self, simulator, reference_points):
        before = list(reference_points)
        for _ in range(10):
            simulator.step(reference_points)
        assert reference_points == before

    def test_fixed_points_never_move(self, simulator, reference_points):
        p0, p3 = reference_points[0], reference_points[3]
        simulator.inject_force(1, 0.0, 0.0, reference_points)
        simulator.inject_force(2, 500.0, 500.0, reference_points)
        for _ in range(50):
            simulator.step(reference_points)
        assert reference_points[0] == p0
        assert reference_points[3] == p3

    def test_single_step_values(self, reference_points):
        """One Euler step from a 10px displacement, hand-computed."""
        sim = SpringSimulator(spring_constant=0.15, damping=0.88)
        sim.initialize(reference_points)
        reference_points[1] = Point2D(210.0, 50.0)

        sim.step(reference_points)

        # a = -0.15 * 10 = -1.5 ; v = -1.5 ; x = 210 - 1.5 ; v *= 0.995
        assert reference_points[1].x == pytest.approx(208.5)
        assert reference_points[1].y == pytest.approx(50.0)
        assert sim.state(1).velocity.x == pytest.approx(-1.5 * 0.995)

    def test_settles_within_bound(self, reference_points):
        """Displaced points return to their anchors; magnitudes only shrink."""
        sim = SpringSimulator(spring_constant=0.15, damping=0.88)
        sim.initialize(reference_points)
        reference_points[1] = Point2D(260.0, 10.0)
        reference_points[2] = Point2D(250.0, 220.0)

        prev_d = {i: _mag((reference_points[i].x - sim.state(i).anchor.x,
                           reference_points[i].y - sim.state(i).anchor.y)) for i in (1, 2)}
        prev_v = {i: None for i in (1, 2)}

        for _ in range(499):
            sim.step(reference_points)
            for i in (1, 2):
                s = sim.state(i)
                d = _mag((reference_points[i].x - s.anchor.x, reference_points[i].y - s.anchor.y))
                v = _mag(s.velocity)
                assert d <= prev_d[i] + 1e-12
                if prev_v[i] is not None:
                    assert v <= prev_v[i] + 1e-12
                prev_d[i] = d
                prev_v[i] = v

        for i in (1, 2):
            assert prev_d[i] < 1e-6
            assert prev_v[i] < 1e-6

    def test_skips_short_point_list(self):
        sim = SpringSimulator()
        pts = [Point2D(0.0, 0.0), Point2D(1.0, 1.0)]
        sim.initialize(pts)
        sim.step(pts)
        assert sim.state(2) is None


class TestTunables:
    """Test clamping of k and c."""

    @pytest.mark.parametrize("k, expected", [(0.0, K_MIN), (-3.0, K_MIN), (0.3, 0.3), (2.0, K_MAX)])
    def test_spring_constant_clamped(self, k, expected):
        sim = SpringSimulator()
        sim.set_spring_constant(k)
        assert sim.spring_constant == pytest.approx(expected)

    @pytest.mark.parametrize("c, expected", [(0.1, C_MIN), (0.8, 0.8), (1.5, C_MAX)])
    def test_damping_clamped(self, c, expected):
        sim = SpringSimulator()
        sim.set_damping(c)
        assert sim.damping == pytest.approx(expected)

    def test_constructor_clamps(self):
        sim = SpringSimulator(spring_constant=10.0, damping=0.0)
        assert sim.spring_constant == K_MAX
        assert sim.damping == C_MIN

    def test_defaults(self):
        sim = SpringSimulator()
        assert sim.spring_constant == 0.15
        assert sim.damping == 0.88
        assert sim.influence == 0.8


class TestInjectForce:
    """Test inject_force."""

    def test_anchor_moves_closer_without_overshoot(self, simulator, reference_points):
        target = (260.0, 20.0)
        before = simulator.state(1).anchor
        simulator.inject_force(1, *target, reference_points)
        after = simulator.state(1).anchor

        d_before = math.hypot(target[0] - before.x, target[1] - before.y)
        d_after = math.hypot(target[0] - after.x, target[1] - after.y)
        assert d_after < d_before
        # same side of the target on each axis
        assert (target[0] - after.x) * (target[0] - before.x) >= 0
        assert (target[1] - after.y) * (target[1] - before.y) >= 0
        assert after.x == pytest.approx(200.0 + 0.8 * 60.0)
        assert after.y == pytest.approx(50.0 + 0.8 * -30.0)

    def test_velocity_kick(self, simulator, reference_points):
        simulator.inject_force(2, 310.0, 170.0, reference_points)
        v = simulator.state(2).velocity
        assert v.x == pytest.approx(1.0)
        assert v.y == pytest.approx(2.0)

    def test_never_writes_position(self, simulator, reference_points):
        before = list(reference_points)
        simulator.inject_force(1, 0.0, 0.0, reference_points)
        assert reference_points == before

    @pytest.mark.parametrize("index", [-1, 0, 3, 5])
    def test_out_of_range_is_noop(self, simulator, reference_points, index):
        before = {i: simulator.state(i) for i in (1, 2)}
        simulator.inject_force(index, 0.0, 0.0, reference_points)
        for i in (1, 2):
            assert simulator.state(i) == before[i]

    def test_index_beyond_point_list_is_noop(self, simulator, reference_points):
        before = simulator.state(2)
        simulator.inject_force(2, 0.0, 0.0, reference_points[:2])
        assert simulator.state(2) == before

    def test_pulls_point_toward_target_over_time(self, simulator, reference_points):
        target = (200.0, 200.0)
        for _ in range(200):
            simulator.inject_force(1, *target, reference_points)
            simulator.step(reference_points)
        p = reference_points[1]
        assert math.hypot(p.x - target[0], p.y - target[1]) < 1.0


class TestResetVelocity:
    """Test reset_velocity."""

    def test_zeroes_velocity_keeps_anchor(self, simulator, reference_points):
        simulator.inject_force(1, 0.0, 0.0, reference_points)
        anchor = simulator.state(1).anchor
        simulator.reset_velocity(1)
        assert simulator.state(1) == SpringState(velocity=Point2D(0.0, 0.0), anchor=anchor)

    def test_untracked_index_is_noop(self, simulator):
        simulator.reset_velocity(7)
        assert simulator.state(7) is None
