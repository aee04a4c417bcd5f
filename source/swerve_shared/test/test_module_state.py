"""Tests for swerve_shared.module_state and swerve_shared.geometry."""

import math

import pytest

from swerve_shared.geometry import Rotation2d, Translation2d
from swerve_shared.module_state import ModuleState, SwerveModuleState, optimize


class TestRotation2d:
    def test_zero_vector_is_zero_rotation(self):
        assert Rotation2d(0.0, 0.0) == Rotation2d()

    def test_normalizes(self):
        r = Rotation2d(3.0, 4.0)
        assert math.hypot(r.cos, r.sin) == pytest.approx(1.0)
        assert r.radians == pytest.approx(math.atan2(4.0, 3.0))

    def test_difference_takes_shortest_path(self):
        delta = Rotation2d.from_degrees(170.0) - Rotation2d.from_degrees(-170.0)
        assert delta.degrees == pytest.approx(-20.0)

    def test_rotate_by_wraps(self):
        r = Rotation2d.from_degrees(270.0).rotate_by(Rotation2d.from_degrees(180.0))
        assert r.degrees == pytest.approx(90.0)

    def test_equality_tolerates_wrap(self):
        assert Rotation2d.from_degrees(360.0) == Rotation2d.from_degrees(0.0)
        assert Rotation2d.from_degrees(-180.0) == Rotation2d.from_degrees(180.0)
        assert Rotation2d.from_degrees(1.0) != Rotation2d.from_degrees(0.0)


class TestTranslation2d:
    def test_rotate_by_quarter_turn(self):
        t = Translation2d(1.0, 0.0).rotate_by(Rotation2d.from_degrees(90.0))
        assert t.x == pytest.approx(0.0, abs=1e-12)
        assert t.y == pytest.approx(1.0)

    def test_arithmetic(self):
        a = Translation2d(0.5, -0.25)
        b = Translation2d(0.25, 0.25)
        assert a + b == Translation2d(0.75, 0.0)
        assert a - b == Translation2d(0.25, -0.5)
        assert -a == Translation2d(-0.5, 0.25)

    def test_norm_and_angle(self):
        t = Translation2d(-0.5, 0.5)
        assert t.norm == pytest.approx(math.hypot(0.5, 0.5))
        assert t.angle.degrees == pytest.approx(135.0)

    def test_near_equal_values_compare_equal(self):
        a = Translation2d(1.0000000005, 0.0)
        b = Translation2d(1.0000000004999, 0.0)
        assert a == b

    @pytest.mark.parametrize("value", [Translation2d(0.5, 0.5), Rotation2d.from_degrees(30.0)])
    def test_unhashable(self, value):
        """Tolerant equality can't be hashed consistently, so neither type is hashable."""
        with pytest.raises(TypeError):
            hash(value)


class TestOptimize:
    def test_same_angle_unchanged(self):
        desired = ModuleState(2.0, Rotation2d.from_degrees(30.0), 0.4)
        assert optimize(desired, Rotation2d.from_degrees(30.0)) == desired

    def test_opposite_angle_reverses(self):
        desired = ModuleState(2.0, Rotation2d.from_degrees(30.0), 0.4)
        result = optimize(desired, Rotation2d.from_degrees(210.0))
        assert result.speed == pytest.approx(-2.0)
        assert result.angle == Rotation2d.from_degrees(210.0)
        assert result.omega == 0.4

    @pytest.mark.parametrize(
        "current_deg, flipped",
        [(89.0, False), (91.0, True), (-89.0, False), (-91.0, True)],
    )
    def test_ninety_degree_boundary(self, current_deg, flipped):
        desired = ModuleState(1.0, Rotation2d(), 0.0)
        result = optimize(desired, Rotation2d.from_degrees(current_deg))
        assert (result.speed < 0.0) is flipped

    def test_across_wrap_not_flipped(self):
        desired = ModuleState(1.5, Rotation2d.from_degrees(170.0), -0.2)
        result = desired.optimize(Rotation2d.from_degrees(-170.0))
        assert result == desired

    def test_optimized_steering_at_most_ninety(self):
        for desired_deg in range(-180, 180, 15):
            for current_deg in range(-180, 180, 20):
                desired = ModuleState(1.0, Rotation2d.from_degrees(desired_deg), 0.0)
                current = Rotation2d.from_degrees(current_deg)
                result = optimize(desired, current)
                assert abs((result.angle - current).degrees) <= 90.0 + 1e-9


class TestModuleState:
    def test_defaults(self):
        state = ModuleState()
        assert state.speed == 0.0
        assert state.angle == Rotation2d()
        assert state.omega == 0.0

    def test_to_first_order(self):
        state = ModuleState(1.25, Rotation2d.from_degrees(-45.0), 3.0)
        first = state.to_first_order()
        assert isinstance(first, SwerveModuleState)
        assert first == SwerveModuleState(1.25, Rotation2d.from_degrees(-45.0))

    def test_frozen(self):
        state = ModuleState(1.0)
        with pytest.raises(AttributeError):
            state.speed = 2.0
