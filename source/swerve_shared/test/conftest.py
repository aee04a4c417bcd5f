"""Shared fixtures for swerve_shared tests.

Usage:
    cd source/swerve_shared
    python -m pytest test -v
"""

import pytest

from swerve_shared.swerve_kinematics import SecondOrderKinematics

# Square chassis with modules at (+-0.5, +-0.5) m, order FL, FR, RL, RR
SQUARE_POSITIONS = ((0.5, 0.5), (0.5, -0.5), (-0.5, 0.5), (-0.5, -0.5))

# Non-square, non-collinear three-module layout
TRIANGLE_POSITIONS = ((0.4, 0.0), (-0.2, 0.3), (-0.2, -0.35))


@pytest.fixture
def square_kinematics():
    """Fresh engine for the 1 m square chassis (cache state is per test)."""
    return SecondOrderKinematics(SQUARE_POSITIONS)


@pytest.fixture
def triangle_kinematics():
    return SecondOrderKinematics(TRIANGLE_POSITIONS)
