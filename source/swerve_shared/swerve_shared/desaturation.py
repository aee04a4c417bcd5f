"""Wheel speed desaturation.

After inverse kinematics a module may be asked to drive faster than it
physically can. These functions scale every module speed by the same
factor (never above 1), so module directions and speed ratios are kept.
All of them return new lists and leave the input untouched.
"""

from __future__ import annotations

import dataclasses
import math
from typing import Sequence

from swerve_shared.chassis_speeds import ChassisSpeeds
from swerve_shared.limits import DriveLimits
from swerve_shared.module_state import ModuleState


def _max_speed(module_states: Sequence[ModuleState]) -> float:
    return max((abs(s.speed) for s in module_states), default=0.0)


def _check_non_negative(**limits: float) -> None:
    for name, value in limits.items():
        if value < 0.0:
            raise ValueError(f"{name} must be non-negative, got {value}")


def _scaled(module_states: Sequence[ModuleState], scale: float) -> list[ModuleState]:
    return [dataclasses.replace(s, speed=s.speed * scale) for s in module_states]


def desaturate_wheel_speeds(
    module_states: Sequence[ModuleState], attainable_max_speed: float
) -> list[ModuleState]:
    """Scale module speeds down if any exceeds ``attainable_max_speed``.

    Args:
        module_states: Module states from inverse kinematics.
        attainable_max_speed: Absolute max speed a module can reach (m/s).

    Returns:
        New module states, all at or below the max speed.
    """
    _check_non_negative(attainable_max_speed=attainable_max_speed)
    real_max = _max_speed(module_states)
    if real_max <= attainable_max_speed:
        return list(module_states)
    return _scaled(module_states, attainable_max_speed / real_max)


def desaturate_wheel_speeds_for_chassis(
    module_states: Sequence[ModuleState],
    desired_chassis_speeds: ChassisSpeeds,
    attainable_max_module_speed: float,
    attainable_max_translational_speed: float,
    attainable_max_rotational_velocity: float,
) -> list[ModuleState]:
    """Scale module speeds against the chassis' translational and rotational capacity.

    The commanded chassis speed is compared with both capacities; the larger
    fraction of capacity sets the fastest module speed allowed. This also
    removes the saturation you get at the corners of a joystick, where a
    combined command exceeds what the drivetrain can do even though no
    single axis does.

    Returns the states unchanged if either chassis capacity or the fastest
    module speed is zero. Negative limits raise ``ValueError``.

    Args:
        module_states: Module states from inverse kinematics.
        desired_chassis_speeds: The chassis command the states came from.
        attainable_max_module_speed: Absolute max speed a module can reach (m/s).
        attainable_max_translational_speed: Max chassis translational speed (m/s).
        attainable_max_rotational_velocity: Max chassis rotational velocity (rad/s).

    Returns:
        New, uniformly scaled module states.
    """
    _check_non_negative(
        attainable_max_module_speed=attainable_max_module_speed,
        attainable_max_translational_speed=attainable_max_translational_speed,
        attainable_max_rotational_velocity=attainable_max_rotational_velocity,
    )
    real_max = _max_speed(module_states)
    if (
        attainable_max_translational_speed == 0.0
        or attainable_max_rotational_velocity == 0.0
        or real_max == 0.0
    ):
        return list(module_states)

    translational_k = (
        math.hypot(desired_chassis_speeds.vx, desired_chassis_speeds.vy)
        / attainable_max_translational_speed
    )
    rotational_k = abs(desired_chassis_speeds.omega) / attainable_max_rotational_velocity
    k = max(translational_k, rotational_k)
    scale = min(k * attainable_max_module_speed / real_max, 1.0)
    return _scaled(module_states, scale)


def desaturate_wheel_speeds_with_limits(
    module_states: Sequence[ModuleState],
    desired_chassis_speeds: ChassisSpeeds,
    limits: DriveLimits,
) -> list[ModuleState]:
    """``desaturate_wheel_speeds_for_chassis`` with the limits bundled in a ``DriveLimits``."""
    return desaturate_wheel_speeds_for_chassis(
        module_states,
        desired_chassis_speeds,
        limits.max_module_speed,
        limits.max_translational_speed,
        limits.max_rotational_velocity,
    )
