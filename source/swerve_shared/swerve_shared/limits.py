"""Drivetrain speed limits used by desaturation and command scaling."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from swerve_shared.constants import (
    MAX_MODULE_SPEED,
    MAX_ROTATIONAL_VELOCITY,
    MAX_TRANSLATIONAL_SPEED,
)
from swerve_shared.geometry import Translation2d


@dataclass(frozen=True)
class DriveLimits:
    """Attainable speeds of a swerve drivetrain.

    Attributes:
        max_module_speed: Fastest any single module can drive (m/s).
        max_translational_speed: Fastest the chassis can translate (m/s).
        max_rotational_velocity: Fastest the chassis can spin (rad/s).
    """

    max_module_speed: float
    max_translational_speed: float
    max_rotational_velocity: float

    def __post_init__(self) -> None:
        for name in ("max_module_speed", "max_translational_speed", "max_rotational_velocity"):
            value = getattr(self, name)
            if value < 0.0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    @classmethod
    def default(cls) -> DriveLimits:
        """Limits of the reference chassis in ``swerve_shared.constants``."""
        return cls(MAX_MODULE_SPEED, MAX_TRANSLATIONAL_SPEED, MAX_ROTATIONAL_VELOCITY)

    @classmethod
    def from_motor(
        cls,
        free_speed_rpm: float,
        wheel_radius: float,
        drive_ratio: float,
        module_positions: Iterable[Translation2d | tuple[float, float]],
    ) -> DriveLimits:
        """Derive limits from drive motor free speed and module layout.

        Args:
            free_speed_rpm: Drive motor free speed at the motor shaft (RPM).
            wheel_radius: Wheel radius in meters.
            drive_ratio: Motor turns per wheel turn.
            module_positions: Module locations relative to the chassis center.

        Returns:
            Limits where translation tops out at the module speed and rotation
            at the module speed over the farthest module's lever arm.
        """
        if drive_ratio <= 0.0:
            raise ValueError(f"drive_ratio must be positive, got {drive_ratio}")
        module_speed = free_speed_rpm * 2.0 * math.pi / 60.0 / drive_ratio * wheel_radius

        lever_arm = max(
            p.norm if isinstance(p, Translation2d) else math.hypot(p[0], p[1])
            for p in module_positions
        )
        rotational = module_speed / lever_arm if lever_arm > 0.0 else 0.0
        return cls(module_speed, module_speed, rotational)
