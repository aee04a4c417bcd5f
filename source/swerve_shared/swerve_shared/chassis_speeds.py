"""Chassis velocity -- the (vx, vy, omega) triple commanded to or estimated for the robot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from swerve_shared.geometry import Rotation2d, Translation2d
from swerve_shared.limits import DriveLimits


@dataclass(frozen=True)
class ChassisSpeeds:
    """Instantaneous robot-relative chassis velocity.

    Attributes:
        vx: Forward velocity in m/s.
        vy: Left velocity in m/s.
        omega: CCW angular velocity in rad/s.
    """

    vx: float = 0.0
    vy: float = 0.0
    omega: float = 0.0

    @property
    def is_zero(self) -> bool:
        return self.vx == 0.0 and self.vy == 0.0 and self.omega == 0.0

    @property
    def translational_speed(self) -> float:
        return float(np.hypot(self.vx, self.vy))

    def as_vector(self) -> np.ndarray:
        return np.array([self.vx, self.vy, self.omega], dtype=np.float64)

    @classmethod
    def from_normalized(
        cls,
        vx_norm: float,
        vy_norm: float,
        omega_norm: float,
        limits: Optional[DriveLimits] = None,
    ) -> ChassisSpeeds:
        """Scale normalized [-1, 1] commands (joystick, policy) to physical units.

        Values outside [-1, 1] are clipped.

        Args:
            vx_norm: Forward velocity, normalized [-1, 1].
            vy_norm: Strafe left velocity, normalized [-1, 1].
            omega_norm: CCW rotation, normalized [-1, 1].
            limits: Drivetrain limits; defaults to the reference chassis.
        """
        if limits is None:
            limits = DriveLimits.default()
        return cls(
            float(np.clip(vx_norm, -1.0, 1.0)) * limits.max_translational_speed,
            float(np.clip(vy_norm, -1.0, 1.0)) * limits.max_translational_speed,
            float(np.clip(omega_norm, -1.0, 1.0)) * limits.max_rotational_velocity,
        )

    @classmethod
    def from_field_relative(
        cls, vx: float, vy: float, omega: float, robot_angle: Rotation2d
    ) -> ChassisSpeeds:
        """Convert a field-frame velocity into the robot frame.

        Args:
            vx: Velocity along the field x axis in m/s.
            vy: Velocity along the field y axis in m/s.
            omega: CCW angular velocity in rad/s.
            robot_angle: Robot heading in the field frame.
        """
        robot_relative = Translation2d(vx, vy).rotate_by(-robot_angle)
        return cls(robot_relative.x, robot_relative.y, omega)
