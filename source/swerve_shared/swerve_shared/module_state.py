"""Swerve module states -- commanded or measured (speed, angle, angular velocity)."""

from __future__ import annotations

from dataclasses import dataclass, field

from swerve_shared.geometry import Rotation2d

_HALF_TURN = Rotation2d.from_degrees(180.0)


@dataclass(frozen=True)
class SwerveModuleState:
    """First-order module state: wheel speed (m/s) and module angle."""

    speed: float = 0.0
    angle: Rotation2d = field(default_factory=Rotation2d)


@dataclass(frozen=True)
class ModuleState:
    """State of one swerve module, including its angular velocity.

    Attributes:
        speed: Signed wheel speed in m/s.
        angle: Module heading in the robot frame.
        omega: Module angular velocity in rad/s, relative to the chassis.
    """

    speed: float = 0.0
    angle: Rotation2d = field(default_factory=Rotation2d)
    omega: float = 0.0

    def optimize(self, current_angle: Rotation2d) -> ModuleState:
        return optimize(self, current_angle)

    def to_first_order(self) -> SwerveModuleState:
        """Drop the angular velocity, for consumers that only take (speed, angle)."""
        return SwerveModuleState(self.speed, self.angle)


def optimize(desired: ModuleState, current_angle: Rotation2d) -> ModuleState:
    """Minimize the steering travel needed to reach ``desired``.

    If the module would have to turn more than 90 degrees, the wheel
    direction is reversed and the target angle flipped by 180 degrees
    instead. Angular velocity is unchanged.

    Args:
        desired: The desired module state.
        current_angle: The current (measured or last commanded) module angle.

    Returns:
        An equivalent module state requiring at most 90 degrees of steering.
    """
    delta = desired.angle - current_angle
    if delta.cos < 0.0:
        return ModuleState(-desired.speed, desired.angle.rotate_by(_HALF_TURN), desired.omega)
    return desired
