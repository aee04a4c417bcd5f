"""Second-order swerve drive kinematics.

Converts a chassis velocity (vx, vy, omega) into per-module states
(speed, angle, angular velocity) and back. The inverse direction accounts
for the centripetal acceleration a nonzero omega induces at each module,
which gives the rate each module has to steer at on top of the chassis
rotation.

Matrix layout for module i at (x_i, y_i) relative to the center of
rotation (c_x, c_y), with rx = x_i - c_x and ry = y_i - c_y:

    first order  (2N x 3):  [1, 0, -ry]          @ [vx, vy, omega]
                            [0, 1,  rx]
    second order (2N x 4):  [1, 0, -rx, -ry]     @ [ax, ay, omega^2, alpha]
                            [0, 1, -ry,  rx]

The forward (module -> chassis) matrix is the pseudo-inverse of the first
order matrix about the chassis center and is computed once.

This module uses only NumPy so it runs on the robot and in simulation.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Sequence, Union

import numpy as np

from swerve_shared.chassis_speeds import ChassisSpeeds
from swerve_shared.constants import MODULE_SPEED_EPSILON
from swerve_shared.errors import ModuleCountError
from swerve_shared.geometry import Rotation2d, Translation2d
from swerve_shared.module_state import ModuleState

logger = logging.getLogger(__name__)

_ORIGIN = Translation2d()


def _as_translation(position: Union[Translation2d, Sequence[float]]) -> Translation2d:
    if isinstance(position, Translation2d):
        return position
    x, y = position
    return Translation2d(float(x), float(y))


def first_order_matrix(
    positions: Sequence[Translation2d], center_of_rotation: Translation2d = _ORIGIN
) -> np.ndarray:
    """Build the 2N x 3 matrix mapping (vx, vy, omega) to module velocities."""
    matrix = np.zeros((2 * len(positions), 3), dtype=np.float64)
    for i, p in enumerate(positions):
        rx = p.x - center_of_rotation.x
        ry = p.y - center_of_rotation.y
        matrix[2 * i] = (1.0, 0.0, -ry)
        matrix[2 * i + 1] = (0.0, 1.0, rx)
    return matrix


def second_order_matrix(
    positions: Sequence[Translation2d], center_of_rotation: Translation2d = _ORIGIN
) -> np.ndarray:
    """Build the 2N x 4 matrix mapping (ax, ay, omega^2, alpha) to module accelerations."""
    matrix = np.zeros((2 * len(positions), 4), dtype=np.float64)
    for i, p in enumerate(positions):
        rx = p.x - center_of_rotation.x
        ry = p.y - center_of_rotation.y
        matrix[2 * i] = (1.0, 0.0, -rx, -ry)
        matrix[2 * i + 1] = (0.0, 1.0, -ry, rx)
    return matrix


@dataclass(frozen=True)
class KinematicsModel:
    """Module layout plus the matrices derived from it.

    Immutable. Holds the base inverse matrix (about the chassis center) and
    its pseudo-inverse, used for forward kinematics.

    Args:
        module_positions: Module locations relative to the chassis center,
            as ``Translation2d`` or (x, y) pairs. The order given here is
            the order of every module-indexed input and output.
    """

    module_positions: tuple[Translation2d, ...]
    inverse_matrix: np.ndarray = field(init=False, repr=False, compare=False)
    forward_matrix: np.ndarray = field(init=False, repr=False, compare=False)

    def __init__(self, module_positions: Iterable[Union[Translation2d, Sequence[float]]]) -> None:
        positions = tuple(_as_translation(p) for p in module_positions)
        if len(positions) < 2:
            raise ModuleCountError(
                f"A swerve drive requires at least two modules, got {len(positions)}"
            )
        inverse = first_order_matrix(positions)
        forward = np.linalg.pinv(inverse)
        inverse.setflags(write=False)
        forward.setflags(write=False)
        object.__setattr__(self, "module_positions", positions)
        object.__setattr__(self, "inverse_matrix", inverse)
        object.__setattr__(self, "forward_matrix", forward)

    @property
    def num_modules(self) -> int:
        return len(self.module_positions)

    def check_count(self, count: int, what: str = "module states") -> None:
        if count != self.num_modules:
            raise ModuleCountError(
                f"Expected {self.num_modules} {what} (one per module), got {count}"
            )


class WheelStates(tuple):
    """Immutable, ordered collection of module states for one drivetrain."""

    def __new__(cls, states: Iterable[ModuleState]) -> WheelStates:
        return super().__new__(cls, states)

    @property
    def states(self) -> tuple[ModuleState, ...]:
        return tuple(self)


class SecondOrderKinematics:
    """Swerve kinematics engine for one drivetrain.

    Owns the per-tick cache: the last center of rotation with its matrices,
    and the last heading and angular velocity of every module (held when
    the chassis is commanded to stop). The cache is mutated by every
    inverse kinematics call, so one instance must only be used from one
    control thread.

    Args:
        module_positions: Module locations relative to the chassis center,
            or an existing ``KinematicsModel``.
    """

    def __init__(
        self,
        module_positions: Union[KinematicsModel, Iterable[Union[Translation2d, Sequence[float]]]],
    ) -> None:
        if isinstance(module_positions, KinematicsModel):
            self.model = module_positions
        else:
            self.model = KinematicsModel(module_positions)

        n = self.model.num_modules
        self._headings: list[Rotation2d] = [Rotation2d() for _ in range(n)]
        self._omegas: list[float] = [0.0] * n
        self._center_of_rotation = _ORIGIN
        self._first_order = self.model.inverse_matrix.copy()
        self._second_order = second_order_matrix(self.model.module_positions)

        logger.debug("Swerve kinematics built for %d modules: %s", n, self.model.module_positions)

    @property
    def num_modules(self) -> int:
        return self.model.num_modules

    @property
    def module_positions(self) -> tuple[Translation2d, ...]:
        return self.model.module_positions

    @property
    def center_of_rotation(self) -> Translation2d:
        """Center of rotation used by the last inverse kinematics call."""
        return self._center_of_rotation

    @property
    def headings(self) -> tuple[Rotation2d, ...]:
        return tuple(self._headings)

    # ------------------------------------------------------------------
    # Cache management
    # ------------------------------------------------------------------

    def reset_headings(self, *headings: Rotation2d) -> None:
        """Replace the held module headings (e.g. with measured angles at enable).

        Also clears the held module angular velocities.
        """
        self.model.check_count(len(headings), "headings")
        self._headings = list(headings)
        self._omegas = [0.0] * self.num_modules

    def _set_center_of_rotation(self, center_of_rotation: Translation2d) -> None:
        if center_of_rotation == self._center_of_rotation:
            return
        positions = self.model.module_positions
        self._first_order = first_order_matrix(positions, center_of_rotation)
        self._second_order = second_order_matrix(positions, center_of_rotation)
        self._center_of_rotation = center_of_rotation
        logger.debug("Rebuilt kinematics matrices for center of rotation %s", center_of_rotation)

    # ------------------------------------------------------------------
    # Inverse kinematics
    # ------------------------------------------------------------------

    def to_swerve_module_states(
        self,
        chassis_speeds: ChassisSpeeds,
        center_of_rotation: Translation2d = _ORIGIN,
    ) -> list[ModuleState]:
        """Convert a desired chassis velocity into module states.

        When the command is exactly zero the modules keep their previous
        heading and angular velocity at zero speed. A module sitting on the
        center of rotation (speed below ``MODULE_SPEED_EPSILON``) also keeps
        its previous heading, with zero angular velocity.

        The returned speeds are not desaturated; run them through one of the
        ``swerve_shared.desaturation`` functions before commanding motors.

        Args:
            chassis_speeds: Desired robot-relative chassis velocity.
            center_of_rotation: Point to rotate about, relative to the
                chassis center. Defaults to the chassis center.

        Returns:
            One ``ModuleState`` per module, in construction order.
        """
        if chassis_speeds.is_zero:
            return [
                ModuleState(0.0, self._headings[i], self._omegas[i])
                for i in range(self.num_modules)
            ]

        self._set_center_of_rotation(center_of_rotation)

        omega = chassis_speeds.omega
        velocities = self._first_order @ chassis_speeds.as_vector()
        accels = self._second_order @ np.array([0.0, 0.0, omega * omega, 0.0])

        states: list[ModuleState] = []
        for i in range(self.num_modules):
            vx, vy = velocities[2 * i], velocities[2 * i + 1]
            ax, ay = accels[2 * i], accels[2 * i + 1]
            speed = math.hypot(vx, vy)

            if speed < MODULE_SPEED_EPSILON:
                logger.debug("Module %d is on the center of rotation, holding heading", i)
                angle = self._headings[i]
                module_omega = 0.0
            else:
                angle = Rotation2d(vx, vy)
                # Acceleration component normal to the direction of travel
                normal_accel = -angle.sin * ax + angle.cos * ay
                module_omega = normal_accel / speed - omega

            states.append(ModuleState(speed, angle, module_omega))
            self._headings[i] = angle
            self._omegas[i] = module_omega

        return states

    def to_wheel_states(
        self,
        chassis_speeds: ChassisSpeeds,
        center_of_rotation: Translation2d = _ORIGIN,
    ) -> WheelStates:
        return WheelStates(self.to_swerve_module_states(chassis_speeds, center_of_rotation))

    # ------------------------------------------------------------------
    # Forward kinematics
    # ------------------------------------------------------------------

    def to_chassis_speeds(self, module_states: Sequence[ModuleState]) -> ChassisSpeeds:
        """Estimate chassis velocity from measured module states.

        Least-squares fit over all modules; module angular velocity is not
        used, so only the first-order chassis velocity is recovered.

        Args:
            module_states: One measured state per module, in construction order.

        Returns:
            Estimated robot-relative chassis velocity.
        """
        self.model.check_count(len(module_states))

        module_velocities = np.empty(2 * self.num_modules, dtype=np.float64)
        for i, state in enumerate(module_states):
            module_velocities[2 * i] = state.speed * state.angle.cos
            module_velocities[2 * i + 1] = state.speed * state.angle.sin

        vx, vy, omega = self.model.forward_matrix @ module_velocities
        return ChassisSpeeds(float(vx), float(vy), float(omega))
