"""Swerve shared constants and second-order kinematics -- single source of truth for robot and sim."""

from swerve_shared.constants import *  # noqa: F401,F403
from swerve_shared.errors import (  # noqa: F401
    SwerveKinematicsError,
    ModuleCountError,
)
from swerve_shared.geometry import Rotation2d, Translation2d  # noqa: F401
from swerve_shared.module_state import (  # noqa: F401
    ModuleState,
    SwerveModuleState,
    optimize,
)
from swerve_shared.chassis_speeds import ChassisSpeeds  # noqa: F401
from swerve_shared.limits import DriveLimits  # noqa: F401
from swerve_shared.swerve_kinematics import (  # noqa: F401
    KinematicsModel,
    SecondOrderKinematics,
    WheelStates,
    first_order_matrix,
    second_order_matrix,
)
from swerve_shared.desaturation import (  # noqa: F401
    desaturate_wheel_speeds,
    desaturate_wheel_speeds_for_chassis,
    desaturate_wheel_speeds_with_limits,
)
