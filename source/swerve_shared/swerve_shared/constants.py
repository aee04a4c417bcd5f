"""Swerve drivetrain constants -- single source of truth for robot code and sim.

Reference chassis: square frame, four MK4i-style modules (L2 gearing) on
a 0.5 m wheelbase / track width. Other drivetrains pass their own geometry
and limits to the kinematics classes; these values only provide defaults.
"""

import math

# =============================================================================
# Chassis Geometry
# =============================================================================

WHEEL_BASE = 0.5            # front-to-rear module distance (meters, center-to-center)
TRACK_WIDTH = 0.5           # left-to-right module distance (meters, center-to-center)

# Module ordering: index 0=FL, 1=FR, 2=RL, 3=RR
MODULE_NAMES = ("front_left", "front_right", "rear_left", "rear_right")

# Module positions (x forward, y left) relative to the chassis center, in MODULE_NAMES order
MODULE_POSITIONS = (
    ( WHEEL_BASE / 2.0,  TRACK_WIDTH / 2.0),   # FL
    ( WHEEL_BASE / 2.0, -TRACK_WIDTH / 2.0),   # FR
    (-WHEEL_BASE / 2.0,  TRACK_WIDTH / 2.0),   # RL
    (-WHEEL_BASE / 2.0, -TRACK_WIDTH / 2.0),   # RR
)

# =============================================================================
# Drive Motor / Module Gearing
# =============================================================================

DRIVE_MOTOR_FREE_SPEED_RPM = 6000.0    # RPM at motor shaft
DRIVE_GEAR_RATIO = 6.75                # motor turns per wheel turn (L2)
WHEEL_RADIUS = 0.0508                  # meters (4 in diameter wheel)

MAX_WHEEL_ANGULAR_VEL = (
    DRIVE_MOTOR_FREE_SPEED_RPM * 2.0 * math.pi / 60.0 / DRIVE_GEAR_RATIO
)                                       # ~93.08 rad/s

# =============================================================================
# Derived Velocity Limits
# =============================================================================

MAX_MODULE_SPEED = WHEEL_RADIUS * MAX_WHEEL_ANGULAR_VEL        # ~4.73 m/s
MAX_TRANSLATIONAL_SPEED = MAX_MODULE_SPEED                     # ~4.73 m/s
DRIVE_RADIUS = math.hypot(WHEEL_BASE / 2.0, TRACK_WIDTH / 2.0) # ~0.354 m (lever arm)
MAX_ROTATIONAL_VELOCITY = MAX_MODULE_SPEED / DRIVE_RADIUS      # ~13.4 rad/s

# =============================================================================
# Solver Tolerances
# =============================================================================

# Below this module speed (m/s) the module heading is undefined: the solver
# holds the last heading and commands zero module angular velocity.
MODULE_SPEED_EPSILON = 1e-6
