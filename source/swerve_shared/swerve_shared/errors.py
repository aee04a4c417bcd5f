"""Exceptions raised by the swerve kinematics package."""


class SwerveKinematicsError(Exception):
    """Base exception for swerve kinematics errors."""


class ModuleCountError(SwerveKinematicsError, ValueError):
    """Wrong number of modules for the drivetrain (or fewer than two at construction)."""
