"""Planar geometry primitives -- translations and rotations in the robot frame.

Angles are stored as a normalized (cos, sin) pair rather than raw radians so
that differences and comparisons never have to deal with wrap-around.
Differences between rotations are always the shortest path, in (-pi, pi].
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# Tolerance for Rotation2d / Translation2d equality
_EQ_TOL = 1e-9


@dataclass(frozen=True, eq=False)
class Translation2d:
    """A 2D offset in meters (x forward, y left)."""

    x: float = 0.0
    y: float = 0.0

    @property
    def norm(self) -> float:
        return math.hypot(self.x, self.y)

    @property
    def angle(self) -> Rotation2d:
        return Rotation2d(self.x, self.y)

    def rotate_by(self, rotation: Rotation2d) -> Translation2d:
        return Translation2d(
            self.x * rotation.cos - self.y * rotation.sin,
            self.x * rotation.sin + self.y * rotation.cos,
        )

    def __add__(self, other: Translation2d) -> Translation2d:
        return Translation2d(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Translation2d) -> Translation2d:
        return Translation2d(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Translation2d:
        return Translation2d(-self.x, -self.y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Translation2d):
            return NotImplemented
        return (
            abs(self.x - other.x) < _EQ_TOL
            and abs(self.y - other.y) < _EQ_TOL
        )

    # Tolerant equality has no consistent hash
    __hash__ = None


class Rotation2d:
    """A planar rotation, stored as a unit (cos, sin) pair.

    ``Rotation2d(x, y)`` builds the rotation pointing along the vector
    (x, y); the vector does not need to be normalized. A zero vector maps
    to the zero rotation.
    """

    __slots__ = ("_cos", "_sin")

    def __init__(self, x: float = 1.0, y: float = 0.0) -> None:
        magnitude = math.hypot(x, y)
        if magnitude > 1e-6:
            self._cos = x / magnitude
            self._sin = y / magnitude
        else:
            self._cos = 1.0
            self._sin = 0.0

    @classmethod
    def from_radians(cls, radians: float) -> Rotation2d:
        return cls(math.cos(radians), math.sin(radians))

    @classmethod
    def from_degrees(cls, degrees: float) -> Rotation2d:
        return cls.from_radians(math.radians(degrees))

    @property
    def cos(self) -> float:
        return self._cos

    @property
    def sin(self) -> float:
        return self._sin

    @property
    def radians(self) -> float:
        return math.atan2(self._sin, self._cos)

    @property
    def degrees(self) -> float:
        return math.degrees(self.radians)

    def rotate_by(self, other: Rotation2d) -> Rotation2d:
        """Compose two rotations (angle addition)."""
        return Rotation2d(
            self._cos * other._cos - self._sin * other._sin,
            self._cos * other._sin + self._sin * other._cos,
        )

    def minus(self, other: Rotation2d) -> Rotation2d:
        """Shortest-path difference ``self - other``."""
        return self.rotate_by(-other)

    def __add__(self, other: Rotation2d) -> Rotation2d:
        return self.rotate_by(other)

    def __sub__(self, other: Rotation2d) -> Rotation2d:
        return self.minus(other)

    def __neg__(self) -> Rotation2d:
        return Rotation2d(self._cos, -self._sin)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rotation2d):
            return NotImplemented
        return math.hypot(self._cos - other._cos, self._sin - other._sin) < _EQ_TOL

    __hash__ = None

    def __repr__(self) -> str:
        return f"Rotation2d(degrees={self.degrees:.3f})"
