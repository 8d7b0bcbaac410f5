"""
Immutable 3D vector used by the physics engine. Every operation returns a
new instance so two bodies can never end up sharing a mutable velocity.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, List


@dataclass(frozen=True)
class Vector3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def zero(cls) -> Vector3:
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_iterable(cls, values: Iterable[Any]) -> Vector3:
        """Build from 1-3 numbers, padding missing components with zero."""
        vec = [float(v) for v in values]
        if len(vec) > 3:
            raise ValueError("expected at most 3 components")
        vec.extend([0.0] * (3 - len(vec)))
        return cls(*vec)

    def to_list(self) -> List[float]:
        return [self.x, self.y, self.z]

    # Arithmetic

    def add(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def sub(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, s: float) -> Vector3:
        return Vector3(self.x * s, self.y * s, self.z * s)

    def __add__(self, other: Vector3) -> Vector3:
        return self.add(other)

    def __sub__(self, other: Vector3) -> Vector3:
        return self.sub(other)

    def __mul__(self, s: float) -> Vector3:
        return self.scale(s)

    __rmul__ = __mul__

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    # Geometry

    @property
    def mag_sq(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    @property
    def mag(self) -> float:
        return math.sqrt(self.mag_sq)

    @property
    def normalized(self) -> Vector3:
        """Unit vector, or the zero vector when the magnitude is exactly 0."""
        m = self.mag
        if m == 0:
            return Vector3.zero()
        return self.scale(1.0 / m)

    # Static helpers, no intermediate vectors

    @staticmethod
    def dist_sq(a: Vector3, b: Vector3) -> float:
        dx = a.x - b.x
        dy = a.y - b.y
        dz = a.z - b.z
        return dx * dx + dy * dy + dz * dz

    @staticmethod
    def dist(a: Vector3, b: Vector3) -> float:
        return math.sqrt(Vector3.dist_sq(a, b))
