"""
Mutable representation of a celestial body owned by a Simulation.
"""

from __future__ import annotations

import itertools
from collections import deque
from typing import Any, Deque, Dict, Optional

from .constants import BODY_TYPES, MAX_TRAIL_LENGTH, STAR_PROMOTION_MASS
from .errors import UnknownBodyTypeError
from .palette import BodyColors
from .vector import Vector3

_DEFAULT_COLORS = BodyColors("#ffffff", "rgba(255,255,255,0.3)", "rgba(255,255,255,ALPHA)")


class Body:
    """
    A point mass with a preset type, a bounded trail of past positions, and
    a liveness flag that is cleared when another body absorbs it.
    """

    _ids = itertools.count(1)

    def __init__(
        self,
        body_type: str,
        mass: float,
        radius: float,
        position: Vector3,
        velocity: Optional[Vector3] = None,
        colors: BodyColors = _DEFAULT_COLORS,
        max_trail: int = MAX_TRAIL_LENGTH,
    ) -> None:
        if mass <= 0 or radius <= 0:
            raise ValueError("mass and radius must be positive")
        self.id = next(Body._ids)
        self.body_type = body_type
        self.mass = float(mass)
        self.radius = float(radius)
        self.position = position
        self.velocity = Vector3.zero() if velocity is None else velocity
        self.acceleration = Vector3.zero()
        self.color = colors.color
        self.glow = colors.glow
        self.trail_color = colors.trail
        self.trail: Deque[Vector3] = deque()
        self.max_trail = int(max_trail)
        self.age = 0
        self.alive = True

    @classmethod
    def create(
        cls,
        body_type: str,
        position: Vector3,
        velocity: Optional[Vector3] = None,
        colors: BodyColors = _DEFAULT_COLORS,
        max_trail: int = MAX_TRAIL_LENGTH,
    ) -> Body:
        """Instantiate a body from its type preset; unknown types fail fast."""
        preset = BODY_TYPES.get(body_type)
        if preset is None:
            raise UnknownBodyTypeError(body_type, BODY_TYPES)
        return cls(
            body_type,
            preset["mass"],
            preset["radius"],
            position,
            velocity,
            colors=colors,
            max_trail=max_trail,
        )

    def __repr__(self) -> str:
        return (
            f"Body(id={self.id}, type={self.body_type!r}, mass={self.mass}, "
            f"position={self.position}, alive={self.alive})"
        )

    def record_trail(self) -> None:
        """Push the current position, evicting the oldest entries past the cap."""
        self.trail.append(self.position)
        while len(self.trail) > self.max_trail:
            self.trail.popleft()

    def set_max_trail(self, max_trail: int) -> None:
        self.max_trail = int(max_trail)
        while len(self.trail) > self.max_trail:
            self.trail.popleft()

    def absorb(self, other: Body, star_colors: Optional[BodyColors] = None) -> None:
        """
        Perfectly inelastic merge: take over the other body's mass and
        momentum. The other body is marked dead but left in place; the
        owning Simulation compacts its list afterwards.
        """
        total_mass = self.mass + other.mass
        own_share = self.mass / total_mass
        other_share = other.mass / total_mass

        self.velocity = self.velocity.scale(own_share).add(other.velocity.scale(other_share))
        self.position = self.position.scale(own_share).add(other.position.scale(other_share))

        # Constant-density growth: r scales with the cube root of mass
        self.radius *= (total_mass / self.mass) ** (1.0 / 3.0)
        self.mass = total_mass

        if self.body_type != "star" and self.mass > STAR_PROMOTION_MASS:
            self.body_type = "star"
            if star_colors is not None:
                self.color = star_colors.color
                self.glow = star_colors.glow
                self.trail_color = star_colors.trail

        other.alive = False

    def momentum(self) -> Vector3:
        return self.velocity.scale(self.mass)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.body_type,
            "mass": self.mass,
            "radius": self.radius,
            "position": self.position.to_list(),
            "velocity": self.velocity.to_list(),
            "trail": [p.to_list() for p in self.trail],
            "age": self.age,
            "color": self.color,
            "glow": self.glow,
            "trailColor": self.trail_color,
        }
