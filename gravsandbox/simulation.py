"""
N-body gravity engine. Owns the live bodies and the simulation clock and
advances them with sub-stepped Velocity Verlet integration, softened pairwise
gravity, and perfectly inelastic merging on overlap.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .body import Body
from .config import SimulationConfig
from .constants import BODY_TYPES, DEMO_ORBITS, MAX_FRAME_DT, MERGE_DISTANCE_FACTOR
from .errors import UnknownBodyTypeError
from .palette import Palette
from .vector import Vector3

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeEvent:
    survivor_id: int
    absorbed_id: int
    mass: float
    position: Vector3
    promoted: bool


class Simulation:
    """
    Container that owns Body instances and steps them forward in time.

    ``G`` and ``max_trail_length`` may be reassigned between steps (e.g. from
    UI sliders); ``paused`` turns ``step`` into a no-op.
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        palette: Optional[Palette] = None,
    ):
        config = config or SimulationConfig()
        self.bodies: List[Body] = []
        self.G = config.G
        self.softening = config.softening
        self.substeps = config.substeps
        self._max_trail_length = config.max_trail_length
        self.palette = palette or Palette()
        self.elapsed = 0.0
        self.paused = False

    @property
    def max_trail_length(self) -> int:
        return self._max_trail_length

    @max_trail_length.setter
    def max_trail_length(self, value: int) -> None:
        if value < 0:
            raise ValueError("max_trail_length must be >= 0")
        self._max_trail_length = int(value)
        for body in self.bodies:
            body.set_max_trail(self._max_trail_length)

    # Body management

    def add_body(
        self,
        body_type: str,
        position: Vector3,
        velocity: Optional[Vector3] = None,
    ) -> Body:
        if body_type not in BODY_TYPES:
            raise UnknownBodyTypeError(body_type, BODY_TYPES)
        body = Body.create(
            body_type,
            position,
            velocity,
            colors=self.palette.next_colors(body_type),
            max_trail=self._max_trail_length,
        )
        self.bodies.append(body)
        logger.debug("Added %s at %s", body_type, position)
        return body

    def remove_body(self, body: Body) -> None:
        self.bodies = [b for b in self.bodies if b is not body]

    def get_body(self, body_id: int) -> Optional[Body]:
        return next((b for b in self.bodies if b.id == body_id), None)

    def clear(self) -> None:
        """Drop every body and reset the clock; tunables are kept."""
        self.bodies = []
        self.elapsed = 0.0
        logger.debug("Simulation cleared")

    # Orbital helpers

    def orbital_speed(self, central_mass: float, distance: float) -> float:
        """Speed of a circular orbit at ``distance`` around ``central_mass``."""
        return math.sqrt(self.G * central_mass / distance)

    def create_demo_scene(self) -> None:
        """
        Replace the current bodies with a star at the origin and four bodies
        on circular orbits in the XZ plane.
        """
        self.clear()
        self.add_body("star", Vector3(0.0, 0.0, 0.0))

        star_mass = BODY_TYPES["star"]["mass"]
        for body_type, radius, angle in DEMO_ORBITS:
            speed = self.orbital_speed(star_mass, radius)
            position = Vector3(math.cos(angle) * radius, 0.0, math.sin(angle) * radius)
            velocity = Vector3(-math.sin(angle) * speed, 0.0, math.cos(angle) * speed)
            self.add_body(body_type, position, velocity)
        logger.info("Demo scene created with %d bodies", len(self.bodies))

    # Stepping

    def step(self, frame_delta: float, time_scale: float = 1.0) -> List[MergeEvent]:
        """
        Advance by one visual frame. ``frame_delta`` is clamped to
        MAX_FRAME_DT before scaling so a stalled driver cannot inject a huge
        timestep; negative deltas and scales count as zero, so the clock
        never runs backwards. Returns the merges resolved during this frame.
        """
        if self.paused:
            return []

        dt = max(min(frame_delta, MAX_FRAME_DT), 0.0) * max(time_scale, 0.0)
        if self.bodies:
            sub_dt = dt / self.substeps
            # Bodies added or merged since the last frame carry no valid acceleration yet.
            self._compute_accelerations()
            for _ in range(self.substeps):
                self._integrate_verlet(sub_dt)

        for body in self.bodies:
            body.record_trail()
            body.age += 1

        merges = self._resolve_collisions()
        self.elapsed += dt
        return merges

    def _integrate_verlet(self, h: float) -> None:
        half = 0.5 * h
        for b in self.bodies:
            b.velocity = b.velocity.add(b.acceleration.scale(half))
        for b in self.bodies:
            b.position = b.position.add(b.velocity.scale(h))

        self._compute_accelerations()

        for b in self.bodies:
            b.velocity = b.velocity.add(b.acceleration.scale(half))

    def _compute_accelerations(self) -> None:
        """Softened pairwise gravity, F = G m_a m_b / (d^2 + eps^2)."""
        bodies = self.bodies
        n = len(bodies)
        ax = [0.0] * n
        ay = [0.0] * n
        az = [0.0] * n
        soft_sq = self.softening * self.softening

        for i in range(n):
            a = bodies[i]
            pa = a.position
            for j in range(i + 1, n):
                b = bodies[j]
                pb = b.position
                dx = pb.x - pa.x
                dy = pb.y - pa.y
                dz = pb.z - pa.z
                dist_sq = dx * dx + dy * dy + dz * dz + soft_sq
                if dist_sq == 0:
                    continue  # coincident points with no softening
                dist = math.sqrt(dist_sq)
                force = self.G * a.mass * b.mass / dist_sq
                fx = force * dx / dist
                fy = force * dy / dist
                fz = force * dz / dist

                ax[i] += fx / a.mass
                ay[i] += fy / a.mass
                az[i] += fz / a.mass
                ax[j] -= fx / b.mass
                ay[j] -= fy / b.mass
                az[j] -= fz / b.mass

        for idx, body in enumerate(bodies):
            body.acceleration = Vector3(ax[idx], ay[idx], az[idx])

    def _resolve_collisions(self) -> List[MergeEvent]:
        """
        Merge overlapping pairs, the heavier body absorbing the lighter one
        (equal masses favor the lower index). Distances use each body's
        current radius, so a body that grows can go on to absorb others in
        the same call; the scan repeats until a full sweep finds no merge.
        """
        merges: List[MergeEvent] = []
        bodies = self.bodies
        star_colors = self.palette.star_default()

        merged = True
        while merged:
            merged = False
            for i in range(len(bodies)):
                a = bodies[i]
                if not a.alive:
                    continue
                for j in range(i + 1, len(bodies)):
                    b = bodies[j]
                    if not b.alive:
                        continue
                    threshold = (a.radius + b.radius) * MERGE_DISTANCE_FACTOR
                    if Vector3.dist_sq(a.position, b.position) >= threshold * threshold:
                        continue

                    big, small = (a, b) if a.mass >= b.mass else (b, a)
                    was_star = big.body_type == "star"
                    big.absorb(small, star_colors)
                    merged = True
                    event = MergeEvent(
                        survivor_id=big.id,
                        absorbed_id=small.id,
                        mass=big.mass,
                        position=big.position,
                        promoted=not was_star and big.body_type == "star",
                    )
                    merges.append(event)
                    logger.info(
                        "Body %d absorbed body %d (mass now %.1f)",
                        big.id,
                        small.id,
                        big.mass,
                    )
                    if not a.alive:
                        break

        if merges:
            self.bodies = [b for b in bodies if b.alive]
        return merges

    # Read surface

    def snapshot(self) -> Dict[str, Any]:
        return {
            "bodies": [body.to_dict() for body in self.bodies],
            "elapsed": self.elapsed,
            "paused": self.paused,
            "G": self.G,
            "softening": self.softening,
            "substeps": self.substeps,
            "maxTrailLength": self.max_trail_length,
        }
