"""
Read-only physical diagnostics over a set of bodies: conserved quantities
for checking integrator health, and the orbit of one body around another.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

import numpy as np

from .body import Body


def _state_arrays(bodies: Sequence[Body]) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    masses = np.array([b.mass for b in bodies], dtype=float)
    positions = np.array([b.position.to_list() for b in bodies], dtype=float).reshape(-1, 3)
    velocities = np.array([b.velocity.to_list() for b in bodies], dtype=float).reshape(-1, 3)
    return masses, positions, velocities


def total_mass(bodies: Sequence[Body]) -> float:
    return float(sum(b.mass for b in bodies))


def center_of_mass(bodies: Sequence[Body]) -> np.ndarray:
    if not bodies:
        return np.zeros(3)
    masses, positions, _ = _state_arrays(bodies)
    return masses @ positions / masses.sum()


def total_momentum(bodies: Sequence[Body]) -> np.ndarray:
    if not bodies:
        return np.zeros(3)
    masses, _, velocities = _state_arrays(bodies)
    return masses @ velocities


def kinetic_energy(bodies: Sequence[Body]) -> float:
    if not bodies:
        return 0.0
    masses, _, velocities = _state_arrays(bodies)
    return float(0.5 * np.sum(masses * np.einsum("ij,ij->i", velocities, velocities)))


def potential_energy(bodies: Sequence[Body], G: float, softening: float) -> float:
    """
    Softened pairwise potential, -G m_a m_b / sqrt(d^2 + eps^2), summed over
    unordered pairs. This is the potential whose gradient is the engine's
    force law.
    """
    n = len(bodies)
    if n < 2:
        return 0.0
    masses, positions, _ = _state_arrays(bodies)
    offsets = positions[:, None, :] - positions[None, :, :]
    dist_sq = np.einsum("ijk,ijk->ij", offsets, offsets) + softening * softening
    iu = np.triu_indices(n, k=1)
    pair_mass = np.outer(masses, masses)[iu]
    return float(-G * np.sum(pair_mass / np.sqrt(dist_sq[iu])))


def total_energy(bodies: Sequence[Body], G: float, softening: float) -> float:
    return kinetic_energy(bodies) + potential_energy(bodies, G, softening)


@dataclass
class OrbitalElements:
    distance: float
    speed: float
    circular_speed: float
    specific_energy: float
    eccentricity: float

    @property
    def bound(self) -> bool:
        return self.specific_energy < 0


def orbital_elements(body: Body, central: Body, G: float) -> OrbitalElements:
    """
    Two-body orbit of ``body`` relative to ``central`` using the combined
    mass as gravitational parameter. Softening is ignored here.
    """
    mu = G * (central.mass + body.mass)
    r_vec = np.array(body.position.sub(central.position).to_list())
    v_vec = np.array(body.velocity.sub(central.velocity).to_list())
    r = float(np.linalg.norm(r_vec))
    v = float(np.linalg.norm(v_vec))
    if r == 0 or mu == 0:
        return OrbitalElements(r, v, 0.0, 0.0, 0.0)

    energy = 0.5 * v * v - mu / r
    # Eccentricity vector: ((v^2 - mu/r) r - (r.v) v) / mu
    e_vec = ((v * v - mu / r) * r_vec - float(np.dot(r_vec, v_vec)) * v_vec) / mu
    return OrbitalElements(
        distance=r,
        speed=v,
        circular_speed=math.sqrt(mu / r),
        specific_energy=energy,
        eccentricity=float(np.linalg.norm(e_vec)),
    )


def summary(bodies: Sequence[Body], G: float, softening: float) -> Dict[str, object]:
    kinetic = kinetic_energy(bodies)
    potential = potential_energy(bodies, G, softening)
    return {
        "bodyCount": len(bodies),
        "totalMass": total_mass(bodies),
        "centerOfMass": center_of_mass(bodies).tolist(),
        "momentum": total_momentum(bodies).tolist(),
        "kineticEnergy": kinetic,
        "potentialEnergy": potential,
        "totalEnergy": kinetic + potential,
    }
