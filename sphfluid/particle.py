"""Particle records, derived fluid properties and the pairwise SPH interactions."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any

from .constants import (
    DENSITY,
    DENSITY_TIMES_2,
    GOO,
    GRAVITY,
    MIN_DISTANCE,
    MIN_DISTANCE_SQRT,
    MUL_RAD,
    PI_TIMES_64,
    PRESSURE,
)
from .vector import Vec3, squared_distance

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FluidProperties:
    """Constants derived from the particle density of the fluid."""

    particles_per_meter: float
    smoothing: float
    smoothing_pow_2: float
    smoothing_pow_6: float
    smoothing_pow_9: float
    mass: float
    f45_pi_smooth_6: float
    mass_pressure_05: float
    mass_goo: float
    transform_density_constant: float


def _gravity() -> Vec3:
    return Vec3(*GRAVITY)


@dataclass(slots=True)
class Particle:
    """State of one fluid particle."""

    id: int = 0
    position: Vec3 = field(default_factory=Vec3)
    hv: Vec3 = field(default_factory=Vec3)
    velocity: Vec3 = field(default_factory=Vec3)
    acceleration: Vec3 = field(default_factory=_gravity)
    density: float = 0.0


def fluid_properties(ppm: float) -> FluidProperties:
    """Derive the fluid constants from the number of particles per metre."""
    smoothing = MUL_RAD / ppm
    mass = DENSITY / ppm**3
    smoothing_pow_6 = smoothing**6
    smoothing_pow_9 = smoothing**9

    logger.info("Particles per meter: %s", ppm)
    logger.info("Smoothing length: %s", smoothing)
    logger.info("Particles Mass: %s", mass)

    return FluidProperties(
        particles_per_meter=ppm,
        smoothing=smoothing,
        smoothing_pow_2=smoothing**2,
        smoothing_pow_6=smoothing_pow_6,
        smoothing_pow_9=smoothing_pow_9,
        mass=mass,
        f45_pi_smooth_6=45 / (math.pi * smoothing_pow_6),
        mass_pressure_05=mass * PRESSURE * 0.5,
        mass_goo=mass * GOO,
        transform_density_constant=(315.0 / (PI_TIMES_64 * smoothing_pow_9)) * mass,
    )


def density_increment(properties: FluidProperties, squared_distance: float) -> float:
    """Density contribution of a neighbour at the given squared distance."""
    return (properties.smoothing_pow_2 - squared_distance) ** 3


def acceleration_increment(
    properties: FluidProperties, particle_i: Any, particle_j: Any, squared_distance: float
) -> Vec3:
    """Acceleration that ``particle_j`` adds to ``particle_i`` (and subtracts from itself)."""
    distance = math.sqrt(squared_distance) if squared_distance > MIN_DISTANCE else MIN_DISTANCE_SQRT
    density_i = particle_i.density
    density_j = particle_j.density
    left = (
        (particle_i.position - particle_j.position)
        * properties.mass_pressure_05
        * ((properties.smoothing - distance) ** 2 / distance)
        * (density_i + density_j - DENSITY_TIMES_2)
    )
    right = (particle_j.velocity - particle_i.velocity) * properties.mass_goo
    denominator = density_i * density_j
    return (left + right) * properties.f45_pi_smooth_6 / denominator


def increment_densities(properties: FluidProperties, particle_i: Any, particle_j: Any) -> None:
    """Add the mutual density contribution to both particles when they are within range."""
    distance2 = squared_distance(particle_i.position, particle_j.position)
    if distance2 < properties.smoothing_pow_2:
        increment = density_increment(properties, distance2)
        particle_i.density += increment
        particle_j.density += increment


def increment_accelerations(properties: FluidProperties, particle_i: Any, particle_j: Any) -> None:
    """Apply the mutual acceleration to both particles when they are within range."""
    distance2 = squared_distance(particle_i.position, particle_j.position)
    if distance2 < properties.smoothing_pow_2:
        increment = acceleration_increment(properties, particle_i, particle_j, distance2)
        particle_i.acceleration += increment
        particle_j.acceleration -= increment