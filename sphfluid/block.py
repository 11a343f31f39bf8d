"""A cell of the simulation grid and the particle updates that run on it."""

from __future__ import annotations

from collections.abc import Collection, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from .constants import (
    BOTTOM_LIMIT,
    COLLISION,
    DAMPING,
    GRAVITY,
    MIN_COLLISION_DIFF,
    PARTICLE_SIZE,
    SQUARED_TIME_STEP,
    TIME_STEP,
    TOP_LIMIT,
    Limit,
)
from .dual_vector import DualVector
from .particle import FluidProperties, Particle, increment_accelerations, increment_densities
from .vector import Vec3

_AXES = (
    ("x", Limit.CX0, Limit.CXN),
    ("y", Limit.CY0, Limit.CYN),
    ("z", Limit.CZ0, Limit.CZN),
)


def _collide(particle: Any, limits: Collection[Limit], axis: str, lower: Limit, upper: Limit) -> None:
    if lower in limits:
        pos = getattr(particle.position, axis) + getattr(particle.hv, axis) * TIME_STEP
        diff = PARTICLE_SIZE - (pos - getattr(BOTTOM_LIMIT, axis))
        if diff > MIN_COLLISION_DIFF:
            acc = particle.acceleration
            setattr(acc, axis, getattr(acc, axis) + COLLISION * diff - DAMPING * getattr(particle.velocity, axis))
            particle.acceleration = acc
    elif upper in limits:
        pos = getattr(particle.position, axis) + getattr(particle.hv, axis) * TIME_STEP
        diff = PARTICLE_SIZE - (getattr(TOP_LIMIT, axis) - pos)
        if diff > MIN_COLLISION_DIFF:
            acc = particle.acceleration
            setattr(acc, axis, getattr(acc, axis) - (COLLISION * diff + DAMPING * getattr(particle.velocity, axis)))
            particle.acceleration = acc


def _reflect(particle: Any, axis: str, new_position: float) -> None:
    position, velocity, hv = particle.position, particle.velocity, particle.hv
    setattr(position, axis, new_position)
    setattr(velocity, axis, -getattr(velocity, axis))
    setattr(hv, axis, -getattr(hv, axis))
    particle.position, particle.velocity, particle.hv = position, velocity, hv


def _bound(particle: Any, limits: Collection[Limit], axis: str, lower: Limit, upper: Limit) -> None:
    if lower in limits:
        bottom = getattr(BOTTOM_LIMIT, axis)
        delta = getattr(particle.position, axis) - bottom
        if delta < 0:
            _reflect(particle, axis, bottom - delta)
    elif upper in limits:
        top = getattr(TOP_LIMIT, axis)
        delta = top - getattr(particle.position, axis)
        if delta < 0:
            _reflect(particle, axis, top + delta)


def _new_particles() -> DualVector:
    return DualVector(Particle)


@dataclass
class Block:
    """The particles that currently lie inside one grid cell."""

    particles: DualVector = field(default_factory=_new_particles)

    def add_particle(self, particle: Any) -> None:
        """Reset the particle's acceleration and density, then store a copy of it."""
        particle.acceleration = Vec3(*GRAVITY)
        particle.density = 0.0
        self.particles.append(particle)

    def _pairs_with(self, adjacent: Iterable[int], blocks: Sequence[Block], interact) -> None:
        adjacent = list(adjacent)
        count = len(self.particles)
        for i in range(count):
            particle_i = self.particles[i]
            for j in range(i + 1, count):
                interact(particle_i, self.particles[j])
            for index in adjacent:
                for particle_j in blocks[index].particles:
                    interact(particle_i, particle_j)

    def calc_densities(
        self, properties: FluidProperties, adjacent: Iterable[int], blocks: Sequence[Block]
    ) -> None:
        """Accumulate densities within the block and with its adjacent blocks."""
        self._pairs_with(adjacent, blocks, lambda a, b: increment_densities(properties, a, b))

    def calc_accelerations(
        self, properties: FluidProperties, adjacent: Iterable[int], blocks: Sequence[Block]
    ) -> None:
        """Accumulate accelerations within the block and with its adjacent blocks."""
        self._pairs_with(adjacent, blocks, lambda a, b: increment_accelerations(properties, a, b))

    def process_collisions(self, limits: Collection[Limit]) -> None:
        """Push particles away from the box faces this block touches."""
        for particle in self.particles:
            for axis, lower, upper in _AXES:
                _collide(particle, limits, axis, lower, upper)

    def process_limits(self, limits: Collection[Limit]) -> None:
        """Reflect particles that have crossed the box faces this block touches."""
        for particle in self.particles:
            for axis, lower, upper in _AXES:
                _bound(particle, limits, axis, lower, upper)

    def move_particles(self) -> None:
        """Advance every particle by one time step."""
        for particle in self.particles:
            acceleration = particle.acceleration
            hv = particle.hv
            particle.position = particle.position + hv * TIME_STEP + acceleration * SQUARED_TIME_STEP
            particle.velocity = hv + (acceleration * TIME_STEP) / 2
            particle.hv = hv + acceleration * TIME_STEP