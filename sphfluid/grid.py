"""Uniform grid of blocks that partitions the simulation box."""

from __future__ import annotations

import itertools
import logging
import math
from collections.abc import Iterable
from typing import Any

from .block import Block
from .constants import BOTTOM_LIMIT, TOP_LIMIT, Limit
from .particle import FluidProperties
from .vector import Vec3

logger = logging.getLogger(__name__)

_FACES = (
    (Limit.CX0, Limit.CXN),
    (Limit.CY0, Limit.CYN),
    (Limit.CZ0, Limit.CZN),
)


class Grid:
    """Blocks of side at least the smoothing length, with their neighbours and box faces."""

    def __init__(self, particles: Iterable[Any], smoothing: float) -> None:
        if not smoothing > 0:
            raise ValueError(f"smoothing length must be positive, got {smoothing}")
        extent = TOP_LIMIT - BOTTOM_LIMIT
        self.grid_size: tuple[int, int, int] = tuple(
            math.floor(side / smoothing) for side in extent
        )
        if min(self.grid_size) <= 0:
            raise ValueError("smoothing length is larger than the simulation box")
        self.block_size = Vec3(*(side / count for side, count in zip(extent, self.grid_size)))
        nx, ny, nz = self.grid_size
        self.num_blocks = nx * ny * nz
        self.blocks: list[Block] = [Block() for _ in range(self.num_blocks)]
        self.adjacent_blocks: list[list[int]] = [[] for _ in range(self.num_blocks)]
        self.grid_limits: dict[int, set[Limit]] = {}

        for particle in particles:
            self.blocks[self.block_index(particle.position)].add_particle(particle)

        for index in range(self.num_blocks):
            self._link_block(index)

        logger.info("Grid size: %s", self.grid_size)
        logger.info("Number of blocks: %s", self.num_blocks)
        logger.info("Block size: %s", self.block_size)

    def block_index(self, position: Vec3) -> int:
        """Index of the block containing ``position``, clamped to the grid."""
        cells = []
        for coord, low, size, count in zip(position, BOTTOM_LIMIT, self.block_size, self.grid_size):
            cell = math.floor((coord - low) / size)
            cells.append(min(max(cell, 0), count - 1))
        i, j, k = cells
        nx, ny, _ = self.grid_size
        return i + j * nx + k * nx * ny

    def _in_bounds(self, cell: tuple[int, int, int]) -> bool:
        return all(0 <= c < n for c, n in zip(cell, self.grid_size))

    def _add_limits(self, index: int, cell: tuple[int, int, int]) -> None:
        limits = self.grid_limits.setdefault(index, set())
        for coord, count, (lower, upper) in zip(cell, self.grid_size, _FACES):
            if coord < 0:
                limits.add(lower)
            elif coord >= count:
                limits.add(upper)

    def _link_block(self, index: int) -> None:
        nx, ny, _ = self.grid_size
        position = (index % nx, index // nx % ny, index // (nx * ny))
        for offset in itertools.product((-1, 0, 1), repeat=3):
            if offset == (0, 0, 0):
                continue
            cell = tuple(p + o for p, o in zip(position, offset))
            if self._in_bounds(cell):
                neighbour = cell[0] + cell[1] * nx + cell[2] * nx * ny
                if neighbour > index:
                    self.adjacent_blocks[index].append(neighbour)
            else:
                self._add_limits(index, cell)

    def repositioning(self) -> None:
        """Move every particle into the block its current position falls in."""
        fresh = [Block() for _ in range(self.num_blocks)]
        for block in self.blocks:
            for particle in block.particles:
                fresh[self.block_index(particle.position)].add_particle(particle)
        self.blocks = fresh

    def calculate_accelerations(self, fluid_properties: FluidProperties) -> None:
        """Compute all densities, then all accelerations."""
        for block, adjacent in zip(self.blocks, self.adjacent_blocks):
            block.calc_densities(fluid_properties, adjacent, self.blocks)
        for block, adjacent in zip(self.blocks, self.adjacent_blocks):
            block.calc_accelerations(fluid_properties, adjacent, self.blocks)

    def process_collisions(self) -> None:
        """Apply wall collision forces in the blocks touching the box faces."""
        for index, limits in self.grid_limits.items():
            self.blocks[index].process_collisions(limits)

    def move_particles(self) -> None:
        """Advance every particle by one time step."""
        for block in self.blocks:
            block.move_particles()

    def process_limits(self) -> None:
        """Reflect particles that left the box through the faces their blocks touch."""
        for index, limits in self.grid_limits.items():
            self.blocks[index].process_limits(limits)