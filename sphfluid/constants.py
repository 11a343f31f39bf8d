"""Physical constants, file layout sizes and grid limits of the simulation."""

from __future__ import annotations

import math
from enum import IntEnum

from .vector import Vec3

MUL_RAD = 1.695
DENSITY = 1000.0
PRESSURE = 3.0
COLLISION = 30000.0
DAMPING = 128.0
GOO = 0.4
PARTICLE_SIZE = 0.0002
TIME_STEP = 0.001
SQUARED_TIME_STEP = TIME_STEP * TIME_STEP
MIN_DISTANCE = 1e-12
MIN_COLLISION_DIFF = 1e-10
PI_TIMES_64 = 64.0 * math.pi
DENSITY_TIMES_2 = 2.0 * DENSITY
MIN_DISTANCE_SQRT = math.sqrt(MIN_DISTANCE)

# Shared vectors: copy before mutating.
GRAVITY = Vec3(0.0, -9.8, 0.0)
BOTTOM_LIMIT = Vec3(-0.065, -0.08, -0.065)
TOP_LIMIT = Vec3(0.065, 0.1, 0.065)

# Binary file layout: a float and an int32 header, nine floats per particle.
HEADER_SIZE = 8
PARTICLE_COMPONENTS = 9


class Limit(IntEnum):
    """Faces of the simulation box a block may touch."""

    CX0 = 0
    CY0 = 1
    CZ0 = 2
    CXN = 3
    CYN = 4
    CZN = 5