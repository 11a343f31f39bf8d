"""Reading and writing the binary fluid files, and parsing the command arguments."""

from __future__ import annotations

import io
import os
import re
import struct
from dataclasses import dataclass, replace
from typing import Any, BinaryIO, Iterable, Sequence

from .constants import HEADER_SIZE, MUL_RAD, PARTICLE_COMPONENTS
from .errors import ErrorCode, SimulationError
from .grid import Grid
from .particle import FluidProperties, Particle, fluid_properties
from .vector import Vec3

_HEADER = struct.Struct("<fi")
_RECORD = struct.Struct(f"<{PARTICLE_COMPONENTS}f")
_FLOAT_SIZE = 4
_INT_PATTERN = re.compile(r"-?[0-9]+")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


@dataclass
class FluidState:
    """Everything the simulation needs: fluid constants, particle grid and run arguments."""

    fluid_properties: FluidProperties
    grid: Grid
    iterations: int = 0
    input_file: str | os.PathLike | None = None
    output_file: str | os.PathLike | None = None


def read_header(stream: BinaryIO) -> float:
    """Read and validate the header; return the particles per metre."""
    try:
        file_length = stream.seek(0, io.SEEK_END)
        stream.seek(0)
        data = stream.read(HEADER_SIZE)
    except OSError as exc:
        raise SimulationError("Exception raised reading header", ErrorCode.INIT_FILE_ERROR) from exc
    if len(data) < HEADER_SIZE:
        raise SimulationError("Exception raised reading header", ErrorCode.INIT_FILE_ERROR)

    particles_per_meter, count = _HEADER.unpack(data)
    if count <= 0:
        raise SimulationError(
            f"Invalid number of particles: {count}", ErrorCode.WRONG_PARTICLE_NUMBER
        )
    found = (file_length - HEADER_SIZE) // _FLOAT_SIZE // PARTICLE_COMPONENTS
    if found != count:
        raise SimulationError(
            "Number of particles is not coherent with header\n"
            f"Expected: {count}\n Found: {found}\n",
            ErrorCode.WRONG_PARTICLE_NUMBER,
        )
    return particles_per_meter


def read_particles(stream: BinaryIO) -> list[Particle]:
    """Read every particle record after the header; ids follow file order."""
    try:
        stream.seek(HEADER_SIZE)
        data = stream.read()
    except OSError:
        return []
    usable = len(data) - len(data) % _RECORD.size
    particles = []
    for index, values in enumerate(_RECORD.iter_unpack(data[:usable])):
        particles.append(
            Particle(
                id=index,
                position=Vec3(*values[0:3]),
                hv=Vec3(*values[3:6]),
                velocity=Vec3(*values[6:9]),
            )
        )
    return particles


def write_header(stream: BinaryIO, count: int, particles_per_meter: float) -> None:
    """Write the header: particles per metre as float32 and the count as int32."""
    stream.write(_HEADER.pack(float(particles_per_meter), count))


def write_particles(stream: BinaryIO, particles: Iterable[Any]) -> None:
    """Write position, half-step velocity and velocity of each particle as float32."""
    for particle in particles:
        stream.write(_RECORD.pack(*particle.position, *particle.hv, *particle.velocity))


def read_input_file(path: str | os.PathLike) -> FluidState:
    """Load a fluid file and build the grid for it."""
    try:
        with open(path, "rb") as stream:
            particles_per_meter = read_header(stream)
            particles = read_particles(stream)
    except OSError as exc:
        raise SimulationError(f"Cannot open input file: {path}", ErrorCode.INIT_FILE_ERROR) from exc
    if not particles:
        raise SimulationError("No particles could be read", ErrorCode.INIT_FILE_ERROR)
    return FluidState(
        fluid_properties=fluid_properties(particles_per_meter),
        grid=Grid(particles, MUL_RAD / particles_per_meter),
        input_file=path,
    )


def write_output(path: str | os.PathLike, state: FluidState) -> FluidState:
    """Write every particle of the state, ordered by id, and return the state."""
    by_id = {
        particle.id: particle for block in state.grid.blocks for particle in block.particles
    }
    try:
        with open(path, "wb") as stream:
            write_header(stream, len(by_id), state.fluid_properties.particles_per_meter)
            write_particles(stream, (by_id[key] for key in sorted(by_id)))
    except OSError as exc:
        raise SimulationError(str(exc), ErrorCode.OUTPUT_ERROR) from exc
    return state


def parse_int(text: str) -> int | None:
    """Parse a leading 32-bit integer, or return None when there is none."""
    match = _INT_PATTERN.match(text)
    if match is None:
        return None
    value = int(match.group())
    if not _INT32_MIN <= value <= _INT32_MAX:
        return None
    return value


def parse_arguments(args: Sequence[str]) -> FluidState:
    """Parse ``[program, iterations, input, output]`` and load the input file."""
    if len(args) != 4:
        raise SimulationError("Invalid number of arguments", ErrorCode.WRONG_ARGS)
    iterations = parse_int(args[1])
    if iterations is None:
        raise SimulationError("Could not parse arguments", ErrorCode.WRONG_ARGS)
    state = read_input_file(args[2])
    return replace(state, iterations=iterations, input_file=args[2], output_file=args[3])