import io
import struct

import pytest

from sphfluid.constants import HEADER_SIZE
from sphfluid.errors import ErrorCode, SimulationError
from sphfluid.fld import (
    FluidState,
    parse_arguments,
    parse_int,
    read_header,
    read_input_file,
    read_particles,
    write_header,
    write_output,
    write_particles,
)
from sphfluid.particle import Particle
from sphfluid.vector import Vec3

PPM = 204.0

RECORDS = [
    (0.0, 0.0, 0.0, 0.5, -0.25, 0.0, 1.0, 2.0, 3.0),
    (0.01, 0.02, -0.01, 0.0, 0.0, 0.125, -1.0, 0.0, 0.5),
]


def file_bytes(ppm, count, records):
    data = struct.pack("<fi", ppm, count)
    for record in records:
        data += struct.pack("<9f", *record)
    return data


def particles_of(state):
    return sorted(
        (p.load() for block in state.grid.blocks for p in block.particles), key=lambda p: p.id
    )


def test_read_header_returns_ppm():
    stream = io.BytesIO(file_bytes(PPM, 2, RECORDS))
    assert read_header(stream) == PPM


def test_read_header_invalid_count():
    stream = io.BytesIO(file_bytes(PPM, 0, []))
    with pytest.raises(SimulationError, match="Invalid number of particles: 0") as info:
        read_header(stream)
    assert info.value.code is ErrorCode.WRONG_PARTICLE_NUMBER


def test_read_header_incoherent_count():
    stream = io.BytesIO(file_bytes(PPM, 3, RECORDS))
    with pytest.raises(SimulationError, match="not coherent"):
        read_header(stream)


def test_read_header_short_file():
    with pytest.raises(SimulationError):
        read_header(io.BytesIO(b"\x00\x01"))


def test_read_particles_values_and_ids():
    particles = read_particles(io.BytesIO(file_bytes(PPM, 2, RECORDS)))
    assert [p.id for p in particles] == [0, 1]
    assert particles[0].hv == Vec3(0.5, -0.25, 0.0)
    assert particles[0].velocity == Vec3(1.0, 2.0, 3.0)
    assert particles[1].position.y == pytest.approx(0.02, rel=1e-6)


def test_write_header_bytes():
    stream = io.BytesIO()
    write_header(stream, 2, PPM)
    data = stream.getvalue()
    assert len(data) == HEADER_SIZE
    assert struct.unpack("<fi", data) == (PPM, 2)


def test_write_read_particles_round_trip():
    original = [
        Particle(id=0, position=Vec3(0.5, 0.25, -0.125), hv=Vec3(1.0, 0.0, 0.0), velocity=Vec3(0.0, 2.0, 0.0)),
        Particle(id=1, position=Vec3(-0.5, 0.0, 0.75), hv=Vec3(0.0, -1.0, 0.0), velocity=Vec3(0.0, 0.0, 4.0)),
    ]
    stream = io.BytesIO()
    write_header(stream, len(original), PPM)
    write_particles(stream, original)
    assert read_header(stream) == PPM
    loaded = read_particles(stream)
    for a, b in zip(original, loaded):
        assert (a.id, a.position, a.hv, a.velocity) == (b.id, b.position, b.hv, b.velocity)


@pytest.mark.parametrize(
    "text, expected",
    [("12", 12), ("-3", -3), ("12abc", 12), ("abc", None), ("", None), ("+5", None), ("99999999999", None)],
)
def test_parse_int(text, expected):
    assert parse_int(text) == expected


def test_read_input_file(tmp_path):
    path = tmp_path / "in.fld"
    path.write_bytes(file_bytes(PPM, 2, RECORDS))
    state = read_input_file(path)
    assert isinstance(state, FluidState)
    assert state.fluid_properties.particles_per_meter == PPM
    assert [p.id for p in particles_of(state)] == [0, 1]


def test_read_input_file_missing(tmp_path):
    with pytest.raises(SimulationError) as info:
        read_input_file(tmp_path / "missing.fld")
    assert info.value.code is ErrorCode.INIT_FILE_ERROR


def test_write_output_round_trip(tmp_path):
    source = tmp_path / "in.fld"
    target = tmp_path / "out.fld"
    source.write_bytes(file_bytes(PPM, 2, RECORDS))
    state = read_input_file(source)
    assert write_output(target, state) is state
    assert target.read_bytes() == source.read_bytes()
    again = read_input_file(target)
    for a, b in zip(particles_of(state), particles_of(again)):
        assert a.position == b.position
        assert a.velocity == b.velocity


def test_parse_arguments(tmp_path):
    path = tmp_path / "in.fld"
    path.write_bytes(file_bytes(PPM, 2, RECORDS))
    state = parse_arguments(["prog", "5", str(path), str(tmp_path / "out.fld")])
    assert state.iterations == 5
    assert state.input_file == str(path)
    assert state.output_file == str(tmp_path / "out.fld")


def test_parse_arguments_wrong_count():
    with pytest.raises(SimulationError, match="Invalid number of arguments") as info:
        parse_arguments(["prog", "5"])
    assert info.value.code is ErrorCode.WRONG_ARGS


def test_parse_arguments_bad_iterations(tmp_path):
    with pytest.raises(SimulationError, match="Could not parse arguments"):
        parse_arguments(["prog", "many", str(tmp_path / "a"), str(tmp_path / "b")])