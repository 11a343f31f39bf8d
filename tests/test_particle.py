import math

import pytest

from sphfluid.constants import DENSITY, GOO, GRAVITY, MUL_RAD, PRESSURE
from sphfluid.dual_vector import DualVector, Layout
from sphfluid.particle import (
    Particle,
    acceleration_increment,
    density_increment,
    fluid_properties,
    increment_accelerations,
    increment_densities,
)
from sphfluid.vector import Vec3


@pytest.fixture
def props():
    return fluid_properties(204.0)


def test_fluid_properties_relations(props):
    assert props.particles_per_meter == 204.0
    assert props.smoothing * 204.0 == pytest.approx(MUL_RAD)
    assert props.smoothing_pow_2 == pytest.approx(props.smoothing**2)
    assert props.smoothing_pow_6 == pytest.approx(props.smoothing**6)
    assert props.smoothing_pow_9 == pytest.approx(props.smoothing**9)
    assert props.mass * 204.0**3 == pytest.approx(DENSITY)
    assert props.mass_goo == pytest.approx(props.mass * GOO)
    assert props.mass_pressure_05 == pytest.approx(props.mass * PRESSURE / 2)
    assert props.f45_pi_smooth_6 * math.pi * props.smoothing_pow_6 == pytest.approx(45)


def test_particle_defaults_use_fresh_gravity():
    a = Particle()
    b = Particle()
    assert a.acceleration == GRAVITY
    a.acceleration.y = 1.0
    assert b.acceleration == GRAVITY
    assert GRAVITY.y == -9.8
    assert a.density == 0.0


def test_density_increment_bounds(props):
    assert density_increment(props, 0.0) == pytest.approx(props.smoothing_pow_6)
    assert density_increment(props, props.smoothing_pow_2) == 0.0


def test_increment_densities_close_particles(props):
    a = Particle(position=Vec3(0.0, 0.0, 0.0))
    b = Particle(position=Vec3(0.0, 0.0, 0.0))
    increment_densities(props, a, b)
    assert a.density == pytest.approx(props.smoothing_pow_6)
    assert b.density == pytest.approx(props.smoothing_pow_6)


def test_increment_densities_far_particles(props):
    a = Particle(position=Vec3(0.0, 0.0, 0.0))
    b = Particle(position=Vec3(props.smoothing * 2, 0.0, 0.0))
    increment_densities(props, a, b)
    assert a.density == 0.0
    assert b.density == 0.0


def test_acceleration_increment_antisymmetric(props):
    a = Particle(position=Vec3(0.0, 0.0, 0.0), velocity=Vec3(0.1, 0.0, 0.0), density=1.0)
    b = Particle(position=Vec3(props.smoothing / 3, 0.0, 0.0), velocity=Vec3(0.0, 0.2, 0.0), density=2.0)
    d2 = (props.smoothing / 3) ** 2
    forward = acceleration_increment(props, a, b, d2)
    backward = acceleration_increment(props, b, a, d2)
    for f, r in zip(forward, backward):
        assert f == pytest.approx(-r)


def test_increment_accelerations_conserves_sum(props):
    a = Particle(position=Vec3(0.0, 0.0, 0.0), density=1.0)
    b = Particle(position=Vec3(props.smoothing / 2, 0.0, 0.0), density=1.0)
    increment_accelerations(props, a, b)
    total = a.acceleration + b.acceleration
    assert total.x == pytest.approx(0.0)
    assert total.y == pytest.approx(2 * GRAVITY.y)
    assert a.acceleration.x != pytest.approx(0.0)


def test_increment_accelerations_far_unchanged(props):
    a = Particle(position=Vec3(0.0, 0.0, 0.0), density=1.0)
    b = Particle(position=Vec3(0.0, props.smoothing * 3, 0.0), density=1.0)
    increment_accelerations(props, a, b)
    assert a.acceleration == GRAVITY
    assert b.acceleration == GRAVITY


@pytest.mark.parametrize("layout", [Layout.AOS, Layout.SOA])
def test_interactions_through_proxies(props, layout):
    vec = DualVector(Particle, [Particle(id=0), Particle(id=1)], layout)
    increment_densities(props, vec[0], vec[1])
    assert vec[0].density == pytest.approx(props.smoothing_pow_6)
    assert vec[1].density == pytest.approx(props.smoothing_pow_6)