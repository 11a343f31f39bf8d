# sphfluid

A smoothed-particle hydrodynamics (SPH) fluid simulator library. Particles
live in a fixed box, which is split into a uniform grid of blocks. The grid
provides these steps:

* compute densities and accelerations from neighbouring particles;
* apply wall collision forces;
* move the particles;
* reflect any particle that has left the box.

The package also includes small vector and matrix types (`Vec2`, `Vec3`,
`Vec4`, `Mat3`, `Mat4`). It also includes a record container, `DualVector`,
that stores records either as an array of structures or as a structure of
arrays behind one interface.

## Modules

* `sphfluid.vector`: `Vec2`, `Vec3`, `Vec4` and the functions `dot`, `cross`,
  `length`, `normalize`, `squared_distance`, `to_array`, `degrees`, `radians`,
  `vec_to_radians`, `vec_to_degrees`.
* `sphfluid.matrix`: `Mat3`, `Mat4` and the functions `determinant`,
  `adjugate`, `inverse`, `transpose`, `affine_transformation`,
  `perspective_fov`, `look_at`, `translation`, `scale`, `rotation`.
* `sphfluid.constants`: the physical constants, the box limits
  (`BOTTOM_LIMIT`, `TOP_LIMIT`), `GRAVITY`, and the `Limit` enum of box faces.
* `sphfluid.errors`: the `ErrorCode` enum and the `SimulationError` exception.
* `sphfluid.dual_vector`: `DualVector`, `Proxy` and `Layout`.
* `sphfluid.particle`: `Particle`, `FluidProperties`, `fluid_properties` and
  the pairwise interaction functions.
* `sphfluid.block`: `Block`, a single grid cell, and the particle updates that
  run on it.
* `sphfluid.grid`: `Grid`, which divides the box into blocks.
* `sphfluid.fld`: binary file input and output, and argument parsing.

## Input and output files

Simulation state is read from and written to a binary little-endian file:

* a header of one 32-bit float (particles per metre) and one 32-bit integer
  (number of particles);
* for each particle, nine 32-bit floats: position, half-step velocity `hv`
  and velocity, three components each.

Reading fails with `sphfluid.errors.SimulationError` in these cases:

* the header is short;
* the header's particle count is not positive;
* the count does not agree with the file's length.

Particles get ids in file order. `write_output` writes them sorted by id.

## Using it

`read_input_file` loads a file and builds the grid for it. `write_output`
writes a state back:

```python
from sphfluid.fld import read_input_file, write_output

state = read_input_file("small.fld")
write_output("out.fld", state)
```

`parse_arguments` takes `[program, iterations, input, output]`, loads the
input file and returns a `FluidState` with `iterations`, `input_file` and
`output_file` filled in. It raises `SimulationError` in two cases:

* the number of arguments is wrong;
* the iteration count does not start with a 32-bit integer.

`parse_int` returns `None` for such text.

To drive the grid, call its steps yourself. One time step in the order the
steps are listed above looks like this:

```python
from sphfluid.fld import read_header, read_particles
from sphfluid.grid import Grid
from sphfluid.particle import fluid_properties

with open("small.fld", "rb") as stream:
    ppm = read_header(stream)
    particles = read_particles(stream)

properties = fluid_properties(ppm)
grid = Grid(particles, properties.smoothing)

for _ in range(10):
    grid.repositioning()
    grid.calculate_accelerations(properties)
    grid.process_collisions()
    grid.move_particles()
    grid.process_limits()
```

`Grid` raises `ValueError` in two cases:

* the smoothing length is not positive;
* the smoothing length is larger than the box.

`fluid_properties` and `Grid` report their derived values through the
standard `logging` module at INFO level.

## Vectors and matrices

```python
from sphfluid.vector import Vec3, cross, dot, length
from sphfluid.matrix import Mat3, determinant, inverse

a = Vec3(1.0, 0.0, 0.0)
b = Vec3(0.0, 1.0, 0.0)
cross(a, b)        # Vec3(x=0.0, y=0.0, z=1.0)
dot(a, b)          # 0.0
length(a + b)      # 1.4142...
```

Vectors and matrices support `+`, `-`, `*` and `/` with a value of the same
type or with a scalar. Multiplying two matrices gives their matrix product.
Multiplying a matrix by a vector of its row size transforms the vector.
Dividing by a matrix multiplies by its inverse. `inverse` returns a zero
matrix when the determinant is zero.

## Record containers

```python
from sphfluid.dual_vector import DualVector, Layout
from sphfluid.particle import Particle

particles = DualVector(Particle, [Particle(id=1)], Layout.SOA)
particles[0].density = 2.0
record = particles[0].load()
```

A `DualVector` holds dataclass records.

* Indexing one, or iterating over it, gives `Proxy` views. Reading or
  assigning an attribute on a proxy reads or writes the stored field.
* `load()` returns a copy of the record, and `store(value)` overwrites it.
* `append` stores a copy of a record or of a proxy's element.
* Two containers of the same record type compare equal element by element,
  whatever their layouts.

## What it does not do

The package has no command-line program and no built-in simulation loop. It
reads, advances and writes states only when your own code calls its
functions in turn, as in the example above.

## Tests

The tests use pytest and are in `tests/`. Install the `test` extra to get
pytest.