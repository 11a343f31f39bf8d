"""Small fixed-size vectors and the scalar functions that operate on them."""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from numbers import Real
from typing import Callable, Iterator, TypeVar, Union

Scalar = Union[int, float]
V = TypeVar("V", bound="_Vector")


class _Vector:
    """Component-wise arithmetic shared by all vector sizes."""

    __slots__ = ()

    def __iter__(self) -> Iterator[Scalar]:  # pragma: no cover - overridden
        raise NotImplementedError

    def _combine(self: V, other: object, op: Callable[[Scalar, Scalar], Scalar]) -> V:
        cls = type(self)
        if isinstance(other, cls):
            return cls(*(op(a, b) for a, b in zip(self, other)))
        if isinstance(other, Real) and not isinstance(other, bool):
            return cls(*(op(a, other) for a in self))
        return NotImplemented

    def __add__(self: V, other: object) -> V:
        return self._combine(other, operator.add)

    def __sub__(self: V, other: object) -> V:
        return self._combine(other, operator.sub)

    def __mul__(self: V, other: object) -> V:
        return self._combine(other, operator.mul)

    def __truediv__(self: V, other: object) -> V:
        return self._combine(other, operator.truediv)

    def __radd__(self: V, other: object) -> V:
        return self._combine(other, operator.add)

    def __rmul__(self: V, other: object) -> V:
        return self._combine(other, operator.mul)

    def __neg__(self: V) -> V:
        return type(self)(*(-a for a in self))

    def __pos__(self: V) -> V:
        return type(self)(*self)

    def __str__(self) -> str:
        return "{" + ", ".join(f"{a:g}" for a in self) + "}"


@dataclass(slots=True)
class Vec2(_Vector):
    """Two-component vector."""

    x: Scalar = 0.0
    y: Scalar = 0.0

    def __iter__(self) -> Iterator[Scalar]:
        yield self.x
        yield self.y

    def __add__(self, other):
        return _Vector.__add__(self, other)

    def __sub__(self, other):
        return _Vector.__sub__(self, other)

    def __mul__(self, other):
        return _Vector.__mul__(self, other)

    def __truediv__(self, other):
        return _Vector.__truediv__(self, other)

    def __neg__(self):
        return _Vector.__neg__(self)


@dataclass(slots=True)
class Vec3(_Vector):
    """Three-component vector."""

    x: Scalar = 0.0
    y: Scalar = 0.0
    z: Scalar = 0.0

    def __iter__(self) -> Iterator[Scalar]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other):
        return _Vector.__add__(self, other)

    def __sub__(self, other):
        return _Vector.__sub__(self, other)

    def __mul__(self, other):
        return _Vector.__mul__(self, other)

    def __truediv__(self, other):
        return _Vector.__truediv__(self, other)

    def __neg__(self):
        return _Vector.__neg__(self)

    def xy(self) -> Vec2:
        """The first two components."""
        return Vec2(self.x, self.y)


@dataclass(slots=True)
class Vec4(_Vector):
    """Four-component vector."""

    x: Scalar = 0.0
    y: Scalar = 0.0
    z: Scalar = 0.0
    w: Scalar = 0.0

    def __iter__(self) -> Iterator[Scalar]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    def __add__(self, other):
        return _Vector.__add__(self, other)

    def __sub__(self, other):
        return _Vector.__sub__(self, other)

    def __mul__(self, other):
        return _Vector.__mul__(self, other)

    def __truediv__(self, other):
        return _Vector.__truediv__(self, other)

    def __neg__(self):
        return _Vector.__neg__(self)

    def xyz(self) -> Vec3:
        """The first three components."""
        return Vec3(self.x, self.y, self.z)


Vector = Union[Vec2, Vec3, Vec4]


def _require_same(a: _Vector, b: _Vector) -> None:
    if not isinstance(a, _Vector) or type(a) is not type(b):
        raise TypeError(
            f"expected two vectors of the same size, got {type(a).__name__} and {type(b).__name__}"
        )


def dot(a: Vector, b: Vector) -> Scalar:
    """Scalar product of two vectors of the same size."""
    _require_same(a, b)
    return sum(a * b)


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Cross product of two three-component vectors."""
    if not (isinstance(a, Vec3) and isinstance(b, Vec3)):
        raise TypeError("cross product is defined for Vec3 only")
    return Vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def length(v: Vector) -> float:
    """Euclidean length of a vector."""
    if not isinstance(v, _Vector):
        raise TypeError(f"expected a vector, got {type(v).__name__}")
    return math.sqrt(sum(a * a for a in v))


def normalize(v: Vector) -> Vector:
    """The vector scaled to unit length."""
    inverse_length = 1 / length(v)
    return v * inverse_length


def squared_distance(a: Vector, b: Vector) -> float:
    """Squared distance between two points, using their x, y and z components."""
    dx = a.x - b.x
    dy = a.y - b.y
    dz = a.z - b.z
    return dx**2 + dy**2 + dz**2


def to_array(v: Vector) -> tuple[Scalar, ...]:
    """The components of a vector as a tuple."""
    if not isinstance(v, _Vector):
        raise TypeError(f"expected a vector, got {type(v).__name__}")
    return tuple(v)


def degrees(value: Scalar) -> float:
    """Convert radians to degrees."""
    return value * 180 / math.pi


def radians(value: Scalar) -> float:
    """Convert degrees to radians."""
    return value * (math.pi / 180)


def vec_to_radians(v: Vector) -> Vector:
    """Convert every component of a vector from degrees to radians."""
    if not isinstance(v, _Vector):
        raise TypeError(f"expected a vector, got {type(v).__name__}")
    return type(v)(*(radians(a) for a in v))


def vec_to_degrees(v: Vector) -> Vector:
    """Convert every component of a vector from radians to degrees."""
    if not isinstance(v, _Vector):
        raise TypeError(f"expected a vector, got {type(v).__name__}")
    return type(v)(*(degrees(a) for a in v))