"""Square 3x3 and 4x4 matrices and the linear-algebra helpers built on them."""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass, field
from numbers import Real
from typing import Callable, ClassVar, Iterable, Iterator, Sequence, TypeVar, Union

from .vector import Scalar, Vec3, Vec4, dot, length, radians

M = TypeVar("M", bound="_Matrix")


def _is_scalar(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


class _Matrix:
    """Row-wise arithmetic shared by both matrix sizes."""

    __slots__ = ()
    _row_type: ClassVar[type]
    _size: ClassVar[int]

    def __iter__(self) -> Iterator:  # pragma: no cover - overridden
        raise NotImplementedError

    @classmethod
    def from_rows(cls: type[M], rows: Iterable[Iterable[Scalar]]) -> M:
        """Build a matrix from an iterable of rows."""
        built = [cls._row_type(*row) for row in rows]
        if len(built) != cls._size:
            raise ValueError(f"{cls.__name__} needs {cls._size} rows, got {len(built)}")
        return cls(*built)

    @classmethod
    def filled(cls: type[M], value: Scalar) -> M:
        """A matrix with every entry set to ``value``."""
        return cls.from_rows([value] * cls._size for _ in range(cls._size))

    @classmethod
    def identity(cls: type[M]) -> M:
        """The identity matrix."""
        return cls.from_rows(
            (1.0 if i == j else 0.0 for j in range(cls._size)) for i in range(cls._size)
        )

    def _combine(self: M, other: object, op: Callable) -> M:
        cls = type(self)
        if isinstance(other, cls):
            return cls(*(op(a, b) for a, b in zip(self, other)))
        if _is_scalar(other):
            return cls(*(op(row, other) for row in self))
        return NotImplemented

    def _matmul(self: M, other: M) -> M:
        columns = list(transpose(other))
        return type(self).from_rows(
            (dot(row, column) for column in columns) for row in self
        )

    def __add__(self, other):
        return self._combine(other, operator.add)

    def __sub__(self, other):
        return self._combine(other, operator.sub)

    def __mul__(self, other):
        if isinstance(other, type(self)):
            return self._matmul(other)
        if isinstance(other, self._row_type):
            return self._row_type(*(dot(row, other) for row in self))
        if _is_scalar(other):
            return self._combine(other, operator.mul)
        return NotImplemented

    def __truediv__(self, other):
        if isinstance(other, type(self)):
            return self._matmul(inverse(other))
        if _is_scalar(other):
            return self._combine(other, operator.truediv)
        return NotImplemented

    def __radd__(self, other):
        return self._combine(other, operator.add)

    def __rmul__(self, other):
        if _is_scalar(other):
            return self._combine(other, operator.mul)
        return NotImplemented

    def __neg__(self):
        return type(self)(*(-row for row in self))

    def __pos__(self):
        return type(self)(*(+row for row in self))

    def __str__(self) -> str:
        return "".join(f"{row}\n" for row in self)


@dataclass(slots=True)
class Mat3(_Matrix):
    """3x3 matrix stored as three row vectors."""

    x: Vec3 = field(default_factory=Vec3)
    y: Vec3 = field(default_factory=Vec3)
    z: Vec3 = field(default_factory=Vec3)

    _row_type: ClassVar[type] = Vec3
    _size: ClassVar[int] = 3

    def __iter__(self) -> Iterator[Vec3]:
        yield self.x
        yield self.y
        yield self.z

    @classmethod
    def from_mat4(cls, m: Mat4) -> Mat3:
        """The upper-left 3x3 block of a 4x4 matrix."""
        return cls(m.x.xyz(), m.y.xyz(), m.z.xyz())

    def __add__(self, other):
        return _Matrix.__add__(self, other)

    def __sub__(self, other):
        return _Matrix.__sub__(self, other)

    def __mul__(self, other):
        return _Matrix.__mul__(self, other)

    def __truediv__(self, other):
        return _Matrix.__truediv__(self, other)

    def __neg__(self):
        return _Matrix.__neg__(self)


@dataclass(slots=True)
class Mat4(_Matrix):
    """4x4 matrix stored as four row vectors."""

    x: Vec4 = field(default_factory=Vec4)
    y: Vec4 = field(default_factory=Vec4)
    z: Vec4 = field(default_factory=Vec4)
    w: Vec4 = field(default_factory=Vec4)

    _row_type: ClassVar[type] = Vec4
    _size: ClassVar[int] = 4

    def __iter__(self) -> Iterator[Vec4]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    @classmethod
    def from_mat3(cls, m: Mat3, w: Scalar = 0.0) -> Mat4:
        """Embed a 3x3 matrix; the fourth column is zero and the last row is filled with ``w``."""
        return cls(Vec4(*m.x, 0.0), Vec4(*m.y, 0.0), Vec4(*m.z, 0.0), Vec4(w, w, w, w))

    def __add__(self, other):
        return _Matrix.__add__(self, other)

    def __sub__(self, other):
        return _Matrix.__sub__(self, other)

    def __mul__(self, other):
        return _Matrix.__mul__(self, other)

    def __truediv__(self, other):
        return _Matrix.__truediv__(self, other)

    def __neg__(self):
        return _Matrix.__neg__(self)


Matrix = Union[Mat3, Mat4]


def _require_matrix(m: object) -> None:
    if not isinstance(m, _Matrix):
        raise TypeError(f"expected a matrix, got {type(m).__name__}")


def _minor(rows: Sequence[Sequence[Scalar]], row: int, col: int) -> list[list[Scalar]]:
    return [
        [value for j, value in enumerate(r) if j != col]
        for i, r in enumerate(rows)
        if i != row
    ]


def _det(rows: Sequence[Sequence[Scalar]]) -> Scalar:
    size = len(rows)
    if size == 2:
        (a, b), (c, d) = rows
        return a * d - b * c
    if size == 3:
        (xx, xy, xz), (yx, yy, yz), (zx, zy, zz) = rows
        return (
            xx * (yy * zz - yz * zy)
            - xy * (yx * zz - yz * zx)
            + xz * (yx * zy - yy * zx)
        )
    total = 0
    for col, value in enumerate(rows[0]):
        term = value * _det(_minor(rows, 0, col))
        total = total + term if col % 2 == 0 else total - term
    return total


def determinant(m: Matrix) -> Scalar:
    """Determinant of a 3x3 or 4x4 matrix."""
    _require_matrix(m)
    return _det([tuple(row) for row in m])


def adjugate(m: Matrix) -> Matrix:
    """Adjugate (transposed cofactor matrix) of a 3x3 or 4x4 matrix."""
    _require_matrix(m)
    rows = [tuple(row) for row in m]
    size = len(rows)
    return type(m).from_rows(
        (
            (_det(_minor(rows, j, i)) if (i + j) % 2 == 0 else -_det(_minor(rows, j, i)))
            for j in range(size)
        )
        for i in range(size)
    )


def inverse(m: Matrix) -> Matrix:
    """Inverse of a matrix; a singular matrix yields the zero matrix."""
    det = determinant(m)
    if det == 0:
        return type(m)()
    return adjugate(m) * (1 / det)


def transpose(m: Matrix) -> Matrix:
    """Transpose of a matrix."""
    _require_matrix(m)
    return type(m).from_rows(zip(*m))


def affine_transformation(position: Vec3, scale: Vec3, rotation: Vec3) -> Mat4:
    """Translation times scale; the rotation argument is accepted but not applied."""
    scale_mat = Mat4(
        Vec4(scale.x, 0, 0, 0),
        Vec4(0, scale.y, 0, 0),
        Vec4(0, 0, scale.z, 0),
        Vec4(0, 0, 0, 1),
    )
    rotation_mat = Mat4.identity()
    translation_mat = Mat4(
        Vec4(1, 0, 0, position.x),
        Vec4(0, 1, 0, position.y),
        Vec4(0, 0, 1, position.z),
        Vec4(0, 0, 0, 1),
    )
    return translation_mat * rotation_mat * scale_mat


def perspective_fov(fov: float, aspect_ratio: float, near_plane: float, far_plane: float) -> Mat4:
    """Perspective projection for a vertical field of view given in degrees."""
    tan_half_fov = math.tan(radians(fov) / 2)
    depth = far_plane - near_plane
    return Mat4(
        Vec4(1 / (aspect_ratio * tan_half_fov), 0, 0, 0),
        Vec4(0, 1 / tan_half_fov, 0, 0),
        Vec4(0, 0, (far_plane + near_plane) / depth, (2 * far_plane * near_plane) / depth),
        Vec4(0, 0, 1, 0),
    )


def look_at(position: Vec3, front: Vec3, right: Vec3, up: Vec3) -> Mat4:
    """View matrix for a camera at ``position`` with the given orthonormal basis."""
    return Mat4(
        Vec4(right.x, right.y, right.z, -dot(right, position)),
        Vec4(up.x, up.y, up.z, -dot(up, position)),
        Vec4(front.x, front.y, front.z, -dot(front, position)),
        Vec4(0, 0, 0, 1),
    )


def translation(mat: Mat4) -> Vec3:
    """Translation part of an affine transform."""
    return Vec3(mat.x.w, mat.y.w, mat.z.w)


def scale(mat: Mat4) -> Vec3:
    """Scale factors of an affine transform, as the lengths of its first three rows."""
    return Vec3(length(mat.x), length(mat.y), length(mat.z))


def rotation(mat: Mat4) -> Vec3:
    """Pitch, yaw and roll extracted from the rotation block of a transform."""
    rot = Mat3.from_mat4(mat)
    pitch = math.atan2(rot.z.y, rot.z.z)
    yaw = math.atan2(-rot.z.x, math.sqrt(rot.z.y * rot.z.y + rot.z.z * rot.z.z))
    roll = math.atan2(rot.y.x, rot.x.x)
    return Vec3(pitch, yaw, roll)