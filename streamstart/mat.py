"""Small 3D vector and 4x4 row-major transform helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Sequence

Matrix = List[List[float]]


@dataclass(frozen=True)
class Vec3:
    """A three component vector."""

    x: float
    y: float
    z: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def length(self) -> float:
        return math.sqrt(sum(v * v for v in self))

    def normalized(self) -> Vec3:
        """Unit vector in the same direction; a zero vector raises ZeroDivisionError."""
        length = self.length()
        return Vec3(self.x / length, self.y / length, self.z / length)

    def __sub__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)


class Axis(Enum):
    X = "x"
    Y = "y"
    Z = "z"


def _zero_matrix() -> Matrix:
    return [[0.0] * 4 for _ in range(4)]


def _det3(m: Sequence[Sequence[float]]) -> float:
    return (
        m[0][0] * (m[1][1] * m[2][2] - m[1][2] * m[2][1])
        - m[0][1] * (m[1][0] * m[2][2] - m[1][2] * m[2][0])
        + m[0][2] * (m[1][0] * m[2][1] - m[1][1] * m[2][0])
    )


def _minor(m: Matrix, row: int, col: int) -> Matrix:
    return [
        [value for c, value in enumerate(r) if c != col]
        for rr, r in enumerate(m)
        if rr != row
    ]


@dataclass
class Transform:
    """A 4x4 matrix stored as ``arr[row][col]``."""

    arr: Matrix = field(default_factory=_zero_matrix)

    @classmethod
    def zeros(cls) -> Transform:
        return cls(_zero_matrix())

    @classmethod
    def scale(cls, x: float, y: float, z: float) -> Transform:
        transform = cls.zeros()
        transform.arr[0][0] = x
        transform.arr[1][1] = y
        transform.arr[2][2] = z
        transform.arr[3][3] = 1.0
        return transform

    @classmethod
    def identity(cls) -> Transform:
        return cls([[1.0 if r == c else 0.0 for c in range(4)] for r in range(4)])

    @classmethod
    def from_translation(cls, x: float, y: float, z: float) -> Transform:
        transform = cls.identity()
        transform.arr[0][3] = x
        transform.arr[1][3] = y
        transform.arr[2][3] = z
        return transform

    @classmethod
    def from_axis_angle(cls, angle: float, axis: Axis) -> Transform:
        """Rotation by ``angle`` radians about one of the coordinate axes."""
        c = math.cos(angle)
        s = math.sin(angle)
        transform = cls.identity()
        a = transform.arr
        if axis is Axis.X:
            a[1][1], a[1][2], a[2][1], a[2][2] = c, -s, s, c
        elif axis is Axis.Y:
            a[0][0], a[0][2], a[2][0], a[2][2] = c, -s, s, c
        elif axis is Axis.Z:
            a[0][0], a[0][1], a[1][0], a[1][1] = c, -s, s, c
        else:
            raise ValueError(f"unknown axis: {axis!r}")
        return transform

    def inverted(self) -> Transform:
        """The inverse matrix; raises ValueError if the matrix is singular."""
        m = self.arr
        cofactors = [
            [(-1) ** (r + c) * _det3(_minor(m, r, c)) for c in range(4)]
            for r in range(4)
        ]
        det = sum(m[0][c] * cofactors[0][c] for c in range(4))
        if det == 0:
            raise ValueError("matrix is singular and cannot be inverted")
        return Transform(
            [[cofactors[c][r] / det for c in range(4)] for r in range(4)]
        )

    @classmethod
    def perspective(cls, fov: float, near: float, far: float) -> Transform:
        """Projection mapping depth [near, far] to [-1, 1] with w equal to z."""
        xy = 1.0 / math.tan(fov / 2.0)
        z_dist = far - near
        return cls(
            [
                [xy, 0.0, 0.0, 0.0],
                [0.0, xy, 0.0, 0.0],
                [0.0, 0.0, (near + far) / z_dist, -2.0 * near * far / z_dist],
                [0.0, 0.0, 1.0, 0.0],
            ]
        )

    @classmethod
    def look_at(cls, eye: Vec3, center: Vec3, up: Vec3) -> Transform:
        """Placement of a camera at ``eye`` whose z axis points at ``center``."""
        origin = Vec3(0.0, 0.0, 0.0)
        forward = (center - eye).normalized()
        sideways = origin - cross(forward, up.normalized()).normalized()
        new_up = origin - cross(sideways, forward)

        transform = cls.identity()
        for col, axis in enumerate((sideways, new_up, forward, eye)):
            for row, value in enumerate(axis):
                transform.arr[row][col] = value
        return transform

    def __mul__(self, other: Transform) -> Transform:
        if not isinstance(other, Transform):
            return NotImplemented
        columns = list(zip(*other.arr))
        return Transform(
            [
                [sum(a * b for a, b in zip(row, col)) for col in columns]
                for row in self.arr
            ]
        )


def cross(a: Vec3, b: Vec3) -> Vec3:
    return Vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )