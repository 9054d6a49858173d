"""
Homogeneous 3D vector used for positions, directions and forces.

Methods follow a fixed mutation contract that the growth engine relies on:
add, sub, scale, normalize, set, null, apply_eps, translate and the rotations
change the vector in place and return it for chaining; clone, cross,
apply_transform and blend build new vectors; the metric methods return floats.
The arithmetic operators never mutate.
"""

from typing import TYPE_CHECKING, Optional

import numpy as np

from .errors import DegenerateVectorError
from .utils import round_eps

if TYPE_CHECKING:
    from .matrix import Matrix4


class Vector:
    __slots__ = ('x', 'y', 'z', 'w')

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 1.0):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        self.w = float(w)

    @classmethod
    def random(cls, rng: np.random.Generator) -> 'Vector':
        """Uniform random vector in the cube [-1, 1)^3."""
        x, y, z = 2 * rng.random(3) - 1
        return cls(x, y, z)

    @classmethod
    def from_tuple(cls, t: tuple) -> 'Vector':
        return cls(t[0], t[1], t[2])

    def clone(self) -> 'Vector':
        return Vector(self.x, self.y, self.z)

    def set(self, x: float, y: float, z: float) -> 'Vector':
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        return self

    def add(self, v: 'Vector') -> 'Vector':
        self.x += v.x
        self.y += v.y
        self.z += v.z
        return self

    def sub(self, v: 'Vector') -> 'Vector':
        self.x -= v.x
        self.y -= v.y
        self.z -= v.z
        return self

    def scale(self, value: float) -> 'Vector':
        self.x *= value
        self.y *= value
        self.z *= value
        return self

    def null(self) -> 'Vector':
        self.x = 0.0
        self.y = 0.0
        self.z = 0.0
        return self

    def mag_sq(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def mag(self) -> float:
        return float(np.sqrt(self.mag_sq()))

    def dist_sq(self, v: 'Vector') -> float:
        dx = self.x - v.x
        dy = self.y - v.y
        dz = self.z - v.z
        return dx * dx + dy * dy + dz * dz

    def dist(self, v: 'Vector') -> float:
        return float(np.sqrt(self.dist_sq(v)))

    def normalize(self) -> 'Vector':
        m = self.mag()
        if m == 0:
            raise DegenerateVectorError(f"Cannot normalize zero-length vector {self!r}")
        self.x /= m
        self.y /= m
        self.z /= m
        return self

    def dot(self, v: 'Vector') -> float:
        return self.x * v.x + self.y * v.y + self.z * v.z

    def cross(self, v: 'Vector', out: Optional['Vector'] = None) -> 'Vector':
        x = self.y * v.z - self.z * v.y
        y = self.z * v.x - self.x * v.z
        z = self.x * v.y - self.y * v.x
        if out is None:
            return Vector(x, y, z)
        return out.set(x, y, z)

    def translate(self, tx: float, ty: float, tz: float) -> 'Vector':
        self.x += tx
        self.y += ty
        self.z += tz
        return self

    def rotate_x(self, angle: float) -> 'Vector':
        c, s = np.cos(angle), np.sin(angle)
        y = c * self.y - s * self.z
        self.z = float(s * self.y + c * self.z)
        self.y = float(y)
        return self

    def rotate_z(self, angle: float) -> 'Vector':
        c, s = np.cos(angle), np.sin(angle)
        x = c * self.x - s * self.y
        self.y = float(s * self.x + c * self.y)
        self.x = float(x)
        return self

    def apply_transform(self, m: 'Matrix4', out: Optional['Vector'] = None) -> 'Vector':
        """Multiply the homogeneous (x, y, z, w) column by a 4x4 matrix."""
        x, y, z, w = (m.data @ np.array([self.x, self.y, self.z, self.w])).tolist()
        if out is None:
            return Vector(x, y, z, w)
        out.x, out.y, out.z, out.w = x, y, z, w
        return out

    def apply_eps(self) -> 'Vector':
        self.x = round_eps(self.x)
        self.y = round_eps(self.y)
        self.z = round_eps(self.z)
        return self

    def blend(self, v: 'Vector', w: float) -> 'Vector':
        """Linear interpolation towards v; w=0 gives self, w=1 gives v."""
        return Vector(
            (1 - w) * self.x + w * v.x,
            (1 - w) * self.y + w * v.y,
            (1 - w) * self.z + w * v.z
        )

    def __add__(self, other: 'Vector') -> 'Vector':
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: 'Vector') -> 'Vector':
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> 'Vector':
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float) -> 'Vector':
        return self.__mul__(scalar)

    def __neg__(self) -> 'Vector':
        return Vector(-self.x, -self.y, -self.z)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return bool(np.isclose(self.x, other.x) and np.isclose(self.y, other.y)
                    and np.isclose(self.z, other.z))

    def __repr__(self) -> str:
        return f"Vector({self.x:.3f}, {self.y:.3f}, {self.z:.3f})"

    def to_tuple(self) -> tuple:
        return (self.x, self.y, self.z)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])
