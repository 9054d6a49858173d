"""
Oriented half-space used to bound the growth volume.

A plane with unit normal n and offset d keeps the points p with
n . p + d <= 0 on its inside.
"""

import numpy as np

from .constants import UNIT_TOLERANCE
from .errors import InvalidEnvelopeError
from .utils import round_eps
from .vector import Vector


class Plane:
    __slots__ = ('n', 'd')

    def __init__(self, n: Vector, d: float):
        self.n = n
        self.d = float(d)

    @classmethod
    def create(cls, p0: Vector, p1: Vector, p2: Vector) -> 'Plane':
        """Plane through three vertices, normal following the right-hand rule."""
        n = p1.clone().sub(p0).cross(p2.clone().sub(p0)).normalize().apply_eps()
        d = -n.dot(p0)
        return cls(n, d)

    def distance(self, p: Vector) -> float:
        """Signed distance, snapped to zero near the boundary."""
        return round_eps(self.n.dot(p) + self.d)

    def is_point_inside(self, p: Vector) -> bool:
        return self.distance(p) <= 0

    def validate(self):
        mag = self.n.mag()
        if mag == 0:
            raise InvalidEnvelopeError(f"{self!r} has a zero-length normal")
        if not np.isfinite(mag):
            raise InvalidEnvelopeError(f"{self!r} has a non-finite normal")
        if not abs(mag - 1.0) <= UNIT_TOLERANCE:
            raise InvalidEnvelopeError(f"{self!r} normal is not unit length (|n| = {mag:.6f})")

    def __repr__(self) -> str:
        return f"Plane(n={self.n}, d={self.d:.3f})"
