"""
Envelope helpers - the convex volume the attractors are sampled from.

An envelope is an ordered list of planes; the growth volume is the
intersection of their inside half-spaces.
"""

from typing import List, Sequence

import numpy as np
from scipy.optimize import linprog

from .constants import MIN_INTERIOR_DEPTH
from .errors import InvalidEnvelopeError
from .plane import Plane
from .vector import Vector


def is_inside_envelope(envelope: Sequence[Plane], p: Vector) -> bool:
    return all(plane.is_point_inside(p) for plane in envelope)


def interior_depth(envelope: Sequence[Plane]) -> float:
    """
    Largest margin t such that some point lies at least t inside every plane,
    capped at 1. Solved as a linear program over (x, y, z, t).
    Returns -inf when the constraints are infeasible.
    """
    normals = np.array([[p.n.x, p.n.y, p.n.z] for p in envelope])
    offsets = np.array([p.d for p in envelope])

    A_ub = np.hstack([normals, np.ones((len(envelope), 1))])
    b_ub = -offsets
    c = np.array([0.0, 0.0, 0.0, -1.0])
    bounds = [(None, None)] * 3 + [(None, 1.0)]

    result = linprog(
        c, A_ub=A_ub, b_ub=b_ub, bounds=bounds, method='highs',
        options={'primal_feasibility_tolerance': 1e-10, 'dual_feasibility_tolerance': 1e-10}
    )
    if result.status != 0:
        return float('-inf')
    return float(-result.fun)


def validate_envelope(envelope: Sequence[Plane]):
    """Raise InvalidEnvelopeError unless the planes bound a non-empty volume."""
    if not envelope:
        raise InvalidEnvelopeError("Envelope needs at least one plane")

    for plane in envelope:
        plane.validate()

    if interior_depth(envelope) <= MIN_INTERIOR_DEPTH:
        raise InvalidEnvelopeError(
            f"Envelope of {len(envelope)} planes has an empty interior"
        )


def box_envelope(half_size: float = 1.0, center: Vector = None) -> List[Plane]:
    """Six axis-aligned planes enclosing the cube center +/- half_size."""
    c = center if center is not None else Vector()
    planes = []
    for axis in range(3):
        for sign in (1.0, -1.0):
            n = Vector(*[sign if k == axis else 0.0 for k in range(3)])
            planes.append(Plane(n, -(n.dot(c) + half_size)))
    return planes


def crown_envelope() -> List[Plane]:
    """Truncated pyramid used as the default tree crown."""
    return [
        Plane(Vector(-1, 0, 0.4).normalize(), -2),
        Plane(Vector(1, 0, 0.4).normalize(), -2),
        Plane(Vector(0, -1, 0.4).normalize(), -2),
        Plane(Vector(0, 1, 0.4).normalize(), -2),
        Plane(Vector(0, 0, 1), -5),
        Plane(Vector(0, 0, -1), 1.5),
    ]
