"""
Attractor placement inside a convex envelope.

Provides two placement methods:
- hit_and_run: walk between the envelope planes, taking random steps along
  their normals; fast even for thin or irregular volumes
- rejection: draw uniform points from a cube and keep those inside the envelope
"""

from typing import List, Literal, Sequence, Tuple

import numpy as np

from .attractor import AttractionPoint
from .envelope import is_inside_envelope
from .plane import Plane
from .profiling import profile
from .vector import Vector


AttractorPlacement = Literal['hit_and_run', 'rejection']

MAX_WEIGHT = 0.2


@profile
def sample_hit_and_run(
    envelope: Sequence[Plane],
    num_points: int,
    rng: np.random.Generator,
    max_iterations: int = 1_000_000
) -> Tuple[List[Vector], int]:
    """
    Sample up to num_points positions inside the envelope.

    The walk starts on the first plane and cycles through the planes in order,
    stepping along each normal by a random fraction of the current distance
    to that plane. A step is kept only if it lands inside every plane.
    Stops at num_points accepted points or max_iterations steps, whichever
    comes first. Returns (points, iterations used).
    """
    i = 0
    plane0 = envelope[i]
    p = plane0.n.clone().scale(-plane0.d)

    points: List[Vector] = []
    iteration = 0
    while len(points) < num_points and iteration < max_iterations:
        i = (i + 1) % len(envelope)
        plane1 = envelope[i]
        d = abs(plane1.distance(p)) * rng.random()
        p1 = p.clone().add(plane1.n.clone().scale(d))
        if is_inside_envelope(envelope, p1):
            points.append(p1)
            p = p1
        iteration += 1

    return points, iteration


@profile
def sample_rejection(
    envelope: Sequence[Plane],
    num_points: int,
    rng: np.random.Generator,
    scale: float = 10.0,
    max_iterations: int = 1_000_000
) -> Tuple[List[Vector], int]:
    """Uniform samples from [-scale, scale)^3 that fall inside the envelope."""
    points: List[Vector] = []
    iteration = 0
    while len(points) < num_points and iteration < max_iterations:
        p = Vector.random(rng).scale(scale)
        if is_inside_envelope(envelope, p):
            points.append(p)
        iteration += 1

    return points, iteration


def sample_attractors(
    envelope: Sequence[Plane],
    num_points: int,
    rng: np.random.Generator,
    method: AttractorPlacement = 'hit_and_run',
    max_iterations: int = 1_000_000,
    rejection_scale: float = 10.0
) -> Tuple[List[AttractionPoint], int]:
    """
    Sample attractors with the requested method, sorted by ascending z and
    weighted by their distance from the centroid.

    Returns (attractors, iterations used). Fewer than num_points attractors
    are returned when the iteration cap runs out first.
    """
    if method == 'hit_and_run':
        points, iterations = sample_hit_and_run(envelope, num_points, rng, max_iterations)
    elif method == 'rejection':
        points, iterations = sample_rejection(
            envelope, num_points, rng, scale=rejection_scale, max_iterations=max_iterations
        )
    else:
        raise ValueError(f"Unknown attractor placement method: {method!r}")

    attractors = [AttractionPoint(p) for p in points]
    attractors.sort(key=lambda a: a.pos.z)
    assign_weights(attractors)

    return attractors, iterations


@profile
def assign_weights(attractors: List[AttractionPoint]):
    """
    Scale each weight by the distance to the centroid, so that points on the
    periphery pull harder: weight = 0.2 * r / r_max.
    """
    if not attractors:
        return

    center = Vector()
    for attractor in attractors:
        center.add(attractor.pos)
    center.scale(1 / len(attractors))

    r = [attractor.pos.dist(center) for attractor in attractors]
    r_max = max(r)

    for attractor, rk in zip(attractors, r):
        # Coincident points all sit on the centroid
        attractor.weight = MAX_WEIGHT * rk / r_max if r_max > 0 else 0.0
