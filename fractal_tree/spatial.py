"""
Spatial index over attractor positions.
Uses scipy's cKDTree so that range checks during stem growth are O(log n).
"""

from typing import List, Optional

import numpy as np
from scipy.spatial import cKDTree

from .attractor import AttractionPoint
from .profiling import profile
from .vector import Vector


class AttractorSpatialIndex:
    """KD-Tree over the attractors that are still unreached."""

    def __init__(self):
        self._attractors: List[AttractionPoint] = []
        self._tree: Optional[cKDTree] = None

    @profile
    def rebuild(self, attractors: List[AttractionPoint]):
        self._attractors = [a for a in attractors if not a.reached]

        if not self._attractors:
            self._tree = None
            return

        positions = np.array([a.pos.to_tuple() for a in self._attractors])
        self._tree = cKDTree(positions)

    def nearest_dist_sq(self, p: Vector) -> float:
        """Squared distance from p to the closest indexed attractor."""
        if self._tree is None:
            return float('inf')
        dist, _ = self._tree.query(p.to_tuple())
        return float(dist) ** 2

    def any_within(self, p: Vector, r_sq: float) -> bool:
        """True if some attractor lies strictly within squared distance r_sq of p."""
        return self.nearest_dist_sq(p) < r_sq

    @property
    def attractors(self) -> List[AttractionPoint]:
        return self._attractors

    def __len__(self) -> int:
        return len(self._attractors)
