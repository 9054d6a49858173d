"""
Attraction point - a target the growing tree is pulled towards.
"""

from .vector import Vector


class AttractionPoint:
    __slots__ = ('pos', 'reached', 'weight')

    def __init__(self, pos: Vector, weight: float = 1.0):
        self.pos = pos
        self.reached = False
        self.weight = weight

    def reach(self):
        self.reached = True

    def __repr__(self) -> str:
        status = "reached" if self.reached else "active"
        return f"AttractionPoint({self.pos}, w={self.weight:.3f}, {status})"
