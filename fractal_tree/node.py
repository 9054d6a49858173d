"""
TreeNode - one segment endpoint of the growing tree.

Nodes live in an append-only list owned by FractalTree; `parent` is the
index of the parent node in that list (None for the root).
"""

from typing import Optional

from .vector import Vector


class TreeNode:
    __slots__ = ('pos', 'dir', 'parent', 'force', 'count', 'original_dir', 'index')

    def __init__(self, pos: Vector, direction: Vector, parent: Optional[int] = None):
        self.pos = pos
        self.dir = direction
        self.parent = parent
        self.force = Vector()
        self.count = 0  # Attractors that pulled on this node in the current tick
        self.original_dir = direction.clone()
        self.index: Optional[int] = None

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def next(self) -> 'TreeNode':
        """Child one step along the current direction."""
        return TreeNode(self.pos.clone().add(self.dir), self.dir.clone(), parent=self.index)

    def apply_force(self, f: Vector):
        self.count += 1
        self.force.add(f)

    def reset(self):
        self.dir.set(self.original_dir.x, self.original_dir.y, self.original_dir.z)
        self.force.null()
        self.count = 0

    def __repr__(self) -> str:
        return f"TreeNode(#{self.index}, pos={self.pos}, parent={self.parent})"
