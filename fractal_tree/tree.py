"""
FractalTree - grows a branching structure with the space colonization algorithm.

Attraction points are scattered inside a convex envelope. A stem grows
straight up from the root until it comes within reach of the attractors; from
then on every call to grow() lets each unreached attractor pull on its closest
node, and every node that was pulled sprouts a child in the blended direction.
Attractors are removed as soon as any node comes within the kill radius.

The collaborator (renderer, exporter) reads `nodes` and `attractors` between
ticks and must not modify them.
"""

import numbers
from typing import Callable, List, Optional, Sequence

import numpy as np

from .attractor import AttractionPoint
from .config import TreeConfig
from .constants import UNIT_TOLERANCE
from .envelope import validate_envelope
from .node import TreeNode
from .plane import Plane
from .profiling import profile, profiler
from .sampling import sample_attractors
from .spatial import AttractorSpatialIndex
from .vector import Vector


class FractalTree:
    def __init__(
        self,
        root: TreeNode,
        envelope: Sequence[Plane],
        config: Optional[TreeConfig] = None,
        rng: Optional[np.random.Generator] = None
    ):
        self.config = config if config is not None else TreeConfig(verbose=False)
        self.envelope: List[Plane] = list(envelope)
        self.rng = rng if rng is not None else self.config.make_rng()
        self.attractors: List[AttractionPoint] = []
        self.nodes: List[TreeNode] = []
        self.iteration = 0
        self.sampling_iterations = 0
        self.stem_length = 0

        if self.config.profile:
            profiler.enabled = True

        self._validate(root)
        self._append(root)
        self._initialize()

    @classmethod
    def from_config(cls, config: TreeConfig, rng: Optional[np.random.Generator] = None) -> 'FractalTree':
        root = TreeNode(Vector.from_tuple(config.root_pos), Vector.from_tuple(config.root_dir))
        return cls(root, config.planes(), config, rng=rng)

    def _validate(self, root: TreeNode):
        config = self.config
        count = config.num_attractors
        if not isinstance(count, numbers.Integral) or isinstance(count, bool) or count <= 0:
            raise ValueError(f"num_attractors must be a positive integer, got {config.num_attractors!r}")
        if not 0 < config.rmin < config.rmax:
            raise ValueError(f"Expected 0 < rmin < rmax, got rmin={config.rmin}, rmax={config.rmax}")
        if not root.is_root:
            raise ValueError("Root node must not have a parent")
        mag = root.dir.mag()
        if not np.isfinite(mag) or not abs(mag - 1.0) <= UNIT_TOLERANCE:
            raise ValueError(f"Root direction must be a unit vector, got {root.dir!r}")
        validate_envelope(self.envelope)

    def _log(self, message: str):
        if self.config.verbose:
            print(message)

    def _append(self, node: TreeNode) -> TreeNode:
        node.index = len(self.nodes)
        self.nodes.append(node)
        return node

    def _initialize(self):
        config = self.config
        self.attractors, self.sampling_iterations = sample_attractors(
            self.envelope,
            config.num_attractors,
            self.rng,
            method=config.attractor_placement,
            max_iterations=config.max_sampling_iterations,
            rejection_scale=config.rejection_scale
        )

        if len(self.attractors) < config.num_attractors:
            print(f"Warning: Only {len(self.attractors)} of {config.num_attractors} attractors "
                  f"placed within {self.sampling_iterations} iterations")

        self.stem_length = self._grow_stem()

        self._log("Initialized FractalTree:")
        self._log(f"  Attractors: {len(self.attractors)} ({self.sampling_iterations} sampling iterations)")
        self._log(f"  Stem length: {self.stem_length} steps, tip at {self.nodes[-1].pos}")

    @profile
    def _grow_stem(self) -> int:
        """
        Extend the root straight along its direction until an attractor is
        within rmax of the tip. Returns the number of nodes added.

        The stem only stops when the ray passes near the attractors; with an
        envelope off to the side it keeps growing unless max_stem_steps is set.
        """
        index = AttractorSpatialIndex()
        index.rebuild(self.attractors)
        if not len(index):
            return 0

        rmax = self.config.rmax
        max_steps = self.config.max_stem_steps
        tip = self.nodes[-1]
        steps = 0
        while not index.any_within(tip.pos, rmax):
            if max_steps is not None and steps >= max_steps:
                print(f"Warning: Stem stopped after {steps} steps without reaching an attractor")
                break
            tip = self._append(tip.next())
            steps += 1

        return steps

    def is_completed(self) -> bool:
        return len(self.attractors) == 0

    @profile
    def _accumulate_forces(self):
        """
        Kill attractors that have a node within rmin, pull the closest node
        towards every other attractor.

        Any node inside the kill radius reaches the attractor, not only the
        nearest one.
        """
        rmin = self.config.rmin
        positions = np.array([node.pos.to_tuple() for node in self.nodes])

        for attractor in self.attractors:
            if attractor.reached:
                continue

            r = np.sum((positions - attractor.pos.to_array()) ** 2, axis=1)
            if np.any(r < rmin):
                attractor.reach()
                continue

            # argmin keeps the first node on ties
            closest = self.nodes[int(np.argmin(r))]
            f = attractor.pos.clone().sub(closest.pos).normalize().scale(attractor.weight)
            closest.apply_force(f)

    @profile
    def _remove_reached(self) -> int:
        count_before = len(self.attractors)
        self.attractors = [a for a in self.attractors if not a.reached]
        return count_before - len(self.attractors)

    @profile
    def _branch(self) -> int:
        """
        Every node that was pulled this tick sprouts a child one blended step
        away. Each node's own direction is restored afterwards.
        """
        new_nodes = 0
        for k in range(len(self.nodes) - 1, -1, -1):
            node = self.nodes[k]
            if node.count > 0:
                # Not renormalized: more contributors give a shorter step
                node.dir.add(node.force).scale(1 / (1 + node.count))
                self._append(node.next())
                new_nodes += 1
            node.reset()
        return new_nodes

    def grow(self) -> bool:
        """
        Perform one colonization pass.
        Returns True if a pass ran, False if the tree was already complete
        (calling grow() on a completed tree is a no-op).
        """
        if self.is_completed():
            return False

        self._accumulate_forces()
        self._remove_reached()
        self._branch()

        self.iteration += 1
        return True

    def grow_to_completion(
        self,
        callback: Optional[Callable[['FractalTree', int], None]] = None,
        max_iterations: Optional[int] = None
    ) -> int:
        """
        Call grow() until every attractor is reached or max_iterations ticks
        have run (config.max_iterations when not given).
        Optional callback is called after each tick with (tree, iteration).
        Returns the total number of iterations.
        """
        limit = max_iterations if max_iterations is not None else self.config.max_iterations
        self._log(f"Starting growth with {len(self.attractors)} attractors...")

        while self.iteration < limit:
            if not self.grow():
                break

            if callback:
                callback(self, self.iteration)

            if self.iteration % 50 == 0:
                self._log(f"  Iteration {self.iteration}: {len(self.nodes)} nodes, "
                          f"{len(self.attractors)} attractors remaining")

        if not self.is_completed():
            self._log(f"Growth stopped at the iteration limit ({limit})")
        self._log(f"Growth complete after {self.iteration} iterations")
        self._log(f"  Final nodes: {len(self.nodes)}")
        self._log(f"  Remaining attractors: {len(self.attractors)}")

        return self.iteration

    @property
    def root(self) -> TreeNode:
        return self.nodes[0]

    def parent_of(self, node: TreeNode) -> Optional[TreeNode]:
        if node.parent is None:
            return None
        return self.nodes[node.parent]

    @property
    def tips(self) -> List[TreeNode]:
        parents = {node.parent for node in self.nodes}
        return [node for node in self.nodes if node.index not in parents]

    def depth(self, node: TreeNode) -> int:
        depth = 0
        while node.parent is not None:
            depth += 1
            node = self.nodes[node.parent]
        return depth

    def get_segments(self) -> List[tuple]:
        """Return every parent -> child segment as ((x0,y0,z0), (x1,y1,z1)) tuples."""
        return [
            (self.nodes[node.parent].pos.to_tuple(), node.pos.to_tuple())
            for node in self.nodes[1:]
        ]
