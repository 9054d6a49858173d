"""
Configuration for the fractal tree growth engine.
"""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np

from .envelope import crown_envelope
from .errors import InvalidEnvelopeError
from .plane import Plane
from .sampling import AttractorPlacement
from .vector import Vector


@dataclass
class TreeConfig:
    num_attractors: int = 1000
    attractor_placement: AttractorPlacement = 'hit_and_run'
    rejection_scale: float = 10.0         # Half-width of the cube rejection sampling draws from
    max_sampling_iterations: int = 1_000_000

    # Both thresholds are squared distances
    rmin: float = 0.2 ** 2                # Kill radius
    rmax: float = 0.4 ** 2                # Stem stops once an attractor is this close

    max_stem_steps: Optional[int] = None  # None = grow the stem until an attractor is in range
    max_iterations: int = 1000

    root_pos: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    root_dir: Tuple[float, float, float] = (0.0, 0.0, 1.0)

    # [{"normal": [x, y, z], "offset": d}, ...]; empty = default crown
    envelope: List[Dict] = field(default_factory=list)

    random_seed: Optional[int] = None
    verbose: bool = True
    profile: bool = False

    def __post_init__(self):
        self.root_pos = tuple(float(v) for v in self.root_pos)
        self.root_dir = tuple(float(v) for v in self.root_dir)

    def make_rng(self) -> np.random.Generator:
        return np.random.default_rng(self.random_seed)

    def planes(self) -> List[Plane]:
        """Envelope as Plane objects. Normals are normalized on the way in."""
        if not self.envelope:
            return crown_envelope()
        planes = []
        for entry in self.envelope:
            n = Vector.from_tuple(entry['normal'])
            if n.mag() == 0:
                raise InvalidEnvelopeError(f"Envelope entry {entry!r} has a zero-length normal")
            planes.append(Plane(n.normalize(), entry['offset']))
        return planes

    def set_planes(self, planes: List[Plane]):
        self.envelope = [
            {'normal': list(plane.n.to_tuple()), 'offset': plane.d}
            for plane in planes
        ]


def load_config(path: str = 'tree_config.json') -> TreeConfig:
    """Load config from JSON file, with defaults for missing fields."""
    config_path = Path(path)
    if not config_path.exists():
        return TreeConfig()

    with open(config_path, 'r') as f:
        data = json.load(f)

    return TreeConfig(**data)


def save_config(config: TreeConfig, path: str = 'tree_config.json'):
    """Save config to JSON file."""
    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = asdict(config)
    data['root_pos'] = list(config.root_pos)
    data['root_dir'] = list(config.root_dir)

    with open(config_path, 'w') as f:
        json.dump(data, f, indent=2)

    if config.verbose:
        print(f"Saved config to {config_path}")
