"""
Space colonization growth of 3D fractal trees.

Based on: "Modeling Trees with a Space Colonization Algorithm"
by Runions, Lane, and Prusinkiewicz (2007).
"""

from .attractor import AttractionPoint
from .config import TreeConfig, load_config, save_config
from .envelope import box_envelope, crown_envelope, validate_envelope
from .errors import DegenerateVectorError, InvalidEnvelopeError
from .matrix import Matrix4
from .node import TreeNode
from .plane import Plane
from .tree import FractalTree
from .vector import Vector

__all__ = [
    'AttractionPoint',
    'DegenerateVectorError',
    'FractalTree',
    'InvalidEnvelopeError',
    'Matrix4',
    'Plane',
    'TreeConfig',
    'TreeNode',
    'Vector',
    'box_envelope',
    'crown_envelope',
    'load_config',
    'save_config',
    'validate_envelope'
]
