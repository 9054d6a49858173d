"""
Numeric constants shared by the geometry kernel.
"""

import math

EPS = 1e-12

D2R = math.pi / 180

# Normals further than this from unit length are rejected
UNIT_TOLERANCE = 1e-6

# An envelope must admit a point at least this far inside every plane
MIN_INTERIOR_DEPTH = 1e-9
