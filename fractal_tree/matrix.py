"""
4x4 homogeneous transforms for viewing the grown tree.
"""

import numpy as np


class Matrix4:
    """Row-major 4x4 matrix, identity by default."""

    __slots__ = ('data',)

    def __init__(self, data: np.ndarray = None):
        self.data = np.eye(4) if data is None else np.asarray(data, dtype=float).reshape(4, 4)

    def null(self) -> 'Matrix4':
        self.data[:] = 0.0
        return self

    def mult(self, m: 'Matrix4') -> 'Matrix4':
        return Matrix4(self.data @ m.data)

    def __matmul__(self, m: 'Matrix4') -> 'Matrix4':
        return self.mult(m)

    @classmethod
    def for_rotation_x(cls, angle: float) -> 'Matrix4':
        c, s = np.cos(angle), np.sin(angle)
        m = cls()
        m.data[1, 1] = c
        m.data[1, 2] = -s
        m.data[2, 1] = s
        m.data[2, 2] = c
        return m

    @classmethod
    def for_rotation_y(cls, angle: float) -> 'Matrix4':
        c, s = np.cos(angle), np.sin(angle)
        m = cls()
        m.data[0, 0] = c
        m.data[0, 2] = s
        m.data[2, 0] = -s
        m.data[2, 2] = c
        return m

    @classmethod
    def for_rotation_z(cls, angle: float) -> 'Matrix4':
        c, s = np.cos(angle), np.sin(angle)
        m = cls()
        m.data[0, 0] = c
        m.data[0, 1] = -s
        m.data[1, 0] = s
        m.data[1, 1] = c
        return m

    @classmethod
    def for_translation(cls, tx: float = 0.0, ty: float = 0.0, tz: float = 0.0) -> 'Matrix4':
        m = cls()
        m.data[:3, 3] = (tx, ty, tz)
        return m

    def __repr__(self) -> str:
        return f"Matrix4({self.data.tolist()})"
