import numpy as np
import pytest

from fractal_tree import TreeConfig, box_envelope


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def unit_box():
    return box_envelope(1.0)


@pytest.fixture
def quiet_config():
    def make(**overrides):
        values = {'verbose': False, 'rmin': 0.2 ** 2, 'rmax': 0.4 ** 2, 'max_stem_steps': 10}
        values.update(overrides)
        return TreeConfig(**values)
    return make
