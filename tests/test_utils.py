import numpy as np
import pytest

from fractal_tree.utils import rand_int, rand_norm, round_eps, to_radian


def test_round_eps():
    assert round_eps(1e-13) == 0.0
    assert round_eps(-1e-12) == 0.0
    assert round_eps(2e-12) == 2e-12


def test_to_radian():
    assert to_radian(180) == pytest.approx(np.pi)


def test_rand_int_in_range(rng):
    values = {rand_int(rng, 2, 5) for _ in range(200)}
    assert values <= {2, 3, 4, 5}
    assert len(values) > 1


def test_rand_norm_spread(rng):
    values = np.array([rand_norm(rng, mean=3.0, sigma=0.5) for _ in range(2000)])
    assert abs(values.mean() - 3.0) < 0.1
    assert np.all(np.isfinite(values))

