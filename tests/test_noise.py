import numpy as np
import pytest
from planet_shaders.noise import fbm, hash1, noise3


def test_hash_deterministic_and_in_range():
    seeds = np.arange(0, 200000, 7, dtype=np.uint64)
    first = hash1(seeds)
    second = hash1(seeds)
    np.testing.assert_array_equal(first, second)
    assert np.all(first >= 0.0)
    assert np.all(first < 1.0)


def test_hash_wraps_like_uint32():
    assert hash1(2**32 + 5) == hash1(5)
    assert hash1(-1) == hash1(2**32 - 1)


def test_noise3_is_cell_constant():
    # Points truncating to the same integer cell share a value
    a = np.array([0.01, 0.001, 0.002])
    b = np.array([0.02, 0.002, 0.001])
    assert noise3(a) == noise3(b)


def test_noise3_batch_matches_single():
    points = np.array([[0.3, -1.2, 4.0], [10.0, 2.0, -3.5], [0.0, 0.0, 0.0]])
    batch = noise3(points)
    for point, value in zip(points, batch):
        assert noise3(point) == value


def test_noise3_tolerates_non_finite():
    values = noise3(np.array([[np.nan, 0.0, 0.0], [np.inf, -np.inf, 1.0]]))
    assert np.all(np.isfinite(values))


def test_fbm_zero_octaves():
    points = np.array([[0.3, -1.2, 4.0], [10.0, 2.0, -3.5]])
    np.testing.assert_array_equal(fbm(points, 0), [0.0, 0.0])
    assert fbm(np.array([1.0, 2.0, 3.0]), 0) == 0.0


def test_fbm_octave_amplitudes():
    p = np.array([0.37, 1.91, -2.4])
    assert fbm(p, 1) == pytest.approx(noise3(p))
    for k in range(1, 6):
        term = fbm(p, k + 1) - fbm(p, k)
        assert term == pytest.approx(noise3(p * 2.0**k) * 0.5**k)


def test_fbm_bounded_by_geometric_sum():
    rng = np.random.default_rng(3)
    points = rng.uniform(-5, 5, size=(500, 3))
    values = fbm(points, 4)
    assert np.all(values >= 0.0)
    assert np.all(values < 2.0 - 2.0**(1 - 4))
