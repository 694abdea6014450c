import warnings

import numpy as np
import numpy.testing as npt
import pytest

from scratchmsm.msm import (analyze, estimate, real_part,
                            stationary_distribution, free_energy,
                            implied_timescales_from_eigenvalues)
from scratchmsm.utils import ComplexEigenWarning

random = np.random.RandomState(42)


def _random_transmat(n):
    T = random.rand(n, n)
    return T / T.sum(axis=1)[:, np.newaxis]


def test_eigen_decomposition():
    T = _random_transmat(6)
    u, lv, timescales = analyze(T, 1)

    assert u.shape == (6,)
    assert lv.shape == (6, 6)
    assert timescales.shape == (5,)
    assert np.iscomplexobj(u)
    assert np.iscomplexobj(lv)

    # eigenvectors of the transpose, i.e. left eigenvectors
    for i in range(6):
        npt.assert_array_almost_equal(T.T.dot(lv[:, i]), u[i] * lv[:, i])

    # sorted by descending modulus
    assert np.all(np.diff(np.abs(u)) <= 1e-12)
    npt.assert_almost_equal(np.abs(u[0]), 1.0)


def test_stationary_distribution():
    for n in [2, 5, 20]:
        T = _random_transmat(n)
        u, lv, _ = analyze(T, 1)
        pi = stationary_distribution(lv)
        assert not np.iscomplexobj(pi)
        npt.assert_almost_equal(pi.sum(), 1.0)
        assert np.all(pi >= -1e-12)
        npt.assert_array_almost_equal(pi.dot(T), pi)


def test_timescales():
    T = _random_transmat(5)
    for lag_time in [1, 3]:
        u, lv, timescales = analyze(T, lag_time)
        npt.assert_array_almost_equal(
            timescales, -lag_time / np.log(np.abs(u[1:])))


def test_timescales_monotonic():
    u = np.array([1.0, 0.99, 0.9, 0.5, 0.1, 0.01])
    timescales = implied_timescales_from_eigenvalues(u, 1)
    assert len(timescales) == 5
    assert np.all(np.isfinite(timescales))
    assert np.all(np.diff(timescales) < 0)
    npt.assert_almost_equal(timescales[0], -1 / np.log(0.99))


def test_undefined_timescales():
    u = np.array([1.0, 1.0, -1.0, 0.0, 1.2, 1j, -0.5])
    timescales = implied_timescales_from_eigenvalues(u, 2)
    assert np.all(np.isnan(timescales[:5]))
    npt.assert_almost_equal(timescales[5], -2 / np.log(0.5))


def test_disconnected():
    # two closed classes: a second unit eigenvalue, no timescale
    u, lv, timescales = analyze(np.eye(2), 1)
    npt.assert_array_almost_equal(u, [1, 1])
    assert np.isnan(timescales[0])


def test_periodic():
    u, lv, timescales = analyze(np.array([[0, 1], [1, 0]]), 1)
    npt.assert_array_almost_equal(u, [1, -1])
    assert np.isnan(timescales[0])
    npt.assert_array_almost_equal(stationary_distribution(lv), [0.5, 0.5])


def test_rare_switch():
    seq = [1] * 1000 + [2] * 1000
    labels, counts, transmat, degenerate = estimate(seq, 1)
    assert transmat[0, 0] > 0.99
    assert transmat[1, 1] > 0.99

    u, lv, timescales = analyze(transmat, 1)
    npt.assert_almost_equal(u[0], 1.0)
    npt.assert_almost_equal(u[1], 0.999)
    assert timescales[0] > 500
    npt.assert_almost_equal(timescales[0], -1 / np.log(0.999), decimal=5)


def test_complex_eigenvalues():
    # a biased three-cycle has a pair of complex eigenvalues
    T = np.array([[0.1, 0.9, 0.0],
                  [0.0, 0.1, 0.9],
                  [0.9, 0.0, 0.1]])
    u, lv, timescales = analyze(T, 1)
    npt.assert_almost_equal(u[0], 1.0)
    assert np.abs(u[1].imag) > 0.1
    npt.assert_almost_equal(timescales[0], timescales[1])
    npt.assert_array_almost_equal(stationary_distribution(lv), [1 / 3.] * 3)

    with pytest.warns(ComplexEigenWarning):
        real_part(u)


def test_real_part():
    x = np.array([1.0, 2.0])
    assert real_part(x) is x

    with warnings.catch_warnings():
        warnings.simplefilter('error', ComplexEigenWarning)
        y = real_part(np.array([1 + 1e-12j, 2 - 1e-12j]))
    assert not np.iscomplexobj(y)
    npt.assert_array_equal(y, [1, 2])


def test_free_energy():
    f = free_energy([0.5, 0.25, 0.25, 0.0])
    npt.assert_array_almost_equal(f[:3], [0, np.log(2), np.log(2)])
    assert np.isinf(f[3])


def test_bad_input():
    with pytest.raises(ValueError):
        analyze(np.ones((2, 3)), 1)
    with pytest.raises(ValueError):
        analyze(np.array([[np.nan, 1], [0, 1]]), 1)
    with pytest.raises(ValueError):
        analyze(np.eye(2), 0)


def test_zero_filled_row():
    T = np.array([[0.5, 0.5, 0.0],
                  [0.0, 0.5, 0.5],
                  [0.0, 0.0, 0.0]])
    u, lv, timescales = analyze(T, 1)
    assert len(u) == 3
    assert len(timescales) == 2


def test_idempotent():
    T = _random_transmat(8)
    first = analyze(T, 2)
    second = analyze(T, 2)
    for a, b in zip(first, second):
        npt.assert_array_equal(a, b)
