import numpy as np
import numpy.testing as npt

from scratchmsm.example_datasets import (DoubleWell, load_doublewell,
                                         discretize, TwoState,
                                         load_two_state, two_state_timescale)
from scratchmsm.msm import MarkovStateModel


def test_doublewell():
    data = load_doublewell(n_steps=2000, random_state=0)
    traj = data['trajectory']
    assert traj.ndim == 1
    assert len(traj) == 2001
    assert traj.min() >= 1
    assert traj.max() <= 100
    assert 'cos(2x)' in data.DESCR


def test_doublewell_stride():
    native = DoubleWell(n_steps=2000, random_state=1).get().trajectory
    decimated = DoubleWell(n_steps=2000, stride=10,
                           random_state=1).get().trajectory
    npt.assert_array_equal(decimated, native[::10])


def test_doublewell_msm():
    traj = load_doublewell(n_steps=20000, n_bins=20,
                           random_state=2).trajectory
    model = MarkovStateModel(lag_time=5, degenerate_rows='trim').fit(traj)
    assert model.n_states_ <= 20
    npt.assert_almost_equal(model.populations_.sum(), 1)


def test_discretize():
    x = np.array([-np.pi, -0.1, 0.1, np.pi, 10])
    npt.assert_array_equal(discretize(x, -np.pi, np.pi, 2), [1, 1, 2, 2, 2])


def test_two_state():
    data = load_two_state(p_switch=0.1, n_steps=1000, random_state=0)
    traj = data.trajectory
    assert len(traj) == 1000
    assert traj[0] == 1
    assert set(np.unique(traj)) <= {1, 2}
    assert 'Markov chain' in TwoState.description()
    assert data.DESCR == TwoState.description()


def test_two_state_timescale():
    npt.assert_almost_equal(two_state_timescale(0.05), -1 / np.log(0.9))
