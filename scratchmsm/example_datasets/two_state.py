"""Trajectories of a first-order two-state Markov chain."""

import numpy as np

from .base import Dataset
from ..msm.core import _sample_chain

__all__ = ['TwoState', 'load_two_state', 'two_state_timescale']


class TwoState(Dataset):
    """Two-state Markov chain with symmetric switching

    Parameters
    ----------
    p_switch : float, default: 0.05
        Probability of switching state in one step.
    n_steps : int, default: 100000
        Length of the trajectory.
    random_state : {int, None}, default: None
        Seed the psuedorandom number generator.

    Notes
    -----
    A true first-order Markov chain on the labels 1 and 2 with transition
    matrix [[1 - p, p], [p, 1 - p]], started in state 1. Its second
    eigenvalue is 1 - 2p, so the implied timescale at any lag time tau is
    -1 / ln(1 - 2p) steps. An MSM built from it should show timescales that
    are flat in tau.
    """

    def __init__(self, p_switch=0.05, n_steps=100000, random_state=None):
        super(TwoState, self).__init__(random_state=random_state)
        self.p_switch = p_switch
        self.n_steps = n_steps

    def simulate_func(self, random):
        if not 0 <= self.p_switch <= 1:
            raise ValueError('p_switch must be in [0, 1]: %s' % self.p_switch)
        p = self.p_switch
        transmat = np.array([[1 - p, p], [p, 1 - p]])
        return _sample_chain(transmat, 0, self.n_steps, random) + 1


def load_two_state(p_switch=0.05, n_steps=100000, random_state=None):
    return TwoState(p_switch, n_steps, random_state).get()


load_two_state.__doc__ = TwoState.__doc__


def two_state_timescale(p_switch):
    """Exact implied timescale of the two-state chain, in steps."""
    return -1.0 / np.log(1 - 2 * p_switch)
