"""Brownian dynamics in one dimension, discretized onto a grid of states."""
# Author:
# Contributors:
# Copyright (c) 2014, Stanford University
# All rights reserved.

# -----------------------------------------------------------------------------
# Imports
# -----------------------------------------------------------------------------

import time

import numpy as np

from .base import Dataset

# -----------------------------------------------------------------------------
# Globals
# -----------------------------------------------------------------------------

# DO NOT CHANGE THESE CONSTANTS WITHOUT UPDATING THE DoubleWell DOCSTRING
DIFFUSION_CONST = 1e3
DT = 1e-3
DT_SQRT_2D = DT * np.sqrt(2 * DIFFUSION_CONST)

__all__ = ['DoubleWell', 'load_doublewell', 'discretize']


# -----------------------------------------------------------------------------
# User functions
# -----------------------------------------------------------------------------


class DoubleWell(Dataset):
    r"""Discretized Brownian dynamics on a 1D double well potential

    Parameters
    ----------
    n_steps : int, default: 100000
        Number of integration steps.
    n_bins : int, default: 100
        Number of equal-width bins on [-pi, pi]. The states are labelled
        1 ... n_bins.
    stride : int, default: 1
        Keep every ``stride``-th frame of the discretized trajectory.
    random_state : {int, None}, default: None
        Seed the psuedorandom number generator to generate trajectories. If
        seed is None, the global numpy PRNG is used.
    verbose : bool, default: False
        Print the integration speed.

    Notes
    -----
    This dataset consists of one trajectory simulated with Brownian dynamics
    on the reduced potential function

        V(x) = 1 + cos(2x)

    with reflecting boundary conditions at x=-pi and x=pi. The simulations
    are governed by the stochastic differential equation

        dx_t/dt = -\nabla V(x) + \sqrt{2D} * R(t),

    where R(t) is a standard normal white-noise process, and D=1e3. The
    timestep is 1e-3. The trajectory starts at x_0 = 0 and the positions
    are assigned to n_bins equal-width states labelled 1 ... n_bins.
    With stride=10 the trajectory is decimated by a factor of 10.
    """

    def __init__(self, n_steps=100000, n_bins=100, stride=1,
                 random_state=None, verbose=False):
        super(DoubleWell, self).__init__(random_state=random_state)
        self.n_steps = n_steps
        self.n_bins = n_bins
        self.stride = stride
        self.verbose = verbose

    def simulate_func(self, random):
        x = _propagate1d(0, self.n_steps, DOUBLEWELL_GRAD_POTENTIAL, random,
                         bc_min=-np.pi, bc_max=np.pi, verbose=self.verbose)
        return discretize(x, -np.pi, np.pi, self.n_bins)[::self.stride]

    def potential(self, x):
        return 1 + np.cos(2 * x)


def load_doublewell(n_steps=100000, n_bins=100, stride=1, random_state=None):
    return DoubleWell(n_steps, n_bins, stride, random_state).get()


load_doublewell.__doc__ = DoubleWell.__doc__


def discretize(x, xmin, xmax, n_bins):
    """Assign positions to ``n_bins`` equal-width bins on ``[xmin, xmax]``,
    labelled 1 ... n_bins. Positions outside the interval go to the first or
    last bin."""
    edges = np.linspace(xmin, xmax, n_bins + 1)
    return np.digitize(x, edges[1:-1]).astype(np.int64) + 1


# -----------------------------------------------------------------------------
# Internal functions
# -----------------------------------------------------------------------------

DOUBLEWELL_GRAD_POTENTIAL = lambda x: -2 * np.sin(2 * x)


def _reflect_boundary_conditions(x, min, max):
    if x > max:
        return 2 * max - x
    if x < min:
        return 2 * min - x
    return x


def _propagate1d(x0, n_steps, grad_potential, random, bc_min=None, bc_max=None,
                 verbose=True):
    start = time.time()
    n_steps = int(n_steps)

    if bc_min is None and bc_max is None:
        bc = lambda x: x
    else:
        bc = lambda x: _reflect_boundary_conditions(x, bc_min, bc_max)

    rand = random.randn(n_steps)
    x = np.zeros(n_steps + 1)
    x[0] = x0
    for i in range(n_steps):
        x_i_plus_1 = x[i] - DT * grad_potential(x[i]) + DT_SQRT_2D * rand[i]
        x[i + 1] = bc(x_i_plus_1)

    if verbose:
        print('%d steps/s' % (n_steps / (time.time() - start)))
    return x
