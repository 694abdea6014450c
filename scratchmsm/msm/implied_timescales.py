# Author:
# Contributors:
# Copyright (c) 2014, Stanford University
# All rights reserved.

import numbers

import numpy as np
import pandas as pd
from sklearn import clone

from ..utils import param_sweep, check_sequence, check_lag_time
from .msm import MarkovStateModel

__all__ = ['implied_timescales', 'scan']


def implied_timescales(sequence, lag_times, n_timescales=10,
                       msm=None, n_jobs=1, verbose=0):
    """
    Calculate the implied timescales of MSMs built at a series of lag times.

    Parameters
    ----------
    sequence : array-like
        A single 1D sequence of integer state labels.
    lag_times : array-like
        Lag times to calculate implied timescales at. Every lag time must be
        smaller than the length of ``sequence``.
    n_timescales : int, optional
        Number of timescales to calculate.
    msm : scratchmsm.msm.MarkovStateModel, optional
        Instance of an MSM to specify parameters other
        than the lag time. If None, then the default
        parameters (as implemented by scratchmsm.msm.MarkovStateModel)
        will be used.
    n_jobs : int, optional
        Number of jobs to run in parallel

    Returns
    -------
    timescales : np.ndarray, shape = [len(lag_times), n_timescales]
        The slowest timescales (in units of the sequence time-step) for each
        model, in the order of ``lag_times``. Timescales which a model does
        not have, because it has fewer than ``n_timescales + 1`` states, or
        which are undefined are NaN.
    """
    if (isinstance(n_timescales, bool)
            or not isinstance(n_timescales, numbers.Integral)
            or n_timescales < 0):
        raise ValueError('n_timescales must be a non-negative integer: %r'
                         % (n_timescales,))
    sequence = check_sequence(sequence)
    lag_times = [check_lag_time(lag, len(sequence)) for lag in lag_times]

    timescales = np.empty((len(lag_times), n_timescales))
    timescales.fill(np.nan)
    if len(lag_times) == 0:
        return timescales

    if msm is None:
        msm = MarkovStateModel()
    msm = clone(msm).set_params(n_timescales=n_timescales)

    settings = [{'lag_time': lag} for lag in lag_times]
    models = param_sweep(msm, sequence, settings, n_jobs=n_jobs,
                         verbose=verbose)
    for i, m in enumerate(models):
        ts = m.timescales_[:n_timescales]
        timescales[i, :len(ts)] = ts
    return timescales


def scan(sequence, lag_times, n_modes=10, msm=None, n_jobs=1, verbose=0):
    """Tabulate implied timescales against lag time.

    A plot of the slowest timescales against lag time is used to choose the
    lag time of a model: the timescales of a Markovian model are
    independent of the lag time, so the shortest lag time after which they
    level off is a good choice [1].

    Parameters
    ----------
    sequence : array-like
        A single 1D sequence of integer state labels.
    lag_times : array-like
        Lag times to build models at.
    n_modes : int, optional
        Number of timescales (slowest first) to report per lag time.
    msm, n_jobs, verbose
        See ``implied_timescales``.

    Returns
    -------
    table : pd.DataFrame
        One row per entry of ``lag_times``, in input order, indexed by
        'Lag Time', with columns 'Timescale 1' ... 'Timescale n_modes'.

    References
    ----------
    .. [1] Beauchamp, Kyle A., et al. "MSMBuilder2: modeling conformational
       dynamics on the picosecond to millisecond scale." J. Chem. Theory.
       Comput. 7.10 (2011): 3412-3419.
    """
    lag_times = list(lag_times)
    lines = implied_timescales(sequence, lag_times, n_timescales=n_modes,
                               msm=msm, n_jobs=n_jobs, verbose=verbose)

    cols = ['Timescale %d' % (d + 1) for d in range(n_modes)]
    index = pd.Index([int(lag) for lag in lag_times], name='Lag Time')
    return pd.DataFrame(data=lines, columns=cols, index=index)
