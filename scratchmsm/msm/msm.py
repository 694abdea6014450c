# Author:
# Contributors:
# Copyright (c) 2014, Stanford University
# All rights reserved.

#-----------------------------------------------------------------------------
# Imports
#-----------------------------------------------------------------------------

import numpy as np

from ..base import BaseEstimator
from .core import (_MappingTransformMixin, _SampleMSMMixin,
                   _right_eigenvectors, estimate, analyze, real_part,
                   stationary_distribution, free_energy)

__all__ = ['MarkovStateModel']

#-----------------------------------------------------------------------------
# Code
#-----------------------------------------------------------------------------


class MarkovStateModel(BaseEstimator, _MappingTransformMixin,
                       _SampleMSMMixin):
    """Markov State Model estimated by direct row normalization

    This model fits a first-order Markov model to a single integer-valued
    timeseries. The key estimated attribute, ``transmat_`` is a matrix
    containing the estimated probability of transitioning between pairs
    of states in the duration specified by ``lag_time``. It is the maximum
    likelihood estimate without any detailed balance constraint: the
    transition counts divided by their row sums.

    Parameters
    ----------
    lag_time : int
        The lag time of the model
    n_timescales : int, optional
        The number of dynamical timescales to keep from the diagonalization
        of the transition matrix. If not specified, all n_states - 1 are kept
    degenerate_rows : {'flag', 'trim'}
        Policy for states that are never the source of a transition at
        ``lag_time``. 'flag' keeps them with an all-zero row in
        ``transmat_`` and lists them in ``degenerate_states_``; 'trim'
        removes them from the model. See ``scratchmsm.msm.estimate``.
    verbose : bool
        Enable verbose printout

    Attributes
    ----------
    n_states_ : int
        The number of states in the model
    labels_ : np.ndarray, shape=(n_states_,)
        Sorted state labels. ``labels_[i]`` is the label of internal state i.
    mapping_ : dict
        Mapping between "input" labels and internal state indices used by the
        counts and transition matrix for this Markov state model. The
        semantics of ``mapping_[i] = j`` is that state ``i`` from the "input
        space" is represented by the index ``j`` in this MSM.
    countsmat_ : array_like, dtype=int, shape = (n_states_, n_states_)
        Number of transition counts between states.
    transmat_ : array_like, shape = (n_states_, n_states_)
        Row-normalized transition counts.
    degenerate_states_ : np.ndarray
        Labels of the states without outgoing transitions.
    eigenvalues_ : np.ndarray, dtype=complex, shape=(n_timescales+1,)
        The largest eigenvalues of ``transmat_``, by descending modulus.
    left_eigenvectors_ : np.ndarray, dtype=complex
        ``left_eigenvectors_[:, i]`` is the left eigenvector of ``transmat_``
        for ``eigenvalues_[i]``. The first column is normalized to sum to 1.
    right_eigenvectors_ : np.ndarray, dtype=complex
        Right eigenvectors, normalized so that the left and right
        eigenvectors are biorthonormal.
    timescales_ : np.ndarray, shape=(n_timescales,)
        Implied relaxation timescales, in units of the time-step between
        indices in the sequence supplied to ``fit()``. NaN where undefined.
    populations_ : np.ndarray, shape=(n_states_,)
        The stationary distribution of ``transmat_``.
    free_energy_ : np.ndarray, shape=(n_states_,)
        ``-ln(populations_)``, shifted to a minimum of zero, in units of kT.

    References
    ----------
    .. [1] Prinz, Jan-Hendrik, et al. "Markov models of molecular kinetics:
       Generation and validation." J Chem. Phys. 134.17 (2011): 174105.
    .. [2] Pande, V. S., K. A. Beauchamp, and G. R. Bowman. "Everything you
       wanted to know about Markov State Models but were afraid to ask"
       Methods 52.1 (2010): 99-105.
    """

    def __init__(self, lag_time=1, n_timescales=None, degenerate_rows='flag',
                 verbose=False):
        self.lag_time = lag_time
        self.n_timescales = n_timescales
        self.degenerate_rows = degenerate_rows
        self.verbose = verbose

    def fit(self, sequence, y=None):
        """Estimate model parameters.

        Parameters
        ----------
        sequence : array-like
            A single 1D sequence of integer state labels.

        Returns
        -------
        self
        """
        labels, countsmat, transmat, degenerate = estimate(
            sequence, self.lag_time, degenerate_rows=self.degenerate_rows)

        self.labels_ = labels
        self.mapping_ = dict(zip(labels.tolist(), range(len(labels))))
        self.n_states_ = len(labels)
        self.countsmat_ = countsmat
        self.transmat_ = transmat
        self.degenerate_states_ = degenerate

        u, lv, timescales = analyze(transmat, self.lag_time)
        self.populations_ = stationary_distribution(lv)
        self.free_energy_ = free_energy(self.populations_)
        if self.n_states_ > 0:
            lv[:, 0] = lv[:, 0] / np.sum(lv[:, 0])
        rv = _right_eigenvectors(lv)

        k = self._n_timescales() + 1
        self.eigenvalues_ = u[:k]
        self.left_eigenvectors_ = lv[:, :k]
        self.right_eigenvectors_ = rv[:, :k]
        self.timescales_ = timescales[:k - 1]

        if self.verbose:
            print("MSM at lag_time=%d contains %d state%s, %d transition "
                  "counts, %d degenerate state%s" % (
                      self.lag_time, self.n_states_,
                      '' if self.n_states_ == 1 else 's',
                      np.sum(countsmat), len(degenerate),
                      '' if len(degenerate) == 1 else 's'))
        return self

    def _n_timescales(self):
        n_max = max(self.n_states_ - 1, 0)
        if self.n_timescales is None:
            return n_max
        if self.n_timescales < 0:
            raise ValueError('n_timescales must be non-negative: %s'
                             % self.n_timescales)
        return min(self.n_timescales, n_max)

    @property
    def state_labels_(self):
        self._check_fitted('labels_')
        return self.labels_.tolist()

    @property
    def real_eigenvalues_(self):
        """Real part of ``eigenvalues_``, warning if it is not negligible."""
        self._check_fitted('eigenvalues_')
        return real_part(self.eigenvalues_)

    def summarize(self):
        """Return some diagnostic summary statistics about this Markov model
        """
        self._check_fitted('countsmat_')

        doc = '''Markov state model
------------------
Lag time         : {lag_time}
Degenerate rows  : {degenerate_rows}

Number of states : {n_states}
Degenerate states: [{degenerate}]
Number of nonzero entries in counts matrix : {counts_nz} ({percent_counts_nz:.1f}%)
Nonzero counts matrix entries:
    Min.   : {cnz_min:.1f}
    1st Qu.: {cnz_1st:.1f}
    Median : {cnz_med:.1f}
    Mean   : {cnz_mean:.1f}
    3rd Qu.: {cnz_3rd:.1f}
    Max.   : {cnz_max:.1f}

Total transition counts :
    {cnz_sum} counts
Timescales:
    [{ts}]  units
'''
        counts_nz = np.count_nonzero(self.countsmat_)
        cnz = self.countsmat_[np.nonzero(self.countsmat_)]
        if len(cnz) == 0:
            cnz = np.zeros(1)

        return doc.format(
            lag_time=self.lag_time,
            degenerate_rows=self.degenerate_rows,
            n_states=self.n_states_,
            degenerate=', '.join(str(s) for s in self.degenerate_states_),
            counts_nz=counts_nz,
            percent_counts_nz=(100 * counts_nz / max(self.countsmat_.size, 1)),
            cnz_min=np.min(cnz),
            cnz_1st=np.percentile(cnz, 25),
            cnz_med=np.percentile(cnz, 50),
            cnz_mean=np.mean(cnz),
            cnz_3rd=np.percentile(cnz, 75),
            cnz_max=np.max(cnz),
            cnz_sum=np.sum(self.countsmat_),
            ts=', '.join(['{:.2f}'.format(t) for t in self.timescales_]),
            )
