# Author:
# Contributors:
# Copyright (c) 2014, Stanford University
# All rights reserved.

import collections
import warnings

import numpy as np
import scipy.linalg
from scipy.sparse import coo_matrix
from sklearn.base import TransformerMixin
from sklearn.utils import check_random_state

from ..utils import (check_sequence, check_lag_time, DegenerateRowWarning,
                     ComplexEigenWarning)

__all__ = [
    'TransitionEstimate', 'SpectralAnalysis', 'estimate', 'analyze',
    'real_part', 'stationary_distribution', 'free_energy',
    'implied_timescales_from_eigenvalues',
    '_MappingTransformMixin', '_SampleMSMMixin',
    '_transition_counts', '_normalize_rows', '_nondegenerate_states',
    '_right_eigenvectors', '_sample_chain',
]

DEGENERATE_ROW_POLICIES = ('flag', 'trim')

# Eigenvalue magnitudes are compared at this precision when sorting, so that
# eigenvalues of equal modulus (e.g. +1 and -1 of a periodic chain) are
# ordered by their real part instead of by rounding noise.
EIGENVALUE_SORT_DECIMALS = 12

# A non-leading eigenvalue with modulus above 1 - UNIT_EIGENVALUE_TOL is
# treated as a unit eigenvalue, whose implied timescale is undefined.
UNIT_EIGENVALUE_TOL = 1e-12


TransitionEstimate = collections.namedtuple(
    'TransitionEstimate', ['labels', 'countsmat', 'transmat', 'degenerate'])
TransitionEstimate.__doc__ = """\
Transition statistics of a discrete sequence at one lag time.

Attributes
----------
labels : np.ndarray, shape=(n_states,)
    Sorted state labels. ``labels[i]`` is the state represented by row and
    column ``i`` of the matrices.
countsmat : np.ndarray, dtype=int, shape=(n_states, n_states)
    ``countsmat[i, j]`` is the number of times the sequence was in state
    ``labels[i]`` at time ``t`` and in ``labels[j]`` at ``t + lag_time``.
transmat : np.ndarray, shape=(n_states, n_states)
    Row-normalized ``countsmat``.
degenerate : np.ndarray
    Labels of the states with no outgoing transitions. With the 'flag'
    policy their rows of ``transmat`` are zero; with the 'trim' policy they
    were removed from ``labels``.
"""

SpectralAnalysis = collections.namedtuple(
    'SpectralAnalysis', ['eigenvalues', 'eigenvectors', 'timescales'])
SpectralAnalysis.__doc__ = """\
Eigen-decomposition of a transition matrix.

Attributes
----------
eigenvalues : np.ndarray, dtype=complex, shape=(n_states,)
    Sorted by descending modulus.
eigenvectors : np.ndarray, dtype=complex, shape=(n_states, n_states)
    ``eigenvectors[:, i]`` is the left eigenvector of the transition matrix
    (eigenvector of its transpose) belonging to ``eigenvalues[i]``.
timescales : np.ndarray, shape=(n_states - 1,)
    Implied timescales of ``eigenvalues[1:]``, NaN where undefined.
"""


def estimate(sequence, lag_time, degenerate_rows='flag'):
    """Count the transitions of a discrete sequence at a given lag time and
    normalize them into a transition probability matrix.

    Parameters
    ----------
    sequence : array-like
        A single 1D sequence of integer state labels.
    lag_time : int
        The time (index) delay for the counts. Must be smaller than the
        length of ``sequence``.
    degenerate_rows : {'flag', 'trim'}
        What to do with states which never appear as the source of a
        transition, i.e. whose row of the counts matrix sums to zero.

        ``flag``
            Leave the row zero-filled in the transition matrix and report the
            state in ``degenerate``. The counts matrix is untouched, so its
            total is exactly ``len(sequence) - lag_time``. (Default)
        ``trim``
            Remove the states from the state space. Trimming is repeated
            until every remaining state has an outgoing transition, so the
            result is row-stochastic. Counts into removed states are
            dropped.

    Returns
    -------
    estimate : TransitionEstimate
        ``(labels, countsmat, transmat, degenerate)``

    Raises
    ------
    MalformedTrajectoryError
        If ``sequence`` is not a non-empty 1D sequence of integers.
    InsufficientLagError
        If ``lag_time`` is not an integer in ``[1, len(sequence))``.
    """
    if degenerate_rows not in DEGENERATE_ROW_POLICIES:
        raise ValueError('degenerate_rows must be one of %s: %s' % (
            ', '.join(DEGENERATE_ROW_POLICIES), degenerate_rows))

    countsmat, mapping = _transition_counts(sequence, lag_time)
    labels = np.array(list(mapping.keys()), dtype=np.int64)
    transmat, empty = _normalize_rows(countsmat)
    degenerate = labels[empty]

    if len(degenerate) > 0:
        if degenerate_rows == 'trim':
            keep = _nondegenerate_states(countsmat)
            degenerate = labels[~keep]
            countsmat = countsmat[np.ix_(keep, keep)]
            labels = labels[keep]
            transmat, _ = _normalize_rows(countsmat)
        warnings.warn(DegenerateRowWarning(degenerate, lag_time,
                                           degenerate_rows), stacklevel=2)

    return TransitionEstimate(labels, countsmat, transmat, degenerate)


def analyze(transmat, lag_time):
    """Eigen-decompose a transition matrix and compute its implied timescales.

    The eigenvectors are those of ``transmat.T``, i.e. the left eigenvectors
    of ``transmat``, so that the leading one is proportional to the
    stationary distribution.

    Parameters
    ----------
    transmat : array-like, shape=(n_states, n_states)
        A row-stochastic matrix. Zero-filled rows are allowed.
    lag_time : int
        The lag time at which ``transmat`` was estimated. Timescales are
        expressed in the same units.

    Returns
    -------
    analysis : SpectralAnalysis
        ``(eigenvalues, eigenvectors, timescales)``
    """
    transmat = np.asarray(transmat, dtype=float)
    if transmat.ndim != 2 or transmat.shape[0] != transmat.shape[1]:
        raise ValueError('transmat must be a square matrix, got shape %s'
                         % str(transmat.shape))
    if not np.all(np.isfinite(transmat)):
        raise ValueError('transmat contains NaN or infinite values')
    lag_time = check_lag_time(lag_time)

    n_states = transmat.shape[0]
    if n_states == 0:
        return SpectralAnalysis(np.zeros(0, dtype=complex),
                                np.zeros((0, 0), dtype=complex),
                                np.zeros(0))

    u, lv = scipy.linalg.eig(transmat.T)
    # sort by descending modulus, ties by descending real part
    magnitude = np.round(np.abs(u), EIGENVALUE_SORT_DECIMALS)
    order = np.lexsort((-u.real, -magnitude))
    u = u[order].astype(complex)
    lv = lv[:, order].astype(complex)

    timescales = implied_timescales_from_eigenvalues(u, lag_time)
    return SpectralAnalysis(u, lv, timescales)


def implied_timescales_from_eigenvalues(eigenvalues, lag_time):
    """Implied relaxation timescales, ``-lag_time / ln|mu|``.

    The first (stationary) eigenvalue is skipped. Timescales of eigenvalues
    with ``|mu| == 0`` or ``|mu| >= 1`` are undefined and returned as NaN.
    """
    magnitude = np.abs(np.asarray(eigenvalues)[1:])
    timescales = np.empty(len(magnitude))
    timescales.fill(np.nan)
    defined = (magnitude > 0) & (magnitude < 1 - UNIT_EIGENVALUE_TOL)
    timescales[defined] = -lag_time / np.log(magnitude[defined])
    return timescales


def real_part(values, atol=1e-8):
    """Real part of a (possibly complex) eigenvalue or eigenvector array.

    A transition matrix which is not reversible can have complex eigenpairs.
    The physically meaningful ones are real for practical purposes, so it is
    usual to drop the imaginary part. This issues a ``ComplexEigenWarning``
    when the discarded part is larger than ``atol``.
    """
    values = np.asarray(values)
    if not np.iscomplexobj(values):
        return values
    if values.size > 0:
        max_imag = np.max(np.abs(values.imag))
        if max_imag > atol:
            warnings.warn(ComplexEigenWarning(
                'Discarding imaginary part of magnitude up to %.3g' %
                max_imag), stacklevel=2)
    return values.real.copy()


def stationary_distribution(eigenvectors):
    """Stationary distribution from the leading left eigenvector, normalized
    to sum to 1."""
    eigenvectors = np.asarray(eigenvectors)
    if eigenvectors.shape[1] == 0:
        return np.zeros(eigenvectors.shape[0])
    populations = real_part(eigenvectors[:, 0])
    return populations / np.sum(populations)


def free_energy(populations):
    """Free energy of each state by Boltzmann inversion, ``-ln(pi)``, in
    units of kT and shifted so that the most populated state is at zero.
    States with zero population get ``inf``.
    """
    populations = np.asarray(populations, dtype=float)
    energies = np.empty(populations.shape)
    energies.fill(np.inf)
    positive = populations > 0
    if np.any(positive):
        energies[positive] = -np.log(populations[positive])
        energies[positive] -= energies[positive].min()
    return energies


class _MappingTransformMixin(TransformerMixin):

    def transform(self, sequence, mode='clip'):
        """Transform a sequence to internal indexing

        Recall that `sequence` contains arbitrary integer labels, whereas
        ``transmat_`` and ``countsmat_`` are indexed with integers between 0
        and ``n_states_ - 1``. This methods maps a sequence from the labels
        onto this internal indexing.

        Parameters
        ----------
        sequence : array-like
            A 1D sequence of integer state labels.
        mode : {'clip', 'fill'}
            Method by which to treat labels in `sequence` which do not have
            a corresponding index. This can be due, for example, to trimming
            of degenerate states.

           ``clip``
               Unmapped labels are removed during transform. If they occur
               at the beginning or end of a sequence, the resulting transformed
               sequence will be shorted. If they occur in the middle of a
               sequence, that sequence will be broken into two (or more)
               sequences. (Default)
           ``fill``
               Unmapped labels will be replaced with NaN, to signal missing
               data.

        Returns
        -------
        mapped_sequence : list or ndarray
            If mode is "fill", return an ndarray in internal indexing.
            If mode is "clip", return a list of ndarrays each in internal
            indexing.
        """
        if mode not in ['clip', 'fill']:
            raise ValueError('mode must be one of ["clip", "fill"]: %s' % mode)
        self._check_fitted('mapping_')
        sequence = check_sequence(sequence)

        a = np.array([self.mapping_.get(k, np.nan) for k in sequence.tolist()],
                     dtype=float)
        if mode == 'fill':
            if np.all(np.isfinite(a)):
                return a.astype(int)
            return a
        return [a[s].astype(int) for s in
                np.ma.clump_unmasked(np.ma.masked_invalid(a))]

    def inverse_transform(self, sequence):
        """Transform a sequence from internal indexing into labels

        Parameters
        ----------
        sequence : array-like
            One-dimensional array of integers in ``0, ..., n_states_ - 1``.

        Returns
        -------
        sequence : np.ndarray
            The corresponding state labels.
        """
        self._check_fitted('labels_')
        y = np.asarray(sequence, dtype=int)
        if len(y) > 0 and not np.all((0 <= y) & (y < self.n_states_)):
            raise ValueError('sequence must be between 0 and n_states-1')
        return self.labels_[y]


class _SampleMSMMixin(object):
    """Provides msm.sample_discrete() for drawing samples from the chain."""

    def sample_discrete(self, state=None, n_steps=100, random_state=None):
        r"""Generate a random sequence of states by propagating the model
        using discrete time steps given by the model lagtime.

        Parameters
        ----------
        state : {None, ndarray, label}
            Specify the starting state for the chain.

            ``None``
                Choose the initial state by randomly drawing from the model's
                stationary distribution.
            ``array-like``
                If ``state`` is a 1D array with length equal to ``n_states_``,
                then it is is interpreted as an initial multinomial
                distribution from which to draw the chain's initial state.
                Note that the indexing semantics of this array must match the
                _internal_ indexing of this model.
            otherwise
                Otherwise, ``state`` is interpreted as a particular
                deterministic state label from which to begin the trajectory.
        n_steps : int
            Lengths of the resulting trajectory
        random_state : int or RandomState instance or None (default)
            Pseudo Random Number generator seed control. If None, use the
            numpy.random singleton.

        Returns
        -------
        sequence : array of length n_steps
            A randomly sampled label sequence
        """
        self._check_fitted('transmat_')
        random = check_random_state(random_state)

        if state is None:
            initial = _draw(np.cumsum(self.populations_), random.rand())
        elif hasattr(state, '__len__') and len(state) == self.n_states_:
            initial = _draw(np.cumsum(state), random.rand())
        else:
            if state not in self.mapping_:
                raise ValueError('Unknown state label: %s' % (state,))
            initial = self.mapping_[state]

        chain = _sample_chain(self.transmat_, initial, n_steps, random)
        return self.inverse_transform(chain)


def _draw(cdf, r):
    # index of the first bin whose cumulative probability exceeds r
    return min(int(np.searchsorted(cdf, r)), len(cdf) - 1)


def _sample_chain(transmat, initial, n_steps, random):
    """Propagate a Markov chain with transition matrix ``transmat`` for
    ``n_steps`` frames (including the initial one), returning internal state
    indices."""
    n_steps = int(n_steps)
    random = check_random_state(random)
    cstr = np.cumsum(transmat, axis=1)
    r = random.rand(n_steps)

    chain = np.zeros(n_steps, dtype=int)
    if n_steps == 0:
        return chain
    chain[0] = initial
    for i in range(1, n_steps):
        row = cstr[chain[i - 1]]
        if row[-1] == 0:
            raise ValueError('The chain reached state index %d, which has no '
                             'outgoing transitions' % chain[i - 1])
        chain[i] = _draw(row, r[i])
    return chain


def _right_eigenvectors(left_eigenvectors):
    """Right eigenvectors biorthonormal to a full set of left eigenvectors.

    If ``transmat.T @ L = L @ diag(u)`` then ``R = inv(L.T)`` satisfies
    ``transmat @ R = R @ diag(u)`` and ``L.T @ R = I``. Returns NaN if the
    left eigenvectors are linearly dependent (defective matrix). An
    ill-conditioned inverse counts as singular.
    """
    try:
        with warnings.catch_warnings():
            warnings.simplefilter('error', scipy.linalg.LinAlgWarning)
            return scipy.linalg.inv(left_eigenvectors.T)
    except (np.linalg.LinAlgError, scipy.linalg.LinAlgWarning, ValueError):
        rv = np.empty(left_eigenvectors.shape, dtype=left_eigenvectors.dtype)
        rv.fill(np.nan)
        return rv


def _normalize_rows(counts):
    """Row-normalize a counts matrix.

    Returns
    -------
    transmat : np.ndarray, shape=(n_states, n_states)
        ``counts`` with each row divided by its sum. Rows which sum to zero
        are left zero-filled.
    empty : np.ndarray
        Indices of the rows which sum to zero.
    """
    counts = np.asarray(counts)
    row_sums = counts.sum(axis=1)
    nonzero = row_sums > 0
    transmat = np.zeros(counts.shape, dtype=float)
    transmat[nonzero] = counts[nonzero] / row_sums[nonzero, np.newaxis]
    return transmat, np.flatnonzero(~nonzero)


def _nondegenerate_states(counts):
    """Boolean mask of the states that survive iterative removal of states
    with no outgoing counts. Removing a state also removes the transitions
    into it, which can leave other states without outgoing counts."""
    keep = np.ones(counts.shape[0], dtype=bool)
    while True:
        kept = np.flatnonzero(keep)
        empty = counts[np.ix_(kept, kept)].sum(axis=1) == 0
        if not np.any(empty):
            return keep
        keep[kept[empty]] = False


def _transition_counts(sequence, lag_time=1):
    """Count the number of directed transitions in a sequence in a discrete
    space.

    Parameters
    ----------
    sequence : array-like
        A single 1D sequence of integer state labels.
    lag_time : int
        The time (index) delay for the counts.

    Returns
    -------
    counts : array, dtype=int, shape=(n_states, n_states)
        ``counts[i][j]`` counts the number of times the sequence was in state
        `i` at time t, and state `j` at time `t+lag_time`, for every
        ``t in [0, len(sequence) - lag_time)``.
    mapping : dict
        Mapping from the labels in the sequence to the indices in
        ``(0, n_states-1)`` used for the count matrix. The labels are
        inserted in sorted order.

    Examples
    --------
    >>> counts, mapping = _transition_counts([0, 0, 0, 1, 1])
    >>> counts
    array([[2, 1],
           [0, 1]])
    >>> mapping
    {0: 0, 1: 1}

    >>> counts, mapping = _transition_counts([100, 200, 300])
    >>> counts
    array([[0, 1, 0],
           [0, 0, 1],
           [0, 0, 0]])
    >>> mapping
    {100: 0, 200: 1, 300: 2}
    """
    sequence = check_sequence(sequence)
    lag_time = check_lag_time(lag_time, len(sequence))

    classes = np.unique(sequence)
    n_states = len(classes)
    mapping = dict(zip(classes.tolist(), range(n_states)))

    # classes is sorted, so searchsorted maps each label to its index
    indices = np.searchsorted(classes, sequence)
    from_states = indices[:-lag_time]
    to_states = indices[lag_time:]

    C = coo_matrix((np.ones(len(from_states), dtype=np.int64),
                    (from_states, to_states)), shape=(n_states, n_states))
    counts = C.toarray()
    return counts, mapping
