import numpy as np

from ..msm import MarkovStateModel
from ..msm.core import real_part


class BaseLumper(MarkovStateModel):
    """Base class for coarse-graining (lumping) microstates into macrostates.

    A lumping method is a function of the microstate transition matrix and
    its right eigenvectors which returns a partition of the microstates.
    Subclasses implement it in ``_lump``.

    Lumpers are subclasses of MarkovStateModel. The MSM properties and
    attributes refer to the *microstate* model, e.g. ``transmat_`` is the
    microstate transition matrix. To get the macrostate transition matrix,
    fit a new MarkovStateModel on the output of ``transform()``.

    Parameters
    ----------
    n_macrostates : int
        The desired number of macrostates in the lumped model.
    lag_time, n_timescales, degenerate_rows, verbose
        See scratchmsm.msm.MarkovStateModel.

    Attributes
    ----------
    microstate_mapping_ : np.ndarray, shape=(n_states_,)
        Macrostate index of each (internal) microstate.
    """

    def __init__(self, n_macrostates, lag_time=1, n_timescales=None,
                 degenerate_rows='flag', verbose=False):
        self.n_macrostates = n_macrostates
        super(BaseLumper, self).__init__(
            lag_time=lag_time, n_timescales=n_timescales,
            degenerate_rows=degenerate_rows, verbose=verbose)

    def fit(self, sequence, y=None):
        """Fit the microstate model to a sequence of state labels, then lump.

        Parameters
        ----------
        sequence : array-like
            A single 1D sequence of integer state labels.
        y : None
            Unused, present for sklearn compatibility only.

        Returns
        -------
        self
        """
        super(BaseLumper, self).fit(sequence, y=y)
        self._do_lumping()
        return self

    def _do_lumping(self):
        if self.n_macrostates < 1:
            raise ValueError('n_macrostates must be >= 1: %s'
                             % self.n_macrostates)
        if self.right_eigenvectors_.shape[1] < self.n_macrostates:
            raise ValueError(
                'Lumping into %d macrostates needs %d eigenvectors, but the '
                'model has %d' % (self.n_macrostates, self.n_macrostates,
                                  self.right_eigenvectors_.shape[1]))
        right_eigenvectors = real_part(
            self.right_eigenvectors_[:, :self.n_macrostates])
        self.microstate_mapping_ = self._lump(self.transmat_,
                                              right_eigenvectors)

    def _lump(self, transmat, right_eigenvectors):
        """Partition the microstates.

        Parameters
        ----------
        transmat : np.ndarray, shape=(n_states, n_states)
        right_eigenvectors : np.ndarray, shape=(n_states, k)
            At least ``n_macrostates`` right eigenvectors, slowest first.

        Returns
        -------
        microstate_mapping : np.ndarray, dtype=int, shape=(n_states,)
        """
        raise NotImplementedError

    def transform(self, sequence, mode='clip'):
        """Map a sequence of microstate labels onto macrostate indices.

        See MarkovStateModel.transform for the meaning of ``mode``.
        """
        self._check_fitted('microstate_mapping_')
        trimmed = super(BaseLumper, self).transform(sequence, mode)
        if mode == 'clip':
            return [self.microstate_mapping_[seq] for seq in trimmed]
        result = np.empty(len(trimmed))
        result.fill(np.nan)
        finite = np.isfinite(trimmed)
        result[finite] = self.microstate_mapping_[
            np.asarray(trimmed)[finite].astype(int)]
        return result

    @classmethod
    def from_msm(cls, msm, n_macrostates, **kwargs):
        """Create and fit lumped model from pre-existing MSM.

        Parameters
        ----------
        msm : MarkovStateModel
            The input microstate msm to use.
        n_macrostates : int
            The number of macrostates
        kwargs : optional
            Additional parameters of the lumping method.

        Returns
        -------
        lumper : cls
            The fit lumper object.
        """
        msm._check_fitted('transmat_')
        params = msm.get_params()
        params.pop('n_macrostates', None)
        params.update(kwargs)
        lumper = cls(n_macrostates, **params)

        for attr in ['labels_', 'mapping_', 'n_states_', 'countsmat_',
                     'transmat_', 'degenerate_states_', 'populations_',
                     'free_energy_', 'eigenvalues_', 'left_eigenvectors_',
                     'right_eigenvectors_', 'timescales_']:
            setattr(lumper, attr, getattr(msm, attr))

        lumper._do_lumping()
        return lumper
