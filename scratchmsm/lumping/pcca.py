import numpy as np

from .base import BaseLumper


class PCCA(BaseLumper):
    """Perron Cluster Cluster Analysis (PCCA) for coarse-graining (lumping)
    microstates into macrostates.

    Parameters
    ----------
    n_macrostates : int
        The desired number of macrostates in the lumped model.
    pcca_tolerance : float
        Microstates whose eigenvector component is below this value are
        put on the negative side of a split.
    lag_time, n_timescales, degenerate_rows, verbose
        See scratchmsm.msm.MarkovStateModel.

    Notes
    -----
    This is the original sign-structure algorithm, not PCCA+. It assumes
    that the slow right eigenvectors are roughly constant within each
    metastable set and change sign between sets.
    """

    def __init__(self, n_macrostates, pcca_tolerance=1e-5, lag_time=1,
                 n_timescales=None, degenerate_rows='flag', verbose=False):
        self.pcca_tolerance = pcca_tolerance
        super(PCCA, self).__init__(
            n_macrostates, lag_time=lag_time, n_timescales=n_timescales,
            degenerate_rows=degenerate_rows, verbose=verbose)

    def _lump(self, transmat, right_eigenvectors):
        """Do the PCCA lumping.

        Notes
        -------
        1.  Iterate over the eigenvectors, starting with the slowest.
        2.  Calculate the spread of that eigenvector within each existing
            macrostate.
        3.  Pick the macrostate with the largest eigenvector spread.
        4.  Split the macrostate based on the sign of the eigenvector.
        """

        # Extract non-perron eigenvectors
        right_eigenvectors = right_eigenvectors[:, 1:]

        n_states = transmat.shape[0]
        assert n_states > 0
        microstate_mapping = np.zeros(n_states, dtype=int)

        def spread(x):
            if len(x) == 0:
                return 0.0
            return x.max() - x.min()

        for i in range(self.n_macrostates - 1):
            v = right_eigenvectors[:, i]
            all_spreads = np.array([spread(v[microstate_mapping == k])
                                    for k in range(i + 1)])
            state_to_split = np.argmax(all_spreads)
            inds = ((microstate_mapping == state_to_split) &
                    (v >= self.pcca_tolerance))
            microstate_mapping[inds] = i + 1

        return microstate_mapping
