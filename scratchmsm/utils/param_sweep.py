from joblib import Parallel, delayed
from sklearn import clone
from sklearn.model_selection import ParameterGrid

from .validation import check_sequence, check_lag_time

__all__ = ['param_sweep']


def param_sweep(model, sequence, param_grid, n_jobs=1, verbose=0):
    """Fit a series of models to one sequence over a range of parameters.

    The sequence and every ``lag_time`` in the grid are validated before any
    model is fit, so a bad lag time fails fast instead of after the other
    models have been built.

    Parameters
    ----------
    model : scratchmsm.base.BaseEstimator
        An *instance* of an estimator to be used
        to fit data.
    sequence : array-like
        A single 1D sequence of integer state labels.
    param_grid : dict, sklearn.model_selection.ParameterGrid or list of dict
        Parameters of the models to fit. A dict or ParameterGrid is expanded
        as in sklearn.model_selection.ParameterGrid: the product over the
        keys in sorted order, each key's values in the order given,
        duplicates included. A list of dicts gives the settings of each
        model explicitly, in order.
    n_jobs : int, optional
        Number of jobs to run in parallel using joblib.Parallel

    Returns
    -------
    models : list
        List of models fit to the data, one per setting, in the order
        described above.

    Raises
    ------
    MalformedTrajectoryError
        If ``sequence`` is not a valid sequence of state labels.
    InsufficientLagError
        If any ``lag_time`` setting is not smaller than ``len(sequence)``.
    """
    settings = _expand_settings(param_grid)
    sequence = check_sequence(sequence)
    for params in settings:
        if 'lag_time' in params:
            check_lag_time(params['lag_time'], len(sequence))

    models = Parallel(n_jobs=n_jobs, verbose=verbose)(
        delayed(_param_sweep_helper)(clone(model).set_params(**params),
                                     sequence)
        for params in settings)

    return models


def _expand_settings(param_grid):
    if isinstance(param_grid, dict):
        param_grid = ParameterGrid(param_grid)
    if isinstance(param_grid, ParameterGrid):
        return list(param_grid)
    if (isinstance(param_grid, (list, tuple))
            and all(isinstance(p, dict) for p in param_grid)):
        return [dict(p) for p in param_grid]
    raise ValueError("param_grid must be a dict, a ParameterGrid instance "
                     "or a list of dicts")


def _param_sweep_helper(model, sequence):
    """
    helper for fitting one model of the sweep
    """
    return model.fit(sequence)
