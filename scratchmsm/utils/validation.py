# Author:
# Contributors:
# Copyright (c) 2014, Stanford University
# All rights reserved.

import numbers

import numpy as np

__all__ = ['MalformedTrajectoryError', 'InsufficientLagError',
           'DegenerateRowWarning', 'ComplexEigenWarning',
           'check_sequence', 'check_lag_time']


class MalformedTrajectoryError(ValueError):
    """The trajectory is missing, unreadable, or contains values that are
    not integer state labels in the allowed range."""
    pass


class InsufficientLagError(ValueError):
    """The lag time is not a positive integer strictly smaller than the
    length of the trajectory."""
    pass


class DegenerateRowWarning(UserWarning):
    """A state was never observed as the source of a transition at the
    requested lag time, so its row of the transition matrix is undefined.
    """
    def __init__(self, states, lag_time, policy):
        super(DegenerateRowWarning, self).__init__()
        self.states = list(states)
        self.lag_time = lag_time
        self.policy = policy

    def __str__(self):
        action = {'flag': 'left zero-filled',
                  'trim': 'removed from the state space'}[self.policy]
        return ("%d state%s with no outgoing transitions at lag_time=%d "
                "(%s), %s" % (
                    len(self.states), '' if len(self.states) == 1 else 's',
                    self.lag_time, ', '.join(str(s) for s in self.states),
                    action))


class ComplexEigenWarning(UserWarning):
    """Discarding an imaginary component which is not negligible."""
    pass


def check_sequence(sequence):
    """Check that ``sequence`` is a single, non-empty 1D sequence of integer
    state labels and return it as an ndarray.

    Floating point input is accepted when every value is integral, e.g. the
    output of a parser which read the labels as doubles.

    Raises
    ------
    MalformedTrajectoryError
    """
    try:
        value = np.asarray(sequence)
    except (TypeError, ValueError) as e:
        raise MalformedTrajectoryError('Unable to interpret sequence: %s' % e)

    if value.ndim != 1:
        raise MalformedTrajectoryError(
            "Bad input shape. The sequence has shape %s, but should be 1D"
            % str(value.shape))
    if len(value) == 0:
        raise MalformedTrajectoryError('The sequence is empty')

    if value.dtype.kind in 'iu':
        return value.astype(np.int64, copy=False)
    if value.dtype.kind == 'f':
        if not np.all(np.isfinite(value)):
            raise MalformedTrajectoryError(
                'The sequence contains NaN or infinite values')
        if not np.all(np.mod(value, 1) == 0):
            raise MalformedTrajectoryError(
                'The sequence contains non-integer values')
        return value.astype(np.int64)
    raise MalformedTrajectoryError(
        'State labels must be integers, got dtype %s' % value.dtype)


def check_lag_time(lag_time, n_frames=None):
    """Validate a lag time, optionally against the length of a sequence.

    Raises
    ------
    InsufficientLagError
        If ``lag_time`` is not an integer >= 1, or if it is not strictly
        smaller than ``n_frames``.
    """
    if isinstance(lag_time, bool) or not isinstance(lag_time, numbers.Integral):
        raise InsufficientLagError('Invalid lag_time: %r. lag_time must be an '
                                   'integer' % (lag_time,))
    if lag_time < 1:
        raise InsufficientLagError('Invalid lag_time: %s. Lag_time must be '
                                   '>= 1' % lag_time)
    if n_frames is not None and lag_time >= n_frames:
        raise InsufficientLagError(
            'lag_time (%d) must be smaller than the length of the '
            'sequence (%d)' % (lag_time, n_frames))
    return int(lag_time)
