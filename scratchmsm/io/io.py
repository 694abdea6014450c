# Author:
# Contributors:
# Copyright (c) 2016, Stanford University
# All rights reserved.

import numbers
import os
import zlib

import numpy as np
import pandas as pd

from ..utils import MalformedTrajectoryError, check_sequence

__all__ = ['load_trajectory']


def load_trajectory(fn, min_state=1, max_state=100, stride=1):
    """Load a discrete trajectory from a (compressed) comma separated file.

    The file holds a single column of integer state labels, one frame per
    line and no header.

    Parameters
    ----------
    fn : str
        Path to the file. Compression (gzip, bz2, xz, zip) is inferred from
        the extension, e.g. ``traj.csv.gz``.
    min_state, max_state : int or None
        Inclusive range of valid state labels. Use None to disable either
        bound.
    stride : int
        Keep only every ``stride``-th frame.

    Returns
    -------
    trajectory : np.ndarray, dtype=int64
        Read-only array of state labels.

    Raises
    ------
    MalformedTrajectoryError
        If the file is missing or unreadable, is empty, has more than one
        column, or contains values which are not integer labels in
        ``[min_state, max_state]``.
    """
    if (isinstance(stride, bool) or not isinstance(stride, numbers.Integral)
            or stride < 1):
        raise ValueError('stride must be a positive integer: %r' % (stride,))
    if not os.path.isfile(fn):
        raise MalformedTrajectoryError('No such file: %s' % fn)

    try:
        df = pd.read_csv(fn, header=None, compression='infer')
    except pd.errors.EmptyDataError:
        raise MalformedTrajectoryError('%s is empty' % fn)
    except (OSError, EOFError, ValueError, zlib.error) as e:
        raise MalformedTrajectoryError('Unable to parse %s: %s' % (fn, e))

    if df.shape[1] != 1:
        raise MalformedTrajectoryError(
            '%s should contain a single column of state labels, found %d '
            'columns' % (fn, df.shape[1]))

    try:
        trajectory = check_sequence(df.iloc[:, 0].to_numpy())
    except MalformedTrajectoryError as e:
        raise MalformedTrajectoryError('%s: %s' % (fn, e))

    out_of_range = np.zeros(len(trajectory), dtype=bool)
    if min_state is not None:
        out_of_range |= trajectory < min_state
    if max_state is not None:
        out_of_range |= trajectory > max_state
    if np.any(out_of_range):
        first = np.flatnonzero(out_of_range)[0]
        raise MalformedTrajectoryError(
            '%s: %d label%s outside of [%s, %s], first at line %d: %d' % (
                fn, np.sum(out_of_range),
                '' if np.sum(out_of_range) == 1 else 's',
                min_state, max_state, first + 1, trajectory[first]))

    trajectory = trajectory[::stride].copy()
    trajectory.flags.writeable = False
    return trajectory
