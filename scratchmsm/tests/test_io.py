import os

import numpy as np
import numpy.testing as npt
import pytest

from scratchmsm.io import load_trajectory
from scratchmsm.utils import MalformedTrajectoryError

random = np.random.RandomState(3)


def _write(tmp_path, name, text):
    fn = os.path.join(str(tmp_path), name)
    with open(fn, 'w') as f:
        f.write(text)
    return fn


def test_load_compressed(tmp_path):
    traj = random.randint(1, 101, size=1000)
    fn = os.path.join(str(tmp_path), 'traj.csv.gz')
    np.savetxt(fn, traj, fmt='%d')

    loaded = load_trajectory(fn)
    npt.assert_array_equal(loaded, traj)
    assert loaded.dtype == np.int64
    assert not loaded.flags.writeable


def test_load_plain(tmp_path):
    fn = _write(tmp_path, 'traj.csv', '1\n2\n2\n100\n')
    npt.assert_array_equal(load_trajectory(fn), [1, 2, 2, 100])


def test_stride(tmp_path):
    traj = random.randint(1, 101, size=1000)
    fn = os.path.join(str(tmp_path), 'traj.csv.gz')
    np.savetxt(fn, traj, fmt='%d')

    decimated = load_trajectory(fn, stride=10)
    assert len(decimated) == 100
    npt.assert_array_equal(decimated, traj[::10])

    with pytest.raises(ValueError):
        load_trajectory(fn, stride=0)


def test_missing_file(tmp_path):
    with pytest.raises(MalformedTrajectoryError):
        load_trajectory(os.path.join(str(tmp_path), 'nope.csv.gz'))


def test_empty_file(tmp_path):
    fn = _write(tmp_path, 'empty.csv', '')
    with pytest.raises(MalformedTrajectoryError):
        load_trajectory(fn)


def test_corrupt_archive(tmp_path):
    fn = _write(tmp_path, 'corrupt.csv.gz', 'this is not gzip data\n')
    with pytest.raises(MalformedTrajectoryError):
        load_trajectory(fn)


def test_two_columns(tmp_path):
    fn = _write(tmp_path, 'wide.csv', '1,2\n3,4\n')
    with pytest.raises(MalformedTrajectoryError):
        load_trajectory(fn)


def test_ragged(tmp_path):
    fn = _write(tmp_path, 'ragged.csv', '1\n2\n3,4,5\n')
    with pytest.raises(MalformedTrajectoryError):
        load_trajectory(fn)


def test_non_integer(tmp_path):
    fn = _write(tmp_path, 'float.csv', '1\n2.5\n3\n')
    with pytest.raises(MalformedTrajectoryError):
        load_trajectory(fn)

    fn = _write(tmp_path, 'text.csv', '1\nabc\n3\n')
    with pytest.raises(MalformedTrajectoryError):
        load_trajectory(fn)


def test_out_of_range(tmp_path):
    for text in ['1\n0\n3\n', '1\n101\n3\n', '-4\n5\n']:
        fn = _write(tmp_path, 'range.csv', text)
        with pytest.raises(MalformedTrajectoryError):
            load_trajectory(fn)

    fn = _write(tmp_path, 'range.csv', '0\n101\n')
    npt.assert_array_equal(
        load_trajectory(fn, min_state=None, max_state=None), [0, 101])
    npt.assert_array_equal(load_trajectory(fn, min_state=0, max_state=101),
                           [0, 101])


def test_malformed_is_value_error(tmp_path):
    fn = _write(tmp_path, 'text.csv', 'a\nb\n')
    with pytest.raises(ValueError):
        load_trajectory(fn)
