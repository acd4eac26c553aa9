# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import pytest
from swarmsearch.common import errors
from . import randomsource as rs


def test_numpy_random_source_seeded() -> None:
    source1, source2 = rs.NumpyRandomSource(seed=12), rs.NumpyRandomSource(seed=12)
    values1 = [source1.uniform01() for _ in range(50)]
    values2 = [source2.uniform01() for _ in range(50)]
    np.testing.assert_array_equal(values1, values2)
    assert all(0 <= v < 1 for v in values1)
    assert all(isinstance(v, float) for v in values1)
    assert repr(source1) == "NumpyRandomSource(seed=12)"


def test_numpy_random_source_clock_seed() -> None:
    source = rs.NumpyRandomSource()
    assert 0 <= source.seed < 2 ** 32
    replay = rs.NumpyRandomSource(seed=source.seed)
    np.testing.assert_array_equal(
        [source.uniform01() for _ in range(10)], [replay.uniform01() for _ in range(10)]
    )


def test_uniform() -> None:
    source = rs.ScriptedRandomSource([0.0, 0.5, 0.25])
    assert rs.uniform(source, -5, 5) == -5
    assert rs.uniform(source, -5, 5) == 0
    assert rs.uniform(source, -10, 10) == -5
    values = [rs.uniform(rs.NumpyRandomSource(seed=k), 2.0, 3.0) for k in range(20)]
    assert all(2.0 <= v < 3.0 for v in values)


def test_scripted_random_source() -> None:
    source = rs.ScriptedRandomSource([0.1, 0.2])
    assert source.remaining == 2
    assert source.uniform01() == 0.1
    assert source.uniform01() == 0.2
    assert source.num_draws == 2
    assert not source.remaining
    with pytest.raises(errors.SwarmRuntimeError):
        source.uniform01()


@pytest.mark.parametrize("value", [1.0, -0.1, float("nan")])  # type: ignore
def test_scripted_random_source_invalid(value: float) -> None:
    with pytest.raises(errors.SwarmValueError):
        rs.ScriptedRandomSource([0.5, value])
