# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import time
import logging
import numpy as np
import swarmsearch.common.typing as tp
from swarmsearch.common import errors


logger = logging.getLogger(__name__)


class RandomSource(tp.Protocol):
    """Anything providing independent uniform draws in [0, 1)"""

    def uniform01(self) -> float:
        ...


def uniform(source: RandomSource, low: float, high: float) -> float:
    """Draws a value uniformly in [low, high) from the source"""
    return low + source.uniform01() * (high - low)


class NumpyRandomSource:
    """Random source backed by a numpy RandomState.

    Parameters
    ----------
    seed: int or None
        seed of the underlying generator. If not provided, the generator
        is seeded once from the high resolution clock. The seed in use is
        available as the :code:`seed` attribute so that a run can be replayed.
    """

    def __init__(self, seed: tp.Optional[int] = None) -> None:
        if seed is None:
            seed = time.time_ns() % 2 ** 32
        self.seed = int(seed)
        self._rng = np.random.RandomState(self.seed)
        logger.debug("Random source seeded with %s", self.seed)

    def uniform01(self) -> float:
        return float(self._rng.uniform(0.0, 1.0))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(seed={self.seed})"


class ScriptedRandomSource:
    """Random source replaying a fixed sequence of draws, for deterministic tests.

    Parameters
    ----------
    values: iterable of float
        the draws to provide, in order, each in [0, 1)
    """

    def __init__(self, values: tp.Iterable[float]) -> None:
        self._values = [float(v) for v in values]
        invalid = [v for v in self._values if not 0 <= v < 1]
        if invalid:
            raise errors.SwarmValueError(f"Scripted draws must lie in [0, 1), got {invalid}")
        self._index = 0

    @property
    def num_draws(self) -> int:
        """int: Number of values drawn so far."""
        return self._index

    @property
    def remaining(self) -> int:
        return len(self._values) - self._index

    def uniform01(self) -> float:
        if self._index >= len(self._values):
            raise errors.SwarmRuntimeError(f"Scripted random source exhausted after {self._index} draws")
        value = self._values[self._index]
        self._index += 1
        return value
