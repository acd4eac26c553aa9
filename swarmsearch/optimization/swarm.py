# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import math
import logging
import warnings
import numpy as np
import swarmsearch.common.typing as tp
from swarmsearch.common import errors
from swarmsearch.common import tools as sstools
from swarmsearch.common.decorators import Registry
from . import randomsource as rs


logger = logging.getLogger(__name__)
registry: Registry["SwarmConfig"] = Registry()
_SwarmCallBack = tp.Callable[["Swarm"], None]
CALLBACK_NAMES = ("initialize", "step", "finish")


class Particle:
    """Candidate solution of the swarm, with its personal best memory.

    Parameters
    ----------
    position: array
        initial position, also used as first personal best
    velocity: array
        initial velocity
    loss: float
        value of the objective function at the initial position
    """

    def __init__(self, position: tp.ArrayLike, velocity: tp.ArrayLike, loss: tp.FloatLoss) -> None:
        self.position = np.array(position, dtype=float)
        self.velocity = np.array(velocity, dtype=float)
        self.best_position = self.position.copy()
        self.best_loss = float(loss)

    def __repr__(self) -> str:
        return f"Particle(position={self.position.tolist()}, best_loss={self.best_loss})"


class Recommendation(tp.NamedTuple):
    """Best point found by a swarm, and its loss"""

    position: np.ndarray
    loss: float


class Swarm:  # pylint: disable=too-many-instance-attributes
    """Particle swarm minimizing an objective function over a box.

    The swarm is updated sequentially: each particle sees the global best
    as already improved by the particles preceding it in the same iteration.

    - :code:`initialize()` samples positions and velocities and evaluates them.
    - :code:`step()` moves every particle once.
    - :code:`minimize(max_iter)` chains both and provides the best point found.

    Each swarm instance should be used for only one run.

    Parameters
    ----------
    objective: callable
        function of a 1d numpy array, returning the loss to minimize
    dimension: int
        dimension of the search space
    config: SwarmConfig
        swarm settings (defaults to :code:`SwarmConfig()`)
    random_source: RandomSource
        provider of the uniform draws. Defaults to a clock-seeded :code:`NumpyRandomSource`
    """

    def __init__(
        self,
        objective: tp.Objective,
        dimension: int = 2,
        config: tp.Optional["SwarmConfig"] = None,
        random_source: tp.Optional[rs.RandomSource] = None,
    ) -> None:
        if not callable(objective):
            raise errors.SwarmTypeError(f"Objective must be callable, got {objective!r}")
        if isinstance(dimension, bool) or int(dimension) != dimension or dimension < 1:
            raise errors.SwarmValueError(f"Dimension must be a strictly positive integer, got {dimension}")
        self.objective = objective
        self.dimension = int(dimension)
        self.config = SwarmConfig() if config is None else config
        if self.config.popsize == 1:
            warnings.warn(
                "A single particle swarm has identical personal and global bests",
                errors.InefficientSettingsWarning,
            )
        self.random_source: rs.RandomSource = (
            rs.NumpyRandomSource() if random_source is None else random_source
        )
        self.particles: tp.List[Particle] = []
        self.best_position = np.zeros(self.dimension)
        self.best_loss = float("inf")
        self.finished = False
        self._initialized = False
        self._num_iterations = 0
        self._num_evaluations = 0
        self._callbacks: tp.Dict[str, tp.List[_SwarmCallBack]] = {}

    @property
    def num_iterations(self) -> int:
        """int: Number of completed iterations (0 right after initialization)."""
        return self._num_iterations

    @property
    def num_evaluations(self) -> int:
        """int: Number of calls to the objective function."""
        return self._num_evaluations

    def __repr__(self) -> str:
        return f"Instance of {self.config}(dimension={self.dimension}, random_source={self.random_source!r})"

    def register_callback(self, name: str, callback: _SwarmCallBack) -> None:
        """Add a callback called with the swarm as only argument at one of the
        checkpoints of the run. This can be useful for custom logging.

        Parameters
        ----------
        name: str
            name of the checkpoint: :code:`initialize` (after the swarm is sampled),
            :code:`step` (after each iteration) or :code:`finish` (at the end of :code:`minimize`)
        callback: callable
            a callable taking the swarm as argument
        """
        if name not in CALLBACK_NAMES:
            raise errors.SwarmValueError(f"Callbacks can only be registered on {CALLBACK_NAMES} (not {name})")
        if not callable(callback):
            raise errors.SwarmTypeError(f"Callback must be callable, got {callback!r}")
        self._callbacks.setdefault(name, []).append(callback)

    def remove_all_callbacks(self) -> None:
        """Removes all registered callables"""
        self._callbacks = {}

    def _call_callbacks(self, name: str) -> None:
        for callback in self._callbacks.get(name, []):
            callback(self)

    def _evaluate(self, position: np.ndarray) -> float:
        self._num_evaluations += 1
        return float(self.objective(position.copy()))

    def _update_global_best(self, position: np.ndarray, loss: float) -> None:
        # ties keep the earlier best
        if loss < self.best_loss:
            self.best_loss = loss
            self.best_position = position.copy()
            logger.debug("New global best %s at %s", loss, self.best_position.tolist())

    def initialize(self) -> None:
        """Samples the particles and sets personal and global bests"""
        if self._initialized:
            raise errors.SwarmRuntimeError("A swarm can only be initialized once")
        config = self.config
        max_speed = config.max_speed
        for _ in range(config.popsize):
            position = np.array(
                [rs.uniform(self.random_source, config.lower, config.upper) for _ in range(self.dimension)]
            )
            velocity = np.array(
                [rs.uniform(self.random_source, -max_speed, max_speed) for _ in range(self.dimension)]
            )
            particle = Particle(position, velocity, self._evaluate(position))
            self.particles.append(particle)
            self._update_global_best(particle.best_position, particle.best_loss)
        self._initialized = True
        self._call_callbacks("initialize")

    def step(self) -> None:
        """Moves all particles once, in order"""
        if not self._initialized:
            raise errors.SwarmRuntimeError("The swarm must be initialized before stepping")
        if self.finished:
            raise errors.SwarmRuntimeError("A finished swarm cannot be stepped further")
        config = self.config
        for particle in self.particles:
            # one pair of draws per particle, shared by all dimensions
            r1 = self.random_source.uniform01()
            r2 = self.random_source.uniform01()
            x = particle.position
            particle.velocity = (
                config.omega * particle.velocity
                + config.phip * r1 * (particle.best_position - x)
                + config.phig * r2 * (self.best_position - x)
            )
            # velocity is left untouched when hitting the boundaries
            particle.position = np.clip(x + particle.velocity, config.lower, config.upper)
            loss = self._evaluate(particle.position)
            if loss < particle.best_loss:
                particle.best_loss = loss
                particle.best_position = particle.position.copy()
                self._update_global_best(particle.position, loss)
        self._num_iterations += 1
        self._call_callbacks("step")

    def provide_recommendation(self) -> Recommendation:
        """Provides the best point found so far, and its loss"""
        return Recommendation(self.best_position.copy(), self.best_loss)

    def minimize(self, max_iter: int = 200) -> Recommendation:
        """Optimization (minimization) procedure

        Parameters
        ----------
        max_iter: int
            number of iterations to perform after initialization (0 is allowed)

        Returns
        -------
        Recommendation
            best position found and its loss
        """
        if max_iter < 0:
            raise errors.SwarmValueError(f"Number of iterations must be non-negative, got {max_iter}")
        if self.finished:
            raise errors.SwarmRuntimeError("A swarm can only be minimized once")
        if not self._initialized:
            self.initialize()
        for _ in range(max_iter):
            self.step()
        self.finished = True
        self._call_callbacks("finish")
        return self.provide_recommendation()


class SwarmConfig:
    """`Particle Swarm Optimization <https://en.wikipedia.org/wiki/Particle_swarm_optimization>`_
    settings. Calling the configuration with an objective function creates a :code:`Swarm`.

    Parameters
    ----------
    popsize: int
        number of particles of the swarm
    omega: float
        inertia weight applied to the previous velocity
    phip: float
        cognitive factor, weight of the pull toward the personal best
    phig: float
        social factor, weight of the pull toward the global best
    lower: float
        lower bound of the search box, for each coordinate
    upper: float
        upper bound of the search box, for each coordinate

    Note
    ----
    Initial velocities are drawn in [-(upper - lower), upper - lower], and are
    never clipped afterwards.
    """

    # pylint: disable=too-many-arguments
    def __init__(
        self,
        popsize: int = 10,
        omega: float = 0.7,
        phip: float = 1.5,
        phig: float = 1.5,
        lower: float = -5.0,
        upper: float = 5.0,
    ) -> None:
        if isinstance(popsize, bool) or int(popsize) != popsize or popsize < 1:
            raise errors.SwarmValueError(f"popsize must be a strictly positive integer, got {popsize}")
        values = dict(omega=omega, phip=phip, phig=phig, lower=lower, upper=upper)
        nonfinite = {x: y for x, y in values.items() if not math.isfinite(y)}
        if nonfinite:
            raise errors.SwarmValueError(f"Swarm settings must be finite, got {nonfinite}")
        if not lower < upper:
            raise errors.SwarmValueError(f"lower bound must be smaller than upper bound, got {lower} >= {upper}")
        self.popsize = int(popsize)
        self.omega = float(omega)
        self.phip = float(phip)
        self.phig = float(phig)
        self.lower = float(lower)
        self.upper = float(upper)
        diff = sstools.different_from_defaults(instance=self)
        params = ", ".join(f"{x}={y!r}" for x, y in sorted(diff.items()))
        self._name = f"{self.__class__.__name__}({params})"

    @property
    def max_speed(self) -> float:
        """float: bound of the initial velocity draws"""
        return self.upper - self.lower

    def config(self) -> tp.Dict[str, tp.Any]:
        return {x: getattr(self, x) for x in ["popsize", "omega", "phip", "phig", "lower", "upper"]}

    def __call__(
        self,
        objective: tp.Objective,
        dimension: int = 2,
        random_source: tp.Optional[rs.RandomSource] = None,
    ) -> Swarm:
        """Creates a swarm minimizing the objective with these settings"""
        return Swarm(objective, dimension=dimension, config=self, random_source=random_source)

    def __repr__(self) -> str:
        return self._name

    def set_name(self, name: str, register: bool = False) -> "SwarmConfig":
        """Set a new representation for the instance"""
        self._name = name
        if register:
            registry.register_name(name, self)
        return self

    def __eq__(self, other: tp.Any) -> tp.Any:
        if self.__class__ == other.__class__:
            return self.config() == other.config()
        return False


ClassicPSO = SwarmConfig().set_name("ClassicPSO", register=True)
SPSO2011 = SwarmConfig(
    omega=0.5 / math.log(2.0), phip=0.5 + math.log(2.0), phig=0.5 + math.log(2.0)
).set_name("SPSO2011", register=True)
