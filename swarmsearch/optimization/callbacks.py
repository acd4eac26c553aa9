# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import sys
import json
import logging
import datetime
import warnings
from pathlib import Path
import numpy as np
import swarmsearch.common.typing as tp
from . import swarm as sw

global_logger = logging.getLogger(__name__)


def _format_point(point: np.ndarray, precision: int) -> str:
    return "(" + ", ".join(f"{float(c):.{precision}f}" for c in point) + ")"


def _is_checkpoint(iteration: int, interval: int) -> bool:
    return iteration == 1 or iteration % interval == 0


# -------------------------------------------------------------------------------------


class SwarmPrinter:
    """Printer to register as callback on the "initialize", "step" and "finish"
    checkpoints of a swarm, for printing the progress of the run.

    Parameters
    ----------
    print_interval: int
        number of iterations between two progress lines (the first iteration is always printed)
    precision: int
        number of decimals of positions and of the progress losses
    final_precision: int
        number of decimals of the final loss
    stream: file-like
        where to print (defaults to sys.stdout)

    Example
    -------

    .. code-block:: python

        printer = SwarmPrinter()
        for name in ["initialize", "step", "finish"]:
            swarm.register_callback(name, printer)
    """

    def __init__(
        self,
        print_interval: int = 10,
        precision: int = 6,
        final_precision: int = 8,
        stream: tp.Optional[tp.TextIO] = None,
    ) -> None:
        assert print_interval > 0
        self._print_interval = int(print_interval)
        self._precision = precision
        self._final_precision = final_precision
        self._stream = stream

    def _print(self, text: str) -> None:
        print(text, file=sys.stdout if self._stream is None else self._stream)

    def __call__(self, swarm: sw.Swarm, *args: tp.Any, **kwargs: tp.Any) -> None:
        iteration = swarm.num_iterations
        if swarm.finished:
            self._print(f"\n=== Final result after {iteration} iterations ===")
            self._print(f"Best fitness = {swarm.best_loss:.{self._final_precision}f}")
            self._print(f"Position: {_format_point(swarm.best_position, self._precision)}")
        elif not iteration:
            self._print(f"=== Initial positions of {len(swarm.particles)} particles ===")
            for k, particle in enumerate(swarm.particles):
                self._print(f"Particle {k + 1:2d}: {_format_point(particle.position, self._precision)}")
            self._print("\n" + "=" * 55)
        elif _is_checkpoint(iteration, self._print_interval):
            self._print(
                f"Iter {iteration:4d} | Best fitness: {swarm.best_loss:12.{self._precision}f}"
                f" | Best pos: {_format_point(swarm.best_position, self._precision)}"
            )


# -------------------------------------------------------------------------------------


class SwarmLogger:
    """Logger to register as callback on the checkpoints of a swarm, for logging
    the best point regularly.

    Parameters
    ----------
    logger:
        given logger that callback will use to log
    log_level:
        log level that logger will write to
    log_interval: int
        number of iterations between two logs (the first iteration is always logged)
    """

    def __init__(
        self,
        *,
        logger: logging.Logger = global_logger,
        log_level: int = logging.INFO,
        log_interval: int = 10,
    ) -> None:
        assert log_interval > 0
        self._logger = logger
        self._log_level = log_level
        self._log_interval = int(log_interval)

    def __call__(self, swarm: sw.Swarm, *args: tp.Any, **kwargs: tp.Any) -> None:
        iteration = swarm.num_iterations
        if swarm.finished:
            self._logger.log(
                self._log_level,
                "Finished after %s iterations and %s evaluations, best loss is %s at %s",
                iteration,
                swarm.num_evaluations,
                swarm.best_loss,
                swarm.best_position.tolist(),
            )
        elif not iteration:
            self._logger.log(
                self._log_level,
                "Initialized %s particles, best loss is %s at %s",
                len(swarm.particles),
                swarm.best_loss,
                swarm.best_position.tolist(),
            )
        elif _is_checkpoint(iteration, self._log_interval):
            self._logger.log(
                self._log_level,
                "After %s iterations, best loss is %s at %s",
                iteration,
                swarm.best_loss,
                swarm.best_position.tolist(),
            )


# -------------------------------------------------------------------------------------


class ParametersLogger:
    """Logs the global best and run information into a file, as one json line
    per checkpoint of the swarm.

    Parameters
    ----------
    filepath: str or pathlib.Path
        the path to dump data to
    append: bool
        whether to append the file (otherwise it replaces it)

    Example
    -------

    .. code-block:: python

        logger = ParametersLogger(filepath)
        swarm.register_callback("step", logger)
        swarm.minimize()
        list_of_dict_of_data = logger.load()

    Note
    ----
    Arrays are converted to lists
    """

    def __init__(self, filepath: tp.PathLike, append: bool = True) -> None:
        self._session = datetime.datetime.now().strftime("%y-%m-%d %H:%M:%S")
        self._filepath = Path(filepath)
        if self._filepath.exists() and not append:
            self._filepath.unlink()
        self._filepath.parent.mkdir(exist_ok=True, parents=True)

    def __call__(self, swarm: sw.Swarm, *args: tp.Any, **kwargs: tp.Any) -> None:
        data: tp.Dict[str, tp.Any] = {
            "#swarm": repr(swarm.config),
            "#session": self._session,
            "#iteration": swarm.num_iterations,
            "#num-evaluations": swarm.num_evaluations,
            "#finished": swarm.finished,
            "#loss": swarm.best_loss,
            "#position": swarm.best_position.tolist(),
        }
        data.update({"#config#" + x: y for x, y in swarm.config.config().items()})
        try:  # a logging failure must not stop the run
            with self._filepath.open("a") as f:
                f.write(json.dumps(data) + "\n")
        except Exception as e:  # pylint: disable=broad-except
            warnings.warn(f"Failing to json data: {e}")

    def load(self) -> tp.List[tp.Dict[str, tp.Any]]:
        """Loads data from the log file"""
        data: tp.List[tp.Dict[str, tp.Any]] = []
        if self._filepath.exists():
            with self._filepath.open("r") as f:
                for line in f.readlines():
                    data.append(json.loads(line))
        return data

    def load_flattened(self) -> tp.List[tp.Dict[str, tp.Any]]:
        """Loads data from the log file, and splits lists (positions) into one key per coordinate,
        named list_name#index
        """
        flat_data: tp.List[tp.Dict[str, tp.Any]] = []
        for element in self.load():
            list_keys = {key for key, val in element.items() if isinstance(val, list)}
            flat_data.append({key: val for key, val in element.items() if key not in list_keys})
            for key in list_keys:
                for k, value in enumerate(element[key]):
                    flat_data[-1][f"{key}#{k}"] = value
        return flat_data
