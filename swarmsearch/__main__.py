# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import argparse
import logging
import swarmsearch.common.typing as tp
from .functions import corefuncs
from .optimization import swarm as sw
from .optimization import callbacks
from .optimization.randomsource import NumpyRandomSource


logger = logging.getLogger(__name__)
_OVERRIDES = ["popsize", "omega", "phip", "phig", "lower", "upper"]


# pylint: disable=too-many-arguments
def make_swarm(
    function: str = "ackley",
    config: str = "ClassicPSO",
    dimension: int = 2,
    seed: tp.Optional[int] = None,
    print_interval: int = 10,
    log_file: tp.Optional[tp.PathLike] = None,
    verbose: bool = False,
    **overrides: tp.Any,
) -> sw.Swarm:
    """Creates a swarm on a registered function, with its reporters registered

    Parameters
    ----------
    function: str
        name of an objective function registered in swarmsearch.functions.corefuncs
    config: str
        name of a swarm configuration registered in swarmsearch.optimization.swarm
    overrides:
        settings replacing those of the named configuration (popsize, omega, phip, phig, lower, upper)
    """
    settings = sw.registry[config].config()
    settings.update({x: y for x, y in overrides.items() if y is not None})
    swarm = sw.SwarmConfig(**settings)(
        corefuncs.registry[function], dimension=dimension, random_source=NumpyRandomSource(seed)
    )
    logger.info("Running %r on %s", swarm, function)
    hooks: tp.List[tp.Any] = [callbacks.SwarmPrinter(print_interval=print_interval)]
    if verbose:
        hooks.append(callbacks.SwarmLogger(log_interval=print_interval))
    if log_file is not None:
        hooks.append(callbacks.ParametersLogger(log_file))
    for hook in hooks:
        for name in sw.CALLBACK_NAMES:
            swarm.register_callback(name, hook)
    return swarm


def launch(max_iter: int = 200, **kwargs: tp.Any) -> sw.Recommendation:
    """Runs a swarm on a registered function, printing its progress
    (see :code:`make_swarm` for the other arguments)
    """
    return make_swarm(**kwargs).minimize(max_iter=max_iter)


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Minimize a benchmark function with a particle swarm.")
    parser.add_argument(
        "--function",
        type=str,
        default="ackley",
        choices=sorted(corefuncs.registry),
        help="Name of the objective function to minimize",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="ClassicPSO",
        choices=sorted(sw.registry),
        help="Name of the swarm configuration to start from",
    )
    parser.add_argument("--popsize", type=int, default=None, help="Number of particles")
    parser.add_argument("--omega", type=float, default=None, help="Inertia weight")
    parser.add_argument("--phip", type=float, default=None, help="Cognitive factor")
    parser.add_argument("--phig", type=float, default=None, help="Social factor")
    parser.add_argument("--lower", type=float, default=None, help="Lower bound of each coordinate")
    parser.add_argument("--upper", type=float, default=None, help="Upper bound of each coordinate")
    parser.add_argument("--dimension", type=int, default=2, help="Dimension of the search space")
    parser.add_argument("--max_iter", type=int, default=200, help="Number of iterations")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed of the random generator (defaults to a clock based seed)",
    )
    parser.add_argument(
        "--print_interval", type=int, default=10, help="Number of iterations between progress lines"
    )
    parser.add_argument(
        "--log_file", type=str, default=None, help="Path of a file where to append json lines of the run"
    )
    parser.add_argument("--verbose", action="store_true", help="Log the run at INFO level")
    return parser


def main(argv: tp.Optional[tp.List[str]] = None) -> None:
    parser = get_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    if args.max_iter < 0:
        parser.error(f"--max_iter must be non-negative (got {args.max_iter})")
    if args.print_interval < 1:
        parser.error(f"--print_interval must be positive (got {args.print_interval})")
    overrides = {x: getattr(args, x) for x in _OVERRIDES}
    # invalid settings are usage errors, errors raised by the run propagate
    try:
        swarm = make_swarm(
            function=args.function,
            config=args.config,
            dimension=args.dimension,
            seed=args.seed,
            print_interval=args.print_interval,
            log_file=args.log_file,
            verbose=args.verbose,
            **overrides,
        )
    except ValueError as e:
        parser.error(str(e))
    swarm.minimize(max_iter=args.max_iter)


if __name__ == "__main__":
    main()
