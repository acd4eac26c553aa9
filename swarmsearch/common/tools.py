# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import inspect
import typing as tp


def different_from_defaults(*, instance: tp.Any) -> tp.Dict[str, tp.Any]:
    """Provides the public attributes of the instance which differ from the default
    arguments of its class constructor

    Parameters
    ----------
    instance: object
        the object to inspect, with one attribute per constructor argument

    Note
    ----
    This is convenient for short repr of configuration objects
    """
    defaults = {
        x: y.default
        for x, y in inspect.signature(instance.__class__.__init__).parameters.items()
        if x not in ["self", "__class__"]
    }
    diff = set(defaults.keys()).symmetric_difference(instance.__dict__.keys())
    if diff:  # this is to help during development
        raise RuntimeError(f"Mismatch between attributes and arguments of {instance}: {diff}")
    return {x: instance.__dict__[x] for x, y in defaults.items() if y != instance.__dict__[x] and not x.startswith("_")}
