# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from .common import typing as typing
from .common import errors as errors
from . import functions as functions
from .optimization import swarm as optimizers  # busy namespace, likely to be simplified
from .optimization import callbacks as callbacks
from .optimization.swarm import Swarm as Swarm
from .optimization.swarm import SwarmConfig as SwarmConfig


__all__ = ["optimizers", "functions", "callbacks", "errors", "typing", "Swarm", "SwarmConfig"]


__version__ = "0.1.0"
