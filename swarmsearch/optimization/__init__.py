# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from .swarm import Swarm as Swarm
from .swarm import SwarmConfig as SwarmConfig
from .swarm import Particle as Particle
from .swarm import Recommendation as Recommendation
from .swarm import registry as registry
from .randomsource import NumpyRandomSource as NumpyRandomSource
from .randomsource import ScriptedRandomSource as ScriptedRandomSource
from . import callbacks as callbacks
