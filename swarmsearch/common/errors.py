# Copyright (c) Facebook, Inc. and its affiliates. All Rights Reserved.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

# base classes


class SwarmError(Exception):
    """Base class for error raised by swarmsearch"""


class SwarmWarning(Warning):
    pass


# errors
# pylint: disable=too-many-ancestors


class SwarmRuntimeError(RuntimeError, SwarmError):
    """Runtime error raised by swarmsearch"""


class SwarmTypeError(TypeError, SwarmError):
    """Type error raised by swarmsearch"""


class SwarmValueError(ValueError, SwarmError):
    """Value error raised by swarmsearch"""


# warnings


class SwarmRuntimeWarning(RuntimeWarning, SwarmWarning):
    """Runtime warning raised by swarmsearch"""


class InefficientSettingsWarning(SwarmRuntimeWarning):
    """Optimization settings are not optimal for the swarm"""
