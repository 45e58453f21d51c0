# Copyright 2020-2023  Ternaris.
# SPDX-License-Identifier: Apache-2.0
"""ROS1 concatenated message definitions.

Converts between message definition sequences and the concatenated
message definition text used in rosbag1 connection records and TCPROS
connection headers.

"""

from .datatypes import get_datatypes
from .definition import FieldDefinition, RosMsgDefinition, validate
from .digest import md5sum
from .errors import (
    CyclicDependency,
    DefinitionError,
    MalformedDefinition,
    ParseError,
    UnknownType,
)
from .flatten import DictResolver, Resolver, flatten
from .text import decode, encode

__all__ = [
    'CyclicDependency',
    'DefinitionError',
    'DictResolver',
    'FieldDefinition',
    'MalformedDefinition',
    'ParseError',
    'Resolver',
    'RosMsgDefinition',
    'UnknownType',
    'decode',
    'encode',
    'flatten',
    'get_datatypes',
    'md5sum',
    'validate',
]
