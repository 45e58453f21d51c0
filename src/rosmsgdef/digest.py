# Copyright 2020-2023  Ternaris.
# SPDX-License-Identifier: Apache-2.0
"""ROS1 message definition md5sum."""

from __future__ import annotations

from hashlib import md5
from typing import TYPE_CHECKING

from .datatypes import get_datatypes
from .definition import is_primitive, qualify
from .errors import CyclicDependency, UnknownType

if TYPE_CHECKING:
    from typing import Sequence

    from .definition import RosMsgDefinition


def md5sum(typename: str, sequence: Sequence[RosMsgDefinition]) -> str:
    """Calculate md5sum of message type.

    Constants are hashed as ``type name=value``, fields of builtin types as
    ``type name`` and fields of message types as ``md5sum name``, where the
    md5sum of the referenced type replaces its name and array suffix.

    Args:
        typename: Primary message type name.
        sequence: Definition sequence, primary type first.

    Returns:
        Hex digest.

    Raises:
        UnknownType: Referenced type is not part of the sequence.
        CyclicDependency: A message type references itself.

    """
    datatypes = get_datatypes(typename, sequence)
    cache: dict[str, str] = {}

    def gethash(name: str, path: tuple[str, ...]) -> str:
        if name in cache:
            return cache[name]
        if name in path:
            raise CyclicDependency(f'Message type {name!r} references itself.')
        try:
            fields = datatypes[name]
        except KeyError:
            raise UnknownType(f'Message type {name!r} is not part of the definition.') from None

        package = name.rsplit('/', 1)[0] if '/' in name else ''
        lines = [f'{x.type} {x.name}={x.value}' for x in fields if x.is_constant]
        for field in fields:
            if field.is_constant:
                continue
            if is_primitive(field.type):
                lines.append(f'{field.typestr} {field.name}')
            else:
                subhash = gethash(qualify(field.type, package), (*path, name))
                lines.append(f'{subhash} {field.name}')

        cache[name] = md5('\n'.join(lines).encode()).hexdigest()
        return cache[name]

    return gethash(typename, ())
