# Copyright 2020-2023  Ternaris.
# SPDX-License-Identifier: Apache-2.0
"""Message definition model.

A message type is described by a :py:class:`RosMsgDefinition` holding an
ordered list of :py:class:`FieldDefinition` entries. A list of message
definitions, primary type first, is a definition sequence.

"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple, Optional

from .errors import MalformedDefinition

if TYPE_CHECKING:
    from typing import Sequence

PRIMITIVE_TYPES = frozenset({
    'bool',
    'byte',
    'char',
    'int8',
    'uint8',
    'int16',
    'uint16',
    'int32',
    'uint32',
    'int64',
    'uint64',
    'float32',
    'float64',
    'string',
    'time',
    'duration',
})


class FieldDefinition(NamedTuple):
    """Field or constant of a message type."""

    type: str
    name: str
    is_constant: bool = False
    value: Optional[str] = None
    is_array: bool = False
    array_length: Optional[int] = None

    @property
    def typestr(self) -> str:
        """Type including array suffix."""
        if not self.is_array:
            return self.type
        return f'{self.type}[{"" if self.array_length is None else self.array_length}]'


class RosMsgDefinition(NamedTuple):
    """Message type definition."""

    name: str
    definitions: list[FieldDefinition]


def is_primitive(typename: str) -> bool:
    """Check if type is a ROS1 builtin type.

    Args:
        typename: Type name without array suffix.

    Returns:
        True if builtin.

    """
    return typename in PRIMITIVE_TYPES


def qualify(typename: str, package: str) -> str:
    """Get fully qualified message type name.

    Args:
        typename: Type name as written in a field.
        package: Package of the message type owning the field.

    Returns:
        Qualified type name.

    """
    if is_primitive(typename) or '/' in typename:
        return typename
    if typename == 'Header':
        return 'std_msgs/Header'
    return f'{package}/{typename}' if package else typename


def validate_field(field: FieldDefinition) -> None:
    """Validate field definition.

    Args:
        field: Field definition.

    Raises:
        MalformedDefinition: Field is not representable.

    """
    if not field.name or field.name.split() != [field.name]:
        raise MalformedDefinition(f'Field name {field.name!r} is empty or contains whitespace.')
    if '=' in field.name:
        raise MalformedDefinition(f'Field name {field.name!r} contains "=".')
    if field.is_constant and field.value is None:
        raise MalformedDefinition(f'Constant {field.name!r} has no value.')
    if not field.is_array and field.array_length is not None:
        raise MalformedDefinition(f'Field {field.name!r} has array length but is no array.')
    if field.is_array and field.array_length is not None and (
        isinstance(field.array_length, bool) or not isinstance(field.array_length, int) or
        field.array_length < 1
    ):
        raise MalformedDefinition(
            f'Array {field.name!r} has invalid length {field.array_length!r}.',
        )


def validate(sequence: Sequence[RosMsgDefinition]) -> None:
    """Validate definition sequence.

    The primary type name is not checked, all other types need a name.

    Args:
        sequence: Definition sequence, primary type first.

    Raises:
        MalformedDefinition: Sequence is not representable.

    """
    if not sequence:
        raise MalformedDefinition('Definition sequence is empty.')

    seen = set()
    for idx, msgdef in enumerate(sequence):
        if idx:
            if not msgdef.name:
                raise MalformedDefinition(f'Message definition at index {idx} has no name.')
            if msgdef.name in seen:
                raise MalformedDefinition(f'Message type {msgdef.name!r} is included twice.')
            seen.add(msgdef.name)
        for field in msgdef.definitions:
            validate_field(field)
