# Copyright 2020-2023  Ternaris.
# SPDX-License-Identifier: Apache-2.0
"""Datatypes, message field definitions by type name."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .definition import FieldDefinition, validate_field
from .errors import DefinitionError, MalformedDefinition

if TYPE_CHECKING:
    from pathlib import Path
    from typing import Any, Sequence, TextIO

    from .definition import RosMsgDefinition

    Datatypes = dict[str, list[FieldDefinition]]

FIELD_KEYS = frozenset(FieldDefinition._fields)


def get_datatypes(typename: str, sequence: Sequence[RosMsgDefinition]) -> Datatypes:
    """Get field definitions by type name from definition sequence.

    The primary type usually has no name in the sequence, it is stored
    under the given type name.

    Args:
        typename: Primary message type name.
        sequence: Definition sequence, primary type first.

    Returns:
        Field definitions by type name.

    """
    datatypes: Datatypes = {}
    for idx, msgdef in enumerate(sequence):
        if idx == 0:
            datatypes[typename] = list(msgdef.definitions)
        elif msgdef.name:
            datatypes[msgdef.name] = list(msgdef.definitions)
    return datatypes


def field_from_dict(dct: dict[str, Any]) -> FieldDefinition:
    """Create field definition from dictionary.

    Args:
        dct: Field dictionary.

    Returns:
        Field definition.

    Raises:
        MalformedDefinition: Dictionary does not describe a field.

    """
    if not isinstance(dct, dict):
        raise MalformedDefinition(f'Field must be a mapping, got {dct!r}.')
    if unknown := set(dct) - FIELD_KEYS:
        raise MalformedDefinition(f'Unknown field keys {sorted(unknown)!r}.')
    if not isinstance(dct.get('type'), str) or not isinstance(dct.get('name'), str):
        raise MalformedDefinition(f'Field needs string "type" and "name", got {dct!r}.')

    for key in ('is_constant', 'is_array'):
        if not isinstance(dct.get(key, False), bool):
            raise MalformedDefinition(f'Field key {key!r} must be a boolean, got {dct[key]!r}.')

    value = dct.get('value')
    field = FieldDefinition(
        type=dct['type'],
        name=dct['name'],
        is_constant=dct.get('is_constant', False),
        value=None if value is None else str(value),
        is_array=dct.get('is_array', False),
        array_length=dct.get('array_length'),
    )
    validate_field(field)
    return field


def field_to_dict(field: FieldDefinition) -> dict[str, Any]:
    """Convert field definition to dictionary, omitting defaults."""
    dct: dict[str, Any] = {'type': field.type, 'name': field.name}
    if field.is_constant:
        dct['is_constant'] = True
        dct['value'] = field.value
    if field.is_array:
        dct['is_array'] = True
        if field.array_length is not None:
            dct['array_length'] = field.array_length
    return dct


def load_datatypes(path: Path) -> Datatypes:
    """Load datatypes from YAML file.

    Args:
        path: Filesystem path to YAML file.

    Returns:
        Field definitions by type name.

    Raises:
        DefinitionError: File not readable.
        MalformedDefinition: File content is not a datatypes mapping.

    """
    try:
        yaml = YAML(typ='safe')
        dct = yaml.load(path.read_text())
    except (OSError, UnicodeDecodeError) as err:
        raise DefinitionError(f'Could not read datatypes at {path}: {err}.') from None
    except YAMLError as exc:
        raise DefinitionError(f'Could not load YAML from {path}: {exc}') from None

    if not isinstance(dct, dict):
        raise MalformedDefinition(f'Datatypes in {path} must be a mapping of type names.')

    datatypes: Datatypes = {}
    for typename, fields in dct.items():
        if not isinstance(fields, list):
            raise MalformedDefinition(f'Fields of {typename!r} must be a list.')
        datatypes[str(typename)] = [field_from_dict(x) for x in fields]
    return datatypes


def dump_datatypes(datatypes: Datatypes, stream: TextIO) -> None:
    """Write datatypes as YAML.

    Args:
        datatypes: Field definitions by type name.
        stream: Output stream.

    """
    yaml = YAML(typ='safe')
    yaml.default_flow_style = False
    yaml.dump(
        {name: [field_to_dict(x) for x in fields] for name, fields in datatypes.items()},
        stream,
    )
