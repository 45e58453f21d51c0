# Copyright 2020-2023  Ternaris.
# SPDX-License-Identifier: Apache-2.0
"""Concatenated message definition text.

ROS1 stores the definition of a message type together with the definitions
of all message types it references in a single text. The primary type comes
first without a header, every other type follows a separator line and a
``MSG: <name>`` header line. Within a type, constants are listed before
fields, separated by one blank line.

"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from .definition import FieldDefinition, RosMsgDefinition, validate
from .errors import ParseError

if TYPE_CHECKING:
    from typing import Sequence

logger = logging.getLogger(__name__)

SEPARATOR = '=' * 80
HEADER = 'MSG: '

ARRAY_RE = re.compile(r'^(?P<base>[^\[\]]+)\[(?P<length>\d*)\]$')


def encode(sequence: Sequence[RosMsgDefinition]) -> str:
    """Generate concatenated message definition text.

    Args:
        sequence: Definition sequence, primary type first.

    Returns:
        Message definition text.

    Raises:
        MalformedDefinition: Sequence is not representable.

    """
    validate(sequence)

    lines: list[str] = []
    for idx, msgdef in enumerate(sequence):
        if idx:
            lines.append(f'\n{SEPARATOR}\n')
            lines.append(f'{HEADER}{msgdef.name}\n')

        constants = [x for x in msgdef.definitions if x.is_constant]
        variables = [x for x in msgdef.definitions if not x.is_constant]

        for field in constants:
            lines.append(f'{field.type} {field.name} = {field.value}\n')

        if variables:
            lines.append('\n')
            for field in variables:
                lines.append(f'{field.typestr} {field.name}\n')

    return ''.join(lines)


def parse_constant(line: str, lineno: int) -> FieldDefinition:
    """Parse constant line.

    Args:
        line: Line text.
        lineno: Line number for error messages.

    Returns:
        Constant definition.

    Raises:
        ParseError: Line is not a constant.

    """
    if '=' not in line:
        raise ParseError(f'Line {lineno}: expected constant, got {line!r}.')

    left, value = line.split('=', 1)
    try:
        typ, name = left.split()
    except ValueError:
        raise ParseError(f'Line {lineno}: expected "type name = value", got {line!r}.') from None

    if value.startswith(' '):
        value = value[1:]
    return FieldDefinition(typ, name, is_constant=True, value=value)


def parse_variable(line: str, lineno: int) -> FieldDefinition:
    """Parse field line.

    Args:
        line: Line text.
        lineno: Line number for error messages.

    Returns:
        Field definition.

    Raises:
        ParseError: Line is not a field.

    """
    if not line.strip():
        raise ParseError(f'Line {lineno}: unexpected blank line.')
    if '=' in line:
        raise ParseError(f'Line {lineno}: constant {line!r} after fields.')

    try:
        typ, name = line.split()
    except ValueError:
        raise ParseError(f'Line {lineno}: expected "type name", got {line!r}.') from None

    if '[' not in typ and ']' not in typ:
        return FieldDefinition(typ, name)

    if not (match := ARRAY_RE.match(typ)):
        raise ParseError(f'Line {lineno}: invalid array type {typ!r}.')
    length = match.group('length')
    if length and int(length) < 1:
        raise ParseError(f'Line {lineno}: invalid array length in {typ!r}.')
    return FieldDefinition(
        match.group('base'),
        name,
        is_array=True,
        array_length=int(length) if length else None,
    )


def parse_body(name: str, lines: list[str], offset: int) -> RosMsgDefinition:
    """Parse definition body of one message type.

    Args:
        name: Message type name.
        lines: Body lines.
        offset: Line number of first body line.

    Returns:
        Message definition.

    """
    if '' not in lines and not any('=' in x for x in lines):
        constlines: list[str] = []
        varlines = lines
        varoffset = offset
    else:
        split = lines.index('') if '' in lines else len(lines)
        constlines = lines[:split]
        varlines = lines[split + 1:]
        varoffset = offset + split + 1

    definitions = [parse_constant(x, offset + i) for i, x in enumerate(constlines)]
    definitions.extend(parse_variable(x, varoffset + i) for i, x in enumerate(varlines))
    return RosMsgDefinition(name, definitions)


def decode(text: str) -> list[RosMsgDefinition]:
    """Parse concatenated message definition text.

    Args:
        text: Message definition text.

    Returns:
        Definition sequence, primary type first with empty name.

    Raises:
        ParseError: Text does not follow the message definition grammar.

    """
    lines = text.split('\n')
    segments: list[tuple[int, list[str]]] = [(1, [])]
    for lineno, line in enumerate(lines, start=1):
        if line == SEPARATOR:
            segments.append((lineno + 1, []))
        else:
            segments[-1][1].append(line)

    sequence = []
    for idx, (start, body) in enumerate(segments):
        name = ''
        if idx:
            if not body or not body[0].startswith(HEADER):
                raise ParseError(f'Line {start}: expected "{HEADER}<name>" after separator.')
            name = body[0][len(HEADER):]
            body = body[1:]
            start += 1

        if body and body[-1] == '':
            body = body[:-1]
        sequence.append(parse_body(name, body, start))

    logger.debug('Decoded %d message definitions.', len(sequence))
    return sequence
