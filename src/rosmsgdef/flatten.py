# Copyright 2020-2023  Ternaris.
# SPDX-License-Identifier: Apache-2.0
"""Dependency flattening of message types."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from .definition import RosMsgDefinition, is_primitive, qualify
from .errors import CyclicDependency, UnknownType

if TYPE_CHECKING:
    from typing import Iterator, Mapping, Sequence

    from .definition import FieldDefinition

logger = logging.getLogger(__name__)


class Resolver(Protocol):
    """Message type resolver."""

    def resolve(self, typename: str) -> tuple[Sequence[FieldDefinition], Sequence[str]]:
        """Get fields and referenced message types of a message type."""
        raise NotImplementedError  # pragma: no cover


class DictResolver:
    """Resolver for message types held in a dictionary."""

    def __init__(self, datatypes: Mapping[str, Sequence[FieldDefinition]]):
        """Initialize.

        Args:
            datatypes: Field definitions by qualified message type name.

        """
        self.datatypes = datatypes

    def resolve(self, typename: str) -> tuple[Sequence[FieldDefinition], Sequence[str]]:
        """Get fields and referenced message types of a message type.

        Args:
            typename: Qualified message type name.

        Returns:
            Fields and qualified names of referenced message types.

        Raises:
            UnknownType: Type is not known.

        """
        try:
            fields = self.datatypes[typename]
        except KeyError:
            raise UnknownType(f'Message type {typename!r} is unknown.') from None

        package = typename.rsplit('/', 1)[0] if '/' in typename else ''
        refs: list[str] = []
        for field in fields:
            if field.is_constant or is_primitive(field.type):
                continue
            ref = qualify(field.type, package)
            if ref not in self.datatypes:
                raise UnknownType(f'Message type {ref!r} used in {typename!r} is unknown.')
            if ref not in refs:
                refs.append(ref)
        return fields, refs


def flatten(typename: str, resolver: Resolver) -> list[RosMsgDefinition]:
    """Build definition sequence of message type.

    The primary type is followed by each referenced message type in order of
    first use. Traversal is depth first, every type is included once.

    Args:
        typename: Primary message type name.
        resolver: Resolver for message types.

    Returns:
        Definition sequence, primary type first with empty name.

    Raises:
        CyclicDependency: A message type references itself.

    """
    fields, refs = resolver.resolve(typename)
    sequence = [RosMsgDefinition('', list(fields))]
    done = {typename}
    path = [typename]
    active = {typename}
    stack: list[Iterator[str]] = [iter(refs)]

    while stack:
        ref = next(stack[-1], None)
        if ref is None:
            stack.pop()
            active.discard(path.pop())
            continue

        if is_primitive(ref):
            continue
        if ref in active:
            cycle = ' -> '.join([*path[path.index(ref):], ref])
            raise CyclicDependency(f'Message type {ref!r} references itself: {cycle}.')
        if ref in done:
            continue

        logger.debug('Resolving %r for %r.', ref, path[-1])
        fields, subrefs = resolver.resolve(ref)
        sequence.append(RosMsgDefinition(ref, list(fields)))
        done.add(ref)
        active.add(ref)
        path.append(ref)
        stack.append(iter(subrefs))

    return sequence
