# Copyright 2020-2023  Ternaris.
# SPDX-License-Identifier: Apache-2.0
"""Message definition errors."""

from __future__ import annotations


class DefinitionError(Exception):
    """Message definition error."""


class MalformedDefinition(DefinitionError):
    """Invalid message definition."""


class ParseError(DefinitionError):
    """Definition text parsing failed."""


class CyclicDependency(DefinitionError):
    """Message type references itself."""


class UnknownType(DefinitionError):
    """Message type could not be resolved."""
