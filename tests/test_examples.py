# Copyright 2020-2023  Ternaris.
# SPDX-License-Identifier: Apache-2.0
"""Documentation example tests."""

from __future__ import annotations

import importlib.util
from pathlib import Path

from rosmsgdef import FieldDefinition, RosMsgDefinition, decode, encode, md5sum

EXAMPLES = Path(__file__).parent.parent / 'docs' / 'examples'


def load_example(name: str):  # type: ignore[no-untyped-def]
    """Import example script as module."""
    spec = importlib.util.spec_from_file_location(name, EXAMPLES / f'{name}.py')
    assert spec
    assert spec.loader
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_rename_message_type() -> None:
    """Test renaming types referenced from qualified and unqualified owners."""
    rename_message_type = load_example('rename_message_type').rename_message_type

    text, digest = rename_message_type(
        'pkg/Main',
        encode([
            RosMsgDefinition('', [FieldDefinition('Speed', 'speed')]),
            RosMsgDefinition('pkg/Speed', [FieldDefinition('float64', 'value')]),
        ]),
        'pkg/Speed',
        'custom_msgs/Speed',
    )
    expected = [
        RosMsgDefinition('', [FieldDefinition('custom_msgs/Speed', 'speed')]),
        RosMsgDefinition('custom_msgs/Speed', [FieldDefinition('float64', 'value')]),
    ]
    assert decode(text) == expected
    assert digest == md5sum('pkg/Main', expected)

    text, _ = rename_message_type(
        'Main',
        encode([
            RosMsgDefinition('', [FieldDefinition('Speed', 'speed')]),
            RosMsgDefinition('Speed', [FieldDefinition('float64', 'value')]),
        ]),
        'Speed',
        'custom_msgs/Speed',
    )
    assert decode(text) == [
        RosMsgDefinition('', [FieldDefinition('custom_msgs/Speed', 'speed')]),
        RosMsgDefinition('custom_msgs/Speed', [FieldDefinition('float64', 'value')]),
    ]
