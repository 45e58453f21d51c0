"""Example: Rename message type in concatenated definition.

Message types sometimes move between packages. This example rewrites a
concatenated message definition so that all references to the old type
name use the new one, and returns the new md5sum for the connection.

"""

from __future__ import annotations

from rosmsgdef import FieldDefinition, RosMsgDefinition, decode, encode, md5sum
from rosmsgdef.definition import qualify


def rename_message_type(
    msgtype: str,
    msgdef: str,
    old: str,
    new: str,
) -> tuple[str, str]:
    """Rename message type in concatenated definition.

    Args:
        msgtype: Primary message type name.
        msgdef: Concatenated message definition.
        old: Qualified type name to replace.
        new: Qualified replacement type name.

    Returns:
        Message definition and md5sum.

    """
    sequence = []
    for idx, item in enumerate(decode(msgdef)):
        owner = msgtype if idx == 0 else item.name
        package = owner.rsplit('/', 1)[0] if '/' in owner else ''
        fields = [
            field._replace(type=new) if not field.is_constant and
            qualify(field.type, package) == old else field
            for field in item.definitions
        ]
        sequence.append(RosMsgDefinition(new if item.name == old else item.name, fields))

    return encode(sequence), md5sum(msgtype, sequence)


if __name__ == '__main__':
    text, digest = rename_message_type(
        'pkg/Main',
        encode([
            RosMsgDefinition('', [FieldDefinition('Speed', 'speed')]),
            RosMsgDefinition('pkg/Speed', [FieldDefinition('float64', 'value')]),
        ]),
        'pkg/Speed',
        'custom_msgs/Speed',
    )
    print(text)  # noqa: T201
    print(digest)  # noqa: T201
