# Copyright 2020-2023  Ternaris.
# SPDX-License-Identifier: Apache-2.0
"""CLI tool for concatenated message definitions."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from .datatypes import dump_datatypes, get_datatypes, load_datatypes
from .digest import md5sum
from .errors import DefinitionError
from .flatten import DictResolver, flatten
from .text import decode, encode

if TYPE_CHECKING:
    from typing import Callable, Optional, Sequence


def pathtype(exists: bool = True) -> Callable[[str], Path]:
    """Path argument for argparse.

    Args:
        exists: Path should exists in filesystem.

    Returns:
        Argparse type function.

    """

    def topath(pathname: str) -> Path:
        path = Path(pathname)
        if exists != path.exists():
            raise argparse.ArgumentTypeError(
                f'{path} should {"exist" if exists else "not exist"}.',
            )
        return path

    return topath


def read_text(path: Path) -> str:
    """Read definition text file."""
    try:
        return path.read_text()
    except (OSError, UnicodeDecodeError) as err:
        raise DefinitionError(f'Could not read {path}: {err}.') from None


def cmd_encode(src: Path, typename: str) -> None:
    """Write concatenated definition of type from datatypes file."""
    sequence = flatten(typename, DictResolver(load_datatypes(src)))
    sys.stdout.write(encode(sequence))


def cmd_decode(src: Path, typename: str) -> None:
    """Write datatypes of concatenated definition text file."""
    dump_datatypes(get_datatypes(typename, decode(read_text(src))), sys.stdout)


def cmd_md5sum(src: Path, typename: str) -> None:
    """Write md5sum of concatenated definition text file."""
    print(md5sum(typename, decode(read_text(src))))  # noqa: T201


COMMANDS = {
    'encode': cmd_encode,
    'decode': cmd_decode,
    'md5sum': cmd_md5sum,
}


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Parse cli arguments and run command."""
    parser = argparse.ArgumentParser(description='Convert ROS1 message definitions.')
    parser.add_argument(
        '-v',
        '--verbose',
        action='store_true',
        help='log debug messages',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    for name, helptext, srchelp in [
        ('encode', 'flatten type from datatypes into definition text', 'datatypes YAML file'),
        ('decode', 'parse definition text into datatypes YAML', 'definition text file'),
        ('md5sum', 'calculate md5sum of definition text', 'definition text file'),
    ]:
        subparser = subparsers.add_parser(name, help=helptext)
        subparser.add_argument('src', type=pathtype(), help=srchelp)
        subparser.add_argument('typename', help='primary message type name')

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        COMMANDS[args.command](args.src, args.typename)
    except DefinitionError as err:
        print(f'ERROR: {err}')  # noqa: T201
        sys.exit(1)


if __name__ == '__main__':
    main()
