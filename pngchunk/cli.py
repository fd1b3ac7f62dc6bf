import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from pngchunk import commands
from pngchunk.enum import Compliant
from pngchunk.exceptions import ChunkException


logger = logging.getLogger(__name__)


def _read_png(path: Path) -> bytes:
    if path.suffix.lower() != '.png':
        raise ValueError('This program takes only PNG files')

    return path.read_bytes()


def cmd_encode(args) -> int:
    data = _read_png(args.png_file)
    output = args.output or args.png_file

    output.write_bytes(commands.encode(data, args.chunk_type, args.message.encode('utf-8'), compliant=args.compliant))
    print('Message encoded successfully!')

    return 0


def cmd_decode(args) -> int:
    message = commands.decode(_read_png(args.png_file), args.chunk_type, compliant=args.compliant)

    if message is None:
        print('No message hidden in this image with this chunk type')
    else:
        print(f'Message: {message!r}')

    return 0


def cmd_remove(args) -> int:
    data = _read_png(args.png_file)
    output = args.output or args.png_file

    output.write_bytes(commands.remove(data, args.chunk_type, compliant=args.compliant))
    print('Message has been removed successfully!')

    return 0


def cmd_print(args) -> int:
    for idx, line in enumerate(commands.inspect(_read_png(args.png_file), compliant=args.compliant)):
        print(f'[{idx:02d}] {line}')

    return 0


def cmd_verify(args) -> int:
    if commands.verify(_read_png(args.png_file)):
        print('File is a valid PNG')
    else:
        print('File is not a valid PNG')

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='pngchunk', description='A tool for working with the chunks of PNG files')
    parser.add_argument('--debug', action='store_true', help='verbose logging')
    parser.add_argument('--strict', action='store_const', dest='compliant', const=Compliant.RESERVED | Compliant.ENUM,
                        default=Compliant.NONE, help='reject chunk types with the reserved bit set and unknown header values')

    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('encode', help='hide a message into a new chunk')
    p.add_argument('png_file', type=Path)
    p.add_argument('chunk_type')
    p.add_argument('message')
    p.add_argument('-o', '--output', type=Path, help='write the result here instead of overwriting the input')
    p.set_defaults(func=cmd_encode)

    p = sub.add_parser('decode', help='show the message in the first chunk of the given type')
    p.add_argument('png_file', type=Path)
    p.add_argument('chunk_type')
    p.set_defaults(func=cmd_decode)

    p = sub.add_parser('remove', help='remove the first chunk of the given type')
    p.add_argument('png_file', type=Path)
    p.add_argument('chunk_type')
    p.add_argument('-o', '--output', type=Path, help='write the result here instead of overwriting the input')
    p.set_defaults(func=cmd_remove)

    p = sub.add_parser('print', help='describe all the chunks')
    p.add_argument('png_file', type=Path)
    p.set_defaults(func=cmd_print)

    p = sub.add_parser('verify', help='check the file is well formed and ends with IEND')
    p.add_argument('png_file', type=Path)
    p.set_defaults(func=cmd_verify)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug or 'DEBUG' in os.environ else logging.INFO)

    try:
        return args.func(args)
    except (ChunkException, ValueError, OSError) as e:
        print(f'An error occurred: {e}', file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
