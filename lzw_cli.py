"""Command-line front end for the LZW codec."""

import argparse
import contextlib
import logging
import sys

from lzw_codec import LZWDecodeError, lzw_decode, lzw_encode, pack_codes

log = logging.getLogger(__name__)

MENU_PROMPT = 'To compress a file, press 1. To decompress a file, press 2: '
MENU_CHOICES = {1: 'compress', 2: 'decompress'}


@contextlib.contextmanager
def smart_read(filename=None, mode='rb'):
    """Open filename for reading, or stdin when it is missing or '-'."""
    if filename and filename != '-':
        fh = open(filename, mode)
        try:
            yield fh
        finally:
            fh.close()
    else:
        yield sys.stdin.buffer if 'b' in mode else sys.stdin


@contextlib.contextmanager
def smart_write(filename=None, mode='wb'):
    """Open filename for writing, or stdout when it is missing or '-'."""
    if filename and filename != '-':
        fh = open(filename, mode)
        try:
            yield fh
        finally:
            fh.close()
    else:
        yield sys.stdout.buffer if 'b' in mode else sys.stdout


def ask_mode():
    """Prompt for 1 or 2, return the mode name or None.

    Only the first token of the answer counts; the rest of the line is ignored.
    """
    tokens = input(MENU_PROMPT).split()
    try:
        option = int(tokens[0])
    except (IndexError, ValueError):
        print('Invalid input. Please enter 1 or 2.', file=sys.stderr)
        return None
    if option not in MENU_CHOICES:
        print('Invalid option selected. Please run again and enter 1 or 2.',
              file=sys.stderr)
        return None
    return MENU_CHOICES[option]


def parse_codes(line):
    return [int(token) for token in line.split()]


def compress(args):
    if args.input:
        with smart_read(args.input, 'rb') as f:
            data = f.read()
    else:
        # Bytes the console could not decode come back as lone surrogates
        data = input('Enter the input string: ').encode('utf-8', 'surrogateescape')

    codes = list(lzw_encode(data))
    line = ' '.join(str(k) for k in codes)
    if args.output:
        with smart_write(args.output, 'w') as f:
            f.write(line + '\n')
    else:
        print(f'Compressed output: {line}')

    if args.stats:
        packed = pack_codes(codes)
        print(f'Original size: {len(data)}')
        print(f'Compressed size: {len(packed)}')
        if data:
            print(f'Compression ratio: {len(packed) / len(data)}')
    return 0


def decompress(args):
    if args.input:
        with smart_read(args.input, 'r') as f:
            text = f.read()
    else:
        text = input('Enter the compressed string: ')

    try:
        codes = parse_codes(text)
    except ValueError:
        print('Invalid input. Codes must be whitespace separated integers.',
              file=sys.stderr)
        return 1

    error = None
    try:
        data = lzw_decode(codes)
    except LZWDecodeError as e:
        # Keep what was decoded before the bad code
        data = e.partial
        error = e

    if args.output:
        with smart_write(args.output, 'wb') as f:
            f.write(data)
    else:
        print(f"Decompressed string: {data.decode('utf-8', errors='replace')}")

    if error is not None:
        print(f'Error: {error}', file=sys.stderr)
        return 1
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description='LZW compressor/decompressor')
    parser.add_argument('mode', nargs='?', choices=['compress', 'decompress'],
                        help='skip the menu and run this mode directly')
    parser.add_argument('-i', '--input', type=str,
                        help='read input from this file instead of prompting, - for stdin')
    parser.add_argument('-o', '--output', type=str,
                        help='write the result to this file instead of the console')
    parser.add_argument('--stats', action='store_true',
                        help='report sizes when compressing, with codes packed at 12 bits')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='enable debug logging')

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    mode = args.mode
    if mode is None:
        try:
            mode = ask_mode()
        except EOFError:
            print('Invalid input. Please enter 1 or 2.', file=sys.stderr)
            return 1
        if mode is None:
            return 1

    log.debug('Running in %s mode', mode)
    try:
        if mode == 'compress':
            return compress(args)
        return decompress(args)
    except EOFError:
        print('Invalid input. Nothing to read.', file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
