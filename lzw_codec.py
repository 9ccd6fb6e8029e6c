"""LZW encoding and decoding with a 12-bit code space."""

import logging
from itertools import chain

from bitstring import Bits, BitArray

from symbol_table import CodeTable, DecodeTable, DEFAULT_TABLE_SIZE

log = logging.getLogger(__name__)

CODE_LEN = 12
MAX_ENTRIES = 2**CODE_LEN
FIRST_CODE = 256

# Marks the step after the last input byte
END_OF_INPUT = None


class LZWDecodeError(ValueError):
    """A code sequence that no encoder run could have produced."""

    def __init__(self, message, code, position):
        super().__init__(message)
        self.code = code
        self.position = position
        # Output decoded before the bad code, filled in by lzw_decode
        self.partial = b''


class InvalidStartCode(LZWDecodeError):
    def __init__(self, code):
        super().__init__(f'Invalid starting code {code}', code, 0)


class InvalidCode(LZWDecodeError):
    def __init__(self, code, position):
        super().__init__(
            f'Invalid code encountered during decompression: {code}',
            code, position)


def lzw_encode(in_bytes, table_size=DEFAULT_TABLE_SIZE):
    """Yield the LZW codes for in_bytes.

    Every byte value, zero included, is ordinary input. Codes 0..255 stand
    for single bytes; learned strings get 256..4095 in order, after which the
    dictionary stops growing and encoding carries on with what it has.

    A table_size too small to hold the 256 single-byte seeds is replaced by
    the default, as a non-positive one is.
    """
    if isinstance(in_bytes, int):
        raise TypeError(f'expected a bytes-like object, not {type(in_bytes).__name__}')
    in_array = bytes(in_bytes)
    if not in_array:
        return

    if table_size is None or table_size < FIRST_CODE:
        table_size = DEFAULT_TABLE_SIZE
    dictionary = CodeTable(table_size)
    for i in range(256):
        dictionary.insert(bytes([i]), i)
    next_code = FIRST_CODE

    prefix = in_array[:1]
    for c in chain(in_array[1:], [END_OF_INPUT]):
        if c is not END_OF_INPUT:
            extended = prefix + bytes([c])
            if extended in dictionary:
                prefix = extended
                continue

        # Emit code for the prefix, which is in the dictionary
        code = dictionary.lookup(prefix)
        if code is not None:
            yield code
        if c is END_OF_INPUT:
            break

        # If there's room in the dictionary, add the extended prefix
        if next_code < MAX_ENTRIES:
            dictionary.insert(extended, next_code)
            log.debug('New code %d for %r', next_code, extended)
            next_code += 1
            if next_code == MAX_ENTRIES:
                log.debug('Code space exhausted after %d codes', MAX_ENTRIES)
        prefix = bytes([c])


def iter_decode(codes):
    """Yield the expansion of each code in turn.

    Raises InvalidStartCode or InvalidCode on the first bad code; whatever was
    yielded before it stays valid output.
    """
    dictionary = DecodeTable()
    for i in range(256):
        dictionary.set(i, bytes([i]))
    next_code = FIRST_CODE

    codes = iter(codes)
    try:
        first = next(codes)
    except StopIteration:
        return
    if not 0 <= first < FIRST_CODE:
        raise InvalidStartCode(first)

    previous = dictionary.get(first)
    yield previous

    for position, k in enumerate(codes, start=1):
        if 0 <= k < next_code and dictionary.get(k):
            current = dictionary.get(k)
        elif k == next_code < MAX_ENTRIES:
            # Code being defined by this very step: previous + previous[0]
            current = previous + previous[:1]
        else:
            raise InvalidCode(k, position)
        yield current

        # Add previous + current[0] to dictionary
        if next_code < MAX_ENTRIES:
            dictionary.set(next_code, previous + current[:1])
            next_code += 1
        previous = current


def lzw_decode(codes):
    """Decode a code sequence back into bytes.

    On failure the raised LZWDecodeError carries the bytes decoded so far in
    its partial attribute.
    """
    out_array = bytearray()
    try:
        for v in iter_decode(codes):
            out_array += v
    except LZWDecodeError as e:
        e.partial = bytes(out_array)
        log.debug('%s after %d bytes of output', e, len(out_array))
        raise
    return bytes(out_array)


def pack_codes(codes, code_len=CODE_LEN):
    """Lay codes out back to back at code_len bits each."""
    out_array = BitArray()
    for k in codes:
        out_array.append(Bits(uint=k, length=code_len))
    return out_array.tobytes()
