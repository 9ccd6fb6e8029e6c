"""Fixed-capacity symbol tables for LZW encoding and decoding."""

import logging
from collections import namedtuple

log = logging.getLogger(__name__)

DEFAULT_TABLE_SIZE = 16384
DECODE_TABLE_SIZE = 4096

Entry = namedtuple('Entry', ['key', 'value'])


class CodeTable:
    """Maps byte strings to codes using open addressing and linear probing.

    The table never grows and entries are never removed. Once every slot is
    taken, inserting a new key does nothing.
    """

    def __init__(self, capacity=DEFAULT_TABLE_SIZE):
        if capacity is None or capacity <= 0:
            capacity = DEFAULT_TABLE_SIZE
        self.capacity = capacity
        self._slots = [None] * capacity
        self._count = 0

    def _home(self, key):
        return hash(key) % self.capacity

    def insert(self, key, value):
        home = self._home(key)
        slot = home
        while self._slots[slot] is not None:
            if self._slots[slot].key == key:
                self._slots[slot] = Entry(key, value)
                return
            slot = (slot + 1) % self.capacity
            if slot == home:
                log.debug('Table full, dropping %r -> %d', key, value)
                return
        self._slots[slot] = Entry(key, value)
        self._count += 1

    def lookup(self, key):
        """Return the code stored for key, or None."""
        home = self._home(key)
        slot = home
        while self._slots[slot] is not None:
            if self._slots[slot].key == key:
                return self._slots[slot].value
            slot = (slot + 1) % self.capacity
            if slot == home:
                break
        return None

    def __contains__(self, key):
        return self.lookup(key) is not None

    def __len__(self):
        return self._count


class DecodeTable:
    """Maps codes 0..4095 directly to their expansions."""

    def __init__(self):
        self.size = DECODE_TABLE_SIZE
        self._slots = [b''] * self.size

    def set(self, code, value):
        if not 0 <= code < self.size:
            raise IndexError(f'code {code} outside 0..{self.size - 1}')
        self._slots[code] = bytes(value)

    def get(self, code):
        if not 0 <= code < self.size:
            return b''
        return self._slots[code]
