# Flat 64K memory for the 6502
#
# Every access goes through read()/write(), which mask the address to 16 bits and
# range-check the stored value.  A machine layer that needs banking, ROM, or memory
# mapped I/O should override the CPU's read()/write() rather than reach in here.

import numpy as np

from nessie.constants import MEMORY_SIZE, ADDRESS_MASK
from nessie.errors import NessieValueError, ProgramTooLargeError
from nessie.byte_util import hexdump, lo_byte, hi_byte, make_word, to_bytes


class Memory:
    def __init__(self):
        self._data = np.zeros(MEMORY_SIZE, dtype=np.uint8)

    @property
    def size(self):
        return MEMORY_SIZE

    def read(self, addr):
        return int(self._data[addr & ADDRESS_MASK])

    def write(self, addr, value):
        if not (0 <= value <= 255):
            raise NessieValueError("Error: POKE(%d),%d out of range" % (addr, value))
        self._data[addr & ADDRESS_MASK] = value

    def read16(self, addr):
        """
        Get a little-endian 16-bit value from a given memory loc

        :param addr: location from which to retrieve 16-bit value
        :type addr: int
        :return: 16-bit le value at addr (high byte from addr+1, wrapping at $FFFF)
        :rtype: int
        """
        return make_word(self.read(addr), self.read(addr + 1))

    def write16(self, addr, word):
        """
        Set a little-endian 16-bit value at the given memory loc

        :param addr: location at which to set 16-bit value
        :type addr: int
        :param word: value to store in memory
        :type word: int
        """
        if not 0 <= word <= 0xffff:
            raise NessieValueError('Error: word value "%s" out of range' % word)
        self.write(addr, lo_byte(word))
        self.write(addr + 1, hi_byte(word))

    def load(self, origin, data):
        """
        Bulk copy bytes into memory.  Nothing is written if the data doesn't fit.

        :param origin: starting memory location
        :type origin: int
        :param data: bytes to copy
        :type data: bytes-like or iterable of int
        """
        data = to_bytes(data)
        if not 0 <= origin < MEMORY_SIZE:
            raise NessieValueError("Error: load address $%X out of range" % origin)
        available = MEMORY_SIZE - origin
        if len(data) > available:
            raise ProgramTooLargeError(len(data), available)
        self._data[origin:origin + len(data)] = np.frombuffer(data, dtype=np.uint8)

    def clear(self):
        self._data.fill(0)

    def slice(self, start, length):
        """
        Copy of a range of memory, wrapping past $FFFF
        """
        return bytes(self.read(start + i) for i in range(length))

    def dump(self, start, length):
        return hexdump(self.slice(start, length), start)

    def __len__(self):
        return MEMORY_SIZE

    def __getitem__(self, addr):
        return self.read(addr)

    def __setitem__(self, addr, value):
        self.write(addr, value)
