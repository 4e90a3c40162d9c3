# 64K flat address space used by the 6502 emulator
#
# Every address is valid: reads and writes wrap the address modulo 65536, and
# writes truncate the value to a byte.  There is no banking, no I/O mapping and
# no write protection at this level.

import numpy as np

from emu6502 import constants
from emu6502.byte_util import hexdump, little_endian_bytes, little_endian_int
from emu6502.errors import Emu6502ValueError


class AddressableMemory:
    def __init__(self):
        self.ram = np.zeros(constants.MEMORY_SIZE, dtype=np.uint8)

    def read(self, address):
        # int() keeps numpy's uint8 arithmetic out of the CPU
        return int(self.ram[address & constants.ADDRESS_MASK])

    def write(self, address, value):
        self.ram[address & constants.ADDRESS_MASK] = value & constants.BYTE_MASK

    def read_word(self, address):
        """
        Get a little-endian 16-bit value from the given address.  The high byte
        address wraps from $FFFF to $0000.
        """
        return little_endian_int([self.read(address), self.read(address + 1)])

    def write_word(self, address, word):
        """
        Set a little-endian 16-bit value at the given address

        :param address: location at which to store the low byte
        :type address: int
        :param word: value to store in memory
        :type word: int
        """
        if not 0 <= word <= 0xffff:
            raise Emu6502ValueError('Error: word value "%s" out of range' % word)
        for i, a_byte in enumerate(little_endian_bytes(word)):
            self.write(address + i, a_byte)

    def load(self, start, data):
        """
        Copies bytes into memory starting at start, wrapping past $FFFF

        :param start: starting memory location
        :type start: int
        :param data: bytes to copy
        :type data: bytes, bytearray or list of int
        """
        if len(data) > constants.MEMORY_SIZE:
            raise Emu6502ValueError("Error: %d bytes will not fit in 64K of memory" % len(data))
        values = np.array([b & constants.BYTE_MASK for b in data], dtype=np.uint8)
        locs = (start + np.arange(len(values))) & constants.ADDRESS_MASK
        self.ram[locs] = values

    def clear(self):
        self.ram.fill(0)

    def to_bytes(self):
        return self.ram.tobytes()

    def dump(self, start=0, length=256):
        """
        Utility for debugging:  Print a hexdump of a memory range
        """
        locs = (start + np.arange(length)) & constants.ADDRESS_MASK
        hexdump([int(b) for b in self.ram[locs]], start)
