# Common byte functions

import more_itertools as moreit


def little_endian_bytes(a_num, min_bytes=2):
    retval = bytearray()
    remaining = a_num
    while remaining != 0:
        retval.append(remaining & 0xFF)
        remaining >>= 8
    while len(retval) < min_bytes:
        retval.append(0)
    return retval


def little_endian_int(a_bytearray, signed=False):
    return int.from_bytes(a_bytearray, byteorder='little', signed=signed)


def signed_byte(a_byte):
    """
    Interprets a byte as a two's complement value (-128 to 127)
    """
    return a_byte - 0x100 if a_byte & 0x80 else a_byte


def hexdump_lines(data, start=0):
    """
    Formats data as hexdump lines, 16 bytes per line, split into two groups of 8

    :param data: bytes to format
    :type data: iterable of int
    :param start: address of the first byte
    :type start: int
    :return: formatted lines
    :rtype: list of str
    """
    lines = []
    for i, row in enumerate(moreit.chunked(data, 16)):
        hs = '  '.join(' '.join('{:02X}'.format(b) for b in half) for half in moreit.chunked(row, 8))
        cs = ''.join(chr(b) if 32 <= b < 127 else '.' for b in row)
        lines.append('{:04X}: {:48}  {:16}'.format((i * 16 + start) & 0xffff, hs, cs))
    return lines


def hexdump(data, start=0):
    for line in hexdump_lines(data, start):
        print(line)
