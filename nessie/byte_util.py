# Common byte functions

from more_itertools import chunked

from nessie.errors import NessieValueError


def lo_byte(word):
    return word & 0xff


def hi_byte(word):
    return (word >> 8) & 0xff


def make_word(lo, hi):
    return lo | (hi << 8)


def signed_byte(a_byte):
    """
    Interpret an unsigned byte as a two's-complement value (-128 to 127)
    """
    return a_byte - 0x100 if a_byte & 0x80 else a_byte


def to_bytes(program):
    """
    Convert a program (bytes, bytearray, or a sequence of ints) into bytes

    :param program: program bytes
    :type program: bytes-like or iterable of int
    :return: the program as immutable bytes
    :rtype: bytes
    """
    if isinstance(program, (bytes, bytearray)):
        return bytes(program)
    if isinstance(program, (int, str)):
        raise NessieValueError("Error: program must be a sequence of bytes, not %s" % type(program).__name__)
    # element by element, so wide buffers (e.g. numpy int arrays) aren't copied as raw memory
    try:
        return bytes(list(program))
    except (TypeError, ValueError) as e:
        raise NessieValueError("Error: program must contain only byte values (0-255)") from e


# hexdump() adapted from http://code.activestate.com/recipes/579064-hex-dump/
def hexdump(data, start=0):
    """
    Render data as a classic hexdump (16 bytes per line, split into two groups of 8)

    :param data: bytes to render
    :type data: bytes-like or iterable of int
    :param start: address of the first byte, used for the line labels
    :type start: int
    :return: hexdump text, one line per 16 bytes
    :rtype: str
    """
    lines = []
    for i, row in enumerate(chunked(data, 16)):
        hs = '  '.join(' '.join('{:02X}'.format(c) for c in half) for half in chunked(row, 8))
        cs = ' '.join(''.join(chr(c) if 32 <= c < 127 else '.' for c in half) for half in chunked(row, 8))
        lines.append('{:04X}: {:48}  {:17}'.format(start + i * 16, hs, cs).rstrip())
    return '\n'.join(lines)
