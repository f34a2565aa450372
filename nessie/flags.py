# Processor status flags and the pure functions that update them
#
# All functions take and return the status byte; none of them touch bits they
# weren't asked about.

FN = 0b10000000  # Negative
FV = 0b01000000  # oVerflow
FU = 0b00100000  # Unused
FB = 0b00010000  # Break
FD = 0b00001000  # Decimal
FI = 0b00000100  # Interrupt
FZ = 0b00000010  # Zero
FC = 0b00000001  # Carry

FLAG_NAMES = 'NV-BDIZC'


def is_set(status, flag):
    return (status & flag) != 0


def set_flag(status, flag, condition):
    if condition:
        return status | flag
    return status & ~flag & 0xff


def update_zero_negative(status, value):
    """
    Set Zero iff value is 0 and Negative iff bit 7 of value is set

    :param status: current status byte
    :type status: int
    :param value: instruction result byte
    :type value: int
    :return: new status byte, other six bits unchanged
    :rtype: int
    """
    status = set_flag(status, FZ, value == 0)
    return set_flag(status, FN, value & 0x80)


def overflow_on_add(a, operand, result):
    # both inputs share a sign, and the result's sign differs from it
    return ((a ^ result) & (operand ^ result) & 0x80) != 0


def overflow_on_subtract(a, operand, result):
    # inputs differ in sign, and the result's sign differs from a's
    return ((a ^ operand) & (a ^ result) & 0x80) != 0


def flags_to_str(status):
    return ''.join(name if status & (0x80 >> i) else name.lower()
                   for i, name in enumerate(FLAG_NAMES))
