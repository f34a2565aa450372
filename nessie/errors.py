'''
Exceptions for the nessie 6502 emulator
'''


class NessieException(Exception):
    """
    Generic base class for nessie exceptions
    """
    pass


class NessieValueError(NessieException, ValueError):
    """
    Value error (byte, word, or address out of range, malformed program)
    """
    pass


class NessieNotImplemented(NessieException):
    """
    Not implemented error
    """
    pass


class UnsupportedInstructionError(NessieNotImplemented):
    """
    Opcode has no table entry, or its handler is not implemented
    """
    def __init__(self, opcode, address, mnemonic=None):
        self.opcode = opcode
        self.address = address
        self.mnemonic = mnemonic
        if mnemonic is None:
            msg = "Error: unknown opcode $%02X at $%04X" % (opcode, address)
        else:
            msg = "Error: unimplemented opcode $%02X (%s) at $%04X" % (opcode, mnemonic, address)
        super().__init__(msg)


class InvalidAddressingError(NessieException):
    """
    An effective address was requested for a mode that has none (implied, accumulator)
    """
    pass


class ProgramTooLargeError(NessieValueError):
    """
    Program does not fit between the load address and the top of memory
    """
    def __init__(self, size, available):
        self.size = size
        self.available = available
        super().__init__(
            "Error: program of %d bytes exceeds the %d bytes available" % (size, available))
