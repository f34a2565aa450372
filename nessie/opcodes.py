# 6502 opcode table
#
# Maps each opcode byte to its mnemonic, addressing mode, length in bytes, and base
# cycle count.  The table is built once by build_opcode_table() and is read-only
# afterwards.  Cycle counts follow the NMOS 6502 datasheet; "page_penalty" marks
# the read instructions that take one extra cycle when indexing crosses a page.
#
# The NMOS JAM (aka KIL/HALT) opcodes are listed with no handler behind them, so
# executing one fails as an unsupported instruction instead of locking up.

import enum
from dataclasses import dataclass
from types import MappingProxyType

from nessie.errors import NessieValueError


class AddressingMode(enum.Enum):
    """Addressing mode of a 6502 instruction, with its operand size in bytes"""

    IMPLIED = 0
    ACCUMULATOR = 0
    IMMEDIATE = 1
    ZERO_PAGE = 1
    ZERO_PAGE_X = 1
    ZERO_PAGE_Y = 1
    RELATIVE = 1
    INDIRECT_X = 1
    INDIRECT_Y = 1
    ABSOLUTE = 2
    ABSOLUTE_X = 2
    ABSOLUTE_Y = 2
    INDIRECT = 2

    def __new__(cls, operand_bytes):
        # members share operand sizes, so give each a distinct value
        obj = object.__new__(cls)
        obj._value_ = len(cls.__members__)
        obj.operand_bytes = operand_bytes
        return obj

    @property
    def has_address(self):
        """False for the register-only modes, which have no effective address"""
        return self not in (AddressingMode.IMPLIED, AddressingMode.ACCUMULATOR)


IMP = AddressingMode.IMPLIED
ACC = AddressingMode.ACCUMULATOR
IMM = AddressingMode.IMMEDIATE
ZP = AddressingMode.ZERO_PAGE
ZPX = AddressingMode.ZERO_PAGE_X
ZPY = AddressingMode.ZERO_PAGE_Y
REL = AddressingMode.RELATIVE
INDX = AddressingMode.INDIRECT_X
INDY = AddressingMode.INDIRECT_Y
ABS = AddressingMode.ABSOLUTE
ABSX = AddressingMode.ABSOLUTE_X
ABSY = AddressingMode.ABSOLUTE_Y
IND = AddressingMode.INDIRECT


@dataclass(frozen=True)
class OpcodeDescriptor:
    opcode: int          #: opcode byte, 0-255
    mnemonic: str        #: three-letter mnemonic, e.g. 'LDA'
    mode: AddressingMode  #: addressing mode
    cycles: int          #: base cycle count
    page_penalty: bool = False  #: +1 cycle when indexed addressing crosses a page

    @property
    def length(self):
        """Instruction length in bytes, including the opcode byte"""
        return 1 + self.mode.operand_bytes


# (opcode, mnemonic, mode, cycles, page_penalty)
OFFICIAL_OPCODES = [
    (0x69, 'ADC', IMM, 2, False), (0x65, 'ADC', ZP, 3, False), (0x75, 'ADC', ZPX, 4, False),
    (0x6d, 'ADC', ABS, 4, False), (0x7d, 'ADC', ABSX, 4, True), (0x79, 'ADC', ABSY, 4, True),
    (0x61, 'ADC', INDX, 6, False), (0x71, 'ADC', INDY, 5, True),

    (0x29, 'AND', IMM, 2, False), (0x25, 'AND', ZP, 3, False), (0x35, 'AND', ZPX, 4, False),
    (0x2d, 'AND', ABS, 4, False), (0x3d, 'AND', ABSX, 4, True), (0x39, 'AND', ABSY, 4, True),
    (0x21, 'AND', INDX, 6, False), (0x31, 'AND', INDY, 5, True),

    (0x0a, 'ASL', ACC, 2, False), (0x06, 'ASL', ZP, 5, False), (0x16, 'ASL', ZPX, 6, False),
    (0x0e, 'ASL', ABS, 6, False), (0x1e, 'ASL', ABSX, 7, False),

    (0x90, 'BCC', REL, 2, False), (0xb0, 'BCS', REL, 2, False), (0xf0, 'BEQ', REL, 2, False),
    (0x30, 'BMI', REL, 2, False), (0xd0, 'BNE', REL, 2, False), (0x10, 'BPL', REL, 2, False),
    (0x50, 'BVC', REL, 2, False), (0x70, 'BVS', REL, 2, False),

    (0x24, 'BIT', ZP, 3, False), (0x2c, 'BIT', ABS, 4, False),

    (0x00, 'BRK', IMP, 7, False),

    (0x18, 'CLC', IMP, 2, False), (0xd8, 'CLD', IMP, 2, False), (0x58, 'CLI', IMP, 2, False),
    (0xb8, 'CLV', IMP, 2, False),

    (0xc9, 'CMP', IMM, 2, False), (0xc5, 'CMP', ZP, 3, False), (0xd5, 'CMP', ZPX, 4, False),
    (0xcd, 'CMP', ABS, 4, False), (0xdd, 'CMP', ABSX, 4, True), (0xd9, 'CMP', ABSY, 4, True),
    (0xc1, 'CMP', INDX, 6, False), (0xd1, 'CMP', INDY, 5, True),

    (0xe0, 'CPX', IMM, 2, False), (0xe4, 'CPX', ZP, 3, False), (0xec, 'CPX', ABS, 4, False),
    (0xc0, 'CPY', IMM, 2, False), (0xc4, 'CPY', ZP, 3, False), (0xcc, 'CPY', ABS, 4, False),

    (0xc6, 'DEC', ZP, 5, False), (0xd6, 'DEC', ZPX, 6, False), (0xce, 'DEC', ABS, 6, False),
    (0xde, 'DEC', ABSX, 7, False),
    (0xca, 'DEX', IMP, 2, False), (0x88, 'DEY', IMP, 2, False),

    (0x49, 'EOR', IMM, 2, False), (0x45, 'EOR', ZP, 3, False), (0x55, 'EOR', ZPX, 4, False),
    (0x4d, 'EOR', ABS, 4, False), (0x5d, 'EOR', ABSX, 4, True), (0x59, 'EOR', ABSY, 4, True),
    (0x41, 'EOR', INDX, 6, False), (0x51, 'EOR', INDY, 5, True),

    (0xe6, 'INC', ZP, 5, False), (0xf6, 'INC', ZPX, 6, False), (0xee, 'INC', ABS, 6, False),
    (0xfe, 'INC', ABSX, 7, False),
    (0xe8, 'INX', IMP, 2, False), (0xc8, 'INY', IMP, 2, False),

    (0x4c, 'JMP', ABS, 3, False), (0x6c, 'JMP', IND, 5, False),
    (0x20, 'JSR', ABS, 6, False),

    (0xa9, 'LDA', IMM, 2, False), (0xa5, 'LDA', ZP, 3, False), (0xb5, 'LDA', ZPX, 4, False),
    (0xad, 'LDA', ABS, 4, False), (0xbd, 'LDA', ABSX, 4, True), (0xb9, 'LDA', ABSY, 4, True),
    (0xa1, 'LDA', INDX, 6, False), (0xb1, 'LDA', INDY, 5, True),

    (0xa2, 'LDX', IMM, 2, False), (0xa6, 'LDX', ZP, 3, False), (0xb6, 'LDX', ZPY, 4, False),
    (0xae, 'LDX', ABS, 4, False), (0xbe, 'LDX', ABSY, 4, True),

    (0xa0, 'LDY', IMM, 2, False), (0xa4, 'LDY', ZP, 3, False), (0xb4, 'LDY', ZPX, 4, False),
    (0xac, 'LDY', ABS, 4, False), (0xbc, 'LDY', ABSX, 4, True),

    (0x4a, 'LSR', ACC, 2, False), (0x46, 'LSR', ZP, 5, False), (0x56, 'LSR', ZPX, 6, False),
    (0x4e, 'LSR', ABS, 6, False), (0x5e, 'LSR', ABSX, 7, False),

    (0xea, 'NOP', IMP, 2, False),

    (0x09, 'ORA', IMM, 2, False), (0x05, 'ORA', ZP, 3, False), (0x15, 'ORA', ZPX, 4, False),
    (0x0d, 'ORA', ABS, 4, False), (0x1d, 'ORA', ABSX, 4, True), (0x19, 'ORA', ABSY, 4, True),
    (0x01, 'ORA', INDX, 6, False), (0x11, 'ORA', INDY, 5, True),

    (0x48, 'PHA', IMP, 3, False), (0x08, 'PHP', IMP, 3, False),
    (0x68, 'PLA', IMP, 4, False), (0x28, 'PLP', IMP, 4, False),

    (0x2a, 'ROL', ACC, 2, False), (0x26, 'ROL', ZP, 5, False), (0x36, 'ROL', ZPX, 6, False),
    (0x2e, 'ROL', ABS, 6, False), (0x3e, 'ROL', ABSX, 7, False),

    (0x6a, 'ROR', ACC, 2, False), (0x66, 'ROR', ZP, 5, False), (0x76, 'ROR', ZPX, 6, False),
    (0x6e, 'ROR', ABS, 6, False), (0x7e, 'ROR', ABSX, 7, False),

    (0x40, 'RTI', IMP, 6, False), (0x60, 'RTS', IMP, 6, False),

    (0xe9, 'SBC', IMM, 2, False), (0xe5, 'SBC', ZP, 3, False), (0xf5, 'SBC', ZPX, 4, False),
    (0xed, 'SBC', ABS, 4, False), (0xfd, 'SBC', ABSX, 4, True), (0xf9, 'SBC', ABSY, 4, True),
    (0xe1, 'SBC', INDX, 6, False), (0xf1, 'SBC', INDY, 5, True),

    (0x38, 'SEC', IMP, 2, False), (0xf8, 'SED', IMP, 2, False), (0x78, 'SEI', IMP, 2, False),

    (0x85, 'STA', ZP, 3, False), (0x95, 'STA', ZPX, 4, False), (0x8d, 'STA', ABS, 4, False),
    (0x9d, 'STA', ABSX, 5, False), (0x99, 'STA', ABSY, 5, False), (0x81, 'STA', INDX, 6, False),
    (0x91, 'STA', INDY, 6, False),

    (0x86, 'STX', ZP, 3, False), (0x96, 'STX', ZPY, 4, False), (0x8e, 'STX', ABS, 4, False),
    (0x84, 'STY', ZP, 3, False), (0x94, 'STY', ZPX, 4, False), (0x8c, 'STY', ABS, 4, False),

    (0xaa, 'TAX', IMP, 2, False), (0xa8, 'TAY', IMP, 2, False), (0xba, 'TSX', IMP, 2, False),
    (0x8a, 'TXA', IMP, 2, False), (0x9a, 'TXS', IMP, 2, False), (0x98, 'TYA', IMP, 2, False),
]

# HALT (aka JAM) pseudo-ops
JAM_OPCODES = (0x02, 0x12, 0x22, 0x32, 0x42, 0x52, 0x62, 0x72, 0x92, 0xb2, 0xd2, 0xf2)


class OpcodeTable:
    """
    Read-only lookup from opcode byte to OpcodeDescriptor
    """
    def __init__(self, descriptors):
        descriptors = list(descriptors)
        by_opcode = {}
        for d in descriptors:
            if not 0 <= d.opcode <= 255:
                raise NessieValueError("Error: opcode %r out of range" % d.opcode)
            if d.opcode in by_opcode:
                raise NessieValueError("Error: opcode $%02X listed more than once" % d.opcode)
            by_opcode[d.opcode] = d
        self._by_opcode = MappingProxyType(by_opcode)
        # (mnemonic, mode) pairs shared by several opcodes (the JAMs) aren't findable
        by_mnemonic_mode = {}
        shared = set()
        for d in descriptors:
            key = (d.mnemonic, d.mode)
            if key in by_mnemonic_mode:
                shared.add(key)
            by_mnemonic_mode[key] = d
        for key in shared:
            del by_mnemonic_mode[key]
        self._by_mnemonic_mode = MappingProxyType(by_mnemonic_mode)

    def get(self, opcode):
        return self._by_opcode.get(opcode)

    def __getitem__(self, opcode):
        return self._by_opcode[opcode]

    def __contains__(self, opcode):
        return opcode in self._by_opcode

    def __len__(self):
        return len(self._by_opcode)

    def __iter__(self):
        return iter(self._by_opcode.values())

    def find(self, mnemonic, mode):
        """
        Look up the descriptor for a mnemonic/addressing mode pair

        :param mnemonic: mnemonic, e.g. 'LDA'
        :type mnemonic: str
        :param mode: addressing mode
        :type mode: AddressingMode
        :return: matching descriptor, or None if that combination doesn't exist or belongs
            to more than one opcode
        :rtype: OpcodeDescriptor
        """
        return self._by_mnemonic_mode.get((mnemonic.upper(), mode))

    def mnemonics(self):
        return sorted({d.mnemonic for d in self})


def build_opcode_table(include_jam=True):
    descriptors = [OpcodeDescriptor(op, mnemonic, mode, cycles, penalty)
                   for (op, mnemonic, mode, cycles, penalty) in OFFICIAL_OPCODES]
    if include_jam:
        descriptors.extend(OpcodeDescriptor(op, 'JAM', IMP, 0) for op in JAM_OPCODES)
    return OpcodeTable(descriptors)


# Shared immutable default, used by any CPU not given its own table
DEFAULT_OPCODE_TABLE = build_opcode_table()
