# One-instruction 6502 disassembly
#
# Used for execution tracing and debugging.  Output follows the usual assembler
# syntax: "LDA #$05", "STA $0200,X", "LDA ($20),Y", "JMP ($FFFC)", "ASL A".
# Branch targets are shown as absolute addresses.

from nessie.byte_util import make_word, signed_byte
from nessie.opcodes import AddressingMode, DEFAULT_OPCODE_TABLE

# format args: {0} mnemonic, {1} operand byte / word
_FORMATS = {
    AddressingMode.IMPLIED: '{0}',
    AddressingMode.ACCUMULATOR: '{0} A',
    AddressingMode.IMMEDIATE: '{0} #${1:02X}',
    AddressingMode.ZERO_PAGE: '{0} ${1:02X}',
    AddressingMode.ZERO_PAGE_X: '{0} ${1:02X},X',
    AddressingMode.ZERO_PAGE_Y: '{0} ${1:02X},Y',
    AddressingMode.INDIRECT_X: '{0} (${1:02X},X)',
    AddressingMode.INDIRECT_Y: '{0} (${1:02X}),Y',
    AddressingMode.RELATIVE: '{0} ${1:04X}',
    AddressingMode.ABSOLUTE: '{0} ${1:04X}',
    AddressingMode.ABSOLUTE_X: '{0} ${1:04X},X',
    AddressingMode.ABSOLUTE_Y: '{0} ${1:04X},Y',
    AddressingMode.INDIRECT: '{0} (${1:04X})',
}


def disassemble(read, address, opcode_table=None):
    """
    Disassemble the instruction at address

    :param read: function returning the byte at a 16-bit address (e.g. cpu.read)
    :type read: callable
    :param address: address of the opcode byte
    :type address: int
    :param opcode_table: table to decode with, defaults to the standard 6502 table
    :type opcode_table: OpcodeTable
    :return: (instruction text, instruction length in bytes)
    :rtype: tuple
    """
    if opcode_table is None:
        opcode_table = DEFAULT_OPCODE_TABLE
    opcode = read(address)
    descriptor = opcode_table.get(opcode)
    if descriptor is None:
        return '.byte ${:02X}'.format(opcode), 1

    mode = descriptor.mode
    if mode.operand_bytes == 0:
        operand = None
    elif mode.operand_bytes == 1:
        operand = read((address + 1) & 0xffff)
    else:
        operand = make_word(read((address + 1) & 0xffff), read((address + 2) & 0xffff))

    if mode == AddressingMode.RELATIVE:
        operand = (address + 2 + signed_byte(operand)) & 0xffff

    return _FORMATS[mode].format(descriptor.mnemonic, operand), descriptor.length


def disassemble_range(read, start, count, opcode_table=None):
    """
    Generate (address, text) for count consecutive instructions starting at start
    """
    address = start & 0xffff
    for _ in range(count):
        text, length = disassemble(read, address, opcode_table)
        yield address, text
        address = (address + length) & 0xffff
