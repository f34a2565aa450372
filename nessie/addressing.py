# Effective address resolution for each 6502 addressing mode
#
# Called with cpu.pc pointing at the first operand byte (the byte after the opcode).
# All reads go through cpu.read()/cpu.read16(), so a machine layer overriding those
# sees operand fetches as well.

from nessie.errors import InvalidAddressingError
from nessie.opcodes import AddressingMode


def _zero_page_pointer(cpu, zp_vec):
    # both pointer bytes stay inside the zero page
    return cpu.read(zp_vec & 0xff) | (cpu.read((zp_vec + 1) & 0xff) << 8)


def immediate(cpu):
    return cpu.pc


def zeropage(cpu):
    return cpu.read(cpu.pc)


def zeropage_x(cpu):
    return (cpu.read(cpu.pc) + cpu.x) & 0xff


def zeropage_y(cpu):
    return (cpu.read(cpu.pc) + cpu.y) & 0xff


def absolute(cpu):
    return cpu.read16(cpu.pc)


def absolute_x(cpu):
    return (absolute(cpu) + cpu.x) & 0xffff


def absolute_y(cpu):
    return (absolute(cpu) + cpu.y) & 0xffff


def indirect(cpu):
    # JMP ($xxFF) fetches its high byte from $xx00, not from the next page
    ptr = absolute(cpu)
    return cpu.read(ptr) | (cpu.read((ptr & 0xff00) | ((ptr + 1) & 0xff)) << 8)


def indirect_x(cpu):
    return _zero_page_pointer(cpu, cpu.read(cpu.pc) + cpu.x)


def indirect_zp(cpu):
    return _zero_page_pointer(cpu, cpu.read(cpu.pc))


def indirect_y(cpu):
    return (indirect_zp(cpu) + cpu.y) & 0xffff


_RESOLVERS = {
    AddressingMode.IMMEDIATE: immediate,
    AddressingMode.RELATIVE: immediate,  # the offset byte; branch handlers do the math
    AddressingMode.ZERO_PAGE: zeropage,
    AddressingMode.ZERO_PAGE_X: zeropage_x,
    AddressingMode.ZERO_PAGE_Y: zeropage_y,
    AddressingMode.ABSOLUTE: absolute,
    AddressingMode.ABSOLUTE_X: absolute_x,
    AddressingMode.ABSOLUTE_Y: absolute_y,
    AddressingMode.INDIRECT: indirect,
    AddressingMode.INDIRECT_X: indirect_x,
    AddressingMode.INDIRECT_Y: indirect_y,
}


def resolve_address(cpu, mode):
    """
    Compute the effective address of the current instruction's operand

    :param cpu: cpu whose pc points at the first operand byte
    :type cpu: Cpu6502Emulator
    :param mode: addressing mode from the opcode descriptor
    :type mode: AddressingMode
    :return: effective address ($0000-$FFFF)
    :rtype: int
    :raises InvalidAddressingError: for implied and accumulator modes
    """
    try:
        resolver = _RESOLVERS[mode]
    except KeyError:
        raise InvalidAddressingError("Error: addressing mode %s has no effective address" % mode.name)
    return resolver(cpu)


def eval_page_crossing(baseaddr, realaddr):
    return ((baseaddr ^ realaddr) & 0xff00) != 0


def page_crossed(cpu, mode):
    """
    True when indexed addressing lands on a different page than the base address
    """
    if mode == AddressingMode.ABSOLUTE_X:
        return eval_page_crossing(absolute(cpu), absolute_x(cpu))
    if mode == AddressingMode.ABSOLUTE_Y:
        return eval_page_crossing(absolute(cpu), absolute_y(cpu))
    if mode == AddressingMode.INDIRECT_Y:
        return eval_page_crossing(indirect_zp(cpu), indirect_y(cpu))
    return False
