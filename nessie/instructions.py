# 6502 instruction semantics
#
# One handler per mnemonic.  A handler is called as handler(cpu, address), where
# address is the effective address resolved for the instruction's addressing mode,
# or None for implied and accumulator forms.  Handlers return an ExecResult telling
# the dispatch loop what to do with the program counter.
#
# Decimal mode: the D flag is tracked, but ADC and SBC always do binary arithmetic
# (as on the NES 2A03).

import enum
from types import MappingProxyType

from nessie.addressing import eval_page_crossing
from nessie.byte_util import hi_byte, lo_byte, make_word, signed_byte
from nessie.errors import NessieValueError
from nessie.flags import (FN, FV, FU, FB, FD, FI, FZ, FC, is_set, set_flag,
                          overflow_on_add, overflow_on_subtract)


class ExecResult(enum.Enum):
    """Outcome of executing one instruction"""

    CONTINUE = enum.auto()     # advance pc past the operand bytes
    JUMPED = enum.auto()       # the handler already set pc
    HALT = enum.auto()         # stop the dispatch loop (BRK)
    UNSUPPORTED = enum.auto()  # no handler for this instruction


CONTINUE = ExecResult.CONTINUE
JUMPED = ExecResult.JUMPED
HALT = ExecResult.HALT
UNSUPPORTED = ExecResult.UNSUPPORTED


# Registers and memory locations are both instruction operands (e.g. ASL A vs.
# ASL $10), so OperandRef lets a handler read and write either one the same way.
class OperandRef:
    def __init__(self, type, loc=None):
        if type not in (A_REG, X_REG, Y_REG, SP_REG, LOC_VAL):
            raise NessieValueError("Error: invalid enum type when instantiating a new OperandRef")
        if type != LOC_VAL and loc is not None:
            raise NessieValueError("Error: location not needed for operand of type register")
        if type == LOC_VAL and not (loc is not None and 0 <= loc <= 0xffff):
            raise NessieValueError("Error: memory location out of range")

        self.type = type
        self.loc = loc

    # this sets the contents of the register or memory location to byte_val
    def set_byte(self, byte_val, cpu):
        if self.type == A_REG:
            cpu.a = byte_val
        elif self.type == X_REG:
            cpu.x = byte_val
        elif self.type == Y_REG:
            cpu.y = byte_val
        elif self.type == SP_REG:
            cpu.sp = byte_val
        else:
            cpu.write(self.loc, byte_val)

    def get_byte(self, cpu):
        if self.type == A_REG:
            return cpu.a
        if self.type == X_REG:
            return cpu.x
        if self.type == Y_REG:
            return cpu.y
        if self.type == SP_REG:
            return cpu.sp
        return cpu.read(self.loc)


# operand "enums"
A_REG = 0x01 + 0xFF
X_REG = 0x02 + 0xFF
Y_REG = 0x03 + 0xFF
SP_REG = 0x04 + 0xFF
LOC_VAL = 0x06 + 0xFF  # memory location ($0 to $FFFF)

A_OPREF = OperandRef(A_REG)
X_OPREF = OperandRef(X_REG)
Y_OPREF = OperandRef(Y_REG)
SP_OPREF = OperandRef(SP_REG)


def operand_ref(address):
    """Accumulator when there's no address (ASL A), otherwise the memory location"""
    if address is None:
        return A_OPREF
    return OperandRef(LOC_VAL, address)


_handlers = {}


def instruction(*mnemonics):
    """Register the decorated function as the handler for the given mnemonics"""
    def decorator(func):
        for mnemonic in mnemonics:
            if mnemonic in _handlers:
                raise NessieValueError("Error: %s already has a handler" % mnemonic)
            _handlers[mnemonic] = func
        return func
    return decorator


def assign_then_set_flags(cpu, dest_operand_ref, byte_val):
    dest_operand_ref.set_byte(byte_val, cpu)
    cpu.update_zero_negative(byte_val)


# Loads

@instruction('LDA')
def lda(cpu, address):
    assign_then_set_flags(cpu, A_OPREF, cpu.read(address))
    return CONTINUE


@instruction('LDX')
def ldx(cpu, address):
    assign_then_set_flags(cpu, X_OPREF, cpu.read(address))
    return CONTINUE


@instruction('LDY')
def ldy(cpu, address):
    assign_then_set_flags(cpu, Y_OPREF, cpu.read(address))
    return CONTINUE


# Stores (no flag changes)

@instruction('STA')
def sta(cpu, address):
    cpu.write(address, cpu.a)
    return CONTINUE


@instruction('STX')
def stx(cpu, address):
    cpu.write(address, cpu.x)
    return CONTINUE


@instruction('STY')
def sty(cpu, address):
    cpu.write(address, cpu.y)
    return CONTINUE


# Register transfers

@instruction('TAX')
def tax(cpu, address):
    assign_then_set_flags(cpu, X_OPREF, cpu.a)
    return CONTINUE


@instruction('TXA')
def txa(cpu, address):
    assign_then_set_flags(cpu, A_OPREF, cpu.x)
    return CONTINUE


@instruction('TAY')
def tay(cpu, address):
    assign_then_set_flags(cpu, Y_OPREF, cpu.a)
    return CONTINUE


@instruction('TYA')
def tya(cpu, address):
    assign_then_set_flags(cpu, A_OPREF, cpu.y)
    return CONTINUE


@instruction('TSX')
def tsx(cpu, address):
    assign_then_set_flags(cpu, X_OPREF, cpu.sp)
    return CONTINUE


@instruction('TXS')
def txs(cpu, address):
    # the only transfer that leaves the flags alone
    SP_OPREF.set_byte(cpu.x, cpu)
    return CONTINUE


# Increments and decrements (8-bit wrap, carry untouched)

def _step_operand(cpu, ref, delta):
    assign_then_set_flags(cpu, ref, (ref.get_byte(cpu) + delta) & 0xff)
    return CONTINUE


@instruction('INX')
def inx(cpu, address):
    return _step_operand(cpu, X_OPREF, 1)


@instruction('INY')
def iny(cpu, address):
    return _step_operand(cpu, Y_OPREF, 1)


@instruction('DEX')
def dex(cpu, address):
    return _step_operand(cpu, X_OPREF, -1)


@instruction('DEY')
def dey(cpu, address):
    return _step_operand(cpu, Y_OPREF, -1)


@instruction('INC')
def inc(cpu, address):
    return _step_operand(cpu, operand_ref(address), 1)


@instruction('DEC')
def dec(cpu, address):
    return _step_operand(cpu, operand_ref(address), -1)


# Arithmetic

@instruction('ADC')
def adc(cpu, address):
    data = cpu.read(address)
    temp = cpu.a + data + (cpu.status & FC)  # not a byte
    result = temp & 0xff
    cpu.status = set_flag(cpu.status, FC, temp > 0xff)
    cpu.status = set_flag(cpu.status, FV, overflow_on_add(cpu.a, data, result))
    assign_then_set_flags(cpu, A_OPREF, result)
    return CONTINUE


@instruction('SBC')
def sbc(cpu, address):
    data = cpu.read(address)
    temp = cpu.a - data - ((cpu.status & FC) ^ FC)  # borrow is the inverted carry
    result = temp & 0xff
    cpu.status = set_flag(cpu.status, FC, temp >= 0)
    cpu.status = set_flag(cpu.status, FV, overflow_on_subtract(cpu.a, data, result))
    assign_then_set_flags(cpu, A_OPREF, result)
    return CONTINUE


# Logical

@instruction('AND')
def and_(cpu, address):
    assign_then_set_flags(cpu, A_OPREF, cpu.a & cpu.read(address))
    return CONTINUE


@instruction('ORA')
def ora(cpu, address):
    assign_then_set_flags(cpu, A_OPREF, cpu.a | cpu.read(address))
    return CONTINUE


@instruction('EOR')
def eor(cpu, address):
    assign_then_set_flags(cpu, A_OPREF, cpu.a ^ cpu.read(address))
    return CONTINUE


@instruction('BIT')
def bit(cpu, address):
    temp = cpu.read(address)
    cpu.status = (cpu.status & ~(FN | FV) & 0xff) | (temp & (FN | FV))
    cpu.status = set_flag(cpu.status, FZ, not (temp & cpu.a))
    return CONTINUE


# Shifts and rotates, on the accumulator or on memory

@instruction('ASL')
def asl(cpu, address):
    ref = operand_ref(address)
    temp = ref.get_byte(cpu) << 1
    cpu.status = set_flag(cpu.status, FC, temp & 0x100)
    assign_then_set_flags(cpu, ref, temp & 0xff)
    return CONTINUE


@instruction('LSR')
def lsr(cpu, address):
    ref = operand_ref(address)
    temp = ref.get_byte(cpu)
    cpu.status = set_flag(cpu.status, FC, temp & 1)
    assign_then_set_flags(cpu, ref, temp >> 1)
    return CONTINUE


@instruction('ROL')
def rol(cpu, address):
    ref = operand_ref(address)
    temp = (ref.get_byte(cpu) << 1) | (cpu.status & FC)
    cpu.status = set_flag(cpu.status, FC, temp & 0x100)
    assign_then_set_flags(cpu, ref, temp & 0xff)
    return CONTINUE


@instruction('ROR')
def ror(cpu, address):
    ref = operand_ref(address)
    temp = ref.get_byte(cpu)
    if cpu.status & FC:
        temp |= 0x100
    cpu.status = set_flag(cpu.status, FC, temp & 1)
    assign_then_set_flags(cpu, ref, temp >> 1)
    return CONTINUE


# Compares

def _compare(cpu, src, address):
    data = cpu.read(address)
    cpu.status = set_flag(cpu.status, FC, src >= data)
    cpu.update_zero_negative((src - data) & 0xff)
    return CONTINUE


@instruction('CMP')
def cmp(cpu, address):
    return _compare(cpu, cpu.a, address)


@instruction('CPX')
def cpx(cpu, address):
    return _compare(cpu, cpu.x, address)


@instruction('CPY')
def cpy(cpu, address):
    return _compare(cpu, cpu.y, address)


# Branches.  The offset is relative to the address after the operand byte.
# Taking the branch adds a cycle, and another if the target is on a different page.

def branch(cpu, address, condition):
    if not condition:
        return CONTINUE
    next_pc = (cpu.pc + 1) & 0xffff
    target = (next_pc + signed_byte(cpu.read(address))) & 0xffff
    cpu.cycles += 1
    if eval_page_crossing(next_pc, target):
        cpu.cycles += 1
    cpu.pc = target
    return JUMPED


@instruction('BCC')
def bcc(cpu, address):
    return branch(cpu, address, not is_set(cpu.status, FC))


@instruction('BCS')
def bcs(cpu, address):
    return branch(cpu, address, is_set(cpu.status, FC))


@instruction('BEQ')
def beq(cpu, address):
    return branch(cpu, address, is_set(cpu.status, FZ))


@instruction('BNE')
def bne(cpu, address):
    return branch(cpu, address, not is_set(cpu.status, FZ))


@instruction('BMI')
def bmi(cpu, address):
    return branch(cpu, address, is_set(cpu.status, FN))


@instruction('BPL')
def bpl(cpu, address):
    return branch(cpu, address, not is_set(cpu.status, FN))


@instruction('BVC')
def bvc(cpu, address):
    return branch(cpu, address, not is_set(cpu.status, FV))


@instruction('BVS')
def bvs(cpu, address):
    return branch(cpu, address, is_set(cpu.status, FV))


# Jumps and subroutines

@instruction('JMP')
def jmp(cpu, address):
    cpu.pc = address
    return JUMPED


@instruction('JSR')
def jsr(cpu, address):
    # pushes the address of the JSR's last byte, high byte first
    return_addr = (cpu.pc + 1) & 0xffff
    cpu.push(hi_byte(return_addr))
    cpu.push(lo_byte(return_addr))
    cpu.pc = address
    return JUMPED


@instruction('RTS')
def rts(cpu, address):
    lo = cpu.pop()
    hi = cpu.pop()
    cpu.pc = (make_word(lo, hi) + 1) & 0xffff
    return JUMPED


@instruction('RTI')
def rti(cpu, address):
    cpu.status = cpu.pop()
    lo = cpu.pop()
    hi = cpu.pop()
    cpu.pc = make_word(lo, hi)
    return JUMPED


# Stack

@instruction('PHA')
def pha(cpu, address):
    cpu.push(cpu.a)
    return CONTINUE


@instruction('PHP')
def php(cpu, address):
    # the pushed copy always has B and the unused bit set
    cpu.push(cpu.status | FB | FU)
    return CONTINUE


@instruction('PLA')
def pla(cpu, address):
    assign_then_set_flags(cpu, A_OPREF, cpu.pop())
    return CONTINUE


@instruction('PLP')
def plp(cpu, address):
    cpu.status = cpu.pop()
    return CONTINUE


# Flag sets and clears

def _flag_instruction(flag, value):
    def handler(cpu, address):
        cpu.status = set_flag(cpu.status, flag, value)
        return CONTINUE
    return handler


sec = instruction('SEC')(_flag_instruction(FC, True))
clc = instruction('CLC')(_flag_instruction(FC, False))
sei = instruction('SEI')(_flag_instruction(FI, True))
cli = instruction('CLI')(_flag_instruction(FI, False))
sed = instruction('SED')(_flag_instruction(FD, True))
cld = instruction('CLD')(_flag_instruction(FD, False))
clv = instruction('CLV')(_flag_instruction(FV, False))


# Control

@instruction('BRK')
def brk(cpu, address):
    return HALT


@instruction('NOP')
def nop(cpu, address):
    return CONTINUE


HANDLERS = MappingProxyType(_handlers)


def execute(cpu, descriptor, address):
    """
    Run the handler for an instruction

    :param cpu: cpu to mutate, with pc pointing at the first operand byte
    :type cpu: Cpu6502Emulator
    :param descriptor: the instruction's opcode table entry
    :type descriptor: OpcodeDescriptor
    :param address: effective address, or None for implied/accumulator modes
    :type address: int
    :return: what the dispatch loop should do next
    :rtype: ExecResult
    """
    handler = HANDLERS.get(descriptor.mnemonic)
    if handler is None:
        return UNSUPPORTED
    return handler(cpu, address)
