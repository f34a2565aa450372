# 6502 instruction-level emulation
#
# This module emulates 6502 machine language program execution at an instruction-level
# of granularity (not a cycle-level).
#
# step() executes one instruction and returns False once the machine has halted, so it
# can be called in a while loop by a host that wants control between instructions.
# run() does exactly that until a BRK is fetched, which is the only (non-error) exit.
#
# Memory accesses all go through read()/write() (read16()/write16() are built on them).
# A machine layer adding ROM, banking, or memory-mapped I/O should subclass
# Cpu6502Emulator and override those two methods.
#
# Cycle counting covers base cycles, taken branches, and page crossings on indexed
# reads.  It is informational; nothing here is synchronized to other hardware.

import logging

from nessie import flags
from nessie.addressing import resolve_address, page_crossed
from nessie.base import NessieBase, require_option_in
from nessie.byte_util import make_word, lo_byte, hi_byte, to_bytes
from nessie.constants import RESET, STACK_BASE, STACK_RESET, DEFAULT_OPTIONS
from nessie.disassembler import disassemble
from nessie.errors import NessieValueError, UnsupportedInstructionError
from nessie.instructions import ExecResult, execute
from nessie.memory import Memory
from nessie.opcodes import DEFAULT_OPCODE_TABLE

logger = logging.getLogger(__name__)


class Cpu6502Emulator(NessieBase):
    def __init__(self, opcode_table=None, **kwargs):
        """
        Create a cpu with all registers, flags, and memory zeroed

        :param opcode_table: opcode table to decode with, defaults to the standard 6502 table
        :type opcode_table: OpcodeTable
        :param kwargs: options (load_address, reset_status, trace)
        :type kwargs: keyword options
        """
        super().__init__()
        self.opcode_table = DEFAULT_OPCODE_TABLE if opcode_table is None else opcode_table
        self.memory = Memory()   # 64K memory
        self.a = 0               # accumulator (byte)
        self.x = 0               # x register (byte)
        self.y = 0               # y register (byte)
        self.status = 0          # processor flags (byte)
        self.sp = 0              # stack pointer (byte)
        self.pc = 0              # program counter (16-bit)
        self.cycles = 0          # count of cpu cycles processed
        self.halted = False      # True once a BRK has been executed
        self.last_opcode = None  # last opcode fetched
        self.set_options(**DEFAULT_OPTIONS)
        self.set_options(**kwargs)

    def validate_option(self, op, val):
        require_option_in(op, DEFAULT_OPTIONS)
        if op == 'load_address' and not (isinstance(val, int) and 0 <= val <= 0xffff):
            raise NessieValueError("Error: load_address must be between $0000 and $FFFF")
        if op == 'reset_status' and val is not None and not (isinstance(val, int) and 0 <= val <= 0xff):
            raise NessieValueError("Error: reset_status must be None or a byte value")

    # Memory access

    def read(self, addr):
        return self.memory.read(addr)

    def write(self, addr, value):
        self.memory.write(addr, value)

    def read16(self, addr):
        return make_word(self.read(addr), self.read((addr + 1) & 0xffff))

    def write16(self, addr, word):
        if not 0 <= word <= 0xffff:
            raise NessieValueError('Error: word value "%s" out of range' % word)
        self.write(addr, lo_byte(word))
        self.write((addr + 1) & 0xffff, hi_byte(word))

    def inject_bytes(self, mem_loc, data):
        """
        Puts bytes directly into RAM without touching the reset vector

        :param mem_loc: starting memory location
        :type mem_loc: int
        :param data: bytes to inject into RAM
        :type data: bytes
        """
        self.memory.load(mem_loc, data)

    # Stack (page one, grows down)

    def push(self, data):
        self.write(STACK_BASE + self.sp, data)
        self.sp = (self.sp - 1) & 0xff  # this will wrap -1 to 255, as it should

    def pop(self):
        # If popping from an empty stack (sp == $FF), this must wrap to 0
        self.sp = (self.sp + 1) & 0xff
        return self.read(STACK_BASE + self.sp)

    # Flags

    def update_zero_negative(self, value):
        self.status = flags.update_zero_negative(self.status, value)

    def get_flag(self, flag):
        return flags.is_set(self.status, flag)

    def set_flag(self, flag, condition):
        self.status = flags.set_flag(self.status, flag, condition)

    # Lifecycle

    def load(self, program, load_address=None):
        """
        Copy a program into memory and point the reset vector at it

        :param program: program bytes
        :type program: bytes-like or list of int
        :param load_address: where to load, defaults to the load_address option ($8000)
        :type load_address: int
        :raises ProgramTooLargeError: if the program doesn't fit; memory is left unchanged
        """
        if load_address is None:
            load_address = self.get_option('load_address')
        data = to_bytes(program)
        self.memory.load(load_address, data)
        self.write16(RESET, load_address)
        logger.debug("loaded %d bytes at $%04X", len(data), load_address)

    def reset(self):
        """
        Zero A, X, and Y, set the stack pointer to $FD, and jump through the reset vector.

        The status register is left as it was, unless the reset_status option is set.
        """
        self.a = 0
        self.x = 0
        self.y = 0
        self.sp = STACK_RESET
        self.cycles = 0
        self.halted = False
        reset_status = self.get_option('reset_status')
        if reset_status is not None:
            self.status = reset_status
        self.pc = self.read16(RESET)
        logger.debug("reset, pc=$%04X", self.pc)

    def init_cpu(self, newpc, newa=0, newx=0, newy=0, status=None):
        """
        Prepare to execute from an arbitrary address with an empty stack

        :param newpc: address to start executing from
        :type newpc: int
        :param status: new status register value; None leaves it unchanged
        :type status: int
        :raises NessieValueError: if a register value isn't a byte; the cpu is left unchanged
        """
        regs = [('a', newa), ('x', newx), ('y', newy)]
        if status is not None:
            regs.append(('status', status))
        for name, val in regs:
            if not (isinstance(val, int) and 0 <= val <= 0xff):
                raise NessieValueError("Error: %s value %r is not a byte" % (name, val))
        self.pc = newpc & 0xffff
        self.a = newa
        self.x = newx
        self.y = newy
        if status is not None:
            self.status = status
        self.sp = 0xff
        self.cycles = 0
        self.halted = False

    # Execution

    def step(self):
        """
        Execute one instruction

        :return: True if execution should continue, False once halted by BRK
        :rtype: bool
        :raises UnsupportedInstructionError: on an unknown or unimplemented opcode (pc is
            left pointing at it)
        """
        if self.halted:
            return False

        if self.get_option('trace'):
            logger.debug(self.trace_line())

        opcode_addr = self.pc
        opcode = self.read(opcode_addr)
        self.last_opcode = opcode
        self.pc = (opcode_addr + 1) & 0xffff

        descriptor = self.opcode_table.get(opcode)
        if descriptor is None:
            self.pc = opcode_addr
            logger.error("unknown opcode $%02X at $%04X", opcode, opcode_addr)
            raise UnsupportedInstructionError(opcode, opcode_addr)

        cycles = descriptor.cycles
        address = None
        if descriptor.mode.has_address:
            address = resolve_address(self, descriptor.mode)
            if descriptor.page_penalty and page_crossed(self, descriptor.mode):
                cycles += 1

        result = execute(self, descriptor, address)

        if result == ExecResult.UNSUPPORTED:
            self.pc = opcode_addr
            logger.error("unimplemented opcode $%02X (%s) at $%04X",
                         opcode, descriptor.mnemonic, opcode_addr)
            raise UnsupportedInstructionError(opcode, opcode_addr, descriptor.mnemonic)

        self.cycles += cycles
        if result == ExecResult.CONTINUE:
            self.pc = (self.pc + descriptor.length - 1) & 0xffff
        elif result == ExecResult.HALT:
            self.halted = True
            logger.debug("halted by %s at $%04X after %d cycles",
                         descriptor.mnemonic, opcode_addr, self.cycles)
            return False
        return True

    def run(self):
        while self.step():
            pass

    def load_and_run(self, program):
        self.load(program)
        self.reset()
        self.run()

    # Debugging

    def trace_line(self):
        text, _ = disassemble(self.read, self.pc, self.opcode_table)
        return "{:08d},PC=${:04x},A=${:02x},X=${:02x},Y=${:02x},SP=${:02x},P=%{:08b} {}  {}" \
            .format(self.cycles, self.pc, self.a, self.x, self.y, self.sp, self.status,
                    flags.flags_to_str(self.status), text)

    def dump_stack(self):
        """
        Utility for debugging: the stack ($100 to $1FF) as a hexdump
        """
        return '{}\ncurrent stack pointer ${:02x}'.format(self.memory.dump(STACK_BASE, 256), self.sp)
