from .constants import NESSIE_VERSION as __version__
from .emulator_6502 import Cpu6502Emulator
from .memory import Memory
from .opcodes import AddressingMode, OpcodeDescriptor, OpcodeTable, build_opcode_table
from .instructions import ExecResult
from .disassembler import disassemble
from .errors import (NessieException, NessieValueError, UnsupportedInstructionError,
                     InvalidAddressingError, ProgramTooLargeError)
