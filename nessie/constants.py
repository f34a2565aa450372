# Constants for nessie
#

# Version information.  Update BUILD_VERSION with every significant bugfix;
# update MINOR_VERSION with every feature addition
MAJOR_VERSION = 0
MINOR_VERSION = 1
BUILD_VERSION = 0

NESSIE_VERSION = f"{MAJOR_VERSION}.{MINOR_VERSION}.{BUILD_VERSION}"

# Memory geometry: a full 64K address space ($0000-$FFFF)
MEMORY_SIZE = 0x10000
ADDRESS_MASK = 0xffff
STACK_BASE = 0x0100  # page one holds the stack

# 6502 reset vector location
RESET = 0xfffc

# Programs are conventionally loaded into the upper half of memory
DEFAULT_LOAD_ADDRESS = 0x8000

# On a real 6502, the reset sequence performs three dummy pushes from $00
STACK_RESET = 0xfd

# Default values for Cpu6502Emulator options
DEFAULT_OPTIONS = {
    'load_address': DEFAULT_LOAD_ADDRESS,
    'reset_status': None,  # None = reset leaves the status register untouched
    'trace': False,        # True = log every executed instruction
}
