# Constants for emu6502
#

# Version information.  Update BUILD_VERSION with every significant bugfix;
# update MINOR_VERSION with every feature addition
MAJOR_VERSION = 0
MINOR_VERSION = 1
BUILD_VERSION = 0

EMU6502_VERSION = f"{MAJOR_VERSION}.{MINOR_VERSION}.{BUILD_VERSION}"

MEMORY_SIZE = 0x10000
ADDRESS_MASK = 0xffff
BYTE_MASK = 0xff

# 6502 vector locations
RESET = 0xfffc
IRQ = 0xfffe  # shared by BRK

# processor status bits
FN = 0b10000000  # Negative
FV = 0b01000000  # oVerflow
FU = 0b00100000  # Unused (always reads as 1)
FB = 0b00010000  # Break
FD = 0b00001000  # Decimal
FI = 0b00000100  # Interrupt disable
FZ = 0b00000010  # Zero
FC = 0b00000001  # Carry

# register values established by reset()
RESET_SP = 0xfd
RESET_FLAGS = FU | FI  # $24

# the stack lives in page 1
STACK_PAGE = 0x0100
