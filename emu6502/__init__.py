from .memory import AddressableMemory
from .emulator_6502 import Cpu6502Emulator
from .errors import Emu6502Exception, Emu6502ValueError, UnimplementedOpcode
from .constants import EMU6502_VERSION as __version__
