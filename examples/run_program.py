# Loads a tiny program at $8000, points the reset vector at it, and single-steps it
#
# Program:
# 8000  A9 42     LDA #$42
# 8002  EA        NOP
# 8003  69 05     ADC #$05
# 8005  8D 00 60  STA $6000

from emu6502 import Cpu6502Emulator
from emu6502.byte_util import hexdump

PROGRAM_START = 0x8000
PROGRAM = [0xa9, 0x42, 0xea, 0x69, 0x05, 0x8d, 0x00, 0x60]


def main():
    cpu = Cpu6502Emulator()
    cpu.inject_bytes(PROGRAM_START, PROGRAM)
    cpu.set_le_word(0xfffc, PROGRAM_START)
    cpu.reset()

    for i in range(4):
        cpu.step()
        regs = cpu.get_registers()
        print("STEP {}: A=${:02X} X=${:02X} Y=${:02X} SP=${:02X} PC=${:04X} P=%{:08b}"
              .format(i + 1, regs.a, regs.x, regs.y, regs.sp, regs.pc, regs.flags))

    hexdump([cpu.read(0x6000)], 0x6000)


if __name__ == "__main__":
    main()
