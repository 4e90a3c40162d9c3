from emu6502 import constants
from emu6502.emulator_6502 import Cpu6502Emulator

DEFAULT_START = 0x8000


def make_cpu(program=(), start=DEFAULT_START, **options):
    """
    Builds an emulator with program at start, the reset vector pointing at it,
    and reset() already called

    :param program: machine code bytes
    :type program: bytes or list of int
    :param start: load address (also the reset vector)
    :type start: int
    :param options: emulator options
    :return: emulator ready to step
    :rtype: Cpu6502Emulator
    """
    cpu = Cpu6502Emulator(**options)
    cpu.inject_bytes(start, program)
    cpu.set_le_word(constants.RESET, start)
    cpu.reset()
    return cpu


def run_until(cpu, stop_pc, max_steps=10000):
    """
    Steps cpu until PC reaches stop_pc, returning the number of steps taken.
    Raises AssertionError if max_steps is exceeded.
    """
    steps = 0
    while cpu.pc != stop_pc:
        assert steps < max_steps, "Error: gave up waiting for PC ${:04x}".format(stop_pc)
        cpu.step()
        steps += 1
    return steps
