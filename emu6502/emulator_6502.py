# 6502 instruction-level emulation
#
# This module emulates NMOS 6502 machine language program execution at an
# instruction-level of granularity (not a cycle-level).  Cycle counting is not done.
#
# Usage: call reset() once (after putting a program and the reset vector into memory),
# then call step() in a loop.  Each step() executes exactly one instruction.  There
# are no (non-error) exit conditions; the driver decides when to stop.
#
# Notes:
# - Only the 151 official opcodes are implemented.  Any other opcode raises
#   UnimplementedOpcode (PC has already moved past the opcode byte).
# - Arithmetic is binary only.  The decimal flag can be set and cleared, but ADC/SBC
#   ignore it.
# - JMP ($xxFF) fetches the target's high byte from $xx00, as the real chip does.
# - BRK only sets B and I and loads the IRQ vector, unless the brk_pushes_state option
#   is on, in which case it pushes PC and flags first (as the real chip does).
#
# Code references used during development:
# 1) 6502 reference: http://www.6502.org/tutorials/6502opcodes.html
# 2) Nice docs: https://github.com/eteran/pretendo/blob/master/doc/cpu/6502.txt

from emu6502 import constants
from emu6502.base import Emu6502Base, Registers
from emu6502.byte_util import signed_byte
from emu6502.constants import FN, FV, FU, FB, FD, FI, FZ, FC
from emu6502.errors import Emu6502ValueError, UnimplementedOpcode
from emu6502.memory import AddressableMemory

# addressing modes
IMP = 'implied'
ACC = 'accumulator'
IMM = 'immediate'
ZP = 'zeropage'
ZPX = 'zeropage,x'
ZPY = 'zeropage,y'
ABS = 'absolute'
ABSX = 'absolute,x'
ABSY = 'absolute,y'
IND = 'indirect'
INDX = '(indirect,x)'
INDY = '(indirect),y'
REL = 'relative'

# number of bytes following the opcode for each addressing mode
OPERAND_BYTES = {
    IMP: 0, ACC: 0,
    IMM: 1, ZP: 1, ZPX: 1, ZPY: 1, INDX: 1, INDY: 1, REL: 1,
    ABS: 2, ABSX: 2, ABSY: 2, IND: 2,
}

# The official NMOS opcode map: opcode -> (mnemonic, addressing mode)
OPCODES = {
    0x69: ('ADC', IMM), 0x65: ('ADC', ZP), 0x75: ('ADC', ZPX), 0x6d: ('ADC', ABS),
    0x7d: ('ADC', ABSX), 0x79: ('ADC', ABSY), 0x61: ('ADC', INDX), 0x71: ('ADC', INDY),

    0x29: ('AND', IMM), 0x25: ('AND', ZP), 0x35: ('AND', ZPX), 0x2d: ('AND', ABS),
    0x3d: ('AND', ABSX), 0x39: ('AND', ABSY), 0x21: ('AND', INDX), 0x31: ('AND', INDY),

    0x0a: ('ASL', ACC), 0x06: ('ASL', ZP), 0x16: ('ASL', ZPX), 0x0e: ('ASL', ABS),
    0x1e: ('ASL', ABSX),

    0x90: ('BCC', REL), 0xb0: ('BCS', REL), 0xf0: ('BEQ', REL), 0x30: ('BMI', REL),
    0xd0: ('BNE', REL), 0x10: ('BPL', REL), 0x50: ('BVC', REL), 0x70: ('BVS', REL),

    0x24: ('BIT', ZP), 0x2c: ('BIT', ABS),

    0x00: ('BRK', IMP),

    0x18: ('CLC', IMP), 0xd8: ('CLD', IMP), 0x58: ('CLI', IMP), 0xb8: ('CLV', IMP),

    0xc9: ('CMP', IMM), 0xc5: ('CMP', ZP), 0xd5: ('CMP', ZPX), 0xcd: ('CMP', ABS),
    0xdd: ('CMP', ABSX), 0xd9: ('CMP', ABSY), 0xc1: ('CMP', INDX), 0xd1: ('CMP', INDY),

    0xe0: ('CPX', IMM), 0xe4: ('CPX', ZP), 0xec: ('CPX', ABS),
    0xc0: ('CPY', IMM), 0xc4: ('CPY', ZP), 0xcc: ('CPY', ABS),

    0xc6: ('DEC', ZP), 0xd6: ('DEC', ZPX), 0xce: ('DEC', ABS), 0xde: ('DEC', ABSX),
    0xca: ('DEX', IMP), 0x88: ('DEY', IMP),

    0x49: ('EOR', IMM), 0x45: ('EOR', ZP), 0x55: ('EOR', ZPX), 0x4d: ('EOR', ABS),
    0x5d: ('EOR', ABSX), 0x59: ('EOR', ABSY), 0x41: ('EOR', INDX), 0x51: ('EOR', INDY),

    0xe6: ('INC', ZP), 0xf6: ('INC', ZPX), 0xee: ('INC', ABS), 0xfe: ('INC', ABSX),
    0xe8: ('INX', IMP), 0xc8: ('INY', IMP),

    0x4c: ('JMP', ABS), 0x6c: ('JMP', IND),
    0x20: ('JSR', ABS),

    0xa9: ('LDA', IMM), 0xa5: ('LDA', ZP), 0xb5: ('LDA', ZPX), 0xad: ('LDA', ABS),
    0xbd: ('LDA', ABSX), 0xb9: ('LDA', ABSY), 0xa1: ('LDA', INDX), 0xb1: ('LDA', INDY),

    0xa2: ('LDX', IMM), 0xa6: ('LDX', ZP), 0xb6: ('LDX', ZPY), 0xae: ('LDX', ABS),
    0xbe: ('LDX', ABSY),

    0xa0: ('LDY', IMM), 0xa4: ('LDY', ZP), 0xb4: ('LDY', ZPX), 0xac: ('LDY', ABS),
    0xbc: ('LDY', ABSX),

    0x4a: ('LSR', ACC), 0x46: ('LSR', ZP), 0x56: ('LSR', ZPX), 0x4e: ('LSR', ABS),
    0x5e: ('LSR', ABSX),

    0xea: ('NOP', IMP),

    0x09: ('ORA', IMM), 0x05: ('ORA', ZP), 0x15: ('ORA', ZPX), 0x0d: ('ORA', ABS),
    0x1d: ('ORA', ABSX), 0x19: ('ORA', ABSY), 0x01: ('ORA', INDX), 0x11: ('ORA', INDY),

    0x48: ('PHA', IMP), 0x08: ('PHP', IMP), 0x68: ('PLA', IMP), 0x28: ('PLP', IMP),

    0x2a: ('ROL', ACC), 0x26: ('ROL', ZP), 0x36: ('ROL', ZPX), 0x2e: ('ROL', ABS),
    0x3e: ('ROL', ABSX),

    0x6a: ('ROR', ACC), 0x66: ('ROR', ZP), 0x76: ('ROR', ZPX), 0x6e: ('ROR', ABS),
    0x7e: ('ROR', ABSX),

    0x40: ('RTI', IMP), 0x60: ('RTS', IMP),

    0xe9: ('SBC', IMM), 0xe5: ('SBC', ZP), 0xf5: ('SBC', ZPX), 0xed: ('SBC', ABS),
    0xfd: ('SBC', ABSX), 0xf9: ('SBC', ABSY), 0xe1: ('SBC', INDX), 0xf1: ('SBC', INDY),

    0x38: ('SEC', IMP), 0xf8: ('SED', IMP), 0x78: ('SEI', IMP),

    0x85: ('STA', ZP), 0x95: ('STA', ZPX), 0x8d: ('STA', ABS), 0x9d: ('STA', ABSX),
    0x99: ('STA', ABSY), 0x81: ('STA', INDX), 0x91: ('STA', INDY),

    0x86: ('STX', ZP), 0x96: ('STX', ZPY), 0x8e: ('STX', ABS),
    0x84: ('STY', ZP), 0x94: ('STY', ZPX), 0x8c: ('STY', ABS),

    0xaa: ('TAX', IMP), 0xa8: ('TAY', IMP), 0xba: ('TSX', IMP),
    0x8a: ('TXA', IMP), 0x9a: ('TXS', IMP), 0x98: ('TYA', IMP),
}


class Cpu6502Emulator(Emu6502Base):
    """
    NMOS 6502 processor core.

    Owns the register file (a, x, y, sp, pc, flags) and an AddressableMemory.  All
    registers are plain attributes so that test harnesses and debuggers can read and
    write them directly.

    :param memory: memory to run against, a new zero-filled one if None
    :type memory: AddressableMemory
    :param kwargs: options (see options_with_defaults)
    """
    def __init__(self, memory=None, **kwargs):
        Emu6502Base.__init__(self)

        self.options_with_defaults = dict(
            brk_pushes_state=False,  # True = BRK pushes PC and flags like the real chip
            debug=False,             # True = print a register trace line on every step
        )
        self.set_options(**self.options_with_defaults)
        self.set_options(**kwargs)

        self.memory = memory if memory is not None else AddressableMemory()
        self.a = 0                         # accumulator (byte)
        self.x = 0                         # x register (byte)
        self.y = 0                         # y register (byte)
        self.sp = constants.RESET_SP       # stack pointer (byte)
        self.pc = 0                        # program counter (16-bit)
        self.flags = constants.RESET_FLAGS  # processor flags (byte)
        self.last_instruction = None       # last opcode executed
        self.instruction_count = 0         # instructions executed since reset

    def reset(self):
        """
        Puts the processor into its power-on state and loads PC from the reset vector.
        Memory is left untouched.
        """
        self.a = 0
        self.x = 0
        self.y = 0
        self.sp = constants.RESET_SP
        self.flags = constants.RESET_FLAGS
        self.pc = self.get_le_word(constants.RESET)
        self.last_instruction = None
        self.instruction_count = 0

    def read(self, address):
        return self.memory.read(address)

    def write(self, address, value):
        self.memory.write(address, value)

    def fetch(self):
        val = self.read(self.pc)
        self.pc = (self.pc + 1) & 0xffff
        return val

    def fetch_word(self):
        lo = self.fetch()
        return lo | (self.fetch() << 8)

    def push(self, data):
        self.write(constants.STACK_PAGE + self.sp, data)
        self.sp = (self.sp - 1) & 0xff  # this will wrap -1 to 255, as it should

    def pull(self):
        # If pulling from an empty stack (sp == $FF), this must wrap to 0
        self.sp = (self.sp + 1) & 0xff
        return self.read(constants.STACK_PAGE + self.sp)

    # ---------------------------------------------------------------------------
    # Addressing mode resolvers.  Each one consumes the operand bytes (advancing PC)
    # and returns an OperandRef for the instruction body, or None for implied.

    def implied(self):
        return None

    def accumulator(self):
        return A_OPREF

    def immediate(self):
        return OperandRef(BYTE_VAL, self.fetch())

    def zeropage(self):
        return OperandRef(LOC_VAL, self.fetch())

    def zeropage_x(self):
        return OperandRef(LOC_VAL, (self.fetch() + self.x) & 0xff)

    def zeropage_y(self):
        return OperandRef(LOC_VAL, (self.fetch() + self.y) & 0xff)

    def absolute(self):
        return OperandRef(LOC_VAL, self.fetch_word())

    def absolute_x(self):
        return OperandRef(LOC_VAL, (self.fetch_word() + self.x) & 0xffff)

    def absolute_y(self):
        return OperandRef(LOC_VAL, (self.fetch_word() + self.y) & 0xffff)

    def indirect(self):
        # JMP only.  The high byte of the target is read from the same page as the
        # low byte, so JMP ($10FF) reads $10FF and $1000.
        ptr = self.fetch_word()
        hi_loc = (ptr & 0xff00) | ((ptr + 1) & 0xff)
        return OperandRef(LOC_VAL, self.read(ptr) | (self.read(hi_loc) << 8))

    def indirect_x(self):
        zp_vec = (self.fetch() + self.x) & 0xff
        return OperandRef(LOC_VAL, self.read(zp_vec) | (self.read((zp_vec + 1) & 0xff) << 8))

    def indirect_y(self):
        zp_vec = self.fetch()
        base = self.read(zp_vec) | (self.read((zp_vec + 1) & 0xff) << 8)
        return OperandRef(LOC_VAL, (base + self.y) & 0xffff)

    def relative(self):
        # displacement is relative to the address after the displacement byte
        offset = signed_byte(self.fetch())
        return OperandRef(LOC_VAL, (self.pc + offset) & 0xffff)

    # ---------------------------------------------------------------------------
    # Shared flag and register helpers

    # a_byte from a register value or a result (i.e., a,x,y, or memory)
    def set_flags(self, a_byte):
        assert 0 <= a_byte <= 255, "Error: can't set flags using non-byte value"
        if a_byte == 0:
            self.flags = (self.flags & ~FN & 0xff) | FZ
        else:
            # turn off flag's N and Z, then add in a_byte's N
            self.flags = (self.flags & ~(FN | FZ) & 0xff) | (a_byte & FN)
        self.flags |= FU

    def set_flag(self, flag, condition):
        if condition:
            self.flags |= flag
        else:
            self.flags &= (~flag & 0xff)
        self.flags |= FU

    def assign_then_set_flags(self, dest_operand_ref, src_operand_ref):
        src_byte = src_operand_ref.get_byte(self)
        dest_operand_ref.set_byte(src_byte, self)
        self.set_flags(src_byte)

    # this is needed for the TXS command:
    def assign_no_flag_changes(self, dest_operand_ref, src_operand_ref):
        src_byte = src_operand_ref.get_byte(self)
        dest_operand_ref.set_byte(src_byte, self)

    def add_with_carry(self, data):
        temp = self.a + data + (self.flags & FC)  # not a byte
        result = temp & 0xff
        self.set_flags(result)
        self.set_flag(FV, ((self.a ^ result) & 0x80) and not ((self.a ^ data) & 0x80))
        self.set_flag(FC, temp > 0xff)
        self.a = result

    # handles CMP, CPX, and CPY
    def compare(self, reg_operand_ref, operand_ref):
        src = reg_operand_ref.get_byte(self)  # byte from a, x, or y
        data = operand_ref.get_byte(self)  # byte from immediate or memory lookup
        temp = (src - data) & 0xff
        self.flags = (self.flags & ~(FC | FN | FZ) & 0xff) | (temp & FN) | FU
        if not temp:
            self.flags |= FZ
        if src >= data:
            self.flags |= FC

    def branch_if(self, condition, operand_ref):
        # the displacement byte has already been consumed either way
        if condition:
            self.pc = operand_ref.val_or_loc

    # ---------------------------------------------------------------------------
    # Arithmetic and logic

    def ADC(self, operand_ref):
        self.add_with_carry(operand_ref.get_byte(self))

    # binary SBC is ADC of the operand's ones' complement; carry is the inverse of borrow
    def SBC(self, operand_ref):
        self.add_with_carry(operand_ref.get_byte(self) ^ 0xff)

    def AND(self, operand_ref):
        self.a &= operand_ref.get_byte(self)
        self.set_flags(self.a)

    def ORA(self, operand_ref):
        self.a |= operand_ref.get_byte(self)
        self.set_flags(self.a)

    def EOR(self, operand_ref):
        self.a ^= operand_ref.get_byte(self)
        self.set_flags(self.a)

    def BIT(self, operand_ref):
        temp = operand_ref.get_byte(self)
        self.flags = (self.flags & ~(FN | FV) & 0xff) | (temp & (FN | FV)) | FU
        self.set_flag(FZ, not (temp & self.a))

    def CMP(self, operand_ref):
        self.compare(A_OPREF, operand_ref)

    def CPX(self, operand_ref):
        self.compare(X_OPREF, operand_ref)

    def CPY(self, operand_ref):
        self.compare(Y_OPREF, operand_ref)

    # ---------------------------------------------------------------------------
    # Shifts and rotates (accumulator or memory)

    def ASL(self, operand_ref):
        temp = operand_ref.get_byte(self) << 1
        self.set_flag(FC, temp & 0x100)
        self.assign_then_set_flags(operand_ref, OperandRef(BYTE_VAL, temp & 0xff))

    def LSR(self, operand_ref):
        temp = operand_ref.get_byte(self)
        self.set_flag(FC, temp & 1)
        self.assign_then_set_flags(operand_ref, OperandRef(BYTE_VAL, temp >> 1))

    def ROL(self, operand_ref):
        temp = operand_ref.get_byte(self) << 1
        if self.flags & FC:
            temp |= 1
        self.set_flag(FC, temp & 0x100)
        self.assign_then_set_flags(operand_ref, OperandRef(BYTE_VAL, temp & 0xff))

    def ROR(self, operand_ref):
        temp = operand_ref.get_byte(self)
        if self.flags & FC:
            temp |= 0x100
        self.set_flag(FC, temp & 1)
        self.assign_then_set_flags(operand_ref, OperandRef(BYTE_VAL, temp >> 1))

    # ---------------------------------------------------------------------------
    # Increments and decrements

    def INC(self, operand_ref):
        temp = (operand_ref.get_byte(self) + 1) & 0xff
        self.assign_then_set_flags(operand_ref, OperandRef(BYTE_VAL, temp))

    def DEC(self, operand_ref):
        temp = (operand_ref.get_byte(self) - 1) & 0xff
        self.assign_then_set_flags(operand_ref, OperandRef(BYTE_VAL, temp))

    def INX(self, operand_ref):
        self.x = (self.x + 1) & 0xff
        self.set_flags(self.x)

    def INY(self, operand_ref):
        self.y = (self.y + 1) & 0xff
        self.set_flags(self.y)

    def DEX(self, operand_ref):
        self.x = (self.x - 1) & 0xff
        self.set_flags(self.x)

    def DEY(self, operand_ref):
        self.y = (self.y - 1) & 0xff
        self.set_flags(self.y)

    # ---------------------------------------------------------------------------
    # Loads, stores, and transfers

    def LDA(self, operand_ref):
        self.assign_then_set_flags(A_OPREF, operand_ref)

    def LDX(self, operand_ref):
        self.assign_then_set_flags(X_OPREF, operand_ref)

    def LDY(self, operand_ref):
        self.assign_then_set_flags(Y_OPREF, operand_ref)

    def STA(self, operand_ref):
        self.assign_no_flag_changes(operand_ref, A_OPREF)

    def STX(self, operand_ref):
        self.assign_no_flag_changes(operand_ref, X_OPREF)

    def STY(self, operand_ref):
        self.assign_no_flag_changes(operand_ref, Y_OPREF)

    def TAX(self, operand_ref):
        self.assign_then_set_flags(X_OPREF, A_OPREF)

    def TAY(self, operand_ref):
        self.assign_then_set_flags(Y_OPREF, A_OPREF)

    def TSX(self, operand_ref):
        self.assign_then_set_flags(X_OPREF, SP_OPREF)

    def TXA(self, operand_ref):
        self.assign_then_set_flags(A_OPREF, X_OPREF)

    def TXS(self, operand_ref):
        self.assign_no_flag_changes(SP_OPREF, X_OPREF)

    def TYA(self, operand_ref):
        self.assign_then_set_flags(A_OPREF, Y_OPREF)

    # ---------------------------------------------------------------------------
    # Branches, jumps, and subroutines

    def BCC(self, operand_ref):
        self.branch_if(not (self.flags & FC), operand_ref)

    def BCS(self, operand_ref):
        self.branch_if(self.flags & FC, operand_ref)

    def BEQ(self, operand_ref):
        self.branch_if(self.flags & FZ, operand_ref)

    def BNE(self, operand_ref):
        self.branch_if(not (self.flags & FZ), operand_ref)

    def BMI(self, operand_ref):
        self.branch_if(self.flags & FN, operand_ref)

    def BPL(self, operand_ref):
        self.branch_if(not (self.flags & FN), operand_ref)

    def BVC(self, operand_ref):
        self.branch_if(not (self.flags & FV), operand_ref)

    def BVS(self, operand_ref):
        self.branch_if(self.flags & FV, operand_ref)

    # absolute and indirect both resolve to the target address
    def JMP(self, operand_ref):
        self.pc = operand_ref.val_or_loc

    def JSR(self, operand_ref):
        # PC is now the return address; push the address of the last operand byte
        ret = (self.pc - 1) & 0xffff
        self.push(ret >> 8)
        self.push(ret & 0xff)
        self.pc = operand_ref.val_or_loc

    def RTS(self, operand_ref):
        lo = self.pull()
        hi = self.pull()
        self.pc = ((lo | (hi << 8)) + 1) & 0xffff

    def RTI(self, operand_ref):
        self.flags = (self.pull() & ~FB & 0xff) | FU
        lo = self.pull()
        hi = self.pull()
        self.pc = lo | (hi << 8)

    def BRK(self, operand_ref):
        if self.get_option('brk_pushes_state'):
            self.pc = (self.pc + 1) & 0xffff  # BRK is a 2-byte opcode (2nd byte is padding)
            self.push(self.pc >> 8)
            self.push(self.pc & 0xff)
            self.push(self.flags | FB | FU)
            self.flags |= FI | FU
        else:
            self.flags |= FB | FI | FU
        self.pc = self.get_le_word(constants.IRQ)

    # ---------------------------------------------------------------------------
    # Stack and flag instructions

    def PHA(self, operand_ref):
        self.push(self.a)

    def PHP(self, operand_ref):
        self.push(self.flags | FB | FU)

    def PLA(self, operand_ref):
        self.assign_then_set_flags(A_OPREF, OperandRef(BYTE_VAL, self.pull()))

    def PLP(self, operand_ref):
        # B only exists on the stack copy
        self.flags = (self.pull() & ~FB & 0xff) | FU

    def CLC(self, operand_ref):
        self.set_flag(FC, False)

    def CLD(self, operand_ref):
        self.set_flag(FD, False)

    def CLI(self, operand_ref):
        self.set_flag(FI, False)

    def CLV(self, operand_ref):
        self.set_flag(FV, False)

    def SEC(self, operand_ref):
        self.set_flag(FC, True)

    def SED(self, operand_ref):
        self.set_flag(FD, True)

    def SEI(self, operand_ref):
        self.set_flag(FI, True)

    def NOP(self, operand_ref):
        pass

    # ---------------------------------------------------------------------------

    def step(self):
        """
        Executes a single instruction

        :raises UnimplementedOpcode: the opcode at PC is not an official 6502 opcode
        """
        if self.get_option('debug'):
            print("{:08d},PC=${:04x},A=${:02x},X=${:02x},Y=${:02x},SP=${:02x},P=%{:08b}"
                  .format(self.instruction_count, self.pc, self.a, self.x, self.y, self.sp, self.flags))

        instruction = self.fetch()
        entry = DISPATCH_TABLE[instruction]
        if entry is None:
            raise UnimplementedOpcode(instruction, (self.pc - 1) & 0xffff)

        self.last_instruction = instruction
        execute, resolve = entry
        execute(self, resolve(self))
        self.instruction_count += 1

    def get_registers(self):
        return Registers(self.a, self.x, self.y, self.sp, self.pc, self.flags)

    def get_le_word(self, mem_loc):
        """
        Get a little-endian 16-bit value from a given memory loc

        :param mem_loc: location from which to retrieve 16-bit value
        :type mem_loc: int
        :return: 16-bit le value at mem_loc
        :rtype: int
        """
        return self.memory.read_word(mem_loc)

    def set_le_word(self, mem_loc, word):
        """
        Set a little-endian 16-bit value at the given memory loc

        :param mem_loc: location at which to set 16-bit value
        :type mem_loc: int
        :param word: value to store in memory
        :type word: int
        """
        self.memory.write_word(mem_loc, word)

    def inject_bytes(self, mem_loc, bytes):
        """
        Puts bytes directly into memory

        :param mem_loc: starting memory location
        :type mem_loc: int
        :param bytes: bytes to inject into memory
        :type bytes: bytes
        """
        self.memory.load(mem_loc, bytes)

    def print_stack(self):
        """
        Utility for debugging:  Print the stack ($100 to $1FF)
        """
        self.memory.dump(constants.STACK_PAGE, 256)
        print('current stack pointer ${:02x}'.format(self.sp))


# Operand kinds.  A register operand's kind is the name of the emulator attribute
# holding it.
A_REG = 'a'
X_REG = 'x'
Y_REG = 'y'
SP_REG = 'sp'
BYTE_VAL = 'byte'  # immediates and computed results
LOC_VAL = 'loc'    # memory location ($0 to $FFFF)

REGISTER_KINDS = (A_REG, X_REG, Y_REG, SP_REG)


class OperandRef:
    """
    What an instruction body reads from and writes to, whichever addressing mode
    produced it: a register, a byte value, or a memory location.

    Everything an OperandRef hands out or stores is a byte; stores are masked to
    8 bits on the way in.
    """
    __slots__ = ('kind', 'val_or_loc')

    def __init__(self, kind, val_or_loc=None):
        if kind in REGISTER_KINDS:
            if val_or_loc is not None:
                raise Emu6502ValueError("Error: register operand '%s' takes no value" % kind)
        elif kind == BYTE_VAL:
            if val_or_loc is None or not 0 <= val_or_loc <= constants.BYTE_MASK:
                raise Emu6502ValueError("Error: byte operand %r out of range" % (val_or_loc,))
        elif kind == LOC_VAL:
            if val_or_loc is None or not 0 <= val_or_loc <= constants.ADDRESS_MASK:
                raise Emu6502ValueError("Error: memory location %r out of range" % (val_or_loc,))
        else:
            raise Emu6502ValueError("Error: unknown operand kind %r" % (kind,))

        self.kind = kind
        self.val_or_loc = val_or_loc

    def get_byte(self, cpu):
        if self.kind == LOC_VAL:
            return cpu.read(self.val_or_loc)
        if self.kind == BYTE_VAL:
            return self.val_or_loc
        return getattr(cpu, self.kind)

    def set_byte(self, byte_val, cpu):
        byte_val &= constants.BYTE_MASK
        if self.kind == LOC_VAL:
            cpu.write(self.val_or_loc, byte_val)
        elif self.kind == BYTE_VAL:
            raise Emu6502ValueError("Error: can't store into a byte value operand")
        else:
            setattr(cpu, self.kind, byte_val)

    def __repr__(self):
        if self.kind in REGISTER_KINDS:
            return 'OperandRef(%s)' % self.kind
        return 'OperandRef(%s, $%x)' % (self.kind, self.val_or_loc)


A_OPREF = OperandRef(A_REG)
X_OPREF = OperandRef(X_REG)
Y_OPREF = OperandRef(Y_REG)
SP_OPREF = OperandRef(SP_REG)

ADDRESSING_MODES = {
    IMP: Cpu6502Emulator.implied,
    ACC: Cpu6502Emulator.accumulator,
    IMM: Cpu6502Emulator.immediate,
    ZP: Cpu6502Emulator.zeropage,
    ZPX: Cpu6502Emulator.zeropage_x,
    ZPY: Cpu6502Emulator.zeropage_y,
    ABS: Cpu6502Emulator.absolute,
    ABSX: Cpu6502Emulator.absolute_x,
    ABSY: Cpu6502Emulator.absolute_y,
    IND: Cpu6502Emulator.indirect,
    INDX: Cpu6502Emulator.indirect_x,
    INDY: Cpu6502Emulator.indirect_y,
    REL: Cpu6502Emulator.relative,
}

# 256 entries of (instruction body, addressing mode resolver); None = no handler
DISPATCH_TABLE = [None] * 256
for _opcode, (_mnemonic, _mode) in OPCODES.items():
    DISPATCH_TABLE[_opcode] = (getattr(Cpu6502Emulator, _mnemonic), ADDRESSING_MODES[_mode])
