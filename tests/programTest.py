# Whole-program tests: small machine language routines run from reset

import unittest

from emu6502.testing_tools import make_cpu, run_until


class ProgramTests(unittest.TestCase):
    def test_load_add_store(self):
        cpu = make_cpu([
            0xa9, 0x03,        # LDA #$03
            0x69, 0x05,        # ADC #$05
            0x8d, 0x00, 0x60,  # STA $6000
        ])
        for _ in range(3):
            cpu.step()
        self.assertEqual(cpu.a, 0x08)
        self.assertEqual(cpu.read(0x6000), 0x08)
        self.assertEqual(cpu.pc, 0x8007)

    def test_beq_skips_instruction(self):
        cpu = make_cpu([
            0xa9, 0x00,        # LDA #$00
            0xf0, 0x02,        # BEQ +2
            0xa9, 0x01,        # LDA #$01 (skipped)
            0x8d, 0x00, 0x60,  # STA $6000
        ])
        cpu.write(0x6000, 0xff)
        for _ in range(3):
            cpu.step()
        self.assertEqual(cpu.a, 0x00)
        self.assertEqual(cpu.read(0x6000), 0x00)

    def test_countdown_loop(self):
        cpu = make_cpu([
            0xa2, 0x03,        # LDX #$03
            0xca,              # DEX
            0xd0, 0xfd,        # BNE -3 (to DEX)
            0x8e, 0x00, 0x60,  # STX $6000
        ])
        cpu.write(0x6000, 0xff)
        for _ in range(8):
            cpu.step()
        self.assertEqual(cpu.x, 0x00)
        self.assertEqual(cpu.read(0x6000), 0x00)

    def test_subroutine(self):
        cpu = make_cpu([
            0x20, 0x06, 0x80,  # JSR $8006
            0x8d, 0x00, 0x60,  # STA $6000
            0xa9, 0x42,        # LDA #$42
            0x60,              # RTS
        ])
        for _ in range(4):
            cpu.step()
        self.assertEqual(cpu.a, 0x42)
        self.assertEqual(cpu.read(0x6000), 0x42)
        self.assertEqual(cpu.sp, 0xfd)

    def test_sum_one_to_ten(self):
        cpu = make_cpu([
            0xa2, 0x0a,        # LDX #$0A
            0xa9, 0x00,        # LDA #$00
            0x18,              # loop: CLC
            0x86, 0x10,        # STX $10
            0x65, 0x10,        # ADC $10
            0xca,              # DEX
            0xd0, 0xf8,        # BNE loop
            0x8d, 0x00, 0x60,  # STA $6000
        ])
        run_until(cpu, 0x800f)
        self.assertEqual(cpu.read(0x6000), 55)

    def test_copy_with_indirect_indexed(self):
        cpu = make_cpu([
            0xa9, 0x00, 0x85, 0xfb,  # LDA #<$2000, STA $FB
            0xa9, 0x20, 0x85, 0xfc,  # LDA #>$2000, STA $FC
            0xa9, 0x00, 0x85, 0xfd,  # LDA #<$3000, STA $FD
            0xa9, 0x30, 0x85, 0xfe,  # LDA #>$3000, STA $FE
            0xa0, 0x00,              # LDY #$00
            0xb1, 0xfb,              # loop: LDA ($FB),Y
            0x91, 0xfd,              # STA ($FD),Y
            0xc8,                    # INY
            0xc0, 0x10,              # CPY #$10
            0xd0, 0xf7,              # BNE loop
        ])
        source = list(range(0x80, 0x90))
        cpu.inject_bytes(0x2000, source)
        run_until(cpu, 0x801b)
        self.assertEqual([cpu.read(0x3000 + i) for i in range(16)], source)
        self.assertEqual(cpu.read(0x3010), 0x00)

    def test_obfuscated_sig(self):
        # Prints a string through a stubbed out character output routine at $FFD2
        #
        # 8000  A0 0F       LDY #$0F
        # 8002  98          TYA
        # 8003  59 0C 80    EOR $800C,Y
        # 8006  20 D2 FF    JSR $FFD2
        # 8009  88          DEY
        # 800a  D0 F6       BNE $8002
        # 800c  60          RTS
        test_prog = [160, 15, 152, 89, 12, 128, 32, 210, 255, 136, 208, 246, 96, 12, 71,
                     81, 65, 77, 38, 84, 73, 94, 42, 74, 74, 66, 87, 2]
        cpu = make_cpu(test_prog)
        cpu.write(0xffd2, 0x60)  # RTS

        output_text = ""
        for _ in range(1000):
            if cpu.pc == 0x800c:
                break
            cpu.step()
            # Capture characters sent to the print routine
            if cpu.pc == 0xffd2:
                output_text += chr(cpu.a)

        self.assertEqual(output_text, '\rYOFA WAS HERE\r')
        self.assertEqual(cpu.sp, 0xfd)


if __name__ == '__main__':
    unittest.main()
