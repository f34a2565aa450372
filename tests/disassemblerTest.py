import unittest
from parameterized import parameterized

from nessie.disassembler import disassemble, disassemble_range
from nessie.memory import Memory
from nessie.opcodes import AddressingMode, OpcodeDescriptor, OpcodeTable


def reader_for(program, origin=0x8000):
    memory = Memory()
    memory.load(origin, program)
    return memory.read


class TestDisassembler(unittest.TestCase):
    @parameterized.expand([
        ([0xea], 'NOP', 1),
        ([0x0a], 'ASL A', 1),
        ([0xa9, 0x05], 'LDA #$05', 2),
        ([0x85, 0x77], 'STA $77', 2),
        ([0xb5, 0x10], 'LDA $10,X', 2),
        ([0xb6, 0x10], 'LDX $10,Y', 2),
        ([0xa1, 0x20], 'LDA ($20,X)', 2),
        ([0xb1, 0x20], 'LDA ($20),Y', 2),
        ([0x8d, 0x00, 0x02], 'STA $0200', 3),
        ([0x9d, 0x00, 0x02], 'STA $0200,X', 3),
        ([0xb9, 0x34, 0x12], 'LDA $1234,Y', 3),
        ([0x6c, 0xfc, 0xff], 'JMP ($FFFC)', 3),
        ([0x20, 0xd2, 0xff], 'JSR $FFD2', 3),
    ])
    def test_modes(self, program, text, length):
        self.assertEqual(disassemble(reader_for(program), 0x8000), (text, length))

    def test_branch_targets(self):
        read = reader_for([0xd0, 0xfe, 0xf0, 0x02, 0x90, 0x80])
        self.assertEqual(disassemble(read, 0x8000)[0], 'BNE $8000')
        self.assertEqual(disassemble(read, 0x8002)[0], 'BEQ $8006')
        self.assertEqual(disassemble(read, 0x8004)[0], 'BCC $7F86')

    def test_unknown_byte(self):
        self.assertEqual(disassemble(reader_for([0xff]), 0x8000), ('.byte $FF', 1))

    def test_jam_is_named(self):
        self.assertEqual(disassemble(reader_for([0x02]), 0x8000), ('JAM', 1))

    def test_operand_wraps_past_top_of_memory(self):
        memory = Memory()
        memory.write(0xffff, 0xad)
        memory.write(0x0000, 0x34)
        memory.write(0x0001, 0x12)
        self.assertEqual(disassemble(memory.read, 0xffff), ('LDA $1234', 3))

    def test_custom_table(self):
        table = OpcodeTable([OpcodeDescriptor(0xa9, 'LDA', AddressingMode.IMMEDIATE, 2)])
        read = reader_for([0xa9, 0x01, 0xea])
        self.assertEqual(disassemble(read, 0x8000, table), ('LDA #$01', 2))
        self.assertEqual(disassemble(read, 0x8002, table), ('.byte $EA', 1))

    def test_range(self):
        read = reader_for([0xa2, 0x00, 0xe8, 0xe0, 0x05, 0xd0, 0xfb, 0x00])
        listing = list(disassemble_range(read, 0x8000, 5))
        self.assertEqual(listing, [
            (0x8000, 'LDX #$00'),
            (0x8002, 'INX'),
            (0x8003, 'CPX #$05'),
            (0x8005, 'BNE $8002'),
            (0x8007, 'BRK'),
        ])


if __name__ == '__main__':
    unittest.main()
