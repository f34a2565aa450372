import unittest
from parameterized import parameterized

from nessie import addressing
from nessie.addressing import resolve_address, page_crossed
from nessie.emulator_6502 import Cpu6502Emulator
from nessie.errors import InvalidAddressingError
from nessie.opcodes import AddressingMode

OPERAND_AT = 0x8001  # pc points here, just past a (pretend) opcode at $8000


class TestAddressing(unittest.TestCase):
    def setUp(self):
        self.cpu = Cpu6502Emulator()
        self.cpu.pc = OPERAND_AT

    def operands(self, *data):
        self.cpu.inject_bytes(OPERAND_AT, data)

    def test_immediate_is_the_operand_byte_itself(self):
        self.operands(0x42)
        self.assertEqual(resolve_address(self.cpu, AddressingMode.IMMEDIATE), OPERAND_AT)

    def test_relative_is_the_offset_byte(self):
        self.assertEqual(resolve_address(self.cpu, AddressingMode.RELATIVE), OPERAND_AT)

    def test_zeropage(self):
        self.operands(0x77)
        self.assertEqual(resolve_address(self.cpu, AddressingMode.ZERO_PAGE), 0x0077)

    @parameterized.expand([
        (0x10, 0x05, 0x15),
        (0xff, 0x02, 0x01),   # wraps inside the zero page, never $0101
        (0x80, 0xff, 0x7f),
    ])
    def test_zeropage_indexed_wraps(self, base, index, expected):
        self.operands(base)
        self.cpu.x = index
        self.assertEqual(resolve_address(self.cpu, AddressingMode.ZERO_PAGE_X), expected)
        self.cpu.x = 0
        self.cpu.y = index
        self.assertEqual(resolve_address(self.cpu, AddressingMode.ZERO_PAGE_Y), expected)

    def test_zeropage_x_uses_x_and_zeropage_y_uses_y(self):
        self.operands(0x10)
        self.cpu.x = 0x01
        self.cpu.y = 0x02
        self.assertEqual(resolve_address(self.cpu, AddressingMode.ZERO_PAGE_X), 0x11)
        self.assertEqual(resolve_address(self.cpu, AddressingMode.ZERO_PAGE_Y), 0x12)

    def test_absolute(self):
        self.operands(0x34, 0x12)
        self.assertEqual(resolve_address(self.cpu, AddressingMode.ABSOLUTE), 0x1234)

    def test_absolute_indexed(self):
        self.operands(0x34, 0x12)
        self.cpu.x = 0x10
        self.cpu.y = 0x20
        self.assertEqual(resolve_address(self.cpu, AddressingMode.ABSOLUTE_X), 0x1244)
        self.assertEqual(resolve_address(self.cpu, AddressingMode.ABSOLUTE_Y), 0x1254)

    def test_absolute_indexed_wraps_at_64k(self):
        self.operands(0xff, 0xff)
        self.cpu.x = 0x02
        self.assertEqual(resolve_address(self.cpu, AddressingMode.ABSOLUTE_X), 0x0001)

    def test_indirect_x_adds_index_before_dereferencing(self):
        self.operands(0x20)
        self.cpu.x = 0x04
        self.cpu.write16(0x0024, 0x3074)
        self.cpu.write16(0x0020, 0xdead)  # not used: index comes first
        self.assertEqual(resolve_address(self.cpu, AddressingMode.INDIRECT_X), 0x3074)

    def test_indirect_x_pointer_wraps_in_zero_page(self):
        self.operands(0xfe)
        self.cpu.x = 0x01
        self.cpu.write(0x00ff, 0x34)
        self.cpu.write(0x0000, 0x12)
        self.cpu.write(0x0100, 0x99)  # would be the high byte without the wrap
        self.assertEqual(resolve_address(self.cpu, AddressingMode.INDIRECT_X), 0x1234)

    def test_indirect_y_adds_index_after_dereferencing(self):
        self.operands(0x86)
        self.cpu.y = 0x10
        self.cpu.write16(0x0086, 0x4028)
        self.assertEqual(resolve_address(self.cpu, AddressingMode.INDIRECT_Y), 0x4038)

    def test_indirect_y_pointer_high_byte_wraps_in_zero_page(self):
        self.operands(0xff)
        self.cpu.y = 0x01
        self.cpu.write(0x00ff, 0x00)
        self.cpu.write(0x0000, 0x20)
        self.assertEqual(resolve_address(self.cpu, AddressingMode.INDIRECT_Y), 0x2001)

    def test_indirect_y_wraps_at_64k(self):
        self.operands(0x10)
        self.cpu.y = 0x03
        self.cpu.write16(0x0010, 0xffff)
        self.assertEqual(resolve_address(self.cpu, AddressingMode.INDIRECT_Y), 0x0002)

    def test_indirect(self):
        self.operands(0x00, 0x30)
        self.cpu.write16(0x3000, 0x1234)
        self.assertEqual(resolve_address(self.cpu, AddressingMode.INDIRECT), 0x1234)

    def test_indirect_page_wrap_quirk(self):
        # JMP ($30FF) takes the high byte from $3000, not $3100
        self.operands(0xff, 0x30)
        self.cpu.write(0x30ff, 0x80)
        self.cpu.write(0x3000, 0x50)
        self.cpu.write(0x3100, 0x40)
        self.assertEqual(resolve_address(self.cpu, AddressingMode.INDIRECT), 0x5080)

    @parameterized.expand([(AddressingMode.IMPLIED,), (AddressingMode.ACCUMULATOR,)])
    def test_register_modes_have_no_address(self, mode):
        self.assertFalse(mode.has_address)
        with self.assertRaises(InvalidAddressingError):
            resolve_address(self.cpu, mode)

    def test_page_crossing(self):
        self.operands(0xf0, 0x12)
        self.cpu.x = 0x0f
        self.assertFalse(page_crossed(self.cpu, AddressingMode.ABSOLUTE_X))
        self.cpu.x = 0x10
        self.assertTrue(page_crossed(self.cpu, AddressingMode.ABSOLUTE_X))
        self.assertFalse(page_crossed(self.cpu, AddressingMode.ABSOLUTE))
        self.assertTrue(addressing.eval_page_crossing(0x12ff, 0x1300))


if __name__ == '__main__':
    unittest.main()
