import unittest
from parameterized import parameterized

from nessie.memory import Memory
from nessie.errors import NessieValueError, ProgramTooLargeError


class TestMemory(unittest.TestCase):
    def setUp(self):
        self.memory = Memory()

    def test_full_address_space_zeroed(self):
        self.assertEqual(self.memory.size, 0x10000)
        self.assertEqual(len(self.memory), 0x10000)
        self.assertEqual(self.memory.read(0x0000), 0)
        self.assertEqual(self.memory.read(0xffff), 0)
        self.assertEqual(self.memory.slice(0xfff0, 16), bytes(16))

    def test_read_write(self):
        self.memory.write(0x0077, 0x05)
        self.assertEqual(self.memory.read(0x0077), 0x05)
        self.assertEqual(self.memory[0x0077], 0x05)
        self.memory[0xffff] = 0xff
        self.assertEqual(self.memory.read(0xffff), 0xff)

    def test_address_wraps_to_16_bits(self):
        self.memory.write(0x10001, 0x42)
        self.assertEqual(self.memory.read(0x0001), 0x42)

    @parameterized.expand([(-1,), (256,), (1000,)])
    def test_write_rejects_non_byte(self, value):
        with self.assertRaises(NessieValueError):
            self.memory.write(0x0200, value)
        self.assertEqual(self.memory.read(0x0200), 0)

    def test_read16_is_little_endian(self):
        self.memory.write(0x1000, 0x34)
        self.memory.write(0x1001, 0x12)
        self.assertEqual(self.memory.read16(0x1000), 0x1234)

    def test_write16_is_little_endian(self):
        self.memory.write16(0xfffc, 0x8000)
        self.assertEqual(self.memory.read(0xfffc), 0x00)
        self.assertEqual(self.memory.read(0xfffd), 0x80)

    @parameterized.expand([
        (0x0000, 0x0000),
        (0x00ff, 0xbeef),
        (0x1234, 0xffff),
        (0xfffe, 0x0102),
    ])
    def test_word_round_trip(self, addr, word):
        self.memory.write16(addr, word)
        self.assertEqual(self.memory.read16(addr), word)

    def test_read16_at_top_of_memory_wraps(self):
        self.memory.write(0xffff, 0xcd)
        self.memory.write(0x0000, 0xab)
        self.assertEqual(self.memory.read16(0xffff), 0xabcd)

    def test_write16_rejects_non_word(self):
        with self.assertRaises(NessieValueError):
            self.memory.write16(0x0000, 0x10000)

    def test_load(self):
        self.memory.load(0x8000, [0xa9, 0x05, 0x00])
        self.assertEqual(self.memory.slice(0x8000, 3), bytes([0xa9, 0x05, 0x00]))

    def test_load_to_the_last_byte(self):
        self.memory.load(0xfffe, b'\x01\x02')
        self.assertEqual(self.memory.read16(0xfffe), 0x0201)

    def test_load_too_large_leaves_memory_untouched(self):
        with self.assertRaises(ProgramTooLargeError) as cm:
            self.memory.load(0xfffe, [1, 2, 3])
        self.assertEqual(cm.exception.size, 3)
        self.assertEqual(cm.exception.available, 2)
        self.assertEqual(self.memory.slice(0xfffe, 2), bytes(2))

    def test_load_rejects_non_bytes(self):
        with self.assertRaises(NessieValueError):
            self.memory.load(0x8000, [0x100])

    def test_clear(self):
        self.memory.load(0x0200, b'\xff' * 16)
        self.memory.clear()
        self.assertEqual(self.memory.slice(0x0200, 16), bytes(16))

    def test_dump(self):
        self.memory.load(0x0200, b'HELLO')
        dump = self.memory.dump(0x0200, 16)
        self.assertTrue(dump.startswith('0200: 48 45 4C 4C 4F 00'))
        self.assertIn('HELLO', dump)


if __name__ == '__main__':
    unittest.main()
