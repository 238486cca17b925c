import tempfile
import unittest
from pathlib import Path

from modules.homoglyphs import encode_entry, decode_entry, write_charmap, read_charmap, MalformedMapEntry


class TestEntries(unittest.TestCase):
    def test_encode(self):
        self.assertEqual(encode_entry(0x430, 'a'), '0430 61')
        self.assertEqual(encode_entry(0x33A1, 'm2'), '33A1 6D+32')
        self.assertEqual(encode_entry(0x1F130, 'A'), '1F130 41')
        self.assertEqual(encode_entry(0x39F, '_?_'), '039F 5F+3F+5F')

    def test_whitespace(self):
        self.assertEqual(encode_entry(0x2003, ' '), '2003 20')
        self.assertEqual(encode_entry(0x2029, '\t'), '2029 20')

    def test_non_ascii_rejected(self):
        with self.assertRaises(MalformedMapEntry):
            encode_entry(0xE9, 'é')

    def test_decode(self):
        self.assertEqual(decode_entry('0430 61'), (0x430, 'a'))
        self.assertEqual(decode_entry('1F130 41\n'), (0x1F130, 'A'))
        self.assertEqual(decode_entry('FB00 66+66'), (0xFB00, 'ff'))

    def test_lossless(self):
        for codepoint, value in [(0x430, 'a'), (0x2474, '(1)'), (0x39F, '_?_'), (0xFB03, 'ffi'), (0x2003, ' ')]:
            self.assertEqual(decode_entry(encode_entry(codepoint, value)), (codepoint, value))

    def test_malformed(self):
        for line in ('', '0430', '0430 6', '0430 61+', 'XYZ 61', '0430  61'):
            with self.assertRaises(MalformedMapEntry):
                decode_entry(line)
        with self.assertRaises(ValueError):
            decode_entry('garbage')


class TestFiles(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / 'charmap.txt'

    def tearDown(self):
        self._tmp.cleanup()

    def test_write_read(self):
        entries = [(0x430, 'a'), (0x39F, '_?_'), (0x2003, ' '), (0xFB00, 'ff')]
        self.assertEqual(write_charmap(self.path, entries), 4)
        lines = self.path.read_text(encoding='ascii').splitlines()
        self.assertEqual(lines, ['039F 5F+3F+5F', '0430 61', '2003 20', 'FB00 66+66'])
        self.assertEqual(read_charmap(self.path), dict(entries))

    def test_blank_lines(self):
        self.path.write_text('0430 61\n\n0435 65\n', encoding='ascii')
        self.assertEqual(read_charmap(self.path), {0x430: 'a', 0x435: 'e'})


if __name__ == '__main__':
    unittest.main()
