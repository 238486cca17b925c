import unittest

from modules.unicode_data import MemoryCodepointStore, CodepointRecord
from modules.homoglyphs import DecompositionResolver, DecompositionCycle, strip_non_ascii


def make_store() -> MemoryCodepointStore:
    return MemoryCodepointStore([
        CodepointRecord(0x28, '( LEFT PARENTHESIS'),
        CodepointRecord(0x29, ') RIGHT PARENTHESIS'),
        CodepointRecord(0x55, 'U LATIN CAPITAL LETTER U'),
        CodepointRecord(0x65, 'e LATIN SMALL LETTER E'),
        CodepointRecord(0xDC, 'Ü LATIN CAPITAL LETTER U WITH DIAERESIS', decomposition='0055 0308'),
        CodepointRecord(0xE9, 'é LATIN SMALL LETTER E WITH ACUTE', decomposition='0065 0301'),
        CodepointRecord(0x131, 'ı LATIN SMALL LETTER DOTLESS I', ascii='i'),
        CodepointRecord(0x1D5, 'Ǖ LATIN CAPITAL LETTER U WITH DIAERESIS AND MACRON', decomposition='00DC 0304'),
        CodepointRecord(0x301, 'COMBINING ACUTE ACCENT'),
        CodepointRecord(0x304, 'COMBINING MACRON'),
        CodepointRecord(0x308, 'COMBINING DIAERESIS'),
        CodepointRecord(0x1E2D, 'ḭ LATIN SMALL LETTER I WITH TILDE BELOW', decomposition='0131 0330'),
        CodepointRecord(0x1E00, 'Ḁ LATIN CAPITAL LETTER A WITH RING BELOW', decomposition='0041 0325'),
        CodepointRecord(0x3200, '㈀ PARENTHESIZED HANGUL KIYEOK', decomposition='0028 1100 0029'),
        CodepointRecord(0x3131, 'ㄱ HANGUL LETTER KIYEOK', decomposition='1100'),
        CodepointRecord(0x212B, 'Å ANGSTROM SIGN', decomposition='00C5', ascii='A'),
        CodepointRecord(0xE000, 'PRIVATE USE ONE', decomposition='E001'),
        CodepointRecord(0xE001, 'PRIVATE USE TWO', decomposition='E000'),
    ])


class TestDecompositionResolver(unittest.TestCase):
    def setUp(self):
        self.store = make_store()
        self.resolver = DecompositionResolver(self.store, max_depth=8)

    def test_simple(self):
        self.assertEqual(self.resolver.resolve(0xE9), 'e')
        self.assertEqual(self.store.get(0xE9).ascii, 'e')

    def test_recursive(self):
        self.assertEqual(self.resolver.resolve(0x1D5), 'U')

    def test_existing_ascii_of_constituent(self):
        self.assertEqual(self.resolver.resolve(0x1E2D), 'i')

    def test_unknown_constituent_used_as_is(self):
        # U+0041 отсутствует в хранилище, используется сам символ
        self.assertEqual(self.resolver.resolve(0x1E00), 'A')

    def test_placeholder_rejected(self):
        self.assertIsNone(self.resolver.resolve(0x3200))
        self.assertIsNone(self.store.get(0x3200).ascii)

    def test_empty_rejected(self):
        self.assertIsNone(self.resolver.resolve(0x3131))
        self.assertNotIn(0x3131, self.store.changes)

    def test_no_decomposition(self):
        self.assertIsNone(self.resolver.resolve(0x65))
        self.assertIsNone(self.resolver.resolve(0x10FFFF))

    def test_idempotent(self):
        first = self.resolver.resolve(0xDC)
        changes = self.store.changes
        second = self.resolver.resolve(0xDC)
        self.assertEqual(first, 'U')
        self.assertEqual(first, second)
        self.assertEqual(self.store.changes, changes)

    def test_no_clobber(self):
        self.store.set_ascii(0xE9, 'E')
        self.assertEqual(self.resolver.resolve(0xE9), 'e')
        self.assertEqual(self.store.get(0xE9).ascii, 'E')

    def test_cycle(self):
        with self.assertRaises(DecompositionCycle) as ctx:
            self.resolver.resolve(0xE000)
        self.assertEqual(ctx.exception.codepoint, 0xE000)
        self.assertIn('U+E000', str(ctx.exception))

    def test_resolve_all(self):
        with self.assertLogs('homoglyphs.decompose', 'WARNING') as logs:
            written = self.resolver.resolve_all(self.store)
        self.assertTrue(any('U+E000' in line for line in logs.output))
        self.assertEqual(self.store.changes, {0xDC: 'U', 0xE9: 'e', 0x1D5: 'U', 0x1E00: 'A', 0x1E2D: 'i'})
        self.assertEqual(written, 5)
        self.assertEqual(self.store.get(0x212B).ascii, 'A')
        self.assertIsNone(self.store.get(0xE000).ascii)
        # повторный проход ничего не меняет
        self.assertEqual(self.resolver.resolve_all(self.store), 0)


class TestStripNonAscii(unittest.TestCase):
    def test_strip(self):
        self.assertEqual(strip_non_ascii('e\u0301'), 'e')
        self.assertEqual(strip_non_ascii('\u00e9'), '')
        self.assertEqual(strip_non_ascii('ᄀ'), '')
        self.assertEqual(strip_non_ascii('(ᄀ)'), '()')


if __name__ == '__main__':
    unittest.main()
