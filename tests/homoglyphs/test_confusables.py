import unittest

from modules.unicode_data import MemoryCodepointStore, CodepointRecord
from modules.homoglyphs import (
    ConfusableMerger, ConfusableRow, iter_clusters, ascii_candidates, AmbiguousConfusableCluster
)


def make_store(*codepoints: int) -> MemoryCodepointStore:
    return MemoryCodepointStore(CodepointRecord(cp, chr(cp)) for cp in codepoints)


class TestIterClusters(unittest.TestCase):
    def test_grouping(self):
        rows = [
            ConfusableRow('', 'a'),
            ConfusableRow('←', '\u0430'),
            ConfusableRow('←', '\u0251'),
            ConfusableRow('', '0'),
            ConfusableRow('←', 'O'),
        ]
        self.assertEqual(list(iter_clusters(rows)), [['a', '\u0430', '\u0251'], ['0', 'O']])

    def test_leading_members_without_marker(self):
        rows = [ConfusableRow('←', 'x'), ConfusableRow('', 'y')]
        self.assertEqual(list(iter_clusters(rows)), [['x'], ['y']])

    def test_empty(self):
        self.assertEqual(list(iter_clusters([])), [])


class TestAsciiCandidates(unittest.TestCase):
    def test_order_preserved(self):
        self.assertEqual(ascii_candidates(['\u041e', 'O', '0', 'O', 'rn']), ['O', '0'])
        self.assertEqual(ascii_candidates(['\u0430', '\u0251']), [])


class TestConfusableMerger(unittest.TestCase):
    def test_single_ascii(self):
        store = make_store(0x61, 0x430)
        merger = ConfusableMerger(store)
        self.assertEqual(merger.merge_cluster(['\u0430', 'a']), 1)
        self.assertEqual(store.get(0x430).ascii, 'a')
        self.assertIsNone(store.get(0x61).ascii)
        self.assertEqual(store.changes, {0x430: 'a'})
        self.assertEqual(merger.conflicts, [])

    def test_ambiguous(self):
        store = make_store(0x30, 0x4F, 0x39F)
        merger = ConfusableMerger(store)
        with self.assertLogs('homoglyphs.confusables', 'WARNING') as logs:
            merger.merge_cluster(['0', 'O', '\u039f'])
        self.assertEqual(len(logs.output), 1)
        self.assertIn('Multiple ASCII equivalents', logs.output[0])
        self.assertEqual(store.get(0x39F).ascii, '_?_')
        self.assertIsNone(store.get(0x30).ascii)
        self.assertIsNone(store.get(0x4F).ascii)
        self.assertEqual(len(merger.conflicts), 1)
        conflict = merger.conflicts[0]
        self.assertIsInstance(conflict, AmbiguousConfusableCluster)
        self.assertEqual(conflict.candidates, ('0', 'O'))
        self.assertEqual(conflict.members, ('0', 'O', '\u039f'))

    def test_custom_sentinel(self):
        store = make_store(0x39F)
        merger = ConfusableMerger(store, sentinel='??')
        with self.assertLogs('homoglyphs.confusables', 'WARNING'):
            merger.merge_cluster(['0', 'O', '\u039f'])
        self.assertEqual(store.get(0x39F).ascii, '??')

    def test_no_ascii(self):
        store = make_store(0x430, 0x251)
        self.assertEqual(ConfusableMerger(store).merge_cluster(['\u0430', '\u0251']), 0)
        self.assertEqual(store.changes, {})

    def test_multichar_members_skipped(self):
        store = make_store(0xFF4D, 0x33A1)
        written = ConfusableMerger(store).merge_cluster(['m', 'rn', '\uff4d'])
        self.assertEqual(written, 1)
        self.assertEqual(store.changes, {0xFF4D: 'm'})

    def test_multichar_not_a_candidate(self):
        store = make_store(0x1D0D)
        ConfusableMerger(store).merge_cluster(['rn', 'm', '\u1d0d'])
        self.assertEqual(store.get(0x1D0D).ascii, 'm')

    def test_no_clobber(self):
        store = MemoryCodepointStore([CodepointRecord(0x430, ascii='a'), CodepointRecord(0x3B1)])
        ConfusableMerger(store).merge_cluster(['\u03b1', '\u0430', 'x'])
        self.assertEqual(store.get(0x430).ascii, 'a')
        self.assertEqual(store.get(0x3B1).ascii, 'x')

    def test_unknown_member(self):
        store = make_store(0x430)
        self.assertEqual(ConfusableMerger(store).merge_cluster(['a', '\U0001D41A', '\u0430']), 1)

    def test_merge(self):
        store = make_store(0x430, 0x39F, 0x51B)
        merger = ConfusableMerger(store)
        with self.assertLogs('homoglyphs.confusables', 'INFO') as logs:
            written = merger.merge([['a', '\u0430'], ['0', 'O', '\u039f'], ['\u051b', 'q']])
        self.assertEqual(written, 3)
        self.assertEqual(store.changes, {0x430: 'a', 0x39F: '_?_', 0x51B: 'q'})
        self.assertTrue(any('Processed 3 clusters, 1 conflicts' in line for line in logs.output))


if __name__ == '__main__':
    unittest.main()
