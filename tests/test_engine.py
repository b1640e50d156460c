"""Tests for hexagram derivation and the 64-hexagram table."""

import itertools
import random
import unittest

from modules.liuyao.data import HEXAGRAMS, describe_hexagram, get_all_hexagrams
from modules.liuyao.engine import FALLBACK_RECORD, HexagramEngine


class TestHexagramEngine(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = HexagramEngine(rng=random.Random(7))

    def test_every_six_line_combination_resolves_to_distinct_record(self) -> None:
        names = set()
        for lines in itertools.product([True, False], repeat=6):
            record = self.engine.resolve(list(lines))
            self.assertNotEqual(record, FALLBACK_RECORD)
            names.add(record.name)
        self.assertEqual(len(names), 64)

    def test_malformed_keys_return_fallback(self) -> None:
        for key in ["", "10101", "1010101", "abcdef", "10102x", None]:
            self.assertEqual(self.engine.lookup(key), FALLBACK_RECORD)

    def test_key_follows_toss_order(self) -> None:
        lines = [True, False, True, False, True, False]
        self.assertEqual(self.engine.to_key(lines), "101010")
        self.assertEqual(self.engine.resolve(lines).name, "水火既济")
        self.assertEqual(self.engine.to_yin_yang(lines), "阳-阴-阳-阴-阳-阴")

    def test_toss_produces_six_lines(self) -> None:
        lines = self.engine.toss()
        self.assertEqual(len(lines), 6)
        self.assertTrue(all(isinstance(line, bool) for line in lines))

    def test_seeded_toss_is_reproducible(self) -> None:
        first = HexagramEngine(rng=random.Random(42)).toss()
        second = HexagramEngine(rng=random.Random(42)).toss()
        self.assertEqual(first, second)


class TestHexagramTable(unittest.TestCase):
    def test_table_is_complete(self) -> None:
        self.assertEqual(len(HEXAGRAMS), 64)
        numbers = [item["number"] for item in get_all_hexagrams()]
        self.assertEqual(numbers, list(range(1, 65)))

    def test_describe_includes_trigrams(self) -> None:
        info = describe_hexagram("101010")
        self.assertEqual(info["lower_trigram"], "离")
        self.assertEqual(info["upper_trigram"], "坎")
        self.assertEqual(info["number"], 63)

    def test_describe_unknown_key(self) -> None:
        self.assertIsNone(describe_hexagram("2"))


if __name__ == "__main__":
    unittest.main()
