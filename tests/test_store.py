"""Tests for the in-memory record store and its statistics."""

import asyncio
import unittest
from datetime import datetime

from modules.liuyao.categories import DEFAULT_CATEGORY
from modules.liuyao.statistics import compute_statistics, consecutive_days
from modules.liuyao.store import InMemoryRecordStore

NOW = datetime(2024, 5, 20, 18, 0)


def _record(question: str, created_at: datetime) -> dict:
    return {"question": question, "created_at": created_at}


class TestInMemoryRecordStore(unittest.TestCase):
    def test_rejects_non_positive_capacity(self) -> None:
        for value in (0, -1):
            with self.assertRaises(ValueError):
                InMemoryRecordStore(max_records=value)

    def test_keeps_newest_records_within_capacity(self) -> None:
        store = InMemoryRecordStore(max_records=2)
        for question in ("一", "二", "三"):
            asyncio.run(store.save_divination_record(question, [True] * 6, "解读", "建议"))

        questions = [record["question"] for record in store.fetch_all_records()]
        self.assertEqual(questions, ["三", "二"])

    def test_statistics_counts_saved_records(self) -> None:
        store = InMemoryRecordStore()
        for question in ("工作顺利吗", "要不要跳槽", "明天天气"):
            asyncio.run(store.save_divination_record(question, [False] * 6, "解读", "建议"))

        stats = store.statistics()
        self.assertEqual(stats.total, 3)
        self.assertEqual(stats.monthly, 3)
        self.assertEqual(stats.consecutive_days, 1)
        self.assertEqual(stats.question_types[0].type, "事业工作")
        self.assertEqual(stats.question_types[0].count, 2)


class TestStatistics(unittest.TestCase):
    def test_empty(self) -> None:
        stats = compute_statistics([], now=NOW)
        self.assertEqual(stats.total, 0)
        self.assertEqual(stats.monthly, 0)
        self.assertEqual(stats.consecutive_days, 0)
        self.assertEqual(stats.question_types, [])

    def test_monthly_and_distribution(self) -> None:
        records = [
            _record("他还喜欢我吗", datetime(2024, 5, 1, 0, 0)),
            _record("能复合吗", datetime(2024, 5, 19, 9, 0)),
            _record("随便问问", datetime(2024, 4, 30, 23, 59)),
        ]

        stats = compute_statistics(records, now=NOW)

        self.assertEqual(stats.total, 3)
        self.assertEqual(stats.monthly, 2)
        self.assertEqual([item.type for item in stats.question_types], ["感情婚姻", DEFAULT_CATEGORY])
        self.assertAlmostEqual(stats.question_types[0].percentage, 2 / 3)

    def test_consecutive_days(self) -> None:
        dates = [
            datetime(2024, 5, 20, 8, 0),
            datetime(2024, 5, 20, 9, 0),
            datetime(2024, 5, 19, 23, 0),
            datetime(2024, 5, 18, 1, 0),
            datetime(2024, 5, 16, 12, 0),
        ]
        self.assertEqual(consecutive_days(dates, NOW), 3)

    def test_streak_needs_a_record_today(self) -> None:
        self.assertEqual(consecutive_days([datetime(2024, 5, 19, 12, 0)], NOW), 0)


if __name__ == "__main__":
    unittest.main()
