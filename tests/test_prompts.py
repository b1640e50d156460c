"""Tests for prompt construction."""

import unittest
from datetime import datetime

from modules.liuyao.models import InterpretationRequest, SymbolRecord
from modules.liuyao.prompts import (
    HOUR_PERIODS,
    UNKNOWN_HOUR_PERIOD,
    UNKNOWN_LOCATION,
    build_prompt,
    hour_period,
    yao_details,
)

LINES = [True, False, True, False, True, False]
RECORD = SymbolRecord(name="水火既济", description="水在火上，既济，君子以思患而豫防之")


def _request(location: str = "杭州市", hour: int = 9) -> InterpretationRequest:
    return InterpretationRequest(
        question="今年换工作合适吗？",
        toss_results=LINES,
        divination_time=datetime(2024, 5, 1, hour, 30),
        divination_location=location
    )


class TestHourPeriod(unittest.TestCase):
    def test_midnight_wraps_into_zi(self) -> None:
        self.assertEqual(hour_period(23), "子时")
        self.assertEqual(hour_period(0), hour_period(23))

    def test_boundaries(self) -> None:
        self.assertEqual(hour_period(1), "丑时")
        self.assertEqual(hour_period(11), "午时")
        self.assertEqual(hour_period(12), "午时")
        self.assertEqual(hour_period(22), "亥时")

    def test_every_hour_is_defined(self) -> None:
        periods = {hour_period(hour) for hour in range(24)}
        self.assertEqual(periods, {f"{name}时" for name in HOUR_PERIODS})

    def test_invalid_hour(self) -> None:
        self.assertEqual(hour_period("abc"), UNKNOWN_HOUR_PERIOD)
        self.assertEqual(hour_period(None), UNKNOWN_HOUR_PERIOD)


class TestBuildPrompt(unittest.TestCase):
    def test_three_section_prompt(self) -> None:
        prompt = build_prompt(_request(), RECORD)
        for text in ["今年换工作合适吗？", "水火既济", "阳-阴-阳-阴-阳-阴", "杭州市",
                     "2024-05-01 09:30", "巳时", "【卦象解析】", "【问题解读】", "【建议指导】"]:
            self.assertIn(text, prompt)

    def test_two_section_prompt(self) -> None:
        prompt = build_prompt(_request(), RECORD, sections="two")
        self.assertIn("【卦象解析】", prompt)
        self.assertIn("【建议指导】", prompt)
        self.assertNotIn("【问题解读】", prompt)

    def test_blank_location(self) -> None:
        prompt = build_prompt(_request(location="  "), RECORD)
        self.assertIn(UNKNOWN_LOCATION, prompt)

    def test_yao_details(self) -> None:
        details = yao_details(LINES)
        self.assertTrue(details.startswith("第1爻：阳爻，第2爻：阴爻"))
        self.assertIn("第6爻：阴爻", details)


if __name__ == "__main__":
    unittest.main()
