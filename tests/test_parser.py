"""Tests for splitting model replies into sections."""

import unittest

from modules.liuyao.parser import (
    DEFAULT_ADVICE,
    PLACEHOLDER_ADVICE,
    PLACEHOLDER_ANALYSIS,
    PLACEHOLDER_QUESTION,
    clean_model_response,
    parse_three_way,
    parse_two_way,
)


class TestTwoWayParser(unittest.TestCase):
    def test_marked_sections_round_trip(self) -> None:
        for analysis, advice in [("测试分析", "测试建议"), ("卦象平稳，宜守", "静待时机")]:
            parsed = parse_two_way(f"【卦象解析】\n{analysis}\n【建议指导】\n{advice}")
            self.assertEqual(parsed.interpretation, analysis)
            self.assertEqual(parsed.advice, advice)

    def test_question_marker_continues_interpretation(self) -> None:
        parsed = parse_two_way("【卦象解析】\n甲\n【问题解读】\n乙\n【建议指导】\n丙")
        self.assertEqual(parsed.interpretation, "甲\n乙")
        self.assertEqual(parsed.advice, "丙")

    def test_text_before_any_marker_is_dropped(self) -> None:
        parsed = parse_two_way("开场白\n【卦象解析】\n正文\n【其他】\n【建议指导】\n建议")
        self.assertEqual(parsed.interpretation, "正文")
        self.assertEqual(parsed.advice, "建议")

    def test_no_markers(self) -> None:
        parsed = parse_two_way("  整段回复没有任何标记  ")
        self.assertEqual(parsed.interpretation, "整段回复没有任何标记")
        self.assertEqual(parsed.advice, DEFAULT_ADVICE)


class TestThreeWayParser(unittest.TestCase):
    def test_headed_sections(self) -> None:
        parsed = parse_three_way("【卦象解析】\n测试分析\n【问题解读】\n测试问题\n【建议指导】\n测试建议")
        self.assertEqual(parsed.analysis, "测试分析")
        self.assertEqual(parsed.question_interpretation, "测试问题")
        self.assertEqual(parsed.advice, "测试建议")

    def test_header_lines_are_not_content(self) -> None:
        parsed = parse_three_way("卦象含义：\n一\n二\n问题分析：\n三\n指导：\n四")
        self.assertEqual(parsed.analysis, "一\n二")
        self.assertEqual(parsed.question_interpretation, "三")
        self.assertEqual(parsed.advice, "四")

    def test_positional_fallback(self) -> None:
        parsed = parse_three_way("甲乙丙丁戊己庚辛壬")
        self.assertEqual(parsed.analysis, "甲乙丙")
        self.assertEqual(parsed.question_interpretation, "丁戊己")
        self.assertEqual(parsed.advice, "庚辛壬")

    def test_positional_fallback_remainder_goes_last(self) -> None:
        parsed = parse_three_way("abcdefghij")
        self.assertEqual(parsed.analysis, "abc")
        self.assertEqual(parsed.question_interpretation, "def")
        self.assertEqual(parsed.advice, "ghij")

    def test_missing_sections_get_placeholders(self) -> None:
        parsed = parse_three_way("建议指导\n多休息")
        self.assertEqual(parsed.analysis, PLACEHOLDER_ANALYSIS)
        self.assertEqual(parsed.question_interpretation, PLACEHOLDER_QUESTION)
        self.assertEqual(parsed.advice, "多休息")

    def test_empty_reply(self) -> None:
        parsed = parse_three_way("")
        self.assertEqual(parsed.analysis, PLACEHOLDER_ANALYSIS)
        self.assertEqual(parsed.question_interpretation, PLACEHOLDER_QUESTION)
        self.assertEqual(parsed.advice, PLACEHOLDER_ADVICE)


class TestCleanModelResponse(unittest.TestCase):
    def test_strips_markdown(self) -> None:
        cleaned = clean_model_response("### 【卦象解析】\n**吉**，`宜进`\n---\n\n\n\n结束")
        self.assertEqual(cleaned, "【卦象解析】\n吉，宜进\n\n结束")

    def test_keeps_original_when_nothing_left(self) -> None:
        original = "```\ncode\n```"
        self.assertEqual(clean_model_response(original), original)


if __name__ == "__main__":
    unittest.main()
