"""
大模型回复解析

模型的输出格式并不可靠，这里只按标记和关键词切分，
切不出来时退回到整段文本或按字符数三等分。
"""
import logging
import re
from typing import Dict, List, Optional

from .models import ThreeWayInterpretation, TwoWayInterpretation

logger = logging.getLogger(__name__)

# 两段式标记
INTERPRETATION_MARKERS = ["【卦象解析】", "【问题解读】"]
ADVICE_MARKERS = ["【建议指导】"]
DEFAULT_ADVICE = "请根据卦象分析，谨慎行事，顺应天时。"

# 三段式关键词，按 问题 → 建议 → 卦象 的顺序匹配
QUESTION_KEYWORDS = ["问题解读", "问题分析", "你的问题", "问题含义"]
GUIDANCE_KEYWORDS = ["建议指导", "指导建议", "建议", "指导"]
HEXAGRAM_KEYWORDS = ["卦象解析", "卦象含义", "核心含义"]

PLACEHOLDER_ANALYSIS = "暂无卦象解析"
PLACEHOLDER_QUESTION = "暂无问题解读"
PLACEHOLDER_ADVICE = "暂无建议指导"

SECTION_HEXAGRAM = "hexagram"
SECTION_QUESTION = "question"
SECTION_GUIDANCE = "guidance"


def _is_bracketed_header(line: str) -> bool:
    return line.startswith("【") and "】" in line


def _contains_any(line: str, keywords: List[str]) -> bool:
    return any(keyword in line for keyword in keywords)


def parse_two_way(text: str) -> TwoWayInterpretation:
    """
    切分为 解读 / 建议 两段

    :param text: 模型回复
    :return: TwoWayInterpretation，两个字段都不为空
    """
    text = text or ""
    buffers: Dict[str, str] = {"interpretation": "", "advice": ""}
    current: Optional[str] = None

    for raw_line in text.split("\n"):
        line = raw_line.strip()

        if _contains_any(line, INTERPRETATION_MARKERS):
            current = "interpretation"
            continue
        if _contains_any(line, ADVICE_MARKERS):
            current = "advice"
            continue

        if not line or _is_bracketed_header(line) or current is None:
            continue
        buffers[current] += line + "\n"

    interpretation = buffers["interpretation"]
    advice = buffers["advice"]

    if not interpretation:
        logger.warning("回复中未找到解读段落，使用全文")
        interpretation = text
    if not advice:
        logger.warning("回复中未找到建议段落，使用默认建议")
        advice = DEFAULT_ADVICE

    return TwoWayInterpretation(
        interpretation=interpretation.strip(),
        advice=advice.strip()
    )


def _split_in_thirds(text: str) -> List[str]:
    """按字符数三等分，切点为 n//3 与 n//3*2"""
    third = len(text) // 3
    return [text[:third], text[third:third * 2], text[third * 2:]]


def parse_three_way(text: str) -> ThreeWayInterpretation:
    """
    切分为 卦象解析 / 问题解读 / 建议指导 三段

    标题行本身不进入任何段落。一个标题关键词都没有匹配到时，
    按字符数把原文三等分。

    :param text: 模型回复
    :return: ThreeWayInterpretation，三个字段都不为空
    """
    text = text or ""
    buffers: Dict[str, str] = {SECTION_HEXAGRAM: "", SECTION_QUESTION: "", SECTION_GUIDANCE: ""}
    current = SECTION_HEXAGRAM
    header_seen = False

    for raw_line in text.split("\n"):
        line = raw_line.strip()

        if _contains_any(line, QUESTION_KEYWORDS):
            current, header_seen = SECTION_QUESTION, True
            continue
        if _contains_any(line, GUIDANCE_KEYWORDS):
            current, header_seen = SECTION_GUIDANCE, True
            continue
        if _contains_any(line, HEXAGRAM_KEYWORDS):
            current, header_seen = SECTION_HEXAGRAM, True
            continue

        if line:
            buffers[current] += line + "\n"

    if header_seen:
        sections = [buffers[name].strip() for name in (SECTION_HEXAGRAM, SECTION_QUESTION, SECTION_GUIDANCE)]
    else:
        sections = ["", "", ""]

    if not any(sections):
        logger.warning("回复中未匹配到任何段落标题，按字符数三等分")
        sections = _split_in_thirds(text)

    analysis, question, guidance = sections
    return ThreeWayInterpretation(
        analysis=analysis or PLACEHOLDER_ANALYSIS,
        question_interpretation=question or PLACEHOLDER_QUESTION,
        advice=guidance or PLACEHOLDER_ADVICE
    )


def clean_model_response(response: str) -> str:
    """
    去掉模型回复里常见的 markdown 痕迹

    :param response: 原始回复
    :return: 清理后的文本；清理后为空时返回原文
    """
    cleaned = response or ""

    cleaned = re.sub(r'\*\*(.+?)\*\*', r'\1', cleaned)  # 粗体
    cleaned = re.sub(r'```.*?```', '', cleaned, flags=re.DOTALL)  # 代码块
    cleaned = re.sub(r'`(.*?)`', r'\1', cleaned)  # 行内代码
    cleaned = re.sub(r'^#{1,6}\s*', '', cleaned, flags=re.MULTILINE)  # 标题符号

    cleaned = re.sub(r'^\s*(---+|\*\*\*+|===+)\s*$', '', cleaned, flags=re.MULTILINE)
    cleaned = re.sub(r'\n{3,}', '\n\n', cleaned)

    if not cleaned.strip():
        logger.warning("清理后的模型回复为空，保留原文")
        return response or ""
    return cleaned
