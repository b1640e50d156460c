"""
解卦提示词
"""
from datetime import datetime
from typing import Any, Sequence

from .engine import HexagramEngine
from .models import SECTIONS_TWO, InterpretationRequest, SymbolRecord

# 十二时辰，子时从 23:00 开始
HOUR_PERIODS = ["子", "丑", "寅", "卯", "辰", "巳", "午", "未", "申", "酉", "戌", "亥"]

UNKNOWN_LOCATION = "未知地点"
UNKNOWN_HOUR_PERIOD = "未知时辰"

THREE_SECTION_TEMPLATE = """你是一位精通六爻占卜的大师，请根据以下信息为用户提供专业的卦象解读：

【用户问题】：{question}

【卦象信息】：
- 卦名：{hexagram_name}
- 卦象描述：{hexagram_description}
- 爻象组合：{yin_yang}
- 六爻详情：{yao_details}

【起卦信息】：
- 起卦时间：{divination_time}（{hour_period}）
- 起卦地点：{location}

请严格按照以下三个部分作答，每个部分以对应标记单独成行开头：

【卦象解析】
整体运势与卦象的核心含义，结合起卦时间与地点说明当前态势。

【问题解读】
结合卦象具体分析用户的问题，指出关键所在。

【建议指导】
给出具体的行动建议、注意事项以及时机把握。

请用温和、智慧的语调回答，内容要有深度但易于理解，多使用分段和要点来提高可读性。"""

TWO_SECTION_TEMPLATE = """你是一位精通六爻占卜的大师，请根据以下信息为用户提供专业的卦象解读：

【用户问题】：{question}

【卦象信息】：
- 卦名：{hexagram_name}
- 卦象描述：{hexagram_description}
- 爻象组合：{yin_yang}
- 六爻详情：{yao_details}

【起卦信息】：
- 起卦时间：{divination_time}（{hour_period}）
- 起卦地点：{location}

请严格按照以下两个部分作答，每个部分以对应标记单独成行开头：

【卦象解析】
整体运势与卦象的核心含义，并结合卦象解读用户的问题（问题解读也写在这一部分）。

【建议指导】
给出具体的行动建议、注意事项以及时机把握。

请用温和、智慧的语调回答，内容要有深度但易于理解，多使用分段和要点来提高可读性。"""


def hour_period(hour: int) -> str:
    """
    小时（0-23）对应的时辰名

    :param hour: 小时
    :return: 例如 "子时"；23 点与 0 点同为子时
    """
    try:
        index = ((int(hour) + 1) // 2) % 12
    except (TypeError, ValueError):
        return UNKNOWN_HOUR_PERIOD
    return f"{HOUR_PERIODS[index]}时"


def format_divination_time(value: Any) -> str:
    """格式化起卦时间，无法格式化时退化为 str()"""
    try:
        return value.strftime("%Y-%m-%d %H:%M")
    except (AttributeError, ValueError, TypeError):
        return str(value)


def yao_details(toss_results: Sequence[bool]) -> str:
    """逐爻说明，例如 第1爻：阳爻，第2爻：阴爻"""
    return "，".join(
        f"第{index + 1}爻：{'阳爻' if is_yang else '阴爻'}"
        for index, is_yang in enumerate(toss_results)
    )


def build_prompt(request: InterpretationRequest, record: SymbolRecord, sections: str = "three") -> str:
    """
    生成发送给大模型的提示词

    :param request: 解卦输入
    :param record: 已查得的卦象
    :param sections: three 为三段式，two 为两段式
    :return: 提示词文本
    """
    divination_time = request.divination_time
    if isinstance(divination_time, datetime):
        period = hour_period(divination_time.hour)
    else:
        period = UNKNOWN_HOUR_PERIOD

    template = TWO_SECTION_TEMPLATE if sections == SECTIONS_TWO else THREE_SECTION_TEMPLATE
    return template.format(
        question=request.question,
        hexagram_name=record.name,
        hexagram_description=record.description,
        yin_yang=HexagramEngine.to_yin_yang(request.toss_results),
        yao_details=yao_details(request.toss_results),
        divination_time=format_divination_time(divination_time),
        hour_period=period,
        location=(request.divination_location or "").strip() or UNKNOWN_LOCATION
    )
