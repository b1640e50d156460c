"""
问题分类
"""
from typing import List, Tuple

DEFAULT_CATEGORY = "其他问题"

# 按顺序匹配，先命中的分类生效
QUESTION_CATEGORIES: List[Tuple[str, List[str]]] = [
    ("感情婚姻", ["感情", "爱情", "恋爱", "结婚", "分手", "复合", "喜欢", "男友", "女友", "老公", "老婆", "夫妻"]),
    ("事业工作", ["工作", "事业", "职业", "升职", "跳槽", "创业", "生意", "公司", "老板", "同事", "面试"]),
    ("财运投资", ["财运", "赚钱", "投资", "股票", "理财", "收入", "财富", "金钱", "经济", "买房", "买车"]),
    ("健康养生", ["健康", "身体", "疾病", "病情", "医院", "治疗", "康复", "养生", "锻炼"]),
    ("学业考试", ["学习", "考试", "升学", "学校", "成绩", "毕业", "留学", "培训", "技能"]),
    ("家庭亲情", ["家庭", "父母", "孩子", "子女", "亲情", "家人", "搬家", "装修"]),
]


def categorize_question(question: str) -> str:
    """按关键词给问题归类"""
    text = (question or "").lower()
    for category, keywords in QUESTION_CATEGORIES:
        if any(keyword in text for keyword in keywords):
            return category
    return DEFAULT_CATEGORY
