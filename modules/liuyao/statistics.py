"""
问卦统计
"""
from collections import Counter
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from .categories import categorize_question
from .models import QuestionTypeStat, RecordStatistics


def consecutive_days(dates: List[datetime], today: datetime) -> int:
    """
    从今天往前数，每天都有记录的天数

    今天没有记录时为 0。
    """
    days = {value.date() for value in dates}
    current = today.date()
    count = 0
    while current in days:
        count += 1
        current -= timedelta(days=1)
    return count


def compute_statistics(records: List[Dict[str, Any]], now: Optional[datetime] = None) -> RecordStatistics:
    """
    汇总问卦记录

    :param records: 记录列表，每条至少包含 question 和 created_at
    :param now: 当前时间，默认 datetime.now()
    :return: RecordStatistics
    """
    now = now or datetime.now()
    start_of_month = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    created = [record["created_at"] for record in records]

    total = len(records)
    counts = Counter(categorize_question(record.get("question", "")) for record in records)
    question_types = [
        QuestionTypeStat(type=category, count=count, percentage=count / total)
        for category, count in counts.most_common()
    ]

    return RecordStatistics(
        total=total,
        monthly=sum(1 for value in created if value >= start_of_month),
        consecutive_days=consecutive_days(created, now),
        question_types=question_types
    )
