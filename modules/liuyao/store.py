"""
问卦记录存储接口
"""
import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol

from .models import RecordStatistics
from .statistics import compute_statistics

logger = logging.getLogger(__name__)


class RecordStore(Protocol):
    """持久化协作方只需要实现这一个方法"""

    async def save_divination_record(
        self,
        question: str,
        toss_results: List[bool],
        interpretation: str,
        advice: str
    ) -> None:
        ...


class InMemoryRecordStore:
    """进程内的问卦记录，按时间倒序返回"""

    def __init__(self, max_records: int = 1000):
        if max_records < 1:
            raise ValueError(f"max_records 必须大于 0: {max_records}")
        self.max_records = max_records
        self._records: List[Dict[str, Any]] = []

    async def save_divination_record(
        self,
        question: str,
        toss_results: List[bool],
        interpretation: str,
        advice: str
    ) -> None:
        record = {
            "id": str(uuid.uuid4()),
            "question": question,
            "toss_results": list(toss_results),
            "interpretation": interpretation,
            "advice": advice,
            "created_at": datetime.now()
        }
        self._records.append(record)
        if len(self._records) > self.max_records:
            del self._records[:-self.max_records]
        logger.info(f"问卦记录保存成功: {record['id']}")

    def fetch_all_records(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        records = list(reversed(self._records))
        return records[:limit] if limit else records

    def statistics(self, now: Optional[datetime] = None) -> RecordStatistics:
        """总数、本月次数、连续天数与问题类型分布"""
        return compute_statistics(self._records, now=now)
