"""
起卦引擎
"""
import logging
import random
from typing import List, Optional, Sequence

from .data import FALLBACK_DESCRIPTION, FALLBACK_NAME, get_hexagram_by_key
from .models import SymbolRecord

logger = logging.getLogger(__name__)

LINES_PER_HEXAGRAM = 6

FALLBACK_RECORD = SymbolRecord(name=FALLBACK_NAME, description=FALLBACK_DESCRIPTION)


class HexagramEngine:
    """
    每爻一次公平的阴阳随机，共六次，再查六十四卦表。
    不会抛出异常：查不到的键一律返回 FALLBACK_RECORD。
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def toss_once(self) -> bool:
        """一次起爻，True 为阳"""
        return self._rng.random() < 0.5

    def toss(self) -> List[bool]:
        """起六爻，按起卦顺序（自下而上）"""
        return [self.toss_once() for _ in range(LINES_PER_HEXAGRAM)]

    @staticmethod
    def to_key(toss_results: Sequence[bool]) -> str:
        return "".join("1" if is_yang else "0" for is_yang in toss_results)

    @staticmethod
    def to_yin_yang(toss_results: Sequence[bool]) -> str:
        return "-".join("阳" if is_yang else "阴" for is_yang in toss_results)

    def lookup(self, key: str) -> SymbolRecord:
        """按键查卦，键不合法时返回未知卦象"""
        hexagram = get_hexagram_by_key(key)
        if hexagram is None:
            logger.warning(f"卦象信息未找到: {key!r}")
            return FALLBACK_RECORD
        return SymbolRecord(name=hexagram["name"], description=hexagram["description"])

    def resolve(self, toss_results: Sequence[bool]) -> SymbolRecord:
        return self.lookup(self.to_key(toss_results))
