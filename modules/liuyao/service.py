"""
六爻解卦服务
"""
import logging
from datetime import datetime
from typing import List, Optional, Sequence

from pydantic import ValidationError

from core.exceptions import InvalidInput, LiuyaoError
from core.resilient_client import ResilientClient
from .categories import categorize_question
from .engine import HexagramEngine
from .models import SECTIONS_THREE, SECTIONS_TWO, DivinationResult, InterpretationRequest
from .parser import clean_model_response, parse_three_way, parse_two_way
from .prompts import build_prompt
from .store import RecordStore

logger = logging.getLogger(__name__)


class LiuyaoService:
    """把起卦、提示词、请求和解析串成一次完整的解卦"""

    def __init__(
        self,
        engine: HexagramEngine,
        client: ResilientClient,
        model: str,
        max_tokens: int = 1000,
        temperature: float = 0.7,
        default_location: str = "",
        record_store: Optional[RecordStore] = None
    ):
        """
        初始化服务

        :param engine: 起卦引擎
        :param client: 大模型接口客户端
        :param model: 模型名
        :param max_tokens: 回复最大 token 数
        :param temperature: 采样温度
        :param default_location: 请求未提供地点时使用的地点
        :param record_store: 问卦记录存储（可选）
        """
        self.engine = engine
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.default_location = default_location
        self.record_store = record_store

    async def interpret(
        self,
        question: str,
        toss_results: Optional[Sequence[bool]] = None,
        divination_time: Optional[datetime] = None,
        divination_location: Optional[str] = None,
        sections: str = SECTIONS_THREE
    ) -> DivinationResult:
        """
        完成一次解卦

        :param question: 用户的问题
        :param toss_results: 六爻结果，不传则现场起卦
        :param divination_time: 起卦时间，不传则取当前时间
        :param divination_location: 起卦地点，不传则用默认地点
        :param sections: three 或 two
        :return: DivinationResult
        :raises InvalidInput: toss_results 不是六爻
        :raises LiuyaoError: 网络、服务器或响应内容错误
        """
        lines: List[bool] = list(toss_results) if toss_results is not None else self.engine.toss()

        try:
            request = InterpretationRequest(
                question=question,
                toss_results=lines,
                divination_time=divination_time or datetime.now(),
                divination_location=divination_location or self.default_location
            )
        except ValidationError as e:
            logger.warning(f"起卦输入不合法: {e}")
            raise InvalidInput(f"起卦输入不合法: {e.errors()[0]['msg']}") from e

        hexagram_key = self.engine.to_key(request.toss_results)
        record = self.engine.resolve(request.toss_results)
        logger.info(f"起卦完成: {hexagram_key} -> {record.name}")

        prompt = build_prompt(request, record, sections=sections)
        payload = ResilientClient.prepare_payload(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=self.max_tokens,
            temperature=self.temperature
        )

        try:
            response = await self.client.send(payload)
            content = self.client.extract_response_text(response)
        except LiuyaoError as e:
            logger.error(f"解卦失败（{record.name}）: {e.category} - {e.message}")
            raise

        content = clean_model_response(content)
        logger.info(f"AI解读完成，长度: {len(content)}")

        if sections == SECTIONS_TWO:
            parsed_two = parse_two_way(content)
            analysis = None
            question_interpretation = None
            interpretation = parsed_two.interpretation
            advice = parsed_two.advice
            stored_interpretation = interpretation
        else:
            parsed_three = parse_three_way(content)
            analysis = parsed_three.analysis
            question_interpretation = parsed_three.question_interpretation
            interpretation = parsed_three.analysis
            advice = parsed_three.advice
            stored_interpretation = f"{analysis}\n\n{question_interpretation}"

        result = DivinationResult(
            question=request.question,
            toss_results=request.toss_results,
            hexagram_key=hexagram_key,
            hexagram_yin_yang=self.engine.to_yin_yang(request.toss_results),
            hexagram_name=record.name,
            hexagram_description=record.description,
            interpretation=interpretation,
            advice=advice,
            analysis=analysis,
            question_interpretation=question_interpretation,
            question_category=categorize_question(request.question),
            divination_time=request.divination_time,
            divination_location=request.divination_location
        )

        await self._save_record(result, stored_interpretation)
        return result

    async def _save_record(self, result: DivinationResult, interpretation: str) -> None:
        """交给持久化协作方，失败只记日志"""
        if self.record_store is None:
            return
        try:
            await self.record_store.save_divination_record(
                question=result.question,
                toss_results=result.toss_results,
                interpretation=interpretation,
                advice=result.advice
            )
        except Exception as e:
            logger.error(f"保存问卦记录失败: {e}", exc_info=True)
