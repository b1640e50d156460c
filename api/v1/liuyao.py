"""
六爻解卦接口
"""
import logging
from typing import List

from fastapi import APIRouter, HTTPException, Path, Query, Request

import config
from core.exceptions import LiuyaoError
from modules.liuyao import ApiResponse, HexagramEngine, InMemoryRecordStore, LiuyaoService
from modules.liuyao.data import describe_hexagram, get_all_hexagrams
from modules.liuyao.models import HexagramInfo, InterpretationApiRequest, RecordStatistics, SymbolRecord, TossResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/liuyao")


@router.get("/hexagrams", response_model=List[HexagramInfo])
async def get_hexagrams():
    """
    六十四卦列表

    按卦序返回全部卦象及其二进制键（初爻在前）
    """
    return get_all_hexagrams()


@router.get("/hexagrams/{key}", response_model=HexagramInfo)
async def get_hexagram(key: str = Path(..., description="六位二进制键，初爻在前")):
    """
    查询单个卦象

    - **key**: 例如 101010（水火既济）
    """
    hexagram = describe_hexagram(key)
    if not hexagram:
        raise HTTPException(
            status_code=404,
            detail=f"卦象 {key} 不存在"
        )
    return hexagram


@router.get("/toss", response_model=TossResponse)
async def toss(request: Request):
    """起一卦（不请求AI解读）"""
    engine: HexagramEngine = request.app.state.hexagram_engine
    toss_results = engine.toss()
    record: SymbolRecord = engine.resolve(toss_results)
    return TossResponse(
        toss_results=toss_results,
        hexagram_key=engine.to_key(toss_results),
        hexagram_yin_yang=engine.to_yin_yang(toss_results),
        hexagram=record
    )


@router.post("/interpret", response_model=ApiResponse)
async def interpret(body: InterpretationApiRequest, request: Request):
    """
    起卦并请求AI解读

    - **question**: 用户的问题
    - **toss_results**: 六爻结果（可选，不传则服务端起卦）
    - **divination_time**: 起卦时间（可选）
    - **divination_location**: 起卦地点（可选）
    - **sections**: three（卦象解析/问题解读/建议指导）或 two（解读/建议）
    """
    service: LiuyaoService = request.app.state.liuyao_service

    try:
        result = await service.interpret(
            question=body.question,
            toss_results=body.toss_results,
            divination_time=body.divination_time,
            divination_location=body.divination_location,
            sections=body.sections or config.DEFAULT_SECTIONS
        )
    except LiuyaoError as e:
        logger.warning(f"解卦请求失败: {e.category} (可重试: {e.retryable})")
        return ApiResponse(
            success=False,
            error=e.message,
            error_category=e.category,
            retryable=e.retryable
        )

    return ApiResponse(success=True, data=result)


@router.get("/records")
async def get_records(request: Request, limit: int = Query(20, ge=1, le=100, description="返回条数")):
    """最近的问卦记录（按时间倒序）"""
    record_store: InMemoryRecordStore = request.app.state.record_store
    return record_store.fetch_all_records(limit=limit)


@router.get("/records/stats", response_model=RecordStatistics)
async def get_record_statistics(request: Request):
    """问卦统计：总次数、本月次数、连续天数、问题类型分布"""
    record_store: InMemoryRecordStore = request.app.state.record_store
    return record_store.statistics()
