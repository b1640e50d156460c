"""
六爻解卦的数据模型
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

SECTIONS_THREE = "three"
SECTIONS_TWO = "two"


class SymbolRecord(BaseModel):
    """卦象记录"""
    name: str = Field(..., description="卦名")
    description: str = Field(..., description="卦象描述")


class InterpretationRequest(BaseModel):
    """一次解卦所需的全部输入"""
    question: str = Field(..., description="用户的问题")
    toss_results: List[bool] = Field(..., description="六次起卦结果，True 为阳爻")
    divination_time: datetime = Field(default_factory=datetime.now, description="起卦时间")
    divination_location: str = Field("", description="起卦地点")

    @field_validator("toss_results")
    @classmethod
    def _six_lines(cls, value: List[bool]) -> List[bool]:
        if len(value) != 6:
            raise ValueError("起卦结果必须正好六爻")
        return value


class ThreeWayInterpretation(BaseModel):
    """三段式解读：卦象解析 / 问题解读 / 建议指导"""
    analysis: str
    question_interpretation: str
    advice: str


class TwoWayInterpretation(BaseModel):
    """两段式解读：解读 / 建议"""
    interpretation: str
    advice: str


class DivinationResult(BaseModel):
    """解卦结果"""
    question: str
    toss_results: List[bool]
    hexagram_key: str
    hexagram_yin_yang: str
    hexagram_name: str
    hexagram_description: str
    interpretation: str = Field(..., description="卦象解读（三段式时为卦象解析）")
    advice: str = Field(..., description="建议指导")
    analysis: Optional[str] = Field(None, description="卦象解析（仅三段式）")
    question_interpretation: Optional[str] = Field(None, description="问题解读（仅三段式）")
    question_category: str = Field("其他问题", description="问题分类")
    divination_time: datetime
    divination_location: str
    timestamp: datetime = Field(default_factory=datetime.now, description="解读完成时间")


class InterpretationApiRequest(BaseModel):
    """POST /interpret 请求体"""
    question: str = Field(..., min_length=1, description="用户的问题")
    toss_results: Optional[List[bool]] = Field(None, description="六次起卦结果，不传则由服务端起卦")
    divination_time: Optional[datetime] = Field(None, description="起卦时间，不传则取当前时间")
    divination_location: Optional[str] = Field(None, description="起卦地点")
    sections: Optional[str] = Field(None, description="输出格式: three / two，不传则使用服务默认值")

    @field_validator("toss_results")
    @classmethod
    def _six_lines(cls, value: Optional[List[bool]]) -> Optional[List[bool]]:
        if value is not None and len(value) != 6:
            raise ValueError("起卦结果必须正好六爻")
        return value

    @field_validator("sections")
    @classmethod
    def _known_sections(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in (SECTIONS_THREE, SECTIONS_TWO):
            raise ValueError("sections 只能是 three 或 two")
        return value


class HexagramInfo(BaseModel):
    """卦象列表中的一项"""
    key: str
    number: int
    name: str
    description: str
    lower_trigram: str
    upper_trigram: str


class TossResponse(BaseModel):
    """GET /toss 响应"""
    toss_results: List[bool]
    hexagram_key: str
    hexagram_yin_yang: str
    hexagram: SymbolRecord


class ApiResponse(BaseModel):
    """通用 API 响应"""
    success: bool
    data: Optional[DivinationResult] = None
    error: Optional[str] = None
    error_category: Optional[str] = None
    retryable: Optional[bool] = None


class QuestionTypeStat(BaseModel):
    """某一类问题的占比"""
    type: str
    count: int
    percentage: float = Field(..., description="占全部记录的比例，0-1")


class RecordStatistics(BaseModel):
    """问卦统计"""
    total: int = Field(..., description="总问卦次数")
    monthly: int = Field(..., description="本月问卦次数")
    consecutive_days: int = Field(..., description="截至今天的连续问卦天数")
    question_types: List[QuestionTypeStat] = Field(default_factory=list, description="按数量降序")
