"""
大模型 chat/completions 接口的数据模型
"""
from typing import List, Optional

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """对话消息"""
    role: str = "assistant"
    content: Optional[str] = None


class Choice(BaseModel):
    """候选回复"""
    message: Optional[ChatMessage] = None
    finish_reason: Optional[str] = None


class Usage(BaseModel):
    """token 用量"""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class RemoteCompletionResponse(BaseModel):
    """
    接口成功响应。

    choices 缺失或 content 为空不在这里报错，
    由调用方决定是否视为 NoResponseContent。
    """
    choices: List[Choice] = Field(default_factory=list)
    usage: Optional[Usage] = None
