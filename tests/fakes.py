"""
测试用的假 aiohttp 会话
"""
import json
from typing import Any, Dict, List, Optional, Union

ResponseOutcome = Union[BaseException, tuple]


def completion_body(content: Optional[str]) -> str:
    """构造 chat/completions 成功响应"""
    return json.dumps({
        "choices": [{"message": {"role": "assistant", "content": content}, "finish_reason": "stop"}],
        "usage": {"prompt_tokens": 10, "completion_tokens": 20, "total_tokens": 30}
    }, ensure_ascii=False)


class FakeResponse:
    def __init__(self, status: int, body: Union[str, bytes]):
        self.status = status
        self._body = body.encode("utf-8") if isinstance(body, str) else body

    async def read(self) -> bytes:
        return self._body

    async def text(self) -> str:
        return self._body.decode("utf-8")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    def __init__(self, factory: "FakeSessionFactory"):
        self._factory = factory

    def post(self, url: str, data: Any = None, headers: Optional[Dict[str, str]] = None) -> FakeResponse:
        self._factory.requests.append({"url": url, "data": data, "headers": headers})
        outcome = self._factory.next_outcome()
        if isinstance(outcome, BaseException):
            raise outcome
        status, body = outcome
        return FakeResponse(status, body)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self._factory.closed += 1
        return False


class FakeSessionFactory:
    """
    代替 aiohttp.ClientSession。

    每个元素是 (status, body) 或要抛出的异常；用完后重复最后一个。
    """

    def __init__(self, outcomes: List[ResponseOutcome]):
        self.outcomes = list(outcomes)
        self.requests: List[Dict[str, Any]] = []
        self.timeouts: List[Any] = []
        self.closed = 0

    @property
    def calls(self) -> int:
        return len(self.requests)

    def next_outcome(self) -> ResponseOutcome:
        if len(self.outcomes) > 1:
            return self.outcomes.pop(0)
        return self.outcomes[0]

    def __call__(self, timeout: Any = None) -> FakeSession:
        self.timeouts.append(timeout)
        return FakeSession(self)
