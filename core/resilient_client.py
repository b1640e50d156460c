"""
带重试与退避的大模型接口客户端
"""
import asyncio
import json
import logging
import random
from typing import Any, Awaitable, Callable, Dict, List, Optional

import aiohttp
from pydantic import ValidationError
from yarl import URL

from core.exceptions import (
    ConnectionFailed,
    DecodingError,
    EncodingError,
    InvalidResponse,
    InvalidURL,
    LiuyaoError,
    NetworkError,
    NoNetworkConnection,
    NoResponseContent,
    RequestTimeout,
    ServerError,
    is_retryable,
)
from core.network_monitor import NetworkMonitor
from core.schemas import RemoteCompletionResponse

logger = logging.getLogger(__name__)


class ResilientClient:
    """
    chat/completions 接口客户端。

    每次调用最多发起 max_retries 次 HTTP 请求，请求之间严格串行；
    可重试的错误按指数退避加随机抖动等待后重试，其余错误直接抛出。
    """

    def __init__(
        self,
        api_url: str,
        api_key: str,
        network_monitor: NetworkMonitor,
        connect_timeout: float = 30.0,
        read_timeout: float = 180.0,
        max_retries: int = 2,
        base_delay: float = 1.0,
        max_delay: float = 8.0,
        jitter: float = 0.5,
        network_poll_interval: float = 0.5,
        network_recovery_timeout: float = 10.0,
        session_factory: Optional[Callable[..., aiohttp.ClientSession]] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
        rng: Optional[random.Random] = None
    ):
        """
        初始化客户端

        :param api_url: 接口地址
        :param api_key: Bearer token
        :param network_monitor: 网络状态监测器（只读）
        :param connect_timeout: 连接超时（秒）
        :param read_timeout: 读超时（秒），必须大于连接超时
        :param max_retries: 单次调用的最大请求次数
        :param base_delay: 退避基础延迟（秒）
        :param max_delay: 退避延迟上限（秒）
        :param jitter: 随机抖动上限（秒），取值区间 [0, jitter)
        :param network_poll_interval: 等待网络恢复时的轮询间隔（秒）
        :param network_recovery_timeout: 等待网络恢复的最长时间（秒）
        :param session_factory: 创建 aiohttp.ClientSession 的工厂（测试时可替换）
        :param sleep: 退避等待使用的协程函数（测试时可替换）
        :param rng: 抖动使用的随机数发生器
        """
        if read_timeout <= connect_timeout:
            raise ValueError(f"读超时 ({read_timeout}) 必须大于连接超时 ({connect_timeout})")
        if max_delay < base_delay:
            raise ValueError(f"退避上限 ({max_delay}) 不能小于基础延迟 ({base_delay})")

        self.api_url = api_url
        self.api_key = api_key
        self.network_monitor = network_monitor
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.jitter = jitter
        self.network_poll_interval = network_poll_interval
        self.network_recovery_timeout = network_recovery_timeout
        self._session_factory = session_factory or aiohttp.ClientSession
        self._sleep = sleep or asyncio.sleep
        self._rng = rng or random.Random()
        self._closed = False

        if not self.api_key:
            logger.critical("ResilientClient 未配置 API 密钥，所有请求都会被服务器拒绝！")
        else:
            logger.info(f"ResilientClient 初始化完成。URL: {self.api_url}, 最大请求次数: {self.max_retries}, 密钥: {self._masked_key()}")

    def _masked_key(self) -> str:
        """日志里只显示密钥开头"""
        return f"{self.api_key[:6]}..." if self.api_key else "<empty>"

    def _prepare_headers(self) -> Dict[str, str]:
        """请求头"""
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}"
        }

    @staticmethod
    def prepare_payload(
        model: str,
        messages: List[Dict[str, str]],
        max_tokens: int,
        temperature: float
    ) -> Dict[str, Any]:
        """标准 chat/completions 请求体"""
        return {
            "model": model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature
        }

    def _validate_url(self) -> URL:
        """校验并构造目标地址，不合法时抛出 InvalidURL（不重试）"""
        raw_url = (self.api_url or "").strip()
        try:
            url = URL(raw_url)
        except (TypeError, ValueError) as e:
            raise InvalidURL(f"无效的URL: {raw_url!r}") from e

        if url.scheme not in ("http", "https") or not url.host:
            raise InvalidURL(f"无效的URL: {raw_url!r}")
        return url

    @staticmethod
    def _encode_body(request_body: Dict[str, Any]) -> bytes:
        """把请求体序列化为 JSON"""
        try:
            return json.dumps(request_body, ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            logger.error(f"JSON编码失败: {e}")
            raise EncodingError(f"数据编码失败: {e}") from e

    def backoff_delay(self, attempt: int, with_jitter: bool = True) -> float:
        """
        第 attempt 次失败后的等待时间

        :param attempt: 从 0 开始的请求序号
        :param with_jitter: 是否叠加随机抖动
        :return: min(base_delay * 2^attempt + jitter, max_delay)
        """
        delay = self.base_delay * (2 ** attempt)
        if with_jitter and self.jitter > 0:
            delay += self._rng.random() * self.jitter
        return min(delay, self.max_delay)

    async def _attempt(self, url: URL, data: bytes, attempt: int) -> RemoteCompletionResponse:
        """发起一次请求，把所有失败转换为 LiuyaoError"""
        timeout = aiohttp.ClientTimeout(
            total=None,
            connect=self.connect_timeout,
            sock_read=self.read_timeout
        )

        try:
            async with self._session_factory(timeout=timeout) as session:
                async with session.post(str(url), data=data, headers=self._prepare_headers()) as response:
                    status = response.status
                    raw_body = await response.read()
        except (aiohttp.ServerTimeoutError, asyncio.TimeoutError) as e:
            raise RequestTimeout(f"请求超时（第 {attempt + 1} 次）: {e}") from e
        except aiohttp.InvalidURL as e:
            raise InvalidURL(f"无效的URL: {e}") from e
        except (aiohttp.ClientPayloadError, aiohttp.ClientResponseError) as e:
            raise InvalidResponse(f"无效的响应: {e}") from e
        except (aiohttp.ClientError, OSError) as e:
            raise NetworkError(e) from e

        logger.info(f"HTTP状态码: {status}（第 {attempt + 1} 次）")

        if not 200 <= status < 300:
            # 网关错误页可能不是 UTF-8
            excerpt = raw_body[:500].decode("utf-8", errors="replace")
            logger.error(f"服务器错误: 状态={status}, 响应={excerpt}")
            raise ServerError(status, f"服务器错误: {status}")

        try:
            response_text = raw_body.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.error(f"响应不是合法的 UTF-8: {e}")
            raise DecodingError(f"数据解析失败: {e}") from e

        try:
            payload = json.loads(response_text)
        except json.JSONDecodeError as e:
            logger.error(f"响应JSON解析失败: {e}. 响应: {response_text[:500]}")
            raise DecodingError(f"数据解析失败: {e}") from e

        if not isinstance(payload, dict):
            raise DecodingError(f"响应结构不正确: {type(payload).__name__}")

        try:
            return RemoteCompletionResponse(**payload)
        except ValidationError as e:
            logger.error(f"响应结构不正确: {e}")
            raise DecodingError(f"响应结构不正确: {e}") from e

    async def send(self, request_body: Dict[str, Any]) -> RemoteCompletionResponse:
        """
        发送请求并返回解析后的响应

        :param request_body: chat/completions 请求体
        :return: RemoteCompletionResponse
        :raises LiuyaoError: 不可重试的错误，或重试耗尽后的最后一个错误
        """
        if self._closed:
            raise ConnectionFailed("客户端已关闭")

        if not self.network_monitor.is_available:
            logger.warning("网络不可用，直接放弃请求")
            raise NoNetworkConnection()

        url = self._validate_url()
        data = self._encode_body(request_body)
        last_error: Optional[LiuyaoError] = None

        for attempt in range(self.max_retries):
            if attempt > 0 and not self.network_monitor.is_available:
                recovered = await self.network_monitor.wait_until_available(
                    timeout=self.network_recovery_timeout,
                    poll_interval=self.network_poll_interval
                )
                if not recovered:
                    raise NoNetworkConnection("等待网络恢复超时") from last_error

            logger.info(f"第 {attempt + 1}/{self.max_retries} 次请求: {url}")
            try:
                result = await self._attempt(url, data, attempt)
                logger.info(f"请求成功（第 {attempt + 1} 次）")
                return result
            except LiuyaoError as e:
                last_error = e
                if not is_retryable(e):
                    logger.error(f"不可重试的错误，放弃请求: {e}")
                    raise
                if attempt == self.max_retries - 1:
                    logger.error(f"已达到最大请求次数 {self.max_retries}，放弃请求: {e}")
                    raise

                delay = self.backoff_delay(attempt)
                logger.warning(f"可重试的错误（第 {attempt + 1} 次）: {e}. {delay:.2f} 秒后重试")
                await self._sleep(delay)

        if last_error is not None:
            raise last_error
        raise ConnectionFailed(f"请求 {self.max_retries} 次后仍未成功")

    def extract_response_text(self, response: RemoteCompletionResponse) -> str:
        """
        取出 choices[0].message.content

        :param response: 接口响应
        :return: 回复文本
        :raises NoResponseContent: choices 为空或 content 缺失
        """
        if not response.choices:
            logger.error("响应中 choices 为空")
            raise NoResponseContent()

        message = response.choices[0].message
        if message is None or message.content is None:
            logger.error("响应中缺少 message.content")
            raise NoResponseContent()

        if response.usage:
            logger.info(f"token 用量: prompt={response.usage.prompt_tokens}, completion={response.usage.completion_tokens}, total={response.usage.total_tokens}")
        logger.debug(f"提取回复文本，长度 {len(message.content)} 字符")
        return message.content

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        """
        关闭客户端，之后的 send 直接抛出 ConnectionFailed

        会话按请求创建并在 async with 中释放，这里没有需要关闭的连接；
        重复调用是安全的。
        """
        if self._closed:
            return
        self._closed = True
        logger.info("ResilientClient 已关闭")
