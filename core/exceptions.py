"""
自定义异常
"""
from typing import Optional

from fastapi import HTTPException


class LiuyaoError(Exception):
    """解卦流程的基础异常"""

    category = "解读失败，请稍后重试"
    retryable = False

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.category
        super().__init__(self.message)


class InvalidInput(LiuyaoError):
    """起卦输入不合法（例如不是六爻）"""
    category = "起卦数据不合法"


class InvalidURL(LiuyaoError):
    """无效的接口地址"""
    category = "服务地址配置错误"


class EncodingError(LiuyaoError):
    """请求数据编码失败"""
    category = "请求数据编码失败"


class DecodingError(LiuyaoError):
    """响应数据解析失败"""
    category = "数据解析失败"


class InvalidResponse(LiuyaoError):
    """传输层返回了无法识别的响应"""
    category = "服务器响应无效"


class ServerError(LiuyaoError):
    """服务器返回非 2xx 状态码"""

    def __init__(self, code: int, message: Optional[str] = None):
        self.code = code
        super().__init__(message or f"服务器错误: {code}")

    @property
    def retryable(self) -> bool:
        return self.code >= 500 or self.code == 429

    @property
    def category(self) -> str:
        if self.code == 429:
            return "请求过于频繁，请稍后重试"
        if self.code >= 500:
            return "服务器繁忙，请稍后重试"
        if self.code in (401, 403):
            return "服务鉴权失败"
        return "请求被服务器拒绝"


class NetworkError(LiuyaoError):
    """底层网络错误（连接中断、DNS 失败、主机不可达等）"""
    category = "网络错误，请检查网络后重试"
    retryable = True

    def __init__(self, cause: BaseException, message: Optional[str] = None):
        self.cause = cause
        super().__init__(message or f"网络错误: {cause}")


class NoNetworkConnection(LiuyaoError):
    """网络不可用"""
    category = "网络连接不可用，请检查网络设置后重试"
    retryable = True


class RequestTimeout(LiuyaoError):
    """请求超时"""
    category = "请求超时，请稍后重试"
    retryable = True


class ConnectionFailed(LiuyaoError):
    """连接失败"""
    category = "连接服务器失败，请稍后重试"
    retryable = True


class NoResponseContent(LiuyaoError):
    """模型未返回有效内容"""
    category = "AI未返回有效响应"


def is_retryable(exc: BaseException) -> bool:
    """判断错误是否值得重试"""
    if isinstance(exc, LiuyaoError):
        return bool(exc.retryable)
    return False


def liuyao_exception_handler(exc: LiuyaoError) -> HTTPException:
    """把解卦异常转换为 HTTPException"""
    if isinstance(exc, InvalidInput):
        return HTTPException(
            status_code=400,
            detail=f"{exc.category}: {exc.message}"
        )
    elif isinstance(exc, (NetworkError, NoNetworkConnection, RequestTimeout, ConnectionFailed)):
        return HTTPException(
            status_code=503,
            detail=f"{exc.category}: {exc.message}"
        )
    elif isinstance(exc, (ServerError, InvalidResponse, DecodingError, NoResponseContent)):
        return HTTPException(
            status_code=502,
            detail=f"{exc.category}: {exc.message}"
        )
    return HTTPException(
        status_code=500,
        detail=f"{exc.category}: {exc.message}"
    )
