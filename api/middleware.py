"""
API 中间件
"""
import time
from fastapi import Request
import logging

logger = logging.getLogger(__name__)


async def log_request_middleware(request: Request, call_next):
    """记录请求耗时，并写入 X-Process-Time 响应头"""
    start_time = time.time()

    client_host = request.client.host if request.client else "unknown"
    logger.info(f"开始请求: {request.method} {request.url.path} 来自 {client_host}")

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(
        f"请求完成: {request.method} {request.url.path} "
        f"来自 {client_host} - 状态: {response.status_code} "
        f"- 耗时: {process_time:.4f}s"
    )

    response.headers["X-Process-Time"] = str(process_time)

    return response
