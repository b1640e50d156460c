"""
Liuyao Interpretation Service - Main Application
"""
import asyncio
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
from api.middleware import log_request_middleware
from api.v1 import health, liuyao
from core.exceptions import LiuyaoError, liuyao_exception_handler
from core.network_monitor import NetworkMonitor
from core.resilient_client import ResilientClient
from modules.liuyao import HexagramEngine, InMemoryRecordStore, LiuyaoService

# 创建日志目录
config.LOG_DIR.mkdir(exist_ok=True)

# 日志配置
logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(f"{config.LOG_DIR}/app.log", encoding="utf-8"),
        logging.StreamHandler(sys.stdout)
    ]
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"启动 {config.APP_NAME}...")

    network_monitor = NetworkMonitor(
        probe_host=config.NETWORK_PROBE_HOST,
        probe_port=config.NETWORK_PROBE_PORT,
        probe_timeout=config.NETWORK_PROBE_TIMEOUT
    )

    client = ResilientClient(
        api_url=config.LLM_API_URL,
        api_key=config.LLM_API_KEY,
        network_monitor=network_monitor,
        connect_timeout=config.LLM_CONNECT_TIMEOUT,
        read_timeout=config.LLM_READ_TIMEOUT,
        max_retries=config.LLM_MAX_RETRIES,
        base_delay=config.LLM_BASE_DELAY,
        max_delay=config.LLM_MAX_DELAY,
        jitter=config.LLM_JITTER,
        network_poll_interval=config.NETWORK_POLL_INTERVAL,
        network_recovery_timeout=config.NETWORK_RECOVERY_TIMEOUT
    )

    engine = HexagramEngine()
    record_store = InMemoryRecordStore()

    liuyao_service = LiuyaoService(
        engine=engine,
        client=client,
        model=config.LLM_MODEL,
        max_tokens=config.LLM_MAX_TOKENS,
        temperature=config.LLM_TEMPERATURE,
        default_location=config.DEFAULT_LOCATION,
        record_store=record_store
    )

    # 后台网络探测
    probe_task = None
    if config.NETWORK_PROBE_HOST:
        probe_task = asyncio.create_task(network_monitor.run_periodic_probe(config.NETWORK_PROBE_INTERVAL))
    else:
        logger.info("未配置 NETWORK_PROBE_HOST，跳过网络状态探测")

    app.state.network_monitor = network_monitor
    app.state.resilient_client = client
    app.state.hexagram_engine = engine
    app.state.record_store = record_store
    app.state.liuyao_service = liuyao_service

    yield

    # Shutdown
    logger.info(f"关闭 {config.APP_NAME}...")
    if probe_task is not None:
        probe_task.cancel()
        try:
            await probe_task
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error(f"停止网络探测任务时出错: {e}", exc_info=True)

    await client.close()


app = FastAPI(
    title=config.APP_NAME,
    description=config.APP_DESCRIPTION,
    version=config.APP_VERSION,
    docs_url="/docs" if config.DEBUG else None,
    redoc_url="/redoc" if config.DEBUG else None,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    max_age=86400,
)

# 请求日志
app.middleware("http")(log_request_middleware)

# 解卦异常统一转换为 HTTP 错误
@app.exception_handler(LiuyaoError)
async def handle_liuyao_error(request: Request, exc: LiuyaoError):
    http_exc = liuyao_exception_handler(exc)
    logger.error(f"未处理的解卦异常 {request.url.path}: {exc.message}")
    return JSONResponse(status_code=http_exc.status_code, content={"detail": http_exc.detail})


# 路由
app.include_router(health.router)
app.include_router(liuyao.router, tags=["liuyao"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=config.HOST,
        port=config.PORT,
        reload=config.DEBUG,
        log_level=config.LOG_LEVEL.lower()
    )
