"""
应用配置
"""
import os
from typing import List, Optional
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# 应用基础设置
APP_NAME = "Liuyao Interpretation Service"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "六爻起卦与AI解卦的异步API服务"

# 服务器设置
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8081"))
DEBUG = os.getenv("DEBUG", "true").lower() == "true"
WORKERS = int(os.getenv("WORKERS", "4"))

# CORS 设置
CORS_ORIGINS: List[str] = [
    "http://localhost",
    "http://localhost:8080",
    "http://localhost:8081",
    "http://127.0.0.1",
    "http://127.0.0.1:8080",
    "http://127.0.0.1:8081",
]

# 通过环境变量追加 CORS origins
if os.getenv("ADDITIONAL_CORS_ORIGINS"):
    CORS_ORIGINS.extend(os.getenv("ADDITIONAL_CORS_ORIGINS").split(","))

# 日志设置
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))

# 生产模式
PROD_MODE = os.getenv("PROD_MODE", "false").lower() == "true"

# SSL 设置
SSL_CERT_PATH: Optional[str] = os.getenv("SSL_CERT_PATH")
SSL_KEY_PATH: Optional[str] = os.getenv("SSL_KEY_PATH")

# 代理前缀
PROXY_PREFIX = os.getenv("PROXY_PREFIX", "")

# 大模型接口设置
LLM_API_URL = os.getenv("LLM_API_URL", "https://ark.cn-beijing.volces.com/api/v3/chat/completions")
LLM_API_KEY = os.getenv("LLM_API_KEY", "")
LLM_MODEL = os.getenv("LLM_MODEL", "doubao-seed-1-6-thinking-250715")
LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "1000"))
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.7"))

# 超时：读超时必须大于连接超时
LLM_CONNECT_TIMEOUT = float(os.getenv("LLM_CONNECT_TIMEOUT", "30"))
LLM_READ_TIMEOUT = float(os.getenv("LLM_READ_TIMEOUT", "180"))

# 重试与退避
LLM_MAX_RETRIES = int(os.getenv("LLM_MAX_RETRIES", "2"))
LLM_BASE_DELAY = float(os.getenv("LLM_BASE_DELAY", "1.0"))
LLM_MAX_DELAY = float(os.getenv("LLM_MAX_DELAY", "8.0"))
LLM_JITTER = float(os.getenv("LLM_JITTER", "0.5"))

# 网络状态监测
NETWORK_POLL_INTERVAL = float(os.getenv("NETWORK_POLL_INTERVAL", "0.5"))
NETWORK_RECOVERY_TIMEOUT = float(os.getenv("NETWORK_RECOVERY_TIMEOUT", "10"))
NETWORK_PROBE_HOST = os.getenv("NETWORK_PROBE_HOST", "ark.cn-beijing.volces.com")
NETWORK_PROBE_PORT = int(os.getenv("NETWORK_PROBE_PORT", "443"))
NETWORK_PROBE_INTERVAL = float(os.getenv("NETWORK_PROBE_INTERVAL", "15"))
NETWORK_PROBE_TIMEOUT = float(os.getenv("NETWORK_PROBE_TIMEOUT", "3"))

# 起卦地点（定位服务不可用时的默认值）
DEFAULT_LOCATION = os.getenv("DEFAULT_LOCATION", "北京市")

# 解卦输出格式：three（卦象解析/问题解读/建议指导）或 two（解读/建议）
DEFAULT_SECTIONS = os.getenv("DEFAULT_SECTIONS", "three")


def get_api_url(path: str = "") -> str:
    """获取带前缀的完整 API 地址"""
    protocol = "https" if SSL_CERT_PATH and SSL_KEY_PATH else "http"
    base_url = f"{protocol}://{HOST}:{PORT}"
    if PROXY_PREFIX:
        base_url = f"{base_url}/{PROXY_PREFIX.strip('/')}"
    if path:
        return f"{base_url}/{path.lstrip('/')}"
    return base_url
