"""
健康检查接口
"""
from datetime import datetime
from fastapi import APIRouter, Request

import config

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """服务健康检查"""
    monitor = getattr(request.app.state, "network_monitor", None)
    return {
        "status": "healthy",
        "network_available": monitor.is_available if monitor else None,
        "timestamp": datetime.now().isoformat()
    }


@router.get("/")
async def root():
    """根路径"""
    return {
        "service": config.APP_NAME,
        "version": config.APP_VERSION,
        "status": "active",
        "endpoints": {
            "hexagrams": config.get_api_url("/api/v1/liuyao/hexagrams"),
            "toss": config.get_api_url("/api/v1/liuyao/toss"),
            "interpret": config.get_api_url("/api/v1/liuyao/interpret"),
            "records": config.get_api_url("/api/v1/liuyao/records"),
            "statistics": config.get_api_url("/api/v1/liuyao/records/stats"),
            "health": config.get_api_url("/health")
        }
    }
