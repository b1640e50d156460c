#!/usr/bin/env python3
"""
服务启动脚本
"""
import sys
import argparse
import uvicorn
import logging
import config

logger = logging.getLogger(__name__)


def run_dev_server(host=None, port=None):
    """启动开发服务器"""
    host = host or config.HOST
    port = port or config.PORT

    logger.info(f"启动开发服务器 {host}:{port}")
    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level="debug"
    )


def run_prod_server(host=None, port=None):
    """启动生产服务器"""
    host = host or config.HOST
    port = port or config.PORT

    logger.info(f"启动生产服务器 {host}:{port}，worker 数: {config.WORKERS}")
    ssl_options = {}
    if config.SSL_KEY_PATH and config.SSL_CERT_PATH:
        ssl_options = {"ssl_keyfile": config.SSL_KEY_PATH, "ssl_certfile": config.SSL_CERT_PATH}

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        workers=config.WORKERS,
        log_level="info",
        **ssl_options
    )


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )

    try:
        parser = argparse.ArgumentParser(description=f"启动 {config.APP_NAME}")
        parser.add_argument("--prod", action="store_true", help="以 production 模式启动")
        parser.add_argument("--host", type=str, help="监听地址")
        parser.add_argument("--port", type=int, help="监听端口")
        args = parser.parse_args()

        if args.prod or config.PROD_MODE:
            run_prod_server(args.host, args.port)
        else:
            run_dev_server(args.host, args.port)
    except Exception as e:
        logger.error(f"启动服务失败: {e}")
        sys.exit(1)
