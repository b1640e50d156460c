"""
网络状态监测
"""
import asyncio
import logging
import time

logger = logging.getLogger(__name__)


class NetworkMonitor:
    """
    进程级的网络可用标志。

    只有 update() 会写入该标志（由后台探测任务或外部回调调用），
    任意数量的重试循环只读取它。读取结果可能已经过时，
    调用方只能把它当作快速失败的依据。
    """

    def __init__(
        self,
        probe_host: str = "",
        probe_port: int = 443,
        probe_timeout: float = 3.0,
        initially_available: bool = True
    ):
        """
        初始化

        :param probe_host: 探测连接的主机，为空时不做主动探测
        :param probe_port: 探测端口
        :param probe_timeout: 单次探测超时（秒）
        :param initially_available: 初始状态
        """
        self.probe_host = probe_host
        self.probe_port = probe_port
        self.probe_timeout = probe_timeout
        self._available = initially_available

    @property
    def is_available(self) -> bool:
        return self._available

    def update(self, available: bool) -> None:
        """网络状态变化回调"""
        available = bool(available)
        if available != self._available:
            logger.info(f"网络状态: {'可用' if available else '不可用'}")
        self._available = available

    async def wait_until_available(self, timeout: float = 10.0, poll_interval: float = 0.5) -> bool:
        """
        轮询等待网络恢复

        :param timeout: 最长等待时间（秒）
        :param poll_interval: 轮询间隔（秒）
        :return: 超时前网络是否恢复
        """
        if self._available:
            return True

        logger.info(f"网络不可用，等待恢复（最多 {timeout} 秒）...")
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            await asyncio.sleep(poll_interval)
            if self._available:
                logger.info("网络已恢复")
                return True

        logger.warning(f"等待 {timeout} 秒后网络仍不可用")
        return self._available

    async def probe(self) -> bool:
        """尝试建立一次 TCP 连接以判断网络是否可用"""
        if not self.probe_host:
            return self._available

        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(self.probe_host, self.probe_port),
                timeout=self.probe_timeout
            )
        except (OSError, asyncio.TimeoutError) as e:
            logger.debug(f"网络探测失败 {self.probe_host}:{self.probe_port}: {e}")
            return False

        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass
        return True

    async def run_periodic_probe(self, interval_seconds: float) -> None:
        """
        周期性探测网络并更新状态，直到任务被取消

        :param interval_seconds: 探测间隔（秒）
        """
        logger.info(f"网络状态监测已启动，探测目标 {self.probe_host}:{self.probe_port}，间隔 {interval_seconds} 秒")

        while True:
            try:
                self.update(await self.probe())
                await asyncio.sleep(interval_seconds)
            except asyncio.CancelledError:
                logger.info("网络状态监测已停止")
                break
            except Exception as e:
                logger.error(f"网络状态监测出错: {e}", exc_info=True)
                await asyncio.sleep(interval_seconds)
