"""主机监控模块

单个主机的检查循环：按固定间隔探测端口、累计成功与失败次数，
在时间窗口结束或失败次数达到阈值时给出唯一的最终结果。
"""

import asyncio
from typing import Optional

from ..checkers.base import Connector
from ..models.host_check import CheckResult, Host, HostStatus
from ..utils.durations import format_duration
from ..utils.exceptions import ConnectError
from ..utils.log_manager import get_logger

# 单次探测的超时时间（秒）
PROBE_TIMEOUT = 1.0


def classify(failed_count: int, passed_count: int, max_failure_count: int) -> HostStatus:
    """
    根据累计的计数确定主机状态

    两个计数都为0时（窗口内没有执行任何检查）视为正常。
    """
    if failed_count == max_failure_count:
        return HostStatus.DOWN
    if failed_count > 0 and passed_count == 0:
        return HostStatus.DOWN
    if failed_count > 0 and passed_count > 0:
        return HostStatus.FLAPPING
    return HostStatus.UP


class HostMonitor:
    """主机监控器

    状态只有运行中和已结束两种。检查节拍从任务启动开始计时，
    第 n 次检查发生在 n * check_interval，且必须早于 time_limit。
    """

    def __init__(self, host: Host, connector: Connector,
                 probe_timeout: float = PROBE_TIMEOUT):
        """
        Args:
            host: 被检查的主机
            connector: 连接器
            probe_timeout: 单次探测超时时间（秒）
        """
        self.host = host
        self.connector = connector
        self.probe_timeout = probe_timeout
        self.result: Optional[CheckResult] = None
        self.logger = get_logger(f'monitor.{host.name}')

    @property
    def is_running(self) -> bool:
        return self.result is not None and not self.result.is_finalized

    async def check_port(self) -> bool:
        """执行一次探测，连接失败只作为数据返回"""
        address = self.host.address
        try:
            await self.connector.connect(address, self.probe_timeout)
        except ConnectError as e:
            self.logger.debug(f"探测 {address} 失败: {e.message}")
            return False
        self.logger.debug(f"探测 {address} 成功")
        return True

    async def run(self, results: asyncio.Queue) -> CheckResult:
        """
        运行检查循环，结束时把结果放入队列

        Args:
            results: 所有主机共享的结果队列

        Returns:
            CheckResult: 已定稿的检查结果
        """
        loop = asyncio.get_running_loop()
        host = self.host
        interval_seconds = host.check_interval.total_seconds()
        started = loop.time()
        deadline = started + host.time_limit.total_seconds()

        result = CheckResult(host=host)
        self.result = result
        self.logger.debug(
            f"开始检查 {host.address}: 间隔 {format_duration(host.check_interval)}, "
            f"时限 {format_duration(host.time_limit)}")

        tick = 0
        while True:
            tick = self._next_tick(tick, loop.time() - started, interval_seconds)
            if tick * host.check_interval >= host.time_limit:
                await asyncio.sleep(max(0.0, deadline - loop.time()))
                break

            tick_at = started + (tick * host.check_interval).total_seconds()
            await asyncio.sleep(max(0.0, tick_at - loop.time()))

            if await self.check_port():
                result.passed_count += 1
            else:
                result.failed_count += 1
                if result.failed_count == host.max_failure_count:
                    self.logger.info(
                        f"{host.name} 失败次数达到阈值 {host.max_failure_count}，提前结束")
                    return await self._emit(result, HostStatus.DOWN, results)

            if loop.time() >= deadline:
                break

        if result.failed_count == 0 and result.passed_count == 0:
            self.logger.warning(f"{host.name} 在时间窗口内没有执行任何检查")
        status = classify(result.failed_count, result.passed_count, host.max_failure_count)
        return await self._emit(result, status, results)

    @staticmethod
    def _next_tick(tick: int, elapsed: float, interval_seconds: float) -> int:
        # 探测耗时超过间隔时丢弃错过的节拍，只保留最近的一个
        due = int(elapsed // interval_seconds) if interval_seconds > 0 else tick
        return max(tick + 1, due)

    async def _emit(self, result: CheckResult, status: HostStatus,
                    results: asyncio.Queue) -> CheckResult:
        result.finalize(status)
        self.logger.info(
            f"{result.message} (成功 {result.passed_count} 次, 失败 {result.failed_count} 次)")
        await results.put(result)
        return result
