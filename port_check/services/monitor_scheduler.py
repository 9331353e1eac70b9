"""监控调度器模块

为每个主机创建独立的监控任务，所有任务把结果写入同一个队列。
"""

import asyncio
from typing import Iterable, List, Optional, Set, TextIO

from ..checkers.base import Connector
from ..checkers.tcp_connector import TCPConnector
from ..models.host_check import CheckResult, Host, HostConfig
from ..utils.config_validator import ConfigValidator
from ..utils.durations import format_duration
from ..utils.log_manager import get_logger
from .host_monitor import HostMonitor, PROBE_TIMEOUT
from .result_sink import ResultSink


class MonitorScheduler:
    """监控调度器

    负责校验配置、生成主机列表并为每个主机启动一个并发任务。
    """

    def __init__(self, connector: Optional[Connector] = None,
                 probe_timeout: float = PROBE_TIMEOUT):
        """初始化监控调度器

        Args:
            connector: 连接器，默认使用 TCPConnector
            probe_timeout: 单次探测超时时间（秒）
        """
        self.connector = connector if connector is not None else TCPConnector()
        self.probe_timeout = probe_timeout
        self.hosts: List[Host] = []
        self.monitors: List[HostMonitor] = []
        self.running_tasks: Set[asyncio.Task] = set()
        self.logger = get_logger('scheduler')

    @staticmethod
    def build_hosts(config: HostConfig, lines: Iterable[str]) -> List[Host]:
        """按输入顺序为每个非空行生成一个 Host"""
        return [Host.from_config(line.strip(), config) for line in lines if line.strip()]

    def launch(self, config: HostConfig, lines: Iterable[str],
               results: asyncio.Queue) -> int:
        """按主机名启动监控任务，参见 launch_hosts"""
        return self.launch_hosts(config, self.build_hosts(config, lines), results)

    def launch_hosts(self, config: HostConfig, hosts: List[Host],
                     results: asyncio.Queue) -> int:
        """
        校验配置并为每个主机启动监控任务

        必须在事件循环中调用。

        Args:
            config: 共享的检查配置
            hosts: 已生成的主机列表
            results: 结果队列

        Returns:
            int: 启动的主机数量

        Raises:
            ConfigError: 配置无效，此时不会启动任何任务
        """
        ConfigValidator.validate_host_config(config)

        self.hosts.extend(hosts)

        for host in hosts:
            monitor = HostMonitor(host, self.connector, self.probe_timeout)
            self.monitors.append(monitor)

            task = asyncio.create_task(monitor.run(results), name=f'monitor-{host.name}')
            self.running_tasks.add(task)
            task.add_done_callback(self._on_task_done)

        self.logger.info(
            f"已启动 {len(hosts)} 个主机的监控: 端口 {config.port}, "
            f"间隔 {format_duration(config.check_interval)}, "
            f"时限 {format_duration(config.time_limit)}, "
            f"失败阈值 {config.max_failure_count}")
        return len(hosts)

    def _on_task_done(self, task: asyncio.Task) -> None:
        self.running_tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            self.logger.error(f"监控任务 {task.get_name()} 异常退出: {task.exception()}")

    async def run(self, config: HostConfig, lines: Iterable[str],
                  stream: Optional[TextIO] = None) -> List[CheckResult]:
        """按主机名运行，参见 run_hosts"""
        return await self.run_hosts(config, self.build_hosts(config, lines), stream)

    async def run_hosts(self, config: HostConfig, hosts: List[Host],
                        stream: Optional[TextIO] = None) -> List[CheckResult]:
        """
        启动所有监控任务并等待全部结果

        Returns:
            List[CheckResult]: 按完成顺序排列的结果
        """
        results: asyncio.Queue = asyncio.Queue()
        host_count = self.launch_hosts(config, hosts, results)
        try:
            return await ResultSink(stream).drain(results, host_count)
        finally:
            await self.stop()

    async def stop(self):
        """取消仍在运行的监控任务"""
        tasks = list(self.running_tasks)
        for task in tasks:
            if not task.done():
                task.cancel()

        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

        self.running_tasks.clear()
