"""主机检查相关的数据模型"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from ..utils.network import join_host_port


@dataclass(frozen=True)
class HostConfig:
    """所有主机共享的检查配置"""
    port: str
    max_failure_count: int
    time_limit: timedelta
    check_interval: timedelta


@dataclass(frozen=True)
class Host:
    """单个被检查的主机"""
    name: str
    port: str
    max_failure_count: int
    time_limit: timedelta
    check_interval: timedelta

    @classmethod
    def from_config(cls, name: str, config: HostConfig) -> 'Host':
        return cls(
            name=name,
            port=config.port,
            max_failure_count=config.max_failure_count,
            time_limit=config.time_limit,
            check_interval=config.check_interval,
        )

    @property
    def address(self) -> str:
        return join_host_port(self.name, self.port)


class HostStatus(Enum):
    """主机最终状态"""
    UP = "up"
    DOWN = "down"
    FLAPPING = "flapping"


_STATUS_MESSAGES = {
    HostStatus.UP: "{name} is reporting ok",
    HostStatus.DOWN: "{name} is down",
    HostStatus.FLAPPING: "{name} is flapping",
}


@dataclass
class CheckResult:
    """单个主机的检查结果

    监控开始时创建，计数由监控任务累加，结束时调用 finalize 定稿，
    之后不再修改。
    """
    host: Host
    failed_count: int = 0
    passed_count: int = 0
    status: Optional[HostStatus] = None
    message: str = ""
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None

    @property
    def is_finalized(self) -> bool:
        return self.status is not None

    @property
    def is_up(self) -> bool:
        return self.status is HostStatus.UP

    @property
    def is_down(self) -> bool:
        return self.status is HostStatus.DOWN

    @property
    def is_flapping(self) -> bool:
        return self.status is HostStatus.FLAPPING

    def finalize(self, status: HostStatus) -> 'CheckResult':
        """
        设置最终状态和消息

        Raises:
            RuntimeError: 结果已经定稿
        """
        if self.is_finalized:
            raise RuntimeError(f"主机 {self.host.name} 的检查结果已经定稿")
        self.status = status
        self.message = _STATUS_MESSAGES[status].format(name=self.host.name)
        self.finished_at = datetime.now()
        return self
