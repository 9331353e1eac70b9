"""测试数据模型"""

from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta

import pytest

from port_check.models.host_check import HostConfig, Host, HostStatus, CheckResult


@pytest.fixture
def host_config():
    return HostConfig(
        port='22',
        max_failure_count=5,
        time_limit=timedelta(minutes=1),
        check_interval=timedelta(seconds=20),
    )


class TestHost:
    """测试Host数据模型"""

    def test_from_config_copies_shared_settings(self, host_config):
        """测试从共享配置创建主机"""
        host = Host.from_config('192.168.1.6', host_config)

        assert host.name == '192.168.1.6'
        assert host.port == '22'
        assert host.max_failure_count == 5
        assert host.time_limit == timedelta(minutes=1)
        assert host.check_interval == timedelta(seconds=20)

    def test_address(self, host_config):
        """测试地址拼接"""
        assert Host.from_config('foo.bar.net', host_config).address == 'foo.bar.net:22'
        assert Host.from_config('::1', host_config).address == '[::1]:22'

    def test_host_is_immutable(self, host_config):
        """主机创建后不可修改"""
        host = Host.from_config('127.0.0.1', host_config)
        with pytest.raises(FrozenInstanceError):
            host.name = 'other'


class TestCheckResult:
    """测试CheckResult数据模型"""

    def test_new_result_is_empty(self, host_config):
        """测试新建的结果"""
        result = CheckResult(host=Host.from_config('127.0.0.1', host_config))

        assert result.failed_count == 0
        assert result.passed_count == 0
        assert result.status is None
        assert result.message == ""
        assert not result.is_finalized
        assert isinstance(result.started_at, datetime)
        assert result.finished_at is None

    @pytest.mark.parametrize('status, message', [
        (HostStatus.UP, "127.0.0.1 is reporting ok"),
        (HostStatus.DOWN, "127.0.0.1 is down"),
        (HostStatus.FLAPPING, "127.0.0.1 is flapping"),
    ])
    def test_finalize_sets_message(self, host_config, status, message):
        """测试定稿消息"""
        result = CheckResult(host=Host.from_config('127.0.0.1', host_config))
        result.finalize(status)

        assert result.status is status
        assert result.message == message
        assert result.is_finalized
        assert isinstance(result.finished_at, datetime)
        assert [result.is_up, result.is_down, result.is_flapping].count(True) == 1

    def test_finalize_only_once(self, host_config):
        """结果只能定稿一次"""
        result = CheckResult(host=Host.from_config('127.0.0.1', host_config))
        result.finalize(HostStatus.DOWN)

        with pytest.raises(RuntimeError, match="已经定稿"):
            result.finalize(HostStatus.UP)
        assert result.status is HostStatus.DOWN
