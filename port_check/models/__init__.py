"""数据模型模块"""

from .host_check import HostConfig, Host, HostStatus, CheckResult

__all__ = ['HostConfig', 'Host', 'HostStatus', 'CheckResult']
