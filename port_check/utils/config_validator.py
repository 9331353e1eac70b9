"""配置验证工具"""

from datetime import timedelta
from typing import Dict, Any

from .exceptions import ConfigError
from .log_manager import get_logger

CHECK_CONFIG_KEYS = ('port', 'time_limit', 'check_interval', 'max_failure_count')
VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


class ConfigValidator:
    """配置验证器"""

    @staticmethod
    def validate_host_config(config) -> None:
        """
        验证解析后的主机检查配置

        Args:
            config: HostConfig 实例

        Raises:
            ConfigError: 配置验证失败
        """
        port = str(config.port).strip()
        if not port:
            raise ConfigError("port 不能为空")
        if port.isdigit() and not 0 < int(port) <= 65535:
            raise ConfigError(f"port 超出范围: {port}")

        if isinstance(config.max_failure_count, bool) or \
                not isinstance(config.max_failure_count, int) or config.max_failure_count < 1:
            raise ConfigError("max_failure_count 必须是正整数")

        if config.check_interval <= timedelta(0):
            raise ConfigError("check_interval 必须大于0")

        if config.check_interval > config.time_limit:
            raise ConfigError("The Interval must be less than the time limit",
                              details={'check_interval': config.check_interval,
                                       'time_limit': config.time_limit})

        if config.check_interval == config.time_limit:
            get_logger('config_validator').warning(
                "check_interval 等于 time_limit，时间窗口内不会执行任何检查")

    @staticmethod
    def validate_check_config(check_config: Dict[str, Any]) -> None:
        """
        验证配置文件中的 check 节

        Raises:
            ConfigError: 配置验证失败
        """
        if not isinstance(check_config, dict):
            raise ConfigError("check配置必须是字典类型")

        unknown = set(check_config) - set(CHECK_CONFIG_KEYS)
        if unknown:
            raise ConfigError(f"check配置包含未知的配置项: {sorted(unknown)}")

        max_failures = check_config.get('max_failure_count')
        if max_failures is not None:
            if isinstance(max_failures, bool) or not isinstance(max_failures, int) \
                    or max_failures < 1:
                raise ConfigError("max_failure_count 必须是正整数")

    @staticmethod
    def validate_global_config(global_config: Dict[str, Any]) -> None:
        """
        验证全局配置

        Raises:
            ConfigError: 配置验证失败
        """
        if not isinstance(global_config, dict):
            raise ConfigError("全局配置必须是字典类型")

        log_level = global_config.get('log_level')
        if log_level is not None and log_level not in VALID_LOG_LEVELS:
            raise ConfigError(f"log_level 必须是以下值之一: {VALID_LOG_LEVELS}")

        for key in ('max_log_size', 'log_backup_count'):
            value = global_config.get(key)
            if value is not None and (not isinstance(value, int) or value < 0):
                raise ConfigError(f"{key} 必须是非负整数")
