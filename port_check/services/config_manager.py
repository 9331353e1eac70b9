"""配置管理器"""

import os
from typing import Dict, Any, Optional, Mapping

import yaml

from ..models.host_check import HostConfig
from ..utils.config_validator import ConfigValidator
from ..utils.durations import parse_duration
from ..utils.exceptions import ConfigError, ErrorCode
from ..utils.log_manager import get_logger

DEFAULT_CHECK_CONFIG: Dict[str, Any] = {
    'port': '22',
    'time_limit': '5m',
    'check_interval': '30s',
    'max_failure_count': 5,
}

# 配置项 -> 环境变量
ENV_VARIABLES = {
    'port': 'PORT',
    'time_limit': 'TIMELIMIT',
    'check_interval': 'CHECKINTERVAL',
    'max_failure_count': 'MAXFAILURES',
}


class ConfigManager:
    """配置管理器

    按 默认值 < YAML配置文件 < 环境变量 < 命令行参数 的优先级合并检查配置。
    """

    def __init__(self, config_path: Optional[str] = None,
                 environ: Optional[Mapping[str, str]] = None):
        """
        初始化配置管理器

        Args:
            config_path: 可选的YAML配置文件路径
            environ: 环境变量映射，默认使用 os.environ
        """
        self.config_path = config_path
        self.environ = os.environ if environ is None else environ
        self.config: Dict[str, Any] = {}
        self.logger = get_logger('config_manager')

    def load_config(self) -> Dict[str, Any]:
        """
        加载YAML配置文件，未指定文件时返回空配置

        Raises:
            ConfigError: 配置加载或验证失败
        """
        if not self.config_path:
            self.config = {}
            return self.config

        self.logger.info(f"开始加载配置文件: {self.config_path}")
        try:
            with open(self.config_path, 'r', encoding='utf-8') as file:
                config = yaml.safe_load(file)
        except FileNotFoundError:
            raise ConfigError(f"配置文件不存在: {self.config_path}",
                              ErrorCode.CONFIG_FILE_NOT_FOUND,
                              config_path=self.config_path)
        except PermissionError:
            raise ConfigError(f"没有权限读取配置文件: {self.config_path}",
                              config_path=self.config_path)
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML格式错误: {e}", ErrorCode.CONFIG_PARSE_ERROR,
                              config_path=self.config_path, cause=e)

        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ConfigError("配置文件根节点必须是字典类型", config_path=self.config_path)

        if 'global' in config:
            ConfigValidator.validate_global_config(config['global'])
        if 'check' in config:
            ConfigValidator.validate_check_config(config['check'])

        self.config = config
        self.logger.debug(f"配置文件加载完成: {self.config_path}")
        return self.config

    def get_global_config(self) -> Dict[str, Any]:
        return self.config.get('global') or {}

    def get_check_config(self) -> Dict[str, Any]:
        return self.config.get('check') or {}

    def resolve_check_settings(self, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        合并各来源的检查配置，返回未解析的原始值

        Args:
            overrides: 命令行参数，值为None的项视为未指定
        """
        settings = dict(DEFAULT_CHECK_CONFIG)
        settings.update(self.get_check_config())

        for key, env_name in ENV_VARIABLES.items():
            value = self.environ.get(env_name)
            if value:
                self.logger.debug(f"使用环境变量 {env_name}={value}")
                settings[key] = value

        for key, value in (overrides or {}).items():
            if value is not None:
                settings[key] = value

        return settings

    def build_host_config(self, overrides: Optional[Dict[str, Any]] = None) -> HostConfig:
        """
        生成主机检查配置

        Raises:
            ConfigError: 配置值无效
        """
        settings = self.resolve_check_settings(overrides)

        try:
            max_failure_count = int(settings['max_failure_count'])
        except (TypeError, ValueError):
            raise ConfigError(
                f"max_failure_count 必须是正整数: {settings['max_failure_count']!r}")

        host_config = HostConfig(
            port=str(settings['port']).strip(),
            max_failure_count=max_failure_count,
            time_limit=parse_duration(settings['time_limit']),
            check_interval=parse_duration(settings['check_interval']),
        )
        self.logger.debug(f"检查配置: {host_config}")
        return host_config
