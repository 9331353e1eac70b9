"""工具模块"""

from .exceptions import PortCheckError, ConfigError, CheckerError, ConnectError, InputError
from .log_manager import LogManager, LogLevel, get_logger, configure_logging, log_manager

__all__ = [
    'PortCheckError', 'ConfigError', 'CheckerError', 'ConnectError', 'InputError',
    'LogManager', 'LogLevel', 'get_logger', 'configure_logging', 'log_manager'
]
