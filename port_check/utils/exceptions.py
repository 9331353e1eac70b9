"""自定义异常类"""

import traceback
from enum import Enum
from typing import Optional, Dict, Any
from datetime import datetime


class ErrorCode(Enum):
    """错误代码枚举"""
    # 通用错误 (1000-1999)
    UNKNOWN_ERROR = 1000

    # 配置错误 (2000-2999)
    CONFIG_FILE_NOT_FOUND = 2000
    CONFIG_PARSE_ERROR = 2001
    CONFIG_VALIDATION_ERROR = 2002
    INVALID_DURATION = 2003
    HOST_SOURCE_MISSING = 2004

    # 探测错误 (3000-3999)
    CONNECTION_ERROR = 3001
    TIMEOUT_ERROR = 3002

    # 输入错误 (4000-4999)
    INPUT_READ_ERROR = 4000


class PortCheckError(Exception):
    """端口检查工具基础异常类"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        recoverable: bool = True
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause
        self.recoverable = recoverable
        self.timestamp = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        """将异常转换为字典格式"""
        return {
            'error_code': self.error_code.value,
            'error_name': self.error_code.name,
            'message': self.message,
            'details': self.details,
            'recoverable': self.recoverable,
            'timestamp': self.timestamp.isoformat(),
            'cause': str(self.cause) if self.cause else None,
            'traceback': traceback.format_exc() if self.cause else None
        }

    def format_error(self) -> str:
        """格式化错误信息"""
        error_msg = f"[{self.error_code.name}] {self.message}"
        if self.details:
            details_str = ", ".join([f"{k}={v}" for k, v in self.details.items()])
            error_msg += f" (详情: {details_str})"
        if self.cause:
            error_msg += f" (原因: {str(self.cause)})"
        return error_msg


class ConfigError(PortCheckError):
    """配置相关异常，属于启动阶段的致命错误"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFIG_VALIDATION_ERROR,
        config_path: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        details = dict(details or {})
        if config_path:
            details['config_path'] = config_path
        kwargs.setdefault('recoverable', False)
        super().__init__(message, error_code, details, **kwargs)


class CheckerError(PortCheckError):
    """探测相关异常"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONNECTION_ERROR,
        address: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        details = dict(details or {})
        if address:
            details['address'] = address
        super().__init__(message, error_code, details, **kwargs)


class ConnectError(CheckerError):
    """TCP连接失败（超时、拒绝、不可达统一视为失败）"""

    def __init__(self, message: str, address: Optional[str] = None, **kwargs):
        kwargs.setdefault('error_code', ErrorCode.CONNECTION_ERROR)
        super().__init__(message, address=address, recoverable=True, **kwargs)


class InputError(PortCheckError):
    """主机列表读取异常"""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, ErrorCode.INPUT_READ_ERROR, **kwargs)
