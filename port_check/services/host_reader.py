"""主机列表读取

从标准输入或环境变量读取主机名，每行一个。
"""

import io
import os
import stat
from typing import Iterable, List, Mapping, Optional, TextIO

from ..models.host_check import Host, HostConfig
from ..utils.exceptions import ConfigError, ErrorCode, InputError
from ..utils.log_manager import get_logger

HOSTS_ENV_VARIABLE = 'HOSTS'


def read_hosts(config: HostConfig, reader: Iterable[str]) -> List[Host]:
    """
    逐行读取主机名并生成 Host 列表

    空行会被跳过，顺序与输入一致。读取中途出错时记录错误，
    返回已经解析出的主机。

    Args:
        config: 共享的检查配置
        reader: 可迭代的文本行，例如文件对象
    """
    hosts: List[Host] = []
    try:
        for line in reader:
            name = line.strip()
            if name:
                hosts.append(Host.from_config(name, config))
    except (OSError, UnicodeDecodeError) as e:
        error = InputError("读取主机列表失败", details={'parsed_hosts': len(hosts)}, cause=e)
        get_logger('host_reader').error(error.format_error())
    return hosts


def env_string_to_reader(env: str, environ: Optional[Mapping[str, str]] = None) -> TextIO:
    """
    将环境变量的内容包装为文本流

    Raises:
        ConfigError: 环境变量不存在或为空
    """
    environ = os.environ if environ is None else environ
    data = environ.get(env, '')
    if not data:
        raise ConfigError(f"ENV variable {env} does not exist",
                          ErrorCode.HOST_SOURCE_MISSING)
    return io.StringIO(data)


def stdin_has_data(stream: Optional[TextIO]) -> bool:
    """判断标准输入是否有数据传入（管道或非空文件）"""
    if stream is None or stream.closed:
        return False
    try:
        if stream.isatty():
            return False
        info = os.fstat(stream.fileno())
    except (OSError, ValueError, io.UnsupportedOperation):
        return False

    if stat.S_ISFIFO(info.st_mode) or stat.S_ISSOCK(info.st_mode):
        return True
    return info.st_size > 0


def open_host_source(stdin: Optional[TextIO],
                     env: str = HOSTS_ENV_VARIABLE,
                     environ: Optional[Mapping[str, str]] = None) -> TextIO:
    """
    选择主机列表来源：优先标准输入，其次环境变量

    Raises:
        ConfigError: 两个来源都不可用
    """
    if stdin_has_data(stdin):
        get_logger('host_reader').debug("从标准输入读取主机列表")
        return stdin

    try:
        source = env_string_to_reader(env, environ)
    except ConfigError as e:
        raise ConfigError(
            f"Failed to include STDIN or to include ENV variable {env} : {e.message}",
            ErrorCode.HOST_SOURCE_MISSING, cause=e)
    get_logger('host_reader').debug(f"从环境变量 {env} 读取主机列表")
    return source
