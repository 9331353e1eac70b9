"""地址拼接与拆分"""

from typing import Tuple


def join_host_port(host: str, port: str) -> str:
    """拼接 ``host:port``，IPv6 地址加方括号"""
    if ':' in host and not host.startswith('['):
        return f'[{host}]:{port}'
    return f'{host}:{port}'


def split_host_port(address: str) -> Tuple[str, str]:
    """
    拆分 ``host:port`` 地址

    Raises:
        ValueError: 地址缺少端口
    """
    if address.startswith('['):
        end = address.find(']')
        if end < 0 or address[end + 1:end + 2] != ':':
            raise ValueError(f"地址格式无效: {address}")
        return address[1:end], address[end + 2:]

    host, sep, port = address.rpartition(':')
    if not sep or not host or ':' in host:
        raise ValueError(f"地址格式无效: {address}")
    return host, port
