"""连接器模块"""

from .base import Connector
from .tcp_connector import TCPConnector

__all__ = ['Connector', 'TCPConnector']
