"""TCP连接器"""

import asyncio

from ..utils.exceptions import ConnectError, ErrorCode
from ..utils.log_manager import get_logger
from ..utils.network import split_host_port


class TCPConnector:
    """通过建立TCP连接判断端口是否可达"""

    def __init__(self):
        self.logger = get_logger('checker.tcp')

    async def connect(self, address: str, timeout: float) -> None:
        try:
            host, port = split_host_port(address)
        except ValueError as e:
            raise ConnectError(str(e), address=address, cause=e)

        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port), timeout=timeout)
        except asyncio.TimeoutError as e:
            raise ConnectError(f"连接 {address} 超时 ({timeout}s)", address=address,
                               error_code=ErrorCode.TIMEOUT_ERROR, cause=e)
        except (OSError, ValueError) as e:
            # ValueError 包括主机名 IDNA 编码失败的 UnicodeError
            raise ConnectError(f"连接 {address} 失败: {e}", address=address, cause=e)

        writer.close()
        try:
            await writer.wait_closed()
        except OSError as e:
            self.logger.debug(f"关闭到 {address} 的连接时出错: {e}")
