"""连接器接口"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Connector(Protocol):
    """TCP连接能力接口

    生产实现与测试替身只需提供同名方法，不要求继承。
    """

    async def connect(self, address: str, timeout: float) -> None:
        """
        在超时时间内连接指定地址，成功后立即关闭连接

        Args:
            address: ``host:port`` 形式的地址
            timeout: 超时时间（秒）

        Raises:
            ConnectError: 连接失败、被拒绝或超时
        """
        ...
