"""结果汇总"""

import asyncio
import sys
from typing import List, Optional, TextIO

from ..models.host_check import CheckResult
from ..utils.log_manager import get_logger

FINISHED_MESSAGE = "Finished processing results"


class ResultSink:
    """从结果队列读取固定数量的结果并逐条输出"""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self.logger = get_logger('result_sink')

    def _write(self, line: str) -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        print(line, file=stream, flush=True)

    async def drain(self, results: asyncio.Queue, expected_count: int) -> List[CheckResult]:
        """
        按到达顺序接收结果，直到收满 expected_count 条

        Args:
            results: 结果队列
            expected_count: 期望的结果数量，即主机数量

        Returns:
            List[CheckResult]: 接收到的结果
        """
        received: List[CheckResult] = []
        while len(received) < expected_count:
            result = await results.get()
            received.append(result)
            self._write(result.message)
            self.logger.debug(f"已接收 {len(received)}/{expected_count} 个结果")

        self._write(FINISHED_MESSAGE)
        return received
