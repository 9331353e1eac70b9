"""时长字符串解析

支持形如 ``1h``、``1m``、``30s``、``500ms``、``1m30s`` 的时长写法。
"""

import re
from datetime import timedelta
from typing import Union

from .exceptions import ConfigError, ErrorCode

DURATION_HINT = "Please pass time as : '1h', '1m', '30s'"

_UNITS = {
    'us': timedelta(microseconds=1),
    'µs': timedelta(microseconds=1),
    'ms': timedelta(milliseconds=1),
    's': timedelta(seconds=1),
    'm': timedelta(minutes=1),
    'h': timedelta(hours=1),
}

_PART_RE = re.compile(r'(\d+(?:\.\d*)?|\.\d+)(us|µs|ms|s|m|h)')


def parse_duration(value: Union[str, int, float, timedelta]) -> timedelta:
    """
    将时长配置转换为 timedelta

    数字按秒处理，字符串按带单位的时长解析。

    Raises:
        ConfigError: 时长格式无效或为负数
    """
    if isinstance(value, timedelta):
        duration = value
    elif isinstance(value, bool):
        raise ConfigError(f"无效的时长: {value!r}. {DURATION_HINT}",
                          ErrorCode.INVALID_DURATION)
    elif isinstance(value, (int, float)):
        duration = timedelta(seconds=value)
    else:
        duration = _parse_duration_string(str(value))

    if duration < timedelta(0):
        raise ConfigError(f"时长不能为负数: {value!r}", ErrorCode.INVALID_DURATION)
    return duration


def _parse_duration_string(text: str) -> timedelta:
    text = text.strip()
    if text == '0':
        return timedelta(0)

    pos = 0
    total = timedelta(0)
    for match in _PART_RE.finditer(text):
        if match.start() != pos:
            break
        total += _UNITS[match.group(2)] * float(match.group(1))
        pos = match.end()

    if not text or pos != len(text):
        raise ConfigError(f"无效的时长: {text!r}. {DURATION_HINT}",
                          ErrorCode.INVALID_DURATION)
    return total


def format_duration(duration: timedelta) -> str:
    """将 timedelta 格式化为紧凑的时长字符串，例如 ``1m30s``"""
    micros = duration // timedelta(microseconds=1)
    if micros == 0:
        return '0s'

    parts = []
    hours, micros = divmod(micros, 3600 * 10 ** 6)
    minutes, micros = divmod(micros, 60 * 10 ** 6)
    seconds, micros = divmod(micros, 10 ** 6)
    if hours:
        parts.append(f'{hours}h')
    if minutes:
        parts.append(f'{minutes}m')
    if seconds:
        parts.append(f'{seconds}s')
    if micros:
        if micros % 1000 == 0:
            parts.append(f'{micros // 1000}ms')
        else:
            parts.append(f'{micros}us')
    return ''.join(parts)
