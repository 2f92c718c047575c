"""
上游限流等待时间解析
---------------------------------
功能：
- 从 Gemini 429 错误的可读消息中提取 "retry in 12.5s" 形式的等待秒数，向上取整；
- 消息缺失或无法解析时返回默认值（默认 45 秒，可由 `RATE_LIMIT_DEFAULT_RETRY_S` 覆盖）。

说明：
- 上游消息格式不受本服务控制，解析策略集中在 `extract_retry_seconds` 一处，调用方无需关心实现。
"""

from __future__ import annotations

import math
import re
from typing import Optional

from ..config.settings import RATE_LIMIT_DEFAULT_RETRY_S

_RETRY_IN_RE = re.compile(r"retry in ([\d.]+)s", re.IGNORECASE)


def extract_retry_seconds(message: Optional[str], default: int = RATE_LIMIT_DEFAULT_RETRY_S) -> int:
    if not isinstance(message, str):
        return default
    m = _RETRY_IN_RE.search(message)
    if not m:
        return default
    try:
        seconds = float(m.group(1))
    except ValueError:
        # 形如 "retry in 1.2.3s" 的异常数字
        return default
    if math.isnan(seconds) or math.isinf(seconds):
        return default
    return math.ceil(seconds)
