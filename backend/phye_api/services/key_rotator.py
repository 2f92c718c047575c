"""
Gemini API Key 轮询器
---------------------------------
功能：
- 持有启动时加载的有序密钥列表（加载后不再修改）与一个进程内游标；
- `next()` 按顺序返回当前游标处的密钥并将游标后移一位（对列表长度取模），初始游标为 0；
- 密钥池为空时返回 None，由调用方视为配置错误（不重试、不请求上游）。

说明：
- 游标仅存在于内存中，进程重启后从 0 开始；
- 使用互斥锁保护游标自增，多线程下也不会跳过或重复发放密钥；
- 单密钥部署模式等价于长度为 1 的密钥池。
"""

from __future__ import annotations

import hashlib
from threading import Lock
from typing import Iterable, List, Optional

from ..config import settings
from ..utils.logger import log


def parse_api_key_list(raw_value: str) -> List[str]:
    """将逗号分隔的配置值拆分为密钥列表：去除首尾空白、丢弃空项、保持原有顺序。"""
    if not raw_value:
        return []
    return [token.strip() for token in raw_value.split(",") if token.strip()]


def fingerprint_api_key(api_key: str) -> str:
    """密钥指纹，仅用于日志，避免明文输出。"""
    return hashlib.sha256(api_key.encode("utf-8")).hexdigest()[:8]


class KeyRotator:
    def __init__(self, keys: Iterable[str] = ()):
        self._keys = tuple(keys)
        self._cursor = 0
        self._lock = Lock()

    @classmethod
    def from_settings(cls) -> "KeyRotator":
        """根据部署模式构建轮询器：`GEMINI_API_KEYS` 优先，其次单个 `GEMINI_API_KEY`。"""
        pool = parse_api_key_list(settings.GEMINI_API_KEYS)
        if pool:
            if settings.GEMINI_API_KEY:
                log.warning("GEMINI_API_KEY 与 GEMINI_API_KEYS 同时设置，使用密钥池轮询模式")
            log.info(f"Key rotation enabled: pool_size={len(pool)}")
            return cls(pool)
        if settings.GEMINI_API_KEY:
            return cls([settings.GEMINI_API_KEY])
        log.warning("未配置 GEMINI_API_KEY / GEMINI_API_KEYS，/api/phye 将返回 500")
        return cls()

    @property
    def size(self) -> int:
        return len(self._keys)

    @property
    def cursor(self) -> int:
        return self._cursor

    def next(self) -> Optional[str]:
        if not self._keys:
            return None
        with self._lock:
            key = self._keys[self._cursor]
            self._cursor = (self._cursor + 1) % len(self._keys)
        return key
