"""
图片编码工具（供 Gemini inline_data 使用）
---------------------------------
功能：
- 前端可能直接传入 `data:image/jpeg;base64,<...>` 形式的 data URL，也可能只传 base64 正文；
- `strip_data_url` 统一去掉 data URL 前缀，只保留 base64 正文，供 `inline_data.data` 使用；
- 出站 MIME 类型固定为 `image/jpeg`，不做格式探测与转码。
"""

from __future__ import annotations

from typing import Optional

from .logger import log

INLINE_IMAGE_MIME = "image/jpeg"


def strip_data_url(image: Optional[str]) -> Optional[str]:
    """去掉 `data:<mime>;base64,` 前缀；非 data URL 原样返回，空值返回 None。"""
    if not image:
        return None
    if image.startswith("data:") and "," in image:
        header, b64 = image.split(",", 1)
        log.debug(f"strip_data_url: {header} -> bytes(b64)={len(b64)}")
        return b64
    return image
