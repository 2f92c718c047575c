# -*- coding: utf-8 -*-
"""
Gemini generateContent 调用服务
---------------------------------
功能：
- 构造 `generateContent` 请求体：`contents[0].parts` 依次为提示词文本与（可选）`inline_data` 图片；
- `generationConfig` 要求 `application/json` 输出，并可附带 `responseSchema` 约束 steps 结构；
- 通过 httpx 异步客户端发起单次 POST，密钥以 `key` 查询参数传递，返回上游 JSON 对象。

使用说明：
- 上游返回非 2xx 时不抛出异常：错误体（如 `{"error": {"code": 429, ...}}`）原样返回，由调用方分类；
- 上游响应体不是 JSON 对象时抛出 `UpstreamError`；
- 本层不做重试，超时取 `GEMINI_TIMEOUT_S`。
"""
from __future__ import annotations

import time
from typing import Any, Dict, Optional

import httpx

from ..config import settings
from ..models.phye_schema import PhyeStep
from ..utils.logger import log
from ..utils.pictures_utils import INLINE_IMAGE_MIME


# 由 phye_schema.PhyeStep 字段生成的 Gemini responseSchema（OpenAPI 子集，不支持 $defs）
_STEP_FIELDS = list(PhyeStep.model_fields)
STEPS_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "steps": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {name: {"type": "STRING"} for name in _STEP_FIELDS},
                "required": _STEP_FIELDS,
            },
        }
    },
    "required": ["steps"],
}


class UpstreamError(RuntimeError):
    """上游返回了无法识别的响应体。"""


def build_generate_payload(prompt: str, image_b64: Optional[str] = None, structured: Optional[bool] = None) -> Dict[str, Any]:
    if structured is None:
        structured = settings.GEMINI_STRUCTURED_OUTPUT
    generation_config: Dict[str, Any] = {"responseMimeType": "application/json"}
    if structured:
        generation_config["responseSchema"] = STEPS_RESPONSE_SCHEMA

    payload: Dict[str, Any] = {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": generation_config,
    }
    if image_b64:
        payload["contents"][0]["parts"].append(
            {"inline_data": {"mime_type": INLINE_IMAGE_MIME, "data": image_b64}}
        )
    return payload


def generate_content_url(model: Optional[str] = None) -> str:
    return f"{settings.GEMINI_BASE_URL}/models/{model or settings.GEMINI_MODEL}:generateContent"


async def generate_content(payload: Dict[str, Any], api_key: str) -> Dict[str, Any]:
    """向 Gemini 发送一次 generateContent 请求并返回解析后的 JSON 对象。"""
    url = generate_content_url()
    t0 = time.perf_counter()
    async with httpx.AsyncClient(timeout=settings.GEMINI_TIMEOUT_S) as client:
        resp = await client.post(
            url,
            params={"key": api_key},
            headers={"Content-Type": "application/json"},
            json=payload,
        )
    ms = int((time.perf_counter() - t0) * 1000)
    log.info(f"Gemini 响应: status={resp.status_code}, ai_ms={ms}ms")

    try:
        data = resp.json()
    except ValueError as e:
        raise UpstreamError(f"Gemini 返回非 JSON 响应体: status={resp.status_code}") from e
    if not isinstance(data, dict):
        raise UpstreamError(f"Gemini 返回的 JSON 不是对象: {type(data).__name__}")
    return data
