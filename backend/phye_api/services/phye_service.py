# -*- coding: utf-8 -*-
"""
物理讲解（Phye）请求处理服务
---------------------------------
功能：
- 从密钥轮询器获取本次请求使用的 Gemini 密钥，无可用密钥时直接返回 500，不请求上游；
- 构造提示词与请求体（可附带图片），单次调用 Gemini，不做重试；
- 对上游结果分类并映射为返回体：
  * `error.code == 429` → 429 `{rate_limit: true, retry_in, raw}`，等待秒数由 `extract_retry_seconds` 解析；
  * 无 `candidates` → 200 `{raw: "AI could not process this request."}`；
  * 候选文本可解析为 JSON → 200，原样透传；
  * 候选文本不是 JSON → 200 `{raw: <原文>}`；
  * 其他任何异常 → 记录日志，500 `{raw: "Internal Server Error during processing."}`，不向前端暴露异常细节。
"""
from __future__ import annotations

import json
from typing import Any, Dict, NamedTuple, Optional

from pydantic import ValidationError

from ..models.phye_schema import PhyeRequest, PhyeSolution, RateLimitReply, RawReply
from ..utils.logger import log
from ..utils.pictures_utils import strip_data_url
from ..utils.prompt_utils import build_phye_prompt
from ..utils.retry_utils import extract_retry_seconds
from . import gemini_service
from .key_rotator import KeyRotator, fingerprint_api_key


MSG_NO_KEY = "Server Error: API Key not configured."
MSG_COOLING_DOWN = "AI Core cooling down."
MSG_NO_CANDIDATES = "AI could not process this request."
MSG_INTERNAL_ERROR = "Internal Server Error during processing."


class PhyeOutcome(NamedTuple):
    status_code: int
    body: Any


def _reject_constant(name: str):
    """NaN / Infinity 不是标准 JSON，且无法被响应序列化。"""
    raise ValueError(f"non-standard JSON constant: {name}")


def _first_candidate_text(data: Dict[str, Any]) -> Optional[str]:
    """取首个候选结果的首段文本；结构不完整（如被安全策略拦截、无 parts）时返回 None。"""
    candidate = data["candidates"][0]
    if not isinstance(candidate, dict):
        return None
    parts = (candidate.get("content") or {}).get("parts") or []
    if not parts or not isinstance(parts[0], dict):
        return None
    text = parts[0].get("text")
    return text if isinstance(text, str) else None


class PhyeService:
    def __init__(self, rotator: KeyRotator):
        self.rotator = rotator

    async def handle(self, req: PhyeRequest) -> PhyeOutcome:
        api_key = self.rotator.next()
        if not api_key:
            log.error("Phye 请求被拒绝：未配置 Gemini API Key")
            return PhyeOutcome(500, RawReply(raw=MSG_NO_KEY).model_dump())

        try:
            image_b64 = strip_data_url(req.image)
            prompt = build_phye_prompt(req.text, req.language)
            payload = gemini_service.build_generate_payload(prompt, image_b64)
            log.info(
                f"Phye 请求: language={req.language!r}, text_len={len(req.text or '')}, "
                f"has_image={bool(image_b64)}, key={fingerprint_api_key(api_key)}"
            )

            data = await gemini_service.generate_content(payload, api_key)
            return self._classify(data)
        except Exception:
            log.exception("Phye Server Crash")
            return PhyeOutcome(500, RawReply(raw=MSG_INTERNAL_ERROR).model_dump())

    def _classify(self, data: Dict[str, Any]) -> PhyeOutcome:
        error = data.get("error")
        if isinstance(error, dict) and error.get("code") == 429:
            retry_in = extract_retry_seconds(error.get("message"))
            log.warning(f"Gemini 限流: retry_in={retry_in}s")
            reply = RateLimitReply(retry_in=retry_in, raw=MSG_COOLING_DOWN)
            return PhyeOutcome(429, reply.model_dump())

        if not data.get("candidates"):
            if error:
                log.warning(f"Gemini 返回错误且无候选结果: {error}")
            return PhyeOutcome(200, RawReply(raw=MSG_NO_CANDIDATES).model_dump())

        raw_text = _first_candidate_text(data)
        if raw_text is None:
            log.warning("Gemini 候选结果不含文本")
            return PhyeOutcome(200, RawReply(raw=MSG_NO_CANDIDATES).model_dump())

        try:
            parsed = json.loads(raw_text, parse_constant=_reject_constant)
        except ValueError as e:
            log.warning(f"JSON Parse Error: {e}")
            return PhyeOutcome(200, RawReply(raw=raw_text).model_dump())

        try:
            PhyeSolution.model_validate(parsed)
        except ValidationError as e:
            log.warning(f"Gemini 输出不符合 steps 结构，原样透传: {e.error_count()} 处不匹配")
        return PhyeOutcome(200, parsed)
