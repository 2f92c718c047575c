"""
物理讲解（Phye）请求与返回模型
---------------------------------
功能：
- `PhyeRequest`：前端请求体，文本题目、图片（base64）与讲解语言均为可选；
- `PhyeStep` / `PhyeSolution`：模型按要求输出的分步讲解结构；
- `RawReply`：解析失败、无候选结果、配置错误或内部异常时的兜底返回 `{raw}`；
- `RateLimitReply`：上游限流时的返回 `{rate_limit, retry_in, raw}`。

说明：
- 成功时直接透传模型输出的 JSON，不经 `PhyeSolution` 重新序列化，避免丢失模型附带的额外字段；
  `gemini_service.STEPS_RESPONSE_SCHEMA` 由 `PhyeStep` 字段生成。
"""

from typing import List, Optional
from pydantic import BaseModel, Field


class PhyeRequest(BaseModel):
    text: Optional[str] = Field(None, description="题目文本")
    image: Optional[str] = Field(None, description="题目图片 base64（可带 data URL 前缀）")
    language: Optional[str] = Field(None, description="讲解语言：hi 为 Hinglish，其余为英语")


class PhyeStep(BaseModel):
    title: str = Field(..., description="步骤标题：Given / Formula / Calculation / Final Answer")
    math: str = Field("", description="LaTeX 公式（不含 $），无则为空")
    desc: str = Field("", description="讲解正文，可包含 Markdown 表格与 ```text ASCII 图示")


class PhyeSolution(BaseModel):
    steps: List[PhyeStep] = Field(default_factory=list)


class RawReply(BaseModel):
    raw: str


class RateLimitReply(BaseModel):
    rate_limit: bool = True
    retry_in: int
    raw: str = "AI Core cooling down."
