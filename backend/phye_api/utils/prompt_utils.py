"""
物理讲解提示词（Gemini）
---------------------------------
功能：
- 根据前端传入的 `language` 选择讲解语言指令：
  * "hi"：Hinglish，且必须全部使用拉丁字母书写（禁止天城文，印地语词汇需音译）；
  * 其他任意值（含缺省）：简单易懂的英语。
- 构造完整提示词：导师角色、语言指令、CBSE 四步解题结构、公式/ASCII 图示/视频链接规则、
  输出 JSON 结构说明，以及用户题目原文（无文本仅有图片时使用默认占位题目）。

使用说明：
- `language_instruction(language)` 返回语言指令字符串；
- `build_phye_prompt(text, language)` 返回发送给模型的完整提示词；
- 输出要求为 `{"steps": [{"title", "math", "desc"}]}`，与 `phye_schema.PhyeSolution` 保持一致。
"""

from __future__ import annotations

from typing import Optional

HINGLISH_LANGUAGE_CODE = "hi"

ENGLISH_INSTRUCTION = "Very simple, easy-to-understand English"
HINGLISH_INSTRUCTION = (
    "Hinglish (Simple Hindi mixed with English physics terms). "
    "Write ONLY in the English/Latin alphabet. Do NOT use Devanagari script anywhere. "
    "Transliterate every Hindi word into Roman letters (e.g. 'Yahan velocity constant hai')"
)

DIAGRAM_FENCE = "```text"

IMAGE_ONLY_QUERY = "Solve the physics problem shown in the attached image."


def language_instruction(language: Optional[str]) -> str:
    """仅识别 "hi"，其余取值一律回退为英语讲解。"""
    if language == HINGLISH_LANGUAGE_CODE:
        return HINGLISH_INSTRUCTION
    return ENGLISH_INSTRUCTION


def build_phye_prompt(text: Optional[str], language: Optional[str]) -> str:
    lang = language_instruction(language)
    query = text if text else IMAGE_ONLY_QUERY
    return (
        "You are an expert Physics Tutor (CBSE 10th to College Level).\n"
        "Your goal is to explain physics phenomena, solve complex numericals, and derive equations "
        "so simply that any student can understand.\n"
        f"Language to use: {lang}.\n"
        "\n"
        "CRITICAL FORMATTING INSTRUCTIONS (CBSE PATTERN):\n"
        "Break the answer into these exact logical steps:\n"
        "1. \"Given Data & To Find\": List all known values with their standard SI symbols.\n"
        "2. \"Formula Used / Principle\": State the physics laws or formulas required.\n"
        "3. \"Implementation / Calculation\": Step-by-step substitution and math calculation. "
        "Explain the 'why' behind the math.\n"
        "4. \"Final Answer\": State the final numerical answer WITH strict SI Units "
        "(e.g., m/s^2, Joules, Newtons).\n"
        "\n"
        "PHYSICS SPECIFIC INSTRUCTIONS:\n"
        "- Diagrams & Graphs: If the problem is about Kinematics, Optics, Mechanics (Pulleys/Blocks), "
        "or Circuits, YOU MUST provide a text-based ASCII Free-Body Diagram or Graph. "
        f"Wrap these ASCII drawings inside triple backticks like this: {DIAGRAM_FENCE} [Draw diagram here] ```\n"
        "- Math Equations: Put major formulas in the \"math\" JSON field as raw LaTeX (without $ signs). "
        "Use inline $math$ in the description for smaller variables.\n"
        "- YouTube Links: Include a relevant YouTube search link using Markdown "
        "(e.g., [Watch Concept Video](https://www.youtube.com/results?search_query=topic)).\n"
        "\n"
        "JSON STRUCTURE REQUIREMENT:\n"
        "{\n"
        "    \"steps\": [\n"
        "        {\n"
        "            \"title\": \"Step Title (e.g., Given, Formula, Calculation, Final Answer)\",\n"
        "            \"math\": \"Latex equation without $ signs (leave empty if none)\",\n"
        f"            \"desc\": \"Detailed explanation in {lang}. "
        f"Put Markdown tables or {DIAGRAM_FENCE} ASCII diagrams ``` here.\"\n"
        "        }\n"
        "    ]\n"
        "}\n"
        "\n"
        f"Query: {query}"
    )
