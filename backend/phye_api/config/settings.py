"""
后端基础配置（Gemini 物理讲解中转 + .env 自动加载）
---------------------------------
功能：
- 自动加载项目根目录 `.env`（若存在），已存在的系统环境变量优先。
- 定义 Gemini `generateContent` 调用配置：`GEMINI_BASE_URL`、`GEMINI_MODEL`、超时与结构化输出开关。
- 定义两种密钥部署模式：
  1) 单密钥：`GEMINI_API_KEY`；
  2) 密钥池轮询：`GEMINI_API_KEYS`（逗号分隔）。
  两者互斥，若同时设置以密钥池为准（启动时记录 warning，见 `key_rotator.KeyRotator.from_settings`）。
- 定义限流回退等待时间、跨域源与监听地址/端口。

使用说明：
- 请在部署环境中设置 `GEMINI_API_KEY` 或 `GEMINI_API_KEYS`，也可通过 `.env` 注入；
- 不要在代码中硬编码真实密钥。
"""

from pathlib import Path
import os
from dotenv import find_dotenv, load_dotenv


# 注意：settings.py 位于 project_root/backend/phye_api/config/
# 因此项目根目录应为 `parents[3]`
PROJECT_ROOT = Path(__file__).resolve().parents[3]

# `override=False`：环境变量已存在时不被 .env 覆盖，方便在生产环境直接通过系统环境变量注入。
_found = find_dotenv(filename=".env", usecwd=True)
if _found:
    load_dotenv(_found, override=False)
else:
    load_dotenv(str(PROJECT_ROOT / ".env"), override=False)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# --- Gemini 配置 ---
GEMINI_BASE_URL = os.getenv(
    "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
).rstrip("/")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
# 出站请求的传输层超时（秒），本服务不做重试
GEMINI_TIMEOUT_S = float(os.getenv("GEMINI_TIMEOUT_S", "120"))
# 是否在 generationConfig 中附带 responseSchema（约束输出为 steps 结构）
GEMINI_STRUCTURED_OUTPUT = _env_bool("GEMINI_STRUCTURED_OUTPUT", True)

# --- 密钥 ---
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "").strip()
GEMINI_API_KEYS = os.getenv("GEMINI_API_KEYS", "").strip()

# --- 限流 ---
# 上游 429 消息中解析不到 "retry in Ns" 时返回给前端的默认等待秒数
RATE_LIMIT_DEFAULT_RETRY_S = int(os.getenv("RATE_LIMIT_DEFAULT_RETRY_S", "45"))

# 允许跨域的前端地址，默认放开全部来源
_origins_csv = os.getenv("CORS_ORIGINS", "*").strip() or "*"
CORS_ORIGINS = [o.strip() for o in _origins_csv.split(",") if o.strip()]

# --- 监听地址 ---
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))
