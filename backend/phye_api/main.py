"""
后端入口（FastAPI 应用）
---------------------------------
功能：
- 创建 FastAPI 应用并配置 CORS，默认允许所有来源以 GET/POST/OPTIONS 跨域访问。
- 暴露健康检查接口 `/healthz`，返回固定文本，便于前端/部署探活。
- 启动时按部署模式（单密钥 / 密钥池）构建 `KeyRotator`，注入 `PhyeService` 并挂到 `app.state`。
- 挂载物理讲解路由，路径为 `/api/phye`。

使用说明：
- 本地运行：`python -m phye_api` 或 `phye-api`，监听 `HOST:PORT`（默认 0.0.0.0:5000）；
- 生产部署可直接 `uvicorn phye_api.main:app`，结合反向代理使用。
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .routers.phye_router import router as phye_router
from .services.key_rotator import KeyRotator
from .services.phye_service import PhyeService
from .config.settings import CORS_ORIGINS, HOST, PORT


HEALTH_TEXT = "Phye AI Core is online."

app = FastAPI(title="Phye AI API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# 密钥池在进程启动时固定，轮询游标随进程生命周期存在
app.state.phye_service = PhyeService(KeyRotator.from_settings())


@app.get("/healthz", response_class=PlainTextResponse)
async def healthz():
    """健康检查接口：用于确认服务已启动且可访问。"""
    return HEALTH_TEXT


app.include_router(phye_router, prefix="/api", tags=["phye"])


def run():
    import uvicorn

    uvicorn.run(app, host=HOST, port=PORT)
