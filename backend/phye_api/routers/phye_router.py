"""
物理讲解路由（Gemini 中转）
---------------------------------
功能：
- `POST /api/phye`：接收 `{text?, image?, language?}`，交由 `PhyeService` 构造提示词并调用 Gemini，
  按服务层给出的状态码与返回体原样响应：
  * 200：模型输出的 `{steps: [...]}`，或兜底 `{raw}`；
  * 429：`{rate_limit: true, retry_in, raw}`，前端据 `retry_in` 自行决定何时重试；
  * 500：`{raw}`，密钥未配置或处理过程异常。

说明：
- 服务实例在应用启动时创建并挂在 `app.state.phye_service` 上，密钥轮询游标随之在进程内共享。
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..models.phye_schema import PhyeRequest
from ..services.phye_service import PhyeService


router = APIRouter()


def get_phye_service(request: Request) -> PhyeService:
    return request.app.state.phye_service


@router.post("/phye")
async def phye(req: PhyeRequest, service: PhyeService = Depends(get_phye_service)):
    """物理题讲解：返回分步 JSON 或兜底文本。"""
    outcome = await service.handle(req)
    return JSONResponse(status_code=outcome.status_code, content=outcome.body)
