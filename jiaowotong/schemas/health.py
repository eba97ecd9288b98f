"""健康检查响应模型。"""
from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = Field("ok", description="服务状态")
    message: str = Field("API服务器运行正常", description="状态说明")
