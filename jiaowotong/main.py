import logging
import os
import time
from pathlib import Path

# 在导入 config 前加载项目根目录 .env（不覆盖已有环境变量）
_root = Path(__file__).resolve().parent.parent
_env = _root / ".env"
if _env.is_file():
    with open(_env, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line and "=" in line and not line.startswith("#"):
                k, _, v = line.partition("=")
                k, v = k.strip(), v.strip()
                if k and os.environ.get(k) is None:
                    os.environ[k] = v

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from jiaowotong.api.router import api_router
from jiaowotong.api.routes.health import router as health_router
from jiaowotong.core.config import settings
from jiaowotong.core.errors import UserInputError

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = (time.perf_counter() - start) * 1000
        addr = request.client.host if request.client else "-"
        logger.info(f'{addr} - "{request.method} {request.url.path}" {response.status_code} ({elapsed:.0f}ms)')
        return response


async def _user_input_error_handler(request: Request, exc: UserInputError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


def create_app() -> FastAPI:
    app = FastAPI(title="Jiaowotong Study Backend")
    app.add_middleware(RequestLogMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(UserInputError, _user_input_error_handler)
    app.include_router(health_router, tags=["health"])
    app.include_router(api_router, prefix=settings.api_prefix)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    logger.info("API服务器运行在 http://%s:%s", settings.host, settings.port)
    logger.info("接口说明：")
    logger.info("1. POST %s/analyze-files - 分析上传的文件", settings.api_prefix)
    logger.info("2. POST %s/generate-study-plan - 生成复习计划", settings.api_prefix)
    logger.info("3. POST %s/generate-test-paper - 生成模拟试卷", settings.api_prefix)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
