from fastapi import APIRouter

from jiaowotong.api.routes.study import router as study_router

api_router = APIRouter()
api_router.include_router(study_router, tags=["study"])
