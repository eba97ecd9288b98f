"""API 请求/响应 Pydantic 模型。按模块组织，路由从本包或子模块导入。"""
from jiaowotong.schemas.health import HealthResponse
from jiaowotong.schemas.study import (
    AnalyzeFilesResponse,
    DailyPlan,
    FileAnalysis,
    FileInfo,
    PaperAnalysis,
    Question,
    ScheduleItem,
    StudyPlan,
    StudyPlanRequest,
    StudyFile,
    StudyPlanResponse,
    TestPaper,
    TestPaperRequest,
    TestPaperResponse,
    UploadedFile,
)

__all__ = [
    "HealthResponse",
    "AnalyzeFilesResponse",
    "DailyPlan",
    "FileAnalysis",
    "FileInfo",
    "PaperAnalysis",
    "Question",
    "ScheduleItem",
    "StudyPlan",
    "StudyPlanRequest",
    "StudyFile",
    "StudyPlanResponse",
    "TestPaper",
    "TestPaperRequest",
    "TestPaperResponse",
    "UploadedFile",
]
