"""资料分析、复习计划、模拟试卷接口。大模型不可用时返回备用内容并带 warning，不返回 5xx。"""
import logging
from pathlib import Path

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse

from jiaowotong.api.deps import get_chat_client
from jiaowotong.core.config import settings
from jiaowotong.core.errors import UploadTooLargeError, UserInputError
from jiaowotong.schemas.study import (
    AnalyzeFilesResponse,
    StudyPlanRequest,
    StudyPlanResponse,
    TestPaperRequest,
    TestPaperResponse,
    UploadedFile,
)
from jiaowotong.services.content_extract_service import extract_upload_async, save_upload_to_temp_async
from jiaowotong.services.llm_service import LLMClient
from jiaowotong.services.study_service import analyze_files, generate_study_plan, generate_test_paper

logger = logging.getLogger(__name__)
router = APIRouter()


async def _read_upload(file: UploadFile) -> UploadedFile:
    """上传内容先落到临时文件，再由提取服务读取（读取后临时文件即被删除）。"""
    name = file.filename or "upload"
    limit = settings.max_upload_bytes
    if file.size is not None and file.size > limit:
        raise UploadTooLargeError(name)
    # 最多多读 1 字节，用于判断是否超限，不把超大文件整个读进内存
    data = await file.read(limit + 1)
    if len(data) > limit:
        raise UploadTooLargeError(name)
    tmp_path = await save_upload_to_temp_async(data, Path(name).suffix)
    return await extract_upload_async(tmp_path, name, file.content_type or "")


@router.post("/analyze-files", response_model=AnalyzeFilesResponse)
async def analyze_uploaded_files(
    files: list[UploadFile] | None = File(None, description="学习资料，可多个"),
    client: LLMClient = Depends(get_chat_client),
):
    """上传学习资料并逐个分析。分析失败时仍返回 200，analysis 中写入失败原因并带 warning。"""
    uploads_in = [f for f in (files or []) if f.filename]
    if not uploads_in:
        raise UserInputError("未上传文件")
    logger.info("[analyze-files] 收到 %d 个文件: %s", len(uploads_in), [f.filename for f in uploads_in])
    try:
        uploads = [await _read_upload(f) for f in uploads_in]
        result = await analyze_files(uploads, client)
    except UploadTooLargeError as e:
        return JSONResponse(status_code=413, content={"error": str(e)})
    except Exception as e:
        logger.exception("文件分析错误: %s", e)
        return JSONResponse(status_code=500, content={"error": "文件分析失败", "details": str(e)})
    return AnalyzeFilesResponse(
        files=result.payload.files,
        analysis=result.payload.analysis,
        warning=result.warning,
    )


@router.post("/generate-study-plan", response_model=StudyPlanResponse)
async def create_study_plan(
    body: StudyPlanRequest,
    client: LLMClient = Depends(get_chat_client),
):
    result = await generate_study_plan(body.files, body.target_score, body.review_days, client)
    return StudyPlanResponse(studyPlan=result.payload, warning=result.warning)


@router.post("/generate-test-paper", response_model=TestPaperResponse)
async def create_test_paper(
    body: TestPaperRequest,
    client: LLMClient = Depends(get_chat_client),
):
    result = await generate_test_paper(
        body.files, body.target_score, body.question_count, body.question_type, client
    )
    return TestPaperResponse(testPaper=result.payload, warning=result.warning)
