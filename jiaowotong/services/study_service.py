"""资料分析、复习计划、模拟试卷的编排：调用大模型 → 解析 → 失败时走备用方案。

除「未提供文件」外，任何下游失败都不会让请求失败：返回值始终带有可用内容，降级原因放在 warning 里。
"""
import logging
from dataclasses import dataclass
from typing import Any, Generic, Protocol, Sequence, TypeVar

from jiaowotong.core.errors import ConfigurationError, UpstreamError, UserInputError
from jiaowotong.schemas.study import FileAnalysis, FileInfo, StudyFile, UploadedFile
from jiaowotong.services.fallback_service import generate_fallback_study_plan, generate_fallback_test_paper
from jiaowotong.services.llm_service import TEST_PAPER_TEMPERATURE
from jiaowotong.services.prompt_service import (
    build_analysis_messages,
    build_study_plan_messages,
    build_test_paper_messages,
)
from jiaowotong.services.response_parser import extract_structured

logger = logging.getLogger(__name__)

T = TypeVar("T")

ANALYZE_FAILED_WARNING = "文件分析失败，使用备用方案生成模拟卷"
STUDY_PLAN_API_WARNING = "API调用失败，使用备用方案生成复习计划"
TEST_PAPER_API_WARNING = "API调用失败，使用备用方案生成模拟卷"
GENERIC_FAILURE_WARNING = "生成失败，使用备用方案"

# 兜底时使用的默认参数
DEFAULT_TARGET_SCORE = 85
DEFAULT_REVIEW_DAYS = 7
DEFAULT_QUESTION_COUNT = 3
DEFAULT_QUESTION_TYPE = "all"


class ChatClient(Protocol):
    async def call(self, messages: list[dict[str, str]], temperature: float = ...) -> str: ...


@dataclass(frozen=True)
class GenerationResult(Generic[T]):
    """payload 总是有值；warning 非空表示使用了降级内容。"""
    payload: T
    warning: str | None = None


@dataclass(frozen=True)
class AnalysisBatch:
    files: list[FileInfo]
    analysis: list[FileAnalysis]


def _require_files(files: Sequence[Any] | None, message: str) -> None:
    if not files:
        raise UserInputError(message)


async def analyze_files(uploads: Sequence[UploadedFile], client: ChatClient) -> GenerationResult[AnalysisBatch]:
    """逐个文件调用大模型分析；单个文件失败时写入失败说明并带上 warning。"""
    _require_files(uploads, "未上传文件")

    analyses: list[FileAnalysis] = []
    warning = None
    for upload in uploads:
        try:
            text = await client.call(build_analysis_messages(upload))
        except (ConfigurationError, UpstreamError) as e:
            logger.error("DeepSeek API分析错误 file=%s: %s", upload.name, e)
            text = f"文件分析失败: {str(e) or 'API调用错误'}"
            warning = ANALYZE_FAILED_WARNING
        analyses.append(FileAnalysis(name=upload.name, analysis=text))

    batch = AnalysisBatch(
        files=[FileInfo(name=u.name, type=u.mime_type) for u in uploads],
        analysis=analyses,
    )
    return GenerationResult(batch, warning)


async def generate_study_plan(
    files: Sequence[StudyFile] | None,
    target_score: int,
    review_days: int,
    client: ChatClient,
) -> GenerationResult[Any]:
    _require_files(files, "没有文件内容")
    try:
        try:
            raw = await client.call(build_study_plan_messages(files, target_score, review_days))
        except (ConfigurationError, UpstreamError) as e:
            logger.error("DeepSeek API生成复习计划错误: %s", e)
            return GenerationResult(
                generate_fallback_study_plan(files, target_score, review_days), STUDY_PLAN_API_WARNING
            )
        return GenerationResult(extract_structured(raw))
    except Exception:
        logger.exception("生成复习计划错误")
        return GenerationResult(
            generate_fallback_study_plan([], DEFAULT_TARGET_SCORE, DEFAULT_REVIEW_DAYS), GENERIC_FAILURE_WARNING
        )


async def generate_test_paper(
    files: Sequence[StudyFile] | None,
    target_score: int,
    question_count: int,
    question_type: str,
    client: ChatClient,
) -> GenerationResult[Any]:
    _require_files(files, "没有文件内容")
    try:
        try:
            raw = await client.call(
                build_test_paper_messages(files, target_score, question_count, question_type),
                temperature=TEST_PAPER_TEMPERATURE,
            )
        except (ConfigurationError, UpstreamError) as e:
            logger.error("DeepSeek API生成试卷错误: %s", e)
            return GenerationResult(
                generate_fallback_test_paper(files, target_score, question_count, question_type),
                TEST_PAPER_API_WARNING,
            )
        return GenerationResult(extract_structured(raw))
    except Exception:
        logger.exception("生成模拟试卷错误")
        return GenerationResult(
            generate_fallback_test_paper(
                [], DEFAULT_TARGET_SCORE, DEFAULT_QUESTION_COUNT, DEFAULT_QUESTION_TYPE
            ),
            GENERIC_FAILURE_WARNING,
        )
