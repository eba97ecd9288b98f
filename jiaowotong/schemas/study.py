"""资料分析、复习计划、模拟试卷相关请求/响应模型。

生成内容（复习计划、试卷）沿用提示词里约定的 snake_case 字段；请求体与外层响应使用 camelCase。
"""
import logging
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator, model_serializer

logger = logging.getLogger(__name__)

Difficulty = Literal["简单", "中等", "困难"]
QuestionType = Literal["single_choice", "multiple_choice", "judgment", "essay"]


# ----- 文件与分析 -----
class UploadedFile(BaseModel):
    """上传文件读取后的内容片段，仅在单次请求内存在。"""
    name: str
    mime_type: str = ""
    content: str = ""


class FileInfo(BaseModel):
    name: str
    type: str = ""


class FileAnalysis(BaseModel):
    name: str
    analysis: str


class StudyFile(BaseModel):
    """生成接口请求体中的文件项：通常是分析接口的返回，前端也可回传 type / content。"""
    name: str = ""
    analysis: str | None = None
    type: str | None = None
    content: str | None = None


# ----- 复习计划 -----
class ScheduleItem(BaseModel):
    time: str
    activity: str
    details: str


class DailyPlan(BaseModel):
    day: int = Field(..., ge=1)
    title: str
    objectives: list[str] = Field(default_factory=list)
    schedule: list[ScheduleItem] = Field(default_factory=list)
    key_points: list[str] = Field(default_factory=list)
    difficulty: Difficulty = "中等"


class StudyPlan(BaseModel):
    plan_title: str
    total_days: int
    daily_plans: list[DailyPlan] = Field(default_factory=list)


# ----- 模拟试卷 -----
class Question(BaseModel):
    id: int = Field(..., ge=1)
    type: QuestionType
    question: str
    options: list[str] = Field(default_factory=list, description="简答题为空")
    correct_answer: str
    explanation: str
    difficulty: Difficulty
    knowledge_points: list[str] = Field(default_factory=list)


class PaperAnalysis(BaseModel):
    total_questions: int
    difficulty_distribution: dict[str, float] = Field(default_factory=dict)
    knowledge_coverage: list[str] = Field(default_factory=list)


class TestPaper(BaseModel):
    title: str
    questions: list[Question] = Field(default_factory=list)
    analysis: PaperAnalysis


# ----- 请求 -----
# 请求参数不合法时不返回 422：无法解析的字段回落到默认值，超出范围的天数/题数截断到上下限
MAX_REVIEW_DAYS = 365
MAX_QUESTION_COUNT = 100


def _lenient_int(value: Any, handler, default: int, low: int | None = None, high: int | None = None) -> int:
    try:
        number = handler(value)
    except ValidationError:
        logger.warning("请求参数无效，使用默认值 %s: %r", default, value)
        return default
    if low is not None:
        number = max(number, low)
    if high is not None:
        number = min(number, high)
    return number


def _coerce_study_file(item: Any) -> StudyFile | None:
    if isinstance(item, str):
        return StudyFile(name=item)
    if isinstance(item, dict):
        try:
            return StudyFile.model_validate(item)
        except ValidationError:
            return StudyFile(name=str(item.get("name") or ""))
    return None


def _lenient_files(value: Any, handler) -> list[StudyFile] | None:
    try:
        return handler(value)
    except ValidationError:
        logger.warning("files 参数格式不正确，尝试按文件名解析: %r", value)
    if isinstance(value, str):
        return [StudyFile(name=value)] if value.strip() else None
    if isinstance(value, list):
        return [f for f in (_coerce_study_file(item) for item in value) if f is not None]
    return None


class StudyPlanRequest(BaseModel):
    files: list[StudyFile] | None = None
    target_score: int = Field(default=85, alias="targetScore")
    review_days: int = Field(default=7, alias="reviewDays", description=f"1-{MAX_REVIEW_DAYS}，超出范围会被截断")

    model_config = {"populate_by_name": True}

    @field_validator("files", mode="wrap")
    @classmethod
    def _validate_files(cls, value, handler):
        return _lenient_files(value, handler)

    @field_validator("target_score", mode="wrap")
    @classmethod
    def _validate_target_score(cls, value, handler):
        return _lenient_int(value, handler, 85)

    @field_validator("review_days", mode="wrap")
    @classmethod
    def _validate_review_days(cls, value, handler):
        return _lenient_int(value, handler, 7, 1, MAX_REVIEW_DAYS)


class TestPaperRequest(BaseModel):
    files: list[StudyFile] | None = None
    target_score: int = Field(default=85, alias="targetScore")
    question_count: int = Field(default=3, alias="questionCount", description=f"1-{MAX_QUESTION_COUNT}")
    question_type: str = Field(default="all", alias="questionType", description="all 或具体题型")

    model_config = {"populate_by_name": True}

    @field_validator("files", mode="wrap")
    @classmethod
    def _validate_files(cls, value, handler):
        return _lenient_files(value, handler)

    @field_validator("target_score", mode="wrap")
    @classmethod
    def _validate_target_score(cls, value, handler):
        return _lenient_int(value, handler, 85)

    @field_validator("question_count", mode="wrap")
    @classmethod
    def _validate_question_count(cls, value, handler):
        return _lenient_int(value, handler, 3, 1, MAX_QUESTION_COUNT)

    @field_validator("question_type", mode="wrap")
    @classmethod
    def _validate_question_type(cls, value, handler):
        try:
            question_type = handler(value)
        except ValidationError:
            logger.warning("questionType 无效，使用 all: %r", value)
            return "all"
        return question_type.strip() or "all"


# ----- 响应 -----
class _SuccessResponse(BaseModel):
    success: bool = True
    warning: str | None = Field(None, description="使用备用方案时的提示，正常生成时不返回")

    @model_serializer(mode="wrap")
    def _drop_empty_warning(self, handler):
        data = handler(self)
        if data.get("warning") is None:
            data.pop("warning", None)
        return data


class AnalyzeFilesResponse(_SuccessResponse):
    files: list[FileInfo] = Field(default_factory=list)
    analysis: list[FileAnalysis] = Field(default_factory=list)


class StudyPlanResponse(_SuccessResponse):
    studyPlan: Any = Field(..., description="复习计划；模型输出无法解析为 JSON 时为 {raw_response}")


class TestPaperResponse(_SuccessResponse):
    testPaper: Any = Field(..., description="模拟试卷；模型输出无法解析为 JSON 时为 {raw_response}")
