"""提示词构造：文件分析、复习计划、模拟试卷。纯函数，不做任何 I/O。"""
from typing import Iterable

from jiaowotong.schemas.study import StudyFile, UploadedFile

Message = dict[str, str]

ANALYSIS_SYSTEM_PROMPT = "你是一位专业的教学助手，擅长分析学习资料"
STUDY_PLAN_SYSTEM_PROMPT = "你是一位专业的教学规划师，擅长制定学习计划"
TEST_PAPER_SYSTEM_PROMPT = "你是一位专业的出题老师，擅长设计考试题目"

QUESTION_TYPE_LABELS = {
    "single_choice": "单选题",
    "multiple_choice": "多选题",
    "judgment": "判断题",
    "essay": "简答题",
}
ALL_QUESTION_TYPES_LABEL = "包含选择题、多选题、判断题、简答题"


def question_type_label(question_type: str) -> str:
    if question_type == "all":
        return ALL_QUESTION_TYPES_LABEL
    return QUESTION_TYPE_LABELS.get(question_type, question_type)


def build_analysis_prompt(file: UploadedFile) -> str:
    return f"""请分析以下学习资料的内容，提取关键知识点和主题：

文件名: {file.name}
文件类型: {file.mime_type}
内容片段: {file.content}

请提供：
1. 文档的主要主题
2. 关键知识点（3-5个）
3. 文档结构概述
4. 适合的题目类型（选择题、简答题等）"""


def build_study_plan_prompt(analyses: Iterable[StudyFile], target_score: int, review_days: int) -> str:
    file_summaries = "\n\n".join(f"文件: {f.name}\n分析: {f.analysis or '未分析'}" for f in analyses)
    return f"""作为一位专业的教学规划师，请根据以下学习资料和目标，制定一个详细的复习计划：

学习资料分析：
{file_summaries}

目标：
- 目标分数：{target_score}分
- 复习天数：{review_days}天

请生成一个详细到每天的学习计划，包括：
1. 每日学习目标
2. 具体学习内容（按小时划分）
3. 重点难点突破
4. 复习建议
5. 自我检测方法

请以JSON格式返回（放在 ```json 代码块中），结构如下：
{{
  "plan_title": "个性化复习计划",
  "total_days": {review_days},
  "daily_plans": [
    {{
      "day": 1,
      "title": "第一天：基础知识复习",
      "objectives": ["...", "..."],
      "schedule": [
        {{"time": "9:00-10:30", "activity": "...", "details": "..."}}
      ],
      "key_points": ["...", "..."],
      "difficulty": "中等"
    }}
  ]
}}"""


def build_test_paper_prompt(
    files: Iterable[StudyFile],
    target_score: int,
    question_count: int,
    question_type: str,
) -> str:
    # 优先用原文片段，其次用分析结果
    file_summaries = "\n\n".join(
        f"文件: {f.name}\n内容: {f.content or f.analysis or '未分析'}" for f in files
    )
    return f"""作为一位专业的出题老师，请根据以下学习资料生成一套高质量的模拟试卷：

学习资料：
{file_summaries}

试卷要求：
- 目标分数：{target_score}分
- 题目数量：{question_count}道
- 题目类型：{question_type_label(question_type)}

请生成一套完整的试卷，包括：
1. 试卷标题
2. 各部分题目（包含题干、选项、答案、解析）
3. 难度分布
4. 知识点覆盖说明

请以JSON格式返回（放在 ```json 代码块中），结构如下：
{{
  "title": "模拟测试卷",
  "questions": [
    {{
      "id": 1,
      "type": "single_choice",
      "question": "问题内容",
      "options": ["A. 选项1", "B. 选项2", "C. 选项3", "D. 选项4"],
      "correct_answer": "A",
      "explanation": "答案解析",
      "difficulty": "中等",
      "knowledge_points": ["知识点1", "知识点2"]
    }}
  ],
  "analysis": {{
    "total_questions": {question_count},
    "difficulty_distribution": {{"简单": 0.3, "中等": 0.5, "困难": 0.2}},
    "knowledge_coverage": ["...", "..."]
  }}
}}"""


def build_analysis_messages(file: UploadedFile) -> list[Message]:
    return [
        {"role": "system", "content": ANALYSIS_SYSTEM_PROMPT},
        {"role": "user", "content": build_analysis_prompt(file)},
    ]


def build_study_plan_messages(
    analyses: Iterable[StudyFile], target_score: int, review_days: int
) -> list[Message]:
    return [
        {"role": "system", "content": STUDY_PLAN_SYSTEM_PROMPT},
        {"role": "user", "content": build_study_plan_prompt(analyses, target_score, review_days)},
    ]


def build_test_paper_messages(
    files: Iterable[StudyFile],
    target_score: int,
    question_count: int,
    question_type: str,
) -> list[Message]:
    return [
        {"role": "system", "content": TEST_PAPER_SYSTEM_PROMPT},
        {"role": "user", "content": build_test_paper_prompt(files, target_score, question_count, question_type)},
    ]
