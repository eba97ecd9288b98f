"""Tests for prompt construction."""

from jiaowotong.schemas.study import StudyFile, UploadedFile
from jiaowotong.services.prompt_service import (
    ANALYSIS_SYSTEM_PROMPT,
    TEST_PAPER_SYSTEM_PROMPT,
    build_analysis_messages,
    build_analysis_prompt,
    build_study_plan_prompt,
    build_test_paper_messages,
    build_test_paper_prompt,
    question_type_label,
)


def test_analysis_prompt_embeds_file():
    prompt = build_analysis_prompt(UploadedFile(name="notes.txt", mime_type="text/plain", content="TCP 三次握手"))
    assert "文件名: notes.txt" in prompt
    assert "文件类型: text/plain" in prompt
    assert "TCP 三次握手" in prompt
    assert "关键知识点（3-5个）" in prompt


def test_analysis_messages_roles():
    messages = build_analysis_messages(UploadedFile(name="a.txt"))
    assert [m["role"] for m in messages] == ["system", "user"]
    assert messages[0]["content"] == ANALYSIS_SYSTEM_PROMPT


def test_study_plan_prompt():
    files = [StudyFile(name="a.txt", analysis="网络基础"), StudyFile(name="b.txt")]
    prompt = build_study_plan_prompt(files, 90, 5)
    assert "文件: a.txt\n分析: 网络基础" in prompt
    assert "文件: b.txt\n分析: 未分析" in prompt
    assert "目标分数：90分" in prompt
    assert "复习天数：5天" in prompt
    assert '"total_days": 5' in prompt
    assert "```json" in prompt


def test_test_paper_prompt_prefers_content():
    files = [
        StudyFile(name="a.txt", content="原文", analysis="分析"),
        StudyFile(name="b.txt", analysis="只有分析"),
        StudyFile(name="c.txt"),
    ]
    prompt = build_test_paper_prompt(files, 80, 10, "all")
    assert "文件: a.txt\n内容: 原文" in prompt
    assert "文件: b.txt\n内容: 只有分析" in prompt
    assert "文件: c.txt\n内容: 未分析" in prompt
    assert "题目数量：10道" in prompt
    assert "包含选择题、多选题、判断题、简答题" in prompt
    assert '"total_questions": 10' in prompt


def test_question_type_label():
    assert question_type_label("all") == "包含选择题、多选题、判断题、简答题"
    assert question_type_label("judgment") == "判断题"
    assert question_type_label("填空题") == "填空题"
    assert question_type_label("fill_blank") == "fill_blank"


def test_prompts_are_deterministic():
    files = [StudyFile(name="a.txt", analysis="x")]
    assert build_test_paper_messages(files, 85, 3, "essay") == build_test_paper_messages(files, 85, 3, "essay")
    assert build_test_paper_messages(files, 85, 3, "essay")[0]["content"] == TEST_PAPER_SYSTEM_PROMPT
