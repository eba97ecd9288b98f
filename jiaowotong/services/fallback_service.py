"""备用方案：大模型不可用时生成固定的复习计划与模拟试卷。

纯函数，不调用大模型、不含随机数和时间戳，相同输入得到完全相同的输出。
"""
from enum import Enum
from typing import Any, Iterable

from jiaowotong.schemas.study import (
    DailyPlan,
    MAX_REVIEW_DAYS,
    PaperAnalysis,
    Question,
    ScheduleItem,
    StudyPlan,
    TestPaper,
)

MATH_KEYWORDS = ("math", "数学", "代数", "几何")


class Domain(str, Enum):
    MATH = "math"
    GENERAL = "general"


SUBJECT_LABELS = {Domain.MATH: "数学", Domain.GENERAL: "计算机基础"}


def _file_name(file: Any) -> str:
    if isinstance(file, str):
        return file
    if isinstance(file, dict):
        return file.get("name") or ""
    return getattr(file, "name", None) or ""


def classify_domain(files: Iterable[Any]) -> Domain:
    """按文件名粗略判断学科：任一文件名含数学相关关键词（不区分大小写）即为数学。"""
    for file in files:
        name = _file_name(file).lower()
        if any(k in name for k in MATH_KEYWORDS):
            return Domain.MATH
    return Domain.GENERAL


# ----- 模拟试卷 -----
_MATH_PAPER = TestPaper(
    title="数学模拟测试卷（备用方案）",
    questions=[
        Question(
            id=1,
            type="single_choice",
            question="若函数 f(x) = x² - 3x + 2，则 f(2) 的值为：",
            options=["A. 0", "B. 1", "C. 2", "D. 3"],
            correct_answer="A",
            explanation="将 x=2 代入函数 f(x) = x² - 3x + 2，得 f(2) = 2² - 3×2 + 2 = 4 - 6 + 2 = 0。",
            difficulty="简单",
            knowledge_points=["函数求值", "代数运算"],
        ),
        Question(
            id=2,
            type="multiple_choice",
            question="以下哪些是二次函数的性质？",
            options=["A. 图像是抛物线", "B. 最高次数为2", "C. 一定有两个实根", "D. 关于对称轴对称"],
            correct_answer="A, B, D",
            explanation="二次函数的图像是抛物线，最高次数为2，关于对称轴对称，但不一定有两个实根（当判别式小于0时无实根）。",
            difficulty="中等",
            knowledge_points=["二次函数", "函数性质"],
        ),
        Question(
            id=3,
            type="judgment",
            question="π 是有理数。",
            options=["正确", "错误"],
            correct_answer="错误",
            explanation="π 是无理数，不能表示为两个整数的比值。",
            difficulty="简单",
            knowledge_points=["无理数", "实数分类"],
        ),
    ],
    analysis=PaperAnalysis(
        total_questions=3,
        difficulty_distribution={"简单": 0.67, "中等": 0.33, "困难": 0},
        knowledge_coverage=["函数求值", "代数运算", "二次函数", "函数性质", "无理数", "实数分类"],
    ),
)

_GENERAL_PAPER = TestPaper(
    title="模拟测试卷（备用方案）",
    questions=[
        Question(
            id=1,
            type="single_choice",
            question="以下关于计算机网络的说法，正确的是：",
            options=[
                "A. 计算机网络只能用于传递数据",
                "B. 计算机网络由硬件和软件组成",
                "C. 计算机网络不需要协议",
                "D. 计算机网络只能在局域网中使用",
            ],
            correct_answer="B",
            explanation="计算机网络是由硬件设备和软件系统组成的，用于实现计算机之间的通信和资源共享。",
            difficulty="简单",
            knowledge_points=["计算机网络", "网络组成"],
        ),
        Question(
            id=2,
            type="multiple_choice",
            question="以下属于操作系统的是：",
            options=["A. Windows", "B. Linux", "C. Office", "D. macOS"],
            correct_answer="A, B, D",
            explanation="Windows、Linux和macOS都是操作系统，而Office是办公软件。",
            difficulty="简单",
            knowledge_points=["操作系统", "软件分类"],
        ),
        Question(
            id=3,
            type="essay",
            question="请简述计算机病毒的特点和预防措施。",
            correct_answer=(
                "计算机病毒的特点包括：传染性、潜伏性、破坏性、隐蔽性等。"
                "预防措施包括：安装杀毒软件、定期更新系统、不随意打开陌生邮件附件、使用安全的网络环境等。"
            ),
            explanation="本题主要考察对计算机病毒基本概念的理解和预防意识。",
            difficulty="中等",
            knowledge_points=["计算机安全", "病毒防护"],
        ),
    ],
    analysis=PaperAnalysis(
        total_questions=3,
        difficulty_distribution={"简单": 0.67, "中等": 0.33, "困难": 0},
        knowledge_coverage=["计算机网络", "网络组成", "操作系统", "软件分类", "计算机安全", "病毒防护"],
    ),
)


def generate_fallback_test_paper(
    files: Iterable[Any],
    target_score: int = 85,
    question_count: int = 3,
    question_type: str = "all",
) -> dict[str, Any]:
    """按学科返回固定的 3 道题试卷，忽略 question_count 与 question_type。"""
    paper = _MATH_PAPER if classify_domain(files) is Domain.MATH else _GENERAL_PAPER
    return paper.model_dump()


# ----- 复习计划 -----
_DAILY_SCHEDULE = (
    ("9:00-10:30", "知识点学习", "学习{subject}相关知识点，重点关注基本概念和原理"),
    ("10:45-12:00", "例题分析", "分析典型例题，理解解题思路"),
    ("14:00-15:30", "习题练习", "完成相关习题，巩固知识点"),
    ("15:45-17:00", "错题整理", "整理错题，分析错误原因"),
    ("19:00-20:30", "知识点回顾", "回顾当天学习内容，强化记忆"),
)


def _build_day(day: int, total: int, subject: str) -> DailyPlan:
    if day == 1:
        stage, focus, difficulty = "基础知识", "基础知识", "简单"
    elif day == total:
        stage, focus, difficulty = "综合复习", "综合应用", "困难"
    else:
        stage, focus, difficulty = "重点内容", "核心概念", "中等"
    return DailyPlan(
        day=day,
        title=f"第{day}天：{subject}{stage}复习",
        objectives=[f"掌握{subject}{focus}", "完成相关练习题目", "整理知识点笔记"],
        schedule=[
            ScheduleItem(time=time, activity=activity, details=details.format(subject=subject))
            for time, activity, details in _DAILY_SCHEDULE
        ],
        key_points=[f"{subject}{focus}", "解题技巧和方法", "常见错误分析"],
        difficulty=difficulty,
    )


def generate_fallback_study_plan(
    files: Iterable[Any],
    target_score: int = 85,
    review_days: int = 7,
) -> dict[str, Any]:
    """生成 review_days 天的复习计划：首日基础（简单）、末日综合（困难）、其余为重点内容（中等）。

    天数截断到 MAX_REVIEW_DAYS 以内。
    """
    subject = SUBJECT_LABELS[classify_domain(files)]
    days = min(max(review_days, 0), MAX_REVIEW_DAYS)
    plan = StudyPlan(
        plan_title=f"{subject}个性化复习计划",
        total_days=days,
        daily_plans=[_build_day(day, days, subject) for day in range(1, days + 1)],
    )
    return plan.model_dump()
