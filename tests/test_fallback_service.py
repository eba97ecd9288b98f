"""Tests for the deterministic fallback study plan / test paper and the domain classifier."""

import json

import pytest

from jiaowotong.schemas.study import StudyFile
from jiaowotong.services.fallback_service import (
    Domain,
    classify_domain,
    generate_fallback_study_plan,
    generate_fallback_test_paper,
)


# ── Domain classification ─────────────────────────────────────


@pytest.mark.parametrize(
    "names",
    [
        ["math_notes.txt"],
        ["高等数学笔记.pdf"],
        ["线性代数.docx"],
        ["解析几何复习.txt"],
        ["history.txt", "MATH-101.pdf"],
        ["Discrete_Mathematics.md"],
    ],
)
def test_classify_math(names):
    assert classify_domain(names) is Domain.MATH


@pytest.mark.parametrize("names", [[], ["os_notes.txt"], ["计算机网络.pdf", "english.docx"]])
def test_classify_general(names):
    assert classify_domain(names) is Domain.GENERAL


def test_classify_accepts_dicts_and_models():
    assert classify_domain([{"name": "代数.txt"}]) is Domain.MATH
    assert classify_domain([StudyFile(name="Math.pdf")]) is Domain.MATH
    assert classify_domain([{"analysis": "no name"}]) is Domain.GENERAL


# ── Study plan ───────────────────────────────────────────────


@pytest.mark.parametrize("n", [1, 2, 3, 7, 14])
def test_study_plan_has_one_entry_per_day(n):
    plan = generate_fallback_study_plan([], 85, n)
    assert plan["total_days"] == n
    assert len(plan["daily_plans"]) == n
    assert [d["day"] for d in plan["daily_plans"]] == list(range(1, n + 1))


@pytest.mark.parametrize("n", [2, 3, 5])
def test_study_plan_difficulty_progression(n):
    days = generate_fallback_study_plan([], 85, n)["daily_plans"]
    assert days[0]["difficulty"] == "简单"
    assert days[-1]["difficulty"] == "困难"
    assert all(d["difficulty"] == "中等" for d in days[1:-1])
    assert "基础知识" in days[0]["title"]
    assert "综合复习" in days[-1]["title"]
    assert all("重点内容" in d["title"] for d in days[1:-1])


def test_single_day_plan_uses_first_day_rules():
    days = generate_fallback_study_plan([], 85, 1)["daily_plans"]
    assert days[0]["difficulty"] == "简单"
    assert days[0]["title"] == "第1天：计算机基础基础知识复习"


def test_study_plan_fixed_schedule():
    day = generate_fallback_study_plan([], 85, 3)["daily_plans"][1]
    assert [s["time"] for s in day["schedule"]] == [
        "9:00-10:30",
        "10:45-12:00",
        "14:00-15:30",
        "15:45-17:00",
        "19:00-20:30",
    ]
    assert [s["activity"] for s in day["schedule"]] == ["知识点学习", "例题分析", "习题练习", "错题整理", "知识点回顾"]


def test_study_plan_subject_follows_domain():
    math_plan = generate_fallback_study_plan([{"name": "math_notes.txt"}], 90, 3)
    general_plan = generate_fallback_study_plan([{"name": "notes.txt"}], 90, 3)
    assert math_plan["plan_title"] == "数学个性化复习计划"
    assert general_plan["plan_title"] == "计算机基础个性化复习计划"
    assert "数学" in math_plan["daily_plans"][0]["schedule"][0]["details"]


def test_study_plan_is_idempotent():
    files = [{"name": "数学.txt"}]
    first = json.dumps(generate_fallback_study_plan(files, 85, 5), ensure_ascii=False)
    second = json.dumps(generate_fallback_study_plan(files, 85, 5), ensure_ascii=False)
    assert first == second


# ── Test paper ───────────────────────────────────────────────


@pytest.mark.parametrize("count,qtype", [(3, "all"), (20, "single_choice"), (1, "essay")])
def test_test_paper_always_three_questions(count, qtype):
    paper = generate_fallback_test_paper([], 85, count, qtype)
    assert len(paper["questions"]) == 3
    assert paper["analysis"]["total_questions"] == 3
    assert [q["id"] for q in paper["questions"]] == [1, 2, 3]


def test_test_paper_distribution_sums_to_one():
    for files in ([], [{"name": "math.txt"}]):
        dist = generate_fallback_test_paper(files)["analysis"]["difficulty_distribution"]
        assert sum(dist.values()) == pytest.approx(1.0, abs=0.01)


def test_math_and_general_papers():
    math_paper = generate_fallback_test_paper([{"name": "几何.pdf"}])
    general_paper = generate_fallback_test_paper([{"name": "network.pdf"}])
    assert math_paper["title"] == "数学模拟测试卷（备用方案）"
    assert general_paper["title"] == "模拟测试卷（备用方案）"
    assert math_paper["questions"][0]["correct_answer"] == "A"
    essay = general_paper["questions"][2]
    assert essay["type"] == "essay"
    assert essay["options"] == []


def test_test_paper_is_idempotent_and_not_shared():
    first = generate_fallback_test_paper([{"name": "math.txt"}])
    first["questions"].clear()
    second = generate_fallback_test_paper([{"name": "math.txt"}])
    assert len(second["questions"]) == 3
    assert json.dumps(second, ensure_ascii=False) == json.dumps(
        generate_fallback_test_paper([{"name": "math.txt"}]), ensure_ascii=False
    )


def test_study_plan_days_are_capped():
    from jiaowotong.schemas.study import MAX_REVIEW_DAYS

    plan = generate_fallback_study_plan([], 85, 10**7)
    assert plan["total_days"] == MAX_REVIEW_DAYS
    assert len(plan["daily_plans"]) == MAX_REVIEW_DAYS
    assert plan["daily_plans"][-1]["difficulty"] == "困难"
