import dataclasses

import pytest

from memory import MemoryStore
from planner import GoalKind, Plan, PlanError, Planner, Task
from tools.arithmetic import is_safe_expression


@pytest.fixture
def planner():
    return Planner()


@pytest.mark.parametrize(
    "label, kind",
    [
        ("cleanup", GoalKind.CLEANUP),
        ("CLEANUP please", GoalKind.CLEANUP),
        ("정리해줘", GoalKind.CLEANUP),
        ("문서 생성", GoalKind.DOCUMENT_GENERATION),
        ("document generation", GoalKind.DOCUMENT_GENERATION),
        ("프로젝트 분석해줘", GoalKind.PROJECT_ANALYSIS),
        ("Project Analysis", GoalKind.PROJECT_ANALYSIS),
    ],
)
def test_goal_matching(planner, label, kind):
    assert planner.match_goal(label) is kind
    assert planner.plan(label).kind is kind


def test_unmatched_goal_gets_default_plan(planner):
    plan = planner.plan("make me a sandwich")
    assert plan.kind is GoalKind.PROJECT_ANALYSIS
    assert [task.id for task in plan] == ["analyze-1", "analyze-2", "analyze-3", "analyze-4"]


def test_cleanup_plan_is_a_chain(planner):
    plan = planner.plan("cleanup")
    assert [task.id for task in plan.ordered()] == ["clean-1", "clean-2", "clean-3"]
    assert plan.task("clean-1").dependencies == frozenset()
    assert plan.task("clean-2").dependencies == {"clean-1"}
    assert plan.task("clean-3").dependencies == {"clean-2"}
    assert [task.priority for task in plan.ordered()] == [1, 2, 3]


def test_document_plan(planner):
    plan = planner.plan("문서 생성")
    assert [task.tool for task in plan.ordered()] == ["list_directory", "write_file", "calculate"]
    assert is_safe_expression(plan.task("doc-3").args["expression"])
    assert "# Learning Summary" in plan.task("doc-2").args["content"]


def test_analysis_plan_reads_configured_manifest():
    plan = Planner(manifest_file="package.json").plan("분석")
    assert plan.task("analyze-3").args == {"path": "package.json"}


def test_every_template_is_valid(planner):
    for kind in planner.goal_kinds():
        planner.plan(kind.value.replace("_", " ")).validate()


def test_plans_are_fresh_per_call(planner):
    first = planner.plan("cleanup")
    second = planner.plan("cleanup")
    assert first is not second
    assert [t.id for t in first] == [t.id for t in second]


def test_completion_report_uses_memory():
    memory = MemoryStore()
    memory.record("a", "", True)
    memory.record("b", "", False)
    content = Planner(memory=memory).plan("cleanup").task("clean-3").args["content"]
    assert "Tasks run: 2" in content
    assert "Success rate: 50.0%" in content


def test_tasks_are_immutable():
    task = Task("t1", "demo", "calculate", {"expression": "1 + 1"}, 1, ["t0"])
    assert task.dependencies == frozenset({"t0"})
    with pytest.raises(dataclasses.FrozenInstanceError):
        task.priority = 5


def test_validate_rejects_unknown_dependency():
    plan = Plan("bad", GoalKind.CLEANUP, (Task("a", "a", "calculate", dependencies=frozenset({"ghost"})),))
    with pytest.raises(PlanError, match="ghost"):
        plan.validate()


def test_validate_rejects_cycles():
    plan = Plan(
        "loop",
        GoalKind.CLEANUP,
        (
            Task("a", "a", "calculate", dependencies=frozenset({"b"})),
            Task("b", "b", "calculate", dependencies=frozenset({"a"})),
        ),
    )
    with pytest.raises(PlanError, match="cycle"):
        plan.validate()


def test_validate_rejects_duplicate_ids():
    plan = Plan("dup", GoalKind.CLEANUP, (Task("a", "a", "calculate"), Task("a", "b", "calculate")))
    with pytest.raises(PlanError, match="Duplicate"):
        plan.validate()
