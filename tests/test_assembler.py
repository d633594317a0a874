"""Plan assembly."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from task_planner.generate.assembler import assemble
from task_planner.utils.dto import Task


def test_plan_owns_tasks_in_order_with_utc_timestamp() -> None:
    tasks = [Task(description="Preheat oven"), Task(description="Mix batter")]
    before = datetime.now(timezone.utc) - timedelta(milliseconds=1)

    plan = assemble("Bake a cake", iter(tasks))

    assert plan.goal == "Bake a cake"
    assert plan.tasks == tasks
    assert plan.id is None
    assert plan.created_at.tzinfo is not None
    assert before <= plan.created_at <= datetime.now(timezone.utc)


def test_timestamp_has_millisecond_precision() -> None:
    assert assemble("Bake a cake", []).created_at.microsecond % 1000 == 0


def test_empty_task_list_is_a_valid_plan() -> None:
    plan = assemble("Do nothing", [])
    assert plan.tasks == []
