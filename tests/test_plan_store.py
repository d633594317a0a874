"""Plan persistence against an in-memory collection."""

from __future__ import annotations

from datetime import datetime, timezone

from bson import ObjectId

from task_planner.generate.assembler import assemble
from task_planner.run_utils.db import PlanStore
from task_planner.utils.dto import Task


def test_insert_assigns_ids_and_stores_one_document(store: PlanStore, collection) -> None:
    plan = assemble("Bake a cake", [Task("Preheat oven", "10m"), Task("Mix batter", "15m", "Preheat oven")])

    saved = store.insert_plan(plan)

    assert ObjectId.is_valid(saved.id)
    assert all(t.id for t in saved.tasks)
    assert len({t.id for t in saved.tasks}) == 2
    assert plan.id is None
    (doc,) = collection.docs.values()
    assert doc["_id"] == ObjectId(saved.id)
    assert [t["description"] for t in doc["tasks"]] == ["Preheat oven", "Mix batter"]


def test_get_returns_equal_plan(store: PlanStore) -> None:
    saved = store.insert_plan(assemble("Learn Go", [Task("Install toolchain", "1h")]))

    loaded = store.get_plan(saved.id)

    assert loaded == saved


def test_naive_timestamps_are_read_as_utc(store: PlanStore, collection) -> None:
    oid = ObjectId()
    collection.insert_one({"_id": oid, "goal": "g", "created_at": datetime(2024, 5, 1, 12, 0), "tasks": []})

    loaded = store.get_plan(str(oid))

    assert loaded.created_at == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def test_unknown_or_malformed_ids(store: PlanStore) -> None:
    assert store.get_plan(str(ObjectId())) is None
    assert store.get_plan("42") is None
    assert store.delete_plan("not-an-id") is False


def test_delete_removes_plan_and_tasks(store: PlanStore, collection) -> None:
    saved = store.insert_plan(assemble("g", [Task("a"), Task("b")]))

    assert store.delete_plan(saved.id) is True
    assert collection.docs == {}
    assert store.get_plan(saved.id) is None
    assert store.delete_plan(saved.id) is False
