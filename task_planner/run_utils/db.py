from dataclasses import replace
from datetime import timezone
from typing import Any, Dict, Optional

from bson import ObjectId
from pymongo import MongoClient
from pymongo.collection import Collection

from task_planner import config
from task_planner.utils.dto import Plan, Task

client = MongoClient(config.MONGO_URL)
db = client[config.MONGO_DB]
plans = db["plans"]


def _to_doc(plan: Plan) -> Dict[str, Any]:
    return {
        "_id": ObjectId(plan.id),
        "goal": plan.goal,
        "created_at": plan.created_at,
        "tasks": [
            {
                "id": t.id,
                "description": t.description,
                "duration": t.duration,
                "dependencies": t.dependencies,
            }
            for t in plan.tasks
        ],
    }


def _from_doc(doc: Dict[str, Any]) -> Plan:
    created_at = doc["created_at"]
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return Plan(
        id=str(doc["_id"]),
        goal=doc.get("goal", ""),
        created_at=created_at,
        tasks=[
            Task(
                id=t.get("id"),
                description=t.get("description", ""),
                duration=t.get("duration", ""),
                dependencies=t.get("dependencies", ""),
            )
            for t in doc.get("tasks", [])
        ],
    )


class PlanStore:
    """
    Plans are stored as one document each with their tasks embedded, so a
    plan and its tasks are written and deleted together.
    """

    def __init__(self, collection: Optional[Collection] = None):
        self.collection = plans if collection is None else collection

    def insert_plan(self, plan: Plan) -> Plan:
        saved = replace(
            plan,
            id=str(ObjectId()),
            tasks=[replace(t, id=str(ObjectId())) for t in plan.tasks],
        )
        self.collection.insert_one(_to_doc(saved))
        return saved

    def get_plan(self, plan_id: str) -> Optional[Plan]:
        if not ObjectId.is_valid(plan_id):
            return None
        doc = self.collection.find_one({"_id": ObjectId(plan_id)})
        return _from_doc(doc) if doc else None

    def delete_plan(self, plan_id: str) -> bool:
        if not ObjectId.is_valid(plan_id):
            return False
        result = self.collection.delete_one({"_id": ObjectId(plan_id)})
        return result.deleted_count > 0
