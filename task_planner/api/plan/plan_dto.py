from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel, Field

from task_planner.utils.dto import Plan


class GoalRequest(BaseModel):
    goal: str = Field(..., description="The goal to break down into tasks.")


class TaskResponse(BaseModel):
    id: str = Field(..., description="The unique identifier of the task.")
    description: str = Field(..., description="What has to be done.")
    duration: str = Field(..., description="Estimated duration, free text.")
    dependencies: str = Field(
        ..., description="Tasks that must be done first, free text or empty."
    )


class PlanResponse(BaseModel):
    id: str = Field(..., description="The unique identifier of the plan.")
    goal: str = Field(..., description="The goal the plan was generated for.")
    createdAt: datetime = Field(..., description="Creation time of the plan (UTC).")
    tasks: List[TaskResponse] = Field(..., description="Ordered tasks of the plan.")

    @classmethod
    def from_plan(cls, plan: Plan) -> "PlanResponse":
        return cls(
            id=plan.id,
            goal=plan.goal,
            createdAt=plan.created_at,
            tasks=[
                TaskResponse(
                    id=t.id,
                    description=t.description,
                    duration=t.duration,
                    dependencies=t.dependencies,
                )
                for t in plan.tasks
            ],
        )


class ProviderErrorDetail(BaseModel):
    message: str = Field(..., description="What went wrong reaching the provider.")
    status: int = Field(..., description="HTTP status returned by the provider.")
    body: str = Field(..., description="Response body returned by the provider.")


class MetricsResponse(BaseModel):
    degradations: Dict[str, int] = Field(
        ..., description="Unusable model replies, counted by reason."
    )
    provider: Dict[str, float] = Field(..., description="Provider call statistics.")
    plansCreated: int = Field(..., description="Plans created since start-up.")
