import logging
from typing import Optional

from fastapi import HTTPException
from pymongo.errors import PyMongoError

from task_planner.api.plan.plan_dto import ProviderErrorDetail
from task_planner.generate.assembler import assemble
from task_planner.generate.parser import parse_tasks
from task_planner.generate.prompt import build_prompt
from task_planner.run_utils.db import PlanStore
from task_planner.run_utils.llm import GeminiClient, ProviderError, TransportError
from task_planner.run_utils.metrics import record_plan_created
from task_planner.utils.dto import Plan

logger = logging.getLogger(__name__)


class PlanService:
    def __init__(
        self,
        llm: Optional[GeminiClient] = None,
        store: Optional[PlanStore] = None,
    ):
        self.llm = llm or GeminiClient()
        self.store = store or PlanStore()

    def create_plan_from_goal(self, goal: str) -> Plan:
        """
        Ask the model to break ``goal`` into tasks and persist the plan.

        A reply that cannot be parsed still yields a stored plan with no
        tasks; only failures reaching the provider fail the request.
        """
        try:
            raw = self.llm.generate(build_prompt(goal))
        except ProviderError as e:
            raise HTTPException(
                status_code=502,
                detail=ProviderErrorDetail(
                    message="Task provider rejected the request",
                    status=e.status,
                    body=e.body,
                ).model_dump(),
            ) from e
        except TransportError as e:
            raise HTTPException(
                status_code=503, detail=f"Task provider unavailable: {str(e)}"
            ) from e

        plan = assemble(goal, parse_tasks(raw))
        try:
            saved = self.store.insert_plan(plan)
        except PyMongoError as e:
            raise HTTPException(
                status_code=500, detail=f"Failed to save plan: {str(e)}"
            ) from e

        record_plan_created()
        logger.info("Created plan %s with %d tasks", saved.id, len(saved.tasks))
        return saved

    def get_plan(self, plan_id: str) -> Plan:
        try:
            plan = self.store.get_plan(plan_id)
        except PyMongoError as e:
            raise HTTPException(
                status_code=500, detail=f"Failed to retrieve plan: {str(e)}"
            ) from e
        if plan is None:
            raise HTTPException(status_code=404, detail="Plan not found")
        return plan

    def delete_plan(self, plan_id: str) -> None:
        try:
            deleted = self.store.delete_plan(plan_id)
        except PyMongoError as e:
            raise HTTPException(
                status_code=500, detail=f"Failed to delete plan: {str(e)}"
            ) from e
        if not deleted:
            raise HTTPException(status_code=404, detail="Plan not found")
