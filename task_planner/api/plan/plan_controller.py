from functools import lru_cache

from fastapi import APIRouter, Depends, Response

from task_planner.api.plan.plan_dto import GoalRequest, MetricsResponse, PlanResponse
from task_planner.api.plan.plan_service import PlanService
from task_planner.run_utils.llm import GeminiClient
from task_planner.run_utils.metrics import snapshot

router = APIRouter(
    tags=["Plan"],
    prefix="/api",
)


@lru_cache
def get_llm_client() -> GeminiClient:
    # shared so the concurrency bound applies across requests
    return GeminiClient()


def get_plan_service(llm: GeminiClient = Depends(get_llm_client)) -> PlanService:
    return PlanService(llm=llm)


@router.post(
    "/plan",
    response_model=PlanResponse,
    summary="Generate a plan for a goal and store it",
)
def generate_plan(
    body: GoalRequest,
    plan_service: PlanService = Depends(get_plan_service),
) -> PlanResponse:
    return PlanResponse.from_plan(plan_service.create_plan_from_goal(body.goal))


@router.get(
    "/plan/{plan_id}",
    response_model=PlanResponse,
    summary="Get a stored plan",
)
def get_plan(
    plan_id: str,
    plan_service: PlanService = Depends(get_plan_service),
) -> PlanResponse:
    return PlanResponse.from_plan(plan_service.get_plan(plan_id))


@router.delete(
    "/plan/{plan_id}",
    status_code=204,
    response_class=Response,
    summary="Delete a plan together with its tasks",
)
def delete_plan(
    plan_id: str,
    plan_service: PlanService = Depends(get_plan_service),
) -> Response:
    plan_service.delete_plan(plan_id)
    return Response(status_code=204)


@router.get(
    "/metrics",
    response_model=MetricsResponse,
    summary="Counters for provider calls and unusable model replies",
)
async def get_metrics() -> MetricsResponse:
    return MetricsResponse(**snapshot())
