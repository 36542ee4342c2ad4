"""Plan API routes."""

from fastapi import APIRouter, Request

from api.v1.schemas.plan import PlanListResponse, PlanResponse
from core.rate_limit import READ_LIMIT, limiter
from domain.entities.plan import PLANS

router = APIRouter(prefix="/plans", tags=["plans"])


@router.get(
    "",
    response_model=PlanListResponse,
    summary="List plans",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_plans(request: Request) -> PlanListResponse:
    """The subscription plans and their features. No authentication needed."""
    return PlanListResponse(data=[PlanResponse.from_entity(plan) for plan in PLANS.values()])
