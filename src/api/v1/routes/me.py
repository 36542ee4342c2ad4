"""Account state API routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_feature_catalog, get_profile_service
from api.v1.schemas.state import AccessStateDetailResponse, AccessStateResponse
from core.rate_limit import READ_LIMIT, limiter
from domain.entities.plan import FeatureCatalog
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/me", tags=["account"])


@router.get(
    "/state",
    response_model=AccessStateDetailResponse,
    summary="Get your access state",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_state(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
    catalog: FeatureCatalog = Depends(get_feature_catalog),
) -> AccessStateDetailResponse:
    """The caller's user state and the permission for every catalog feature."""
    context, permissions = await service.describe_access(user.id)
    return AccessStateDetailResponse(
        data=AccessStateResponse.build(context, permissions, catalog)
    )
