"""Public profile page."""

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request

from api.dependencies.auth import OptionalUser
from api.v1.dependencies import get_analytics_service, get_profile_service
from api.v1.schemas.public import PublicProfileDetailResponse, PublicProfileResponse
from core.rate_limit import PUBLIC_PAGE_LIMIT, limiter
from domain.entities.analytics import EventTypes
from domain.services.analytics_service import AnalyticsService
from domain.services.profile_service import ProfileService

router = APIRouter(tags=["public"])


@router.get(
    "/u/{username}",
    response_model=PublicProfileDetailResponse,
    summary="View a public profile",
    responses={404: {"description": "Profile not found or not published"}},
)
@limiter.limit(PUBLIC_PAGE_LIMIT)  # type: ignore[untyped-decorator]
async def get_public_profile(
    request: Request,
    username: str,
    user: OptionalUser,
    background_tasks: BackgroundTasks,
    preview: bool = Query(False, description="Owner preview; does not count as a view"),
    service: ProfileService = Depends(get_profile_service),
    analytics: AnalyticsService = Depends(get_analytics_service),
) -> PublicProfileDetailResponse:
    """Resolve and render a profile.

    Unpublished profiles are only shown to their owner. Views are recorded
    after the response is sent and never fail the request.
    """
    view = await service.get_public(
        username,
        viewer_id=user.id if user else None,
        preview=preview,
    )
    if view.should_record_view:
        background_tasks.add_task(
            analytics.record_safely,
            view.bundle.profile.id,
            EventTypes.VIEW,
            request.headers.get("referer"),
            request.headers.get("user-agent"),
        )
    return PublicProfileDetailResponse(data=PublicProfileResponse.from_view(view))
