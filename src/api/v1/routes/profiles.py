"""Profile API routes."""

from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_analytics_service, get_profile_service
from api.v1.schemas.analytics import (
    AnalyticsEventCreate,
    AnalyticsSummaryDetailResponse,
    AnalyticsSummaryResponse,
)
from api.v1.schemas.common import MessageResponse
from api.v1.schemas.profile import (
    ProfileCreate,
    ProfileDetailResponse,
    ProfileResponse,
    ProfileUpdateRequest,
)
from core.rate_limit import EVENT_LIMIT, READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.analytics_service import AnalyticsService
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.post(
    "",
    response_model=ProfileDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create your profile",
    responses={
        201: {"description": "Profile created with default sections"},
        400: {"description": "Invalid username"},
        409: {"description": "Username taken or profile already exists"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_profile(
    request: Request,
    body: ProfileCreate,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Create the caller's profile. It starts unpublished."""
    bundle = await service.create(
        user_id=user.id,
        username=body.username,
        email=user.email,
        display_name=body.display_name or user.display_name,
    )
    return ProfileDetailResponse(data=ProfileResponse.from_bundle(bundle))


@router.get(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Get your profile",
    responses={404: {"description": "You have no profile yet"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """The caller's own profile with sections and experiences, published or not."""
    bundle = await service.get_for_owner(user.id)
    return ProfileDetailResponse(data=ProfileResponse.from_bundle(bundle))


@router.get(
    "/me/analytics",
    response_model=AnalyticsSummaryDetailResponse,
    summary="Get your profile analytics",
    responses={
        403: {"description": "Analytics dashboard is a Pro feature"},
        404: {"description": "You have no profile yet"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_analytics(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> AnalyticsSummaryDetailResponse:
    """View and click counts for the caller's profile."""
    summary = await service.get_analytics(user.id)
    return AnalyticsSummaryDetailResponse(data=AnalyticsSummaryResponse.from_entity(summary))


@router.patch(
    "/{profile_id}",
    response_model=ProfileDetailResponse,
    summary="Update a profile",
    responses={
        200: {"description": "Profile updated"},
        400: {"description": "Nothing to update, invalid document or too many experiences"},
        401: {"description": "Not authenticated"},
        403: {"description": "Not the owner, or a Pro feature on a Free plan"},
        404: {"description": "Profile not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_profile(
    request: Request,
    profile_id: UUID,
    body: ProfileUpdateRequest,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Partially update a profile.

    Supplied ``sections`` or ``experiences`` replace the stored lists in the
    same transaction as the field changes.
    """
    bundle = await service.update(profile_id, user.id, body.to_update())
    return ProfileDetailResponse(data=ProfileResponse.from_bundle(bundle))


@router.post(
    "/{username}/events",
    response_model=MessageResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Record a profile event",
    responses={404: {"description": "Profile not found or not published"}},
)
@limiter.limit(EVENT_LIMIT)  # type: ignore[untyped-decorator]
async def record_profile_event(
    request: Request,
    username: str,
    body: AnalyticsEventCreate,
    background_tasks: BackgroundTasks,
    service: AnalyticsService = Depends(get_analytics_service),
) -> MessageResponse:
    """Record a click on a published profile. Recording is best effort."""
    profile_id = await service.resolve_trackable_profile(username)
    background_tasks.add_task(
        service.record_safely,
        profile_id,
        body.event_type,
        body.referrer or request.headers.get("referer"),
        request.headers.get("user-agent"),
    )
    return MessageResponse(message="Event accepted")
