"""Analytics service: best-effort event recording and owner summaries."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import ProfileNotFoundError
from domain.entities.analytics import AnalyticsEvent, AnalyticsSummary, EventTypes
from domain.entities.profile import normalize_username
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

RECENT_EVENTS_LIMIT = 20


class AnalyticsService:
    """Service layer for profile analytics."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def record_event(
        self,
        profile_id: UUID,
        event_type: str,
        referrer: str | None = None,
        user_agent: str | None = None,
    ) -> AnalyticsEvent:
        """Append an event. A ``view`` also bumps the profile's view counter."""
        async with self._uow_factory() as uow:
            event = await uow.analytics.create(
                AnalyticsEvent(
                    profile_id=profile_id,
                    event_type=event_type,
                    referrer=referrer,
                    user_agent=user_agent,
                )
            )
            if event_type == EventTypes.VIEW:
                await uow.profiles.increment_views(profile_id)
            await uow.commit()
            return event

    async def record_safely(
        self,
        profile_id: UUID,
        event_type: str,
        referrer: str | None = None,
        user_agent: str | None = None,
    ) -> None:
        """Fire-and-forget variant. Failures are logged and never raised."""
        try:
            await self.record_event(profile_id, event_type, referrer, user_agent)
        except Exception:
            logger.warning(
                "analytics_event_failed",
                profile_id=str(profile_id),
                event_type=event_type,
                exc_info=True,
            )

    async def resolve_trackable_profile(self, username: str) -> UUID:
        """Id of a published profile that may receive public events."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_username(normalize_username(username))
            if not profile or not profile.published:
                raise ProfileNotFoundError(username)
            return profile.id

    async def get_summary(self, profile_id: UUID, views: int) -> AnalyticsSummary:
        """Event counts per type and the latest events for one profile."""
        async with self._uow_factory() as uow:
            counts = await uow.analytics.count_by_type(profile_id)
            recent = await uow.analytics.get_recent(profile_id, limit=RECENT_EVENTS_LIMIT)
        return AnalyticsSummary(
            profile_id=profile_id,
            views=views,
            counts=dict(counts),
            recent=list(recent),
        )
