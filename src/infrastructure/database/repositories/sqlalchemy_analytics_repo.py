"""SQLAlchemy implementation of Analytics repository."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.analytics import AnalyticsEvent
from infrastructure.database.models import AnalyticsEventModel


class SQLAlchemyAnalyticsRepository:
    """SQLAlchemy implementation of IAnalyticsRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, event: AnalyticsEvent) -> AnalyticsEvent:
        """Record an event."""
        model = AnalyticsEventModel(
            id=event.id,
            profile_id=event.profile_id,
            event_type=event.event_type,
            referrer=event.referrer,
            user_agent=event.user_agent,
            created_at=event.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def count_by_type(self, profile_id: UUID) -> dict[str, int]:
        """Count events for a profile grouped by event type."""
        stmt = (
            select(AnalyticsEventModel.event_type, func.count().label("event_count"))
            .where(AnalyticsEventModel.profile_id == profile_id)
            .group_by(AnalyticsEventModel.event_type)
        )
        result = await self._session.execute(stmt)
        return {row.event_type: row.event_count for row in result}

    async def get_recent(self, profile_id: UUID, limit: int = 20) -> list[AnalyticsEvent]:
        """Get the latest events for a profile, newest first."""
        stmt = (
            select(AnalyticsEventModel)
            .where(AnalyticsEventModel.profile_id == profile_id)
            .order_by(AnalyticsEventModel.created_at.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    def _to_entity(self, model: AnalyticsEventModel) -> AnalyticsEvent:
        """Convert ORM model to domain entity."""
        return AnalyticsEvent(
            id=model.id,
            profile_id=model.profile_id,
            event_type=model.event_type,
            referrer=model.referrer,
            user_agent=model.user_agent,
            created_at=model.created_at,
        )
