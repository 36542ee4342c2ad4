"""Analytics event repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.analytics import AnalyticsEvent


class IAnalyticsRepository(Protocol):
    """Repository interface for AnalyticsEvent entities (append-only)."""

    async def create(self, event: AnalyticsEvent) -> AnalyticsEvent:
        """Record an event."""
        ...

    async def count_by_type(self, profile_id: UUID) -> dict[str, int]:
        """Count events for a profile grouped by event type."""
        ...

    async def get_recent(self, profile_id: UUID, limit: int = 20) -> list[AnalyticsEvent]:
        """Get the latest events for a profile, newest first."""
        ...
