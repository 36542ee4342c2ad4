"""Analytics event domain entity and event type constants."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


class EventTypes:
    """Known analytics event types. The column is an open string."""

    VIEW = "view"
    CLICK = "click"


@dataclass
class AnalyticsEvent:
    """Domain entity for an append-only profile analytics event."""

    profile_id: UUID
    event_type: str
    id: UUID = field(default_factory=uuid4)
    referrer: str | None = None
    user_agent: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True, slots=True)
class AnalyticsSummary:
    """Read-only value object: event counts for one profile."""

    profile_id: UUID
    views: int
    counts: dict[str, int]
    recent: list[AnalyticsEvent]
