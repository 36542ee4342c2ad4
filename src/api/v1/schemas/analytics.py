"""Pydantic schemas for Analytics API."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.analytics import AnalyticsEvent, AnalyticsSummary


class AnalyticsEventCreate(BaseModel):
    """Public event reported by a profile page.

    Views are recorded by the page read itself and cannot be posted.
    """

    event_type: Literal["click"] = "click"
    referrer: str | None = Field(None, max_length=500)


class AnalyticsEventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    event_type: str
    referrer: str | None = None
    user_agent: str | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, event: AnalyticsEvent) -> "AnalyticsEventResponse":
        return cls(
            id=event.id,
            event_type=event.event_type,
            referrer=event.referrer,
            user_agent=event.user_agent,
            created_at=event.created_at,
        )


class AnalyticsSummaryResponse(BaseModel):
    """Owner-facing analytics for one profile."""

    profile_id: UUID
    views: int
    counts: dict[str, int]
    recent: list[AnalyticsEventResponse]

    @classmethod
    def from_entity(cls, summary: AnalyticsSummary) -> "AnalyticsSummaryResponse":
        return cls(
            profile_id=summary.profile_id,
            views=summary.views,
            counts=dict(summary.counts),
            recent=[AnalyticsEventResponse.from_entity(e) for e in summary.recent],
        )


class AnalyticsSummaryDetailResponse(BaseModel):
    data: AnalyticsSummaryResponse
