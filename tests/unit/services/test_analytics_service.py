"""Unit tests for AnalyticsService."""

from uuid import UUID, uuid4

import pytest

from core.exceptions import ProfileNotFoundError
from domain.entities.analytics import AnalyticsEvent
from domain.entities.profile import Profile
from domain.services.analytics_service import RECENT_EVENTS_LIMIT, AnalyticsService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> AnalyticsService:
    return AnalyticsService(lambda: uow)


@pytest.fixture
def profile_id() -> UUID:
    return uuid4()


class TestRecordEvent:
    @pytest.mark.asyncio
    async def test_view_bumps_counter(
        self, service: AnalyticsService, uow: FakeUnitOfWork, profile_id: UUID
    ):
        uow.analytics.create.side_effect = lambda e: e

        event = await service.record_event(profile_id, "view", referrer="https://a.example")

        assert event.event_type == "view"
        assert event.referrer == "https://a.example"
        uow.profiles.increment_views.assert_called_once_with(profile_id)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_click_does_not_bump_counter(
        self, service: AnalyticsService, uow: FakeUnitOfWork, profile_id: UUID
    ):
        uow.analytics.create.side_effect = lambda e: e

        await service.record_event(profile_id, "click")

        uow.profiles.increment_views.assert_not_called()
        assert uow.committed


class TestRecordSafely:
    @pytest.mark.asyncio
    async def test_swallows_storage_failures(
        self, service: AnalyticsService, uow: FakeUnitOfWork, profile_id: UUID
    ):
        uow.analytics.create.side_effect = RuntimeError("database is down")

        await service.record_safely(profile_id, "view")

        assert not uow.committed
        assert uow.rolled_back

    @pytest.mark.asyncio
    async def test_records_when_healthy(
        self, service: AnalyticsService, uow: FakeUnitOfWork, profile_id: UUID
    ):
        uow.analytics.create.side_effect = lambda e: e

        await service.record_safely(profile_id, "click", user_agent="pytest")

        created = uow.analytics.create.call_args.args[0]
        assert isinstance(created, AnalyticsEvent)
        assert created.user_agent == "pytest"


class TestResolveTrackableProfile:
    @pytest.mark.asyncio
    async def test_published_profile(self, service: AnalyticsService, uow: FakeUnitOfWork):
        profile = Profile(user_id=uuid4(), username="ana", published=True)
        uow.profiles.get_by_username.return_value = profile

        assert await service.resolve_trackable_profile("Ana") == profile.id
        uow.profiles.get_by_username.assert_called_once_with("ana")

    @pytest.mark.asyncio
    async def test_unpublished_profile_is_not_found(
        self, service: AnalyticsService, uow: FakeUnitOfWork
    ):
        uow.profiles.get_by_username.return_value = Profile(user_id=uuid4(), username="ana")

        with pytest.raises(ProfileNotFoundError):
            await service.resolve_trackable_profile("ana")

    @pytest.mark.asyncio
    async def test_missing_profile(self, service: AnalyticsService, uow: FakeUnitOfWork):
        uow.profiles.get_by_username.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.resolve_trackable_profile("ghost")


class TestGetSummary:
    @pytest.mark.asyncio
    async def test_counts_and_recent(
        self, service: AnalyticsService, uow: FakeUnitOfWork, profile_id: UUID
    ):
        recent = [AnalyticsEvent(profile_id=profile_id, event_type="click")]
        uow.analytics.count_by_type.return_value = {"click": 1}
        uow.analytics.get_recent.return_value = recent

        summary = await service.get_summary(profile_id, views=3)

        assert summary.views == 3
        assert summary.counts == {"click": 1}
        assert summary.recent == recent
        uow.analytics.get_recent.assert_called_once_with(profile_id, limit=RECENT_EVENTS_LIMIT)
