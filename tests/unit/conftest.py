"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.plan import FeatureCatalog
from domain.services.feature_gate import FeatureGate
from domain.services.section_renderer import SectionRenderer
from domain.services.seo import SiteInfo


class FakeUnitOfWork:
    """Fake Unit of Work with all 5 repository mocks for unit testing."""

    def __init__(self) -> None:
        self.users = AsyncMock()
        self.profiles = AsyncMock()
        self.sections = AsyncMock()
        self.experiences = AsyncMock()
        self.analytics = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, exc_type: Any, *args: Any) -> None:
        if exc_type:
            await self.rollback()


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def viewer_id() -> UUID:
    """A random viewer ID (distinct from user_id)."""
    return uuid4()


@pytest.fixture
def gate() -> FeatureGate:
    return FeatureGate(FeatureCatalog.from_plans())


@pytest.fixture
def site() -> SiteInfo:
    return SiteInfo(
        name="Folio",
        url="https://folio.example",
        description="Professional profiles",
    )


@pytest.fixture
def renderer(gate: FeatureGate, site: SiteInfo) -> SectionRenderer:
    return SectionRenderer(gate, site)
