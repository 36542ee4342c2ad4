"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.entities.plan import FeatureCatalog
from domain.services.analytics_service import AnalyticsService
from domain.services.feature_gate import FeatureGate
from domain.services.profile_service import ProfileService
from domain.services.section_renderer import SectionRenderer
from domain.services.seo import SiteInfo
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_feature_catalog() -> FeatureCatalog:
    """The feature catalog, built once from the plan table."""
    return FeatureCatalog.from_plans()


@lru_cache
def get_feature_gate() -> FeatureGate:
    """Get Feature gate instance."""
    return FeatureGate(get_feature_catalog())


@lru_cache
def get_site_info() -> SiteInfo:
    """Public site identity from settings."""
    return SiteInfo(
        name=settings.site_name,
        url=settings.site_url,
        description=settings.site_description,
        og_image=settings.site_og_image,
    )


@lru_cache
def get_section_renderer() -> SectionRenderer:
    """Get Section renderer instance."""
    return SectionRenderer(get_feature_gate(), get_site_info())


@lru_cache
def get_analytics_service() -> AnalyticsService:
    """Get Analytics service instance."""
    return AnalyticsService(get_uow_factory())


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(
        get_uow_factory(),
        gate=get_feature_gate(),
        renderer=get_section_renderer(),
        analytics_service=get_analytics_service(),
    )
