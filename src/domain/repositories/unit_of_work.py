"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.analytics_repository import IAnalyticsRepository
from domain.repositories.experience_repository import IExperienceRepository
from domain.repositories.profile_repository import IProfileRepository
from domain.repositories.section_repository import ISectionRepository
from domain.repositories.user_repository import IUserRepository


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions."""

    users: IUserRepository
    profiles: IProfileRepository
    sections: ISectionRepository
    experiences: IExperienceRepository
    analytics: IAnalyticsRepository

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...
