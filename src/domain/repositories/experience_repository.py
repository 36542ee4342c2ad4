"""Profile experience repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.experience import ProfileExperience


class IExperienceRepository(Protocol):
    """Repository interface for ProfileExperience entities."""

    async def get_for_profile(self, profile_id: UUID) -> list[ProfileExperience]:
        """Get all experiences of a profile, ordered by ``order``."""
        ...

    async def delete_for_profile(self, profile_id: UUID) -> int:
        """Delete every experience of a profile. Returns the number removed."""
        ...

    async def create_many(self, experiences: list[ProfileExperience]) -> list[ProfileExperience]:
        """Insert experiences in bulk."""
        ...
