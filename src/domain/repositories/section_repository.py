"""Profile section repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.section import Section


class ISectionRepository(Protocol):
    """Repository interface for Section entities."""

    async def get_for_profile(self, profile_id: UUID) -> list[Section]:
        """Get all sections of a profile, ordered by ``order``."""
        ...

    async def delete_for_profile(self, profile_id: UUID) -> int:
        """Delete every section of a profile. Returns the number removed."""
        ...

    async def create_many(self, sections: list[Section]) -> list[Section]:
        """Insert sections in bulk."""
        ...
