"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID."""
        ...

    async def get_by_username(self, username: str) -> Profile | None:
        """Get a profile by its (lowercase) username."""
        ...

    async def get_by_user_id(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile. Raises UsernameTakenError on a unique violation."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Update an existing profile."""
        ...

    async def increment_views(self, id: UUID) -> None:
        """Atomically add one to the view counter."""
        ...
