"""SQLAlchemy implementation of Section repository."""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.section import Section
from infrastructure.database.models import ProfileSectionModel


class SQLAlchemySectionRepository:
    """SQLAlchemy implementation of ISectionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_for_profile(self, profile_id: UUID) -> list[Section]:
        """Get all sections of a profile, ordered by ``order``."""
        stmt = (
            select(ProfileSectionModel)
            .where(ProfileSectionModel.profile_id == profile_id)
            .order_by(ProfileSectionModel.order, ProfileSectionModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def delete_for_profile(self, profile_id: UUID) -> int:
        """Delete every section of a profile."""
        stmt = delete(ProfileSectionModel).where(ProfileSectionModel.profile_id == profile_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def create_many(self, sections: list[Section]) -> list[Section]:
        """Insert sections in bulk."""
        if not sections:
            return []
        models = [self._to_model(section) for section in sections]
        self._session.add_all(models)
        await self._session.flush()
        return [self._to_entity(model) for model in models]

    def _to_entity(self, model: ProfileSectionModel) -> Section:
        """Convert ORM model to domain entity."""
        return Section(
            id=model.id,
            profile_id=model.profile_id,
            type=model.type,
            content=dict(model.content or {}),
            order=model.order,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Section) -> ProfileSectionModel:
        """Convert domain entity to ORM model."""
        return ProfileSectionModel(
            id=entity.id,
            profile_id=entity.profile_id,
            type=entity.type,
            content=entity.content,
            order=entity.order,
            created_at=entity.created_at,
        )
