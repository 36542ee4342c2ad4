"""SQLAlchemy implementation of Experience repository."""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.experience import ProfileExperience
from infrastructure.database.models import ProfileExperienceModel


class SQLAlchemyExperienceRepository:
    """SQLAlchemy implementation of IExperienceRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_for_profile(self, profile_id: UUID) -> list[ProfileExperience]:
        """Get all experiences of a profile, ordered by ``order``."""
        stmt = (
            select(ProfileExperienceModel)
            .where(ProfileExperienceModel.profile_id == profile_id)
            .order_by(ProfileExperienceModel.order)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def delete_for_profile(self, profile_id: UUID) -> int:
        """Delete every experience of a profile."""
        stmt = delete(ProfileExperienceModel).where(
            ProfileExperienceModel.profile_id == profile_id
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def create_many(
        self, experiences: list[ProfileExperience]
    ) -> list[ProfileExperience]:
        """Insert experiences in bulk."""
        if not experiences:
            return []
        models = [self._to_model(experience) for experience in experiences]
        self._session.add_all(models)
        await self._session.flush()
        return [self._to_entity(model) for model in models]

    def _to_entity(self, model: ProfileExperienceModel) -> ProfileExperience:
        """Convert ORM model to domain entity."""
        return ProfileExperience(
            id=model.id,
            profile_id=model.profile_id,
            company=model.company,
            role=model.role,
            start_date=model.start_date,
            end_date=model.end_date,
            description=model.description or "",
            tech_stack=list(model.tech_stack or []),
            location=model.location,
            order=model.order,
            created_at=model.created_at,
        )

    def _to_model(self, entity: ProfileExperience) -> ProfileExperienceModel:
        """Convert domain entity to ORM model."""
        return ProfileExperienceModel(
            id=entity.id,
            profile_id=entity.profile_id,
            company=entity.company,
            role=entity.role,
            start_date=entity.start_date,
            end_date=entity.end_date,
            description=entity.description,
            tech_stack=list(entity.tech_stack),
            location=entity.location,
            order=entity.order,
            created_at=entity.created_at,
        )
