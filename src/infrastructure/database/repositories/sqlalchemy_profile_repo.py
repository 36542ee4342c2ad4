"""SQLAlchemy implementation of Profile repository."""

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import ProfileAlreadyExistsError, UsernameTakenError
from domain.entities.profile import UPDATABLE_FIELDS, Profile
from infrastructure.database.models import ProfileModel


def _violates_owner_constraint(error: IntegrityError) -> bool:
    # PostgreSQL names the constraint, SQLite names the column
    message = str(error.orig)
    return "uq_profiles_user_id" in message or "profiles.user_id" in message


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by ID."""
        return await self._get_one(ProfileModel.id == id)

    async def get_by_username(self, username: str) -> Profile | None:
        """Get a profile by username (stored lowercase)."""
        return await self._get_one(ProfileModel.username == username.lower())

    async def get_by_user_id(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        return await self._get_one(ProfileModel.user_id == user_id)

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile.

        A unique violation from a concurrent insert surfaces as
        ProfileAlreadyExistsError when it hits the owner and as
        UsernameTakenError otherwise.
        """
        model = self._to_model(profile)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            if _violates_owner_constraint(e):
                raise ProfileAlreadyExistsError(str(profile.user_id)) from e
            raise UsernameTakenError(profile.username) from e
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Update an existing profile."""
        stmt = select(ProfileModel).where(ProfileModel.id == profile.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Profile {profile.id} not found")

        for name in UPDATABLE_FIELDS:
            setattr(model, name, getattr(profile, name))
        model.seo_keywords = list(profile.seo_keywords or [])
        model.updated_at = profile.updated_at

        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def increment_views(self, id: UUID) -> None:
        """Add one to the view counter without a read-modify-write round trip."""
        stmt = (
            update(ProfileModel)
            .where(ProfileModel.id == id)
            .values(views=ProfileModel.views + 1)
        )
        await self._session.execute(stmt)
        await self._session.flush()

    async def _get_one(self, condition) -> Profile | None:  # type: ignore[no-untyped-def]
        stmt = select(ProfileModel).where(condition)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            username=model.username,
            published=model.published,
            content=model.content,
            display_name=model.display_name,
            headline=model.headline,
            location=model.location,
            profile_photo_url=model.profile_photo_url,
            accent_color=model.accent_color,
            layout_style=model.layout_style,
            github_url=model.github_url,
            linkedin_url=model.linkedin_url,
            website_url=model.website_url,
            twitter_url=model.twitter_url,
            seo_title=model.seo_title,
            seo_description=model.seo_description,
            seo_keywords=list(model.seo_keywords or []),
            remove_branding=model.remove_branding,
            views=model.views or 0,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            user_id=entity.user_id,
            username=entity.username,
            published=entity.published,
            content=entity.content,
            display_name=entity.display_name,
            headline=entity.headline,
            location=entity.location,
            profile_photo_url=entity.profile_photo_url,
            accent_color=entity.accent_color,
            layout_style=entity.layout_style,
            github_url=entity.github_url,
            linkedin_url=entity.linkedin_url,
            website_url=entity.website_url,
            twitter_url=entity.twitter_url,
            seo_title=entity.seo_title,
            seo_description=entity.seo_description,
            seo_keywords=list(entity.seo_keywords),
            remove_branding=entity.remove_branding,
            views=entity.views,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
