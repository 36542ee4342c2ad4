"""SQLAlchemy implementation of User repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.plan import parse_plan_id
from domain.entities.user import User
from infrastructure.database.models import UserModel


class SQLAlchemyUserRepository:
    """SQLAlchemy implementation of IUserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> User | None:
        """Get a user by ID."""
        stmt = select(UserModel).where(UserModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def upsert(self, user: User) -> User:
        """Create the user, or refresh identity fields of an existing one.

        ``plan_id`` is owned by billing and is never overwritten here.
        """
        stmt = select(UserModel).where(UserModel.id == user.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            model = UserModel(
                id=user.id,
                email=user.email,
                display_name=user.display_name,
                plan_id=user.plan_id.value,
                created_at=user.created_at,
            )
            self._session.add(model)
        else:
            if user.email:
                model.email = user.email
            if user.display_name:
                model.display_name = user.display_name

        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    def _to_entity(self, model: UserModel) -> User:
        """Convert ORM model to domain entity."""
        return User(
            id=model.id,
            email=model.email,
            display_name=model.display_name,
            plan_id=parse_plan_id(model.plan_id),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
