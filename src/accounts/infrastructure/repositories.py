"""
Accounts Infrastructure Repositories
====================================

SQLAlchemy implementation of the user repository interface.
"""

from typing import Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.accounts.application.services import IUserRepository
from src.accounts.domain import User
from src.accounts.infrastructure.models import UserModel
from src.config import STAFF_ROLES
from src.core import RepositoryException
from src.core.timeutils import ensure_utc


def _parse_uuid(value: str) -> Optional[UUID]:
    try:
        return UUID(str(value))
    except ValueError:
        return None


def _to_entity(model: UserModel) -> User:
    return User(
        id=str(model.id),
        name=model.name,
        email=model.email,
        password_hash=model.password_hash,
        role=model.role,
        is_active=model.is_active,
        department=model.department,
        created_at=ensure_utc(model.created_at),
        updated_at=ensure_utc(model.updated_at),
    )


class SQLAlchemyUserRepository(IUserRepository):
    """
    SQLAlchemy implementation of user repository.

    Handles persistence of User entities using async SQLAlchemy.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _get_model(self, user_id: str) -> Optional[UserModel]:
        user_uuid = _parse_uuid(user_id)
        if user_uuid is None:
            return None
        return await self._session.get(UserModel, user_uuid)

    async def get_by_id(self, user_id: str) -> Optional[User]:
        model = await self._get_model(user_id)
        return _to_entity(model) if model else None

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.email == email.lower())
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def get_many(self, user_ids: Iterable[str]) -> Dict[str, User]:
        uuids = {parsed for parsed in (_parse_uuid(uid) for uid in user_ids if uid) if parsed}
        if not uuids:
            return {}

        result = await self._session.execute(select(UserModel).where(UserModel.id.in_(uuids)))
        return {str(model.id): _to_entity(model) for model in result.scalars().all()}

    async def create(self, user: User) -> User:
        model = UserModel(
            id=UUID(user.id),
            name=user.name,
            email=user.email,
            password_hash=user.password_hash,
            role=user.role.value,
            is_active=user.is_active,
            department=user.department,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        return _to_entity(model)

    async def update(self, user: User) -> User:
        model = await self._get_model(user.id)
        if model is None:
            raise RepositoryException(f"User {user.id} not found")

        model.name = user.name
        model.email = user.email
        model.password_hash = user.password_hash
        model.role = user.role.value
        model.is_active = user.is_active
        model.department = user.department
        model.updated_at = user.updated_at

        await self._session.flush()
        return _to_entity(model)

    async def delete(self, user_id: str) -> None:
        user_uuid = _parse_uuid(user_id)
        if user_uuid is None:
            raise RepositoryException(f"Invalid user ID: {user_id}")
        await self._session.execute(delete(UserModel).where(UserModel.id == user_uuid))
        await self._session.flush()

    def _conditions(self, filters: Optional[dict]) -> list:
        filters = filters or {}
        conditions = []

        if filters.get("role"):
            conditions.append(UserModel.role == filters["role"])

        if filters.get("search"):
            pattern = f"%{filters['search']}%"
            conditions.append(or_(UserModel.name.ilike(pattern), UserModel.email.ilike(pattern)))

        return conditions

    async def list(self, filters: dict, limit: int = 10, offset: int = 0) -> List[User]:
        stmt = select(UserModel).where(*self._conditions(filters))
        stmt = stmt.order_by(UserModel.created_at.desc()).limit(limit).offset(offset)

        result = await self._session.execute(stmt)
        return [_to_entity(model) for model in result.scalars().all()]

    async def count(self, filters: Optional[dict] = None) -> int:
        stmt = select(func.count()).select_from(UserModel).where(*self._conditions(filters))
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def count_by_role(self) -> Dict[str, int]:
        stmt = select(UserModel.role, func.count()).group_by(UserModel.role)
        result = await self._session.execute(stmt)
        return {role: count for role, count in result.all()}

    async def list_assignable(self) -> List[User]:
        stmt = (
            select(UserModel)
            .where(UserModel.role.in_(STAFF_ROLES), UserModel.is_active.is_(True))
            .order_by(UserModel.name.asc())
        )
        result = await self._session.execute(stmt)
        return [_to_entity(model) for model in result.scalars().all()]
