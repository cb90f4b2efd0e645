"""
Accounts Application Services
=============================

Application services orchestrate account use cases and coordinate between
domain entities, credential helpers and repositories.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Tuple
from uuid import uuid4

from src.accounts.domain import User
from src.accounts.infrastructure.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from src.config import Role
from src.core import (
    AuthenticationException,
    AuthorizationException,
    ConflictException,
    ValidationException,
)
from src.core.timeutils import utcnow
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


# ========== Repository Interfaces (Dependency Inversion) ==========

class IUserRepository(ABC):
    """Interface for user data access."""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID; None for unknown or malformed IDs."""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by (lower-cased) email."""

    @abstractmethod
    async def get_many(self, user_ids: Iterable[str]) -> Dict[str, User]:
        """Get several users keyed by ID; unknown IDs are absent."""

    @abstractmethod
    async def create(self, user: User) -> User:
        """Persist a new user."""

    @abstractmethod
    async def update(self, user: User) -> User:
        """Persist changes to an existing user."""

    @abstractmethod
    async def delete(self, user_id: str) -> None:
        """Delete a user."""

    @abstractmethod
    async def list(self, filters: dict, limit: int = 10, offset: int = 0) -> List[User]:
        """List users newest first. Filters: role, search."""

    @abstractmethod
    async def count(self, filters: Optional[dict] = None) -> int:
        """Count users matching the same filters as list()."""

    @abstractmethod
    async def count_by_role(self) -> Dict[str, int]:
        """Number of users per role."""

    @abstractmethod
    async def list_assignable(self) -> List[User]:
        """Active users with role staff or admin."""


# ========== Application Services ==========

class AuthService:
    """
    Registration, login, token resolution and self-service profile changes.
    """

    def __init__(self, user_repository: IUserRepository):
        self._user_repo = user_repository

    async def register(
        self,
        name: str,
        email: str,
        password: str,
        department: Optional[str] = None
    ) -> Tuple[User, str]:
        """
        Create a user-role account and sign it in.

        Raises:
            ConflictException: If the email is already registered
        """
        email = email.strip().lower()
        if await self._user_repo.get_by_email(email):
            raise ConflictException("User already exists with this email")

        now = utcnow()
        user = await self._user_repo.create(User(
            id=str(uuid4()),
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=Role.USER,
            is_active=True,
            department=department,
            created_at=now,
            updated_at=now,
        ))

        logger.info("User registered", extra={"user_id": user.id, "role": user.role.value})
        return user, create_access_token(user.id)

    async def login(self, email: str, password: str) -> Tuple[User, str]:
        """
        Verify credentials and issue a token.

        Raises:
            AuthenticationException: Unknown email or wrong password
            AuthorizationException: Account has been deactivated
        """
        user = await self._user_repo.get_by_email(email.strip().lower())
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Login rejected", extra={"reason": "bad_credentials"})
            raise AuthenticationException("Invalid email or password")

        if not user.is_active:
            logger.info("Login rejected", extra={"user_id": user.id, "reason": "inactive"})
            raise AuthorizationException(
                "Your account has been deactivated. Please contact an administrator."
            )

        logger.info("User logged in", extra={"user_id": user.id})
        return user, create_access_token(user.id)

    async def resolve_token(self, token: str) -> User:
        """
        Map a bearer token to an active user.

        Raises:
            AuthenticationException: Invalid token, unknown or deactivated user
        """
        user_id = decode_access_token(token)
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            raise AuthenticationException("Not authorized, user not found")
        if not user.is_active:
            raise AuthenticationException("Not authorized, account is deactivated")
        return user

    async def update_profile(
        self,
        user: User,
        name: Optional[str] = None,
        department: Optional[str] = None
    ) -> User:
        """Update the caller's display name and/or department."""
        if name is not None:
            user.name = name
        if department is not None:
            user.department = department
        user.updated_at = utcnow()
        return await self._user_repo.update(user)

    async def change_password(self, user: User, current_password: str, new_password: str) -> None:
        """
        Replace the caller's password.

        Raises:
            ValidationException: Current password does not match
        """
        if not verify_password(current_password, user.password_hash):
            raise ValidationException(
                "Current password is incorrect",
                errors=[{"field": "current_password", "message": "Current password is incorrect"}],
            )

        user.password_hash = hash_password(new_password)
        user.updated_at = utcnow()
        await self._user_repo.update(user)
        logger.info("Password changed", extra={"user_id": user.id})
