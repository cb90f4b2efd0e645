"""
Accounts Dependencies
=====================

FastAPI dependencies that authenticate the caller and enforce roles.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from src.accounts.application import AuthService
from src.accounts.domain import Action, Resource, Scope, User, scope_for
from src.accounts.infrastructure.repositories import SQLAlchemyUserRepository
from src.core import AuthenticationException, AuthorizationException
from src.infrastructure.database import get_session

bearer_scheme = HTTPBearer(auto_error=False)


async def get_user_repository(
    session: AsyncSession = Depends(get_session)
) -> SQLAlchemyUserRepository:
    return SQLAlchemyUserRepository(session)


async def get_auth_service(
    user_repository: SQLAlchemyUserRepository = Depends(get_user_repository)
) -> AuthService:
    return AuthService(user_repository)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service)
) -> User:
    """Resolve the bearer token to an active user or fail with 401."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationException("Not authorized, no token")
    return await auth_service.resolve_token(credentials.credentials)


def require_permission(resource: Resource, action: Action):
    """
    Dependency factory: the caller's role must have a non-DENY scope for the
    action. Record-level checks (own / assigned) happen once the record is loaded.
    """

    async def permission_checker(user: User = Depends(get_current_user)) -> User:
        if scope_for(user.role, resource, action) == Scope.DENY:
            raise AuthorizationException(
                f"User role '{user.role.value}' is not authorized to access this route"
            )
        return user

    return permission_checker
