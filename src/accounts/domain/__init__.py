"""
Accounts Domain Layer
=====================

Contains:
- Entities: User
- Policy: the (role, resource, action) -> scope access table

Pure Python, no infrastructure dependencies.
"""

from src.accounts.domain.entities import User
from src.accounts.domain.policy import (
    Action,
    Resource,
    Scope,
    POLICY,
    authorize,
    is_allowed,
    scope_for,
    scope_permits,
)

__all__ = [
    "User",
    "Action",
    "Resource",
    "Scope",
    "POLICY",
    "authorize",
    "is_allowed",
    "scope_for",
    "scope_permits",
]
