"""
Accounts Infrastructure Layer
=============================

Infrastructure implementations for accounts:
- Models: SQLAlchemy ORM models
- Security: password hashing and JWT helpers
- Repositories: data access (import from
  src.accounts.infrastructure.repositories; it depends on the
  application layer, which itself uses the security helpers)
"""

from src.accounts.infrastructure.models import UserModel

__all__ = ["UserModel"]
