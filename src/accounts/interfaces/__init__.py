"""
Accounts Interfaces Layer
=========================

Contains:
- Controllers: FastAPI auth routes
- Dependencies: current-user resolution and role guards shared by every
  protected route
"""

from src.accounts.interfaces.controllers import auth_router
from src.accounts.interfaces.dependencies import (
    get_current_user,
    get_user_repository,
    require_permission,
)

__all__ = [
    "auth_router",
    "get_current_user",
    "get_user_repository",
    "require_permission",
]
