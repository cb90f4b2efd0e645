"""
Accounts Domain Entities
========================

Pure Python domain entities for user accounts.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from src.config import Role
from src.core import ValidationException
from src.core.timeutils import utcnow


@dataclass
class User:
    """
    User entity.

    The password hash travels with the entity so the application layer can
    verify credentials; it is never part of any API response.
    """

    id: str
    name: str
    email: str
    password_hash: str
    role: Role
    is_active: bool
    created_at: datetime
    updated_at: datetime
    department: Optional[str] = None

    def __post_init__(self):
        """Coerce and validate the role."""
        try:
            self.role = Role(self.role)
        except ValueError:
            raise ValidationException(
                "Role must be either user, staff, or admin",
                errors=[{"field": "role", "message": f"Invalid role '{self.role}'"}],
            )

    @property
    def is_staff_member(self) -> bool:
        """Staff and admins can both be assigned complaints."""
        return self.role in (Role.STAFF, Role.ADMIN)

    def with_role(self, role: str, at: Optional[datetime] = None) -> "User":
        return replace(self, role=Role(role), updated_at=at or utcnow())

    def with_active(self, is_active: bool, at: Optional[datetime] = None) -> "User":
        return replace(self, is_active=is_active, updated_at=at or utcnow())
