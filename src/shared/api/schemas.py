"""
Shared API Schemas
==================

Response envelope and pagination models shared by every module's routes.

Every successful response is wrapped as:
    {"success": true, "message": "...", "data": {...}}
"""

import math
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope."""
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None


class FieldError(BaseModel):
    """One failed field in a rejected request."""
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Error envelope produced by the exception handlers."""
    success: bool = False
    message: str
    errors: List[FieldError] = Field(default_factory=list)
    correlation_id: Optional[str] = None


class Pagination(BaseModel):
    """Pagination block returned with list endpoints."""
    total: int
    page: int
    pages: int
    limit: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "Pagination":
        return cls(total=total, page=page, pages=math.ceil(total / limit), limit=limit)


def page_offset(page: int, limit: int) -> int:
    """Row offset of the first item on a 1-based page."""
    return (page - 1) * limit
