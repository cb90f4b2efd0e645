"""
Core Exceptions
================

Custom exceptions for the application following clean architecture principles.

These exceptions define domain-specific errors that can be caught and handled
appropriately at the application boundaries.
"""

from typing import Optional, List


class ApplicationException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DomainException(ApplicationException):
    """Base exception for domain logic violations."""


class RepositoryException(ApplicationException):
    """Base exception for repository/data access errors."""


class ValidationException(ApplicationException):
    """Exception for validation errors."""

    def __init__(
        self,
        message: str,
        errors: Optional[List[dict]] = None,
        details: Optional[dict] = None
    ):
        self.errors = errors or []
        super().__init__(message, details)


class ResourceNotFoundException(ApplicationException):
    """Exception when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"{resource_type}"
        if resource_id:
            message += f" with id '{resource_id}'"
        message += " not found"
        super().__init__(message, details)


class ConflictException(ApplicationException):
    """Exception when a write collides with existing state (e.g. duplicate email)."""


class AuthenticationException(ApplicationException):
    """Exception when the caller cannot be identified."""

    def __init__(self, message: str = "Not authenticated", details: Optional[dict] = None):
        super().__init__(message, details)


class AuthorizationException(ApplicationException):
    """Exception when the caller is identified but not allowed to act."""

    def __init__(
        self,
        message: str = "Not authorized to perform this action",
        details: Optional[dict] = None
    ):
        super().__init__(message, details)


class ConfigurationException(ApplicationException):
    """Exception for configuration errors."""
