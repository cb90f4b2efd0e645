"""
Configuration Module
====================

Application settings and configuration management using Pydantic.
"""

from enum import Enum
from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety.
    """

    # ========== Application ==========
    app_name: str = Field(default="complaint-desk", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root log level")

    # ========== Server ==========
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port", ge=1, le=65535)

    # ========== Database ==========
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/complaints",
        description="Database connection URL (async driver)"
    )
    db_pool_size: int = Field(default=5, description="Database connection pool size", ge=1)
    db_max_overflow: int = Field(default=10, description="Max overflow connections", ge=0)

    # ========== Authentication ==========
    jwt_secret: str = Field(
        default=DEFAULT_JWT_SECRET,
        description="Secret used to sign access tokens"
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    jwt_expire_days: int = Field(
        default=30,
        description="Access token lifetime in days",
        ge=1
    )
    bcrypt_rounds: int = Field(
        default=10,
        description="bcrypt cost factor for password hashing",
        ge=4,
        le=31
    )

    # ========== CORS ==========
    cors_origins: List[str] = Field(
        default=["http://localhost:5173"],
        description="Allowed CORS origins"
    )

    # ========== Rate Limiting ==========
    rate_limit_enabled: bool = Field(default=True, description="Enable per-client rate limiting")
    rate_limit_per_minute: int = Field(
        default=100,
        description="Max requests per minute per IP",
        ge=1
    )

    # ========== Pagination ==========
    default_page_size: int = Field(default=10, ge=1, le=100)
    max_page_size: int = Field(default=100, ge=1)

    # ========== Analytics ==========
    recent_window_days: int = Field(
        default=7,
        description="Window for the recent complaints counter",
        ge=1
    )
    trend_window_days: int = Field(
        default=30,
        description="Window for the daily complaints trend",
        ge=1
    )
    staff_leaderboard_size: int = Field(
        default=10,
        description="Number of staff members in the performance ranking",
        ge=1
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is one of allowed values."""
        allowed = {"development", "staging", "production"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


# ========== Constants ==========

class Role(str, Enum):
    """Account roles."""
    USER = "user"
    STAFF = "staff"
    ADMIN = "admin"


class ComplaintStatus(str, Enum):
    """Complaint lifecycle statuses."""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    REJECTED = "rejected"


class Priority(str, Enum):
    """Complaint priority levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Category(str, Enum):
    """Complaint categories."""
    IT = "IT"
    INFRASTRUCTURE = "Infrastructure"
    LIBRARY = "Library"
    HOSTEL = "Hostel"
    TRANSPORT = "Transport"
    CANTEEN = "Canteen"
    ACADEMIC = "Academic"
    ADMINISTRATIVE = "Administrative"
    SECURITY = "Security"
    OTHER = "Other"


STAFF_ROLES = [Role.STAFF.value, Role.ADMIN.value]
MAX_ATTACHMENTS = 5
