"""
Credential Infrastructure
=========================

Password hashing (bcrypt through passlib) and JWT access tokens (python-jose).
"""

from datetime import timedelta
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from src.config import settings
from src.core import AuthenticationException, ValidationException
from src.core.timeutils import utcnow

BCRYPT_MAX_BYTES = 72

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def hash_password(password: str) -> str:
    """Hash a plaintext password; bcrypt ignores input past 72 bytes, so reject it."""
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValidationException(
            "Password cannot exceed 72 bytes",
            errors=[{"field": "password", "message": "Password cannot exceed 72 bytes"}],
        )
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def create_access_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Issue a signed access token for a user.

    Args:
        user_id: Subject of the token
        expires_delta: Lifetime override (defaults to settings.jwt_expire_days)

    Returns:
        Encoded JWT
    """
    issued_at = utcnow()
    expires_at = issued_at + (expires_delta or timedelta(days=settings.jwt_expire_days))
    payload = {"sub": user_id, "iat": issued_at, "exp": expires_at}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> str:
    """
    Verify a token and return its subject (the user id).

    Raises:
        AuthenticationException: If the token is malformed, tampered with or expired
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise AuthenticationException("Not authorized, token failed")

    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationException("Not authorized, token failed")
    return user_id
