"""
Rate Limiting
=============

Per-client request limits using slowapi, applied to every route through
SlowAPIMiddleware.
"""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from src.config import settings
from src.shared.api.schemas import ErrorResponse


def build_limiter(per_minute: int, enabled: bool = True) -> Limiter:
    """Limiter keyed on client IP with a single per-minute default limit."""
    return Limiter(
        key_func=get_remote_address,
        default_limits=[f"{per_minute}/minute"],
        enabled=enabled,
    )


limiter = build_limiter(settings.rate_limit_per_minute, settings.rate_limit_enabled)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    body = ErrorResponse(
        message="Too many requests from this IP, please try again later.",
        correlation_id=getattr(request.state, "correlation_id", None),
    )
    return JSONResponse(status_code=429, content=body.model_dump())


def install_rate_limiting(app: FastAPI, app_limiter: Optional[Limiter] = None) -> None:
    """Attach the limiter (the settings-based one by default), its middleware and its 429 handler."""
    app.state.limiter = app_limiter or limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)
