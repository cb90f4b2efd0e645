"""
Serverless entry point wiring.
"""

import httpx
import pytest
from mangum import Mangum

from api.index import handler
from src.infrastructure.database import close_database, create_tables
from src.main import app


def test_handler_wraps_app():
    assert isinstance(handler, Mangum)
    assert handler.app is app


@pytest.mark.asyncio
async def test_requests_reach_database_without_lifespan():
    await close_database()
    await create_tables()
    try:
        transport = httpx.ASGITransport(app=handler.app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            resp = await client.post("/api/auth/register", json={
                "name": "Lambda User", "email": "lambda@example.com", "password": "secret123",
            })
            assert resp.status_code == 201

            resp = await client.post("/api/auth/login", json={
                "email": "lambda@example.com", "password": "secret123",
            })
            assert resp.status_code == 200
    finally:
        await close_database()
