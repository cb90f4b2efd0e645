"""
Shared pytest fixtures for the Complaint Desk test suite.

Provides an httpx AsyncClient bound to a fresh in-memory SQLite database per
test, and registered accounts (with auth headers) for each role.
"""

import os

# Settings are read once at import time; configure before importing the app
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "development"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["JWT_SECRET"] = "test-secret"

from dataclasses import dataclass
from itertools import count
from typing import Dict

import httpx
import pytest_asyncio

from src.accounts.infrastructure.repositories import SQLAlchemyUserRepository
from src.infrastructure.database import close_database, create_tables, get_session_context, init_database
from src.main import app

_sequence = count(1)


@dataclass
class Account:
    id: str
    email: str
    password: str
    headers: Dict[str, str]


@pytest_asyncio.fixture
async def client():
    """In-process httpx AsyncClient over an empty database."""
    init_database("sqlite+aiosqlite:///:memory:")
    await create_tables()

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c

    await close_database()


async def set_role(user_id: str, role: str) -> None:
    async with get_session_context() as session:
        repo = SQLAlchemyUserRepository(session)
        user = await repo.get_by_id(user_id)
        await repo.update(user.with_role(role))


async def register_account(client: httpx.AsyncClient, role: str = "user", name: str = None) -> Account:
    """Register through the API, then promote directly in the database."""
    n = next(_sequence)
    email = f"{role}{n}@example.com"
    password = "secret123"
    resp = await client.post("/api/auth/register", json={
        "name": name or f"Test {role.title()} {n}",
        "email": email,
        "password": password,
    })
    assert resp.status_code == 201, resp.text
    data = resp.json()["data"]

    if role != "user":
        await set_role(data["user"]["id"], role)

    return Account(
        id=data["user"]["id"],
        email=email,
        password=password,
        headers={"Authorization": f"Bearer {data['token']}"},
    )


@pytest_asyncio.fixture
async def user(client):
    return await register_account(client, "user")


@pytest_asyncio.fixture
async def other_user(client):
    return await register_account(client, "user")


@pytest_asyncio.fixture
async def staff(client):
    return await register_account(client, "staff")


@pytest_asyncio.fixture
async def other_staff(client):
    return await register_account(client, "staff")


@pytest_asyncio.fixture
async def admin(client):
    return await register_account(client, "admin")


COMPLAINT_PAYLOAD = {
    "title": "Wi-Fi down in Block C",
    "category": "IT",
    "description": "The wireless network in Block C has been unreachable since this morning.",
}


async def file_complaint(client: httpx.AsyncClient, account: Account, **overrides) -> dict:
    resp = await client.post(
        "/api/complaints",
        json={**COMPLAINT_PAYLOAD, **overrides},
        headers=account.headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]["complaint"]
