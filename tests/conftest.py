"""
tests.conftest

Shared fixtures: a seeded in-memory identity backend and an ASGI client bound to it.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio

from tk_admin.api.app import create_app
from tk_admin.identity.memory import InMemoryIdentityBackend
from tk_admin.identity.models import Role
from tk_admin.settings import Settings

ADMIN_TOKEN = "admin-token"
MASTER_TOKEN = "master-token"
PLAIN_TOKEN = "plain-token"


def auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def user_id(backend: InMemoryIdentityBackend, email: str) -> str:
    return next(uid for uid, e in backend.users.items() if e == email)


@pytest.fixture
def backend() -> InMemoryIdentityBackend:
    b = InMemoryIdentityBackend()
    b.add_user("admin@co.com", roles=[Role.admin], token=ADMIN_TOKEN)
    b.add_user("master@co.com", roles=[Role.tk_master], token=MASTER_TOKEN)
    b.add_user("plain@co.com", token=PLAIN_TOKEN)
    b.add_user("other-admin@co.com", roles=[Role.admin])
    b.add_user("member@co.com")
    return b


@pytest_asyncio.fixture
async def client(backend: InMemoryIdentityBackend) -> AsyncIterator[httpx.AsyncClient]:
    app = create_app(settings=Settings(env="test"), identity_backend=backend)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


# --- Module Notes -----------------------------------------------------------
# Tokens are plain strings mapped to users by the in-memory backend; nothing is signed.
