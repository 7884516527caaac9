import asyncio
import os
import tempfile
from types import SimpleNamespace

import pytest

_tmpdir = tempfile.mkdtemp(prefix="exambuddy-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_tmpdir}/test.db"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["STATS_STORE"] = "sql"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("OPENAI_API_KEY", None)

from fastapi.testclient import TestClient  # noqa: E402

from exambuddy.db.base import Base  # noqa: E402
from exambuddy.db.session import AsyncSessionLocal, engine  # noqa: E402
from exambuddy.main import app  # noqa: E402

PASSWORD = "correct-horse"


async def _drop_all():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    asyncio.run(_drop_all())


@pytest.fixture
async def db_session():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with AsyncSessionLocal() as session:
        yield session
    await _drop_all()


def register(client, email="student@example.com", password=PASSWORD):
    resp = client.post("/api/auth/register", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(client):
    return bearer(register(client)["token"])


class FakeCompletions:
    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=reply))])


class FakeLLM:
    """Stands in for AsyncOpenAI: ``client.chat.completions.create``."""

    def __init__(self, *replies):
        self.completions = FakeCompletions(replies)
        self.chat = SimpleNamespace(completions=self.completions)
