import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

from config import ApplicationConfig
from authsync.adapter.repositories.in_memory_reset_token_repository import InMemoryResetTokenRepository
from authsync.api.app import create_app
from authsync.depends import get_identity_provider, get_mailer, get_reset_token_repository
from tests.fixtures.fake_identity_provider import FakeIdentityProvider
from tests.fixtures.json_loader import TestDataLoader
from tests.fixtures.recording_mailer import RecordingMailer


@pytest.fixture
def test_data():
    return TestDataLoader()


@pytest.fixture
def reset_tokens():
    return InMemoryResetTokenRepository()


@pytest.fixture
def identity_provider():
    return FakeIdentityProvider()


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def app(reset_tokens, identity_provider, mailer):
    app = create_app(ApplicationConfig)

    app.dependency_overrides[get_reset_token_repository] = lambda: reset_tokens
    app.dependency_overrides[get_identity_provider] = lambda: identity_provider
    app.dependency_overrides[get_mailer] = lambda: mailer

    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers():
    def build(id_token: str = "alice-id-token"):
        return {"Authorization": f"Bearer {id_token}"}

    return build


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test_reset_tokens.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
