import pytest
import pytest_asyncio
from datetime import datetime
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401  registers tables on SQLModel.metadata
from src.adapter.services.clock import FixedClock
from src.depends import get_session, get_session_factory, get_clock, get_router_control


class FakeRouterControl:
    """Router control double recording every disable call"""

    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.calls = []

    async def disable_subscriber_credential(self, router, secret_name):
        self.calls.append((router.name, secret_name))
        return self.succeed

@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Create a file-backed SQLite database per test"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/billing_test.db", echo=False, future=True)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()

@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session

@pytest.fixture
def clock():
    """Clock the API runs on; tests move it by setting clock.instant"""
    return FixedClock(datetime(2025, 2, 1, 0, 5), "Asia/Jakarta")

@pytest.fixture
def router_control():
    return FakeRouterControl()

@pytest_asyncio.fixture
async def client(session_factory, clock, router_control):
    """Create test client with database, clock and router overrides"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_router_control] = lambda: router_control

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
