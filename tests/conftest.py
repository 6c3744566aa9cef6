"""Shared test fixtures."""

import json

import pytest
from httpx import ASGITransport, AsyncClient

from cashier_fastspring.config import Settings
from cashier_fastspring.db.base import Base
from cashier_fastspring.db.engine import create_db_engine, create_session_factory
# Import all models to register with Base.metadata
import cashier_fastspring.db.models  # noqa: F401
from cashier_fastspring.events.bus import EventBus
from cashier_fastspring.events.registry import default_registry
from cashier_fastspring.webhooks.signature import compute_signature

HMAC_SECRET = "test-hmac-secret"


def make_event(event_id: str, event_type: str = "order.completed", **overrides) -> dict:
    """A webhook event shaped like FastSpring's."""
    event = {
        "id": event_id,
        "type": event_type,
        "live": False,
        "processed": False,
        "created": 1426560444800,
        "data": {"order": "US5UuRsmSvKNiXzNX1j0OA", "reference": "FUR150317-4811-20133"},
    }
    event.update(overrides)
    return event


def make_body(*events: dict) -> bytes:
    return json.dumps({"events": list(events)}).encode("utf-8")


def sign(body: bytes, secret: str = HMAC_SECRET) -> str:
    return compute_signature(body, secret)


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def payload_dir(tmp_path):
    return tmp_path / "payloads"


@pytest.fixture
def test_settings(payload_dir) -> Settings:
    return Settings(
        _env_file=None,
        hmac_secret=HMAC_SECRET,
        payload_audit_dir=str(payload_dir),
    )


@pytest.fixture
def app(test_settings, registry, bus):
    """Create a test application wired to an isolated bus."""
    from cashier_fastspring.main import create_app

    return create_app(config=test_settings, registry=registry, bus=bus)


@pytest.fixture
async def client(app):
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_db_engine("sqlite+aiosqlite:///")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Create a test database session."""
    session_factory = create_session_factory(db_engine)
    async with session_factory() as session:
        yield session
