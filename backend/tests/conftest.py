import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient

# Set test env vars before importing app modules
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["RATE_LIMIT_STORAGE_URI"] = "memory://"

BASE_TIME = datetime(2025, 10, 2, 10, 30, tzinfo=timezone.utc)

# (event_type, product_id, order_amount)
EventRow = tuple[str, str | None, float | None]

# Reference funnel: 3 views, 1 cart add, 2 purchases
REFERENCE_EVENTS: list[EventRow] = [
    ("page_view", "prod-1", None),
    ("page_view", "prod-2", None),
    ("page_view", "prod-1", None),
    ("add_to_cart", "prod-1", None),
    ("purchase", "prod-1", 99.99),
    ("purchase", "prod-2", 49.99),
]


@pytest.fixture(autouse=True)
def disable_rate_limit():
    from app.core.limiter import limiter

    # Disable rate limiting in tests; limits are tested explicitly where needed
    limiter.enabled = False
    yield
    limiter.enabled = True


@pytest.fixture
async def database(tmp_path):
    from app.db.base import Base
    from app.db.session import Database
    from app.models import event  # noqa: F401

    # One SQLite file per test, under pytest's temporary directory
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    yield db
    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await db.dispose()


@pytest.fixture
def event_store(database):
    from app.services.event_store import SqlEventStore

    return SqlEventStore(database)


@pytest.fixture
def add_events(database) -> Callable[[list[EventRow]], Awaitable[None]]:
    """Insert events into the test database, one second apart."""
    from app.models.event import Event

    async def _add(rows: list[EventRow]) -> None:
        await database.ensure_schema()
        async with database.session_factory() as session:
            for i, (event_type, product_id, order_amount) in enumerate(rows):
                session.add(
                    Event(
                        event_type=event_type,
                        timestamp=BASE_TIME + timedelta(seconds=i),
                        product_id=product_id,
                        order_amount=order_amount,
                    )
                )
            await session.commit()

    return _add


@pytest.fixture
async def reference_events(add_events) -> list[EventRow]:
    """Seed the reference funnel and return the rows inserted."""
    await add_events(REFERENCE_EVENTS)
    return REFERENCE_EVENTS


@pytest.fixture
async def client(database, event_store) -> AsyncGenerator[AsyncClient, None]:
    from app.api.deps import get_event_store
    from app.db.session import get_database
    from app.main import app

    async def override_get_event_store():
        return event_store

    async def override_get_database():
        return database

    app.dependency_overrides[get_event_store] = override_get_event_store
    app.dependency_overrides[get_database] = override_get_database

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
