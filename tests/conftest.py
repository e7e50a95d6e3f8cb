"""
Shared fixtures

Each test gets its own SQLite file database; services run against real
sessions so commit and rollback behave as they do in production.
"""

import itertools

import pytest
from httpx import ASGITransport, AsyncClient

from ewaste_rewards.core.database import build_engine, build_session_factory, close_db, get_db, init_db
from ewaste_rewards.core.locks import user_locks
from ewaste_rewards.main import app
from ewaste_rewards.models import Report, ReportStatus, RewardCatalogEntry, User, TransactionType
from ewaste_rewards.services.transaction_service import TransactionService

_emails = itertools.count(1)


@pytest.fixture(autouse=True)
def reset_user_locks():
    """Locks bind to the event loop that first waits on them"""
    user_locks.clear()
    yield
    user_locks.clear()


@pytest.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(engine)
    yield engine
    await close_db(engine)


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_user(db):
    async def _make(name="Test User", email=None):
        user = User(email=email or f"user{next(_emails)}@example.com", name=name)
        db.add(user)
        await db.commit()
        return user
    return _make


@pytest.fixture
def make_report(db):
    async def _make(user, status=ReportStatus.PENDING, amount="2 units", collector=None, **kwargs):
        report = Report(
            user_id=user.id,
            location=kwargs.pop("location", "12 Green Street"),
            waste_type=kwargs.pop("waste_type", "Laptop"),
            amount=amount,
            status=status,
            collector_id=collector.id if collector else None,
            **kwargs,
        )
        db.add(report)
        await db.commit()
        return report
    return _make


@pytest.fixture
def make_catalog_entry(db):
    async def _make(name, points, is_available=True, description=None):
        entry = RewardCatalogEntry(
            name=name,
            points=points,
            is_available=is_available,
            description=description,
        )
        db.add(entry)
        await db.commit()
        return entry
    return _make


@pytest.fixture
def credit(db):
    """Append an earned_report entry for a user"""
    async def _credit(user, amount, type=TransactionType.EARNED_REPORT):
        return await TransactionService(db).append(user.id, type, amount, "Test credit")
    return _credit


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
