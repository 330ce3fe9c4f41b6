import uuid
from datetime import date, time

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import embodied_journal.models  # noqa: F401  registers every table
from embodied_journal.db.database import Base, get_db
from embodied_journal.main import app
from embodied_journal.models.ritual import DailyRitual, MicroWin
from embodied_journal.models.trade import Trade
from embodied_journal.models.user import User

# One private in-memory database per test
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def db_engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def async_session(db_engine):
    session_factory = async_sessionmaker(bind=db_engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session


async def _add_user(session, email, token):
    user = User(id=uuid.uuid4(), email=email, api_token=token)
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def user(async_session):
    return await _add_user(async_session, "trader@example.com", "test-token")


@pytest_asyncio.fixture
async def other_user(async_session):
    return await _add_user(async_session, "someone@example.com", "other-token")


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {user.api_token}"}


@pytest_asyncio.fixture
async def client(async_session):
    async def override_get_db():
        yield async_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)

    async with AsyncClient(
        transport=transport,
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


# -------------------------------------------------
# Row factories
# -------------------------------------------------

@pytest.fixture
def add_trade(async_session):
    async def _add(
        user_id,
        *,
        on: date,
        pnl,
        identity_state="disciplined_trader",
        nervous_system_state="calm_confidence",
        asset="BTC",
    ):
        trade = Trade(
            user_id=user_id,
            date=on,
            time=time(9, 30),
            asset=asset,
            entry=100.0,
            exit=100.0,
            position_size=1.0,
            pnl=pnl,
            identity_state=identity_state,
            embodiment_rating=5,
            beliefs_influence="Followed the plan from the morning ritual",
            nervous_system_state=nervous_system_state,
        )
        async_session.add(trade)
        await async_session.commit()
        return trade

    return _add


@pytest.fixture
def add_ritual(async_session):
    async def _add(user_id, *, on: date, score):
        ritual = DailyRitual(user_id=user_id, date=on, embodiment_score=score)
        async_session.add(ritual)
        await async_session.commit()
        return ritual

    return _add


@pytest.fixture
def add_micro_win(async_session):
    async def _add(user_id, *, on: date, description="Waited for confirmation"):
        win = MicroWin(user_id=user_id, date=on, description=description)
        async_session.add(win)
        await async_session.commit()
        return win

    return _add
