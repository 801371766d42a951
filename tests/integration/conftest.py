import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from campus_auth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from campus_auth.api.app import create_app
from campus_auth.app.services.password_hasher import hash_password
from campus_auth.depends import get_unit_of_work
from campus_auth.domain.entities import User, UserRole
from tests.fixtures.notifiers import RecordingNotifier


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def app(notifier):
    return create_app(ApplicationConfig, notifier=notifier)


@pytest_asyncio.fixture
async def client(app, db_session):
    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def create_user(db_session):
    async def _create(email: str, password: str = "secret1", role: UserRole = UserRole.USER) -> User:
        user = User(
            email=email,
            password_hash=hash_password(password, rounds=4),
            role=role,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _create
