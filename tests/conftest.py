"""
Monthly Reports - Test Configuration and Fixtures
"""
import os
from typing import AsyncGenerator

import pytest
from faker import Faker
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

# Set testing environment before the app reads its settings
TEST_DATABASE_URL = "sqlite+aiosqlite:///./test_reports.db"
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ.pop("SQLALCHEMY_DATABASE_URL", None)
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"

from monthly_reports.main import app
from monthly_reports.database import Base, get_db
from monthly_reports.models.user import User
from monthly_reports.core.security import create_access_token
from monthly_reports.utils.password import hash_password

fake = Faker()

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False)
TestSessionLocal = async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)

TEST_PASSWORD = "testpassword123"


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Fresh tables and a session for each test"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def session_factory(db_session):
    """Independent sessions on the test database (tables already created)"""
    return TestSessionLocal


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Test client sharing the test session"""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def _make_user(session: AsyncSession) -> User:
    user = User(
        name=fake.name(),
        email=fake.unique.email().lower(),
        title="member",
        educational_institution=fake.company(),
        class_name="Second Year",
        address=fake.address().replace("\n", ", "),
        phone_number=fake.numerify("03#########"),
        hashed_password=hash_password(TEST_PASSWORD),
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    return await _make_user(db_session)


@pytest.fixture
async def other_user(db_session: AsyncSession) -> User:
    return await _make_user(db_session)


def _headers_for(user: User) -> dict:
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    return _headers_for(test_user)


@pytest.fixture
def other_auth_headers(other_user: User) -> dict:
    return _headers_for(other_user)


@pytest.fixture
def registration_data() -> dict:
    return {
        "name": "Ayesha Khan",
        "email": "Ayesha.Khan@Example.com",
        "password": "strongpass1",
        "educationalInstitution": "Government College",
        "class": "BS Part II",
        "address": "12 Mall Road, Lahore",
        "phoneNumber": "03001234567",
    }
