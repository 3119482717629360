"""Pytest configuration and fixtures"""

from pathlib import Path
from typing import AsyncGenerator, Callable, Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from tresor.core.auth import Authenticator, PasswordHasher, PasswordPolicy
from tresor.core.config import Settings
from tresor.infrastructure.concurrency import CredentialExecutor
from tresor.infrastructure.database import DatabaseConnection, UnitOfWork
from tresor.main import create_app

# Lowest cost bcrypt accepts; keeps the suite fast
TEST_ROUNDS = 4

STRONG_PASSWORD = "Analyt1cal!"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway database"""
    return Settings(
        environment="development",
        database_url=f"sqlite:///{tmp_path / 'tresor_test.db'}",
        bcrypt_rounds=TEST_ROUNDS,
        credential_workers=2,
        credential_timeout_seconds=5.0,
        log_level="WARNING",
    )


@pytest.fixture
def password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=TEST_ROUNDS)


@pytest.fixture
def password_policy() -> PasswordPolicy:
    return PasswordPolicy()


@pytest.fixture
def authenticator(password_hasher: PasswordHasher) -> Authenticator:
    return Authenticator(password_hasher)


@pytest.fixture
def executor() -> Generator[CredentialExecutor, None, None]:
    pool = CredentialExecutor(max_workers=2)
    yield pool
    pool.shutdown()


@pytest_asyncio.fixture
async def database(settings: Settings) -> AsyncGenerator[DatabaseConnection, None]:
    """Connected database with the schema created"""
    db = DatabaseConnection(settings.database_url)
    await db.connect()
    await db.create_schema()
    yield db
    await db.disconnect()


@pytest_asyncio.fixture
async def session(database: DatabaseConnection) -> AsyncGenerator[AsyncSession, None]:
    async with database.get_session() as session:
        yield session


@pytest.fixture
def uow_factory(session: AsyncSession) -> Callable[[], UnitOfWork]:
    def factory() -> UnitOfWork:
        return UnitOfWork(session)
    return factory


@pytest.fixture
def client(settings: Settings) -> Generator[TestClient, None, None]:
    """Test client running the full application lifespan"""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def registration_payload() -> dict:
    return {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.com",
        "password": STRONG_PASSWORD,
        "password_confirmation": STRONG_PASSWORD,
    }


@pytest.fixture
def registered_user(client: TestClient, registration_payload: dict) -> dict:
    """A user created through the API"""
    response = client.post("/api/users", json=registration_payload)
    assert response.status_code == 201
    return response.json()["user"]
