"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path

# Keep the module-level app off any real database and out of production mode.
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.services.auth_service import AuthService
from infrastructure.auth.password_hasher import BcryptPasswordHasher
from infrastructure.database.session import Database
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

# Low cost factor so the suite is not dominated by bcrypt.
TEST_BCRYPT_ROUNDS = 4


@pytest.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database, None]:
    """A fresh SQLite database file with the schema created."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'identity.db'}")
    await db.create_schema()
    yield db
    await db.dispose()


@pytest.fixture
def session_factory(database: Database) -> async_sessionmaker[AsyncSession]:
    return database.session_factory


@pytest.fixture
def uow_factory(session_factory: async_sessionmaker[AsyncSession]):
    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def password_hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def auth_service(uow_factory, password_hasher: BcryptPasswordHasher) -> AuthService:
    """AuthService backed by the SQLite database."""
    return AuthService(uow_factory, password_hasher)


@pytest.fixture
def registration_payload() -> dict[str, str]:
    """A valid /register body."""
    return {
        "email": "test@example.com",
        "password": "password123",
        "nickname": "테스트유저",
        "birthDate": "20030913",
        "gender": "F",
        "bio": "테스트용 사용자입니다",
    }


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client without a database."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def api_client(
    database: Database,
    password_hasher: BcryptPasswordHasher,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client wired to the SQLite database.

    This client:
    - Injects the test database handle into the app
    - Swaps in a low-cost password hasher
    - Mounts the maintenance routes
    """
    from api.v1.dependencies import get_password_hasher
    from main import create_app

    app = create_app(database=database, enable_maintenance_routes=True)
    app.dependency_overrides[get_password_hasher] = lambda: password_hasher

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()

