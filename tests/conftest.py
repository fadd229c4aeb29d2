'''
Pytest configuration for the FastAPI application.

This file sets up fixtures for:
1. Forcing the application into TEST_MODE, on an in-memory SQLite database,
   before any application code is imported.
2. Providing a fresh database (tables created per test) and a session on it.
3. Providing an httpx AsyncClient bound to the app, using that same session.
4. Providing instances of all service classes, pre-injected with the test session.
'''

import os
import pytest
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

from tests.constants import TEST_SECRET_KEY, TEST_DATABASE_URL, TEST_OTHER_USER_EMAIL, TEST_OTHER_USER_GOOGLE_ID

# --- Force test settings before the app (and its settings) are imported ---
os.environ["TEST_MODE"] = "True"
os.environ["DATABASE_URL_TEST"] = TEST_DATABASE_URL
os.environ.setdefault("DATABASE_URL_PROD", TEST_DATABASE_URL)
os.environ.setdefault("SECRET_KEY", TEST_SECRET_KEY)

import httpx
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker, AsyncEngine
from sqlalchemy.pool import StaticPool

# --- Application Imports ---
from src.tutortrack_backend.main import app
from src.tutortrack_backend.common.config import settings
from src.tutortrack_backend.database.engine import get_db_session
from src.tutortrack_backend.database import models as db_models
from src.tutortrack_backend.models.notify import EmailResult
from src.tutortrack_backend.services.security import JWTHandler
from src.tutortrack_backend.services.user_service import UserService
from src.tutortrack_backend.services.student_service import StudentService
from src.tutortrack_backend.services.balance_service import BalanceService
from src.tutortrack_backend.services.class_session_service import ClassSessionService
from src.tutortrack_backend.services.stats_service import StatsService
from src.tutortrack_backend.services.email_service import EmailService
from src.tutortrack_backend.services.notification_service import NotificationService
from src.tutortrack_backend.services.auth_service import GoogleOAuthClient, LoginService

from tests.database.factories import UserFactory, StudentFactory, ClassSessionFactory


@pytest.fixture(scope="session")
def anyio_backend():
    """
    Override the default 'anyio_backend' fixture.
    1. Forces the backend to 'asyncio' (aiosqlite runs on asyncio).
    2. Promotes the scope to 'session' (solves 'ScopeMismatch').
    """
    return "asyncio"


# --- 1. Database Fixtures ---

@pytest.fixture(scope="function")
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    A brand new in-memory database for every test.
    StaticPool keeps the single connection (and thus the data) alive.
    """
    assert settings.TEST_MODE is True, \
        "TEST_MODE was not set to True! Check your environment."

    engine = create_async_engine(
        settings.database_url,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(db_models.Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture(scope="function")
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    Provides a single session for service-level tests.
    The API client fixture reuses it, so data created by a test is
    visible to the endpoints it calls.
    """
    session_factory = async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    session = session_factory()
    try:
        yield session
    finally:
        await session.rollback()
        await session.close()


# --- 2. Data Fixtures ---

@pytest.fixture(scope="function")
async def test_user(db_session: AsyncSession) -> db_models.Users:
    user = UserFactory.build()
    db_session.add(user)
    await db_session.flush()
    return user


@pytest.fixture(scope="function")
async def other_user(db_session: AsyncSession) -> db_models.Users:
    """A second tutor, used to check that data never leaks between accounts."""
    user = UserFactory.build(email=TEST_OTHER_USER_EMAIL, google_id=TEST_OTHER_USER_GOOGLE_ID, name="Other Tutor")
    db_session.add(user)
    await db_session.flush()
    return user


@pytest.fixture(scope="function")
def make_student(db_session: AsyncSession, test_user: db_models.Users):
    """Factory fixture: `await make_student(hourly_rate=60)`."""
    async def _make(**kwargs) -> db_models.Students:
        kwargs.setdefault("user_id", test_user.id)
        student = StudentFactory.build(**kwargs)
        db_session.add(student)
        await db_session.flush()
        return student
    return _make


@pytest.fixture(scope="function")
def make_class_session(db_session: AsyncSession, test_user: db_models.Users):
    """
    Factory fixture for class sessions. Inserts the row directly,
    so balances are NOT recalculated.
    """
    async def _make(**kwargs) -> db_models.ClassSessions:
        kwargs.setdefault("user_id", test_user.id)
        class_session = ClassSessionFactory.build(**kwargs)
        db_session.add(class_session)
        await db_session.flush()
        return class_session
    return _make


# --- 3. Service Fixtures ---

@pytest.fixture(scope="function")
def user_service(db_session: AsyncSession) -> UserService:
    return UserService(db=db_session)

@pytest.fixture(scope="function")
def student_service(db_session: AsyncSession) -> StudentService:
    return StudentService(db=db_session)

@pytest.fixture(scope="function")
def balance_service(db_session: AsyncSession, student_service: StudentService) -> BalanceService:
    return BalanceService(db=db_session, student_service=student_service)

@pytest.fixture(scope="function")
def class_session_service(db_session: AsyncSession, balance_service: BalanceService) -> ClassSessionService:
    return ClassSessionService(db=db_session, balance_service=balance_service)

@pytest.fixture(scope="function")
def stats_service(student_service: StudentService, class_session_service: ClassSessionService) -> StatsService:
    return StatsService(student_service=student_service, class_session_service=class_session_service)

@pytest.fixture(scope="function")
def mock_email_service() -> EmailService:
    """Provides a mock EmailService that reports every send as delivered."""
    mock_service = MagicMock(spec=EmailService)
    mock_service.send = AsyncMock(return_value=EmailResult(success=True))
    return mock_service

@pytest.fixture(scope="function")
def notification_service(
    student_service: StudentService,
    balance_service: BalanceService,
    mock_email_service: EmailService
) -> NotificationService:
    return NotificationService(
        student_service=student_service,
        balance_service=balance_service,
        email_service=mock_email_service
    )

@pytest.fixture(scope="function")
def mock_oauth_client() -> GoogleOAuthClient:
    """Provides a mock GoogleOAuthClient; tests set fetch_profile's result."""
    mock_client = MagicMock(spec=GoogleOAuthClient)
    mock_client.build_authorization_url = MagicMock(
        side_effect=lambda state: f"{GoogleOAuthClient.AUTHORIZE_URL}?state={state}"
    )
    mock_client.fetch_profile = AsyncMock()
    return mock_client

@pytest.fixture(scope="function")
def login_service(user_service: UserService, mock_oauth_client: GoogleOAuthClient) -> LoginService:
    return LoginService(user_service=user_service, oauth_client=mock_oauth_client)


# --- 4. API Client Fixtures ---

@pytest.fixture(scope="function")
async def client(
    db_session: AsyncSession,
    mock_email_service: EmailService,
    mock_oauth_client: GoogleOAuthClient
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    An httpx client talking to the app in-process.

    `get_db_session` is overridden to hand out the test session (no commit),
    and the outbound integrations are replaced by mocks.
    """
    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[EmailService] = lambda: mock_email_service
    app.dependency_overrides[GoogleOAuthClient] = lambda: mock_oauth_client

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


def _bearer(user: db_models.Users) -> dict[str, str]:
    token = JWTHandler.create_access_token(subject=user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def auth_headers(test_user: db_models.Users) -> dict[str, str]:
    return _bearer(test_user)

@pytest.fixture(scope="function")
def other_auth_headers(other_user: db_models.Users) -> dict[str, str]:
    return _bearer(other_user)
