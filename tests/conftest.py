"""Shared test fixtures for the evidence tracking service."""

import os

# Force test settings before any imports
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("SEED_DEMO_DATA", "true")

from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.auth.security import TokenService
from app.config import get_settings
from app.main import app, init_state
from app.models.user import Identity, UserRole
from app.schemas.auth import UserRegistration
from app.services.auth_service import SessionAuthority

TEST_SECRET = "test-secret-key-not-for-production"


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Clear the lru_cache on settings between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced clock for token expiry tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 4, 18, 10, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


# ---------------------------------------------------------------------------
# Authority fixtures
# ---------------------------------------------------------------------------


def make_authority(clock=None) -> SessionAuthority:
    kwargs = {"clock": clock} if clock is not None else {}
    return SessionAuthority(
        TokenService(TEST_SECRET, **kwargs),
        password_rounds=4,
        **kwargs,
    )


@pytest.fixture()
def authority(clock) -> SessionAuthority:
    """Authority holding a single approved admin."""
    auth = make_authority(clock)
    auth.seed(
        user_id="admin1",
        username="admin",
        password="admin123",
        first_name="System",
        last_name="Administrator",
        email="admin@evidencetrack.org",
        department="IT",
        role=UserRole.admin,
        approved=True,
    )
    return auth


def make_registration(**overrides) -> UserRegistration:
    """Build a complete registration request."""
    data = {
        "username": "rwilson",
        "password": "password123",
        "first_name": "Robert",
        "last_name": "Wilson",
        "email": "rwilson@police.gov",
        "department": "Digital Forensics",
        "role": "detective",
    }
    data.update(overrides)
    return UserRegistration(**data)


def make_registration_payload(**overrides) -> dict:
    """Build a registration request body for HTTP tests."""
    return make_registration(**overrides).model_dump(mode="json", exclude_none=True)


# ---------------------------------------------------------------------------
# HTTP client fixture (fresh seeded stores per test)
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture()
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the FastAPI app with freshly seeded stores."""
    init_state(app)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Auth helpers: issue tokens for the seeded demo users
# ---------------------------------------------------------------------------

SEEDED_IDENTITIES = {
    "admin": Identity("admin1", "admin", UserRole.admin, "System", "Administrator"),
    "supervisor": Identity("supervisor1", "mjohnson", UserRole.supervisor, "Maria", "Johnson"),
    "officer": Identity("officer1", "jsmith", UserRole.officer, "John", "Smith"),
    "officer2": Identity("officer2", "agarcia", UserRole.officer, "Ana", "Garcia"),
    "detective": Identity("detective1", "dcooper", UserRole.detective, "David", "Cooper"),
}


def make_token(identity: Identity) -> str:
    """Issue a valid token signed with the application's configured secret."""
    return TokenService.from_settings(get_settings()).issue(identity)


def auth_headers(role_key: str) -> dict[str, str]:
    """Return Authorization header dict for one of the seeded users."""
    return {"Authorization": f"Bearer {make_token(SEEDED_IDENTITIES[role_key])}"}


@pytest_asyncio.fixture()
async def admin_client(client) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client pre-authenticated as the seeded admin."""
    client.headers.update(auth_headers("admin"))
    yield client
    client.headers.pop("Authorization", None)


@pytest_asyncio.fixture()
async def supervisor_client(client) -> AsyncGenerator[AsyncClient, None]:
    client.headers.update(auth_headers("supervisor"))
    yield client
    client.headers.pop("Authorization", None)


@pytest_asyncio.fixture()
async def officer_client(client) -> AsyncGenerator[AsyncClient, None]:
    client.headers.update(auth_headers("officer"))
    yield client
    client.headers.pop("Authorization", None)


@pytest_asyncio.fixture()
async def detective_client(client) -> AsyncGenerator[AsyncClient, None]:
    client.headers.update(auth_headers("detective"))
    yield client
    client.headers.pop("Authorization", None)
