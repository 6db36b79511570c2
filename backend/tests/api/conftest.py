"""API test fixtures — FastAPI test client over in-memory SQLite and a fake identity provider.

Invariants:
    - get_db overridden to use the test session factory
    - get_identity_provider overridden with FakeIdentityProvider (records every call)
    - Each test builds its own app from explicit Settings (no shared app state between tests)

Design Decisions:
    - Fake over httpx mock here: route tests care about outcome mapping, not HTTP headers
      (the real client is covered in tests/infrastructure/)
"""

from typing import Any
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from tinta_fresca.api.dependencies import get_identity_provider
from tinta_fresca.config import Settings
from tinta_fresca.core.errors import IdentityProviderError
from tinta_fresca.infrastructure.database import DatabaseSessionManager, get_db
from tinta_fresca.main import create_app

ADMIN_TOKEN = "admin-token"


class FakeIdentityProvider:
    """In-memory identity provider. Tokens map to identities."""

    def __init__(self):
        self.calls: list[tuple[str, Any]] = []
        self.tokens: dict[str, dict[str, Any]] = {}
        self.users: list[dict[str, Any]] = []
        self.admin_failure: IdentityProviderError | None = None

    def admin_calls(self) -> list[tuple[str, Any]]:
        return [c for c in self.calls if c[0] != "get_user"]

    async def get_user(self, token: str) -> dict[str, Any]:
        self.calls.append(("get_user", token))
        if token not in self.tokens:
            raise IdentityProviderError(
                "invalid JWT: unable to parse or verify signature",
                "http_error", status_code=401,
            )
        return self.tokens[token]

    async def list_users(self) -> list[dict[str, Any]]:
        self.calls.append(("list_users", None))
        if self.admin_failure:
            raise self.admin_failure
        return list(self.users)

    async def create_user(
        self, email, password, user_metadata=None, email_confirm=True,
    ) -> dict[str, Any]:
        self.calls.append(("create_user", email))
        if self.admin_failure:
            raise self.admin_failure
        user = {
            "id": str(uuid4()),
            "email": email,
            "user_metadata": user_metadata or {},
            "email_confirmed_at": "2026-10-17T00:00:00Z" if email_confirm else None,
        }
        self.users.append(user)
        return user

    async def delete_user(self, user_id: str) -> None:
        self.calls.append(("delete_user", user_id))
        if self.admin_failure:
            raise self.admin_failure
        remaining = [u for u in self.users if u["id"] != user_id]
        if len(remaining) == len(self.users):
            raise IdentityProviderError(
                "User not found", "http_error", status_code=404,
            )
        self.users = remaining


def make_settings(**overrides) -> Settings:
    values = {
        "database_url": "sqlite+aiosqlite:///:memory:",
        "supabase_url": "https://test-project.supabase.co",
        "supabase_anon_key": "anon-test-key",
        "supabase_service_role_key": "service-role-test-key",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def identity_provider():
    provider = FakeIdentityProvider()
    provider.tokens[ADMIN_TOKEN] = {
        "id": str(uuid4()),
        "email": "admin@tintafresca.edu",
        "app_metadata": {"role": "admin"},
    }
    return provider


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def app(settings, test_engine, test_session_factory, identity_provider):
    application = create_app(settings)

    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_identity_provider] = (
        lambda: identity_provider
    )

    # Readiness probe reads the manager straight from app.state
    application.state.db_manager = DatabaseSessionManager(test_engine)
    return application


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}
