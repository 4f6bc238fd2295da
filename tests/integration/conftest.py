"""App-level fixtures: the FastAPI app wired to the in-memory Supabase client."""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.dependencies import get_role_cache
from app.database.supabase_client import get_service_supabase, get_session_supabase
from app.main import app as fastapi_app

TOKENS = {
    "member-token": ("user-1", "member@example.com"),
    "other-token": ("user-2", "other@example.com"),
    "admin-token": ("admin-1", "admin@example.com"),
    "support-token": ("support-1", "support@example.com"),
}

ROLES = {"admin-1": "SUPERADMIN", "support-1": "SUPPORT", "user-1": "USER", "user-2": "USER"}


@pytest.fixture()
def backend(fake_supabase, user_factory, auth_error, auth_response_factory):
    """Fake Supabase project with four accounts; password is always 'secret'."""
    def get_user(token):
        if token not in TOKENS:
            raise auth_error("invalid JWT")
        user_id, email = TOKENS[token]
        return SimpleNamespace(user=user_factory(user_id=user_id, email=email))

    def sign_in(credentials):
        for token, (user_id, email) in TOKENS.items():
            if credentials.get("email") == email and credentials["password"] == "secret":
                return auth_response_factory(user_factory(user_id=user_id, email=email), access_token=token)
        raise auth_error("Invalid login credentials")

    fake_supabase.auth.get_user.side_effect = get_user
    fake_supabase.auth.sign_in_with_password.side_effect = sign_in
    fake_supabase.rpcs["get_user_role"] = lambda params: ROLES.get(params["p_user_id"])
    return fake_supabase


@pytest.fixture()
def app(backend, role_cache):
    fastapi_app.dependency_overrides[get_session_supabase] = lambda: backend
    fastapi_app.dependency_overrides[get_service_supabase] = lambda: backend
    fastapi_app.dependency_overrides[get_role_cache] = lambda: role_cache
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture()
async def client(app):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def auth_headers():
    return bearer
