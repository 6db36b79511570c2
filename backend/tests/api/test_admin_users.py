"""Admin Users API — bearer-token guard and identity-provider admin passthrough.

Invariants:
    - No token / malformed header / rejected token → 401 before any admin call
    - ADMIN_ROLE unset: any authenticated identity passes
    - ADMIN_ROLE set: identity without that role → 403
    - Provider failure → 500 with the provider's message; provider 404 on delete → 404
"""

from uuid import uuid4

from tinta_fresca.core.errors import IdentityProviderError


# -- Guard ---------------------------------------------------------------------

async def test_list_without_token_is_unauthenticated(client, identity_provider):
    res = await client.get("/api/admin/users")

    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHENTICATED"
    assert res.json()["error"]["message"] == "No token provided"
    assert identity_provider.calls == []


async def test_delete_without_token_is_unauthenticated(client, identity_provider):
    res = await client.delete(f"/api/admin/users/{uuid4()}")

    assert res.status_code == 401
    assert identity_provider.calls == []


async def test_non_bearer_scheme_is_unauthenticated(client, identity_provider):
    res = await client.get(
        "/api/admin/users", headers={"Authorization": "Basic dXNlcjpwYXNz"},
    )
    assert res.status_code == 401
    assert identity_provider.calls == []


async def test_rejected_token_is_unauthenticated(client, identity_provider):
    res = await client.get(
        "/api/admin/users", headers={"Authorization": "Bearer forged"},
    )

    assert res.status_code == 401
    assert res.json()["error"]["message"] == "Invalid or expired token"
    assert identity_provider.admin_calls() == []


async def test_authenticated_identity_without_role_passes_by_default(
    client, identity_provider,
):
    identity_provider.tokens["student-token"] = {
        "id": str(uuid4()), "app_metadata": {"role": "student"},
    }
    res = await client.get(
        "/api/admin/users", headers={"Authorization": "Bearer student-token"},
    )
    assert res.status_code == 200


async def test_configured_admin_role_rejects_other_roles(
    app, client, identity_provider,
):
    app.state.settings = app.state.settings.model_copy(
        update={"admin_role": "admin"},
    )
    identity_provider.tokens["student-token"] = {
        "id": str(uuid4()), "app_metadata": {"role": "student"},
    }

    res = await client.get(
        "/api/admin/users", headers={"Authorization": "Bearer student-token"},
    )

    assert res.status_code == 403
    assert res.json()["error"]["code"] == "FORBIDDEN"
    assert identity_provider.admin_calls() == []


async def test_configured_admin_role_accepts_admin(app, client, admin_headers):
    app.state.settings = app.state.settings.model_copy(
        update={"admin_role": "admin"},
    )
    res = await client.get("/api/admin/users", headers=admin_headers)
    assert res.status_code == 200


# -- List ----------------------------------------------------------------------

async def test_list_returns_provider_users(client, identity_provider, admin_headers):
    identity_provider.users = [
        {"id": str(uuid4()), "email": "a@tintafresca.edu"},
        {"id": str(uuid4()), "email": "b@tintafresca.edu"},
    ]

    res = await client.get("/api/admin/users", headers=admin_headers)

    assert res.status_code == 200
    assert [u["email"] for u in res.json()] == [
        "a@tintafresca.edu", "b@tintafresca.edu",
    ]


async def test_list_provider_failure_passes_message_through(
    client, identity_provider, admin_headers,
):
    identity_provider.admin_failure = IdentityProviderError(
        "User not allowed", "http_error", status_code=403,
    )

    res = await client.get("/api/admin/users", headers=admin_headers)

    assert res.status_code == 500
    assert res.json()["error"]["code"] == "IDENTITY_PROVIDER_ERROR"
    assert res.json()["error"]["message"] == "User not allowed"


# -- Create --------------------------------------------------------------------

async def test_create_user_returns_201(client, identity_provider, admin_headers):
    res = await client.post(
        "/api/admin/users",
        json={"email": "nuevo@tintafresca.edu", "password": "secreto1", "name": " Luis "},
        headers=admin_headers,
    )

    assert res.status_code == 201
    body = res.json()
    assert body["email"] == "nuevo@tintafresca.edu"
    assert body["user_metadata"] == {"name": "Luis"}
    assert ("create_user", "nuevo@tintafresca.edu") in identity_provider.calls


async def test_create_user_invalid_email_is_bad_request(
    client, identity_provider, admin_headers,
):
    res = await client.post(
        "/api/admin/users",
        json={"email": "not-an-email", "password": "secreto1"},
        headers=admin_headers,
    )
    assert res.status_code == 400
    assert identity_provider.admin_calls() == []


async def test_create_user_short_password_is_bad_request(client, admin_headers):
    res = await client.post(
        "/api/admin/users",
        json={"email": "nuevo@tintafresca.edu", "password": "123"},
        headers=admin_headers,
    )
    assert res.status_code == 400


# -- Delete --------------------------------------------------------------------

async def test_delete_user_returns_204(client, identity_provider, admin_headers):
    user_id = str(uuid4())
    identity_provider.users = [{"id": user_id, "email": "x@tintafresca.edu"}]

    res = await client.delete(f"/api/admin/users/{user_id}", headers=admin_headers)

    assert res.status_code == 204
    assert res.content == b""
    assert identity_provider.users == []


async def test_delete_unknown_user_returns_404(client, admin_headers):
    res = await client.delete(f"/api/admin/users/{uuid4()}", headers=admin_headers)
    assert res.status_code == 404


async def test_delete_provider_failure_is_500(client, identity_provider, admin_headers):
    identity_provider.admin_failure = IdentityProviderError(
        "Database error deleting user", "http_error", status_code=500,
    )

    res = await client.delete(f"/api/admin/users/{uuid4()}", headers=admin_headers)

    assert res.status_code == 500
    assert res.json()["error"]["message"] == "Database error deleting user"
