"""
tests.test_supabase_client

Wire-level checks of the hosted-backend client using `httpx.MockTransport`.
"""

from __future__ import annotations

import json

import httpx
import pytest

from tk_admin.api.app import create_app
from tk_admin.errors import IdentityServiceError
from tk_admin.identity.models import PRIVILEGED_ROLES, CallerIdentity
from tk_admin.identity.supabase import SupabaseIdentityBackend
from tk_admin.settings import Settings

BASE_URL = "https://proj.supabase.co"


def _settings() -> Settings:
    return Settings(
        env="test",
        supabase_url=BASE_URL,
        supabase_anon_key="anon-key",
        supabase_service_role_key="service-key",
    )


def _backend(handler, seen: list[httpx.Request]) -> SupabaseIdentityBackend:
    def record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    http = httpx.AsyncClient(transport=httpx.MockTransport(record), base_url=BASE_URL)
    return SupabaseIdentityBackend(settings=_settings(), http=http)


@pytest.mark.asyncio
async def test_resolve_identity_uses_caller_token() -> None:
    seen: list[httpx.Request] = []
    backend = _backend(lambda r: httpx.Response(200, json={"id": "u1", "email": "a@co.com"}), seen)

    identity = await backend.caller_client("caller-jwt").resolve_identity()

    assert identity == CallerIdentity(id="u1", email="a@co.com")
    (req,) = seen
    assert req.method == "GET"
    assert req.url.path == "/auth/v1/user"
    assert req.headers["authorization"] == "Bearer caller-jwt"
    assert req.headers["apikey"] == "anon-key"


@pytest.mark.asyncio
async def test_resolve_identity_failure_carries_service_message() -> None:
    seen: list[httpx.Request] = []
    backend = _backend(
        lambda r: httpx.Response(401, json={"code": 401, "msg": "invalid JWT"}), seen
    )

    with pytest.raises(IdentityServiceError) as exc:
        await backend.caller_client("bad").resolve_identity()

    assert exc.value.message == "invalid JWT"
    assert exc.value.status_code == 401


@pytest.mark.asyncio
async def test_non_json_user_body_raises_identity_error() -> None:
    backend = _backend(lambda r: httpx.Response(200, text="<html>gateway</html>"), [])

    with pytest.raises(IdentityServiceError):
        await backend.caller_client("caller-jwt").resolve_identity()


@pytest.mark.asyncio
async def test_non_json_user_body_is_an_invalid_token_over_http() -> None:
    backend = _backend(lambda r: httpx.Response(200, text="<html>gateway</html>"), [])
    app = create_app(settings=_settings(), identity_backend=backend)

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        r = await client.post(
            "/functions/v1/delete-user",
            json={"userId": "u2"},
            headers={"Authorization": "Bearer caller-jwt"},
        )

    assert r.status_code == 401
    assert r.json() == {"error": "not authenticated: invalid token"}


@pytest.mark.asyncio
async def test_unreachable_service_raises_identity_error() -> None:
    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    backend = _backend(boom, [])

    with pytest.raises(IdentityServiceError):
        await backend.service_client().list_roles("u1", PRIVILEGED_ROLES)


@pytest.mark.asyncio
async def test_list_roles_filters_with_service_key() -> None:
    seen: list[httpx.Request] = []
    backend = _backend(lambda r: httpx.Response(200, json=[{"role": "admin"}]), seen)

    roles = await backend.service_client().list_roles("u1", PRIVILEGED_ROLES)

    assert roles == ["admin"]
    (req,) = seen
    assert req.url.path == "/rest/v1/user_roles"
    assert req.url.params["select"] == "role"
    assert req.url.params["user_id"] == "eq.u1"
    assert req.url.params["role"] == "in.(admin,tk_master)"
    assert req.headers["authorization"] == "Bearer service-key"


@pytest.mark.asyncio
async def test_invite_passes_redirect_and_wraps_user() -> None:
    seen: list[httpx.Request] = []
    backend = _backend(lambda r: httpx.Response(200, json={"id": "u9", "email": "n@co.com"}), seen)

    data = await backend.service_client().invite_by_email(
        "n@co.com", redirect_to="https://app.co/update-password"
    )

    assert data == {"user": {"id": "u9", "email": "n@co.com"}}
    (req,) = seen
    assert req.method == "POST"
    assert req.url.path == "/auth/v1/invite"
    assert req.url.params["redirect_to"] == "https://app.co/update-password"
    assert json.loads(req.content)["email"] == "n@co.com"


@pytest.mark.asyncio
async def test_invite_without_redirect_sends_no_param() -> None:
    seen: list[httpx.Request] = []
    backend = _backend(lambda r: httpx.Response(200, json={"id": "u9"}), seen)

    await backend.service_client().invite_by_email("n@co.com", redirect_to="")

    assert "redirect_to" not in seen[0].url.params


@pytest.mark.asyncio
async def test_delete_user_is_a_hard_delete() -> None:
    seen: list[httpx.Request] = []
    backend = _backend(lambda r: httpx.Response(200, json={}), seen)

    await backend.service_client().delete_user("u2")

    (req,) = seen
    assert req.method == "DELETE"
    assert req.url.path == "/auth/v1/admin/users/u2"
    assert json.loads(req.content) == {"should_soft_delete": False}


@pytest.mark.asyncio
async def test_audit_entry_is_written_with_caller_credentials() -> None:
    seen: list[httpx.Request] = []
    backend = _backend(lambda r: httpx.Response(201), seen)

    await backend.caller_client("caller-jwt").append_audit_entry(
        actor_id="u1", action="user_invited", details={"invited_email": "n@co.com"}
    )

    (req,) = seen
    assert req.url.path == "/rest/v1/activity_logs"
    assert req.headers["authorization"] == "Bearer caller-jwt"
    assert json.loads(req.content) == {
        "user_id": "u1",
        "action": "user_invited",
        "details": {"invited_email": "n@co.com"},
    }


@pytest.mark.asyncio
async def test_revoke_role_targets_single_assignment() -> None:
    seen: list[httpx.Request] = []
    backend = _backend(lambda r: httpx.Response(204), seen)

    await backend.service_client().revoke_role("u3", "admin")

    (req,) = seen
    assert req.method == "DELETE"
    assert req.url.params["user_id"] == "eq.u3"
    assert req.url.params["role"] == "eq.admin"


@pytest.mark.asyncio
async def test_invite_user_end_to_end_over_hosted_backend() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/auth/v1/user":
            return httpx.Response(200, json={"id": "admin-1", "email": "admin@co.com"})
        if path == "/rest/v1/user_roles":
            return httpx.Response(200, json=[{"role": "admin"}])
        if path == "/auth/v1/invite":
            return httpx.Response(200, json={"id": "new-1", "email": "new@co.com"})
        if path == "/rest/v1/activity_logs":
            return httpx.Response(201)
        return httpx.Response(404, json={"message": "unexpected"})

    seen: list[httpx.Request] = []
    backend = _backend(handler, seen)
    app = create_app(settings=_settings(), identity_backend=backend)

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        r = await client.post(
            "/functions/v1/invite-user",
            json={"email": "new@co.com"},
            headers={"Authorization": "Bearer caller-jwt", "Origin": "https://app.co"},
        )

    assert r.status_code == 200
    assert r.json()["data"] == {"user": {"id": "new-1", "email": "new@co.com"}}
    assert [req.url.path for req in seen] == [
        "/auth/v1/user",
        "/rest/v1/user_roles",
        "/auth/v1/invite",
        "/rest/v1/activity_logs",
    ]


# --- Module Notes -----------------------------------------------------------
# No network: every request is answered by `httpx.MockTransport`.
