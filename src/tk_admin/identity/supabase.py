"""
tk_admin.identity.supabase

HTTP client boundary for the hosted backend (Supabase auth + PostgREST).

Responsibilities:
- Resolve bearer tokens to callers via the auth server (`/auth/v1/user`).
- Query and mutate role assignments in the `user_roles` table with the service-role key.
- Call the auth admin API for invitations and permanent deletions.
- Append audit entries to `activity_logs` with the caller's own credentials.

No retries, backoff or custom timeouts are applied; upstream failures surface as
`IdentityServiceError` immediately.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import httpx

from tk_admin.errors import IdentityServiceError
from tk_admin.identity.models import CallerIdentity
from tk_admin.settings import Settings

_AUTH = "/auth/v1"
_REST = "/rest/v1"


def _error_message(r: httpx.Response) -> str:
    # Auth server and PostgREST disagree on the error field name.
    try:
        body = r.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("msg", "message", "error_description", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return r.text or f"identity service returned HTTP {r.status_code}"


async def _send(http: httpx.AsyncClient, method: str, url: str, **kwargs: Any) -> httpx.Response:
    try:
        r = await http.request(method, url, **kwargs)
    except httpx.HTTPError as e:
        raise IdentityServiceError(f"identity service unreachable: {e}") from e
    if r.is_error:
        raise IdentityServiceError(_error_message(r), status_code=r.status_code)
    return r


class SupabaseCallerClient:
    """
    Handle scoped to one caller's access token (anon key + bearer token),
    so row-level security applies to everything it writes.
    """

    def __init__(self, *, settings: Settings, http: httpx.AsyncClient, token: str) -> None:
        self._http = http
        self._headers = {
            "apikey": settings.supabase_anon_key,
            "Authorization": f"Bearer {token}",
        }

    async def resolve_identity(self) -> CallerIdentity | None:
        r = await _send(self._http, "GET", f"{_AUTH}/user", headers=self._headers)
        try:
            body = r.json()
        except ValueError as e:
            raise IdentityServiceError("identity service returned a non-JSON user") from e
        if not isinstance(body, dict) or not body.get("id"):
            return None
        return CallerIdentity(id=str(body["id"]), email=body.get("email"))

    async def append_audit_entry(
        self, *, actor_id: str, action: str, details: dict[str, Any]
    ) -> None:
        # `created_at` is assigned by the table default.
        await _send(
            self._http,
            "POST",
            f"{_REST}/activity_logs",
            headers={**self._headers, "Prefer": "return=minimal"},
            json={"user_id": actor_id, "action": action, "details": details},
        )


class SupabaseServiceClient:
    """
    Privileged handle using the service-role key; bypasses row-level security.
    """

    def __init__(self, *, settings: Settings, http: httpx.AsyncClient) -> None:
        self._http = http
        key = settings.supabase_service_role_key
        self._headers = {"apikey": key, "Authorization": f"Bearer {key}"}

    async def list_roles(self, user_id: str, roles: Iterable[str]) -> list[str]:
        wanted = ",".join(str(r) for r in roles)
        r = await _send(
            self._http,
            "GET",
            f"{_REST}/user_roles",
            headers=self._headers,
            params={"select": "role", "user_id": f"eq.{user_id}", "role": f"in.({wanted})"},
        )
        return [str(row["role"]) for row in r.json() or [] if "role" in row]

    async def invite_by_email(self, email: str, *, redirect_to: str) -> dict[str, Any]:
        params = {"redirect_to": redirect_to} if redirect_to else None
        r = await _send(
            self._http,
            "POST",
            f"{_AUTH}/invite",
            headers=self._headers,
            params=params,
            json={"email": email, "data": {}},
        )
        return {"user": r.json()}

    async def delete_user(self, user_id: str) -> None:
        await _send(
            self._http,
            "DELETE",
            f"{_AUTH}/admin/users/{user_id}",
            headers=self._headers,
            json={"should_soft_delete": False},
        )

    async def grant_role(self, user_id: str, role: str) -> None:
        # Relies on the (user_id, role) unique constraint to make grants idempotent.
        await _send(
            self._http,
            "POST",
            f"{_REST}/user_roles",
            headers={**self._headers, "Prefer": "resolution=ignore-duplicates,return=minimal"},
            json={"user_id": user_id, "role": role},
        )

    async def revoke_role(self, user_id: str, role: str) -> None:
        await _send(
            self._http,
            "DELETE",
            f"{_REST}/user_roles",
            headers=self._headers,
            params={"user_id": f"eq.{user_id}", "role": f"eq.{role}"},
        )


class SupabaseIdentityBackend:
    def __init__(self, *, settings: Settings, http: httpx.AsyncClient) -> None:
        self._settings = settings
        self._http = http

    def service_client(self) -> SupabaseServiceClient:
        return SupabaseServiceClient(settings=self._settings, http=self._http)

    def caller_client(self, token: str) -> SupabaseCallerClient:
        return SupabaseCallerClient(settings=self._settings, http=self._http, token=token)


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=settings.supabase_url.rstrip("/"))


# --- Module Notes -----------------------------------------------------------
# The `{"user": ...}` shape returned by `invite_by_email` mirrors what the platform's
# JS SDK hands back, so existing front-ends reading `data.user` keep working.
