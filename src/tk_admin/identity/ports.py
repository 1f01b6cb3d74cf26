"""
tk_admin.identity.ports

Capability interfaces for the identity & authorization service.

Responsibilities:
- Describe the caller-scoped handle (identity resolution, audit appends).
- Describe the privileged service handle (roles, invites, deletions).
- Describe the backend that hands out both handles per invocation.

Implementations:
- `tk_admin.identity.supabase.SupabaseIdentityBackend` (hosted backend over HTTP)
- `tk_admin.identity.memory.InMemoryIdentityBackend` (deterministic fake)

All methods raise `tk_admin.errors.IdentityServiceError` on upstream failure.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol

from tk_admin.identity.models import CallerIdentity


class CallerClient(Protocol):
    async def resolve_identity(self) -> CallerIdentity | None: ...

    async def append_audit_entry(
        self, *, actor_id: str, action: str, details: dict[str, Any]
    ) -> None: ...


class ServiceClient(Protocol):
    async def list_roles(self, user_id: str, roles: Iterable[str]) -> list[str]: ...

    async def invite_by_email(self, email: str, *, redirect_to: str) -> dict[str, Any]: ...

    async def delete_user(self, user_id: str) -> None: ...

    async def grant_role(self, user_id: str, role: str) -> None: ...

    async def revoke_role(self, user_id: str, role: str) -> None: ...


class IdentityBackend(Protocol):
    def service_client(self) -> ServiceClient: ...

    def caller_client(self, token: str) -> CallerClient: ...


# --- Module Notes -----------------------------------------------------------
# Handlers receive an `IdentityBackend` explicitly and build fresh handles on every
# call, so there is no module-level client anywhere in the package.
