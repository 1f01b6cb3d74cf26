"""
tk_admin.identity.memory

In-memory identity backend.

Responsibilities:
- Provide a deterministic stand-in for the hosted identity service (tests, local runs).
- Record every side effect (invites, deletions, role changes, audit entries) for inspection.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from tk_admin.errors import IdentityServiceError
from tk_admin.identity.models import AuditEntry, CallerIdentity


class InMemoryIdentityBackend:
    """
    Users, sessions and role assignments live in plain dicts/sets.

    `fail_audit` and `unavailable_role_lookups` let tests simulate partial outages.
    """

    def __init__(self) -> None:
        self.users: dict[str, str] = {}
        self.tokens: dict[str, str] = {}
        self.roles: set[tuple[str, str]] = set()
        self.invitations: list[dict[str, str]] = []
        self.deleted: list[str] = []
        self.audit: list[AuditEntry] = []
        self.fail_audit = False
        self.unavailable_role_lookups: set[str] = set()

    def add_user(
        self, email: str, *, roles: Iterable[str] = (), token: str | None = None
    ) -> str:
        user_id = str(uuid.uuid4())
        self.users[user_id] = email
        for role in roles:
            self.roles.add((user_id, str(role)))
        if token is not None:
            self.tokens[token] = user_id
        return user_id

    def roles_of(self, user_id: str) -> set[str]:
        return {role for uid, role in self.roles if uid == user_id}

    def service_client(self) -> InMemoryServiceClient:
        return InMemoryServiceClient(self)

    def caller_client(self, token: str) -> InMemoryCallerClient:
        return InMemoryCallerClient(self, token)


class InMemoryCallerClient:
    def __init__(self, backend: InMemoryIdentityBackend, token: str) -> None:
        self._backend = backend
        self._token = token

    async def resolve_identity(self) -> CallerIdentity | None:
        user_id = self._backend.tokens.get(self._token)
        if user_id is None or user_id not in self._backend.users:
            raise IdentityServiceError("invalid JWT", status_code=401)
        return CallerIdentity(id=user_id, email=self._backend.users[user_id])

    async def append_audit_entry(
        self, *, actor_id: str, action: str, details: dict[str, Any]
    ) -> None:
        if self._backend.fail_audit:
            raise IdentityServiceError("activity_logs unavailable", status_code=503)
        self._backend.audit.append(
            AuditEntry(
                user_id=actor_id,
                action=action,
                details=dict(details),
                created_at=datetime.now(tz=UTC),
            )
        )


class InMemoryServiceClient:
    def __init__(self, backend: InMemoryIdentityBackend) -> None:
        self._backend = backend

    async def list_roles(self, user_id: str, roles: Iterable[str]) -> list[str]:
        if user_id in self._backend.unavailable_role_lookups:
            raise IdentityServiceError("user_roles unavailable", status_code=503)
        wanted = {str(r) for r in roles}
        return sorted(r for r in self._backend.roles_of(user_id) if r in wanted)

    async def invite_by_email(self, email: str, *, redirect_to: str) -> dict[str, Any]:
        if email in self._backend.users.values():
            raise IdentityServiceError(
                "A user with this email address has already been registered",
                status_code=422,
            )
        user_id = self._backend.add_user(email)
        self._backend.invitations.append({"email": email, "redirect_to": redirect_to})
        return {"user": {"id": user_id, "email": email}}

    async def delete_user(self, user_id: str) -> None:
        if self._backend.users.pop(user_id, None) is None:
            raise IdentityServiceError("User not found", status_code=404)
        # Dependent rows go with the account, like the hosted backend's cascade.
        self._backend.roles = {(u, r) for u, r in self._backend.roles if u != user_id}
        self._backend.tokens = {t: u for t, u in self._backend.tokens.items() if u != user_id}
        self._backend.deleted.append(user_id)

    async def grant_role(self, user_id: str, role: str) -> None:
        if user_id not in self._backend.users:
            raise IdentityServiceError("user_roles_user_id_fkey violation", status_code=409)
        self._backend.roles.add((user_id, str(role)))

    async def revoke_role(self, user_id: str, role: str) -> None:
        self._backend.roles.discard((user_id, str(role)))


# --- Module Notes -----------------------------------------------------------
# Error messages mimic the hosted service's wording so envelope assertions match both backends.
