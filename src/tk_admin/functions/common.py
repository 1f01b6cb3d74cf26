"""
tk_admin.functions.common

Guard clauses shared by the admin functions.

Responsibilities:
- Extract the bearer credential from the `Authorization` header.
- Resolve the caller through a caller-scoped identity handle.
- Look up role assignments and parse request bodies.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from tk_admin.errors import IdentityServiceError, InvalidArgument, PermissionDenied, Unauthenticated
from tk_admin.identity.models import CallerIdentity
from tk_admin.identity.ports import CallerClient, IdentityBackend, ServiceClient
from tk_admin.observability.logging import get_logger

log = get_logger(__name__)

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

NO_TOKEN = "not authenticated: no token"
INVALID_TOKEN = "not authenticated: invalid token"


def bearer_token(authorization: str | None) -> str:
    if authorization is None or not authorization.strip():
        raise Unauthenticated(NO_TOKEN)
    scheme, _, credentials = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not credentials.strip():
        raise Unauthenticated(INVALID_TOKEN)
    return credentials.strip()


async def authenticate(
    backend: IdentityBackend, authorization: str | None
) -> tuple[CallerClient, CallerIdentity]:
    token = bearer_token(authorization)
    caller_client = backend.caller_client(token)
    try:
        identity = await caller_client.resolve_identity()
    except IdentityServiceError as e:
        log.warning("authentication_failed", reason=e.message)
        raise Unauthenticated(INVALID_TOKEN) from e
    if identity is None:
        log.warning("authentication_failed", reason="no user for token")
        raise Unauthenticated(INVALID_TOKEN)
    log.info("caller_authenticated", caller_id=identity.id)
    return caller_client, identity


async def require_any_role(
    service: ServiceClient,
    caller: CallerIdentity,
    roles: Iterable[str],
    *,
    denial: str,
) -> list[str]:
    """
    Return the caller's roles among `roles`, or raise `PermissionDenied`.

    A failed lookup is treated as "no roles".
    """

    try:
        held = await service.list_roles(caller.id, roles)
    except IdentityServiceError as e:
        log.warning("role_lookup_failed", caller_id=caller.id, reason=e.message)
        raise PermissionDenied(denial) from e
    if not held:
        log.warning("permission_denied", caller_id=caller.id)
        raise PermissionDenied(denial)
    return held


def read_json_object(raw: bytes) -> dict[str, Any]:
    try:
        body = json.loads(raw or b"null")
    except ValueError as e:
        raise InvalidArgument("request body must be valid JSON") from e
    if not isinstance(body, dict):
        raise InvalidArgument("request body must be a JSON object")
    return body


# --- Module Notes -----------------------------------------------------------
# Tokens are never logged; only resolved user ids are bound to log events.
