"""
tk_admin.functions.invite_user

Invite a new account by email.

Only callers holding the `admin` role may invite. `tk_master` on its own is not
accepted here, unlike `delete_user`; the asymmetry is kept for compatibility with
existing deployments.
"""

from __future__ import annotations

import re
from typing import Any

from tk_admin.errors import IdentityServiceError, InvalidArgument
from tk_admin.functions.common import authenticate, read_json_object, require_any_role
from tk_admin.identity.models import Role
from tk_admin.identity.ports import IdentityBackend
from tk_admin.observability.logging import get_logger

log = get_logger(__name__)

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

AUDIT_ACTION = "user_invited"


def redirect_target(origin: str | None, referer: str | None, *, path: str) -> str:
    """
    Build the post-invite landing URL on the caller's own origin.

    `Origin` wins; otherwise the scheme and host of `Referer` are used. With
    neither header there is no redirect at all (empty string).
    """

    base = origin or ("/".join(referer.split("/")[:3]) if referer else "")
    if not base:
        return ""
    return f"{base.rstrip('/')}{path}"


async def invite_user(
    *,
    backend: IdentityBackend,
    authorization: str | None,
    raw_body: bytes,
    origin: str | None = None,
    referer: str | None = None,
    password_reset_path: str = "/update-password",
) -> dict[str, Any]:
    caller_client, caller = await authenticate(backend, authorization)
    service = backend.service_client()

    await require_any_role(
        service,
        caller,
        (Role.admin,),
        denial="access denied: only administrators may invite users",
    )

    body = read_json_object(raw_body)
    email = body.get("email")
    if not email:
        raise InvalidArgument("email is required")
    if not isinstance(email, str) or not EMAIL_RE.fullmatch(email):
        raise InvalidArgument("invalid email")

    redirect_to = redirect_target(origin, referer, path=password_reset_path)
    log.info("inviting_user", caller_id=caller.id, redirect_to=redirect_to)

    try:
        data = await service.invite_by_email(email, redirect_to=redirect_to)
    except IdentityServiceError as e:
        log.warning("invite_failed", caller_id=caller.id, reason=e.message)
        raise InvalidArgument(e.message) from e

    try:
        await caller_client.append_audit_entry(
            actor_id=caller.id, action=AUDIT_ACTION, details={"invited_email": email}
        )
    except IdentityServiceError as e:
        # Best effort: the invitation already went out.
        log.warning("audit_write_failed", caller_id=caller.id, action=AUDIT_ACTION, reason=e.message)

    log.info("user_invited", caller_id=caller.id)
    return {"success": True, "message": f"Invitation sent to {email}", "data": data}


# --- Module Notes -----------------------------------------------------------
# The email pattern is matched against the whole string; a trailing newline is not an address.
