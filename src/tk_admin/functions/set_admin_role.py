"""
tk_admin.functions.set_admin_role

Grant or revoke the `admin` role. Restricted to `tk_master` callers.
"""

from __future__ import annotations

from typing import Any

from tk_admin.errors import IdentityServiceError, Internal, InvalidArgument
from tk_admin.functions.common import authenticate, read_json_object, require_any_role
from tk_admin.identity.models import Role
from tk_admin.identity.ports import IdentityBackend
from tk_admin.observability.logging import get_logger

log = get_logger(__name__)


async def set_admin_role(
    *,
    backend: IdentityBackend,
    authorization: str | None,
    raw_body: bytes,
) -> dict[str, Any]:
    _, caller = await authenticate(backend, authorization)
    service = backend.service_client()

    await require_any_role(
        service,
        caller,
        (Role.tk_master,),
        denial="only tk_master may manage administrators",
    )

    body = read_json_object(raw_body)
    user_id = body.get("userId")
    if not user_id or not isinstance(user_id, str):
        raise InvalidArgument("userId is required")
    make_admin = body.get("admin")
    if not isinstance(make_admin, bool):
        raise InvalidArgument("admin must be a boolean")

    try:
        if make_admin:
            await service.grant_role(user_id, Role.admin)
        else:
            await service.revoke_role(user_id, Role.admin)
    except IdentityServiceError as e:
        log.error("role_change_failed", caller_id=caller.id, target_id=user_id, reason=e.message)
        raise Internal(e.message) from e

    log.info("admin_role_changed", caller_id=caller.id, target_id=user_id, admin=make_admin)
    message = "Administrator role granted" if make_admin else "Administrator role revoked"
    return {"success": True, "message": message}


# --- Module Notes -----------------------------------------------------------
# Role changes are not audited, matching how the admin UI toggled roles before.
