"""
tk_admin.functions.delete_user

Permanently remove an account.

Rules:
- Callers need `admin` or `tk_master`.
- Nobody may delete their own account.
- Only `tk_master` may delete privileged accounts (`admin` / `tk_master`).

No audit entry is written for deletions.
"""

from __future__ import annotations

from typing import Any

from tk_admin.errors import IdentityServiceError, Internal, InvalidArgument, PermissionDenied
from tk_admin.functions.common import authenticate, read_json_object, require_any_role
from tk_admin.identity.models import PRIVILEGED_ROLES, Role
from tk_admin.identity.ports import IdentityBackend
from tk_admin.observability.logging import get_logger

log = get_logger(__name__)


async def delete_user(
    *,
    backend: IdentityBackend,
    authorization: str | None,
    raw_body: bytes,
) -> dict[str, Any]:
    _, caller = await authenticate(backend, authorization)
    service = backend.service_client()

    caller_roles = await require_any_role(
        service,
        caller,
        PRIVILEGED_ROLES,
        denial="permission denied: only administrators can delete users",
    )

    body = read_json_object(raw_body)
    user_id = body.get("userId")
    if not user_id:
        raise InvalidArgument("userId is required")
    if not isinstance(user_id, str):
        raise InvalidArgument("userId must be a string")
    if user_id == caller.id:
        raise InvalidArgument("cannot delete your own account")

    try:
        target_roles = await service.list_roles(user_id, PRIVILEGED_ROLES)
    except IdentityServiceError as e:
        # Unknown target privilege: refuse rather than risk removing an admin.
        log.error("target_role_lookup_failed", caller_id=caller.id, target_id=user_id, reason=e.message)
        raise Internal(e.message) from e

    if target_roles and Role.tk_master not in caller_roles:
        log.warning("hierarchy_violation", caller_id=caller.id, target_id=user_id)
        raise PermissionDenied("only tk_master may remove administrators")

    log.info("deleting_user", caller_id=caller.id, target_id=user_id)
    try:
        await service.delete_user(user_id)
    except IdentityServiceError as e:
        log.error("delete_failed", caller_id=caller.id, target_id=user_id, reason=e.message)
        raise Internal(e.message) from e

    log.info("user_deleted", caller_id=caller.id, target_id=user_id)
    return {"success": True, "message": "User removed successfully"}


# --- Module Notes -----------------------------------------------------------
# Cascading removal of profile/role rows is done by the identity service, not here.
