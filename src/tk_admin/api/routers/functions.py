"""
tk_admin.api.routers.functions

HTTP boundary for the admin functions (`/functions/v1/*`).

Responsibilities:
- Answer CORS preflight requests.
- Hand request inputs and the identity backend to the handlers.
- Convert every failure into the function's JSON error envelope with CORS headers.

Envelopes:
- invite-user / set-admin-role: `{"success": false, "error": ...}`
- delete-user: `{"error": ...}` (no `success` field; existing callers depend on it)
"""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_200_OK,
    HTTP_400_BAD_REQUEST,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from tk_admin.api.deps import identity_backend, settings_from_app
from tk_admin.errors import FunctionError
from tk_admin.functions.common import CORS_HEADERS
from tk_admin.functions.delete_user import delete_user
from tk_admin.functions.invite_user import invite_user
from tk_admin.functions.set_admin_role import set_admin_role
from tk_admin.identity.ports import IdentityBackend
from tk_admin.observability.logging import get_logger
from tk_admin.settings import Settings

log = get_logger(__name__)

router = APIRouter(prefix="/functions/v1", tags=["functions"])


def _error(message: str, status_code: int, *, success_flag: bool) -> JSONResponse:
    body: dict[str, Any] = {"success": False, "error": message} if success_flag else {"error": message}
    return JSONResponse(body, status_code=status_code, headers=CORS_HEADERS)


async def _respond(
    function: str,
    call: Awaitable[dict[str, Any]],
    *,
    success_flag: bool,
    fallback_status: int,
    fallback_message: str,
) -> JSONResponse:
    try:
        payload = await call
    except FunctionError as e:
        if e.status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
            log.error("function_failed", function=function, status=e.status_code, error=e.message)
        else:
            log.warning("function_rejected", function=function, status=e.status_code, error=e.message)
        return _error(e.message, e.status_code, success_flag=success_flag)
    except Exception as e:
        log.exception("function_crashed", function=function)
        return _error(str(e) or fallback_message, fallback_status, success_flag=success_flag)
    return JSONResponse(payload, status_code=HTTP_200_OK, headers=CORS_HEADERS)


def _preflight() -> Response:
    return Response(status_code=HTTP_200_OK, headers=CORS_HEADERS)


@router.options("/invite-user")
@router.options("/delete-user")
@router.options("/set-admin-role")
async def preflight() -> Response:
    return _preflight()


@router.post("/invite-user")
async def invite_user_endpoint(
    request: Request,
    backend: IdentityBackend = Depends(identity_backend),
    settings: Settings = Depends(settings_from_app),
) -> JSONResponse:
    return await _respond(
        "invite-user",
        invite_user(
            backend=backend,
            authorization=request.headers.get("authorization"),
            raw_body=await request.body(),
            origin=request.headers.get("origin"),
            referer=request.headers.get("referer"),
            password_reset_path=settings.password_reset_path,
        ),
        success_flag=True,
        fallback_status=HTTP_400_BAD_REQUEST,
        fallback_message="failed to send invitation",
    )


@router.post("/delete-user")
async def delete_user_endpoint(
    request: Request,
    backend: IdentityBackend = Depends(identity_backend),
) -> JSONResponse:
    return await _respond(
        "delete-user",
        delete_user(
            backend=backend,
            authorization=request.headers.get("authorization"),
            raw_body=await request.body(),
        ),
        success_flag=False,
        fallback_status=HTTP_500_INTERNAL_SERVER_ERROR,
        fallback_message="unknown error",
    )


@router.post("/set-admin-role")
async def set_admin_role_endpoint(
    request: Request,
    backend: IdentityBackend = Depends(identity_backend),
) -> JSONResponse:
    return await _respond(
        "set-admin-role",
        set_admin_role(
            backend=backend,
            authorization=request.headers.get("authorization"),
            raw_body=await request.body(),
        ),
        success_flag=True,
        fallback_status=HTTP_500_INTERNAL_SERVER_ERROR,
        fallback_message="failed to change role",
    )


# --- Module Notes -----------------------------------------------------------
# Handlers stay framework-agnostic (see `tk_admin.functions`); this module is the only
# place that knows about status codes and envelopes on the wire.
