"""
tk_admin.api.routers.health

Liveness endpoint (`/healthz`).
"""

from __future__ import annotations

from fastapi import APIRouter

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    # Liveness only: the identity service is not probed.
    return {"status": "ok"}


# --- Module Notes -----------------------------------------------------------
# No readiness probe: the only dependency is the hosted identity service, checked per request.
