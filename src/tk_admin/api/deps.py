"""
tk_admin.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings and the identity backend.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from fastapi import Request

from tk_admin.identity.ports import IdentityBackend
from tk_admin.settings import Settings


def settings_from_app(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[attr-defined]


def identity_backend(request: Request) -> IdentityBackend:
    # Set by `create_app` (injected) or by the lifespan hook (hosted backend).
    return request.app.state.identity_backend  # type: ignore[attr-defined]


# --- Module Notes -----------------------------------------------------------
# Handlers get the backend through these accessors, never through a module-level client.
