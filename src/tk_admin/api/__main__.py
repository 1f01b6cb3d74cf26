"""
tk_admin.api.__main__

Entrypoint for the TkSolution admin functions service (`python -m tk_admin.api`
or the `tk-admin-api` script).

Responsibilities:
- Load settings, including the hosted backend's URL and keys.
- Create the app; the lifespan hook wires the hosted identity backend.
- Serve it with uvicorn, leaving log formatting to structlog.
"""

from __future__ import annotations

import uvicorn

from tk_admin.api.app import create_app
from tk_admin.settings import get_settings


def main() -> None:
    settings = get_settings()

    uvicorn.run(
        create_app(settings=settings),
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()


# --- Module Notes -----------------------------------------------------------
# In deployment this sits behind the platform's gateway, which forwards the
# caller's `Authorization` header untouched.
