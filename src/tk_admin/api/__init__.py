"""
tk_admin.api

HTTP API package.

Responsibilities:
- FastAPI app factory and entrypoint.
- Routers exposing the admin functions and health probes.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Importing this package does not build an app; call `api.app.create_app`.
