"""
tk_admin.api.routers

FastAPI routers.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Routers are mounted in `api.app.create_app`.
