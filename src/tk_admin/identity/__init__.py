"""
tk_admin.identity

Identity & authorization service boundary.

Responsibilities:
- Caller and role models.
- Capability interfaces plus the hosted-backend and in-memory implementations.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing here verifies tokens; resolution is always delegated to the identity service.
