"""
tk_admin.functions

Privileged admin functions (invite, delete, role management).

Responsibilities:
- Framework-agnostic handlers taking an explicit `IdentityBackend`.
- Authentication and role guard clauses shared between handlers.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Routers import handler modules directly; nothing is re-exported here.
