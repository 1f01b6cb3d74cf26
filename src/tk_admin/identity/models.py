"""
tk_admin.identity.models

Identity domain models.

Responsibilities:
- Define the resolved caller type (`CallerIdentity`).
- Define the role names consulted by the admin functions.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


class Role(enum.StrEnum):
    # Stored verbatim in the `user_roles.role` column.
    admin = "admin"
    tk_master = "tk_master"


PRIVILEGED_ROLES: tuple[Role, ...] = (Role.admin, Role.tk_master)


@dataclass(frozen=True, slots=True)
class CallerIdentity:
    """
    Authenticated caller as resolved by the identity service.
    """

    id: str
    email: str | None = None


@dataclass(frozen=True, slots=True)
class AuditEntry:
    user_id: str
    action: str
    details: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None


# --- Module Notes -----------------------------------------------------------
# Other roles may exist in `user_roles`; only the two above are ever queried here.
