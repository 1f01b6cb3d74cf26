"""
tk_admin.errors

Error taxonomy shared by the admin functions.

Responsibilities:
- Name the failure classes a handler can raise (authn, authz, input, internal).
- Carry the HTTP status each class maps to at the HTTP boundary.
- Model failures reported by the identity service.
"""

from __future__ import annotations

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_500_INTERNAL_SERVER_ERROR,
)


class FunctionError(Exception):
    """
    Base class for failures a handler reports to its caller.
    """

    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class Unauthenticated(FunctionError):
    status_code = HTTP_401_UNAUTHORIZED


class PermissionDenied(FunctionError):
    status_code = HTTP_403_FORBIDDEN


class InvalidArgument(FunctionError):
    status_code = HTTP_400_BAD_REQUEST


class Internal(FunctionError):
    status_code = HTTP_500_INTERNAL_SERVER_ERROR


class IdentityServiceError(Exception):
    """
    Raised by identity backends when the upstream service rejects a call
    or cannot be reached.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


# --- Module Notes -----------------------------------------------------------
# Handlers translate `IdentityServiceError` into one of the `FunctionError`
# subclasses; the router never sees backend exceptions directly.
