"""Failures reported by the verifier for a single request."""

from __future__ import annotations


class AuthError(Exception):
    """Base class for protocol failures scoped to one request."""

    kind = "AuthError"
    status_code = 400

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail()
        super().__init__(self.detail)

    def default_detail(self) -> str:
        return self.kind


class UserNotFound(AuthError):
    """A challenge was requested for a username that never registered."""

    kind = "UserNotFound"
    status_code = 404

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(f"User '{username}' is not registered")


class InvalidAuthId(AuthError):
    """The auth id was never issued, was already used or has been superseded."""

    kind = "InvalidAuthId"
    status_code = 404

    def __init__(self, auth_id: str) -> None:
        self.auth_id = auth_id
        super().__init__(f"Unknown or expired auth id '{auth_id}'")


class PermissionDenied(AuthError):
    kind = "PermissionDenied"
    status_code = 403

    def default_detail(self) -> str:
        return "Proof verification failed"


class MalformedInput(AuthError, ValueError):
    kind = "MalformedInput"
    status_code = 400


__all__ = [
    "AuthError",
    "InvalidAuthId",
    "MalformedInput",
    "PermissionDenied",
    "UserNotFound",
]
