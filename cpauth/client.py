"""HTTP client for a remote verifier, usable wherever a local service is."""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import requests

from .encoding import hex_to_bytes
from .errors import AuthError, InvalidAuthId, MalformedInput, PermissionDenied, UserNotFound
from .params import GroupParameters


class RemoteVerifier:
    """Speak to :func:`cpauth.server.create_app` over HTTP.

    Error responses are turned back into the exception types the in-process
    :class:`~cpauth.service.VerifierService` raises. Transport failures
    propagate as ``requests`` exceptions and are not retried.
    """

    def __init__(
        self,
        base_url: str,
        *,
        session: Optional[Any] = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _post(self, path: str, payload: Dict[str, str], subject: str) -> Dict[str, Any]:
        response = self.session.post(f"{self.base_url}{path}", json=payload, timeout=self.timeout)
        return _unwrap(response, subject)

    def parameters(self) -> GroupParameters:
        response = self.session.get(f"{self.base_url}/parameters", timeout=self.timeout)
        return GroupParameters.from_dict(_unwrap(response, "parameters"))

    def check_parameters(self, expected: GroupParameters) -> None:
        if self.parameters() != expected:
            raise ValueError("Verifier uses different group parameters")

    def register(self, username: str, y1: bytes, y2: bytes) -> None:
        self._post("/register", {"username": username, "y1": y1.hex(), "y2": y2.hex()}, username)

    def create_challenge(self, username: str, r1: bytes, r2: bytes) -> Tuple[str, bytes]:
        body = self._post(
            "/challenge",
            {"username": username, "r1": r1.hex(), "r2": r2.hex()},
            username,
        )
        return body["auth_id"], hex_to_bytes(body["c"], "c")

    def verify_response(self, auth_id: str, s: bytes) -> str:
        body = self._post("/verify", {"auth_id": auth_id, "s": s.hex()}, auth_id)
        return body["session_id"]


def _unwrap(response: Any, subject: str) -> Dict[str, Any]:
    if response.status_code < 400:
        return response.json()

    try:
        body = response.json()
    except ValueError:
        body = {}
    kind = body.get("error") if isinstance(body, dict) else None
    detail = body.get("detail") if isinstance(body, dict) else None

    if kind == UserNotFound.kind:
        raise UserNotFound(subject)
    if kind == InvalidAuthId.kind:
        raise InvalidAuthId(subject)
    if kind == PermissionDenied.kind:
        raise PermissionDenied(detail)
    if kind == MalformedInput.kind or response.status_code in (400, 422):
        raise MalformedInput(str(detail) if detail else None)
    raise AuthError(f"Verifier returned HTTP {response.status_code}")


__all__ = ["RemoteVerifier"]
