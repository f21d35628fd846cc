"""Prover side of the protocol and high level registration/login helpers."""

from __future__ import annotations

import logging
from typing import Dict, Protocol, Tuple

from .crypto import ZkpEngine
from .encoding import bytes_to_int, int_to_bytes, secret_from_password
from .errors import AuthError
from .params import GroupParameters

logger = logging.getLogger(__name__)


class Verifier(Protocol):
    """The three verifier operations, local or remote."""

    def register(self, username: str, y1: bytes, y2: bytes) -> None: ...

    def create_challenge(self, username: str, r1: bytes, r2: bytes) -> Tuple[str, bytes]: ...

    def verify_response(self, auth_id: str, s: bytes) -> str: ...


class ProverSession:
    """Runs registration and the challenge-response round against a verifier."""

    def __init__(self, verifier: Verifier, params: GroupParameters) -> None:
        self.verifier = verifier
        self.params = params
        self.engine = ZkpEngine(params)

    def register(self, username: str, secret: int) -> None:
        commitment = self.engine.commit(secret)
        self.verifier.register(username, int_to_bytes(commitment.y1), int_to_bytes(commitment.y2))

    def authenticate(self, username: str, secret_guess: int) -> str:
        """Prove knowledge of ``secret_guess`` and return the session id.

        Failures from the verifier propagate unchanged; a failed attempt is
        never retried because its challenge must not be reused.
        """

        k = self.params.random_below(self.params.q)
        challenge_commitment = self.engine.challenge_commitment(k)
        auth_id, c_bytes = self.verifier.create_challenge(
            username,
            int_to_bytes(challenge_commitment.r1),
            int_to_bytes(challenge_commitment.r2),
        )
        c = bytes_to_int(c_bytes, "c")
        s = self.engine.solve(k, c, secret_guess)
        session_id = self.verifier.verify_response(auth_id, int_to_bytes(s))
        logger.debug("Authenticated %r with auth id %s", username, auth_id)
        return session_id


def register_user(
    verifier: Verifier,
    params: GroupParameters,
    username: str,
    password: str,
) -> Dict[str, object]:
    ProverSession(verifier, params).register(username, secret_from_password(password))
    return {"username": username, "registered": True}


def authenticate(
    verifier: Verifier,
    params: GroupParameters,
    username: str,
    password: str,
) -> Dict[str, object]:
    session = ProverSession(verifier, params)
    try:
        session_id = session.authenticate(username, secret_from_password(password))
    except AuthError as exc:
        return {"username": username, "success": False, "error": exc.kind, "detail": exc.detail}
    return {"username": username, "success": True, "session_id": session_id}


__all__ = ["ProverSession", "Verifier", "authenticate", "register_user"]
