"""Verifier operations: register, create a challenge, verify a response."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from .constants import IDENTIFIER_LENGTH
from .crypto import ChallengeCommitment, Commitment, ZkpEngine
from .encoding import bytes_to_int, int_to_bytes
from .errors import MalformedInput, PermissionDenied
from .params import GroupParameters
from .store import VerifierStore

logger = logging.getLogger(__name__)


class VerifierService:
    """Server side of the protocol.

    Integers cross this boundary as big-endian unsigned byte strings, the
    same representation used on the wire. Math is delegated to
    :class:`ZkpEngine` and state to :class:`VerifierStore`.
    """

    def __init__(
        self,
        params: GroupParameters,
        store: Optional[VerifierStore] = None,
        *,
        identifier_length: int = IDENTIFIER_LENGTH,
    ) -> None:
        self.params = params
        self.engine = ZkpEngine(params)
        self.store = store if store is not None else VerifierStore()
        self.identifier_length = identifier_length

    def register(self, username: str, y1: bytes, y2: bytes) -> None:
        _check_username(username)
        commitment = Commitment(y1=bytes_to_int(y1, "y1"), y2=bytes_to_int(y2, "y2"))
        self.store.register(username, commitment)

    def create_challenge(self, username: str, r1: bytes, r2: bytes) -> Tuple[str, bytes]:
        _check_username(username)
        challenge_commitment = ChallengeCommitment(
            r1=bytes_to_int(r1, "r1"),
            r2=bytes_to_int(r2, "r2"),
        )
        c = self.params.random_below(self.params.q)
        auth_id = self.params.random_identifier(self.identifier_length)
        self.store.begin_challenge(username, challenge_commitment, c, auth_id)
        logger.info("Issued challenge %s for user %r", auth_id, username)
        return auth_id, int_to_bytes(c)

    def verify_response(self, auth_id: str, s: bytes) -> str:
        record = self.store.resolve_challenge(auth_id)
        response = bytes_to_int(s, "s")

        assert record.challenge_commitment is not None and record.challenge is not None
        if not self.engine.verify(
            record.challenge_commitment,
            record.commitment,
            record.challenge,
            response,
        ):
            logger.warning("Rejected proof for user %r (auth id %s)", record.username, auth_id)
            raise PermissionDenied(f"Proof for user '{record.username}' was rejected")

        session_id = self.params.random_identifier(self.identifier_length)
        logger.info("User %r authenticated (auth id %s)", record.username, auth_id)
        return session_id


def _check_username(username: str) -> None:
    if not isinstance(username, str) or not username:
        raise MalformedInput("Username must be a non-empty string")


__all__ = ["VerifierService"]
