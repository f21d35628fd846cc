"""In-memory verifier state: registered commitments and live challenges."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from typing import Dict, List, Optional

from .crypto import ChallengeCommitment, Commitment
from .errors import InvalidAuthId, UserNotFound

logger = logging.getLogger(__name__)


@dataclass
class UserRecord:
    """Server-side state for one user's most recent authentication attempt."""

    username: str
    commitment: Commitment
    challenge_commitment: Optional[ChallengeCommitment] = None
    challenge: Optional[int] = None
    auth_id: Optional[str] = None

    @property
    def challenged(self) -> bool:
        return self.auth_id is not None


class VerifierStore:
    """Two maps, each behind its own lock.

    ``_users`` maps username to :class:`UserRecord`; ``_auth_ids`` maps an
    outstanding auth id to the username it was issued for. A lock is never
    held while the other is acquired.
    """

    def __init__(self) -> None:
        self._users: Dict[str, UserRecord] = {}
        self._users_lock = threading.Lock()
        self._auth_ids: Dict[str, str] = {}
        self._auth_ids_lock = threading.Lock()

    def register(self, username: str, commitment: Commitment) -> None:
        # Re-registration replaces the previous secret without any check.
        with self._users_lock:
            previous = self._users.get(username)
            self._users[username] = UserRecord(username=username, commitment=commitment)
        if previous is not None:
            logger.info("Replaced registration for user %r", username)
            if previous.auth_id is not None:
                self._unbind(previous.auth_id)
        else:
            logger.info("Registered user %r", username)

    def begin_challenge(
        self,
        username: str,
        challenge_commitment: ChallengeCommitment,
        challenge: int,
        auth_id: str,
    ) -> None:
        with self._auth_ids_lock:
            if auth_id in self._auth_ids:
                raise ValueError("Auth id already in use")
            self._auth_ids[auth_id] = username

        with self._users_lock:
            record = self._users.get(username)
            if record is not None:
                superseded = record.auth_id
                record.challenge_commitment = challenge_commitment
                record.challenge = challenge
                record.auth_id = auth_id

        if record is None:
            self._unbind(auth_id)
            raise UserNotFound(username)
        if superseded is not None:
            self._unbind(superseded)
            logger.info("Challenge %s for user %r superseded by %s", superseded, username, auth_id)

    def resolve_challenge(self, auth_id: str) -> UserRecord:
        """Consume ``auth_id`` and return a snapshot of the bound user's record."""

        with self._auth_ids_lock:
            username = self._auth_ids.pop(auth_id, None)
        if username is None:
            raise InvalidAuthId(auth_id)

        with self._users_lock:
            record = self._users.get(username)
            if record is None or record.auth_id != auth_id:
                raise InvalidAuthId(auth_id)
            snapshot = replace(record)
            record.auth_id = None
        return snapshot

    def get(self, username: str) -> Optional[UserRecord]:
        with self._users_lock:
            record = self._users.get(username)
            return replace(record) if record is not None else None

    def pending_challenges(self) -> List[str]:
        with self._auth_ids_lock:
            return list(self._auth_ids)

    def _unbind(self, auth_id: str) -> None:
        with self._auth_ids_lock:
            self._auth_ids.pop(auth_id, None)

    def __contains__(self, username: object) -> bool:
        with self._users_lock:
            return username in self._users

    def __len__(self) -> int:
        with self._users_lock:
            return len(self._users)


__all__ = ["UserRecord", "VerifierStore"]
