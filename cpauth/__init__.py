"""Password authentication with the Chaum-Pedersen zero-knowledge protocol."""

from .auth import ProverSession, authenticate, register_user
from .crypto import ChallengeCommitment, Commitment, ZkpEngine, mod_pow, solve, verify
from .encoding import bytes_to_int, int_to_bytes, secret_from_password
from .errors import AuthError, InvalidAuthId, MalformedInput, PermissionDenied, UserNotFound
from .params import GroupParameters
from .service import VerifierService
from .store import UserRecord, VerifierStore

__all__ = [
    "authenticate",
    "register_user",
    "ProverSession",
    "ChallengeCommitment",
    "Commitment",
    "ZkpEngine",
    "mod_pow",
    "solve",
    "verify",
    "bytes_to_int",
    "int_to_bytes",
    "secret_from_password",
    "AuthError",
    "InvalidAuthId",
    "MalformedInput",
    "PermissionDenied",
    "UserNotFound",
    "GroupParameters",
    "VerifierService",
    "UserRecord",
    "VerifierStore",
]
