"""Core arithmetic for the Chaum-Pedersen identification protocol."""

from __future__ import annotations

from dataclasses import dataclass

from .params import GroupParameters


@dataclass(frozen=True)
class Commitment:
    """Registration values ``y1 = alpha^x`` and ``y2 = beta^x``."""

    y1: int
    y2: int


@dataclass(frozen=True)
class ChallengeCommitment:
    """Per-attempt values ``r1 = alpha^k`` and ``r2 = beta^k``."""

    r1: int
    r2: int


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    if exponent < 0:
        raise ValueError("Exponent must be non-negative")
    if modulus < 1:
        raise ValueError("Modulus must be positive")
    return pow(base, exponent, modulus)


def solve(k: int, c: int, x: int, q: int) -> int:
    """Compute the response ``s = (k - c * x) mod q``.

    When ``k < c * x`` the difference is taken the other way round and
    reflected into ``[0, q)`` so that no negative value is formed.
    """

    if q < 1:
        raise ValueError("Subgroup order must be positive")
    cx = c * x
    if k >= cx:
        return (k - cx) % q
    return (q - (cx - k) % q) % q


def verify(
    r1: int,
    r2: int,
    y1: int,
    y2: int,
    c: int,
    s: int,
    alpha: int,
    beta: int,
    p: int,
) -> bool:
    first = r1 == (mod_pow(alpha, s, p) * mod_pow(y1, c, p)) % p
    second = r2 == (mod_pow(beta, s, p) * mod_pow(y2, c, p)) % p
    return first and second


class ZkpEngine:
    """Protocol math bound to one set of group parameters. Holds no session state."""

    def __init__(self, params: GroupParameters) -> None:
        self.params = params

    def commit(self, secret: int) -> Commitment:
        params = self.params
        return Commitment(
            y1=mod_pow(params.alpha, secret, params.p),
            y2=mod_pow(params.beta, secret, params.p),
        )

    def challenge_commitment(self, k: int) -> ChallengeCommitment:
        params = self.params
        return ChallengeCommitment(
            r1=mod_pow(params.alpha, k, params.p),
            r2=mod_pow(params.beta, k, params.p),
        )

    def solve(self, k: int, c: int, secret: int) -> int:
        return solve(k, c, secret, self.params.q)

    def verify(
        self,
        challenge_commitment: ChallengeCommitment,
        commitment: Commitment,
        c: int,
        s: int,
    ) -> bool:
        params = self.params
        return verify(
            challenge_commitment.r1,
            challenge_commitment.r2,
            commitment.y1,
            commitment.y2,
            c,
            s,
            params.alpha,
            params.beta,
            params.p,
        )


__all__ = [
    "ChallengeCommitment",
    "Commitment",
    "ZkpEngine",
    "mod_pow",
    "solve",
    "verify",
]
