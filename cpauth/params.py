"""Discrete-log group description shared by prover and verifier."""

from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass

from . import constants


def derive_generator(seed: bytes, p: int) -> int:
    """Hash ``seed`` into the quadratic residues of ``p``.

    For a safe prime the quadratic residues form the subgroup of order
    ``(p - 1) // 2``, and the discrete log of the result to any other base
    is unknown to everyone.
    """

    byte_length = (p.bit_length() + 7) // 8 + 16
    counter = 0
    while True:
        stream = hashlib.shake_256(seed + counter.to_bytes(4, "big")).digest(byte_length)
        candidate = int.from_bytes(stream, "big") % p
        generator = pow(candidate, 2, p)
        if generator > 1:
            return generator
        counter += 1


@dataclass(frozen=True)
class GroupParameters:
    """Modulus ``p``, subgroup order ``q`` and two generators of that subgroup."""

    p: int
    q: int
    alpha: int
    beta: int

    @classmethod
    def default(cls) -> "GroupParameters":
        beta = derive_generator(constants.BETA_SEED, constants.P)
        return cls(p=constants.P, q=constants.Q, alpha=constants.ALPHA, beta=beta)

    @classmethod
    def toy(cls) -> "GroupParameters":
        return cls(
            p=constants.TOY_P,
            q=constants.TOY_Q,
            alpha=constants.TOY_ALPHA,
            beta=constants.TOY_BETA,
        )

    @classmethod
    def generate(cls, p: int, q: int, alpha: int) -> "GroupParameters":
        """Build parameters with ``beta = alpha^r mod p`` for a random, discarded ``r``."""

        r = secrets.randbelow(q - 1) + 1
        return cls(p=p, q=q, alpha=alpha, beta=pow(alpha, r, p))

    def validate(self) -> "GroupParameters":
        if self.p < 3 or self.q < 2:
            raise ValueError("Modulus and subgroup order are too small")
        if (self.p - 1) % self.q != 0:
            raise ValueError("Subgroup order must divide p - 1")
        for name, generator in (("alpha", self.alpha), ("beta", self.beta)):
            if not 1 < generator < self.p:
                raise ValueError(f"Generator {name} out of range")
            if pow(generator, self.q, self.p) != 1:
                raise ValueError(f"Generator {name} does not have order q")
        return self

    @staticmethod
    def random_below(limit: int) -> int:
        """Uniform integer in ``[0, limit)`` from the OS CSPRNG."""

        if limit <= 0:
            raise ValueError("Limit must be positive")
        return secrets.randbelow(limit)

    @staticmethod
    def random_identifier(length: int = constants.IDENTIFIER_LENGTH) -> str:
        if length < 1:
            raise ValueError("Identifier length must be positive")
        return "".join(secrets.choice(constants.IDENTIFIER_ALPHABET) for _ in range(length))

    def to_dict(self) -> dict[str, str]:
        return {
            "p": hex(self.p),
            "q": hex(self.q),
            "alpha": hex(self.alpha),
            "beta": hex(self.beta),
        }

    @staticmethod
    def from_dict(data: dict[str, str]) -> "GroupParameters":
        return GroupParameters(
            p=int(data["p"], 16),
            q=int(data["q"], 16),
            alpha=int(data["alpha"], 16),
            beta=int(data["beta"], 16),
        )


__all__ = ["GroupParameters", "derive_generator"]
