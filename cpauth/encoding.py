"""Wire codec for arbitrary-precision integers.

Integers travel as big-endian unsigned byte strings with no fixed width.
Zero is a single ``0x00`` byte; an empty byte string is rejected rather than
silently decoded to zero.
"""

from __future__ import annotations

from .errors import MalformedInput


def int_to_bytes(value: int) -> bytes:
    if value < 0:
        raise MalformedInput("Negative integers have no unsigned encoding")
    length = max(1, (value.bit_length() + 7) // 8)
    return value.to_bytes(length, "big")


def bytes_to_int(data: bytes, field: str = "value") -> int:
    if not isinstance(data, (bytes, bytearray)):
        raise MalformedInput(f"Field '{field}' must be bytes")
    if len(data) == 0:
        raise MalformedInput(f"Field '{field}' is empty")
    return int.from_bytes(data, "big")


def int_to_hex(value: int) -> str:
    return int_to_bytes(value).hex()


def hex_to_bytes(text: str, field: str = "value") -> bytes:
    try:
        data = bytes.fromhex(text)
    except (TypeError, ValueError) as exc:
        raise MalformedInput(f"Field '{field}' must be hex encoded") from exc
    if not data:
        raise MalformedInput(f"Field '{field}' is empty")
    return data


def secret_from_password(password: str) -> int:
    """Interpret the UTF-8 bytes of a password as a big-endian integer secret."""

    if not password:
        raise ValueError("Password must not be empty")
    return int.from_bytes(password.encode("utf-8"), "big")


__all__ = [
    "bytes_to_int",
    "hex_to_bytes",
    "int_to_bytes",
    "int_to_hex",
    "secret_from_password",
]
