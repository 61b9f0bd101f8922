"""Small helpers shared by the block cipher and its modes."""

from __future__ import annotations

import hmac

__all__ = ["CryptoError", "double_byte", "ct_equal"]


class CryptoError(ValueError):
    """Raised when a cryptographic operation is given invalid input."""


def double_byte(a: int) -> int:
    """Multiply a byte by x in GF(2^8) with the AES reduction polynomial."""
    a &= 0xFF
    doubled = (a << 1) & 0xFF
    if a & 0x80:
        doubled ^= 0x1B
    return doubled


def ct_equal(a: bytes, b: bytes) -> bool:
    """Compare two byte strings in time independent of their contents."""
    return hmac.compare_digest(bytes(a), bytes(b))