"""Deterministic random bit generator built on AES-128 in counter mode.

Follows the CTR_DRBG construction of NIST SP 800-90A Rev. 1 without a
derivation function: seed material is the 32-byte concatenation of a key
and a counter block.
"""

from __future__ import annotations

from smallcrypt.aes import BLOCK_SIZE, KEY_SIZE, KeySchedule, encrypt_block, set_encrypt_key
from smallcrypt.utils import CryptoError

__all__ = [
    "CtrPrng",
    "ReseedRequired",
    "SEED_LENGTH",
    "MAX_REQUESTS_BEFORE_RESEED",
    "MAX_BYTES_PER_REQUEST",
]

SEED_LENGTH = KEY_SIZE + BLOCK_SIZE
# 2^48 requests between reseeds (SP 800-90A, section 10.2.1).
MAX_REQUESTS_BEFORE_RESEED = 1 << 48
# 2^19 bits per request (SP 800-90A, section 10.2.1).
MAX_BYTES_PER_REQUEST = 65536

_COUNTER_MASK = (1 << (8 * BLOCK_SIZE)) - 1
_ZERO_SCHEDULE_WORDS = 44


class ReseedRequired(CryptoError):
    """Raised when the generator has served too many requests since its last reseed."""


def _seed_buffer(data: bytes | None) -> bytes:
    """Truncate or zero-pad optional input to the seed length."""
    if data is None:
        return bytes(SEED_LENGTH)
    return bytes(data)[:SEED_LENGTH].ljust(SEED_LENGTH, b"\x00")


def _xor(a: bytes, b: bytes) -> bytes:
    return bytes(x ^ y for x, y in zip(a, b))


def _check_entropy(entropy: bytes) -> bytes:
    entropy = bytes(entropy)
    if len(entropy) < SEED_LENGTH:
        raise CryptoError(
            f"entropy must be at least {SEED_LENGTH} bytes, got {len(entropy)}"
        )
    return entropy[:SEED_LENGTH]


class CtrPrng:
    """A CTR_DRBG instance holding an AES key, a counter block and a reseed count."""

    def __init__(self, entropy: bytes, personalization: bytes | None = None) -> None:
        seed_material = _xor(_check_entropy(entropy), _seed_buffer(personalization))
        self._key = set_encrypt_key(bytes(KEY_SIZE))
        self._v = 0
        self._update(seed_material)
        self.reseed_count = 1

    def _next_block(self) -> bytes:
        self._v = (self._v + 1) & _COUNTER_MASK
        return encrypt_block(self._v.to_bytes(BLOCK_SIZE, "big"), self._key)

    def _update(self, provided_data: bytes) -> None:
        temp = b"".join(self._next_block() for _ in range(SEED_LENGTH // BLOCK_SIZE))
        temp = _xor(temp, provided_data)
        self._key = set_encrypt_key(temp[:KEY_SIZE])
        self._v = int.from_bytes(temp[KEY_SIZE:], "big")

    def reseed(self, entropy: bytes, additional_input: bytes | None = None) -> None:
        """Mix fresh entropy and optional additional input into the state."""
        seed_material = _xor(_check_entropy(entropy), _seed_buffer(additional_input))
        self._update(seed_material)
        self.reseed_count = 1

    def generate(self, length: int, additional_input: bytes | None = None) -> bytes:
        """Return length pseudo-random bytes.

        Raises ReseedRequired once too many requests have been served since
        the last reseed.
        """
        if not isinstance(length, int) or length < 0:
            raise CryptoError(f"length must be a non-negative integer, got {length!r}")
        if length >= MAX_BYTES_PER_REQUEST:
            raise CryptoError(
                f"at most {MAX_BYTES_PER_REQUEST - 1} bytes may be requested at once"
            )
        if self.reseed_count > MAX_REQUESTS_BEFORE_RESEED:
            raise ReseedRequired("generator must be reseeded")

        additional = _seed_buffer(additional_input)
        if additional_input is not None:
            self._update(additional)

        out = bytearray()
        while len(out) < length:
            out.extend(self._next_block()[:length - len(out)])

        self._update(additional)
        self.reseed_count += 1
        return bytes(out)

    def uninstantiate(self) -> None:
        """Zero the key, the counter block and the reseed count."""
        self._key = KeySchedule((0,) * _ZERO_SCHEDULE_WORDS)
        self._v = 0
        self.reseed_count = 0