"""AES-128 CMAC (NIST SP 800-38B) with an incremental update interface."""

from __future__ import annotations

from smallcrypt.aes import BLOCK_SIZE, encrypt_block, set_encrypt_key
from smallcrypt.utils import CryptoError

__all__ = ["Cmac", "gf_double", "GF_WRAP", "MAX_CALLS", "PADDING"]

# X^128 = X^7 + X^2 + X + 1 in GF(2^128); the low-order coefficients are 0x87.
GF_WRAP = 0x87
# Number of update calls allowed before the key must be changed.
MAX_CALLS = 1 << 48
# First byte of the padding appended to a short final block.
PADDING = 0x80

_BLOCK_BITS = 8 * BLOCK_SIZE
_BLOCK_MASK = (1 << _BLOCK_BITS) - 1


def gf_double(block: bytes) -> bytes:
    """Double a 16-byte big-endian element of GF(2^128)."""
    block = bytes(block)
    if len(block) != BLOCK_SIZE:
        raise CryptoError(f"block must be {BLOCK_SIZE} bytes, got {len(block)}")
    value = int.from_bytes(block, "big")
    doubled = (value << 1) & _BLOCK_MASK
    if value >> (_BLOCK_BITS - 1):
        doubled ^= GF_WRAP
    return doubled.to_bytes(BLOCK_SIZE, "big")


def _xor(a: bytes, b: bytes) -> bytes:
    return bytes(x ^ y for x, y in zip(a, b))


class Cmac:
    """State of a CMAC computation under one AES-128 key.

    Call update() with the message segments in order and final() to get the
    tag. final() erases the state; create a new instance for the next key.
    reset() starts a new message under the same key.
    """

    def __init__(self, key: bytes) -> None:
        self._sched = set_encrypt_key(key)
        subkey_base = encrypt_block(bytes(BLOCK_SIZE), self._sched)
        self._k1 = gf_double(subkey_base)
        self._k2 = gf_double(self._k1)
        self._iv = bytes(BLOCK_SIZE)
        self._leftover = bytearray()
        self.countdown = 0
        self.reset()

    def _require_key(self) -> None:
        if self._sched is None:
            raise CryptoError("CMAC state has been erased")

    def reset(self) -> None:
        """Start a new CMAC computation with the current key."""
        self._require_key()
        self._iv = bytes(BLOCK_SIZE)
        self._leftover = bytearray()
        self.countdown = MAX_CALLS

    def _absorb(self, block: bytes) -> None:
        self._iv = encrypt_block(_xor(self._iv, block), self._sched)

    def update(self, data: bytes) -> None:
        """Mix the next segment of the message into the computation."""
        data = memoryview(bytes(data))
        if not data:
            return
        if self._sched is None or self.countdown == 0:
            raise CryptoError("CMAC key must be set up again before further updates")
        self.countdown -= 1

        if self._leftover:
            remaining_space = BLOCK_SIZE - len(self._leftover)
            if len(data) < remaining_space:
                self._leftover.extend(data)
                return
            self._leftover.extend(data[:remaining_space])
            data = data[remaining_space:]
            self._absorb(bytes(self._leftover))
            self._leftover = bytearray()

        # Every block except the last goes through the chain now.
        while len(data) > BLOCK_SIZE:
            self._absorb(bytes(data[:BLOCK_SIZE]))
            data = data[BLOCK_SIZE:]

        if data:
            self._leftover = bytearray(data)

    def final(self) -> bytes:
        """Return the 16-byte tag and erase the state."""
        self._require_key()
        if len(self._leftover) == BLOCK_SIZE:
            last = bytes(self._leftover)
            subkey = self._k1
        else:
            last = (bytes(self._leftover) + bytes([PADDING])).ljust(BLOCK_SIZE, b"\x00")
            subkey = self._k2
        tag = encrypt_block(_xor(_xor(self._iv, last), subkey), self._sched)
        self.erase()
        return tag

    def erase(self) -> None:
        """Destroy the key material and the computation state."""
        self._sched = None
        self._k1 = bytes(BLOCK_SIZE)
        self._k2 = bytes(BLOCK_SIZE)
        self._iv = bytes(BLOCK_SIZE)
        self._leftover = bytearray()
        self.countdown = 0