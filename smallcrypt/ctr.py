"""AES-128 in counter (CTR) mode with a 32-bit big-endian block counter."""

from __future__ import annotations

from smallcrypt.aes import BLOCK_SIZE, KeySchedule, encrypt_block
from smallcrypt.utils import CryptoError

__all__ = ["ctr_mode"]

_COUNTER_BYTES = 4
_COUNTER_MASK = 0xFFFFFFFF


def ctr_mode(data: bytes, counter: bytes, sched: KeySchedule) -> tuple[bytes, bytes]:
    """Encrypt or decrypt data in CTR mode.

    The last four bytes of the 16-byte counter block are incremented after
    each block. Returns the output and the counter block to continue from.
    """
    data = bytes(data)
    counter = bytes(counter)
    if not data:
        raise CryptoError("data must not be empty")
    if len(counter) != BLOCK_SIZE:
        raise CryptoError(f"counter must be {BLOCK_SIZE} bytes, got {len(counter)}")

    prefix = counter[:-_COUNTER_BYTES]
    block_num = int.from_bytes(counter[-_COUNTER_BYTES:], "big")
    out = bytearray()
    for start in range(0, len(data), BLOCK_SIZE):
        keystream = encrypt_block(prefix + block_num.to_bytes(_COUNTER_BYTES, "big"), sched)
        block_num = (block_num + 1) & _COUNTER_MASK
        out.extend(k ^ d for k, d in zip(keystream, data[start:start + BLOCK_SIZE]))
    return bytes(out), prefix + block_num.to_bytes(_COUNTER_BYTES, "big")