"""AES-128 in CCM mode with a 13-byte nonce and a 2-byte length field."""

from __future__ import annotations

from collections.abc import Iterator

from smallcrypt.aes import BLOCK_SIZE, KeySchedule, encrypt_block
from smallcrypt.utils import CryptoError, ct_equal

__all__ = [
    "AuthenticationError",
    "CcmMode",
    "NONCE_SIZE",
    "AAD_MAX_BYTES",
    "PAYLOAD_MAX_BYTES",
]

NONCE_SIZE = 13
AAD_MAX_BYTES = 0xFF00
PAYLOAD_MAX_BYTES = 0x10000
_ALLOWED_MAC_SIZES = (4, 6, 8, 10, 12, 14, 16)
_COUNTER_MASK = 0xFFFF


class AuthenticationError(CryptoError):
    """Raised when a CCM tag does not match the decrypted data."""


def _xor(a: bytes, b: bytes) -> bytes:
    return bytes(x ^ y for x, y in zip(a, b))


def _padded_blocks(data: bytes) -> Iterator[bytes]:
    for start in range(0, len(data), BLOCK_SIZE):
        yield data[start:start + BLOCK_SIZE].ljust(BLOCK_SIZE, b"\x00")


class CcmMode:
    """A CCM configuration: key schedule, nonce and tag length."""

    def __init__(self, sched: KeySchedule, nonce: bytes, mlen: int) -> None:
        if not isinstance(sched, KeySchedule):
            raise TypeError("sched must be a KeySchedule")
        nonce = bytes(nonce)
        if len(nonce) != NONCE_SIZE:
            raise CryptoError(f"nonce must be {NONCE_SIZE} bytes, got {len(nonce)}")
        if mlen not in _ALLOWED_MAC_SIZES:
            raise CryptoError(f"tag length must be one of {_ALLOWED_MAC_SIZES}, got {mlen}")
        self.sched = sched
        self.nonce = nonce
        self.mlen = mlen

    def _counter_block(self, index: int) -> bytes:
        return b"\x01" + self.nonce + (index & _COUNTER_MASK).to_bytes(2, "big")

    def _cbc_mac(self, associated_data: bytes, payload: bytes) -> bytes:
        flags = (0x40 if associated_data else 0) | (((self.mlen - 2) // 2) << 3) | 1
        b0 = bytes([flags]) + self.nonce + len(payload).to_bytes(2, "big")
        tag = encrypt_block(b0, self.sched)
        chained = b""
        if associated_data:
            chained = len(associated_data).to_bytes(2, "big") + associated_data
        for part in (chained, payload):
            for block in _padded_blocks(part):
                tag = encrypt_block(_xor(tag, block), self.sched)
        return tag

    def _ctr(self, data: bytes) -> bytes:
        out = bytearray()
        for index, start in enumerate(range(0, len(data), BLOCK_SIZE), start=1):
            keystream = encrypt_block(self._counter_block(index), self.sched)
            out.extend(_xor(keystream, data[start:start + BLOCK_SIZE]))
        return bytes(out)

    @staticmethod
    def _check_sizes(associated_data: bytes, payload_len: int) -> None:
        if len(associated_data) >= AAD_MAX_BYTES:
            raise CryptoError("associated data is too long")
        if payload_len >= PAYLOAD_MAX_BYTES:
            raise CryptoError("payload is too long")

    def encrypt(self, associated_data: bytes | None, payload: bytes | None) -> bytes:
        """Encrypt the payload and return the ciphertext followed by the tag."""
        associated_data = bytes(associated_data or b"")
        payload = bytes(payload or b"")
        self._check_sizes(associated_data, len(payload))
        tag = self._cbc_mac(associated_data, payload)
        ciphertext = self._ctr(payload)
        s0 = encrypt_block(self._counter_block(0), self.sched)
        return ciphertext + _xor(tag[:self.mlen], s0)

    def decrypt(self, associated_data: bytes | None, data: bytes) -> bytes:
        """Decrypt ciphertext followed by its tag; raise AuthenticationError on a bad tag."""
        associated_data = bytes(associated_data or b"")
        data = bytes(data)
        self._check_sizes(associated_data, len(data))
        if len(data) < self.mlen:
            raise CryptoError(f"data must hold at least the {self.mlen}-byte tag")
        ciphertext, received = data[:-self.mlen], data[-self.mlen:]
        plaintext = self._ctr(ciphertext)
        s0 = encrypt_block(self._counter_block(0), self.sched)
        expected_tag = _xor(received, s0)
        computed = self._cbc_mac(associated_data, plaintext)[:self.mlen]
        if not ct_equal(computed, expected_tag):
            raise AuthenticationError("CCM tag verification failed")
        return plaintext