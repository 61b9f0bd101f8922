"""AES-128 in cipher block chaining (CBC) mode, without padding."""

from __future__ import annotations

from collections.abc import Iterator

from smallcrypt.aes import BLOCK_SIZE, KeySchedule, decrypt_block, encrypt_block
from smallcrypt.utils import CryptoError

__all__ = ["cbc_encrypt", "cbc_decrypt"]


def _xor(a: bytes, b: bytes) -> bytes:
    return bytes(x ^ y for x, y in zip(a, b))


def _blocks(data: bytes) -> Iterator[bytes]:
    for start in range(0, len(data), BLOCK_SIZE):
        yield data[start:start + BLOCK_SIZE]


def _check_data(data: bytes, what: str) -> bytes:
    data = bytes(data)
    if not data:
        raise CryptoError(f"{what} must not be empty")
    if len(data) % BLOCK_SIZE:
        raise CryptoError(
            f"{what} length must be a multiple of {BLOCK_SIZE}, got {len(data)}"
        )
    return data


def _check_iv(iv: bytes) -> bytes:
    iv = bytes(iv)
    if len(iv) != BLOCK_SIZE:
        raise CryptoError(f"iv must be {BLOCK_SIZE} bytes, got {len(iv)}")
    return iv


def cbc_encrypt(plaintext: bytes, iv: bytes, sched: KeySchedule) -> bytes:
    """Encrypt whole blocks of plaintext; the result is the iv followed by the ciphertext."""
    plaintext = _check_data(plaintext, "plaintext")
    iv = _check_iv(iv)
    out = [iv]
    previous = iv
    for block in _blocks(plaintext):
        previous = encrypt_block(_xor(previous, block), sched)
        out.append(previous)
    return b"".join(out)


def cbc_decrypt(ciphertext: bytes, iv: bytes, sched: KeySchedule) -> bytes:
    """Decrypt whole blocks of ciphertext that was chained from the given iv."""
    ciphertext = _check_data(ciphertext, "ciphertext")
    previous = _check_iv(iv)
    out = []
    for block in _blocks(ciphertext):
        out.append(_xor(decrypt_block(block, sched), previous))
        previous = block
    return b"".join(out)