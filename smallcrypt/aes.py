"""AES-128 key expansion and single-block encryption and decryption."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from smallcrypt.utils import CryptoError, double_byte

__all__ = [
    "BLOCK_SIZE",
    "KEY_SIZE",
    "KeySchedule",
    "set_encrypt_key",
    "set_decrypt_key",
    "encrypt_block",
    "decrypt_block",
]

BLOCK_SIZE = 16
KEY_SIZE = 16
_NB = 4
_NK = 4
_NR = 10
_SCHEDULE_WORDS = _NB * (_NR + 1)

_SBOX = bytes((
    0x63, 0x7C, 0x77, 0x7B, 0xF2, 0x6B, 0x6F, 0xC5, 0x30, 0x01, 0x67, 0x2B,
    0xFE, 0xD7, 0xAB, 0x76, 0xCA, 0x82, 0xC9, 0x7D, 0xFA, 0x59, 0x47, 0xF0,
    0xAD, 0xD4, 0xA2, 0xAF, 0x9C, 0xA4, 0x72, 0xC0, 0xB7, 0xFD, 0x93, 0x26,
    0x36, 0x3F, 0xF7, 0xCC, 0x34, 0xA5, 0xE5, 0xF1, 0x71, 0xD8, 0x31, 0x15,
    0x04, 0xC7, 0x23, 0xC3, 0x18, 0x96, 0x05, 0x9A, 0x07, 0x12, 0x80, 0xE2,
    0xEB, 0x27, 0xB2, 0x75, 0x09, 0x83, 0x2C, 0x1A, 0x1B, 0x6E, 0x5A, 0xA0,
    0x52, 0x3B, 0xD6, 0xB3, 0x29, 0xE3, 0x2F, 0x84, 0x53, 0xD1, 0x00, 0xED,
    0x20, 0xFC, 0xB1, 0x5B, 0x6A, 0xCB, 0xBE, 0x39, 0x4A, 0x4C, 0x58, 0xCF,
    0xD0, 0xEF, 0xAA, 0xFB, 0x43, 0x4D, 0x33, 0x85, 0x45, 0xF9, 0x02, 0x7F,
    0x50, 0x3C, 0x9F, 0xA8, 0x51, 0xA3, 0x40, 0x8F, 0x92, 0x9D, 0x38, 0xF5,
    0xBC, 0xB6, 0xDA, 0x21, 0x10, 0xFF, 0xF3, 0xD2, 0xCD, 0x0C, 0x13, 0xEC,
    0x5F, 0x97, 0x44, 0x17, 0xC4, 0xA7, 0x7E, 0x3D, 0x64, 0x5D, 0x19, 0x73,
    0x60, 0x81, 0x4F, 0xDC, 0x22, 0x2A, 0x90, 0x88, 0x46, 0xEE, 0xB8, 0x14,
    0xDE, 0x5E, 0x0B, 0xDB, 0xE0, 0x32, 0x3A, 0x0A, 0x49, 0x06, 0x24, 0x5C,
    0xC2, 0xD3, 0xAC, 0x62, 0x91, 0x95, 0xE4, 0x79, 0xE7, 0xC8, 0x37, 0x6D,
    0x8D, 0xD5, 0x4E, 0xA9, 0x6C, 0x56, 0xF4, 0xEA, 0x65, 0x7A, 0xAE, 0x08,
    0xBA, 0x78, 0x25, 0x2E, 0x1C, 0xA6, 0xB4, 0xC6, 0xE8, 0xDD, 0x74, 0x1F,
    0x4B, 0xBD, 0x8B, 0x8A, 0x70, 0x3E, 0xB5, 0x66, 0x48, 0x03, 0xF6, 0x0E,
    0x61, 0x35, 0x57, 0xB9, 0x86, 0xC1, 0x1D, 0x9E, 0xE1, 0xF8, 0x98, 0x11,
    0x69, 0xD9, 0x8E, 0x94, 0x9B, 0x1E, 0x87, 0xE9, 0xCE, 0x55, 0x28, 0xDF,
    0x8C, 0xA1, 0x89, 0x0D, 0xBF, 0xE6, 0x42, 0x68, 0x41, 0x99, 0x2D, 0x0F,
    0xB0, 0x54, 0xBB, 0x16,
))


def _invert(table: bytes) -> bytes:
    inverse = bytearray(256)
    for index, value in enumerate(table):
        inverse[value] = index
    return bytes(inverse)


_INV_SBOX = _invert(_SBOX)

_RCON = (
    0x00000000, 0x01000000, 0x02000000, 0x04000000, 0x08000000, 0x10000000,
    0x20000000, 0x40000000, 0x80000000, 0x1B000000, 0x36000000,
)

# Row shifting combined with the column-major layout used by the mixing step.
_SHIFT_ROWS = (0, 5, 10, 15, 4, 9, 14, 3, 8, 13, 2, 7, 12, 1, 6, 11)
_INV_SHIFT_ROWS = (0, 13, 10, 7, 4, 1, 14, 11, 8, 5, 2, 15, 12, 9, 6, 3)


@dataclass(frozen=True)
class KeySchedule:
    """The expanded AES-128 key: 44 big-endian 32-bit words."""

    words: tuple[int, ...]

    def __post_init__(self) -> None:
        words = tuple(self.words)
        if len(words) != _SCHEDULE_WORDS:
            raise CryptoError(
                f"key schedule must hold {_SCHEDULE_WORDS} words, got {len(words)}"
            )
        if any(not 0 <= w <= 0xFFFFFFFF for w in words):
            raise CryptoError("key schedule words must be 32-bit values")
        object.__setattr__(self, "words", words)

    def round_key(self, round_index: int) -> bytes:
        """Return the 16-byte key used in the given round (0 to 10)."""
        if not 0 <= round_index <= _NR:
            raise CryptoError(f"round index out of range: {round_index}")
        chunk = self.words[_NB * round_index:_NB * (round_index + 1)]
        return b"".join(w.to_bytes(4, "big") for w in chunk)


def _rot_word(a: int) -> int:
    return ((a << 8) | (a >> 24)) & 0xFFFFFFFF


def _sub_word(a: int) -> int:
    return int.from_bytes(bytes(_SBOX[b] for b in a.to_bytes(4, "big")), "big")


def _check_length(data: bytes, size: int, what: str) -> bytes:
    data = bytes(data)
    if len(data) != size:
        raise CryptoError(f"{what} must be {size} bytes, got {len(data)}")
    return data


def set_encrypt_key(key: bytes) -> KeySchedule:
    """Expand a 16-byte key into the schedule used for encryption."""
    key = _check_length(key, KEY_SIZE, "key")
    words = [int.from_bytes(key[i:i + 4], "big") for i in range(0, KEY_SIZE, 4)]
    for i in range(_NK, _SCHEDULE_WORDS):
        t = words[i - 1]
        if i % _NK == 0:
            t = _sub_word(_rot_word(t)) ^ _RCON[i // _NK]
        words.append(words[i - _NK] ^ t)
    return KeySchedule(tuple(words))


def set_decrypt_key(key: bytes) -> KeySchedule:
    """Expand a 16-byte key for decryption; the schedule is the same as for encryption."""
    return set_encrypt_key(key)


def _add_round_key(state: Sequence[int], round_key: bytes) -> list[int]:
    return [s ^ k for s, k in zip(state, round_key)]


def _mix_column(a: int, b: int, c: int, d: int) -> tuple[int, int, int, int]:
    a2, b2, c2, d2 = (double_byte(x) for x in (a, b, c, d))
    return (
        a2 ^ b2 ^ b ^ c ^ d,
        a ^ b2 ^ c2 ^ c ^ d,
        a ^ b ^ c2 ^ d2 ^ d,
        a2 ^ a ^ b ^ c ^ d2,
    )


def _mul(a: int, factor: int) -> int:
    a2 = double_byte(a)
    a4 = double_byte(a2)
    a8 = double_byte(a4)
    return {
        0x09: a8 ^ a,
        0x0B: a8 ^ a2 ^ a,
        0x0D: a8 ^ a4 ^ a,
        0x0E: a8 ^ a4 ^ a2,
    }[factor]


def _inv_mix_column(a: int, b: int, c: int, d: int) -> tuple[int, int, int, int]:
    return (
        _mul(a, 0x0E) ^ _mul(b, 0x0B) ^ _mul(c, 0x0D) ^ _mul(d, 0x09),
        _mul(a, 0x09) ^ _mul(b, 0x0E) ^ _mul(c, 0x0B) ^ _mul(d, 0x0D),
        _mul(a, 0x0D) ^ _mul(b, 0x09) ^ _mul(c, 0x0E) ^ _mul(d, 0x0B),
        _mul(a, 0x0B) ^ _mul(b, 0x0D) ^ _mul(c, 0x09) ^ _mul(d, 0x0E),
    )


def _mix_columns(state: Sequence[int], column_op) -> list[int]:
    out: list[int] = []
    for col in range(0, BLOCK_SIZE, _NB):
        out.extend(column_op(*state[col:col + _NB]))
    return out


def _check_schedule(sched: KeySchedule) -> None:
    if not isinstance(sched, KeySchedule):
        raise TypeError("sched must be a KeySchedule")


def encrypt_block(block: bytes, sched: KeySchedule) -> bytes:
    """Encrypt one 16-byte block with an expanded key."""
    _check_schedule(sched)
    state = _add_round_key(_check_length(block, BLOCK_SIZE, "block"), sched.round_key(0))
    for round_index in range(1, _NR):
        state = [_SBOX[b] for b in state]
        state = [state[i] for i in _SHIFT_ROWS]
        state = _mix_columns(state, _mix_column)
        state = _add_round_key(state, sched.round_key(round_index))
    state = [_SBOX[b] for b in state]
    state = [state[i] for i in _SHIFT_ROWS]
    state = _add_round_key(state, sched.round_key(_NR))
    return bytes(state)


def decrypt_block(block: bytes, sched: KeySchedule) -> bytes:
    """Decrypt one 16-byte block with an expanded key."""
    _check_schedule(sched)
    state = _add_round_key(_check_length(block, BLOCK_SIZE, "block"), sched.round_key(_NR))
    for round_index in range(_NR - 1, 0, -1):
        state = [state[i] for i in _INV_SHIFT_ROWS]
        state = [_INV_SBOX[b] for b in state]
        state = _add_round_key(state, sched.round_key(round_index))
        state = _mix_columns(state, _inv_mix_column)
    state = [state[i] for i in _INV_SHIFT_ROWS]
    state = [_INV_SBOX[b] for b in state]
    state = _add_round_key(state, sched.round_key(0))
    return bytes(state)