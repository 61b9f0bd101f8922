import pytest

from smallcrypt.aes import set_encrypt_key
from smallcrypt.ctr import ctr_mode
from smallcrypt.utils import CryptoError

KEY = bytes.fromhex("2b7e151628aed2a6abf7158809cf4f3c")
COUNTER = bytes.fromhex("f0f1f2f3f4f5f6f7f8f9fafbfcfdfeff")
PLAINTEXT = bytes.fromhex(
    "6bc1bee22e409f96e93d7e117393172a"
    "ae2d8a571e03ac9c9eb76fac45af8e51"
    "30c81c46a35ce411e5fbc1191a0a52ef"
    "f69f2445df4f9b17ad2b417be66c3710"
)


def test_sp800_38a_vector():
    out, _ = ctr_mode(PLAINTEXT, COUNTER, set_encrypt_key(KEY))
    assert out == bytes.fromhex(
        "874d6191b620e3261bef6864990db6ce"
        "9806f66b7970fdff8617187bb9fffdff"
        "5ae4df3edbd5d35e5b4f09020db03eab"
        "1e031dda2fbe03d1792170a0f3009cee"
    )


def test_counter_advances_per_block():
    _, next_counter = ctr_mode(PLAINTEXT, COUNTER, set_encrypt_key(KEY))
    assert next_counter == bytes.fromhex("f0f1f2f3f4f5f6f7f8f9fafbfcfdff03")


def test_counter_wraps_in_low_four_bytes():
    counter = bytes(range(12)) + b"\xff\xff\xff\xff"
    _, next_counter = ctr_mode(b"a", counter, set_encrypt_key(KEY))
    assert next_counter == bytes(range(12)) + b"\x00\x00\x00\x00"


def test_round_trip_with_partial_block():
    sched = set_encrypt_key(KEY)
    data = b"a message that is not block aligned"
    encrypted, counter_after = ctr_mode(data, COUNTER, sched)
    decrypted, counter_again = ctr_mode(encrypted, COUNTER, sched)
    assert decrypted == data
    assert len(encrypted) == len(data)
    assert counter_after == counter_again


def test_split_call_matches_single_call():
    sched = set_encrypt_key(KEY)
    whole, whole_counter = ctr_mode(PLAINTEXT, COUNTER, sched)
    first, middle = ctr_mode(PLAINTEXT[:32], COUNTER, sched)
    second, end = ctr_mode(PLAINTEXT[32:], middle, sched)
    assert first + second == whole
    assert end == whole_counter


def test_rejects_empty_data():
    with pytest.raises(CryptoError):
        ctr_mode(b"", COUNTER, set_encrypt_key(KEY))


def test_rejects_bad_counter_length():
    with pytest.raises(CryptoError):
        ctr_mode(PLAINTEXT, COUNTER[:12], set_encrypt_key(KEY))


def test_rejects_missing_schedule():
    with pytest.raises(TypeError):
        ctr_mode(PLAINTEXT, COUNTER, None)