import pytest

from smallcrypt.aes import set_encrypt_key
from smallcrypt.ccm import AuthenticationError, CcmMode
from smallcrypt.utils import CryptoError

KEY = bytes.fromhex("c0c1c2c3c4c5c6c7c8c9cacbcccdcecf")
HDR = bytes.fromhex("0001020304050607")

VECTORS = [
    (
        "00000003020100a0a1a2a3a4a5",
        bytes(range(0x08, 0x1F)),
        "588c979a61c663d2f066d0c2c0f989806d5f6b61dac38417e8d12cfdf926e0",
        8,
    ),
    (
        "00000004030201a0a1a2a3a4a5",
        bytes(range(0x08, 0x20)),
        "72c91a36e135f8cf291ca894085c87e3cc15c439c9e43a3ba091d56e10400916",
        8,
    ),
    (
        "00000005040302a0a1a2a3a4a5",
        bytes(range(0x08, 0x21)),
        "51b1e5f44a197d1da46b0f8e2d282ae871e838bb64da8596574adaa76fbd9fb0c5",
        8,
    ),
    (
        "00000009080706a0a1a2a3a4a5",
        bytes(range(0x08, 0x1F)),
        "0135d1b2c95f41d5d1d4fec185d166b8094e999dfed96c048c56602c97acbb7490",
        10,
    ),
    (
        "0000000a090807a0a1a2a3a4a5",
        bytes(range(0x08, 0x20)),
        "7b75399ac0831dd2f0bbd75879a2fd8f6cae6b6cd9b7db24c17b4433f434963f34b4",
        10,
    ),
    (
        "0000000b0a0908a0a1a2a3a4a5",
        bytes(range(0x08, 0x21)),
        "82531a60cc24945a4b8279181ab5c84df21ce7f9b73f42e197ea9c07e56b5eb17e5f4e",
        10,
    ),
]

NONCE_9 = bytes.fromhex("0000000b0a0908a0a1a2a3a4a5")


@pytest.mark.parametrize("nonce, data, expected, mlen", VECTORS)
def test_rfc3610_vectors(nonce, data, expected, mlen):
    ccm = CcmMode(set_encrypt_key(KEY), bytes.fromhex(nonce), mlen)
    ciphertext = ccm.encrypt(HDR, data)
    assert ciphertext == bytes.fromhex(expected)
    assert ccm.decrypt(HDR, ciphertext) == data


def test_no_associated_data():
    data = bytes(range(0x08, 0x21))
    ccm = CcmMode(set_encrypt_key(KEY), NONCE_9, 10)
    ciphertext = ccm.encrypt(None, data)
    assert len(ciphertext) == len(data) + 10
    assert ccm.decrypt(None, ciphertext) == data
    assert ccm.decrypt(b"", ciphertext) == data


def test_no_payload():
    ccm = CcmMode(set_encrypt_key(KEY), NONCE_9, 10)
    ciphertext = ccm.encrypt(HDR, None)
    assert len(ciphertext) == 10
    assert ccm.decrypt(HDR, ciphertext) == b""


def test_tampered_ciphertext_is_rejected():
    nonce, data, expected, mlen = VECTORS[0]
    ccm = CcmMode(set_encrypt_key(KEY), bytes.fromhex(nonce), mlen)
    tampered = bytearray(bytes.fromhex(expected))
    tampered[0] ^= 1
    with pytest.raises(AuthenticationError):
        ccm.decrypt(HDR, bytes(tampered))


def test_wrong_associated_data_is_rejected():
    nonce, data, expected, mlen = VECTORS[1]
    ccm = CcmMode(set_encrypt_key(KEY), bytes.fromhex(nonce), mlen)
    with pytest.raises(AuthenticationError):
        ccm.decrypt(HDR[:-1], bytes.fromhex(expected))


def test_authentication_error_is_crypto_error():
    ccm = CcmMode(set_encrypt_key(KEY), NONCE_9, 4)
    with pytest.raises(CryptoError):
        ccm.decrypt(HDR, b"\x00" * 8)


@pytest.mark.parametrize("nonce_len", [12, 14])
def test_rejects_bad_nonce_length(nonce_len):
    with pytest.raises(CryptoError):
        CcmMode(set_encrypt_key(KEY), bytes(nonce_len), 8)


@pytest.mark.parametrize("mlen", [2, 3, 5, 17, 18])
def test_rejects_bad_tag_length(mlen):
    with pytest.raises(CryptoError):
        CcmMode(set_encrypt_key(KEY), NONCE_9, mlen)


def test_rejects_missing_schedule():
    with pytest.raises(TypeError):
        CcmMode(None, NONCE_9, 8)


def test_rejects_oversized_associated_data():
    ccm = CcmMode(set_encrypt_key(KEY), NONCE_9, 8)
    with pytest.raises(CryptoError):
        ccm.encrypt(bytes(0xFF00), b"data")


def test_rejects_oversized_payload():
    ccm = CcmMode(set_encrypt_key(KEY), NONCE_9, 8)
    with pytest.raises(CryptoError):
        ccm.encrypt(HDR, bytes(0x10000))


def test_rejects_data_shorter_than_tag():
    ccm = CcmMode(set_encrypt_key(KEY), NONCE_9, 8)
    with pytest.raises(CryptoError):
        ccm.decrypt(HDR, b"\x00" * 7)