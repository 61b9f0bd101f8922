# smallcrypt

A small, dependency-free, pure-Python implementation of AES-128 and the
modes built on it.

| Module | What it provides |
| --- | --- |
| `smallcrypt.aes` | `set_encrypt_key`, `set_decrypt_key`, `encrypt_block`, `decrypt_block`, `KeySchedule` |
| `smallcrypt.cbc` | `cbc_encrypt`, `cbc_decrypt`. This is CBC without padding, and the IV is put in front of the ciphertext. |
| `smallcrypt.ctr` | `ctr_mode`, which is CTR with a 32-bit big-endian block counter in the last 4 bytes of the counter block. |
| `smallcrypt.ccm` | `CcmMode`, `AuthenticationError`. This is CCM with a 13-byte nonce and an even tag length from 4 to 16. |
| `smallcrypt.cmac` | `Cmac`, `gf_double`. This is AES-CMAC (NIST SP 800-38B) with an incremental `update`. |
| `smallcrypt.ctr_prng` | `CtrPrng`, `ReseedRequired`. This is a CTR_DRBG (NIST SP 800-90A, no derivation function). |
| `smallcrypt.utils` | `CryptoError`, `double_byte`, `ct_equal` |

Invalid arguments raise `smallcrypt.utils.CryptoError`, a subclass of `ValueError`. Examples of invalid arguments are wrong key, block, IV or nonce sizes, empty input and an unsupported tag length. `AuthenticationError` and `ReseedRequired` are subclasses of `CryptoError`.

## Install

```
pip install smallcrypt
```

## Examples

### Block cipher and CBC

```python
from smallcrypt.aes import set_encrypt_key, set_decrypt_key
from smallcrypt.cbc import cbc_encrypt, cbc_decrypt

key = bytes(16)          # placeholder key
iv = bytes(range(16))
sealed = cbc_encrypt(b"sixteen byte msg", iv, set_encrypt_key(key))  # iv + ciphertext
plaintext = cbc_decrypt(sealed[16:], sealed[:16], set_decrypt_key(key))
```

The plaintext and ciphertext lengths must be non-zero multiples of 16.

### CTR

```python
from smallcrypt.aes import set_encrypt_key
from smallcrypt.ctr import ctr_mode

sched = set_encrypt_key(bytes(16))
output, next_counter = ctr_mode(b"any length of data", bytes(16), sched)
```

`ctr_mode` returns the output together with the counter block to continue from. The same call decrypts.

### CCM

```python
from smallcrypt.aes import set_encrypt_key
from smallcrypt.ccm import CcmMode, AuthenticationError

ccm = CcmMode(set_encrypt_key(bytes(16)), nonce=bytes(13), mlen=8)
sealed = ccm.encrypt(b"header", b"payload")      # ciphertext + 8-byte tag
try:
    opened = ccm.decrypt(b"header", sealed)
except AuthenticationError:
    ...
```

Either the associated data or the payload may be `None` or empty. Associated data must be shorter than `0xFF00` bytes, and the payload must be shorter than `0x10000` bytes.

### CMAC

```python
from smallcrypt.cmac import Cmac

mac = Cmac(bytes(16))
mac.update(b"part one, ")
mac.update(b"part two")
tag = mac.final()        # 16 bytes; the state is erased afterwards
```

`reset()` starts a new message under the same key. After `final()` or `erase()` the instance cannot be used again, so create a new `Cmac` for the next message. One key allows 2^48 `update` calls.

### Random bytes

```python
import os
from smallcrypt.ctr_prng import CtrPrng

prng = CtrPrng(os.urandom(32), b"my device")
data = prng.generate(64, None)
prng.reseed(os.urandom(32), None)
prng.uninstantiate()
```

Entropy must be at least 32 bytes, and only the first 32 bytes are used. Personalization and additional input are cut to 32 bytes or padded with zeros to that length. One request can return at most 65535 bytes. `ReseedRequired` is raised after 2^48 requests without a reseed.

## What this package does not do

- It offers only AES with 128-bit keys.
- It has no hashing, no HMAC and no public-key algorithms.
- It has no command-line tool. It is a library only.
- It is written in plain Python for clarity and small size. It is not hardened against timing side channels, and it is not fast.

## Tests

```
pip install -e .[test]
pytest
```