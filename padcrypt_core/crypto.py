"""
padcrypt_core.crypto
--------------------
Cryptographic primitives for padcrypt:

- X25519 keypairs for participant identities
- Anonymous sealing: ephemeral X25519 + HKDF + AES-GCM, so only the holder
  of the recipient private key can open a sealed message and the sender
  stays anonymous
- AES-256-GCM authenticated encryption for pad content

Everything above this module works on raw bytes from these functions; no
``cryptography`` exception escapes it.
"""

from __future__ import annotations
from typing import Tuple
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.asymmetric import x25519
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
import os

from .errors import UnsealError, DecryptAuthenticationError, InvalidKeyError

PUBLIC_KEY_SIZE = 32
KEY_SIZE = 32      # AES-256
NONCE_SIZE = 12    # GCM standard nonce
TAG_SIZE = 16
SEAL_INFO = b"padcrypt-seal-v1"

# --------- X25519 identities ----------
def x25519_generate() -> Tuple[bytes, bytes]:
    sk = x25519.X25519PrivateKey.generate()
    pk = sk.public_key()
    return sk.private_bytes_raw(), pk.public_bytes_raw()

def random_bytes(n: int) -> bytes:
    return os.urandom(n)

def _load_public(pub_raw: bytes) -> x25519.X25519PublicKey:
    try:
        return x25519.X25519PublicKey.from_public_bytes(pub_raw)
    except ValueError as e:
        raise InvalidKeyError(f"invalid X25519 public key: {e}") from e

# --------- Sealed boxes (anonymous public-key encryption) ----------
def _seal_key_nonce(shared: bytes, eph_pub: bytes, recipient_pub: bytes) -> Tuple[bytes, bytes]:
    hkdf = HKDF(algorithm=hashes.SHA256(), length=KEY_SIZE + NONCE_SIZE, salt=None,
                info=SEAL_INFO + eph_pub + recipient_pub)
    okm = hkdf.derive(shared)
    return okm[:KEY_SIZE], okm[KEY_SIZE:]

def seal_anonymous(message: bytes, recipient_pub: bytes) -> bytes:
    """Seal ``message`` for ``recipient_pub``. Output: eph_pub || ciphertext+tag.

    A fresh ephemeral keypair per call makes the derived nonce single-use.
    """
    recipient = _load_public(recipient_pub)
    eph = x25519.X25519PrivateKey.generate()
    eph_pub = eph.public_key().public_bytes_raw()
    key, nonce = _seal_key_nonce(eph.exchange(recipient), eph_pub, recipient_pub)
    return eph_pub + AESGCM(key).encrypt(nonce, message, None)

def open_sealed(sealed: bytes, recipient_pub: bytes, recipient_priv: bytes) -> bytes:
    if len(sealed) < PUBLIC_KEY_SIZE + TAG_SIZE:
        raise UnsealError("sealed message is truncated")
    eph_pub, ct = sealed[:PUBLIC_KEY_SIZE], sealed[PUBLIC_KEY_SIZE:]
    try:
        sk = x25519.X25519PrivateKey.from_private_bytes(recipient_priv)
        shared = sk.exchange(x25519.X25519PublicKey.from_public_bytes(eph_pub))
        key, nonce = _seal_key_nonce(shared, eph_pub, recipient_pub)
        return AESGCM(key).decrypt(nonce, ct, None)
    except (InvalidTag, ValueError) as e:
        # ValueError: low-order ephemeral point yields an all-zero secret
        raise UnsealError("wrapped key cannot be opened with the local identity") from e

# --------- AES-GCM (pad content) ----------
def aead_encrypt(key: bytes, nonce: bytes, plaintext: bytes) -> bytes:
    try:
        return AESGCM(key).encrypt(nonce, plaintext, None)
    except ValueError as e:
        # wrong key or nonce length: the stored pad entry is malformed
        raise InvalidKeyError(f"malformed pad key material: {e}") from e

def aead_decrypt(key: bytes, nonce: bytes, ciphertext: bytes) -> bytes:
    try:
        return AESGCM(key).decrypt(nonce, ciphertext, None)
    except InvalidTag as e:
        raise DecryptAuthenticationError("ciphertext failed authentication") from e
    except ValueError as e:
        raise InvalidKeyError(f"malformed pad key material: {e}") from e
