"""
padcrypt_core.cipher
--------------------
Pad content encryption with the pad's transiently unwrapped key.

In "document" nonce mode every message of a pad is encrypted under the
pad nonce from its key entry. GCM keystream is then identical across
messages, so two ciphertexts leak the XOR of their plaintexts and the
authentication key can be recovered. "message" mode draws a fresh nonce per
call and prepends it: ciphertext = nonce || AES-GCM(plaintext).
"""

from __future__ import annotations
import binascii, logging

from .crypto import NONCE_SIZE, aead_decrypt, aead_encrypt, random_bytes
from .errors import DecryptAuthenticationError, PadCryptError
from .registry import DocumentKeyRegistry
from .utils import b64e, b64d

log = logging.getLogger("PadCrypt.Cipher")


def encrypt_content(registry: DocumentKeyRegistry, document_id: str, plaintext: str) -> str:
    if not isinstance(plaintext, str):
        raise TypeError(f"pad content must be str, not {type(plaintext).__name__}")
    plaintext = plaintext.encode("utf-8")
    entry = registry.key_entry(document_id)
    key = registry.unwrap(entry)
    if registry.settings.nonce_mode == "message":
        nonce = random_bytes(NONCE_SIZE)
        out = nonce + aead_encrypt(key, nonce, plaintext)
    else:
        out = aead_encrypt(key, entry.nonce, plaintext)
    log.debug(f"[CIPHER] encrypted {len(plaintext)} bytes for pad '{document_id}'")
    return b64e(out)


def decrypt_content(registry: DocumentKeyRegistry, document_id: str, ciphertext: str) -> str:
    """Decrypt pad content.

    An entry created by this call is dropped again if decryption fails, so
    a share that arrives later is not blocked by a useless local key.
    """
    try:
        raw = b64d(ciphertext)
    except (binascii.Error, ValueError) as e:
        raise DecryptAuthenticationError("ciphertext is not valid base64") from e
    created = not registry.has_entry(document_id)
    try:
        return _decrypt_with_entry(registry, document_id, raw)
    except PadCryptError:
        if created:
            registry.forget(document_id)
        raise


def _decrypt_with_entry(registry: DocumentKeyRegistry, document_id: str, raw: bytes) -> str:
    entry = registry.key_entry(document_id)
    key = registry.unwrap(entry)
    if registry.settings.nonce_mode == "message":
        if len(raw) < NONCE_SIZE:
            raise DecryptAuthenticationError("ciphertext is truncated")
        nonce, raw = raw[:NONCE_SIZE], raw[NONCE_SIZE:]
    else:
        nonce = entry.nonce
    plaintext = aead_decrypt(key, nonce, raw)
    log.debug(f"[CIPHER] decrypted {len(plaintext)} bytes for pad '{document_id}'")
    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecryptAuthenticationError("decrypted content is not UTF-8 text") from e
