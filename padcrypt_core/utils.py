"""
padcrypt_core.utils
-------------------
Base64 helpers for values crossing the text-only plugin boundary, plus
public key fingerprints for logs and out-of-band identity checks.
"""

from __future__ import annotations
import base64, binascii, hashlib

from .errors import InvalidKeyError


def b64e(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")

def b64d(s: str) -> bytes:
    # strict: non-alphabet characters are an error, not silently dropped
    return base64.b64decode(s.encode("ascii"), validate=True)

def decode_key(value: str | bytes, size: int, what: str = "key") -> bytes:
    """Decode a base64 key (raw bytes pass through) and check its length."""
    if isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
    else:
        try:
            raw = b64d(value)
        except (binascii.Error, ValueError, UnicodeEncodeError) as e:
            raise InvalidKeyError(f"{what} is not valid base64") from e
    if len(raw) != size:
        raise InvalidKeyError(f"{what} must be {size} bytes, got {len(raw)}")
    return raw

def compute_pubkey_fingerprint(pubkey_b64: str) -> str:
    """
    Compute a stable fingerprint for an X25519 public key.

    - Input: base64-encoded public key
    - Output: hex-encoded SHA256 hash truncated to 32 chars

    Logs carry the fingerprint instead of the key itself; collaborators can
    compare fingerprints over a side channel before sharing a pad key.
    """
    raw = b64d(pubkey_b64)
    return hashlib.sha256(raw).hexdigest()[:32]
