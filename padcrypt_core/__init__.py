"""
padcrypt Core Package
=====================
Per-pad hybrid encryption for the collaborative editor plugin layer.

Provides:
- CryptoSession: identity, pad key registry and active pad in one object
- Anonymous key sharing (X25519 sealed boxes) between collaborators
- AES-GCM content encryption under each pad's symmetric key
"""

from .config import CryptoSettings, load_settings
from .errors import (
    PadCryptError,
    UnsealError,
    DecryptAuthenticationError,
    NoActiveDocumentError,
    KeyExistsError,
    InvalidKeyError,
)
from .models import DocumentKeyEntry, Identity
from .session import ActiveDocumentPointer, CryptoSession

__all__ = [
    "CryptoSession",
    "ActiveDocumentPointer",
    "CryptoSettings",
    "load_settings",
    "DocumentKeyEntry",
    "Identity",
    "PadCryptError",
    "UnsealError",
    "DecryptAuthenticationError",
    "NoActiveDocumentError",
    "KeyExistsError",
    "InvalidKeyError",
]
