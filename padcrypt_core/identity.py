from __future__ import annotations
import logging, threading

from .crypto import x25519_generate
from .models import Identity
from .utils import b64e, compute_pubkey_fingerprint

log = logging.getLogger("PadCrypt.Identity")


class IdentityStore:
    """Creates the local keypair on first access and keeps it for the session."""

    def __init__(self):
        self._identity = None
        self._lock = threading.Lock()

    def identity(self) -> Identity:
        with self._lock:
            if self._identity is None:
                priv, pub = x25519_generate()
                self._identity = Identity(public_key=pub, private_key=priv)
                log.info(f"[IDENTITY] created keypair fpr={compute_pubkey_fingerprint(b64e(pub))}")
        return self._identity

    def public_key(self) -> bytes:
        return self.identity().public_key

    def fingerprint(self) -> str:
        return compute_pubkey_fingerprint(b64e(self.public_key()))
