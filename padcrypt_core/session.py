"""
padcrypt_core.session
---------------------
CryptoSession is the object the editor plugin layer talks to. It owns one
identity, one key registry and one active-document pointer; two sessions
share no key state. Logger configuration is process-wide: the last session
constructed sets the "PadCrypt" logger level.

Every public call takes ``document_id`` as an optional keyword. When given,
it becomes the session's active document once the call succeeds; when
omitted, the active document is used. Each call holds the session lock from
pointer resolution to pointer commit.
"""

from __future__ import annotations
from typing import Dict, Optional
import threading

from .cipher import decrypt_content, encrypt_content
from .config import CryptoSettings, load_settings
from .errors import NoActiveDocumentError
from .exchange import prepare_key_for, store_received_key
from .identity import IdentityStore
from .logger import get_logger
from .models import DocumentKeyEntry
from .registry import DocumentKeyRegistry
from .utils import b64e


class ActiveDocumentPointer:
    """Unset until the first explicit document id, then Set(id) for good."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.current: Optional[str] = None

    @property
    def is_set(self) -> bool:
        return self.current is not None

    def resolve(self, document_id: Optional[str]) -> str:
        """Pick the id an operation should use, without changing state."""
        if document_id is not None:
            return document_id
        if not self.enabled:
            raise NoActiveDocumentError("a document id is required (implicit documents disabled)")
        if self.current is None:
            raise NoActiveDocumentError("no document id given and no active document set")
        return self.current

    def commit(self, document_id: str) -> None:
        self.current = document_id


class CryptoSession:
    def __init__(self, settings: Optional[CryptoSettings] = None, config: dict | None = None):
        self.settings = settings or load_settings(config)
        get_logger("PadCrypt", level=self.settings.log_level, to_file=self.settings.log_file)
        self.identities = IdentityStore()
        self.registry = DocumentKeyRegistry(self.identities, self.settings)
        self.pointer = ActiveDocumentPointer(enabled=self.settings.implicit_document)
        self._lock = threading.RLock()

    @property
    def active_document(self) -> Optional[str]:
        return self.pointer.current

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------
    def public_key(self) -> str:
        with self._lock:
            return b64e(self.identities.public_key())

    def fingerprint(self) -> str:
        with self._lock:
            return self.identities.fingerprint()

    # ------------------------------------------------------------------
    # Key exchange
    # ------------------------------------------------------------------
    def prepare_symmetric_key(self, recipient_public_key: str, document_id: Optional[str] = None) -> Dict[str, str]:
        """Wrap the pad key for a collaborator; returns {wrapped_key, nonce} as base64."""
        with self._lock:
            doc = self.pointer.resolve(document_id)
            share = prepare_key_for(self.registry, doc, recipient_public_key)
            self.pointer.commit(doc)
            return share.to_dict()

    def store_symmetric_key(self, share: DocumentKeyEntry | dict, document_id: Optional[str] = None) -> None:
        with self._lock:
            doc = self.pointer.resolve(document_id)
            store_received_key(self.registry, doc, share)
            self.pointer.commit(doc)

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------
    def encrypt(self, plaintext: str, document_id: Optional[str] = None) -> str:
        with self._lock:
            doc = self.pointer.resolve(document_id)
            ciphertext = encrypt_content(self.registry, doc, plaintext)
            self.pointer.commit(doc)
            return ciphertext

    def decrypt(self, ciphertext: str, document_id: Optional[str] = None) -> str:
        with self._lock:
            doc = self.pointer.resolve(document_id)
            plaintext = decrypt_content(self.registry, doc, ciphertext)
            self.pointer.commit(doc)
            return plaintext
