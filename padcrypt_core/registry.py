"""
padcrypt_core.registry
----------------------
In-memory map of document ids to DocumentKeyEntry.

Entries the registry creates itself are always sealed under the local
identity, so they can be unwrapped locally. Entries stored from key shares
are kept verbatim and only checked when first unwrapped.
"""

from __future__ import annotations
import logging
from typing import Dict, List, Optional

from .config import CryptoSettings
from .crypto import KEY_SIZE, NONCE_SIZE, open_sealed, random_bytes, seal_anonymous
from .errors import KeyExistsError
from .identity import IdentityStore
from .models import DocumentKeyEntry

log = logging.getLogger("PadCrypt.Registry")


class DocumentKeyRegistry:
    def __init__(self, identities: IdentityStore, settings: Optional[CryptoSettings] = None):
        self.identities = identities
        self.settings = settings or CryptoSettings()
        self.entries: Dict[str, DocumentKeyEntry] = {}

    def __len__(self) -> int:
        return len(self.entries)

    def has_entry(self, document_id: str) -> bool:
        return document_id in self.entries

    def document_ids(self) -> List[str]:
        return list(self.entries)

    def key_entry(self, document_id: str) -> DocumentKeyEntry:
        """Return the pad's entry, creating a self-sealed key on first use."""
        entry = self.entries.get(document_id)
        if entry is None:
            nonce = random_bytes(NONCE_SIZE)
            key = random_bytes(KEY_SIZE)
            entry = DocumentKeyEntry(
                wrapped_key=seal_anonymous(key, self.identities.public_key()),
                nonce=nonce,
            )
            self.entries[document_id] = entry
            log.info(f"[REGISTRY] new key for pad '{document_id}'")
        return entry

    def set_key_entry(self, document_id: str, entry: DocumentKeyEntry) -> None:
        if document_id in self.entries:
            if self.settings.reject_key_overwrite:
                raise KeyExistsError(f"a key already exists for pad '{document_id}'")
            log.warning(f"[REGISTRY] replacing existing key for pad '{document_id}'")
        self.entries[document_id] = entry

    def forget(self, document_id: str) -> None:
        self.entries.pop(document_id, None)

    def unwrap(self, entry: DocumentKeyEntry) -> bytes:
        """Open the entry's wrapped key with the local identity (raises UnsealError)."""
        ident = self.identities.identity()
        return open_sealed(entry.wrapped_key, ident.public_key, ident.private_key)
