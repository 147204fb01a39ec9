"""
padcrypt_core.exchange
----------------------
Distribution of a pad key to collaborators.

>> share:
  - open our own wrapped key
  - reseal it anonymously under the recipient's public key
  - hand {wrapped_key, nonce} to the transport
<< receive:
  - store the share as-is; it is only openable by us, so no re-wrap is needed

Sealing carries no sender authentication. Whoever delivers a share is
trusted by the collaboration channel, not by this module.
"""

from __future__ import annotations
import logging

from .crypto import PUBLIC_KEY_SIZE, seal_anonymous
from .models import DocumentKeyEntry
from .registry import DocumentKeyRegistry
from .utils import b64e, compute_pubkey_fingerprint, decode_key

log = logging.getLogger("PadCrypt.Exchange")


def prepare_key_for(registry: DocumentKeyRegistry, document_id: str,
                    recipient_public_key: str | bytes) -> DocumentKeyEntry:
    recipient = decode_key(recipient_public_key, PUBLIC_KEY_SIZE, "recipient public key")
    entry = registry.key_entry(document_id)
    share = DocumentKeyEntry(
        wrapped_key=seal_anonymous(registry.unwrap(entry), recipient),
        nonce=entry.nonce,
    )
    log.info(f"[EXCHANGE] prepared key of pad '{document_id}' "
             f"for fpr={compute_pubkey_fingerprint(b64e(recipient))}")
    return share


def store_received_key(registry: DocumentKeyRegistry, document_id: str,
                       share: DocumentKeyEntry | dict) -> DocumentKeyEntry:
    if not isinstance(share, DocumentKeyEntry):
        share = DocumentKeyEntry.from_dict(share)
    registry.set_key_entry(document_id, share)
    log.info(f"[EXCHANGE] stored received key of pad '{document_id}'")
    return share
