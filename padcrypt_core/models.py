# padcrypt_core/models.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict
import binascii, json

from .errors import InvalidKeyError
from .utils import b64e, b64d


@dataclass
class Identity:
    """A participant's X25519 keypair. The private half never leaves the session."""
    public_key: bytes
    private_key: bytes = field(repr=False)


@dataclass
class DocumentKeyEntry:
    """
    A pad's symmetric key in wrapped (sealed) form plus the pad nonce.

    The same shape is used for registry entries (sealed under the local
    identity) and for key shares (sealed under a recipient's public key).
    """
    wrapped_key: bytes
    nonce: bytes

    def to_dict(self) -> Dict[str, str]:
        return {"wrapped_key": b64e(self.wrapped_key), "nonce": b64e(self.nonce)}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DocumentKeyEntry":
        """Inverse of to_dict. Older clients send the wrapped key as ``key``."""
        wrapped = data.get("wrapped_key", data.get("key"))
        nonce = data.get("nonce")
        if wrapped is None or nonce is None:
            raise InvalidKeyError("key share needs 'wrapped_key' and 'nonce'")
        try:
            return cls(wrapped_key=b64d(wrapped), nonce=b64d(nonce))
        except (binascii.Error, ValueError, AttributeError) as e:
            raise InvalidKeyError("key share is not valid base64") from e

    @classmethod
    def from_json(cls, raw: str) -> "DocumentKeyEntry":
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise InvalidKeyError("key share is not valid JSON") from e
        if not isinstance(data, dict):
            raise InvalidKeyError("key share must be a JSON object")
        return cls.from_dict(data)
