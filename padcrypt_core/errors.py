"""
padcrypt_core.errors
--------------------
Domain exceptions. Backend errors from ``cryptography`` are translated into
these at the primitive boundary so callers never depend on backend types.
"""


class PadCryptError(Exception):
    pass


class UnsealError(PadCryptError):
    """The local private key cannot open a wrapped key."""


class DecryptAuthenticationError(PadCryptError):
    """Authenticated decryption failed: tampered, truncated, wrong key or nonce."""


class NoActiveDocumentError(PadCryptError):
    """A document id was omitted and no active document is set."""


class KeyExistsError(PadCryptError):
    """A key is already stored for the document and overwrite is disabled."""


class InvalidKeyError(PadCryptError):
    """A public key or key share is malformed."""
