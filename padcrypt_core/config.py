# padcrypt_core/config.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import logging, os

NONCE_MODES = ("document", "message")


@dataclass
class CryptoSettings:
    """
    Runtime policy for a CryptoSession.

    nonce_mode:
      - "document" → one nonce per pad, shared in the key share and reused
                     for every message of that pad (wire-compatible default)
      - "message"  → fresh nonce per encryption, prepended to the ciphertext
    """
    nonce_mode: str = "document"
    reject_key_overwrite: bool = False
    implicit_document: bool = True
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        if self.nonce_mode not in NONCE_MODES:
            raise ValueError(f"Unknown nonce mode: {self.nonce_mode}")
        self.log_level = str(self.log_level).upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")


def _flag(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def load_settings(config: dict | None = None) -> CryptoSettings:
    """
    Resolve settings: explicit config dict first, then PADCRYPT_* env vars,
    then defaults.
    """
    config = config or {}

    def pick(key: str, env: str, default):
        if config.get(key) is not None:
            return config[key]
        return os.getenv(env, default)

    return CryptoSettings(
        nonce_mode=str(pick("nonce_mode", "PADCRYPT_NONCE_MODE", "document")).lower(),
        reject_key_overwrite=_flag(pick("reject_key_overwrite", "PADCRYPT_REJECT_KEY_OVERWRITE", "0")),
        implicit_document=_flag(pick("implicit_document", "PADCRYPT_IMPLICIT_DOCUMENT", "1")),
        log_level=str(pick("log_level", "PADCRYPT_LOG_LEVEL", "INFO")).upper(),
        log_file=pick("log_file", "PADCRYPT_LOG_FILE", None),
    )
