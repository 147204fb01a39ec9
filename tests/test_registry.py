import json
import logging
import threading
import time
import pytest
from padcrypt_core import identity as identity_module
from padcrypt_core.config import CryptoSettings, load_settings
from padcrypt_core.errors import InvalidKeyError, KeyExistsError, UnsealError
from padcrypt_core.exchange import prepare_key_for, store_received_key
from padcrypt_core.identity import IdentityStore
from padcrypt_core.models import DocumentKeyEntry
from padcrypt_core.registry import DocumentKeyRegistry
from padcrypt_core.utils import b64e


def make_registry(**settings):
    return DocumentKeyRegistry(IdentityStore(), CryptoSettings(**settings))


def test_identity_created_once():
    store = IdentityStore()
    first = store.identity()
    assert store.identity() is first
    assert store.public_key() == first.public_key
    assert "private_key" not in repr(first)


def test_identity_created_once_across_threads(monkeypatch):
    real_generate = identity_module.x25519_generate
    calls = []

    def slow_generate():
        calls.append(1)
        time.sleep(0.05)
        return real_generate()

    monkeypatch.setattr(identity_module, "x25519_generate", slow_generate)
    store = IdentityStore()
    seen = []
    threads = [threading.Thread(target=lambda: seen.append(store.identity())) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(calls) == 1
    assert all(ident is seen[0] for ident in seen)


def test_key_entry_lazy_and_idempotent(caplog):
    caplog.set_level(logging.INFO, logger="PadCrypt")
    reg = make_registry()
    assert not reg.has_entry("pad1")

    e1 = reg.key_entry("pad1")
    e2 = reg.key_entry("pad1")
    assert e1.wrapped_key == e2.wrapped_key
    assert e1.nonce == e2.nonce
    assert reg.document_ids() == ["pad1"]
    assert caplog.text.count("new key for pad 'pad1'") == 1


def test_key_entry_is_self_sealed():
    reg = make_registry()
    key = reg.unwrap(reg.key_entry("pad1"))
    assert len(key) == 32
    assert reg.key_entry("pad2").nonce != reg.key_entry("pad1").nonce


def test_set_key_entry_overwrites(caplog):
    reg = make_registry()
    reg.key_entry("pad1")
    replacement = DocumentKeyEntry(wrapped_key=b"x" * 80, nonce=b"n" * 12)
    reg.set_key_entry("pad1", replacement)
    assert reg.key_entry("pad1") is replacement
    assert "replacing existing key" in caplog.text


def test_set_key_entry_guard():
    reg = make_registry(reject_key_overwrite=True)
    original = reg.key_entry("pad1")
    with pytest.raises(KeyExistsError):
        reg.set_key_entry("pad1", DocumentKeyEntry(wrapped_key=b"x", nonce=b"n"))
    assert reg.key_entry("pad1") is original


def test_forget():
    reg = make_registry()
    reg.key_entry("pad1")
    reg.forget("pad1")
    assert len(reg) == 0


def test_prepare_and_store_between_registries():
    alice, bob = make_registry(), make_registry()
    share = prepare_key_for(alice, "pad1", b64e(bob.identities.public_key()))

    # share is not kept locally
    assert alice.key_entry("pad1").wrapped_key != share.wrapped_key
    assert share.nonce == alice.key_entry("pad1").nonce

    store_received_key(bob, "pad1", share.to_dict())
    assert bob.unwrap(bob.key_entry("pad1")) == alice.unwrap(alice.key_entry("pad1"))


def test_prepare_fails_for_foreign_entry():
    alice, bob, carol = make_registry(), make_registry(), make_registry()
    share = prepare_key_for(alice, "pad1", bob.identities.public_key())
    # stored without validation, even though it was meant for bob
    store_received_key(carol, "pad1", share)
    with pytest.raises(UnsealError):
        prepare_key_for(carol, "pad1", bob.identities.public_key())


def test_prepare_bad_recipient_key():
    reg = make_registry()
    with pytest.raises(InvalidKeyError):
        prepare_key_for(reg, "pad1", "bm9wZQ==")
    assert not reg.has_entry("pad1")


def test_share_serialization():
    entry = DocumentKeyEntry(wrapped_key=b"w" * 64, nonce=b"n" * 12)
    assert DocumentKeyEntry.from_json(entry.to_json()) == entry

    legacy = {"key": b64e(b"w" * 64), "nonce": b64e(b"n" * 12)}
    assert DocumentKeyEntry.from_dict(legacy) == entry

    with pytest.raises(InvalidKeyError):
        DocumentKeyEntry.from_dict({"nonce": "AAAA"})
    with pytest.raises(InvalidKeyError):
        DocumentKeyEntry.from_dict({"wrapped_key": "***", "nonce": "AAAA"})
    with pytest.raises(InvalidKeyError):
        DocumentKeyEntry.from_json(json.dumps(["not", "a", "dict"]))


def test_load_settings(monkeypatch):
    monkeypatch.delenv("PADCRYPT_NONCE_MODE", raising=False)
    monkeypatch.delenv("PADCRYPT_REJECT_KEY_OVERWRITE", raising=False)
    monkeypatch.delenv("PADCRYPT_IMPLICIT_DOCUMENT", raising=False)
    defaults = load_settings()
    assert defaults.nonce_mode == "document"
    assert defaults.reject_key_overwrite is False
    assert defaults.implicit_document is True

    monkeypatch.setenv("PADCRYPT_NONCE_MODE", "message")
    monkeypatch.setenv("PADCRYPT_REJECT_KEY_OVERWRITE", "1")
    env = load_settings()
    assert env.nonce_mode == "message"
    assert env.reject_key_overwrite is True

    # explicit config wins over env
    assert load_settings({"nonce_mode": "document"}).nonce_mode == "document"

    with pytest.raises(ValueError):
        load_settings({"nonce_mode": "random"})

    assert load_settings({"log_level": "debug"}).log_level == "DEBUG"
    with pytest.raises(ValueError):
        load_settings({"log_level": "LOUD"})
