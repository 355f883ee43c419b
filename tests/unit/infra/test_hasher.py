"""Unit tests for :class:`SaltedSHA256Hasher`."""

from __future__ import annotations

import hashlib

from makeshort.infra.crypto.sha256_hasher import SaltedSHA256Hasher


def test_hash_is_sha256_of_password_plus_salt():
    hasher = SaltedSHA256Hasher(salt="pepper")
    assert hasher.hash("secret") == hashlib.sha256(b"secretpepper").hexdigest()


def test_hash_is_deterministic_and_salt_dependent():
    a, b = SaltedSHA256Hasher(salt="one"), SaltedSHA256Hasher(salt="two")
    assert a.hash("pw") == a.hash("pw")
    assert a.hash("pw") != b.hash("pw")
    assert len(a.hash("pw")) == 64
