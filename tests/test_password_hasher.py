from __future__ import annotations

import pytest

from doorstep_auth.infrastructure.security.password_hasher import PasswordHasher


def test_argon2_hash_verifies_only_the_hashed_password():
    hasher = PasswordHasher(scheme="argon2", rounds=1)

    password_hash = hasher.hash("s3cret-pass")

    assert password_hash.startswith("$argon2")
    assert "s3cret-pass" not in password_hash
    assert hasher.verify("s3cret-pass", password_hash) is True
    assert hasher.verify("wrong-pass", password_hash) is False


def test_hashes_are_salted():
    hasher = PasswordHasher(scheme="argon2", rounds=1)

    assert hasher.hash("s3cret-pass") != hasher.hash("s3cret-pass")


def test_verify_returns_false_for_malformed_hash():
    hasher = PasswordHasher(scheme="argon2", rounds=1)

    assert hasher.verify("s3cret-pass", "not-a-hash") is False
    assert hasher.verify("s3cret-pass", "") is False


def test_bcrypt_hashes_stay_verifiable_under_argon2_primary():
    bcrypt_hasher = PasswordHasher(scheme="bcrypt", rounds=4)
    argon2_hasher = PasswordHasher(scheme="argon2", rounds=1)

    legacy_hash = bcrypt_hasher.hash("s3cret-pass")

    assert legacy_hash.startswith("$2")
    assert argon2_hasher.verify("s3cret-pass", legacy_hash) is True


def test_unknown_scheme_is_rejected():
    with pytest.raises(ValueError):
        PasswordHasher(scheme="md5_crypt")


def test_bcrypt_default_cost_is_12():
    hasher = PasswordHasher(scheme="bcrypt")

    assert hasher.hash("s3cret-pass").startswith("$2b$12$")


def test_explicit_rounds_set_the_primary_scheme_cost():
    hasher = PasswordHasher(scheme="bcrypt", rounds=10)

    assert hasher.hash("s3cret-pass").startswith("$2b$10$")
