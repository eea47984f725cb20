"""Tests for password hashing."""

import pytest

from marketplace.config import Settings
from marketplace.exceptions import CorruptHashError
from marketplace.services.passwords import PasswordHasher


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


def test_hash_is_not_plaintext(hasher):
    password_hash = hasher.hash("hunter2")
    assert password_hash != "hunter2"
    assert password_hash.startswith("$2")


def test_hashes_are_salted(hasher):
    assert hasher.hash("hunter2") != hasher.hash("hunter2")


def test_verify(hasher):
    password_hash = hasher.hash("hunter2")
    assert hasher.verify("hunter2", password_hash) is True
    assert hasher.verify("hunter3", password_hash) is False


@pytest.mark.parametrize("bad_hash", ["not-a-hash", "$2b$04$tooshort"])
def test_corrupt_hash_raises(hasher, bad_hash):
    with pytest.raises(CorruptHashError):
        hasher.verify("hunter2", bad_hash)


def test_rounds_from_settings():
    hasher = PasswordHasher.from_settings(Settings(bcrypt_rounds=5))
    assert hasher.hash("pw").startswith("$2b$05$")


def test_default_cost_factor():
    """The default work factor is 12; the test suite lowers it through BCRYPT_ROUNDS."""
    assert Settings.model_fields["bcrypt_rounds"].default == 12
