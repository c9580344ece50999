"""Password hashing tests."""
import pytest

from tenet.core.exceptions import PasswordHashingError
from tenet.core.security import hash_password, is_password_hash, verify_password


def test_hash_and_verify():
    hashed = hash_password("secret")

    assert hashed.startswith("$argon2")
    assert verify_password("secret", hashed) is True
    assert verify_password("Secret", hashed) is False


def test_fresh_salt_per_hash():
    first = hash_password("secret")
    second = hash_password("secret")

    assert first != second
    assert verify_password("secret", first)
    assert verify_password("secret", second)


def test_salt_is_32_bytes():
    # $argon2id$v=19$m=...,t=...,p=...$<salt>$<digest>, base64 without padding
    salt = hash_password("secret").split("$")[4]

    assert len(salt) == 43


@pytest.mark.parametrize("stored", ["", "plaintext", "$argon2id$v=19$garbage"])
def test_malformed_hash(stored):
    with pytest.raises(PasswordHashingError):
        verify_password("secret", stored)


def test_hash_non_string():
    with pytest.raises(PasswordHashingError):
        hash_password(None)


def test_is_password_hash():
    assert is_password_hash(hash_password("secret"))
    assert not is_password_hash("secret")
    assert not is_password_hash("")
