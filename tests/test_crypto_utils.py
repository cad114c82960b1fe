import pytest

from wikiapp.utils.crypto_utils import (
    PASSWORD_CHARACTER_CLASSES, hash_password, verify_password, generate_random_password
)


def test_hash_and_verify():
    password_hash = hash_password("correct horse")
    assert password_hash != "correct horse"
    assert verify_password("correct horse", password_hash)
    assert not verify_password("wrong horse", password_hash)


@pytest.mark.parametrize("password_hash", ["", None, "not-a-bcrypt-hash"])
def test_unusable_hash_never_matches(password_hash):
    assert not verify_password("anything", password_hash)


@pytest.mark.parametrize("length", [2, 16, 40])
def test_generated_password_has_every_character_class(length):
    password = generate_random_password(length)
    assert len(password) == max(length, len(PASSWORD_CHARACTER_CLASSES))
    for characters in PASSWORD_CHARACTER_CLASSES:
        assert any(c in characters for c in password)
