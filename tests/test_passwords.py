import bcrypt
import pytest
from pydantic import ValidationError

from app.features.admin.schemas.auth import AdminPasswordChangeRequest, AdminRegistrationRequest
from app.features.admin.utils.passwords import (
    hash_password,
    validate_password_strength,
    verify_password,
)
from app.platform.exceptions import PasswordHashError


def test_hash_and_verify():
    hashed = hash_password("Str0ng!Pass", rounds=4)

    assert hashed != "Str0ng!Pass"
    assert verify_password("Str0ng!Pass", hashed) is True
    assert verify_password("Str0ng!Pass2", hashed) is False


def test_hash_is_salted():
    assert hash_password("Str0ng!Pass", rounds=4) != hash_password("Str0ng!Pass", rounds=4)


def test_hash_uses_configured_cost():
    hashed = hash_password("Str0ng!Pass", rounds=5)
    assert hashed.startswith("$2b$05$")


def test_long_passwords_differ_after_72_bytes():
    base = "Aa1!" + "x" * 80
    hashed = hash_password(base + "one", rounds=4)

    assert verify_password(base + "one", hashed) is True
    assert verify_password(base + "two", hashed) is False


def test_verify_missing_hash_raises():
    with pytest.raises(PasswordHashError):
        verify_password("Str0ng!Pass", None)


def test_verify_malformed_hash_raises():
    with pytest.raises(PasswordHashError):
        verify_password("Str0ng!Pass", "not-a-bcrypt-hash")


def test_plain_bcrypt_hash_of_raw_password_does_not_verify():
    raw = bcrypt.hashpw(b"Str0ng!Pass", bcrypt.gensalt(rounds=4)).decode()
    assert verify_password("Str0ng!Pass", raw) is False


@pytest.mark.parametrize(
    "password, message",
    [
        ("Sh0rt!", "at least 8"),
        ("nouppercase1!", "uppercase"),
        ("NOLOWERCASE1!", "lowercase"),
        ("NoNumbers!!", "number"),
        ("NoSymbols123", "special character"),
        ("Aa1!" + "a" * 130, "cannot exceed"),
    ],
)
def test_password_policy_rejections(password, message):
    with pytest.raises(ValueError, match=message):
        validate_password_strength(password)


def test_password_policy_accepts_other_characters():
    assert validate_password_strength("Str0ng!Pass with spaces #") == "Str0ng!Pass with spaces #"


def test_registration_requires_matching_confirmation():
    with pytest.raises(ValidationError, match="Passwords do not match"):
        AdminRegistrationRequest(
            email="admin@example.com",
            password="Str0ng!Pass",
            confirm_password="Str0ng!Pas",
            name="Site Admin",
        )


def test_registration_normalizes_email():
    request = AdminRegistrationRequest(
        email="  Admin@Example.COM ",
        password="Str0ng!Pass",
        confirm_password="Str0ng!Pass",
        name="  Site Admin ",
    )
    assert request.email == "admin@example.com"
    assert request.name == "Site Admin"


def test_password_change_applies_policy():
    with pytest.raises(ValidationError):
        AdminPasswordChangeRequest(
            current_password="Str0ng!Pass", new_password="weak", confirm_password="weak"
        )
