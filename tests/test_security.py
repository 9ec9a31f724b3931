from datetime import timedelta

import pytest
from jose import jwt

from absence_api.core.config import settings
from absence_api.core.errors import InvalidToken, ValidationError
from absence_api.core.security import (
    check_email_format,
    create_access_token,
    decode_access_token,
    get_password_hash,
    normalize_email,
    verify_password,
)


def test_password_hash_roundtrip():
    hashed = get_password_hash("pw123456")
    assert hashed != "pw123456"
    assert verify_password("pw123456", hashed)
    assert not verify_password("mauvais", hashed)


def test_verify_password_with_unknown_hash_format():
    assert verify_password("pw123456", "pas-un-hash") is False


@pytest.mark.parametrize("raw", ["  Ali@X.com ", "ALI@x.COM", "ali@x.com"])
def test_normalize_email(raw):
    assert normalize_email(raw) == "ali@x.com"


def test_normalize_email_none():
    assert normalize_email(None) == ""


def test_token_expires_after_seven_days():
    token = create_access_token({"sub": "12", "role": "admin"})
    payload = decode_access_token(token)
    claims = jwt.get_unverified_claims(token)
    assert payload["sub"] == "12"
    assert payload["role"] == "admin"
    assert settings.ACCESS_TOKEN_EXPIRE_MINUTES == 7 * 24 * 60
    assert "exp" in claims


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "1"}, expires_delta=timedelta(seconds=-5))
    with pytest.raises(InvalidToken):
        decode_access_token(token)


def test_token_signed_with_another_key_is_rejected():
    token = jwt.encode({"sub": "1"}, "autre-cle", algorithm=settings.ALGORITHM)
    with pytest.raises(InvalidToken):
        decode_access_token(token)


@pytest.mark.parametrize("email", ["ali@x.com", "prenom.nom@univ-lille.fr"])
def test_check_email_format_accepts(email):
    assert check_email_format(email) == email


@pytest.mark.parametrize("email", ["pas-un-email", "ali@", "@x.com", "ali x@x.com"])
def test_check_email_format_rejects(email):
    with pytest.raises(ValidationError):
        check_email_format(email)
