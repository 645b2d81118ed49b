from datetime import datetime, timedelta, timezone

import jwt
import pytest

from app.features.admin.utils.tokens import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    create_token,
    create_token_pair,
    decode_access_token,
    decode_refresh_token,
)
from app.platform.config import settings
from app.platform.exceptions import TokenInvalidOrExpired


def test_token_pair_round_trip():
    pair = create_token_pair("admin-1", "admin@example.com", "admin")

    access = decode_access_token(pair.access_token)
    refresh = decode_refresh_token(pair.refresh_token)

    assert access.sub == refresh.sub == "admin-1"
    assert access.email == "admin@example.com"
    assert access.role == "admin"
    assert access.token_type == ACCESS_TOKEN_TYPE
    assert refresh.token_type == REFRESH_TOKEN_TYPE
    assert pair.expires_in == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
    assert pair.token_type == "bearer"


def test_access_token_lifetime():
    now = datetime.now(timezone.utc)
    claims = decode_access_token(create_token("admin-1", "a@example.com", "admin", now=now))
    assert claims.expires_at - int(claims.issued_at) == pytest.approx(15 * 60, abs=1)


def test_tokens_issued_together_are_distinct():
    first = create_token_pair("admin-1", "admin@example.com", "admin")
    second = create_token_pair("admin-1", "admin@example.com", "admin")
    assert first.refresh_token != second.refresh_token


def test_refresh_token_is_not_an_access_token():
    pair = create_token_pair("admin-1", "admin@example.com", "admin")

    with pytest.raises(TokenInvalidOrExpired):
        decode_access_token(pair.refresh_token)
    with pytest.raises(TokenInvalidOrExpired):
        decode_refresh_token(pair.access_token)


def test_expired_token_rejected():
    issued = datetime.now(timezone.utc) - timedelta(minutes=20)
    token = create_token("admin-1", "admin@example.com", "admin", now=issued)

    with pytest.raises(TokenInvalidOrExpired):
        decode_access_token(token)


def test_tampered_token_rejected():
    token = create_token("admin-1", "admin@example.com", "admin")
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[::-1]])

    with pytest.raises(TokenInvalidOrExpired):
        decode_access_token(tampered)


def test_wrong_audience_rejected():
    token = jwt.encode(
        {
            "sub": "admin-1",
            "email": "admin@example.com",
            "role": "admin",
            "iat": datetime.now(timezone.utc),
            "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
            "iss": settings.JWT_ISSUER,
            "aud": "someone-else",
            "type": ACCESS_TOKEN_TYPE,
        },
        settings.JWT_ACCESS_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )

    with pytest.raises(TokenInvalidOrExpired):
        decode_access_token(token)


def test_missing_claim_rejected():
    token = jwt.encode(
        {
            "sub": "admin-1",
            "iat": datetime.now(timezone.utc),
            "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
            "iss": settings.JWT_ISSUER,
            "aud": settings.JWT_AUDIENCE,
            "type": ACCESS_TOKEN_TYPE,
        },
        settings.JWT_ACCESS_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )

    with pytest.raises(TokenInvalidOrExpired):
        decode_access_token(token)
