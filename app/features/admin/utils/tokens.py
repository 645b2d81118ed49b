import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from app.platform.config import settings
from app.platform.exceptions import TokenInvalidOrExpired

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"

_REQUIRED_CLAIMS = ["sub", "email", "role", "iat", "exp", "iss", "aud", "type"]


@dataclass(frozen=True)
class TokenClaims:
    sub: str
    email: str
    role: str
    issued_at: float
    expires_at: int
    token_type: str


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = "bearer"


def _secret_for(token_type: str) -> str:
    if token_type == REFRESH_TOKEN_TYPE:
        return settings.JWT_REFRESH_SECRET
    return settings.JWT_ACCESS_SECRET


def _lifetime_for(token_type: str) -> timedelta:
    if token_type == REFRESH_TOKEN_TYPE:
        return timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    return timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)


def create_token(
    subject: str,
    email: str,
    role: str,
    token_type: str = ACCESS_TOKEN_TYPE,
    expires_delta: Optional[timedelta] = None,
    now: Optional[datetime] = None,
) -> str:
    """Create a signed JWT of the given type."""
    issued = now or datetime.now(timezone.utc)
    if issued.tzinfo is None:
        issued = issued.replace(tzinfo=timezone.utc)
    expire = issued + (expires_delta or _lifetime_for(token_type))

    to_encode = {
        "sub": subject,
        "email": email,
        "role": role,
        # Fractional seconds so issuance compares exactly against password_changed_at
        "iat": issued.timestamp(),
        "exp": expire,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "type": token_type,
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(to_encode, _secret_for(token_type), algorithm=settings.JWT_ALGORITHM)


def create_token_pair(subject: str, email: str, role: str) -> TokenPair:
    return TokenPair(
        access_token=create_token(subject, email, role, ACCESS_TOKEN_TYPE),
        refresh_token=create_token(subject, email, role, REFRESH_TOKEN_TYPE),
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


def decode_token(token: str, token_type: str = ACCESS_TOKEN_TYPE) -> TokenClaims:
    """
    Decode and verify a JWT of the given type.

    Any failure (expired, bad signature, wrong issuer/audience, wrong type,
    missing claims) raises TokenInvalidOrExpired with the same message.
    """
    try:
        payload = jwt.decode(
            token,
            _secret_for(token_type),
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
            options={"require": _REQUIRED_CLAIMS},
        )
    except jwt.PyJWTError as e:
        raise TokenInvalidOrExpired() from e

    if payload.get("type") != token_type:
        raise TokenInvalidOrExpired()

    return TokenClaims(
        sub=str(payload["sub"]),
        email=payload["email"],
        role=payload["role"],
        issued_at=float(payload["iat"]),
        expires_at=int(payload["exp"]),
        token_type=payload["type"],
    )


def decode_access_token(token: str) -> TokenClaims:
    return decode_token(token, ACCESS_TOKEN_TYPE)


def decode_refresh_token(token: str) -> TokenClaims:
    return decode_token(token, REFRESH_TOKEN_TYPE)
