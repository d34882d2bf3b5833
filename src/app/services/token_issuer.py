"""
Token Issuer

Mints and verifies the access/refresh token pair.

- Access token: short-lived, stateless, signed with the access secret
- Refresh token: long-lived, signed with the refresh secret, carries a random
  jti so every token value is unique; persisted as a RefreshSession by the
  caller before it is handed to the client
"""

import hashlib
from datetime import UTC, datetime
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel

from libs.result import Error, Result, Return
from src.api.utils.jwt import decode_jwt, encode_jwt
from src.app.services.settings import AuthSettings
from src.domain.entities import User, UserRole

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    access_expires_at: datetime
    refresh_expires_at: datetime


class AccessClaims(BaseModel):
    user_id: UUID
    email: str
    role: str
    expires_at: datetime


class RefreshClaims(BaseModel):
    user_id: UUID
    token_id: str
    expires_at: datetime


def hash_refresh_token(refresh_token: str) -> str:
    """SHA-256 hex digest used as the session lookup key"""
    return hashlib.sha256(refresh_token.encode()).hexdigest()


def _from_timestamp(value) -> datetime:
    return datetime.fromtimestamp(int(value), UTC)


class TokenIssuer:
    def __init__(self, settings: AuthSettings):
        self.settings = settings

    def issue_pair(self, user: User, now: Optional[datetime] = None) -> TokenPair:
        now = now or datetime.now(UTC)
        access_expires_at = now + self.settings.access_token_ttl
        refresh_expires_at = now + self.settings.refresh_token_ttl

        access_token = encode_jwt(
            {
                "user_id": str(user.id),
                "email": user.email,
                "role": UserRole(user.role).value,
                "type": ACCESS_TOKEN_TYPE,
                "iss": self.settings.jwt_issuer,
                "aud": self.settings.jwt_audience,
                "iat": now,
                "exp": access_expires_at,
            },
            self.settings.jwt_secret,
        )
        refresh_token = encode_jwt(
            {
                "user_id": str(user.id),
                "type": REFRESH_TOKEN_TYPE,
                "jti": uuid4().hex,
                "iss": self.settings.jwt_issuer,
                "aud": self.settings.jwt_audience,
                "iat": now,
                "exp": refresh_expires_at,
            },
            self.settings.jwt_refresh_secret,
        )
        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            access_expires_at=access_expires_at,
            refresh_expires_at=refresh_expires_at,
        )

    def verify_access_token(self, token: str) -> Result[AccessClaims]:
        decoded = decode_jwt(
            token,
            self.settings.jwt_secret,
            self.settings.jwt_issuer,
            self.settings.jwt_audience,
        )
        if decoded.is_err():
            return Return.err(decoded.error)

        payload = decoded.value
        if payload.get("type") != ACCESS_TOKEN_TYPE:
            return Return.err(Error("TOKEN_INVALID", "Invalid token type"))
        try:
            claims = AccessClaims(
                user_id=UUID(payload["user_id"]),
                email=payload["email"],
                role=payload["role"],
                expires_at=_from_timestamp(payload["exp"]),
            )
        except (KeyError, ValueError, TypeError):
            return Return.err(Error("TOKEN_INVALID", "Malformed token payload"))
        return Return.ok(claims)

    def verify_refresh_token(self, token: str) -> Result[RefreshClaims]:
        decoded = decode_jwt(
            token,
            self.settings.jwt_refresh_secret,
            self.settings.jwt_issuer,
            self.settings.jwt_audience,
        )
        if decoded.is_err():
            return Return.err(decoded.error)

        payload = decoded.value
        if payload.get("type") != REFRESH_TOKEN_TYPE:
            return Return.err(Error("TOKEN_INVALID", "Invalid token type"))
        try:
            claims = RefreshClaims(
                user_id=UUID(payload["user_id"]),
                token_id=payload["jti"],
                expires_at=_from_timestamp(payload["exp"]),
            )
        except (KeyError, ValueError, TypeError):
            return Return.err(Error("TOKEN_INVALID", "Malformed token payload"))
        return Return.ok(claims)
