"""
Reset Token Service

Issues and verifies single-purpose password reset tokens.

Reset tokens are never persisted. Each token carries a fingerprint of the
user's password hash at issuance, so it stops verifying against the user once
the password has been changed (by this reset or any other).
"""

import hashlib
from datetime import UTC, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from libs.result import Error, Result, Return
from src.api.utils.jwt import decode_jwt, encode_jwt
from src.app.services.settings import AuthSettings
from src.domain.entities import User


class ResetClaims(BaseModel):
    user_id: UUID
    password_fingerprint: str


def password_fingerprint(password_hash: str) -> str:
    return hashlib.sha256(password_hash.encode()).hexdigest()[:16]


class ResetTokenService:
    def __init__(self, settings: AuthSettings):
        self.settings = settings

    def issue(self, user: User, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(UTC)
        return encode_jwt(
            {
                "user_id": str(user.id),
                "purpose": self.settings.reset_token_purpose,
                "pwd": password_fingerprint(user.password_hash),
                "iss": self.settings.jwt_issuer,
                "aud": self.settings.jwt_audience,
                "iat": now,
                "exp": now + self.settings.reset_token_ttl,
            },
            self.settings.jwt_secret,
        )

    def verify(self, token: str) -> Result[ResetClaims]:
        decoded = decode_jwt(
            token,
            self.settings.jwt_secret,
            self.settings.jwt_issuer,
            self.settings.jwt_audience,
        )
        if decoded.is_err():
            return Return.err(decoded.error)

        payload = decoded.value
        if payload.get("purpose") != self.settings.reset_token_purpose:
            return Return.err(Error("TOKEN_INVALID", "Invalid or expired password reset token"))
        try:
            claims = ResetClaims(
                user_id=UUID(payload["user_id"]),
                password_fingerprint=payload["pwd"],
            )
        except (KeyError, ValueError, TypeError):
            return Return.err(Error("TOKEN_INVALID", "Invalid or expired password reset token"))
        return Return.ok(claims)

    def matches_user(self, claims: ResetClaims, user: User) -> bool:
        return claims.password_fingerprint == password_fingerprint(user.password_hash)
