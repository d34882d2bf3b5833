"""
Auth Settings

Immutable snapshot of the configuration the auth core depends on.
Built once from ApplicationConfig and passed into services at construction,
so flow logic never reads configuration ad hoc.
"""

from datetime import timedelta
from typing import Optional

from pydantic import BaseModel, ConfigDict


class AuthSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    jwt_secret: str
    jwt_refresh_secret: str
    jwt_issuer: str = "auth-service"
    jwt_audience: str = "auth-client"
    access_token_ttl: timedelta = timedelta(minutes=15)
    refresh_token_ttl: timedelta = timedelta(days=7)
    reset_token_ttl: timedelta = timedelta(hours=1)
    reset_token_purpose: str = "password-reset"
    bcrypt_rounds: int = 12
    frontend_url: str = "http://localhost:3000"
    from_email: str = "no-reply@localhost"
    refresh_cookie_name: str = "refresh_token"
    cookie_domain: Optional[str] = None
    production: bool = False

    @classmethod
    def from_config(cls, config) -> "AuthSettings":
        return cls(
            jwt_secret=config.JWT_SECRET,
            jwt_refresh_secret=config.JWT_REFRESH_SECRET,
            jwt_issuer=config.JWT_ISSUER,
            jwt_audience=config.JWT_AUDIENCE,
            access_token_ttl=timedelta(minutes=config.ACCESS_TOKEN_TTL_MINUTES),
            refresh_token_ttl=timedelta(days=config.REFRESH_TOKEN_TTL_DAYS),
            reset_token_ttl=timedelta(minutes=config.RESET_TOKEN_TTL_MINUTES),
            reset_token_purpose=config.RESET_TOKEN_PURPOSE,
            bcrypt_rounds=config.BCRYPT_ROUNDS,
            frontend_url=config.FRONTEND_URL,
            from_email=config.FROM_EMAIL,
            refresh_cookie_name=config.REFRESH_COOKIE_NAME,
            cookie_domain=config.COOKIE_DOMAIN,
            production=config.ENVIRONMENT == "production",
        )
