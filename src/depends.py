from functools import lru_cache
from typing import Optional

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.notification_service import LoggingNotificationService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.notification_service import INotificationService
from src.app.services.password_hasher import PasswordHasher
from src.app.services.reset_token_service import ResetTokenService
from src.app.services.settings import AuthSettings
from src.app.services.token_issuer import AccessClaims, TokenIssuer

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


@lru_cache
def get_auth_settings() -> AuthSettings:
    return AuthSettings.from_config(ApplicationConfig)


@lru_cache
def _password_hasher(rounds: int) -> PasswordHasher:
    return PasswordHasher(rounds)


def get_password_hasher(
    settings: AuthSettings = Depends(get_auth_settings),
) -> PasswordHasher:
    return _password_hasher(settings.bcrypt_rounds)


def get_token_issuer(settings: AuthSettings = Depends(get_auth_settings)) -> TokenIssuer:
    return TokenIssuer(settings)


def get_reset_token_service(
    settings: AuthSettings = Depends(get_auth_settings),
) -> ResetTokenService:
    return ResetTokenService(settings)


def get_notification_service() -> INotificationService:
    return LoggingNotificationService()


def _claims_from_credentials(
    credentials: Optional[HTTPAuthorizationCredentials], token_issuer: TokenIssuer
) -> AccessClaims:
    if credentials is None or not credentials.credentials:
        raise ClientError(
            Error("NOT_AUTHENTICATED", "Access token required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    result = token_issuer.verify_access_token(credentials.credentials)
    if result.is_err():
        error = result.error
        raise ClientError(
            error,
            status_code=status.HTTP_401_UNAUTHORIZED,
            hints={"needs_refresh": error.code == "TOKEN_EXPIRED"},
        )
    return result.value


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> AccessClaims:
    """
    Dependency to extract and verify the access token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Verified access-token claims (user_id, email, role)

    Raises:
        ClientError: 401 NOT_AUTHENTICATED, TOKEN_INVALID or TOKEN_EXPIRED
    """
    return _claims_from_credentials(credentials, token_issuer)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> Optional[AccessClaims]:
    """Like get_current_user, but an absent or unusable token yields None."""
    if credentials is None:
        return None
    result = token_issuer.verify_access_token(credentials.credentials)
    return result.value if result.is_ok() else None
