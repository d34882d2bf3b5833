from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.app.services.password_hasher import PasswordHasher
from src.app.services.reset_token_service import ResetTokenService
from src.app.services.settings import AuthSettings
from src.app.services.token_issuer import TokenIssuer
from src.domain.entities import User, UserRole


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock()
    uow.users.update = AsyncMock()

    uow.sessions = MagicMock()
    uow.sessions.create = AsyncMock()
    uow.sessions.find_by_token = AsyncMock(return_value=None)
    uow.sessions.revoke_by_token = AsyncMock(return_value=True)
    uow.sessions.revoke_all_by_user_id = AsyncMock(return_value=0)
    uow.sessions.get_active_by_user_id = AsyncMock(return_value=[])
    uow.sessions.delete_expired = AsyncMock(return_value=0)

    return uow


@pytest.fixture
def settings():
    return AuthSettings(
        jwt_secret="unit-access-secret",
        jwt_refresh_secret="unit-refresh-secret",
        access_token_ttl=timedelta(minutes=15),
        refresh_token_ttl=timedelta(days=7),
        reset_token_ttl=timedelta(hours=1),
        frontend_url="https://app.example.com",
        from_email="security@example.com",
    )


@pytest.fixture(scope="session")
def password_hasher():
    # Low cost factor keeps the suite fast
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_issuer(settings):
    return TokenIssuer(settings)


@pytest.fixture
def reset_tokens(settings):
    return ResetTokenService(settings)


@pytest.fixture
def make_user(password_hasher):
    def factory(password="SecurePass123!", **overrides):
        fields = dict(
            email="user@acme.com",
            password_hash=password_hasher.hash(password),
            first_name="Ada",
            last_name="Lovelace",
            role=UserRole.client,
            is_active=True,
        )
        fields.update(overrides)
        return User(**fields)

    return factory
