from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from src.app.use_cases.auth import (
    RefreshContext,
    RefreshTokenUseCase,
    VerifyRefreshTokenUseCase,
)
from src.domain.entities import RefreshSession


def _live_session(user, refresh_token_hash="hash"):
    return RefreshSession(
        user_id=user.id,
        token_hash=refresh_token_hash,
        expires_at=datetime.now(UTC).replace(tzinfo=None) + timedelta(days=7),
    )


@pytest.mark.asyncio
async def test_verify_refresh_token_builds_context(mock_uow, token_issuer, make_user):
    user = make_user()
    pair = token_issuer.issue_pair(user)
    mock_uow.sessions.find_by_token.return_value = _live_session(user)
    mock_uow.users.get_by_id.return_value = user

    result = await VerifyRefreshTokenUseCase(mock_uow, token_issuer).execute(pair.refresh_token)

    assert result.is_ok()
    context = result.value
    assert context.user_id == user.id
    assert context.email == user.email
    assert context.role == "CLIENT"
    assert context.refresh_token == pair.refresh_token


@pytest.mark.asyncio
async def test_verify_refresh_token_missing(mock_uow, token_issuer):
    result = await VerifyRefreshTokenUseCase(mock_uow, token_issuer).execute(None)

    assert result.error.code == "REFRESH_TOKEN_REQUIRED"
    mock_uow.sessions.find_by_token.assert_not_called()


@pytest.mark.asyncio
async def test_verify_rejects_access_token(mock_uow, token_issuer, make_user):
    """An access token presented as a refresh token fails signature checks"""
    pair = token_issuer.issue_pair(make_user())

    result = await VerifyRefreshTokenUseCase(mock_uow, token_issuer).execute(pair.access_token)

    assert result.error.code == "TOKEN_INVALID"


@pytest.mark.asyncio
async def test_verify_expired_refresh_token(mock_uow, token_issuer, make_user):
    pair = token_issuer.issue_pair(
        make_user(), now=datetime.now(UTC) - timedelta(days=8)
    )

    result = await VerifyRefreshTokenUseCase(mock_uow, token_issuer).execute(pair.refresh_token)

    assert result.error.code == "TOKEN_EXPIRED"


@pytest.mark.asyncio
async def test_verify_revoked_session(mock_uow, token_issuer, make_user):
    """Signed token whose session was revoked or rotated is invalid"""
    pair = token_issuer.issue_pair(make_user())
    mock_uow.sessions.find_by_token.return_value = None

    result = await VerifyRefreshTokenUseCase(mock_uow, token_issuer).execute(pair.refresh_token)

    assert result.error.code == "TOKEN_INVALID"


@pytest.mark.asyncio
async def test_verify_session_of_another_user(mock_uow, token_issuer, make_user):
    user = make_user()
    pair = token_issuer.issue_pair(user)
    mock_uow.sessions.find_by_token.return_value = _live_session(make_user(email="x@acme.com"))

    result = await VerifyRefreshTokenUseCase(mock_uow, token_issuer).execute(pair.refresh_token)

    assert result.error.code == "TOKEN_INVALID"


@pytest.mark.asyncio
async def test_verify_inactive_user(mock_uow, token_issuer, make_user):
    user = make_user(is_active=False)
    pair = token_issuer.issue_pair(user)
    mock_uow.sessions.find_by_token.return_value = _live_session(user)
    mock_uow.users.get_by_id.return_value = user

    result = await VerifyRefreshTokenUseCase(mock_uow, token_issuer).execute(pair.refresh_token)

    assert result.error.code == "USER_INACTIVE"


def _context(user, refresh_token="old-refresh-token"):
    return RefreshContext(
        user_id=user.id, email=user.email, role="CLIENT", refresh_token=refresh_token
    )


@pytest.mark.asyncio
async def test_successful_rotation(mock_uow, token_issuer, make_user):
    """Old token revoked and new session persisted in the same transaction"""
    user = make_user()
    mock_uow.users.get_by_id.return_value = user

    result = await RefreshTokenUseCase(mock_uow, token_issuer).execute(_context(user))

    assert result.is_ok()
    assert result.value.refresh_token != "old-refresh-token"
    mock_uow.sessions.revoke_by_token.assert_called_once_with("old-refresh-token")
    mock_uow.sessions.create.assert_called_once()
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_rotation_loses_race(mock_uow, token_issuer, make_user):
    """A token already rotated by a concurrent request issues nothing"""
    user = make_user()
    mock_uow.sessions.revoke_by_token.return_value = False

    result = await RefreshTokenUseCase(mock_uow, token_issuer).execute(_context(user))

    assert result.error.code == "REFRESH_TOKEN_ERROR"
    mock_uow.sessions.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_rotation_storage_failure(mock_uow, token_issuer, make_user):
    user = make_user()
    mock_uow.sessions.revoke_by_token.side_effect = RuntimeError("db down")

    result = await RefreshTokenUseCase(mock_uow, token_issuer).execute(_context(user))

    assert result.error.code == "REFRESH_TOKEN_ERROR"
    mock_uow.sessions.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_rotation_user_disabled_meanwhile(mock_uow, token_issuer, make_user):
    user = make_user(is_active=False)
    mock_uow.users.get_by_id.return_value = user

    result = await RefreshTokenUseCase(mock_uow, token_issuer).execute(_context(user))

    assert result.error.code == "USER_INACTIVE"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_rotation_unknown_user(mock_uow, token_issuer, make_user):
    result = await RefreshTokenUseCase(mock_uow, token_issuer).execute(
        RefreshContext(user_id=uuid4(), email="x@acme.com", role="CLIENT", refresh_token="t")
    )

    assert result.error.code == "USER_INACTIVE"
