from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from src.app.use_cases.admin import CleanupExpiredSessionsUseCase
from src.app.use_cases.users import GetProfileUseCase, ListSessionsUseCase
from src.domain.entities import RefreshSession


@pytest.mark.asyncio
async def test_get_profile(mock_uow, make_user):
    user = make_user(phone="+1 555 0100")
    mock_uow.users.get_by_id.return_value = user

    result = await GetProfileUseCase(mock_uow).execute(user.id)

    assert result.is_ok()
    assert result.value.email == "user@acme.com"
    assert result.value.phone == "+1 555 0100"
    assert result.value.role == "CLIENT"


@pytest.mark.asyncio
async def test_get_profile_unknown_user(mock_uow):
    result = await GetProfileUseCase(mock_uow).execute(uuid4())

    assert result.error.code == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_list_sessions_hides_token(mock_uow, make_user):
    user = make_user()
    expires_at = datetime.now(UTC).replace(tzinfo=None) + timedelta(days=7)
    mock_uow.sessions.get_active_by_user_id.return_value = [
        RefreshSession(user_id=user.id, token_hash="a" * 64, expires_at=expires_at),
        RefreshSession(user_id=user.id, token_hash="b" * 64, expires_at=expires_at),
    ]

    result = await ListSessionsUseCase(mock_uow).execute(user.id)

    sessions = result.value.sessions
    assert len(sessions) == 2
    assert all("token_hash" not in s.model_dump() for s in sessions)
    mock_uow.sessions.get_active_by_user_id.assert_called_once_with(user.id)


@pytest.mark.asyncio
async def test_cleanup_expired_sessions(mock_uow):
    now = datetime(2026, 1, 1)
    mock_uow.sessions.delete_expired.return_value = 4

    result = await CleanupExpiredSessionsUseCase(mock_uow).execute(now)

    assert result.value.status == "completed"
    assert result.value.sessions_deleted == 4
    mock_uow.sessions.delete_expired.assert_called_once_with(now)
    mock_uow.commit.assert_called_once()
