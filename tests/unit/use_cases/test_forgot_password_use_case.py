from unittest.mock import AsyncMock, MagicMock
from urllib.parse import parse_qs, urlparse

import pytest

from src.app.use_cases.auth import ForgotPasswordUseCase


@pytest.fixture
def notifications():
    service = MagicMock()
    service.send = AsyncMock()
    return service


def _reset_link(message):
    return next(line for line in message.body.splitlines() if line.startswith("http"))


@pytest.mark.asyncio
async def test_forgot_password_sends_reset_link(
    mock_uow, reset_tokens, notifications, settings, make_user
):
    user = make_user()
    mock_uow.users.get_by_email.return_value = user
    use_case = ForgotPasswordUseCase(mock_uow, reset_tokens, notifications, settings)

    result = await use_case.execute("User@Acme.com")

    assert result.is_ok()
    assert result.value.status == "sent"
    mock_uow.users.get_by_email.assert_called_once_with("user@acme.com")

    message = notifications.send.call_args[0][0]
    assert message.recipient == "user@acme.com"
    assert message.sender == "security@example.com"
    assert "60 minutes" in message.body

    link = urlparse(_reset_link(message))
    assert f"{link.scheme}://{link.netloc}{link.path}" == (
        "https://app.example.com/auth/reset-password"
    )
    token = parse_qs(link.query)["token"][0]
    claims = reset_tokens.verify(token)
    assert claims.is_ok()
    assert claims.value.user_id == user.id


@pytest.mark.asyncio
async def test_forgot_password_same_response_for_unknown_email(
    mock_uow, reset_tokens, notifications, settings, make_user
):
    """No email enumeration"""
    use_case = ForgotPasswordUseCase(mock_uow, reset_tokens, notifications, settings)

    unknown = await use_case.execute("nobody@acme.com")
    mock_uow.users.get_by_email.return_value = make_user()
    known = await use_case.execute("user@acme.com")

    assert unknown.value == known.value
    notifications.send.assert_called_once()


@pytest.mark.asyncio
async def test_forgot_password_disabled_user_gets_nothing(
    mock_uow, reset_tokens, notifications, settings, make_user
):
    mock_uow.users.get_by_email.return_value = make_user(is_active=False)
    use_case = ForgotPasswordUseCase(mock_uow, reset_tokens, notifications, settings)

    result = await use_case.execute("user@acme.com")

    assert result.value.status == "sent"
    notifications.send.assert_not_called()


@pytest.mark.asyncio
async def test_forgot_password_send_failure_is_hidden(
    mock_uow, reset_tokens, notifications, settings, make_user
):
    mock_uow.users.get_by_email.return_value = make_user()
    notifications.send.side_effect = ConnectionError("smtp down")
    use_case = ForgotPasswordUseCase(mock_uow, reset_tokens, notifications, settings)

    result = await use_case.execute("user@acme.com")

    assert result.is_ok()
    assert result.value.status == "sent"
