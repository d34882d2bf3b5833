from datetime import UTC, datetime

from fastapi import Response

from src.app.services.settings import AuthSettings


def _cookie_options(settings: AuthSettings) -> dict:
    return {
        "httponly": True,
        "secure": settings.production,
        "samesite": "strict" if settings.production else "lax",
        "path": "/",
        "domain": settings.cookie_domain,
    }


def set_refresh_cookie(
    response: Response, refresh_token: str, expires_at: datetime, settings: AuthSettings
) -> None:
    """Store the refresh token in an HTTP-only cookie scoped to the whole app"""
    max_age = max(int((expires_at - datetime.now(UTC)).total_seconds()), 0)
    response.set_cookie(
        settings.refresh_cookie_name,
        refresh_token,
        max_age=max_age,
        **_cookie_options(settings),
    )


def clear_refresh_cookie(response: Response, settings: AuthSettings) -> None:
    response.delete_cookie(settings.refresh_cookie_name, **_cookie_options(settings))
