import asyncio

import pytest
from httpx import ASGITransport, AsyncClient

from tests.integration.helpers import bearer, login, refresh_cookie, refresh_with, register


@pytest.mark.asyncio
async def test_refresh_rotates_token(client: AsyncClient):
    """The new pair works; the presented refresh token is spent"""
    old_token = refresh_cookie(await register(client, "user@x.test"))

    response = await refresh_with(client, old_token)

    assert response.status_code == 200
    new_token = refresh_cookie(response)
    assert new_token and new_token != old_token
    assert response.json()["access_token"]

    profile = await client.get("/auth/profile", headers=bearer(response.json()["access_token"]))
    assert profile.status_code == 200


@pytest.mark.asyncio
async def test_refresh_replay_fails(client: AsyncClient):
    old_token = refresh_cookie(await register(client, "user@x.test"))
    first = await refresh_with(client, old_token)
    assert first.status_code == 200

    replay = await refresh_with(client, old_token)

    assert replay.status_code == 401
    error = replay.json()["error"]
    assert error["code"] == "TOKEN_INVALID"
    assert error["requires_login"] is True

    # The rotated token is still good
    assert (await refresh_with(client, refresh_cookie(first))).status_code == 200


@pytest.mark.asyncio
async def test_refresh_from_cookie(client: AsyncClient):
    """The cookie set at registration is picked up without a body"""
    await register(client, "user@x.test")

    response = await client.post("/auth/refresh")

    assert response.status_code == 200
    assert refresh_cookie(response)


@pytest.mark.asyncio
async def test_refresh_from_header(client: AsyncClient):
    token = refresh_cookie(await register(client, "user@x.test"))
    client.cookies.clear()

    response = await client.post("/auth/refresh", headers={"X-Refresh-Token": token})

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_refresh_without_token(client: AsyncClient):
    client.cookies.clear()

    response = await client.post("/auth/refresh")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "REFRESH_TOKEN_REQUIRED"
    assert response.json()["error"]["requires_login"] is True


@pytest.mark.asyncio
async def test_access_token_is_not_a_refresh_token(client: AsyncClient):
    access_token = (await register(client, "user@x.test")).json()["access_token"]

    response = await refresh_with(client, access_token)

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "TOKEN_INVALID"


@pytest.mark.asyncio
async def test_sessions_listed_per_device(client: AsyncClient):
    access_token = (await register(client, "user@x.test")).json()["access_token"]
    await login(client, "user@x.test")

    response = await client.get("/auth/sessions", headers=bearer(access_token))

    assert response.status_code == 200
    assert len(response.json()["sessions"]) == 2


@pytest.mark.asyncio
async def test_concurrent_refresh_rotates_once(app, client: AsyncClient):
    """Simultaneous refreshes of one token: exactly one wins, the rest must log in"""
    token = refresh_cookie(await register(client, "user@x.test"))

    async def refresh_once():
        # Separate clients so no cookie jar is shared between requests
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            return await ac.post("/auth/refresh", json={"refresh_token": token})

    responses = await asyncio.gather(*(refresh_once() for _ in range(5)))

    statuses = sorted(r.status_code for r in responses)
    assert statuses == [200, 401, 401, 401, 401]
    for response in responses:
        if response.status_code == 401:
            error = response.json()["error"]
            # Losers of the race see REFRESH_TOKEN_ERROR, latecomers see a spent token
            assert error["code"] in {"REFRESH_TOKEN_ERROR", "TOKEN_INVALID"}
            assert error["requires_login"] is True
