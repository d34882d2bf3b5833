from typing import Optional

from httpx import AsyncClient, Response

PASSWORD = "SecurePass123!"


def refresh_cookie(response: Response) -> Optional[str]:
    """Value of the refresh cookie set by a response, if any"""
    for header in response.headers.get_list("set-cookie"):
        name, _, rest = header.partition("=")
        if name.strip() == "refresh_token":
            return rest.split(";", 1)[0].strip('"')
    return None


def bearer(access_token: str) -> dict:
    return {"Authorization": f"Bearer {access_token}"}


async def register(client: AsyncClient, email: str, password: str = PASSWORD) -> Response:
    return await client.post(
        "/auth/register",
        json={
            "email": email,
            "password": password,
            "first_name": "Ada",
            "last_name": "Lovelace",
        },
    )


async def login(client: AsyncClient, email: str, password: str = PASSWORD) -> Response:
    return await client.post("/auth/login", json={"email": email, "password": password})


async def refresh_with(client: AsyncClient, refresh_token: str) -> Response:
    """Refresh using the body field only, ignoring whatever the cookie jar holds"""
    client.cookies.clear()
    return await client.post("/auth/refresh", json={"refresh_token": refresh_token})
