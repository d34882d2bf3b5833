"""
Refresh Token Sources

Refresh tokens may arrive in a cookie, in the JSON body, or in a dedicated
header. Each location is a source; sources are tried in order and the first
non-empty value wins.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Sequence

from fastapi import Request

REFRESH_TOKEN_FIELD = "refresh_token"
REFRESH_TOKEN_HEADER = "X-Refresh-Token"


@dataclass(frozen=True)
class TokenCarrier:
    """The parts of a request a refresh token can be read from"""

    cookies: Mapping[str, str] = field(default_factory=dict)
    body: Mapping[str, Any] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)


RefreshTokenSource = Callable[[TokenCarrier], Optional[str]]


def cookie_source(cookie_name: str) -> RefreshTokenSource:
    def read(carrier: TokenCarrier) -> Optional[str]:
        return carrier.cookies.get(cookie_name)

    return read


def body_source(field_name: str = REFRESH_TOKEN_FIELD) -> RefreshTokenSource:
    def read(carrier: TokenCarrier) -> Optional[str]:
        value = carrier.body.get(field_name)
        return value if isinstance(value, str) else None

    return read


def header_source(header_name: str = REFRESH_TOKEN_HEADER) -> RefreshTokenSource:
    def read(carrier: TokenCarrier) -> Optional[str]:
        value = carrier.headers.get(header_name)
        if value is None:
            # Starlette headers are case-insensitive, plain dicts are not
            value = carrier.headers.get(header_name.lower())
        return value

    return read


class RefreshTokenExtractor:
    def __init__(self, sources: Sequence[RefreshTokenSource]):
        self.sources = list(sources)

    def extract(self, carrier: TokenCarrier) -> Optional[str]:
        for source in self.sources:
            token = source(carrier)
            if token:
                return token
        return None


def default_extractor(cookie_name: str) -> RefreshTokenExtractor:
    """Cookie, then request body, then header"""
    return RefreshTokenExtractor(
        [cookie_source(cookie_name), body_source(), header_source()]
    )


async def read_json_body(request: Request) -> Mapping[str, Any]:
    """Parse an optional JSON object body; anything else counts as empty."""
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


async def carrier_from_request(request: Request) -> TokenCarrier:
    return TokenCarrier(
        cookies=request.cookies,
        body=await read_json_body(request),
        headers=request.headers,
    )
