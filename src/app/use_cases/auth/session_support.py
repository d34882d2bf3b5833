from src.app.services.token_issuer import TokenIssuer, TokenPair, hash_refresh_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import as_naive_utc
from src.domain.entities import RefreshSession, User
from .register_dto import AuthResponse, TokenInfo, UserInfo


async def start_session(uow: UnitOfWork, token_issuer: TokenIssuer, user: User) -> TokenPair:
    """
    Issue a token pair and persist its refresh session.

    Runs inside the caller's transaction; the caller commits before the
    refresh token leaves the use case.
    """
    pair = token_issuer.issue_pair(user)
    await uow.sessions.create(
        RefreshSession(
            user_id=user.id,
            token_hash=hash_refresh_token(pair.refresh_token),
            expires_at=as_naive_utc(pair.refresh_expires_at),
        )
    )
    return pair


def build_auth_response(user: User, pair: TokenPair) -> AuthResponse:
    return AuthResponse(
        user=UserInfo.from_entity(user),
        access_token=pair.access_token,
        refresh_token=pair.refresh_token,
        token_info=TokenInfo(
            access_token_expires_at=pair.access_expires_at,
            refresh_token_expires_at=pair.refresh_expires_at,
        ),
    )
