"""
Admin API Routes - System Maintenance Endpoints

These endpoints are for schedulers and internal tooling.
Authentication is via Admin API Key, not user JWTs.
"""

from fastapi import APIRouter, Depends, status

from src.api.error import ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import (
    CleanupExpiredSessionsResponse,
    CleanupExpiredSessionsUseCase,
)
from src.depends import get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/sessions/cleanup",
    status_code=status.HTTP_200_OK,
    response_model=CleanupExpiredSessionsResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def cleanup_expired_sessions(uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Cleanup Expired Sessions

    Scheduler endpoint deleting refresh sessions whose expiry has passed.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 500 Internal Server Error: Server error
    """
    use_case = CleanupExpiredSessionsUseCase(uow)
    result = await use_case.execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value
