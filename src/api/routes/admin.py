"""
Admin API Routes - Maintenance Endpoints

These endpoints are for internal schedulers and operators.
Authentication is via Admin API Key, not session cookies.
"""

from fastapi import APIRouter, Depends, status

from src.api.error import ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.maintenance import CleanupCredentialsUseCase, CleanupResponse
from src.depends import get_clock, get_unit_of_work
from src.domain.base import Clock

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/cleanup",
    status_code=status.HTTP_200_OK,
    response_model=CleanupResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def cleanup_credentials(
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    Cleanup Credentials

    Purges reset tokens expired for over 24h and rate-limit records older
    than 24h. Same job as cleanup.py, for schedulers that prefer HTTP.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 500 Internal Server Error: Server error
    """
    use_case = CleanupCredentialsUseCase(uow, clock)
    result = await use_case.execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value
