from libs.result import Result, Return
from src.app.services.reset_token_store import ResetTokenStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import Clock, utc_now
from .dtos import VerifyResetTokenResponse


class VerifyResetTokenUseCase:
    """
    Read-only token check backing the reset form.

    Reports why a token is unusable (expired / used / not_found) since the
    holder already proved they received the link.
    """

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now):
        self.uow = uow
        self._clock = clock

    async def execute(self, token: str) -> Result[VerifyResetTokenResponse]:
        async with self.uow:
            validation = await ResetTokenStore(self.uow, self._clock).validate(token)

        if validation.is_valid:
            return Return.ok(
                VerifyResetTokenResponse(valid=True, email=validation.account_email)
            )

        return Return.ok(
            VerifyResetTokenResponse(valid=False, reason=validation.state.value)
        )
