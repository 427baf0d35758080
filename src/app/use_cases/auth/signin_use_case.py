"""
Signin Use Case

Authenticates an account by email and password and issues a session.
"""

from libs.result import Error, Result, Return
from src.app.services.password_hasher import PasswordHasher
from src.app.services.session_issuer import SessionIssuer
from src.app.services.unit_of_work import UnitOfWork
from .dtos import AuthenticatedAccount, to_account_info

INVALID_CREDENTIALS = Error("INVALID_CREDENTIALS", "Invalid credentials")


class SigninUseCase:
    """
    Use case for signin and session issuance.

    Business Rules:
    - Unknown email and wrong password produce the same generic error
    - An Argon2 verification runs even when the email is unknown
    - Hashes made with outdated parameters are upgraded on successful signin
    """

    def __init__(
        self,
        uow: UnitOfWork,
        password_hasher: PasswordHasher,
        session_issuer: SessionIssuer,
    ):
        self.uow = uow
        self.password_hasher = password_hasher
        self.session_issuer = session_issuer

    async def execute(self, email: str, password: str) -> Result[AuthenticatedAccount]:
        """
        Execute signin use case.

        Args:
            email: Account email (any case)
            password: Plain text password

        Returns:
            Result with AuthenticatedAccount, or Error(INVALID_CREDENTIALS)
        """
        async with self.uow:
            account = await self.uow.accounts.get_by_email(email)

            if account is None:
                self.password_hasher.verify_dummy(password)
                return Return.err(INVALID_CREDENTIALS)

            if not self.password_hasher.verify(account.password_hash, password):
                return Return.err(INVALID_CREDENTIALS)

            if self.password_hasher.needs_rehash(account.password_hash):
                await self.uow.accounts.update_password_hash(
                    account.id, self.password_hasher.hash(password)
                )
                await self.uow.commit()

            # Built before leaving the block: exit rolls back and expires loaded rows
            authenticated = AuthenticatedAccount(
                account=to_account_info(account),
                session_token=self.session_issuer.issue(account.id),
            )

        return Return.ok(authenticated)
