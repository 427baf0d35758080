import logging

from sqlalchemy.exc import IntegrityError

from libs.result import Error, Result, Return
from src.app.services.password_hasher import PasswordHasher
from src.app.services.session_issuer import SessionIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Account, normalize_email
from .dtos import AuthenticatedAccount, SignupCommand, to_account_info

logger = logging.getLogger(__name__)

USERNAME_TAKEN = Error("USERNAME_TAKEN", "Username already taken", field="username")
EMAIL_TAKEN = Error("EMAIL_TAKEN", "Email already registered", field="email")


class SignupUseCase:
    """
    Signup Use Case

    Command/Response Pattern:
    - Input: SignupCommand (validated business intent)
    - Output: Result[AuthenticatedAccount]

    Business Logic:
    1. Check username uniqueness (case-insensitive)
    2. Check email uniqueness (case-insensitive)
    3. Hash password with Argon2id
    4. Create Account; a unique-constraint failure from a concurrent
       signup is reported as the same 409 conflict
    5. Commit, then issue a session token
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

    async def execute(self, command: SignupCommand) -> Result[AuthenticatedAccount]:
        """
        Execute signup use case

        Args:
            command: SignupCommand with validated username, email, password

        Returns:
            Result[AuthenticatedAccount], or Error(USERNAME_TAKEN / EMAIL_TAKEN)
        """
        email = normalize_email(command.email)

        async with self.uow:
            if await self.uow.accounts.exists_by_username(command.username):
                return Return.err(USERNAME_TAKEN)

            if await self.uow.accounts.exists_by_email(email):
                return Return.err(EMAIL_TAKEN)

            account = Account(
                username=command.username,
                username_key=command.username.lower(),
                email=email,
                password_hash=self.password_hasher.hash(command.password),
            )

            try:
                account = await self.uow.accounts.create(account)
                await self.uow.commit()
            except IntegrityError:
                # Lost a race against a concurrent signup between check and insert
                await self.uow.rollback()
                logger.info(f"Signup uniqueness race for username '{command.username}'")
                if await self.uow.accounts.exists_by_username(command.username):
                    return Return.err(USERNAME_TAKEN)
                return Return.err(EMAIL_TAKEN)

        return Return.ok(
            AuthenticatedAccount(
                account=to_account_info(account),
                session_token=self.session_issuer.issue(account.id),
            )
        )
