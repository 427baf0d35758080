from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import ClientError, ServerError
from src.app.services.email_sender import IEmailSender
from src.app.services.password_hasher import PasswordHasher
from src.app.services.session_issuer import (
    SessionIssuer,
    render_cleared_session_cookie,
    render_session_cookie,
)
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    AccountInfo,
    AuthenticatedAccount,
    ForgotPasswordResponse,
    ForgotPasswordUseCase,
    GetCurrentAccountUseCase,
    ResetPasswordUseCase,
    SigninUseCase,
    SignupCommand,
    SignupUseCase,
    VerifyResetTokenResponse,
    VerifyResetTokenUseCase,
)
from src.depends import (
    get_clock,
    get_config,
    get_current_account_id,
    get_email_sender,
    get_password_hasher,
    get_session_issuer,
    get_unit_of_work,
)
from src.domain.base import Clock

router = APIRouter(prefix="/auth", tags=["Authentication"])


def set_session_cookie(response: Response, session_token: str, config) -> None:
    response.headers.append(
        "set-cookie",
        render_session_cookie(session_token, config.COOKIE_DOMAIN, config.is_production()),
    )


class AccountResponse(BaseModel):
    """Body of signup and signin responses"""

    user: AccountInfo


class CurrentAccountResponse(BaseModel):
    """Body of /me; user is null for anonymous callers"""

    user: Optional[AccountInfo] = None


class SignoutResponse(BaseModel):
    success: bool


class ResetPasswordResponse(BaseModel):
    success: bool
    message: str


class SignupRequest(BaseModel):
    """
    Signup HTTP request payload

    Validates incoming HTTP request before converting to SignupCommand.
    """

    username: str = Field(
        ...,
        min_length=3,
        max_length=20,
        pattern=r"^[a-zA-Z0-9_-]+$",
        description="Letters, numbers, hyphens and underscores (3-20 chars)",
    )
    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(..., min_length=8, description="Password (min 8 chars)")


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=AccountResponse)
async def signup(
    request: SignupRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    session_issuer: SessionIssuer = Depends(get_session_issuer),
    config=Depends(get_config),
):
    """
    Account Signup

    Creates a new account and signs it in.

    Raises:
        - 409 Conflict: Username or email already taken (field-scoped)
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 500 Internal Server Error: Server error
    """
    command = SignupCommand(
        username=request.username, email=request.email, password=request.password
    )

    use_case = SignupUseCase(uow, password_hasher, session_issuer)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code in ("USERNAME_TAKEN", "EMAIL_TAKEN"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    authenticated: AuthenticatedAccount = result.value
    set_session_cookie(response, authenticated.session_token, config)
    return AccountResponse(user=authenticated.account)


class SigninRequest(BaseModel):
    """
    Signin HTTP request payload
    """

    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(..., min_length=1, description="Password")


@router.post("/signin", status_code=status.HTTP_200_OK, response_model=AccountResponse)
async def signin(
    request: SigninRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    session_issuer: SessionIssuer = Depends(get_session_issuer),
    config=Depends(get_config),
):
    """
    Account Signin

    Raises:
        - 401 Unauthorized: Invalid credentials (never says which field)
        - 500 Internal Server Error: Server error
    """
    use_case = SigninUseCase(uow, password_hasher, session_issuer)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    authenticated: AuthenticatedAccount = result.value
    set_session_cookie(response, authenticated.session_token, config)
    return AccountResponse(user=authenticated.account)


@router.post("/signout", status_code=status.HTTP_200_OK, response_model=SignoutResponse)
async def signout(response: Response, config=Depends(get_config)):
    """
    Account Signout

    Sessions are stateless, so signing out only clears the cookie.
    """
    response.headers.append(
        "set-cookie",
        render_cleared_session_cookie(config.COOKIE_DOMAIN, config.is_production()),
    )
    return SignoutResponse(success=True)


@router.get("/me", status_code=status.HTTP_200_OK, response_model=CurrentAccountResponse)
async def me(
    account_id: Optional[UUID] = Depends(get_current_account_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current Account

    Returns the signed-in account, or user=null for anonymous callers.

    Raises:
        - 404 Not Found: Session refers to an account that no longer exists
    """
    if account_id is None:
        return CurrentAccountResponse(user=None)

    result = await GetCurrentAccountUseCase(uow).execute(account_id)
    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)

    return CurrentAccountResponse(user=result.value)


class ForgotPasswordRequest(BaseModel):
    """
    Forgot password HTTP request payload
    """

    email: EmailStr = Field(..., description="Account email address")


@router.post(
    "/forgot-password", status_code=status.HTTP_200_OK, response_model=ForgotPasswordResponse
)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
    clock: Clock = Depends(get_clock),
    config=Depends(get_config),
):
    """
    Forgot Password

    Emails a reset link valid for 1 hour when the email belongs to an account.

    Security:
        - Same response for known and unknown emails (no enumeration)
        - 3 requests per email per hour

    Raises:
        - 429 Too Many Requests: Rate limit exceeded
        - 503 Service Unavailable: Reset email could not be sent
    """
    use_case = ForgotPasswordUseCase(uow, email_sender, config.APP_BASE_URL, clock)
    result = await use_case.execute(request.email)

    if result.is_err():
        error = result.error
        if error.code == "RATE_LIMITED":
            raise ClientError(error, status_code=status.HTTP_429_TOO_MANY_REQUESTS)
        if error.code == "EMAIL_DELIVERY_FAILED":
            raise ServerError(error, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
        raise ServerError(error)

    return result.value


@router.get(
    "/verify-reset-token/{token}",
    status_code=status.HTTP_200_OK,
    response_model=VerifyResetTokenResponse,
    response_model_exclude_none=True,
)
async def verify_reset_token(
    token: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    Verify Reset Token

    Lets the reset form tell the user up front whether the link still works.
    """
    result = await VerifyResetTokenUseCase(uow, clock).execute(token)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """
    Reset password HTTP request payload
    """

    token: str = Field(..., min_length=1, description="Password reset token from email")
    password: str = Field(..., description="New password")


@router.post("/reset-password", status_code=status.HTTP_200_OK, response_model=ResetPasswordResponse)
async def reset_password(
    request: ResetPasswordRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    session_issuer: SessionIssuer = Depends(get_session_issuer),
    email_sender: IEmailSender = Depends(get_email_sender),
    clock: Clock = Depends(get_clock),
    config=Depends(get_config),
):
    """
    Reset Password

    Consumes the reset token, sets the new password and signs the account in.

    Raises:
        - 400 Bad Request: Password does not meet strength requirements
        - 404 Not Found: Unknown token
        - 410 Gone: Token expired or already used
        - 500 Internal Server Error: Server error
    """
    use_case = ResetPasswordUseCase(uow, password_hasher, session_issuer, email_sender, clock)
    result = await use_case.execute(request.token, request.password)

    if result.is_err():
        error = result.error
        if error.code == "TOKEN_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("TOKEN_EXPIRED", "TOKEN_ALREADY_USED"):
            raise ClientError(error, status_code=status.HTTP_410_GONE)
        elif error.code == "INVALID_PASSWORD":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    authenticated: AuthenticatedAccount = result.value
    set_session_cookie(response, authenticated.session_token, config)
    return ResetPasswordResponse(success=True, message="Password has been reset successfully")
