from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, EmailStr, Field

from session_gate.api.error import ClientError, ServerError
from session_gate.app.services.auth_settings import AuthSettings
from session_gate.app.services.password_hasher import IPasswordHasher
from session_gate.app.services.session_cookie import CookieInstruction, SessionCookieFactory
from session_gate.app.services.token_issuer import ITokenIssuer
from session_gate.app.services.unit_of_work import UnitOfWork
from session_gate.app.use_cases.auth import (
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    LoginUseCase,
    LoginResponse,
    LogoutUseCase,
    VerifySessionUseCase,
    VerifySessionResponse,
    RequestPasswordResetUseCase,
    RequestPasswordResetResponse,
    ResetPasswordCommand,
    ResetPasswordUseCase,
    ResetPasswordResponse,
)
from session_gate.depends import (
    get_auth_settings,
    get_cookie_factory,
    get_password_hasher,
    get_session_token,
    get_token_issuer,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])

RESET_TOKEN_ERRORS = ("TOKEN_EXPIRED", "TOKEN_USED", "TOKEN_NOT_FOUND", "TOKEN_MISMATCH")


def apply_cookie(response: Response, cookie: CookieInstruction) -> None:
    response.set_cookie(**cookie.model_dump())


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    Password strength is checked by the use case so the policy lives in
    one place.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")
    name: Optional[str] = Field(default=None, max_length=100, description="Display name")


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse
)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
    hasher: IPasswordHasher = Depends(get_password_hasher),
):
    """
    User Registration

    Creates a new account. The response never contains the password hash.

    Raises:
        - 400 Bad Request: Invalid input, weak password, or email already registered
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        email=request.email, password=request.password, name=request.name
    )

    use_case = RegisterUseCase(uow, settings, hasher)
    result = await use_case.execute(command)

    # Handle errors
    if result.is_err():
        error = result.error
        if error.code in ("VALIDATION_ERROR", "DUPLICATE_EMAIL"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: IPasswordHasher = Depends(get_password_hasher),
    token_issuer: ITokenIssuer = Depends(get_token_issuer),
    cookies: SessionCookieFactory = Depends(get_cookie_factory),
):
    """
    User Login

    Authenticates the user and sets the HTTP-only session cookie.

    Raises:
        - 401 Unauthorized: Invalid credentials (same for unknown email and wrong password)
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow, hasher, token_issuer, cookies)
    result = await use_case.execute(request.email, request.password)

    # Handle errors
    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    login_result = result.value
    apply_cookie(response, login_result.cookie)
    return LoginResponse(user=login_result.user, message="Logged in successfully")


class LogoutResponse(BaseModel):
    success: bool


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    response: Response,
    cookies: SessionCookieFactory = Depends(get_cookie_factory),
):
    """
    User Logout

    Overwrites the session cookie with an expired one. The token itself is
    not invalidated server-side.
    """
    result = LogoutUseCase(cookies).execute()
    apply_cookie(response, result.value.cookie)
    return LogoutResponse(success=result.value.success)


@router.get("/verify", status_code=status.HTTP_200_OK, response_model=VerifySessionResponse)
async def verify(
    token: Optional[str] = Depends(get_session_token),
    token_issuer: ITokenIssuer = Depends(get_token_issuer),
):
    """
    Verify Session

    Returns the decoded session claims when the cookie holds a valid token.

    Raises:
        - 401 Unauthorized: Missing, invalid, expired or malformed token
    """
    result = VerifySessionUseCase(token_issuer).execute(token)

    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_401_UNAUTHORIZED)

    return result.value


class RequestPasswordResetRequest(BaseModel):
    """
    Request password reset HTTP request payload

    Validates incoming password reset request.
    """

    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/request-reset",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
    response_model_exclude_none=True,
)
async def request_password_reset(
    request: RequestPasswordResetRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Request Password Reset

    Generates a single-use reset token valid for one hour.

    Security:
        - No email enumeration (same response for known and unknown emails)
        - Token is cryptographically secure (32 bytes)

    Returns:
        - 200 OK: Always returns the generic message
        - 500 Internal Server Error: Server error
    """
    use_case = RequestPasswordResetUseCase(uow, settings)
    result = await use_case.execute(request.email)

    # Handle errors
    if result.is_err():
        raise ServerError(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """
    Reset password HTTP request payload

    Validates incoming password reset confirmation request.
    """

    token: str = Field(..., min_length=1, description="Password reset token")
    email: EmailStr = Field(..., description="Email of the account being reset")
    new_password: str = Field(..., min_length=1, description="New password")


@router.post(
    "/reset-password", status_code=status.HTTP_200_OK, response_model=ResetPasswordResponse
)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
    hasher: IPasswordHasher = Depends(get_password_hasher),
):
    """
    Reset Password

    Validates the reset token against the email and sets the new password.

    Raises:
        - 400 Bad Request: TOKEN_EXPIRED, TOKEN_USED, TOKEN_NOT_FOUND,
          TOKEN_MISMATCH, or password validation failed
        - 500 Internal Server Error: Server error
    """
    command = ResetPasswordCommand(
        token=request.token, email=request.email, new_password=request.new_password
    )

    use_case = ResetPasswordUseCase(uow, settings, hasher)
    result = await use_case.execute(command)

    # Handle errors
    if result.is_err():
        error = result.error
        if error.code in RESET_TOKEN_ERRORS or error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value
