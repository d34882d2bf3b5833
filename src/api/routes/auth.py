from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.api.utils.cookies import clear_refresh_cookie, set_refresh_cookie
from src.api.utils.rate_limit import rate_limit
from src.api.utils.refresh_token_sources import carrier_from_request, default_extractor
from src.app.services.notification_service import INotificationService
from src.app.services.password_hasher import PasswordHasher
from src.app.services.reset_token_service import ResetTokenService
from src.app.services.settings import AuthSettings
from src.app.services.token_issuer import AccessClaims, TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    AuthResponse,
    ChangePasswordResponse,
    ChangePasswordUseCase,
    ForgotPasswordUseCase,
    LoginUseCase,
    LogoutAllDevicesUseCase,
    LogoutResponse,
    LogoutUseCase,
    MessageResponse,
    RefreshTokenUseCase,
    RegisterCommand,
    RegisterUseCase,
    ResetPasswordUseCase,
    TokenInfo,
    UserInfo,
    VerifyRefreshTokenUseCase,
)
from src.app.use_cases.users import GetProfileUseCase, ListSessionsResponse, ListSessionsUseCase
from src.depends import (
    get_auth_settings,
    get_current_user,
    get_notification_service,
    get_optional_user,
    get_password_hasher,
    get_reset_token_service,
    get_token_issuer,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class AuthPayload(BaseModel):
    """
    Register/login/refresh HTTP response

    The refresh token is not part of the body; it travels in the
    HTTP-only refresh cookie.
    """

    message: str
    user: UserInfo
    access_token: str
    token_info: TokenInfo


def _auth_payload(
    message: str, data: AuthResponse, response: Response, settings: AuthSettings
) -> AuthPayload:
    set_refresh_cookie(
        response,
        data.refresh_token,
        data.token_info.refresh_token_expires_at,
        settings,
    )
    return AuthPayload(
        message=message,
        user=data.user,
        access_token=data.access_token,
        token_info=data.token_info,
    )


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    API layer responsibility: HTTP validation and serialization.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="User password (min 8 chars)")
    first_name: str = Field(..., min_length=1, max_length=50, description="First name")
    last_name: str = Field(..., min_length=1, max_length=50, description="Last name")
    phone: Optional[str] = Field(None, max_length=30, description="Phone number")


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthPayload,
    dependencies=[Depends(rate_limit("register", *ApplicationConfig.RATE_LIMIT_REGISTER))],
)
async def register(
    request: RegisterRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    User Registration

    Creates a new CLIENT account and signs it in on the calling device.
    Returns the access token in the body and the refresh token as a cookie.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 409 Conflict: Email already exists
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
        phone=request.phone,
    )

    use_case = RegisterUseCase(uow, password_hasher, token_issuer)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "EMAIL_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return _auth_payload("User registered successfully", result.value, response, settings)


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=AuthPayload,
    dependencies=[Depends(rate_limit("login", *ApplicationConfig.RATE_LIMIT_LOGIN))],
)
async def login(
    request: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    User Login

    Authenticates user and starts a new device session.

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 403 Forbidden: Account disabled
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow, password_hasher, token_issuer)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "ACCOUNT_DISABLED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return _auth_payload("Login successful", result.value, response, settings)


@router.post(
    "/refresh",
    status_code=status.HTTP_200_OK,
    response_model=AuthPayload,
    dependencies=[Depends(rate_limit("refresh", *ApplicationConfig.RATE_LIMIT_REFRESH))],
)
async def refresh(
    request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Refresh Token Pair

    Exchanges a refresh token (cookie, then JSON body `refresh_token`, then
    `X-Refresh-Token` header) for a new pair. The presented token is revoked
    (rotation); replaying it fails.

    Raises:
        - 401 Unauthorized: Missing/invalid/expired/revoked refresh token,
          inactive user, or rotation failure (requires_login)
        - 500 Internal Server Error: Server error
    """
    carrier = await carrier_from_request(request)
    refresh_token = default_extractor(settings.refresh_cookie_name).extract(carrier)

    verified = await VerifyRefreshTokenUseCase(uow, token_issuer).execute(refresh_token)
    if verified.is_err():
        error = verified.error
        if error.code in (
            "REFRESH_TOKEN_REQUIRED",
            "TOKEN_INVALID",
            "TOKEN_EXPIRED",
            "USER_INACTIVE",
        ):
            raise ClientError(
                error,
                status_code=status.HTTP_401_UNAUTHORIZED,
                hints={"requires_login": True},
            )
        raise ServerError(error)

    use_case = RefreshTokenUseCase(uow, token_issuer)
    result = await use_case.execute(verified.value)

    if result.is_err():
        error = result.error
        if error.code in ("REFRESH_TOKEN_ERROR", "USER_INACTIVE"):
            raise ClientError(
                error,
                status_code=status.HTTP_401_UNAUTHORIZED,
                hints={"requires_login": True},
            )
        raise ServerError(error)

    return _auth_payload("Tokens refreshed successfully", result.value, response, settings)


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    request: Request,
    response: Response,
    current_user: Optional[AccessClaims] = Depends(get_optional_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Logout

    Best effort: revokes the presented refresh token and, when the access
    token identifies the user, every session of that user. Always succeeds
    and always clears the refresh cookie.
    """
    carrier = await carrier_from_request(request)
    refresh_token = default_extractor(settings.refresh_cookie_name).extract(carrier)

    use_case = LogoutUseCase(uow)
    result = await use_case.execute(
        refresh_token=refresh_token,
        user_id=current_user.user_id if current_user else None,
    )

    clear_refresh_cookie(response, settings)
    return result.value


@router.post("/logout-all", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout_all_devices(
    response: Response,
    current_user: AccessClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Logout All Devices

    Revokes every refresh session of the authenticated user.

    Raises:
        - 401 Unauthorized: Not authenticated
        - 500 Internal Server Error: Server error
    """
    use_case = LogoutAllDevicesUseCase(uow)
    result = await use_case.execute(current_user.user_id)

    clear_refresh_cookie(response, settings)

    if result.is_err():
        error = result.error
        if error.code == "NOT_AUTHENTICATED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value


class ChangePasswordRequest(BaseModel):
    """Change password HTTP request payload"""

    current_password: str = Field(..., min_length=1, description="Current password")
    new_password: str = Field(..., min_length=8, description="New password (min 8 chars)")


@router.post(
    "/change-password",
    status_code=status.HTTP_200_OK,
    response_model=ChangePasswordResponse,
)
async def change_password(
    request: ChangePasswordRequest,
    response: Response,
    current_user: AccessClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Change Password

    Verifies the current password, stores the new one and revokes every
    session of the user (re-login required everywhere).

    Raises:
        - 400 Bad Request: CURRENT_PASSWORD_INVALID or VALIDATION_ERROR
        - 401 Unauthorized: Not authenticated
        - 404 Not Found: User not found
        - 500 Internal Server Error: Server error
    """
    use_case = ChangePasswordUseCase(uow, password_hasher)
    result = await use_case.execute(
        current_user.user_id, request.current_password, request.new_password
    )

    if result.is_err():
        error = result.error
        if error.code in ("CURRENT_PASSWORD_INVALID", "VALIDATION_ERROR"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "NOT_AUTHENTICATED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    clear_refresh_cookie(response, settings)
    return result.value


class ForgotPasswordRequest(BaseModel):
    """Forgot password HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=MessageResponse,
    dependencies=[
        Depends(
            rate_limit("forgot-password", *ApplicationConfig.RATE_LIMIT_FORGOT_PASSWORD)
        )
    ],
)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    reset_tokens: ResetTokenService = Depends(get_reset_token_service),
    notifications: INotificationService = Depends(get_notification_service),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Forgot Password

    Sends a password reset link if the account exists and is active.

    Security:
        - No email enumeration (same response for valid/invalid emails)
        - Reset token valid for 1 hour

    Returns:
        - 200 OK: Always returns success (no enumeration)
        - 500 Internal Server Error: Server error
    """
    use_case = ForgotPasswordUseCase(uow, reset_tokens, notifications, settings)
    result = await use_case.execute(request.email)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """Reset password HTTP request payload"""

    token: str = Field(..., min_length=1, description="Password reset token from email")
    new_password: str = Field(..., min_length=8, description="New password (min 8 chars)")


@router.post("/reset-password", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    reset_tokens: ResetTokenService = Depends(get_reset_token_service),
):
    """
    Reset Password

    Validates the reset token and sets the new password.
    Revokes all existing sessions for security.

    Raises:
        - 400 Bad Request: Invalid/expired token, unknown user, or password
          validation failed
        - 500 Internal Server Error: Server error
    """
    use_case = ResetPasswordUseCase(uow, password_hasher, reset_tokens)
    result = await use_case.execute(request.token, request.new_password)

    if result.is_err():
        error = result.error
        if error.code in (
            "TOKEN_INVALID",
            "TOKEN_EXPIRED",
            "USER_NOT_FOUND",
            "VALIDATION_ERROR",
        ):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


@router.get("/profile", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def get_profile(
    current_user: AccessClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Profile

    Raises:
        - 401 Unauthorized: Not authenticated / token invalid or expired
        - 404 Not Found: User not found
    """
    use_case = GetProfileUseCase(uow)
    result = await use_case.execute(current_user.user_id)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class VerifyTokenResponse(BaseModel):
    valid: bool
    user_id: str
    email: str
    role: str


@router.get("/verify", status_code=status.HTTP_200_OK, response_model=VerifyTokenResponse)
async def verify_token(current_user: AccessClaims = Depends(get_current_user)):
    """Check the access token; 401 with needs_refresh when it has expired."""
    return VerifyTokenResponse(
        valid=True,
        user_id=str(current_user.user_id),
        email=current_user.email,
        role=current_user.role,
    )


@router.get("/sessions", status_code=status.HTTP_200_OK, response_model=ListSessionsResponse)
async def list_sessions(
    current_user: AccessClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List the live sessions (devices) of the authenticated user."""
    use_case = ListSessionsUseCase(uow)
    result = await use_case.execute(current_user.user_id)

    if result.is_err():
        raise ServerError(result.error)

    return result.value
