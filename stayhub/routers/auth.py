"""
Session API endpoints: sign-up, sign-in, token refresh, current session and sign-out.
"""

from fastapi import APIRouter, Depends, status
from stayhub.models.profile import Profile
from stayhub.services.auth import AuthService
from stayhub.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    LoginResponse,
    RefreshTokenRequest,
    AccessTokenResponse,
    SessionResponse,
    LogoutResponse
)
from stayhub.schemas.user import UserResponse
from stayhub.schemas.error import COMMON_ERROR_RESPONSES
from stayhub.utils.auth import access_token_lifetime_seconds
from stayhub.utils.dependencies import get_auth_service, get_current_user


router = APIRouter(prefix="/auth", tags=["Authentication"])


def _login_response(profile: Profile, access_token: str, refresh_token: str) -> LoginResponse:
    return LoginResponse(
        user=UserResponse.model_validate(profile.to_dict()),
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="bearer",
        expires_in=access_token_lifetime_seconds()
    )


@router.post(
    "/register",
    response_model=LoginResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Sign up",
    description="Create an account with the base user role and return JWT tokens",
    responses={409: COMMON_ERROR_RESPONSES[409], 422: COMMON_ERROR_RESPONSES[422]}
)
async def register(
    register_data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> LoginResponse:
    profile = await auth_service.register(
        email=register_data.email,
        password=register_data.password,
        full_name=register_data.full_name
    )
    access_token, refresh_token = auth_service.create_tokens(profile)
    return _login_response(profile, access_token, refresh_token)


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign in",
    description="Authenticate with email and password, returns JWT tokens",
    responses={401: COMMON_ERROR_RESPONSES[401]}
)
async def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> LoginResponse:
    """
    Authenticate and return JWT tokens.

    Raises:
        InvalidCredentialsError: If credentials are invalid
        InactiveUserError: If the account is inactive
    """
    profile, access_token, refresh_token = await auth_service.login(
        email=login_data.email,
        password=login_data.password
    )
    return _login_response(profile, access_token, refresh_token)


@router.post(
    "/refresh",
    response_model=AccessTokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Refresh access token",
    description="Generate new access token using refresh token",
    responses={401: COMMON_ERROR_RESPONSES[401]}
)
async def refresh_token(
    refresh_data: RefreshTokenRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> AccessTokenResponse:
    access_token = await auth_service.refresh_access_token(refresh_data.refresh_token)
    return AccessTokenResponse(
        access_token=access_token,
        token_type="bearer",
        expires_in=access_token_lifetime_seconds()
    )


@router.get(
    "/me",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Current session",
    description="Signed-in account with role flags",
    responses={401: COMMON_ERROR_RESPONSES[401]}
)
async def get_session(current_user: Profile = Depends(get_current_user)) -> SessionResponse:
    return SessionResponse(
        user=UserResponse.model_validate(current_user.to_dict()),
        roles=[role.value for role in current_user.roles],
        is_admin=current_user.is_admin,
        is_realtor=current_user.is_realtor
    )


@router.post(
    "/logout",
    response_model=LogoutResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign out",
    description="Tokens are stateless; clients discard them"
)
async def logout(current_user: Profile = Depends(get_current_user)) -> LogoutResponse:
    return LogoutResponse(message="Signed out")
