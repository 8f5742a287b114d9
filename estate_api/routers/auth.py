"""
Authentication API endpoints for sign-up, sign-in and sign-out.
Sessions are JWT access tokens stored in an httpOnly cookie.
"""

from fastapi import APIRouter, Depends, Response, status
from estate_api.services.auth import AuthService
from estate_api.schemas.auth import SignupRequest, SigninRequest, SigninResponse
from estate_api.schemas.common import MessageResponse
from estate_api.schemas.error import get_error_responses
from estate_api.schemas.user import UserResponse
from estate_api.utils.dependencies import get_auth_service
from estate_api.config import settings


router = APIRouter(prefix="/auth", tags=["Authentication"])


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.access_cookie_name,
        value=token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax"
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.access_cookie_name,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax"
    )


@router.post(
    "/signup",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Sign up",
    description="Create a new user account",
    responses=get_error_responses(400, 500)
)
async def signup(
    signup_data: SignupRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> UserResponse:
    """
    Register a new user.

    Args:
        signup_data: Username, email and password
        auth_service: Authentication service

    Returns:
        Created user without the password hash

    Raises:
        ValidationError: If the email is already registered
    """
    user = await auth_service.signup(signup_data)
    return UserResponse.model_validate(user.to_dict())


@router.post(
    "/signin",
    response_model=SigninResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign in",
    description="Authenticate with email and password; sets the session cookie",
    responses=get_error_responses(400, 401)
)
async def signin(
    signin_data: SigninRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service)
) -> SigninResponse:
    """
    Authenticate user and start a session.

    Args:
        signin_data: Login credentials (email and password)
        response: Outgoing response used to set the cookie
        auth_service: Authentication service

    Returns:
        User info with the access token

    Raises:
        InvalidCredentialsError: If credentials are invalid
    """
    user, access_token = await auth_service.signin(
        email=signin_data.email,
        password=signin_data.password
    )

    set_session_cookie(response, access_token)

    return SigninResponse.model_validate({
        **user.to_dict(),
        "access_token": access_token,
        "token_type": "bearer"
    })


@router.get(
    "/signout",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign out",
    description="Clear the session cookie"
)
async def signout(response: Response) -> MessageResponse:
    """End the session by clearing the access token cookie."""
    clear_session_cookie(response)
    return MessageResponse(message="User has been logged out!")
