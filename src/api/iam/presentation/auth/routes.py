"""HTTP routes for sign-up, sign-in and sign-out.

The session token is only ever handed to the client as an HTTP-only,
SameSite=strict cookie. It never appears in a response body.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from iam.application.observability import AuthenticationProbe
from iam.application.services import AuthService
from iam.dependencies import get_auth_service, get_authentication_probe
from iam.presentation.auth.models import (
    CredentialsRequest,
    SignInResponse,
    UserResponse,
)
from infrastructure.settings import AuthSettings, get_auth_settings
from shared_kernel.responses import SuccessEnvelope
from shared_kernel.validation import RequestRegion, validated

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)

_validate_credentials = validated(CredentialsRequest, RequestRegion.BODY)


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def sign_up(
    credentials: Annotated[CredentialsRequest, Depends(_validate_credentials)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> SuccessEnvelope[UserResponse]:
    """Register a new account.

    Raises:
        AppError: 400 if the body is invalid, 409 if the email is taken
    """
    profile = await service.register(credentials.email, credentials.password)
    return SuccessEnvelope[UserResponse](
        message="User successfully registered",
        data=UserResponse.from_profile(profile),
    )


@router.post("/signin", status_code=status.HTTP_200_OK)
async def sign_in(
    credentials: Annotated[CredentialsRequest, Depends(_validate_credentials)],
    response: Response,
    service: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[AuthSettings, Depends(get_auth_settings)],
) -> SuccessEnvelope[SignInResponse]:
    """Sign in and receive the session cookie.

    Raises:
        AppError: 400 if the body is invalid, 404 for an unknown email,
            401 for a wrong password
    """
    result = await service.sign_in(credentials.email, credentials.password)
    response.set_cookie(
        key=settings.cookie_name,
        value=result.token,
        max_age=settings.cookie_max_age_seconds,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )
    return SuccessEnvelope[SignInResponse](
        message="User successfully logged in",
        data=SignInResponse(user=UserResponse.from_profile(result.user)),
    )


@router.get("/logout", status_code=status.HTTP_200_OK)
async def sign_out(
    response: Response,
    settings: Annotated[AuthSettings, Depends(get_auth_settings)],
    probe: Annotated[AuthenticationProbe, Depends(get_authentication_probe)],
) -> SuccessEnvelope[None]:
    """Clear the session cookie. Does not require a valid session."""
    response.delete_cookie(
        key=settings.cookie_name,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )
    probe.user_signed_out()
    return SuccessEnvelope[None](message="User successfully logged out.")
