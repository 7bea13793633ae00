"""Auth and profile API routes."""

from fastapi import APIRouter, Depends, status

from api.v1.dependencies import get_auth_service
from api.v1.schemas.auth import (
    AvailabilityResponse,
    EmailCheckRequest,
    LoginRequest,
    NicknameCheckRequest,
    ProfileEnvelope,
    ProfileResponse,
    ProfileUpdate,
    RegisterRequest,
)
from api.v1.schemas.common import ErrorResponse
from domain.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=ProfileEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Register an account",
    responses={
        201: {"description": "Account created"},
        400: {
            "model": ErrorResponse,
            "description": "Missing fields, invalid fields, or email/nickname already in use",
        },
    },
)
async def register(
    body: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> ProfileEnvelope:
    """Create an account. Every invalid field is reported at once."""
    profile = await service.register(body.to_registration_data())
    return ProfileEnvelope(
        message="Registration complete",
        data=ProfileResponse.from_view(profile),
    )


@router.post(
    "/login",
    response_model=ProfileEnvelope,
    summary="Log in",
    responses={
        200: {"description": "Credentials accepted"},
        400: {"model": ErrorResponse, "description": "Email or password missing"},
        401: {"model": ErrorResponse, "description": "Invalid email or password"},
        500: {"model": ErrorResponse, "description": "Storage unavailable"},
    },
)
async def login(
    body: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> ProfileEnvelope:
    """Verify credentials and return the profile. No session token is issued."""
    profile = await service.login(body.email, body.password)
    return ProfileEnvelope(
        message="Login successful",
        data=ProfileResponse.from_view(profile),
    )


@router.get(
    "/profile/{user_id}",
    response_model=ProfileEnvelope,
    summary="Get a profile",
    responses={
        200: {"description": "Profile found"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def get_profile(
    user_id: str,
    service: AuthService = Depends(get_auth_service),
) -> ProfileEnvelope:
    """Get a profile including computed age and days since joining."""
    profile = await service.get_profile(user_id)
    return ProfileEnvelope(
        message="Profile found",
        data=ProfileResponse.from_view(profile),
    )


@router.put(
    "/profile/{user_id}",
    response_model=ProfileEnvelope,
    summary="Update a profile",
    responses={
        200: {"description": "Profile updated"},
        400: {"model": ErrorResponse, "description": "Invalid field or nickname in use"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def update_profile(
    user_id: str,
    body: ProfileUpdate,
    service: AuthService = Depends(get_auth_service),
) -> ProfileEnvelope:
    """Update nickname, bio or gender. Other fields in the body are ignored."""
    profile = await service.update_profile(user_id, body.model_dump(exclude_unset=True))
    return ProfileEnvelope(
        message="Profile updated",
        data=ProfileResponse.from_view(profile),
    )


@router.post(
    "/check-email",
    response_model=AvailabilityResponse,
    summary="Check email availability",
)
async def check_email(
    body: EmailCheckRequest,
    service: AuthService = Depends(get_auth_service),
) -> AvailabilityResponse:
    available = await service.is_email_available(body.email)
    return AvailabilityResponse(
        message="Email is available" if available else "Email is already in use",
        available=available,
    )


@router.post(
    "/check-nickname",
    response_model=AvailabilityResponse,
    summary="Check nickname availability",
)
async def check_nickname(
    body: NicknameCheckRequest,
    service: AuthService = Depends(get_auth_service),
) -> AvailabilityResponse:
    available = await service.is_nickname_available(body.nickname)
    return AvailabilityResponse(
        message="Nickname is available" if available else "Nickname is already in use",
        available=available,
    )
