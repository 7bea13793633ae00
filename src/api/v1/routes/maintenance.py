"""Development-only maintenance routes.

Mounted only when ``MAINTENANCE_ROUTES_ENABLED`` is set outside production.
"""

from fastapi import APIRouter, Depends, status

from api.v1.dependencies import get_user_admin_service
from api.v1.schemas.auth import (
    DeleteAllResponse,
    ProfileListEnvelope,
    ProfileResponse,
    UserDetailEnvelope,
    UserDetailResponse,
)
from api.v1.schemas.common import ErrorResponse
from domain.services.user_admin_service import UserAdminService

router = APIRouter(prefix="/maintenance", tags=["maintenance"])


@router.post(
    "/seed",
    response_model=ProfileListEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create sample users",
)
async def seed_users(
    service: UserAdminService = Depends(get_user_admin_service),
) -> ProfileListEnvelope:
    """Register the sample accounts. Accounts that already exist are skipped."""
    profiles = await service.seed_sample_users()
    return ProfileListEnvelope(
        message=f"Created {len(profiles)} sample users",
        count=len(profiles),
        data=[ProfileResponse.from_view(profile) for profile in profiles],
    )


@router.get(
    "/users",
    response_model=ProfileListEnvelope,
    summary="List all users",
)
async def list_users(
    service: UserAdminService = Depends(get_user_admin_service),
) -> ProfileListEnvelope:
    profiles = await service.list_users()
    return ProfileListEnvelope(
        message="Users listed",
        count=len(profiles),
        data=[ProfileResponse.from_view(profile) for profile in profiles],
    )


@router.get(
    "/users/{user_id}",
    response_model=UserDetailEnvelope,
    summary="Get one user with extra calculations",
    responses={
        200: {"description": "User found"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def get_user_detail(
    user_id: str,
    service: UserAdminService = Depends(get_user_admin_service),
) -> UserDetailEnvelope:
    """Profile plus adult flag, age group and membership day label."""
    detail = await service.get_user_detail(user_id)
    return UserDetailEnvelope(
        message="User found",
        data=UserDetailResponse.from_detail(detail),
    )


@router.delete(
    "/users",
    response_model=DeleteAllResponse,
    summary="Delete all users",
)
async def delete_all_users(
    service: UserAdminService = Depends(get_user_admin_service),
) -> DeleteAllResponse:
    deleted = await service.delete_all()
    return DeleteAllResponse(
        message=f"Deleted {deleted} users",
        deleted_count=deleted,
    )
