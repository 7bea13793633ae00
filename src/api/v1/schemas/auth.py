"""Pydantic schemas for the auth and profile API.

Request fields are all optional at the schema level: missing and malformed
values are reported by the service with field-level detail rather than by a
generic request-validation error.
"""

from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from api.v1.schemas.common import CamelModel
from domain.entities.user import Gender, ProfileView, UserDetail
from domain.services.auth_service import RegistrationData


class RegisterRequest(CamelModel):
    """Schema for registering an account."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "email": "test@example.com",
                "password": "password123",
                "nickname": "테스트유저",
                "birthDate": "20030913",
                "gender": "F",
                "bio": "안녕하세요",
            }
        },
    )

    email: str | None = None
    password: str | None = None
    nickname: str | None = None
    birth_date: str | None = None
    gender: str | None = None
    bio: str | None = None
    profile_image: str | None = None

    def to_registration_data(self) -> RegistrationData:
        return RegistrationData(
            email=self.email,
            password=self.password,
            nickname=self.nickname,
            birth_date=self.birth_date,
            gender=self.gender,
            bio=self.bio,
            profile_image=self.profile_image,
        )


class LoginRequest(CamelModel):
    """Schema for logging in."""

    email: str | None = None
    password: str | None = None


class ProfileUpdate(CamelModel):
    """Schema for updating a profile. Unknown keys are dropped."""

    nickname: str | None = None
    bio: str | None = None
    gender: str | None = None


class EmailCheckRequest(CamelModel):
    email: str | None = None


class NicknameCheckRequest(CamelModel):
    nickname: str | None = None


class ProfileResponse(CamelModel):
    """Public profile. Has no password field by construction."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "email": "test@example.com",
                "nickname": "테스트유저",
                "birthDate": "20030913",
                "birthYear": 2003,
                "age": 22,
                "daysSinceJoined": 1,
                "gender": "F",
                "profileImage": None,
                "bio": "안녕하세요",
                "isAdmin": False,
                "createdAt": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    email: str
    nickname: str
    birth_date: str
    birth_year: int | None = None
    age: int | None = None
    days_since_joined: int
    gender: Gender
    profile_image: str | None = None
    bio: str = ""
    is_admin: bool = False
    created_at: datetime

    @classmethod
    def from_view(cls, view: ProfileView) -> "ProfileResponse":
        return cls.model_validate(view)


class ProfileCalculationsResponse(CamelModel):
    """Extra derived attributes on the user detail."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    is_adult: bool | None = None
    age_group: str | None = None
    service_usage_period: str


class UserDetailResponse(ProfileResponse):
    """Profile plus the extra calculations."""

    calculations: ProfileCalculationsResponse

    @classmethod
    def from_detail(cls, detail: UserDetail) -> "UserDetailResponse":
        profile = ProfileResponse.from_view(detail.profile)
        return cls(
            **profile.model_dump(),
            calculations=ProfileCalculationsResponse.model_validate(detail.calculations),
        )


class ProfileEnvelope(CamelModel):
    """Schema for a single profile."""

    success: bool = True
    message: str
    data: ProfileResponse


class UserDetailEnvelope(CamelModel):
    """Schema for a single user detail."""

    success: bool = True
    message: str
    data: UserDetailResponse


class ProfileListEnvelope(CamelModel):
    """Schema for a list of profiles."""

    success: bool = True
    message: str
    count: int = Field(..., ge=0)
    data: list[ProfileResponse]


class AvailabilityResponse(CamelModel):
    """Schema for email / nickname availability checks."""

    success: bool = True
    message: str
    available: bool


class DeleteAllResponse(CamelModel):
    success: bool = True
    message: str
    deleted_count: int
